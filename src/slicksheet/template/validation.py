"""Template validation.

This module checks templates without rendering them and, optionally, runs
the full acceptance gate used before a template change is committed:
validate, render with real data, then compile the rendered markup with a
host-supplied callback.

Syntax problems are blocking errors. References to paths the engine does
not know about are only warnings, because templates may legitimately use
metadata keys defined by the caller.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Optional

from slicksheet.observability.logging import get_logger
from slicksheet.template.config import TemplateConfig
from slicksheet.template.engine import DataContext, TemplateEngine
from slicksheet.template.enums import ValidationErrorKind
from slicksheet.template.errors import (
    TemplateCompileError,
    TemplateDataError,
    TemplateParseError,
    TemplateRenderError,
)
from slicksheet.template.nodes import extract_variables
from slicksheet.template.parser import parse_template

logger = get_logger(__name__)

CompileCallback = Callable[[str], str]

KNOWN_VARIABLES: frozenset[str] = frozenset(
    {
        # Top-level fields
        "title",
        "subtitle",
        "body",
        # Arrays
        "sections",
        "features",
        "stats",
        # Style fields
        "style",
        "style.primaryColor",
        "style.primary_color",
        "style.accentColor",
        "style.accent_color",
        "style.fontFamily",
        "style.font_family",
        # Contact fields
        "contact",
        "contact.email",
        "contact.phone",
        "contact.website",
        "contact.address",
        # Images
        "images",
        # Array lengths
        "sections.length",
        "features.length",
        "stats.length",
        # Loop variables
        "this",
        "@index",
        # Section fields
        "heading",
        "content",
        "type",
        "items",
        "rows",
        "columns",
        # Stat fields
        "value",
        "label",
        "color",
    }
)


@dataclass
class ValidationIssue:
    """A blocking validation finding.

    Attributes:
        kind: Category of the finding
        message: Human-readable description, suitable to show verbatim
        position: Character offset in the template, when known
    """

    kind: ValidationErrorKind
    message: str
    position: Optional[int] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationReport:
    """Outcome of validating a template.

    A report with no errors accepts the template; warnings never block.

    Attributes:
        warnings: Non-blocking findings (e.g. unknown variables)
        errors: Blocking findings
    """

    warnings: list[str] = field(default_factory=list)
    errors: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_messages(self) -> list[str]:
        return [issue.message for issue in self.errors]


def is_known_variable(path: str, extra: Iterable[str] = ()) -> bool:
    """Check whether a dotted path is on the static whitelist.

    Args:
        path: Dotted variable path, e.g. "style.primaryColor"
        extra: Additional accepted paths

    Returns:
        True if the path is known
    """
    return path in KNOWN_VARIABLES or path in extra


class TemplateValidator:
    """Validator for template source.

    Example:
        >>> validator = TemplateValidator()
        >>> validator.validate("{{foo.bar.baz}}").warnings
        ['unknown variable: foo.bar.baz']
        >>> validator.validate("{{#if a}}x").is_valid
        False
    """

    def __init__(self, config: Optional[TemplateConfig] = None) -> None:
        """Initialize template validator.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self._config = config or TemplateConfig()
        self._extra_known = frozenset(self._config.extra_known_variables)

    def validate(self, template: str) -> ValidationReport:
        """Validate template syntax and referenced paths.

        Args:
            template: Template source text

        Returns:
            Report with a parse or empty-template error, or with one warning
            per referenced path missing from the whitelist
        """
        if not template.strip():
            logger.info("template_validation_failed", kind=ValidationErrorKind.EMPTY_TEMPLATE.value)
            return ValidationReport(
                errors=[
                    ValidationIssue(
                        kind=ValidationErrorKind.EMPTY_TEMPLATE,
                        message="Template cannot be empty",
                    )
                ]
            )

        try:
            nodes = parse_template(template, self._config)
        except TemplateParseError as e:
            logger.info(
                "template_validation_failed",
                kind=ValidationErrorKind.PARSE_ERROR.value,
                code=e.code,
                position=e.position,
            )
            return ValidationReport(
                errors=[
                    ValidationIssue(
                        kind=ValidationErrorKind.PARSE_ERROR,
                        message=f"Template parse error: {e.message}",
                        position=e.position,
                    )
                ]
            )

        warnings = [
            f"unknown variable: {path}"
            for path in sorted(extract_variables(nodes))
            if not is_known_variable(path, self._extra_known)
        ]

        logger.debug("template_validated", node_count=len(nodes), warning_count=len(warnings))
        return ValidationReport(warnings=warnings)

    def validate_with_data(
        self, template: str, data: DataContext, compile_fn: CompileCallback
    ) -> ValidationReport:
        """Validate, render with data, then compile the rendered text.

        The text handed to ``compile_fn`` is rendered with this validator's
        configuration. With the default ``escape_markup=False``, markup
        characters in the data (``#``, ``@``, ``*`` ...) reach the compiler
        as-is; enable escaping when the compiler reads Typst markup.

        Args:
            template: Template source text
            data: Sheet data, or a mapping that validates into ``SheetData``
            compile_fn: Host compiler; returns compiled output or raises
                ``TemplateCompileError`` with its diagnostics

        Returns:
            Report carrying the static warnings and the first stage's errors;
            a mapping that does not fit the data model gives ``DATA_ERROR``
            issues
        """
        report = self.validate(template)
        if not report.is_valid:
            return report

        engine = TemplateEngine(self._config)
        try:
            rendered = engine.render(template, data)
        except TemplateRenderError as e:
            report.errors.extend(
                ValidationIssue(kind=ValidationErrorKind.RENDER_ERROR, message=message)
                for message in e.errors
            )
            return report
        except TemplateDataError as e:
            report.errors.extend(
                ValidationIssue(kind=ValidationErrorKind.DATA_ERROR, message=message)
                for message in e.errors
            )
            return report

        try:
            compile_fn(rendered)
        except TemplateCompileError as e:
            logger.info(
                "template_compile_failed",
                diagnostic_count=len(e.diagnostics),
            )
            diagnostics = e.diagnostics or [e.message]
            report.errors.extend(
                ValidationIssue(kind=ValidationErrorKind.COMPILE_ERROR, message=message)
                for message in diagnostics
            )
            return report

        logger.debug("template_accepted", output_length=len(rendered))
        return report


def validate_template(template: str, config: Optional[TemplateConfig] = None) -> ValidationReport:
    """Validate a template with a default-configured validator.

    Args:
        template: Template source text
        config: Engine configuration (uses defaults if not provided)

    Returns:
        Validation report
    """
    return TemplateValidator(config).validate(template)


def validate_template_with_data(
    template: str,
    data: DataContext,
    compile_fn: CompileCallback,
    config: Optional[TemplateConfig] = None,
) -> ValidationReport:
    """Run the full validate, render and compile gate.

    Args:
        template: Template source text
        data: Sheet data to render with
        compile_fn: Host compiler callback
        config: Engine configuration (uses defaults if not provided)

    Returns:
        Validation report
    """
    return TemplateValidator(config).validate_with_data(template, data, compile_fn)
