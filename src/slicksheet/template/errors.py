"""Custom exceptions for the template engine.

This module defines the exception hierarchy for template-related errors,
providing structured error handling with machine-readable error codes and,
for parse errors, the character position where the problem was detected.
"""

from typing import Optional


class TemplateError(Exception):
    """Base exception for all template-related errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
    """

    def __init__(self, message: str, code: str) -> None:
        """Initialize template error.

        Args:
            message: Human-readable error description
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code


class TemplateParseError(TemplateError):
    """Raised when template source cannot be parsed.

    Parse errors are always fatal: no partial AST is produced.

    Attributes:
        position: Zero-based character offset where the error was detected
    """

    def __init__(self, message: str, code: str, position: Optional[int] = None) -> None:
        super().__init__(message=message, code=code)
        self.position = position


class UnclosedTagError(TemplateParseError):
    """Raised when a block tag has no matching closing tag."""

    def __init__(self, tag: str, position: int) -> None:
        """Initialize unclosed tag error.

        Args:
            tag: Block kind that was left open ("if" or "each")
            position: Offset of the opening tag
        """
        super().__init__(
            message=f"Unclosed tag '{tag}' at position {position}",
            code="unclosed_tag",
            position=position,
        )
        self.tag = tag


class UnexpectedClosingTagError(TemplateParseError):
    """Raised when a closing tag does not match the innermost open block."""

    def __init__(self, expected: Optional[str], found: str, position: int) -> None:
        """Initialize unexpected closing tag error.

        Args:
            expected: Kind of the innermost open block, or None at top level
            found: Kind named by the closing tag
            position: Offset of the closing tag
        """
        if expected is None:
            message = f"Unexpected closing tag '{found}' at position {position}"
        else:
            message = f"Expected closing tag '{expected}', found '{found}'"

        super().__init__(message=message, code="unexpected_closing_tag", position=position)
        self.expected = expected
        self.found = found


class InvalidSyntaxError(TemplateParseError):
    """Raised when a tag is malformed."""

    def __init__(self, detail: str, position: int) -> None:
        """Initialize invalid syntax error.

        Args:
            detail: Description of what is wrong with the tag
            position: Offset where the problem was detected
        """
        super().__init__(
            message=f"Invalid syntax at position {position}: {detail}",
            code="invalid_syntax",
            position=position,
        )
        self.detail = detail


class EmptyVariableNameError(TemplateParseError):
    """Raised when a tag names no variable path, e.g. ``{{ }}``."""

    def __init__(self, position: int) -> None:
        super().__init__(
            message=f"Empty variable name at position {position}",
            code="empty_variable_name",
            position=position,
        )


class TemplateRenderError(TemplateError):
    """Raised when a template cannot be rendered.

    Rendering only fails when the template does not parse. Missing
    variables and non-array loop targets degrade to empty output instead.

    Attributes:
        errors: Human-readable error messages
    """

    def __init__(self, errors: list[str]) -> None:
        """Initialize render error.

        Args:
            errors: Error messages describing the failure
        """
        summary = "; ".join(errors) if errors else "unknown error"
        super().__init__(message=f"Render failed: {summary}", code="template_render_error")
        self.errors = list(errors)


class TemplateDataError(TemplateError):
    """Raised when a data mapping does not match the sheet data model.

    This is a host-side input problem, separate from template failures:
    a ``SheetData`` instance never triggers it.

    Attributes:
        errors: One message per invalid field
    """

    def __init__(self, errors: list[str]) -> None:
        """Initialize data error.

        Args:
            errors: Messages describing the invalid fields
        """
        summary = "; ".join(errors) if errors else "unknown error"
        super().__init__(message=f"Invalid sheet data: {summary}", code="template_data_error")
        self.errors = list(errors)


class TemplateCompileError(TemplateError):
    """Raised by a compile callback when rendered markup does not compile.

    Attributes:
        diagnostics: Diagnostics reported by the downstream compiler
    """

    def __init__(self, diagnostics: list[str]) -> None:
        """Initialize compile error.

        Args:
            diagnostics: Compiler diagnostics, one message per entry
        """
        summary = "; ".join(diagnostics) if diagnostics else "unknown error"
        super().__init__(message=f"Compile failed: {summary}", code="template_compile_error")
        self.diagnostics = list(diagnostics)
