"""Template engine for rendering sheet data into markup.

This module provides Handlebars-style template parsing, rendering against
sheet data, and static plus render-and-compile validation.
"""

from slicksheet.template.config import TemplateConfig
from slicksheet.template.engine import TemplateEngine, render_template
from slicksheet.template.enums import BlockKind, ValidationErrorKind
from slicksheet.template.errors import (
    EmptyVariableNameError,
    InvalidSyntaxError,
    TemplateCompileError,
    TemplateDataError,
    TemplateError,
    TemplateParseError,
    TemplateRenderError,
    UnclosedTagError,
    UnexpectedClosingTagError,
)
from slicksheet.template.escaping import escape_typst
from slicksheet.template.nodes import (
    ConditionalNode,
    LoopNode,
    TemplateNode,
    TextNode,
    VariableNode,
    extract_variables,
)
from slicksheet.template.parser import TemplateParser, parse_template
from slicksheet.template.resolver import LoopContext, PathResolver
from slicksheet.template.validation import (
    KNOWN_VARIABLES,
    TemplateValidator,
    ValidationIssue,
    ValidationReport,
    validate_template,
    validate_template_with_data,
)

__all__ = [
    # Config
    "TemplateConfig",
    # Enums
    "BlockKind",
    "ValidationErrorKind",
    # Errors
    "EmptyVariableNameError",
    "InvalidSyntaxError",
    "TemplateCompileError",
    "TemplateDataError",
    "TemplateError",
    "TemplateParseError",
    "TemplateRenderError",
    "UnclosedTagError",
    "UnexpectedClosingTagError",
    # AST
    "ConditionalNode",
    "LoopNode",
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "extract_variables",
    # Parsing
    "TemplateParser",
    "parse_template",
    # Rendering
    "LoopContext",
    "PathResolver",
    "TemplateEngine",
    "escape_typst",
    "render_template",
    # Validation
    "KNOWN_VARIABLES",
    "TemplateValidator",
    "ValidationIssue",
    "ValidationReport",
    "validate_template",
    "validate_template_with_data",
]
