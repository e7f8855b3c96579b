"""Enumerations for the template engine.

This module defines enums for block tag kinds and validation error kinds.
"""

from enum import Enum


class BlockKind(str, Enum):
    """Kinds of block tags that open a nested body.

    The value is the keyword used after ``#`` in the opening tag and
    after ``/`` in the closing tag.
    """

    IF = "if"
    EACH = "each"


class ValidationErrorKind(str, Enum):
    """Category of a blocking validation finding.

    Unknown variables are never errors; they are reported as warnings.
    """

    PARSE_ERROR = "parse_error"
    EMPTY_TEMPLATE = "empty_template"
    RENDER_ERROR = "render_error"
    COMPILE_ERROR = "compile_error"
    DATA_ERROR = "data_error"
