"""Configuration for the template engine.

Configuration is passed explicitly to the parser, engine and validator.
The engine reads no environment variables and keeps no state between calls.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_NESTING_DEPTH = 32

# Parsing and rendering recurse a few frames per nesting level; this bound
# keeps the deepest accepted template well inside the interpreter stack limit
MAX_NESTING_DEPTH_LIMIT = 128


class TemplateConfig(BaseModel):
    """Settings shared by parsing, rendering and validation.

    Attributes:
        max_nesting_depth: Deepest allowed nesting of ``#if``/``#each`` blocks
            (1 to ``MAX_NESTING_DEPTH_LIMIT``)
        escape_markup: Escape Typst markup characters in substituted values
        extra_known_variables: Paths accepted by the validator in addition
            to the built-in whitelist (e.g. metadata keys a host relies on)
    """

    model_config = ConfigDict(frozen=True)

    max_nesting_depth: int = Field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        ge=1,
        le=MAX_NESTING_DEPTH_LIMIT,
        description="Deepest allowed nesting of block tags",
    )
    escape_markup: bool = Field(
        default=False,
        description="Escape Typst markup characters in substituted values",
    )
    extra_known_variables: list[str] = Field(
        default_factory=list,
        description="Additional variable paths the validator should not warn about",
    )
