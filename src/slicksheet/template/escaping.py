"""Escaping of substituted values for Typst markup.

User-provided values are inserted into Typst source, where characters such
as ``#`` (code mode), ``@`` (label reference) or ``[`` (content block) would
otherwise be interpreted as markup and can break compilation.
"""

TYPST_SPECIAL_CHARACTERS = frozenset("@<>[]#$*_\\")


def escape_typst(value: str) -> str:
    """Backslash-escape Typst markup characters in a value.

    Args:
        value: Raw value from the data context

    Returns:
        Value safe to embed in Typst markup

    Example:
        >>> escape_typst("user@example.com")
        'user\\\\@example.com'
    """
    if not any(char in TYPST_SPECIAL_CHARACTERS for char in value):
        return value
    return "".join(f"\\{char}" if char in TYPST_SPECIAL_CHARACTERS else char for char in value)
