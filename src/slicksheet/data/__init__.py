"""Content data models rendered by templates."""

from slicksheet.data.models import (
    ContactInfo,
    Section,
    SectionType,
    SheetData,
    Stat,
    StyleHints,
)

__all__ = [
    "ContactInfo",
    "Section",
    "SectionType",
    "SheetData",
    "Stat",
    "StyleHints",
]
