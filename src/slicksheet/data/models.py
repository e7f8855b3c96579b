"""Pydantic models for slick sheet content data.

These models describe the data a template renders against. The template
engine treats them as read-only; the ``with_*`` helpers return updated
copies instead of mutating the instance.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SectionType(str, Enum):
    """Kind of content section."""

    TEXT = "text"
    LIST = "list"
    TABLE = "table"
    QUOTE = "quote"


class Section(BaseModel):
    """A content section in the document.

    Attributes:
        heading: Section heading
        content: Body text (text and quote sections)
        section_type: Kind of section, serialized as ``type``
        items: List items (list sections)
        rows: Table rows (table sections)
        columns: Column count (table sections)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    heading: str
    content: str = ""
    section_type: SectionType = Field(default=SectionType.TEXT, alias="type")
    items: Optional[list[str]] = None
    rows: Optional[list[list[str]]] = None
    columns: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def text(cls, heading: str, content: str) -> "Section":
        return cls(heading=heading, content=content, section_type=SectionType.TEXT)

    @classmethod
    def bulleted(cls, heading: str, items: list[str]) -> "Section":
        return cls(heading=heading, items=items, section_type=SectionType.LIST)

    @classmethod
    def table(cls, heading: str, rows: list[list[str]], columns: int) -> "Section":
        return cls(heading=heading, rows=rows, columns=columns, section_type=SectionType.TABLE)

    @classmethod
    def quote(cls, heading: str, content: str) -> "Section":
        return cls(heading=heading, content=content, section_type=SectionType.QUOTE)


class Stat(BaseModel):
    """A statistic or metric to display.

    Attributes:
        value: The figure itself (e.g. "95%", "$1M", "2x")
        label: What the figure measures
        color: Optional color for the value
    """

    model_config = ConfigDict(frozen=True)

    value: str
    label: str
    color: Optional[str] = None


class ContactInfo(BaseModel):
    """Contact information for the document."""

    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None


class StyleHints(BaseModel):
    """Style hints for template rendering.

    Field names accept both snake_case and camelCase (``primaryColor``) input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    primary_color: Optional[str] = Field(default=None, alias="primaryColor")
    accent_color: Optional[str] = Field(default=None, alias="accentColor")
    font_family: Optional[str] = Field(default=None, alias="fontFamily")


class SheetData(BaseModel):
    """Content data for a slick sheet document.

    Attributes:
        title: Main title of the document; optional on input, defaults to ""
        subtitle: Optional subtitle or tagline
        body: Main body text
        sections: Structured content sections
        metadata: Free-form string metadata addressable by single-segment paths
        features: Feature list items
        stats: Statistics to display
        contact: Optional contact information
        style: Optional styling hints
        images: Semantic image name to image path (e.g. {"logo": "img_abc123.png"})

    Example:
        >>> data = SheetData(title="Product").with_feature("Fast")
        >>> data.features
        ['Fast']
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    subtitle: Optional[str] = None
    body: str = ""
    sections: list[Section] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
    features: list[str] = Field(default_factory=list)
    stats: list[Stat] = Field(default_factory=list)
    contact: Optional[ContactInfo] = None
    style: Optional[StyleHints] = None
    images: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> "SheetData":
        """Parse sheet data from a JSON document.

        Raises:
            pydantic.ValidationError: If the document does not match the model
        """
        return cls.model_validate_json(text)

    def with_subtitle(self, subtitle: str) -> "SheetData":
        return self.model_copy(update={"subtitle": subtitle})

    def with_body(self, body: str) -> "SheetData":
        return self.model_copy(update={"body": body})

    def with_section(self, section: Section) -> "SheetData":
        return self.model_copy(update={"sections": [*self.sections, section]})

    def with_feature(self, feature: str) -> "SheetData":
        return self.model_copy(update={"features": [*self.features, feature]})

    def with_stat(self, stat: Stat) -> "SheetData":
        return self.model_copy(update={"stats": [*self.stats, stat]})

    def with_contact(self, contact: ContactInfo) -> "SheetData":
        return self.model_copy(update={"contact": contact})

    def with_style(self, style: StyleHints) -> "SheetData":
        return self.model_copy(update={"style": style})

    def with_metadata(self, key: str, value: str) -> "SheetData":
        return self.model_copy(update={"metadata": {**self.metadata, key: value}})

    def with_image(self, name: str, path: str) -> "SheetData":
        return self.model_copy(update={"images": {**self.images, name: path}})
