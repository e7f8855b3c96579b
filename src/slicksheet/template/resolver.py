"""Path resolution against sheet data and loop frames.

The resolver maps a template path to a value using a closed set of known
shapes rather than generic attribute access:

- single segment: ``title``, ``subtitle``, ``body``, then ``metadata``
- ``style.<field>`` in camelCase or snake_case
- ``contact.<field>``
- ``images.<name>``
- ``<array>.length`` for ``sections``, ``features`` and ``stats``
- ``this`` and ``@index`` inside an ``#each`` body

Anything else is "not found" (``None``), which is never an error.

Loop items are exposed only as a one-line summary string. Structured items
such as sections and stats cannot be addressed field by field inside a loop
body (``{{heading}}`` does not resolve to the current section's heading).
"""

import re
from dataclasses import dataclass
from typing import Optional

from slicksheet.data.models import Section, SectionType, SheetData, Stat

THIS_KEYWORD = "this"
INDEX_KEYWORD = "@index"
LENGTH_FIELD = "length"

TOP_LEVEL_FIELDS = frozenset({"title", "subtitle", "body"})
ARRAY_FIELDS = frozenset({"sections", "features", "stats"})
STYLE_FIELDS = frozenset({"primary_color", "accent_color", "font_family"})
CONTACT_FIELDS = frozenset({"email", "phone", "website", "address"})

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class LoopContext:
    """Resolution frame for one iteration of an ``#each`` body.

    Attributes:
        item: Current element, already reduced to its display string
        index: Zero-based position of the element
        parent: Frame of the enclosing loop, if any
    """

    item: str
    index: int
    parent: Optional["LoopContext"] = None

    @property
    def depth(self) -> int:
        """Number of enclosing loop frames, 0 for an outermost loop."""
        return 0 if self.parent is None else self.parent.depth + 1


def to_snake_case(segment: str) -> str:
    """Normalize a camelCase path segment, e.g. primaryColor -> primary_color."""
    return _CAMEL_BOUNDARY.sub("_", segment).lower()


def summarize_section(section: Section) -> str:
    """Reduce a section to the single line exposed as ``{{this}}``."""
    if section.section_type is SectionType.LIST:
        items = ", ".join(section.items or [])
        return f"{section.heading}: [{items}]"
    if section.section_type is SectionType.TABLE:
        return f"{section.heading}: <table>"
    if section.section_type is SectionType.QUOTE:
        return f'{section.heading}: "{section.content}"'
    return f"{section.heading}: {section.content}"


def summarize_stat(stat: Stat) -> str:
    """Reduce a stat to the single line exposed as ``{{this}}``."""
    return f"{stat.value}: {stat.label}"


class PathResolver:
    """Resolves template paths against one ``SheetData`` instance.

    The resolver never mutates the data and keeps no state besides it, so a
    single instance serves a whole render call.

    Example:
        >>> resolver = PathResolver(SheetData(title="World"))
        >>> resolver.resolve(("title",))
        'World'
        >>> resolver.resolve(("missing",)) is None
        True
    """

    def __init__(self, data: SheetData) -> None:
        self._data = data

    def resolve(
        self, path: tuple[str, ...], loop: Optional[LoopContext] = None
    ) -> Optional[str]:
        """Resolve a path to its string value.

        ``this`` and ``@index`` resolve only as exact single-segment paths.
        Loop items are one-line summaries, so ``this.heading`` and other
        field paths on an item do not resolve.

        Args:
            path: Path segments
            loop: Innermost active loop frame, if rendering a loop body

        Returns:
            Resolved value, or None when the path does not resolve
        """
        if not path:
            return None

        first = path[0]
        if first in (THIS_KEYWORD, INDEX_KEYWORD):
            return self._resolve_loop_local(path, loop)

        if len(path) == 1:
            return self._resolve_simple(first)
        return self._resolve_nested(path)

    def is_truthy(self, path: tuple[str, ...], loop: Optional[LoopContext] = None) -> bool:
        """Evaluate a path for ``{{#if}}``.

        Arrays are truthy when non-empty, ``contact``/``style`` when present,
        ``images`` when any image exists and ``<array>.length`` when the array
        is non-empty. Every other path is truthy when it resolves to a
        non-empty string.
        """
        if not path:
            return False

        data = self._data
        if len(path) == 1:
            first = path[0]
            if first in ARRAY_FIELDS:
                return bool(getattr(data, first))
            if first == "contact":
                return data.contact is not None
            if first == "style":
                return data.style is not None
            if first == "images":
                return bool(data.images)
        elif len(path) == 2 and path[0] in ARRAY_FIELDS and path[1] == LENGTH_FIELD:
            return bool(getattr(data, path[0]))

        value = self.resolve(path, loop)
        return bool(value)

    def resolve_items(
        self, path: tuple[str, ...], loop: Optional[LoopContext] = None
    ) -> Optional[list[str]]:
        """Resolve a path to the display strings of an array.

        Args:
            path: Path segments
            loop: Innermost active loop frame (nested arrays are not exposed)

        Returns:
            One string per element, or None when the path is not an array
        """
        if len(path) != 1:
            return None

        data = self._data
        name = path[0]
        if name == "features":
            return list(data.features)
        if name == "sections":
            return [summarize_section(section) for section in data.sections]
        if name == "stats":
            return [summarize_stat(stat) for stat in data.stats]
        return None

    def _resolve_loop_local(
        self, path: tuple[str, ...], loop: Optional[LoopContext]
    ) -> Optional[str]:
        # Items are summaries; "this.<field>" has nothing to address
        if loop is None or len(path) != 1:
            return None
        if path[0] == THIS_KEYWORD:
            return loop.item
        return str(loop.index)

    def _resolve_simple(self, key: str) -> Optional[str]:
        data = self._data
        if key in TOP_LEVEL_FIELDS:
            return getattr(data, key)
        return data.metadata.get(key)

    def _resolve_nested(self, path: tuple[str, ...]) -> Optional[str]:
        if len(path) != 2:
            return None

        data = self._data
        first, second = path

        if first == "style":
            if data.style is None:
                return None
            field_name = to_snake_case(second)
            if field_name not in STYLE_FIELDS:
                return None
            return getattr(data.style, field_name)

        if first == "contact":
            if data.contact is None or second not in CONTACT_FIELDS:
                return None
            return getattr(data.contact, second)

        if first == "images":
            return data.images.get(second)

        if first in ARRAY_FIELDS and second == LENGTH_FIELD:
            return str(len(getattr(data, first)))

        return None
