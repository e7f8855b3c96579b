"""Parser for Handlebars-style template syntax.

This module turns template source into a list of AST nodes. Supported tags:

- ``{{path}}`` and ``{{path | default: 'value'}}``
- ``{{#if path}}...{{else}}...{{/if}}``
- ``{{#each path}}...{{/each}}``

Text outside tags is kept exactly as written. The first error aborts the
parse; no partial AST is ever returned.
"""

import re
from dataclasses import dataclass
from typing import Optional

from slicksheet.template.config import DEFAULT_MAX_NESTING_DEPTH, TemplateConfig
from slicksheet.template.enums import BlockKind
from slicksheet.template.errors import (
    EmptyVariableNameError,
    InvalidSyntaxError,
    UnclosedTagError,
    UnexpectedClosingTagError,
)
from slicksheet.template.nodes import (
    ConditionalNode,
    LoopNode,
    TemplateNode,
    TextNode,
    VariableNode,
)

TAG_OPEN = "{{"
TAG_CLOSE = "}}"
ELSE_KEYWORD = "else"

# The value may hold any character except its own quote, including "}}" and "|"
DEFAULT_FILTER_PATTERN = re.compile(
    r"default\s*:\s*(?P<quote>['\"])(?P<value>.*?)(?P=quote)\s*\Z", re.DOTALL
)


@dataclass(frozen=True)
class _Tag:
    """A raw ``{{...}}`` tag located in the source."""

    start: int
    content_start: int
    content: str

    @property
    def body(self) -> str:
        return self.content.strip()

    @property
    def is_else(self) -> bool:
        return self.body == ELSE_KEYWORD


class TemplateParser:
    """Single-pass, position-tracking parser for template source.

    Each instance parses one source string. Block bodies are parsed
    recursively, with the kind of the innermost open block passed down so
    that an inner closer can never terminate an outer block.

    Example:
        >>> parser = TemplateParser("Hello {{title}}")
        >>> parser.parse()
        [TextNode(text='Hello '), VariableNode(path=('title',), default=None)]
    """

    def __init__(self, source: str, config: Optional[TemplateConfig] = None) -> None:
        """Initialize parser.

        Args:
            source: Template source text
            config: Engine configuration (uses defaults if not provided)
        """
        self._source = source
        self._pos = 0
        self._max_depth = (
            config.max_nesting_depth if config is not None else DEFAULT_MAX_NESTING_DEPTH
        )

    def parse(self) -> list[TemplateNode]:
        """Parse the whole source.

        Returns:
            Ordered list of top-level nodes

        Raises:
            TemplateParseError: On the first syntax problem found
        """
        self._pos = 0
        nodes, _ = self._parse_nodes(block=None, depth=0)
        return nodes

    def _parse_nodes(
        self, block: Optional[BlockKind], depth: int
    ) -> tuple[list[TemplateNode], Optional[_Tag]]:
        """Parse nodes until end of input or a tag that ends ``block``.

        Args:
            block: Kind of the innermost open block, None at top level
            depth: Current nesting depth

        Returns:
            Tuple of (nodes, terminator) where terminator is the ``else`` or
            closing tag that stopped the scan, or None at end of input
        """
        nodes: list[TemplateNode] = []
        length = len(self._source)

        while self._pos < length:
            tag_start = self._source.find(TAG_OPEN, self._pos)
            if tag_start == -1:
                nodes.append(TextNode(self._source[self._pos :]))
                self._pos = length
                break

            if tag_start > self._pos:
                nodes.append(TextNode(self._source[self._pos : tag_start]))
                self._pos = tag_start

            tag = self._read_tag()
            body = tag.body

            if body.startswith("#"):
                nodes.append(self._parse_block(tag, depth + 1))
            elif body.startswith("/"):
                found = body[1:].strip()
                if block is not None and found == block.value:
                    return nodes, tag
                raise UnexpectedClosingTagError(
                    expected=block.value if block is not None else None,
                    found=found,
                    position=tag.start,
                )
            elif tag.is_else:
                if block is BlockKind.IF:
                    return nodes, tag
                raise InvalidSyntaxError("'{{else}}' is only allowed inside an if block", tag.start)
            else:
                nodes.append(self._parse_variable(tag))

        return nodes, None

    def _read_tag(self) -> _Tag:
        """Consume a tag starting at the current position.

        Quotes are honoured after a ``|`` so that default values may contain
        the closing delimiter.

        Raises:
            InvalidSyntaxError: If the tag is never closed
        """
        start = self._pos
        content_start = start + len(TAG_OPEN)
        index = content_start
        quote: Optional[str] = None
        seen_pipe = False

        while index < len(self._source):
            char = self._source[index]
            if quote is not None:
                if char == quote:
                    quote = None
            elif seen_pipe and char in "'\"":
                quote = char
            elif char == "|":
                seen_pipe = True
            elif self._source.startswith(TAG_CLOSE, index):
                self._pos = index + len(TAG_CLOSE)
                return _Tag(
                    start=start,
                    content_start=content_start,
                    content=self._source[content_start:index],
                )
            index += 1

        raise InvalidSyntaxError("Expected '}}' to close tag", start)

    def _parse_block(self, tag: _Tag, depth: int) -> TemplateNode:
        """Parse an opening block tag and its body."""
        if depth > self._max_depth:
            raise InvalidSyntaxError(
                f"Maximum nesting depth of {self._max_depth} exceeded", tag.start
            )

        parts = tag.body[1:].split()
        if not parts:
            raise InvalidSyntaxError("Missing block type after '#'", tag.start)

        keyword = parts[0]
        try:
            kind = BlockKind(keyword)
        except ValueError:
            raise InvalidSyntaxError(f"Unknown block type: {keyword}", tag.start) from None

        if len(parts) == 1:
            raise EmptyVariableNameError(position=tag.start)
        if len(parts) > 2:
            raise InvalidSyntaxError(
                f"Expected '}}}}' after block tag '{keyword}'", tag.start
            )

        path = self._split_path(parts[1], tag.start)

        if kind is BlockKind.IF:
            return self._parse_if_block(path, tag, depth)
        return self._parse_each_block(path, tag, depth)

    def _parse_if_block(self, path: tuple[str, ...], tag: _Tag, depth: int) -> ConditionalNode:
        then_branch, end = self._parse_nodes(BlockKind.IF, depth)
        else_branch: list[TemplateNode] = []

        if end is not None and end.is_else:
            else_branch, end = self._parse_nodes(BlockKind.IF, depth)
            if end is not None and end.is_else:
                raise InvalidSyntaxError("Duplicate '{{else}}' in if block", end.start)

        if end is None:
            raise UnclosedTagError(tag=BlockKind.IF.value, position=tag.start)

        return ConditionalNode(path=path, then_branch=then_branch, else_branch=else_branch)

    def _parse_each_block(self, path: tuple[str, ...], tag: _Tag, depth: int) -> LoopNode:
        body, end = self._parse_nodes(BlockKind.EACH, depth)
        if end is None:
            raise UnclosedTagError(tag=BlockKind.EACH.value, position=tag.start)
        return LoopNode(path=path, body=body)

    def _parse_variable(self, tag: _Tag) -> VariableNode:
        """Parse ``path`` or ``path | default: 'value'`` tag content."""
        path_text, pipe, filter_text = tag.content.partition("|")
        position = tag.content_start + len(path_text) - len(path_text.lstrip())

        path_str = path_text.strip()
        if not path_str:
            raise EmptyVariableNameError(position=position)
        if len(path_str.split()) > 1:
            raise InvalidSyntaxError("Expected '}}' to close variable tag", tag.start)

        path = self._split_path(path_str, position)

        default = None
        if pipe:
            filter_position = tag.content_start + len(path_text) + 1
            default = self._parse_default(filter_text, filter_position)

        return VariableNode(path=path, default=default)

    def _parse_default(self, filter_text: str, position: int) -> str:
        match = DEFAULT_FILTER_PATTERN.match(filter_text.strip())
        if match is None:
            name = filter_text.strip().split(":", 1)[0].strip() or filter_text.strip()
            raise InvalidSyntaxError(
                f"Unsupported filter '{name}', expected default: '<value>'", position
            )
        return match.group("value")

    def _split_path(self, path_str: str, position: int) -> tuple[str, ...]:
        if "{" in path_str or "}" in path_str:
            raise InvalidSyntaxError(f"Invalid character in path '{path_str}'", position)

        segments = tuple(segment for segment in path_str.split(".") if segment)
        if not segments:
            raise EmptyVariableNameError(position=position)
        return segments


def parse_template(source: str, config: Optional[TemplateConfig] = None) -> list[TemplateNode]:
    """Parse template source into AST nodes.

    Args:
        source: Template source text
        config: Engine configuration (uses defaults if not provided)

    Returns:
        Ordered list of top-level nodes

    Raises:
        TemplateParseError: If the template is malformed

    Example:
        >>> parse_template("{{#if x}}no close")
        Traceback (most recent call last):
        ...
        slicksheet.template.errors.UnclosedTagError: Unclosed tag 'if' at position 0
    """
    return TemplateParser(source, config).parse()
