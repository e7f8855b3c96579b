"""Template rendering engine.

This module evaluates parsed templates against sheet data. Rendering is
forgiving: a variable that does not resolve renders as its default or as an
empty string, and a loop over anything but a known array renders nothing.
The only template failure is a template that does not parse. Data passed
as a plain mapping is validated first, and a mapping that does not fit the
sheet data model is reported as a separate data error.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from slicksheet.data.models import SheetData
from slicksheet.observability.logging import get_logger
from slicksheet.template.config import TemplateConfig
from slicksheet.template.errors import (
    TemplateDataError,
    TemplateParseError,
    TemplateRenderError,
)
from slicksheet.template.escaping import escape_typst
from slicksheet.template.nodes import (
    ConditionalNode,
    LoopNode,
    TemplateNode,
    TextNode,
    VariableNode,
)
from slicksheet.template.parser import parse_template
from slicksheet.template.resolver import LoopContext, PathResolver

logger = get_logger(__name__)

DataContext = Union[SheetData, Mapping[str, Any]]

# Image values are system-generated file names and are inserted verbatim
UNESCAPED_ROOTS = frozenset({"images"})


def coerce_sheet_data(data: Mapping[str, Any]) -> SheetData:
    """Validate a plain mapping into ``SheetData``.

    Raises:
        TemplateDataError: If the mapping does not match the model; one
            message per invalid field, e.g. "features: Input should be a valid list"
    """
    try:
        return SheetData.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in error['loc']) or 'data'}: {error['msg']}"
            for error in e.errors()
        ]
        logger.info("sheet_data_rejected", error_count=len(errors))
        raise TemplateDataError(errors) from e


class TemplateEngine:
    """Renders Handlebars-style templates with sheet data.

    The engine holds only its configuration; every call parses the template
    afresh and builds its own resolver and loop frames, so one instance can
    be shared freely.

    Example:
        >>> engine = TemplateEngine()
        >>> engine.render("Hello {{title}}", SheetData(title="World"))
        'Hello World'
    """

    def __init__(self, config: Optional[TemplateConfig] = None) -> None:
        """Initialize template engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self._config = config or TemplateConfig()

    @property
    def config(self) -> TemplateConfig:
        return self._config

    def parse(self, template: str) -> list[TemplateNode]:
        """Parse a template with this engine's configuration.

        Raises:
            TemplateParseError: If the template is malformed
        """
        return parse_template(template, self._config)

    def render(self, template: str, data: DataContext) -> str:
        """Render template with provided data.

        Args:
            template: Template source text
            data: Sheet data, or a mapping that validates into ``SheetData``

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If the template does not parse; ``errors``
                holds the single parse error message
            TemplateDataError: If ``data`` is a mapping that does not match
                the sheet data model
        """
        try:
            nodes = self.parse(template)
        except TemplateParseError as e:
            logger.info("template_render_rejected", code=e.code, position=e.position)
            raise TemplateRenderError([e.message]) from e

        output = self.render_nodes(nodes, data)
        logger.debug(
            "template_rendered",
            template_length=len(template),
            node_count=len(nodes),
            output_length=len(output),
        )
        return output

    def render_nodes(self, nodes: list[TemplateNode], data: DataContext) -> str:
        """Render already-parsed nodes.

        Args:
            nodes: Nodes produced by ``parse``
            data: Sheet data, or a mapping that validates into ``SheetData``

        Returns:
            Rendered text

        Raises:
            TemplateDataError: If a mapping does not validate into ``SheetData``
        """
        if not isinstance(data, SheetData):
            data = coerce_sheet_data(data)

        resolver = PathResolver(data)
        output: list[str] = []
        self._render_into(nodes, resolver, output, loop=None)
        return "".join(output)

    def _render_into(
        self,
        nodes: list[TemplateNode],
        resolver: PathResolver,
        output: list[str],
        loop: Optional[LoopContext],
    ) -> None:
        for node in nodes:
            if isinstance(node, TextNode):
                output.append(node.text)
            elif isinstance(node, VariableNode):
                output.append(self._render_variable(node, resolver, loop))
            elif isinstance(node, ConditionalNode):
                if resolver.is_truthy(node.path, loop):
                    self._render_into(node.then_branch, resolver, output, loop)
                else:
                    self._render_into(node.else_branch, resolver, output, loop)
            elif isinstance(node, LoopNode):
                self._render_loop(node, resolver, output, loop)

    def _render_variable(
        self, node: VariableNode, resolver: PathResolver, loop: Optional[LoopContext]
    ) -> str:
        value = resolver.resolve(node.path, loop)
        if value is None:
            value = node.default if node.default is not None else ""

        if self._config.escape_markup and node.path[0] not in UNESCAPED_ROOTS:
            return escape_typst(value)
        return value

    def _render_loop(
        self,
        node: LoopNode,
        resolver: PathResolver,
        output: list[str],
        parent: Optional[LoopContext],
    ) -> None:
        items = resolver.resolve_items(node.path, parent)
        if items is None:
            return

        for index, item in enumerate(items):
            frame = LoopContext(item=item, index=index, parent=parent)
            self._render_into(node.body, resolver, output, frame)


def render_template(
    template: str, data: DataContext, config: Optional[TemplateConfig] = None
) -> str:
    """Render a template with a default-configured engine.

    Args:
        template: Template source text
        data: Sheet data, or a mapping that validates into ``SheetData``
        config: Engine configuration (uses defaults if not provided)

    Returns:
        Rendered text

    Raises:
        TemplateRenderError: If the template does not parse
        TemplateDataError: If a mapping does not validate into ``SheetData``
    """
    return TemplateEngine(config).render(template, data)
