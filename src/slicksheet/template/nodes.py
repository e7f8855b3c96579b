"""AST node types produced by the template parser.

A parsed template is an ordered list of nodes. Block nodes own their child
lists exclusively, so the result is always a tree.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class TextNode:
    """Literal template text, preserved byte-for-byte.

    Attributes:
        text: The raw text between tags
    """

    text: str


@dataclass(frozen=True)
class VariableNode:
    """Variable substitution: ``{{path}}`` or ``{{path | default: 'x'}}``.

    Attributes:
        path: Dot-separated path segments, e.g. ["style", "primaryColor"]
        default: Value used when the path does not resolve
    """

    path: tuple[str, ...]
    default: Optional[str] = None

    @property
    def name(self) -> str:
        return ".".join(self.path)


@dataclass(frozen=True)
class ConditionalNode:
    """Conditional block: ``{{#if path}}...{{else}}...{{/if}}``.

    Attributes:
        path: Path whose truthiness selects the branch
        then_branch: Nodes rendered when the path is truthy
        else_branch: Nodes rendered otherwise (empty when there is no else)
    """

    path: tuple[str, ...]
    then_branch: list["TemplateNode"] = field(default_factory=list)
    else_branch: list["TemplateNode"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return ".".join(self.path)


@dataclass(frozen=True)
class LoopNode:
    """Loop block: ``{{#each path}}...{{/each}}``.

    Attributes:
        path: Path of the array to iterate
        body: Nodes rendered once per array element
    """

    path: tuple[str, ...]
    body: list["TemplateNode"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return ".".join(self.path)


TemplateNode = Union[TextNode, VariableNode, ConditionalNode, LoopNode]


def extract_variables(nodes: list[TemplateNode]) -> set[str]:
    """Collect every path referenced by a template, joined with dots.

    Block paths are included alongside the variables used in their bodies.

    Args:
        nodes: Parsed template nodes

    Returns:
        Set of referenced paths (e.g. {"title", "features", "this"})

    Example:
        >>> nodes = parse_template("{{#each features}}{{this}}{{/each}}")
        >>> sorted(extract_variables(nodes))
        ['features', 'this']
    """
    found: set[str] = set()
    _collect_variables(nodes, found)
    return found


def _collect_variables(nodes: list[TemplateNode], found: set[str]) -> None:
    for node in nodes:
        if isinstance(node, VariableNode):
            found.add(node.name)
        elif isinstance(node, ConditionalNode):
            found.add(node.name)
            _collect_variables(node.then_branch, found)
            _collect_variables(node.else_branch, found)
        elif isinstance(node, LoopNode):
            found.add(node.name)
            _collect_variables(node.body, found)
