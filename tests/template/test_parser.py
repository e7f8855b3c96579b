"""Tests for the template parser."""

import pytest

from slicksheet.template.config import MAX_NESTING_DEPTH_LIMIT, TemplateConfig
from slicksheet.template.errors import (
    EmptyVariableNameError,
    InvalidSyntaxError,
    TemplateParseError,
    UnclosedTagError,
    UnexpectedClosingTagError,
)
from slicksheet.template.nodes import (
    ConditionalNode,
    LoopNode,
    TextNode,
    VariableNode,
    extract_variables,
)
from slicksheet.template.parser import TemplateParser, parse_template


class TestParseText:
    """Tests for literal text handling."""

    def test_parse_simple_text(self) -> None:
        """Text without tags should become a single text node."""
        nodes = parse_template("Hello World")

        assert nodes == [TextNode("Hello World")]

    def test_parse_empty_template(self) -> None:
        """Empty source should produce no nodes."""
        assert parse_template("") == []

    def test_text_around_tags_is_preserved(self) -> None:
        """Whitespace and newlines around tags should be kept exactly."""
        nodes = parse_template("  {{title}}\n")

        assert nodes == [TextNode("  "), VariableNode(("title",)), TextNode("\n")]

    def test_lone_closing_braces_are_text(self) -> None:
        """A stray '}}' outside a tag should be plain text."""
        nodes = parse_template("a }} b { c")

        assert nodes == [TextNode("a }} b { c")]

    def test_typst_syntax_is_preserved(self) -> None:
        """Typst markup in text nodes should pass through untouched."""
        template = '#set page(margin: 1in)\n#text(fill: rgb("{{style.primaryColor}}"))[{{title}}]'

        nodes = parse_template(template)

        assert nodes[0] == TextNode('#set page(margin: 1in)\n#text(fill: rgb("')
        assert nodes[2] == TextNode('"))[')


class TestParseVariable:
    """Tests for variable tags."""

    def test_parse_simple_variable(self) -> None:
        """A bare name should parse to a single-segment path."""
        nodes = parse_template("{{title}}")

        assert nodes == [VariableNode(path=("title",), default=None)]

    def test_parse_nested_variable(self) -> None:
        """Dotted names should split into path segments."""
        nodes = parse_template("{{style.primaryColor}}")

        assert nodes == [VariableNode(path=("style", "primaryColor"))]

    def test_parse_variable_with_inner_whitespace(self) -> None:
        """Whitespace inside the braces should be ignored."""
        assert parse_template("{{  title  }}") == [VariableNode(("title",))]

    def test_parse_variable_with_default(self) -> None:
        """The default filter should be captured on the node."""
        nodes = parse_template("{{title | default: 'Untitled'}}")

        assert nodes == [VariableNode(path=("title",), default="Untitled")]

    def test_parse_default_with_double_quotes(self) -> None:
        """Double-quoted defaults should be accepted."""
        nodes = parse_template('{{subtitle|default:"It\'s new"}}')

        assert nodes == [VariableNode(path=("subtitle",), default="It's new")]

    def test_parse_default_containing_delimiters(self) -> None:
        """Quoted defaults may contain the closing delimiter and pipes."""
        nodes = parse_template("{{title | default: 'a}}b|c'}}tail")

        assert nodes == [VariableNode(("title",), default="a}}b|c"), TextNode("tail")]

    def test_parse_empty_default(self) -> None:
        """An empty quoted default is a valid default."""
        nodes = parse_template("{{title | default: ''}}")

        assert nodes == [VariableNode(("title",), default="")]

    def test_empty_path_segments_are_dropped(self) -> None:
        """Consecutive dots should not produce empty segments."""
        assert parse_template("{{a..b}}") == [VariableNode(("a", "b"))]

    def test_loop_local_names(self) -> None:
        """this and @index should parse as ordinary variables."""
        nodes = parse_template("{{this}}{{@index}}")

        assert nodes == [VariableNode(("this",)), VariableNode(("@index",))]

    def test_mixed_content(self) -> None:
        """Text and variables should alternate in source order."""
        nodes = parse_template("Title: {{title}}, Subtitle: {{subtitle}}")

        assert len(nodes) == 4
        assert isinstance(nodes[0], TextNode)
        assert isinstance(nodes[1], VariableNode)


class TestParseBlocks:
    """Tests for if and each blocks."""

    def test_parse_if_block(self) -> None:
        """An if block should hold its then branch."""
        nodes = parse_template("{{#if subtitle}}has subtitle{{/if}}")

        assert nodes == [
            ConditionalNode(
                path=("subtitle",),
                then_branch=[TextNode("has subtitle")],
                else_branch=[],
            )
        ]

    def test_parse_if_else_block(self) -> None:
        """An else tag should split the then and else branches."""
        nodes = parse_template("{{#if title}}yes{{else}}no{{/if}}")

        assert nodes == [
            ConditionalNode(
                path=("title",),
                then_branch=[TextNode("yes")],
                else_branch=[TextNode("no")],
            )
        ]

    def test_parse_each_block(self) -> None:
        """An each block should hold its body."""
        nodes = parse_template("{{#each features}}item{{/each}}")

        assert nodes == [LoopNode(path=("features",), body=[TextNode("item")])]

    def test_parse_block_tags_with_whitespace(self) -> None:
        """Block, else and closing tags may carry inner whitespace."""
        nodes = parse_template("{{ #if a }}x{{ else }}y{{ /if }}")

        assert nodes == [
            ConditionalNode(path=("a",), then_branch=[TextNode("x")], else_branch=[TextNode("y")])
        ]

    def test_nested_if_blocks(self) -> None:
        """An inner closer should only close the inner block."""
        nodes = parse_template("{{#if a}}{{#if b}}x{{/if}}y{{/if}}z")

        assert nodes == [
            ConditionalNode(
                path=("a",),
                then_branch=[
                    ConditionalNode(path=("b",), then_branch=[TextNode("x")]),
                    TextNode("y"),
                ],
            ),
            TextNode("z"),
        ]

    def test_if_inside_each(self) -> None:
        """Blocks of different kinds should nest."""
        nodes = parse_template("{{#each features}}{{#if this}}{{this}}{{/if}}{{/each}}")

        loop = nodes[0]
        assert isinstance(loop, LoopNode)
        assert loop.body == [
            ConditionalNode(path=("this",), then_branch=[VariableNode(("this",))])
        ]

    def test_else_belongs_to_innermost_if(self) -> None:
        """An else inside a nested if should not split the outer if."""
        nodes = parse_template("{{#if a}}{{#if b}}x{{else}}y{{/if}}{{/if}}")

        outer = nodes[0]
        assert isinstance(outer, ConditionalNode)
        assert outer.else_branch == []
        inner = outer.then_branch[0]
        assert isinstance(inner, ConditionalNode)
        assert inner.else_branch == [TextNode("y")]

    def test_nesting_within_limit(self) -> None:
        """Nesting up to the configured depth should parse."""
        config = TemplateConfig(max_nesting_depth=3)

        nodes = parse_template("{{#if a}}{{#if b}}{{#if c}}x{{/if}}{{/if}}{{/if}}", config)

        assert len(nodes) == 1


class TestParseErrors:
    """Tests for parse failures."""

    def test_unclosed_if(self) -> None:
        """An if without closer should fail with its position."""
        with pytest.raises(UnclosedTagError) as exc_info:
            parse_template("{{#if x}}no close")

        assert exc_info.value.tag == "if"
        assert exc_info.value.position == 0

    def test_unclosed_each(self) -> None:
        """An each without closer should fail with its position."""
        with pytest.raises(UnclosedTagError) as exc_info:
            parse_template("abc{{#each items}}content")

        assert exc_info.value.tag == "each"
        assert exc_info.value.position == 3

    def test_unclosed_if_with_else(self) -> None:
        """An if with else but no closer should still be unclosed."""
        with pytest.raises(UnclosedTagError):
            parse_template("{{#if x}}a{{else}}b")

    def test_closing_tag_at_top_level(self) -> None:
        """A closer with no open block should be unexpected."""
        with pytest.raises(UnexpectedClosingTagError) as exc_info:
            parse_template("text {{/if}}")

        assert exc_info.value.expected is None
        assert exc_info.value.found == "if"
        assert exc_info.value.position == 5

    def test_mismatched_closing_tag(self) -> None:
        """A closer of the wrong kind should report both kinds."""
        with pytest.raises(UnexpectedClosingTagError) as exc_info:
            parse_template("{{#if a}}{{/each}}{{/if}}")

        assert exc_info.value.expected == "if"
        assert exc_info.value.found == "each"
        assert exc_info.value.position == 9
        assert str(exc_info.value) == "Expected closing tag 'if', found 'each'"

    def test_outer_closer_inside_inner_block(self) -> None:
        """An outer closer cannot terminate an inner block."""
        with pytest.raises(UnexpectedClosingTagError) as exc_info:
            parse_template("{{#each a}}{{#if b}}x{{/each}}")

        assert exc_info.value.expected == "if"

    def test_empty_variable_name(self) -> None:
        """Empty braces should report the path position."""
        with pytest.raises(EmptyVariableNameError) as exc_info:
            parse_template("Hi {{ }}")

        assert exc_info.value.position == 6

    def test_empty_variable_with_default(self) -> None:
        """A default with no path should still be an empty name."""
        with pytest.raises(EmptyVariableNameError):
            parse_template("{{ | default: 'x'}}")

    def test_dots_only_variable_is_empty(self) -> None:
        """A path made only of dots has no segments."""
        with pytest.raises(EmptyVariableNameError):
            parse_template("{{...}}")

    def test_block_without_path(self) -> None:
        """A block tag with no path should be an empty name."""
        with pytest.raises(EmptyVariableNameError):
            parse_template("{{#if}}x{{/if}}")

    def test_unterminated_tag(self) -> None:
        """A tag never closed with '}}' should be invalid syntax."""
        with pytest.raises(InvalidSyntaxError) as exc_info:
            parse_template("Hello {{title")

        assert exc_info.value.position == 6

    def test_unknown_block_type(self) -> None:
        """Only if and each blocks are supported."""
        with pytest.raises(InvalidSyntaxError) as exc_info:
            parse_template("{{#with contact}}x{{/with}}")

        assert "with" in exc_info.value.detail

    def test_unsupported_filter(self) -> None:
        """Only the default filter is recognised."""
        with pytest.raises(InvalidSyntaxError) as exc_info:
            parse_template("{{title | upper}}")

        assert "upper" in exc_info.value.detail

    def test_default_without_quotes(self) -> None:
        """Default values must be quoted."""
        with pytest.raises(InvalidSyntaxError):
            parse_template("{{title | default: Untitled}}")

    def test_variable_with_trailing_tokens(self) -> None:
        """A variable tag holds exactly one path."""
        with pytest.raises(InvalidSyntaxError):
            parse_template("{{title subtitle}}")

    def test_block_with_extra_arguments(self) -> None:
        """A block tag takes exactly one path."""
        with pytest.raises(InvalidSyntaxError):
            parse_template("{{#if a b}}x{{/if}}")

    def test_else_outside_if(self) -> None:
        """An else tag outside an if body should be rejected."""
        with pytest.raises(InvalidSyntaxError):
            parse_template("{{else}}")

    def test_else_directly_inside_each(self) -> None:
        """An else tag belongs to an if, not to an enclosing each."""
        with pytest.raises(InvalidSyntaxError):
            parse_template("{{#if a}}{{#each b}}{{else}}{{/each}}{{/if}}")

    def test_duplicate_else(self) -> None:
        """A second else in one if block should be rejected at its position."""
        with pytest.raises(InvalidSyntaxError) as exc_info:
            parse_template("{{#if a}}x{{else}}y{{else}}z{{/if}}")

        assert exc_info.value.position == 19

    def test_nesting_depth_exceeded(self) -> None:
        """Blocks nested deeper than the configured limit should fail."""
        config = TemplateConfig(max_nesting_depth=2)

        with pytest.raises(InvalidSyntaxError) as exc_info:
            parse_template("{{#if a}}{{#if b}}{{#if c}}x{{/if}}{{/if}}{{/if}}", config)

        assert "depth" in exc_info.value.detail

    def test_very_deep_template_at_largest_limit(self) -> None:
        """Even the largest allowed limit should fail cleanly on deeper input."""
        config = TemplateConfig(max_nesting_depth=MAX_NESTING_DEPTH_LIMIT)
        source = "{{#if a}}" * 1500 + "x" + "{{/if}}" * 1500

        with pytest.raises(InvalidSyntaxError) as exc_info:
            parse_template(source, config)

        assert "depth" in exc_info.value.detail

    def test_nesting_at_largest_limit_parses(self) -> None:
        """Templates nested exactly to the largest limit should parse."""
        config = TemplateConfig(max_nesting_depth=MAX_NESTING_DEPTH_LIMIT)
        depth = MAX_NESTING_DEPTH_LIMIT
        source = "{{#each features}}" * depth + "x" + "{{/each}}" * depth

        nodes = parse_template(source, config)

        assert isinstance(nodes[0], LoopNode)

    def test_parse_errors_share_base_class(self) -> None:
        """Every parse failure should be a TemplateParseError."""
        for source in ["{{#if a}}", "{{/each}}", "{{}}", "{{x"]:
            with pytest.raises(TemplateParseError):
                parse_template(source)


class TestTemplateParser:
    """Tests for the TemplateParser class."""

    def test_parse_is_repeatable(self) -> None:
        """Parsing twice with one parser should give equal results."""
        parser = TemplateParser("{{#each features}}{{this}}{{/each}}")

        assert parser.parse() == parser.parse()


class TestExtractVariables:
    """Tests for extract_variables."""

    def test_extract_variables(self) -> None:
        """Variables and block paths at every depth should be collected."""
        nodes = parse_template(
            "{{title}} {{#if subtitle}}{{subtitle}}{{/if}} {{#each features}}{{this}}{{/each}}"
        )

        assert extract_variables(nodes) == {"title", "subtitle", "features", "this"}

    def test_extract_variables_from_else_branch(self) -> None:
        """Paths used only in an else branch should be collected."""
        nodes = parse_template("{{#if a}}x{{else}}{{style.primaryColor}}{{/if}}")

        assert extract_variables(nodes) == {"a", "style.primaryColor"}

    def test_extract_variables_from_text(self) -> None:
        """Plain text references nothing."""
        assert extract_variables(parse_template("plain")) == set()
