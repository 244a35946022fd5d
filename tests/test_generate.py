"""Tests for intermediate source generation.

Each node variant is checked against the exact intermediate source it
produces. Sentinel calls are spelled out in full so the expected text
reads like the generator's output.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from jaect import Transform
from jaect.compiler.helpers import ATTRS_HELPER_SOURCE, EACH_HELPER_SOURCE
from jaect.exceptions import ErrorCode, InterpolationError, UnsupportedConstructError
from jaect.nodes import (
    Attribute,
    Block,
    BlockComment,
    Case,
    Code,
    Comment,
    Doctype,
    Each,
    Filter,
    Literal,
    Mixin,
    MixinBlock,
    Tag,
    Text,
    When,
)

Generate = Callable[..., str]


class TestTags:
    """Element construction."""

    def test_empty_tag(self, generate: Generate) -> None:
        assert generate(Tag("p")) == 'ǃDOM＿("p",null);\n{\n}\n'

    def test_component_is_a_reference(self, generate: Generate) -> None:
        assert generate(Tag("Card")).startswith("ǃDOM＿(Card,null);")
        assert generate(Tag("Ui.Panel")).startswith("ǃDOM＿(Ui.Panel,null);")

    def test_hyphenated_name_is_a_string(self, generate: Generate) -> None:
        assert generate(Tag("my-element")).startswith('ǃDOM＿("my-element",null);')

    def test_children_nest_in_block(self, generate: Generate) -> None:
        tree = Tag("ul", block=Block([Tag("li", block=Block([Text("one")]))]))
        assert generate(tree) == (
            'ǃDOM＿("ul",null);\n{\n'
            'ǃDOM＿("li",null);\n{\n'
            'ǃtext＿("one");\n'
            "}\n"
            "}\n"
        )

    def test_inline_code_precedes_block(self, generate: Generate) -> None:
        tree = Tag("h1", code=Code("title", buffer=True), block=Block([Text("!")]))
        assert generate(tree) == 'ǃDOM＿("h1",null);\n{\nǃtext＿(title);\nǃtext＿("!");\n}\n'

    def test_static_attributes(self, generate: Generate) -> None:
        tree = Tag(
            "div",
            attrs=[
                Attribute("id", '"x"'),
                Attribute("class", '"a"'),
                Attribute("class", "b"),
            ],
        )
        assert generate(tree).startswith('ǃDOM＿("div",{"id":"x",className:"a" + " " + b});')

    def test_attribute_spread(self) -> None:
        tree = Tag(
            "div",
            attrs=[Attribute("id", '"x"'), Attribute("&attributes", "props", spread=True)],
        )
        transform = Transform(Block([tree]))
        assert transform.generate().startswith('ǃDOM＿("div",ǃattrs＿({"id":"x"},props));')
        assert transform.helpers == (ATTRS_HELPER_SOURCE,)


class TestText:
    """Text and interpolation."""

    def test_interpolated_text(self, generate: Generate) -> None:
        assert generate(Text("Hello #{name}")) == 'ǃtext＿("Hello ");\nǃtext＿(name);\n'

    def test_raw_interpolation(self, generate: Generate) -> None:
        assert generate(Text("!{html}")) == "ǃunescape＿(html);\n"

    def test_escaped_marker(self, generate: Generate) -> None:
        assert generate(Text(r"a \#{b}")) == 'ǃtext＿("a #{b}");\n'

    def test_empty_text(self, generate: Generate) -> None:
        assert generate(Text("")) == ""

    def test_malformed_interpolation_raises(self, generate: Generate) -> None:
        with pytest.raises(InterpolationError):
            generate(Text("a #{b"))


class TestCode:
    """Embedded code."""

    def test_buffered_escaped(self, generate: Generate) -> None:
        assert generate(Code("user.name", buffer=True)) == "ǃtext＿(user.name);\n"

    def test_buffered_unescaped(self, generate: Generate) -> None:
        assert generate(Code("html", buffer=True, escape=False)) == "ǃunescape＿(html);\n"

    def test_unbuffered_is_verbatim(self, generate: Generate) -> None:
        assert generate(Code("var x = 1;")) == "var x = 1;\n"

    def test_unbuffered_block_is_braced(self, generate: Generate) -> None:
        tree = Code("if (user)", block=Block([Text("hi")]))
        assert generate(tree) == 'if (user)\n{\nǃtext＿("hi");\n}\n'

    def test_buffered_block_is_not_braced(self, generate: Generate) -> None:
        tree = Code("a", buffer=True, block=Block([Text("b")]))
        assert generate(tree) == 'ǃtext＿(a);\nǃtext＿("b");\n'


class TestCase:
    """case / when."""

    def test_switch_with_default(self, generate: Generate) -> None:
        tree = Case(
            "role",
            Block([When('"admin"', Block([Text("A")])), When("default")]),
        )
        assert generate(tree) == (
            "var ǃtmp1＿=role;\n"
            "switch(ǃtmp1＿){\n"
            'case "admin":\n'
            'ǃtext＿("A");\n'
            "break;\n"
            "default:\n"
            "break;\n"
            "}\n"
        )

    def test_fallthrough_when_still_breaks(self, generate: Generate) -> None:
        tree = Case("n", Block([When("1"), When("2", Block([Text("x")]))]))
        assert generate(tree).count("break;") == 2

    def test_sibling_cases_reuse_temp_var(self, generate: Generate) -> None:
        source = generate(Case("a", Block([])), Case("b", Block([])))
        assert "var ǃtmp1＿=a;\n" in source
        assert "\nǃtmp1＿=b;\n" in source
        assert source.count("var ") == 1

    def test_depth_restored_after_nested_tag(self, generate: Generate) -> None:
        source = generate(
            Tag("div", block=Block([Case("a", Block([]))])),
            Case("b", Block([])),
        )
        assert "var ǃtmp3＿=a;" in source
        assert "var ǃtmp1＿=b;" in source


class TestEach:
    """Iteration through the helper."""

    def test_each(self) -> None:
        tree = Each("items", "item", block=Block([Text("#{item}")]))
        transform = Transform(Block([tree]))
        assert transform.generate() == "ǃmap＿(items,function(item){\nǃtext＿(item);\n});\n"
        assert transform.helpers == (EACH_HELPER_SOURCE,)

    def test_each_with_key_and_alternative(self, generate: Generate) -> None:
        tree = Each(
            "obj",
            "v",
            key="k",
            block=Block([Text("#{k}")]),
            alternative=Block([Text("none")]),
        )
        assert generate(tree) == (
            "ǃmap＿(obj,function(v,k){\nǃtext＿(k);\n},function(){\nǃtext＿(\"none\");\n});\n"
        )

    def test_helper_emitted_once(self) -> None:
        transform = Transform(Block([Each("a", "x"), Each("b", "y")]))
        transform.generate()
        assert transform.helpers == (EACH_HELPER_SOURCE,)

    def test_callback_has_own_temp_scope(self, generate: Generate) -> None:
        source = generate(
            Tag("div", block=Block([Case("a", Block([]))])),
            Each("xs", "x", block=Block([Case("b", Block([]))])),
            Tag("div", block=Block([Case("c", Block([]))])),
        )
        assert "var ǃtmp3＿=a;" in source
        assert "var ǃtmp3＿=b;" in source
        assert "\nǃtmp3＿=c;" in source


class TestOtherNodes:
    """Comments, literals and mixin blocks."""

    def test_buffered_comment(self, generate: Generate) -> None:
        assert generate(Comment(" note", buffer=True)) == "// note\n"

    def test_silent_comment(self, generate: Generate) -> None:
        assert generate(Comment("hidden")) == ""

    def test_buffered_block_comment(self, generate: Generate) -> None:
        tree = BlockComment("", block=Block([Literal("old()")]), buffer=True)
        assert generate(tree) == "/*\nold()\n*/\n"

    def test_block_comment_terminator_is_broken_up(self, generate: Generate) -> None:
        tree = BlockComment(" x */", block=Block([Text("a */ b")]), buffer=True)
        assert generate(tree) == '/* x * /\nǃtext＿("a * / b");\n*/\n'

    def test_silent_block_comment(self, generate: Generate) -> None:
        assert generate(BlockComment("x", block=Block([Text("y")]))) == ""

    def test_literal(self, generate: Generate) -> None:
        assert generate(Literal("debugger;")) == "debugger;\n"

    def test_mixin_block(self, generate: Generate) -> None:
        assert generate(MixinBlock()) == "ǃtext＿(block ? block() : null);\n"


class TestUnsupported:
    """Rejected node variants abort generation."""

    @pytest.mark.parametrize(
        ("node", "name"),
        [
            (Doctype("html", lineno=1), "Doctype"),
            (Mixin("card", lineno=4), "Mixin"),
            (Filter("markdown", lineno=7), "Filter"),
        ],
    )
    def test_rejected(self, generate: Generate, node, name: str) -> None:
        with pytest.raises(UnsupportedConstructError) as exc_info:
            generate(node)
        assert exc_info.value.node_type == name
        assert exc_info.value.code is ErrorCode.UNSUPPORTED_CONSTRUCT
        assert f"line {node.lineno}" in str(exc_info.value)

    def test_nested_rejection(self, generate: Generate) -> None:
        with pytest.raises(UnsupportedConstructError):
            generate(Tag("div", block=Block([Tag("p", block=Block([Doctype()]))])))


class TestGenerateLifecycle:
    """Memoization and all-or-nothing behaviour."""

    def test_memoized(self, paragraph: Block) -> None:
        transform = Transform(paragraph)
        assert transform.generate() is transform.generate()

    def test_failure_is_not_memoized(self) -> None:
        transform = Transform(Block([Tag("p"), Doctype()]))
        for _ in range(2):
            with pytest.raises(UnsupportedConstructError):
                transform.generate()
        assert transform.helpers == ()

    def test_accepts_mapping(self) -> None:
        transform = Transform({"type": "Block", "nodes": [{"type": "Text", "val": "x"}]})
        assert transform.generate() == 'ǃtext＿("x");\n'

    def test_visit_outside_generate_raises(self, paragraph: Block) -> None:
        with pytest.raises(RuntimeError, match="outside generate"):
            Transform(paragraph)._visit(paragraph)
