"""End-to-end tests: tree → JavaScript.

Covers the three output modes, helper assembly, stage memoization and
error propagation, plus properties over generated trees.
"""

from __future__ import annotations

import logging

import pytest
from calmjs.parse import es5
from calmjs.parse.unparsers.es5 import pretty_print
from hypothesis import given, settings

from jaect import (
    CompileOptions,
    ConfigurationError,
    IntermediateSyntaxError,
    Transform,
    compile_tree,
)
from jaect.compiler.helpers import EACH_HELPER_SOURCE
from jaect.config import CompressorOptions
from jaect.nodes import Block, BlockComment, Code, Each, MixinBlock, Node, Tag, Text

from .conftest import assert_contains, squash
from .strategies import template_tree


def count_tags(node: Node) -> int:
    if isinstance(node, Tag):
        return 1 + (count_tags(node.block) if node.block else 0)
    if isinstance(node, Block):
        return sum(count_tags(child) for child in node.nodes)
    return 0


class TestCompile:
    """Output modes."""

    def test_plain(self, paragraph: Block) -> None:
        js = Transform(paragraph).compile()
        assert js.startswith("function render(block)")
        assert "\n    var $children0" in js
        assert_contains(
            js,
            'var $element1 = ["p", null];',
            '$element1.push("Hello ");',
            "$element1.push(name);",
            "$children0.push(React.createElement.apply(React, $element1));",
        )

    def test_custom_indent(self, paragraph: Block) -> None:
        js = Transform(paragraph).compile(indent=1)
        assert "\n var $children0" in js
        assert "\n    var" not in js

    def test_beautify_hoists_vars(self, paragraph: Block) -> None:
        js = Transform(paragraph).compile(beautify=True)
        assert "\n  var $children0" in js
        assert_contains(
            js,
            "var $children0, $element1;",
            "$children0 = [];",
            '$element1 = ["p", null];',
        )

    def test_minify(self, paragraph: Block) -> None:
        js = Transform(paragraph).compile(minify=True)
        assert js.startswith("function render(block){var $children0,$element1;")
        assert "\n" not in js

    def test_minified_keeps_call_sequence(self) -> None:
        item = Tag("li", block=Block([Text("#{item.name}")]))
        tree = Block(
            [
                Tag("ul", block=Block([Each("items", "item", block=Block([item]))])),
                Code("if (footer)", block=Block([Tag("footer")])),
            ]
        )
        transform = Transform(tree)
        plain = squash(transform.compile())
        minified = squash(transform.compile(minify=True))
        for call in (".push(", "React.createElement.apply(", "ǃmap＿("):
            assert plain.count(call) == minified.count(call)

    def test_mixin_block_output_is_pushed(self) -> None:
        js = Transform(Block([Tag("div", block=Block([MixinBlock()]))])).compile()
        assert_contains(
            js,
            "$element1.push(block ? block() : null);",
            "$children0.push(React.createElement.apply(React, $element1));",
        )

    def test_elements_inside_author_callback(self) -> None:
        tree = Block(
            [
                Code("items.forEach(function (item) {"),
                Tag("li", block=Block([Text("#{item}")])),
                Code("})"),
            ]
        )
        js = Transform(tree).compile()
        assert "ǃ" not in js
        assert_contains(
            js,
            "items.forEach(function(item) {",
            "$element1.push(item);",
            "$children0.push(React.createElement.apply(React, $element1));",
        )

    def test_block_comment_containing_terminator(self) -> None:
        comment = BlockComment(" note", block=Block([Text("a */ b")]), buffer=True)
        js = Transform(Block([comment, Tag("br")])).compile()
        assert_contains(js, 'var $element1 = ["br", null];')

    def test_options_object(self, paragraph: Block) -> None:
        transform = Transform(paragraph)
        assert transform.compile(CompileOptions(minify=True)) == transform.compile(minify=True)

    def test_compile_tree_accepts_mapping(self) -> None:
        js = compile_tree(
            {"type": "Block", "nodes": [{"type": "Tag", "name": "br"}]},
            minify=True,
        )
        assert js.startswith("function render(block){")


class TestHelpers:
    """Helper sources follow the main program."""

    def test_each_helper_appended_once(self) -> None:
        tree = Block([Each("a", "x"), Each("b", "y")])
        js = Transform(tree).compile()
        assert js.endswith("\n" + EACH_HELPER_SOURCE)
        assert js.count("function ǃmap＿(") == 1

    def test_helpers_in_every_mode(self) -> None:
        transform = Transform(Block([Each("a", "x")]))
        for options in ({}, {"beautify": True}, {"minify": True}):
            assert transform.compile(**options).endswith(EACH_HELPER_SOURCE)

    def test_no_helpers(self, paragraph: Block) -> None:
        assert "ǃmap＿" not in Transform(paragraph).compile()


class TestStages:
    """Memoization and error propagation."""

    def test_stages_are_memoized(self, paragraph: Block) -> None:
        transform = Transform(paragraph)
        assert transform.rectify() is transform.rectify()
        assert transform.uglify() is transform.uglify()

    def test_uglify_leaves_rectified_tree(self, paragraph: Block) -> None:
        transform = Transform(paragraph)
        transform.uglify()
        assert "var$children0=[];" in squash(pretty_print(transform.rectify()))

    def test_compressor_options(self, paragraph: Block) -> None:
        transform = Transform(paragraph, compressor_options=CompressorOptions(hoist_vars=False))
        assert transform.compile(minify=True).startswith("function render(block){var $children0=[]")

    def test_custom_rectifier(self, paragraph: Block) -> None:
        seen = []

        class Passthrough:
            def __init__(self, program):
                seen.append(program)
                self.program = program

            def rectify(self):
                return self.program

        js = Transform(paragraph, rectifier=Passthrough).compile()
        assert len(seen) == 1
        assert "ǃDOM＿" in js

    def test_intermediate_syntax_error(self) -> None:
        transform = Transform(Block([Code("if (")]))
        with pytest.raises(IntermediateSyntaxError) as exc_info:
            transform.compile()
        assert exc_info.value.source == "if (\n"
        assert exc_info.value.__cause__ is not None

    def test_unknown_option(self, paragraph: Block) -> None:
        with pytest.raises(ConfigurationError, match="Invalid compile option"):
            Transform(paragraph).compile(pretty=True)

    def test_conflicting_options(self, paragraph: Block) -> None:
        with pytest.raises(ConfigurationError):
            Transform(paragraph).compile(beautify=True, minify=True)

    def test_debug_logging(self, paragraph: Block, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="jaect"):
            Transform(paragraph).compile(minify=True)
        messages = [record.getMessage() for record in caplog.records]
        assert any(message.startswith("Generated ") for message in messages)
        assert "Rectified intermediate program" in messages


class TestCompileProperties:
    """Invariants over generated trees."""

    @given(tree=template_tree)
    @settings(max_examples=50, deadline=None)
    def test_every_tag_becomes_one_element(self, tree: Block) -> None:
        js = Transform(tree).compile()
        assert js.count("React.createElement.apply(") == count_tags(tree)
        assert "ǃDOM＿" not in js
        assert "ǃtext＿" not in js

    @given(tree=template_tree)
    @settings(max_examples=50, deadline=None)
    def test_output_parses(self, tree: Block) -> None:
        transform = Transform(tree)
        for options in ({}, {"beautify": True}, {"minify": True}):
            es5(transform.compile(**options))
