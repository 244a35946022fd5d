"""Element, text and comment generation.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jaect.compiler import sentinels
from jaect.compiler.attributes import compile_attributes
from jaect.compiler.interpolation import interpolate
from jaect.utils.javascript import element_reference

if TYPE_CHECKING:
    from jaect.compiler.state import CompilationState
    from jaect.nodes import BlockComment, Code, Comment, Literal, Node, Tag, Text

_COMMENT_END = "*/"


class ElementMixin:
    """Mixin for generating tags, text, literals and comments.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _state: CompilationState

        # From Transform core
        def _visit(self, node: Node) -> None: ...

        # From ControlFlowMixin
        def _visit_code(self, node: Code) -> None: ...

    def _visit_tag(self, node: Tag) -> None:
        """Generate an element construction followed by its children.

        Example:
            div#main(class=["a", b])= title
              span hi

        Generates:
            ǃDOM＿("div",{"id":"main",className:"a" + " " + b});
            {
            ǃtext＿(title);
            ǃDOM＿("span",null);
            {
            ǃtext＿("hi");
            }
            }
        """
        state = self._state
        props = compile_attributes(node.static_attrs, node.spreads, state.helpers)
        state.emit(sentinels.call(sentinels.DOM, element_reference(node.name), props), ";\n{\n")

        if node.code:
            self._visit_code(node.code)
        if node.block:
            self._visit(node.block)
        state.emit("}\n")

    def _visit_text(self, node: Text) -> None:
        """One statement per interpolation segment.

        Segments are collected before emitting so a malformed interpolation
        leaves no partial output behind.
        """
        statements = [f"{segment.to_source()};\n" for segment in interpolate(node.value)]
        self._state.emit(*statements)

    def _visit_literal(self, node: Literal) -> None:
        self._state.emit(node.value, "\n")

    def _visit_comment(self, node: Comment) -> None:
        if node.buffer:
            self._state.emit("//", node.value, "\n")

    def _visit_block_comment(self, node: BlockComment) -> None:
        """Wrap the block in `/* */`; a `*/` inside becomes `* /`."""
        if not node.buffer:
            return
        state = self._state
        with state.capture() as fragments:
            state.emit("/*", node.value, "\n")
            if node.block:
                self._visit(node.block)
        state.emit("".join(fragments).replace(_COMMENT_END, "* /"), _COMMENT_END, "\n")
