"""Code and control flow generation.

Provides mixin for embedded code, case/when, each and mixin blocks.

Uses inline TYPE_CHECKING declarations for host attributes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jaect.compiler import sentinels

if TYPE_CHECKING:
    from jaect.compiler.state import CompilationState
    from jaect.nodes import Block, Case, Code, Each, MixinBlock, Node, When


class ControlFlowMixin:
    """Mixin for generating code and control flow constructs.

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

    def _visit_code(self, node: Code) -> None:
        """Generate embedded code, respecting buffer / escape flags.

        Buffered code is a single expression wrapped in an output sentinel;
        unbuffered code is copied verbatim and, when followed by a block,
        is usually flow control, so only that case wraps the block in
        braces:

            - if (user)
              p hi

        Generates:
            if (user)
            {
            ǃDOM＿("p",null);
            ...
            }
        """
        state = self._state
        if node.buffer:
            sentinel = sentinels.TEXT if node.escape else sentinels.UNESCAPE
            state.emit(sentinels.call(sentinel, node.value), ";\n")
        else:
            state.emit(node.value, "\n")

        if node.block:
            if not node.buffer:
                state.emit("{\n")
            self._visit(node.block)
            if not node.buffer:
                state.emit("}\n")

    def _visit_case(self, node: Case) -> None:
        """Generate a switch over a cached scrutinee.

        The scrutinee is stored in the temp variable for the current depth,
        declared on first use and reassigned by later cases at that depth:

            var ǃtmp1＿=user.role;
            switch(ǃtmp1＿){
            case "admin":
            ...
            break;
            }
        """
        state = self._state
        name = state.getvar(state.depth, node.expr)
        state.emit(f"switch({name}){{\n")
        self._visit(node.block)
        state.emit("}\n")

    def _visit_when(self, node: When) -> None:
        state = self._state
        if node.is_default:
            state.emit("default:\n")
        else:
            state.emit(f"case {node.expr}:\n")
        if node.block:
            self._visit(node.block)
        state.emit("break;\n")

    def _visit_each(self, node: Each) -> str:
        """Build an iteration-helper call; returned rather than emitted.

        The caller decides where the expression goes (`_visit` emits it as
        a statement). Each callback is its own JavaScript function, so its
        body gets a fresh temp-variable scope.

        Example:
            each item, i in items
              li= item
            else
              li empty

        Generates:
            ǃmap＿(items,function(item,i){
            ...
            },function(){
            ...
            })
        """
        helper = self._state.helpers.use_each()
        params = node.val if node.key is None else f"{node.val},{node.key}"

        body = self._generate_function_body(node.block)
        src = f"{helper}({node.obj},function({params}){{\n{body}}}"
        if node.alternative:
            alternative = self._generate_function_body(node.alternative)
            src += f",function(){{\n{alternative}}}"
        return src + ")"

    def _generate_function_body(self, block: Block | None) -> str:
        state = self._state
        if block is None:
            return ""
        with state.function_scope(), state.capture() as fragments:
            self._visit(block)
        return "".join(fragments)

    def _visit_mixin_block(self, node: MixinBlock) -> None:
        """Output the caller-supplied block, or nothing.

        Generates:
            ǃtext＿(block ? block() : null);
        """
        self._state.emit(sentinels.call(sentinels.TEXT, "block ? block() : null"), ";\n")
