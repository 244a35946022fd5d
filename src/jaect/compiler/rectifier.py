"""Sentinel resolution over the parsed intermediate program.

The generator writes element construction and output as sentinel calls
in statement position. The rectifier turns that statement stream into a
render function that collects children into arrays and builds elements
with the runtime's element factory:

    ǃDOM＿("ul",null);
    {
    ǃtext＿(title);
    }

becomes

    function render(block) {
        var $children0 = [];
        {
            var $element1 = ["ul", null];
            $element1.push(title);
            $children0.push(React.createElement.apply(React, $element1));
        }
        return $children0.length === 1 ? $children0[0] : $children0;
    }

Rewrites:
- `ǃDOM＿(type, props); {...}`: the block fills `[type, props]`, which is
  then applied to the factory and pushed to the enclosing array
- `ǃtext＿(value)`: push `value`
- `ǃunescape＿(html)`: push a `span` with `dangerouslySetInnerHTML`
- `ǃmap＿(obj, fn, alt)`: push the helper result; each callback collects
  into its own array and returns it

Statements nested in blocks, conditionals, loops, switch clauses, try
blocks and callbacks passed to author calls are rewritten recursively;
any sentinel still present afterwards (for example in expression
position) raises `RectificationError`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from calmjs.parse import asttypes
from calmjs.parse.walkers import Walker

from jaect.compiler import sentinels
from jaect.exceptions import RectificationError

DEFAULT_FACTORY = "React.createElement"
DEFAULT_FUNCTION_NAME = "render"


class SupportsRectify(Protocol):
    """Anything `Transform` can hand the parsed program to."""

    def rectify(self) -> asttypes.Node: ...


def _sentinel_call(stmt: asttypes.Node) -> asttypes.FunctionCall | None:
    """Return the sentinel call if `stmt` is `<sentinel>(...);`."""
    if not isinstance(stmt, asttypes.ExprStatement):
        return None
    call = stmt.expr
    if (
        isinstance(call, asttypes.FunctionCall)
        and isinstance(call.identifier, asttypes.Identifier)
        and sentinels.is_sentinel(call.identifier.value)
    ):
        return call
    return None


def _arguments(call: asttypes.FunctionCall) -> list[asttypes.Node]:
    return list(call.args.items) if call.args is not None else []


def _inline_callbacks(expr: asttypes.Node) -> list[asttypes.FuncExpr]:
    """Function-expression arguments along a call chain such as `a.b(f).c(g)`."""
    callbacks: list[asttypes.FuncExpr] = []
    while isinstance(expr, asttypes.FunctionCall):
        callbacks.extend(arg for arg in _arguments(expr) if isinstance(arg, asttypes.FuncExpr))
        callee = expr.identifier
        expr = callee.node if isinstance(callee, asttypes.DotAccessor) else None
    return callbacks


class Rectifier:
    """Resolve sentinel calls in one parsed intermediate program.

    The program's statements are rewritten in place; create one Rectifier
    per program.

    Args:
        program: Parsed intermediate source (`calmjs.parse.es5` result).
        factory: Dotted name of the element factory.
        function_name: Name of the generated render function.

    """

    __slots__ = ("_counter", "_factory", "_function_name", "_program")

    def __init__(
        self,
        program: asttypes.Node,
        *,
        factory: str = DEFAULT_FACTORY,
        function_name: str = DEFAULT_FUNCTION_NAME,
    ) -> None:
        self._program = program
        self._factory = factory
        self._function_name = function_name
        self._counter = 0

    def rectify(self) -> asttypes.Node:
        """Return a program holding the render function.

        Raises:
            RectificationError: A sentinel call is malformed or sits
                where it cannot be resolved.
        """
        root = self._fresh("$children")
        body = [self._declare(root, asttypes.Array([]))]
        body.extend(self._statements(self._program.children(), root))
        body.append(asttypes.Return(self._root_value(root)))

        render = asttypes.FuncDecl(
            asttypes.Identifier(self._function_name),
            [asttypes.Identifier("block")],
            body,
        )
        result = type(self._program)([render])
        self._check_resolved(result)
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Statement rewriting
    # ─────────────────────────────────────────────────────────────────────────

    def _statements(self, stmts: Sequence[asttypes.Node], target: str) -> list[asttypes.Node]:
        """Rewrite a statement list whose output goes into array `target`."""
        stmts = list(stmts)
        out: list[asttypes.Node] = []
        i = 0
        while i < len(stmts):
            stmt = stmts[i]
            call = _sentinel_call(stmt)
            name = call.identifier.value if call is not None else None

            if name == sentinels.DOM:
                children: Sequence[asttypes.Node] = ()
                if i + 1 < len(stmts) and isinstance(stmts[i + 1], asttypes.Block):
                    i += 1
                    children = stmts[i].children()
                out.append(self._element(call, children, target))
            elif name == sentinels.TEXT:
                out.append(self._push(target, self._single_argument(call)))
            elif name == sentinels.UNESCAPE:
                out.append(self._push(target, self._raw_html(self._single_argument(call))))
            elif name == sentinels.MAP:
                out.append(self._push(target, self._each(call)))
            else:
                out.append(self._statement(stmt, target))
            i += 1
        return out

    def _statement(self, stmt: asttypes.Node, target: str) -> asttypes.Node:
        """Recurse into the statement bodies of a compound statement.

        Function expressions passed to calls in author code, as in
        `items.forEach(function (item) { ... })`, run synchronously and
        output into the enclosing array.
        """
        if isinstance(stmt, asttypes.ExprStatement):
            for callback in _inline_callbacks(stmt.expr):
                callback.elements = self._statements(callback.elements, target)
        elif isinstance(stmt, asttypes.Block):
            return asttypes.Block(self._statements(stmt.children(), target))
        elif isinstance(stmt, asttypes.If):
            stmt.consequent = self._substatement(stmt.consequent, target)
            if stmt.alternative is not None:
                stmt.alternative = self._substatement(stmt.alternative, target)
        elif isinstance(
            stmt,
            (
                asttypes.For,
                asttypes.ForIn,
                asttypes.While,
                asttypes.DoWhile,
                asttypes.With,
                asttypes.Label,
            ),
        ):
            stmt.statement = self._substatement(stmt.statement, target)
        elif isinstance(stmt, asttypes.Switch):
            for clause in stmt.case_block.children():
                clause.elements = self._statements(clause.elements, target)
        elif isinstance(stmt, asttypes.Try):
            stmt.statements = self._substatement(stmt.statements, target)
            for handler in (stmt.catch, stmt.fin):
                if handler is not None:
                    handler.elements = self._substatement(handler.elements, target)
        return stmt

    def _substatement(self, stmt: asttypes.Node, target: str) -> asttypes.Node:
        rewritten = self._statements([stmt], target)
        if len(rewritten) == 1:
            return rewritten[0]
        return asttypes.Block(rewritten)

    # ─────────────────────────────────────────────────────────────────────────
    # Sentinel rewrites
    # ─────────────────────────────────────────────────────────────────────────

    def _element(
        self,
        call: asttypes.FunctionCall,
        children: Sequence[asttypes.Node],
        target: str,
    ) -> asttypes.Node:
        args = _arguments(call)
        if len(args) != 2:
            raise RectificationError(
                f"{sentinels.DOM} expects (type, props), got {len(args)} argument(s)"
            )
        element = self._fresh("$element")
        body = [self._declare(element, asttypes.Array(args))]
        body.extend(self._statements(children, element))
        body.append(self._push(target, self._create(element)))
        return asttypes.Block(body)

    def _each(self, call: asttypes.FunctionCall) -> asttypes.FunctionCall:
        args = _arguments(call)
        if len(args) not in (2, 3):
            raise RectificationError(
                f"{sentinels.MAP} expects (collection, each[, else]), got {len(args)} argument(s)"
            )
        for callback in args[1:]:
            if not isinstance(callback, asttypes.FuncExpr):
                raise RectificationError(f"{sentinels.MAP} callbacks must be function expressions")
            callback.elements = self._function_body(callback.elements)
        return call

    def _function_body(self, elements: Sequence[asttypes.Node]) -> list[asttypes.Node]:
        children = self._fresh("$children")
        return [
            self._declare(children, asttypes.Array([])),
            *self._statements(elements, children),
            asttypes.Return(asttypes.Identifier(children)),
        ]

    def _single_argument(self, call: asttypes.FunctionCall) -> asttypes.Node:
        args = _arguments(call)
        if len(args) != 1:
            raise RectificationError(
                f"{call.identifier.value} expects one argument, got {len(args)}"
            )
        return args[0]

    def _raw_html(self, value: asttypes.Node) -> asttypes.Node:
        """`factory("span", {dangerouslySetInnerHTML: {__html: value}})`"""
        inner = asttypes.Object([asttypes.Assign(":", asttypes.Identifier("__html"), value)])
        props = asttypes.Object(
            [asttypes.Assign(":", asttypes.Identifier("dangerouslySetInnerHTML"), inner)]
        )
        return asttypes.FunctionCall(
            self._factory_ref(),
            asttypes.Arguments([asttypes.String('"span"'), props]),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Node builders
    # ─────────────────────────────────────────────────────────────────────────

    def _fresh(self, prefix: str) -> str:
        name = f"{prefix}{self._counter}"
        self._counter += 1
        return name

    def _factory_ref(self) -> asttypes.Node:
        head, *rest = self._factory.split(".")
        node: asttypes.Node = asttypes.Identifier(head)
        for part in rest:
            node = asttypes.DotAccessor(node, asttypes.Identifier(part))
        return node

    def _factory_owner(self) -> asttypes.Node:
        owner, _, _ = self._factory.rpartition(".")
        if not owner:
            return asttypes.Null("null")
        head, *rest = owner.split(".")
        node: asttypes.Node = asttypes.Identifier(head)
        for part in rest:
            node = asttypes.DotAccessor(node, asttypes.Identifier(part))
        return node

    def _create(self, element: str) -> asttypes.Node:
        """`factory.apply(owner, element)`"""
        return asttypes.FunctionCall(
            asttypes.DotAccessor(self._factory_ref(), asttypes.Identifier("apply")),
            asttypes.Arguments([self._factory_owner(), asttypes.Identifier(element)]),
        )

    @staticmethod
    def _declare(name: str, init: asttypes.Node) -> asttypes.Node:
        return asttypes.VarStatement([asttypes.VarDecl(asttypes.Identifier(name), init)])

    @staticmethod
    def _push(target: str, value: asttypes.Node) -> asttypes.Node:
        return asttypes.ExprStatement(
            asttypes.FunctionCall(
                asttypes.DotAccessor(asttypes.Identifier(target), asttypes.Identifier("push")),
                asttypes.Arguments([value]),
            )
        )

    @staticmethod
    def _root_value(root: str) -> asttypes.Node:
        """`root.length === 1 ? root[0] : root`"""
        return asttypes.Conditional(
            asttypes.BinOp(
                "===",
                asttypes.DotAccessor(asttypes.Identifier(root), asttypes.Identifier("length")),
                asttypes.Number("1"),
            ),
            asttypes.BracketAccessor(asttypes.Identifier(root), asttypes.Number("0")),
            asttypes.Identifier(root),
        )

    @staticmethod
    def _check_resolved(tree: asttypes.Node) -> None:
        leftover = next(
            Walker().filter(
                tree,
                lambda node: (
                    isinstance(node, asttypes.Identifier) and node.value in sentinels.RESOLVED
                ),
            ),
            None,
        )
        if leftover is not None:
            raise RectificationError(
                f"Unresolved {leftover.value} outside statement position"
            )
