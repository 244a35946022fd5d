"""Restricted compression of the rectified program.

Only transforms that cannot change which calls run, in which order, or
with which arguments are implemented. `CompressorOptions` refuses to
enable anything else, so the compressor's surface is exactly:

- hoist_vars: within every function scope (and the program scope), merge
  all `var` statements into one declaration at the top of the scope and
  turn the original declarations into plain assignments.

    function f() {               function f() {
        var a = 1;                   var a, b;
        if (x) {           ->        a = 1;
            var b = 2;               if (x) {
        }                                b = 2;
    }                                }
                                 }

Hoisting is semantics-preserving in ES5 because `var` is function
scoped. Declarations in `for (var ...)` / `for (var ... in ...)` heads
are left in place.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence

from calmjs.parse import asttypes
from calmjs.parse.walkers import Walker

from jaect.config import DEFAULT_COMPRESSOR_OPTIONS, CompressorOptions

logger = logging.getLogger(__name__)

_LOOP_TYPES = (
    asttypes.For,
    asttypes.ForIn,
    asttypes.While,
    asttypes.DoWhile,
    asttypes.With,
    asttypes.Label,
)


class Compressor:
    """Apply the enabled safe transforms to a copy of a program.

    Example:
        >>> compressed = Compressor().compress(es5("var a = 1; var b;"))
        >>> minify_print(compressed)
        'var a,b;a=1;'

    """

    __slots__ = ("_options",)

    def __init__(self, options: CompressorOptions = DEFAULT_COMPRESSOR_OPTIONS) -> None:
        self._options = options

    def compress(self, program: asttypes.Node) -> asttypes.Node:
        """Return a compressed deep copy; `program` itself is untouched."""
        tree = copy.deepcopy(program)
        if not self._options.hoist_vars:
            return tree

        functions = list(
            Walker().filter(
                tree, lambda node: isinstance(node, (asttypes.FuncDecl, asttypes.FuncExpr))
            )
        )
        for function in functions:
            function.elements = self._hoist_scope(function.elements)
        return type(tree)(self._hoist_scope(tree.children()))

    # ─────────────────────────────────────────────────────────────────────────
    # hoist_vars
    # ─────────────────────────────────────────────────────────────────────────

    def _hoist_scope(self, statements: Sequence[asttypes.Node]) -> list[asttypes.Node]:
        """Hoist the `var` statements of one scope's body."""
        names: list[str] = []
        count = self._collect(statements, names)
        if count < 2:
            self._skip(f"hoist_vars: {count} var statement(s) in scope, nothing to merge")
            return list(statements)

        body = self._rewrite_list(statements)
        declaration = asttypes.VarStatement(
            [asttypes.VarDecl(asttypes.Identifier(name)) for name in names]
        )
        logger.debug(f"hoist_vars: merged {count} var statements ({', '.join(names)})")
        return [declaration, *body]

    def _collect(self, statements: Sequence[asttypes.Node], names: list[str]) -> int:
        """Record declared names in order; return the number of var statements."""
        count = 0
        for stmt in statements:
            if isinstance(stmt, asttypes.VarStatement):
                count += 1
                for decl in stmt.children():
                    if decl.identifier.value not in names:
                        names.append(decl.identifier.value)
            else:
                count += self._collect(self._nested(stmt), names)
        return count

    @staticmethod
    def _nested(stmt: asttypes.Node) -> list[asttypes.Node]:
        """Statements directly nested in `stmt`, never entering functions."""
        if isinstance(stmt, asttypes.Block):
            return list(stmt.children())
        if isinstance(stmt, asttypes.If):
            return [s for s in (stmt.consequent, stmt.alternative) if s is not None]
        if isinstance(stmt, _LOOP_TYPES):
            return [stmt.statement]
        if isinstance(stmt, asttypes.Switch):
            return [s for clause in stmt.case_block.children() for s in clause.elements]
        if isinstance(stmt, asttypes.Try):
            nested = [stmt.statements]
            nested.extend(h.elements for h in (stmt.catch, stmt.fin) if h is not None)
            return nested
        return []

    def _rewrite_list(self, statements: Sequence[asttypes.Node]) -> list[asttypes.Node]:
        out: list[asttypes.Node] = []
        for stmt in statements:
            replacement = self._rewrite(stmt)
            if replacement is not None:
                out.append(replacement)
        return out

    def _rewrite_single(self, stmt: asttypes.Node) -> asttypes.Node:
        # Statement positions that cannot be empty keep an empty block
        return self._rewrite(stmt) or asttypes.Block([])

    def _rewrite(self, stmt: asttypes.Node) -> asttypes.Node | None:
        """Turn var statements into assignments; None drops the statement."""
        if isinstance(stmt, asttypes.VarStatement):
            return self._as_assignment(stmt)
        if isinstance(stmt, asttypes.Block):
            return asttypes.Block(self._rewrite_list(stmt.children()))
        if isinstance(stmt, asttypes.If):
            stmt.consequent = self._rewrite_single(stmt.consequent)
            if stmt.alternative is not None:
                stmt.alternative = self._rewrite_single(stmt.alternative)
        elif isinstance(stmt, _LOOP_TYPES):
            stmt.statement = self._rewrite_single(stmt.statement)
        elif isinstance(stmt, asttypes.Switch):
            for clause in stmt.case_block.children():
                clause.elements = self._rewrite_list(clause.elements)
        elif isinstance(stmt, asttypes.Try):
            stmt.statements = self._rewrite_single(stmt.statements)
            for handler in (stmt.catch, stmt.fin):
                if handler is not None:
                    handler.elements = self._rewrite_single(handler.elements)
        return stmt

    @staticmethod
    def _as_assignment(stmt: asttypes.Node) -> asttypes.Node | None:
        assignments = [
            asttypes.Assign("=", decl.identifier, decl.initializer)
            for decl in stmt.children()
            if decl.initializer is not None
        ]
        if not assignments:
            return None
        expr = assignments[0]
        for assignment in assignments[1:]:
            expr = asttypes.Comma(expr, assignment)
        return asttypes.ExprStatement(expr)

    def _skip(self, message: str) -> None:
        if self._options.warnings:
            logger.warning(message)
        else:
            logger.debug(message)
