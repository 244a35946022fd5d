"""Per-run state of the intermediate-source generator."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from jaect.compiler import sentinels
from jaect.compiler.helpers import HelperEmitter


class CompilationState:
    """Mutable state owned by exactly one `Transform.generate()` run.

    Output is accumulated as an append-only list of fragments and joined
    once by `source()`.

    Attributes:
        buf: Emitted source fragments in order.
        depth: Current nesting level; -1 before the root is visited.
        tmpvars: Temp variables declared in the current function scope.
        helpers: Runtime helpers referenced so far.

    """

    __slots__ = ("buf", "depth", "helpers", "tmpvars")

    def __init__(self) -> None:
        self.buf: list[str] = []
        self.depth: int = -1
        self.tmpvars: set[str] = set()
        self.helpers = HelperEmitter()

    def emit(self, *fragments: str) -> None:
        self.buf.extend(fragments)

    def source(self) -> str:
        return "".join(self.buf)

    def getvar(self, depth: int, init: str | None = None) -> str:
        """Allocate (or reuse) the temp variable for `depth`.

        The first request at a depth declares the variable:
            var ǃtmp2＿=expr;

        Later requests at that depth only assign, and emit nothing at all
        when there is no initializer:
            ǃtmp2＿=expr;

        Returns:
            The variable name.
        """
        name = sentinels.tmpvar(depth)
        if name in self.tmpvars:
            if init:
                self.emit(f"{name}={init};\n")
        else:
            self.emit(f"var {name}={init};\n" if init else f"var {name};\n")
            self.tmpvars.add(name)
        return name

    @contextmanager
    def capture(self) -> Iterator[list[str]]:
        """Redirect emitted fragments into a separate list.

        Used for code that must be returned as a value rather than
        appended, such as each-callback bodies.
        """
        saved = self.buf
        self.buf = []
        try:
            yield self.buf
        finally:
            self.buf = saved

    @contextmanager
    def function_scope(self) -> Iterator[None]:
        """Start a fresh temp-variable scope for a generated function body."""
        saved = self.tmpvars
        self.tmpvars = set()
        try:
            yield
        finally:
            self.tmpvars = saved
