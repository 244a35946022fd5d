"""Code and control flow nodes for the jaect template tree."""

from __future__ import annotations

from dataclasses import dataclass

from jaect.nodes.base import Block, Node


@dataclass(frozen=True, slots=True)
class Code(Node):
    """Embedded code: `= expr` (buffered), `!= expr` (unescaped), `- stmt`."""

    value: str
    buffer: bool = False
    escape: bool = True
    block: Block | None = None


@dataclass(frozen=True, slots=True)
class Case(Node):
    """Switch on a scrutinee expression: `case expr`."""

    expr: str
    block: Block


@dataclass(frozen=True, slots=True)
class When(Node):
    """Clause of a case: `when label` or `default`."""

    expr: str
    block: Block | None = None

    @property
    def is_default(self) -> bool:
        return self.expr == "default"


@dataclass(frozen=True, slots=True)
class Each(Node):
    """Iteration: `each val, key in obj` with an optional `else` block."""

    obj: str
    val: str
    key: str | None = None
    block: Block | None = None
    alternative: Block | None = None


@dataclass(frozen=True, slots=True)
class MixinBlock(Node):
    """The `block` keyword inside a mixin body."""
