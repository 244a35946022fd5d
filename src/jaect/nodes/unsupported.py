"""Nodes the parser can produce but the generator never accepts.

Kept as real node types so the visitor dispatch stays exhaustive and
rejects them with a precise error instead of an unknown-node failure.
"""

from __future__ import annotations

from dataclasses import dataclass

from jaect.nodes.base import Block, Node


@dataclass(frozen=True, slots=True)
class Doctype(Node):
    """`doctype html`"""

    value: str = ""


@dataclass(frozen=True, slots=True)
class Mixin(Node):
    """Mixin declaration or call: `mixin name(args)` / `+name(args)`."""

    name: str
    args: str | None = None
    block: Block | None = None
    call: bool = False


@dataclass(frozen=True, slots=True)
class Filter(Node):
    """Content filter: `:markdown`"""

    name: str
    block: Block | None = None
