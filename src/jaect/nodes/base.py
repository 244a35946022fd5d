"""Base node classes for the jaect template tree."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all template tree nodes.

    Nodes are immutable; the line number is optional and keyword-only so
    hand-built trees stay terse.

    """

    lineno: int = field(default=0, kw_only=True)


@dataclass(frozen=True, slots=True)
class Block(Node):
    """Ordered sequence of child nodes."""

    nodes: Sequence[Node] = ()
