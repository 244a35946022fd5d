"""Element and text nodes for the jaect template tree."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from jaect.nodes.base import Block, Node
from jaect.nodes.control_flow import Code


@dataclass(frozen=True, slots=True)
class Attribute:
    """Tag attribute: `name=value`, or a spread `&attributes(value)`.

    `value` is raw JavaScript expression source, quotes included for
    string literals.
    """

    name: str
    value: str
    spread: bool = False


@dataclass(frozen=True, slots=True)
class Tag(Node):
    """Element: `div(class="a")= code` followed by a child block."""

    name: str
    attrs: Sequence[Attribute] = ()
    block: Block | None = None
    code: Code | None = None

    @property
    def static_attrs(self) -> list[Attribute]:
        return [attr for attr in self.attrs if not attr.spread]

    @property
    def spreads(self) -> list[str]:
        return [attr.value for attr in self.attrs if attr.spread]


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Piped or inline text, possibly holding `#{}` / `!{}` interpolations."""

    value: str


@dataclass(frozen=True, slots=True)
class Literal(Node):
    """Raw source emitted verbatim."""

    value: str


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Line comment: `//` (buffered) or `//-` (silent)."""

    value: str
    buffer: bool = False


@dataclass(frozen=True, slots=True)
class BlockComment(Node):
    """Comment wrapping an indented block."""

    value: str
    block: Block | None = None
    buffer: bool = False
