"""Interpolation scanning for text payloads.

Splits text such as ``Hello #{user.name}, !{html}`` into alternating
literal and expression segments:

    >>> list(interpolate("a #{1+1} b"))
    [Segment(kind=<SegmentKind.TEXT: 'text'>, source='"a "'),
     Segment(kind=<SegmentKind.TEXT: 'text'>, source='1+1'),
     Segment(kind=<SegmentKind.TEXT: 'text'>, source='" b"')]

Markers:
- ``#{expr}``: escaped output, a TEXT segment
- ``!{expr}``: raw output, an UNESCAPE segment
- ``\\#{`` / ``\\!{``: literal marker text; the backslash is dropped

Literal runs are quoted with `jaect.utils.javascript.quote` so every
segment's `source` is a JavaScript expression.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from jaect.compiler import sentinels
from jaect.exceptions import InterpolationError
from jaect.utils.character_parser import parse_max
from jaect.utils.javascript import quote

_MARKER_RE = re.compile(r"(\\)?([#!])\{")


class SegmentKind(Enum):
    TEXT = "text"
    UNESCAPE = "unescape"


@dataclass(frozen=True, slots=True)
class Segment:
    """One piece of interpolated text.

    Attributes:
        kind: Whether the value is escaped (TEXT) or raw (UNESCAPE).
        source: JavaScript expression source for the value.
    """

    kind: SegmentKind
    source: str

    def to_source(self) -> str:
        """Sentinel call emitting this segment."""
        sentinel = sentinels.TEXT if self.kind is SegmentKind.TEXT else sentinels.UNESCAPE
        return sentinels.call(sentinel, self.source)


def interpolate(text: str) -> Iterator[Segment]:
    """Yield the segments of `text` in order.

    Raises:
        InterpolationError: An expression has unbalanced delimiters or is
            empty. Raised when the scan reaches it, so consume the
            iterator fully before emitting anything.
    """
    pending: list[str] = []
    pos = 0

    while (match := _MARKER_RE.search(text, pos)) is not None:
        pending.append(text[pos : match.start()])
        escaped, marker = match.group(1), match.group(2)
        if escaped:
            pending.append(marker + "{")
            pos = match.end()
            continue

        expr = parse_max(text, match.end())
        if not expr.src.strip():
            raise InterpolationError("Empty interpolation", text, match.start())

        literal = "".join(pending)
        pending = []
        if literal:
            yield Segment(SegmentKind.TEXT, quote(literal))
        kind = SegmentKind.TEXT if marker == "#" else SegmentKind.UNESCAPE
        yield Segment(kind, expr.src)
        pos = expr.end + 1

    pending.append(text[pos:])
    literal = "".join(pending)
    if literal:
        yield Segment(SegmentKind.TEXT, quote(literal))
