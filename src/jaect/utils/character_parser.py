"""Bracket-aware scanning of embedded JavaScript expressions.

Template text only knows where an expression *starts* (`#{`, `!{`, `[`);
finding where it ends requires tracking bracket depth while skipping
string, template and regex literals and comments, so that
`#{ {a: "}"}[k] }` ends at the last brace rather than the first, and
`#{ s.replace(/}/g, "") }` is not cut short by the brace in the regex.

Two entry points:
- `parse_max(src, start)`: find the unmatched closer that ends the
  expression beginning at `start`
- `split_top_level(src)`: split on commas at bracket depth zero

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from jaect.exceptions import InterpolationError

_OPENERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
_CLOSERS: frozenset[str] = frozenset(_OPENERS.values())
# Characters after which `/` begins a regex literal rather than dividing
_REGEX_PRECEDERS: frozenset[str] = frozenset("(,=:[!&|?{};+-*%<>~^")


@dataclass(frozen=True, slots=True)
class Range:
    """Span of an expression inside its source.

    Attributes:
        start: Offset of the first expression character.
        end: Offset of the closing delimiter (exclusive end of `src`).
        src: The expression text, `source[start:end]`.
    """

    start: int
    end: int
    src: str


def _skip_quoted(src: str, i: int) -> int:
    """Return the offset just past the string literal opening at `i`."""
    quote = src[i]
    j = i + 1
    while j < len(src):
        ch = src[j]
        if ch == "\\":
            j += 2
            continue
        if ch == quote:
            return j + 1
        if ch == "\n":
            break
        j += 1
    raise InterpolationError("Unterminated string literal", src, i)


def _skip_regex(src: str, i: int) -> int:
    """Return the offset just past the regex literal (and flags) opening at `i`."""
    j = i + 1
    in_class = False
    while j < len(src):
        ch = src[j]
        if ch == "\\":
            j += 2
            continue
        if ch == "\n":
            break
        if in_class:
            in_class = ch != "]"
        elif ch == "[":
            in_class = True
        elif ch == "/":
            j += 1
            while j < len(src) and (src[j].isalnum() or src[j] in "_$"):
                j += 1
            return j
        j += 1
    raise InterpolationError("Unterminated regular expression literal", src, i)


def _iter_code(src: str, start: int = 0) -> Iterator[tuple[int, str, int]]:
    """Yield `(offset, char, depth)` for every character outside literals.

    `depth` is the bracket depth the character sits at: an opener and its
    matching closer report the same depth. A closer with no opener left
    on the stack reports -1 and is left for the caller to judge.
    """
    stack: list[str] = []
    # `/` starts a regex literal only where an operand may begin
    expect_operand = True
    i = start
    n = len(src)
    while i < n:
        ch = src[i]

        # Inside a template literal: only `${`, the closing backtick and
        # escapes matter.
        if stack and stack[-1] == "`":
            if ch == "\\":
                i += 2
                continue
            if ch == "`":
                stack.pop()
                expect_operand = False
            elif ch == "$" and src.startswith("{", i + 1):
                stack.append("}")
                expect_operand = True
                i += 2
                continue
            i += 1
            continue

        if ch in "'\"":
            i = _skip_quoted(src, i)
            expect_operand = False
            continue
        if ch == "`":
            stack.append("`")
            i += 1
            continue
        if src.startswith("//", i):
            newline = src.find("\n", i)
            i = n if newline == -1 else newline
            continue
        if src.startswith("/*", i):
            close = src.find("*/", i + 2)
            if close == -1:
                raise InterpolationError("Unterminated block comment", src, i)
            i = close + 2
            continue
        if ch == "/" and expect_operand:
            i = _skip_regex(src, i)
            expect_operand = False
            continue

        depth = len(stack)
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if not stack:
                depth = -1
            else:
                expected = stack.pop()
                if expected != ch:
                    raise InterpolationError(
                        f"Mismatched bracket: expected {expected!r}, found {ch!r}", src, i
                    )
                depth = len(stack)
        if not ch.isspace():
            expect_operand = ch in _REGEX_PRECEDERS
        yield i, ch, depth
        i += 1

    if stack:
        raise InterpolationError(
            "The end of the string was reached with no closing bracket found", src, n
        )


def parse_max(src: str, start: int = 0, *, closer: str = "}") -> Range:
    """Find the expression starting at `start` and ending at an unmatched `closer`.

    Args:
        src: Text containing the expression.
        start: Offset just past the opening delimiter.
        closer: Delimiter that terminates the expression.

    Returns:
        Range whose `end` is the offset of the terminating delimiter.

    Raises:
        InterpolationError: Brackets are unbalanced, a literal never
            closes, or the text ends before `closer`.

    Example:
        >>> parse_max("#{a[1] + {b: 2}.b} tail", 2)
        Range(start=2, end=17, src='a[1] + {b: 2}.b')
    """
    for i, ch, depth in _iter_code(src, start):
        if depth < 0:
            if ch == closer:
                return Range(start, i, src[start:i])
            raise InterpolationError(f"Mismatched bracket: found {ch!r}", src, i)
    raise InterpolationError(
        "The end of the string was reached with no closing bracket found", src, len(src)
    )


def split_top_level(src: str, separator: str = ",") -> list[str]:
    """Split `src` on `separator` where it is not nested in brackets or literals.

    Raises:
        InterpolationError: `src` is not a balanced expression list.

    Example:
        >>> split_top_level('"a", f(b, c), [d, e]')
        ['"a"', ' f(b, c)', ' [d, e]']
    """
    parts: list[str] = []
    last = 0
    for i, ch, depth in _iter_code(src):
        if depth < 0:
            raise InterpolationError(f"Mismatched bracket: found {ch!r}", src, i)
        if depth == 0 and ch == separator:
            parts.append(src[last:i])
            last = i + 1
    parts.append(src[last:])
    return parts
