"""Reserved identifiers emitted into intermediate source.

Every name here starts with U+01C3 (LATIN LETTER RETROFLEX CLICK, `ǃ`)
and ends with U+FF3F (FULLWIDTH LOW LINE, `＿`). Both are legal in
JavaScript identifiers but never appear in ASCII template code, so the
rectifier can match these call sites without mistaking author code for
them.

Resolved by the rectifier:
- `DOM`: construct an element, `ǃDOM＿(type, props)` followed by a block
- `TEXT`: emit an escaped child value
- `UNESCAPE`: emit a raw HTML child value

Kept in the output as runtime helpers:
- `MAP`: iteration helper, see `jaect.compiler.helpers`
- `ATTRS`: attribute-merge helper
- `tmpvar(depth)`: per-depth temp variables
"""

from __future__ import annotations

PREFIX = "ǃ"
SUFFIX = "＿"

DOM = f"{PREFIX}DOM{SUFFIX}"
TEXT = f"{PREFIX}text{SUFFIX}"
UNESCAPE = f"{PREFIX}unescape{SUFFIX}"
MAP = f"{PREFIX}map{SUFFIX}"
ATTRS = f"{PREFIX}attrs{SUFFIX}"

RESOLVED: frozenset[str] = frozenset({DOM, TEXT, UNESCAPE})


def is_sentinel(name: str) -> bool:
    return name.startswith(PREFIX) and name.endswith(SUFFIX)


def tmpvar(depth: int) -> str:
    return f"{PREFIX}tmp{depth}{SUFFIX}"


def call(sentinel: str, *args: str) -> str:
    """Source for a sentinel call: `call(TEXT, '"hi"')` -> `ǃtext＿("hi")`."""
    return f"{sentinel}({','.join(args)})"
