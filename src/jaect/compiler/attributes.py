"""Attribute compilation: tag attributes to a props object expression.

Static attributes compile to an object literal at generation time:

    div(id="x", class=["a", "b"], data-id=n, tab-index=1)

    {"id":"x","data-id":n,"tabIndex":1,className:"a" + " " + "b"}

When a tag also spreads attribute objects (`&attributes(props)`), the
literal is prepended and everything is merged at run time through the
attribute-merge helper, which applies the same key rules:

    ǃattrs＿({"id":"x"},props)

Key rules, in order:
1. `class` values collect into `className` (array literals flattened,
   `null` and empty strings dropped), emitted last
2. `for` becomes `htmlFor`
3. `aria-*` and `data-*` pass through
4. other hyphenated names are camel-cased
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from jaect.compiler import sentinels
from jaect.exceptions import InterpolationError
from jaect.utils.character_parser import parse_max, split_top_level
from jaect.utils.javascript import camel_case, quote

if TYPE_CHECKING:
    from jaect.compiler.helpers import HelperEmitter
    from jaect.nodes import Attribute

_EMPTY_LITERALS: frozenset[str] = frozenset({"null", '""', "''"})
_PASSTHROUGH_RE = re.compile(r"^(aria|data)-")
# String literals and dotted names need no parentheses inside `a + " " + b`
_SIMPLE_OPERAND_RE = re.compile(r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'|[\w$.]+")

CLASS_SEPARATOR = ' + " " + '


def normalize_key(name: str) -> str:
    """Map a template attribute name to its props key.

    Example:
        >>> normalize_key("for"), normalize_key("data-id"), normalize_key("tab-index")
        ('htmlFor', 'data-id', 'tabIndex')
    """
    if name == "for":
        return "htmlFor"
    if _PASSTHROUGH_RE.match(name):
        return name
    return camel_case(name)


def class_entries(value: str) -> list[str]:
    """Split one `class` attribute value into className operands."""
    stripped = value.strip()
    if stripped in _EMPTY_LITERALS:
        return []
    if stripped.startswith("["):
        try:
            items = parse_max(stripped, 1, closer="]")
        except InterpolationError:
            return [value]
        # `[a, b][0]` is an expression, not an array literal
        if items.end == len(stripped) - 1:
            return [item.strip() for item in split_top_level(items.src) if item.strip()]
    return [value]


def _class_operand(src: str) -> str:
    if _SIMPLE_OPERAND_RE.fullmatch(src):
        return src
    return f"({src})"


def compile_attrs(attrs: Sequence[Attribute]) -> str:
    """Compile static attributes to an object literal."""
    classes: list[str] = []
    entries: list[str] = []

    for attr in attrs:
        if attr.name == "class":
            classes.extend(class_entries(attr.value))
            continue
        entries.append(f"{quote(normalize_key(attr.name))}:{attr.value}")

    if classes:
        if len(classes) == 1:
            entries.append(f"className:{classes[0]}")
        else:
            joined = CLASS_SEPARATOR.join(_class_operand(c) for c in classes)
            entries.append(f"className:{joined}")

    return "{" + ",".join(entries) + "}"


def compile_attributes(
    attrs: Sequence[Attribute],
    spreads: Sequence[str],
    helpers: HelperEmitter,
) -> str:
    """Compile a tag's props expression.

    Args:
        attrs: Static attributes in source order.
        spreads: Attribute-spread expressions in source order.
        helpers: Emitter that receives the merge helper when needed.

    Returns:
        Object literal, merge-helper call, or `null`.
    """
    if spreads:
        args = list(spreads)
        if attrs:
            args.insert(0, compile_attrs(attrs))
        return sentinels.call(helpers.use_attrs(), *args)
    if attrs:
        return compile_attrs(attrs)
    return "null"
