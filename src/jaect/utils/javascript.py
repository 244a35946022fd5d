"""JavaScript source helpers shared by the generator stages."""

from __future__ import annotations

import json

# Valid inside JSON strings but line terminators inside ES5 string literals
_LINE_TERMINATORS = str.maketrans({"\u2028": "\\u2028", "\u2029": "\\u2029"})


def quote(text: str) -> str:
    """Quote `text` as a JavaScript string literal, like `JSON.stringify`.

    Example:
        >>> quote('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    return json.dumps(text, ensure_ascii=False).translate(_LINE_TERMINATORS)


def element_reference(name: str) -> str:
    """Source for a tag name as the first argument of an element call.

    Lower-case and hyphenated names are host elements and become string
    literals; anything else (`Foo`, `Foo.Bar`) references a component.
    """
    if name[:1].islower() or "-" in name:
        return quote(name)
    return name


def camel_case(name: str) -> str:
    """`foo-bar-baz` -> `fooBarBaz`; the first segment is left untouched."""
    head, *rest = name.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)
