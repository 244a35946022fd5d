"""Template trees of increasing size, in the parser's mapping form."""

from __future__ import annotations

from typing import Any


def _text(value: str) -> dict[str, Any]:
    return {"type": "Text", "val": value}


def _tag(name: str, *children: dict[str, Any], **attrs: str) -> dict[str, Any]:
    return {
        "type": "Tag",
        "name": name,
        "attrs": [{"name": key.rstrip("_").replace("_", "-"), "val": val} for key, val in attrs.items()],
        "block": {"type": "Block", "nodes": list(children)},
    }


def _block(*nodes: dict[str, Any]) -> dict[str, Any]:
    return {"type": "Block", "nodes": list(nodes)}


MINIMAL = _block(_text("#{name}"))

SMALL = _block(
    _tag(
        "ul",
        {
            "type": "Each",
            "obj": "items",
            "val": "item",
            "block": _block(_tag("li", _text("#{item.name}"))),
        },
    )
)

_POST = _tag(
    "article",
    _tag("h2", _text("#{post.title}")),
    _tag("p", {"type": "Code", "val": "post.content", "buffer": True}),
    class_='"post"',
)

MEDIUM = _block(
    {
        "type": "Code",
        "val": "if (user)",
        "block": _block(
            _tag(
                "div",
                _tag("h1", _text("#{user.name}")),
                _tag("p", _text("#{user.bio || 'No bio'}")),
                {"type": "Each", "obj": "user.posts", "val": "post", "block": _block(_POST)},
                class_='"profile"',
                data_id="user.id",
            )
        ),
    },
    {"type": "Code", "val": "else", "block": _block(_tag("p", _text("Please log in.")))},
)

LARGE = _block(*(MEDIUM["nodes"] * 20))
