"""Build a jaect tree from the template parser's JSON-shaped output.

The upstream parser serializes its tree as nested mappings keyed by
``type``; this module maps them one-to-one onto the frozen dataclasses in
:mod:`jaect.nodes`:

    >>> load_tree({"type": "Block", "nodes": [{"type": "Text", "val": "hi"}]})
    Block(lineno=0, nodes=(Text(lineno=0, value='hi'),))

Unknown node types and missing required fields raise
:class:`~jaect.exceptions.TreeLoadError`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from jaect.exceptions import TreeLoadError
from jaect.nodes.base import Block, Node
from jaect.nodes.control_flow import Case, Code, Each, MixinBlock, When
from jaect.nodes.elements import Attribute, BlockComment, Comment, Literal, Tag, Text
from jaect.nodes.unsupported import Doctype, Filter, Mixin


def _required(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise TreeLoadError(
            f"{data.get('type', '<untyped>')} node is missing required field {key!r}"
        ) from None


def _line(data: Mapping[str, Any]) -> int:
    return int(data.get("line") or 0)


def _attr_value(value: Any) -> str:
    # Boolean attributes (`input(checked)`) arrive as JSON booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _block(data: Mapping[str, Any] | None) -> Block | None:
    if data is None:
        return None
    node = load_tree(data)
    if not isinstance(node, Block):
        raise TreeLoadError(f"Expected a Block, got {type(node).__name__}")
    return node


def _load_block(data: Mapping[str, Any]) -> Block:
    return Block(
        nodes=tuple(load_tree(child) for child in data.get("nodes") or ()),
        lineno=_line(data),
    )


def _load_tag(data: Mapping[str, Any]) -> Tag:
    attrs = [
        Attribute(name=_required(attr, "name"), value=_attr_value(_required(attr, "val")))
        for attr in data.get("attrs") or ()
    ]
    attrs.extend(
        Attribute(name="&attributes", value=expr, spread=True)
        for expr in data.get("attributeBlocks") or ()
    )
    code = data.get("code")
    return Tag(
        name=_required(data, "name"),
        attrs=tuple(attrs),
        block=_block(data.get("block")),
        code=_load_code(code) if code else None,
        lineno=_line(data),
    )


def _load_code(data: Mapping[str, Any]) -> Code:
    return Code(
        value=_required(data, "val"),
        buffer=bool(data.get("buffer")),
        escape=bool(data.get("escape", True)),
        block=_block(data.get("block")),
        lineno=_line(data),
    )


def _load_each(data: Mapping[str, Any]) -> Each:
    return Each(
        obj=_required(data, "obj"),
        val=_required(data, "val"),
        key=data.get("key"),
        block=_block(data.get("block")),
        alternative=_block(data.get("alternative")),
        lineno=_line(data),
    )


_LOADERS: dict[str, Callable[[Mapping[str, Any]], Node]] = {
    "Block": _load_block,
    "Tag": _load_tag,
    "Code": _load_code,
    "Each": _load_each,
    "Text": lambda d: Text(value=d.get("val") or "", lineno=_line(d)),
    "Literal": lambda d: Literal(value=_required(d, "str"), lineno=_line(d)),
    "Case": lambda d: Case(
        expr=_required(d, "expr"), block=_block(_required(d, "block")), lineno=_line(d)
    ),
    "When": lambda d: When(
        expr=_required(d, "expr"), block=_block(d.get("block")), lineno=_line(d)
    ),
    "MixinBlock": lambda d: MixinBlock(lineno=_line(d)),
    "Comment": lambda d: Comment(
        value=d.get("val") or "", buffer=bool(d.get("buffer")), lineno=_line(d)
    ),
    "BlockComment": lambda d: BlockComment(
        value=d.get("val") or "",
        block=_block(d.get("block")),
        buffer=bool(d.get("buffer")),
        lineno=_line(d),
    ),
    "Doctype": lambda d: Doctype(value=d.get("val") or "", lineno=_line(d)),
    "Mixin": lambda d: Mixin(
        name=_required(d, "name"),
        args=d.get("args"),
        block=_block(d.get("block")),
        call=bool(d.get("call")),
        lineno=_line(d),
    ),
    "Filter": lambda d: Filter(
        name=_required(d, "name"), block=_block(d.get("block")), lineno=_line(d)
    ),
}


def load_tree(data: Mapping[str, Any]) -> Node:
    """Convert one parser-output mapping (and its children) into nodes."""
    node_type = data.get("type")
    loader = _LOADERS.get(node_type)  # type: ignore[arg-type]
    if loader is None:
        raise TreeLoadError(f"Unknown template node type: {node_type!r}")
    return loader(data)
