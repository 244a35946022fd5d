"""Template tree nodes consumed by the jaect generator.

The tree is produced by an external template parser. Every variant is a
frozen, slotted dataclass; `TemplateNode` is the closed union the
generator dispatches on.

"""

from __future__ import annotations

from jaect.nodes.base import Block, Node
from jaect.nodes.control_flow import Case, Code, Each, MixinBlock, When
from jaect.nodes.elements import Attribute, BlockComment, Comment, Literal, Tag, Text
from jaect.nodes.loader import load_tree
from jaect.nodes.unsupported import Doctype, Filter, Mixin

type TemplateNode = (
    Block
    | Tag
    | Text
    | Code
    | Case
    | When
    | Each
    | MixinBlock
    | Comment
    | BlockComment
    | Literal
    | Doctype
    | Mixin
    | Filter
)

__all__ = [
    "Attribute",
    "Block",
    "BlockComment",
    "Case",
    "Code",
    "Comment",
    "Doctype",
    "Each",
    "Filter",
    "Literal",
    "Mixin",
    "MixinBlock",
    "Node",
    "Tag",
    "TemplateNode",
    "Text",
    "When",
    "load_tree",
]
