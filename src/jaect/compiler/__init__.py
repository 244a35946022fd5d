"""jaect compiler: template tree to JavaScript.

Pipeline:
    TemplateNode → Transform.generate() → intermediate source
                 → Transform.rectify()  → render-function AST
                 → Transform.compile()  → JavaScript text (+ helpers)

"""

from __future__ import annotations

from jaect.compiler.compressor import Compressor
from jaect.compiler.core import Transform, compile_tree
from jaect.compiler.rectifier import Rectifier, SupportsRectify

__all__ = [
    "Compressor",
    "Rectifier",
    "SupportsRectify",
    "Transform",
    "compile_tree",
]
