"""jaect — compile Jade-style template trees to React render functions.

The template parser is external; jaect consumes its tree (as node
dataclasses or as the parser's JSON mapping form) and produces ES5
source for a `render(block)` function that builds elements with
`React.createElement`.

Quickstart:
    >>> from jaect import compile_tree
    >>> js = compile_tree({
    ...     "type": "Block",
    ...     "nodes": [{"type": "Tag", "name": "p", "block": {
    ...         "type": "Block", "nodes": [{"type": "Text", "val": "Hi #{name}"}],
    ...     }}],
    ... })

Step by step:
    >>> from jaect import Transform
    >>> transform = Transform(tree)
    >>> transform.generate()          # intermediate source with sentinels
    >>> transform.rectify()           # calmjs.parse AST of the render function
    >>> transform.compile(minify=True)

Architecture:
Template tree → generate → intermediate JS → parse → rectify → (compress) → print

"""

from jaect.compiler import Compressor, Rectifier, Transform, compile_tree
from jaect.config import (
    DEFAULT_COMPILE_OPTIONS,
    DEFAULT_COMPRESSOR_OPTIONS,
    CompileOptions,
    CompressorOptions,
)
from jaect.exceptions import (
    CompileError,
    ConfigurationError,
    ErrorCode,
    IntermediateSyntaxError,
    InterpolationError,
    RectificationError,
    TreeLoadError,
    UnsupportedConstructError,
)
from jaect.nodes import load_tree

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_COMPILE_OPTIONS",
    "DEFAULT_COMPRESSOR_OPTIONS",
    "CompileError",
    "CompileOptions",
    "Compressor",
    "CompressorOptions",
    "ConfigurationError",
    "ErrorCode",
    "IntermediateSyntaxError",
    "InterpolationError",
    "RectificationError",
    "Rectifier",
    "Transform",
    "TreeLoadError",
    "UnsupportedConstructError",
    "__version__",
    "compile_tree",
    "load_tree",
]
