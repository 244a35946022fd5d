"""Printing of rectified programs to final source text."""

from __future__ import annotations

from collections.abc import Sequence

from calmjs.parse import asttypes
from calmjs.parse.unparsers.es5 import minify_print, pretty_print

from jaect.config import CompileOptions

BEAUTIFY_INDENT = "  "


def serialize(tree: asttypes.Node, options: CompileOptions) -> str:
    """Print `tree` with the printer `options` selects.

    - minify: `minify_print`, names kept (no obfuscation)
    - beautify: `pretty_print` with two-space indentation
    - otherwise: `pretty_print` with `options.indent` spaces
    """
    if options.minify:
        return minify_print(tree)
    if options.beautify:
        return pretty_print(tree, indent_str=BEAUTIFY_INDENT)
    return pretty_print(tree, indent_str=" " * options.indent)


def assemble(main: str, helpers: Sequence[str]) -> str:
    """Main program followed by each helper source, newline-joined."""
    return "\n".join([main, *helpers])
