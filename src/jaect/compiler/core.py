"""jaect Compiler Core — the Transform class.

Transform turns a template tree into JavaScript in three memoized stages:

1. **generate**: walk the tree and emit intermediate source in which
   element construction and output are sentinel calls
   (`ǃDOM＿`, `ǃtext＿`, `ǃunescape＿`)
2. **rectify**: parse the intermediate source with `calmjs.parse` and let
   the rectifier rewrite sentinel calls into their final form
3. **compile**: print the rectified program (optionally after the
   restricted compressor) and append the runtime helper sources

Design Principles:
1. **Fragment buffer**: emission appends to a list, joined once at the end
2. **Staged resolution**: sentinel meaning is decided on a real syntax
   tree, not while emitting text
3. **All-or-nothing**: a failing stage leaves no partial result behind
4. **Exhaustive dispatch**: `match` over the closed node union

Example:
    >>> from jaect import Transform
    >>> from jaect.nodes import Block, Tag, Text
    >>> tree = Block([Tag("p", block=Block([Text("Hello #{name}")]))])
    >>> transform = Transform(tree)
    >>> print(transform.generate())
    ǃDOM＿("p",null);
    {
    ǃtext＿("Hello ");
    ǃtext＿(name);
    }
    >>> js = transform.compile()

"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from typing import Any, assert_never

from calmjs.parse import asttypes, es5
from calmjs.parse.exceptions import ECMASyntaxError

from jaect.compiler.compressor import Compressor
from jaect.compiler.rectifier import Rectifier, SupportsRectify
from jaect.compiler.serializer import assemble, serialize
from jaect.compiler.state import CompilationState
from jaect.compiler.statements import StatementCompilationMixin
from jaect.config import (
    DEFAULT_COMPILE_OPTIONS,
    DEFAULT_COMPRESSOR_OPTIONS,
    CompileOptions,
    CompressorOptions,
)
from jaect.exceptions import ConfigurationError, IntermediateSyntaxError
from jaect.nodes import (
    Block,
    BlockComment,
    Case,
    Code,
    Comment,
    Doctype,
    Each,
    Filter,
    Literal,
    Mixin,
    MixinBlock,
    Tag,
    TemplateNode,
    Text,
    When,
    load_tree,
)

logger = logging.getLogger(__name__)

type RectifierFactory = Callable[[asttypes.Node], SupportsRectify]


class Transform(StatementCompilationMixin):
    """Compile one template tree to JavaScript.

    Each stage runs at most once per instance; calling `compile()` with
    different options reuses the generated and rectified results.

    Attributes:
        _node: Root template node
        _rectifier: Factory called with the parsed intermediate program
        _compressor: Restricted compressor used by `uglify()`
        _state: CompilationState, only while `generate()` runs
        _intermediate: Memoized intermediate source
        _helpers: Helper sources referenced by the intermediate source
        _rectified: Memoized rectified program
        _ugly: Memoized compressed program

    """

    __slots__ = (
        "_compressor",
        "_helpers",
        "_intermediate",
        "_node",
        "_rectified",
        "_rectifier",
        "_state",
        "_ugly",
    )

    def __init__(
        self,
        node: TemplateNode | Mapping[str, Any],
        *,
        rectifier: RectifierFactory = Rectifier,
        compressor_options: CompressorOptions = DEFAULT_COMPRESSOR_OPTIONS,
    ):
        self._node = load_tree(node) if isinstance(node, Mapping) else node
        self._rectifier = rectifier
        self._compressor = Compressor(compressor_options)
        self._state: CompilationState | None = None
        self._intermediate: str | None = None
        self._helpers: tuple[str, ...] = ()
        self._rectified: asttypes.Node | None = None
        self._ugly: asttypes.Node | None = None

    @property
    def helpers(self) -> tuple[str, ...]:
        """Runtime helper sources, in first-use order (after `generate()`)."""
        return self._helpers

    def compile(self, options: CompileOptions | None = None, **overrides: Any) -> str:
        """Compile to final JavaScript source.

        Args:
            options: Output options; `DEFAULT_COMPILE_OPTIONS` when omitted.
            **overrides: Individual `CompileOptions` fields, e.g.
                `beautify=True`.

        Returns:
            The printed program followed by the helper sources.

        Raises:
            ConfigurationError: Unknown or conflicting options.
            CompileError: Any failure of the generate or rectify stages.
        """
        opts = options or DEFAULT_COMPILE_OPTIONS
        if overrides:
            try:
                opts = dataclasses.replace(opts, **overrides)
            except TypeError as exc:
                raise ConfigurationError(f"Invalid compile option: {exc}") from exc

        tree = self.uglify() if opts.compressed else self.rectify()
        return assemble(serialize(tree, opts), self._helpers)

    def generate(self) -> str:
        """Generate the intermediate source (memoized).

        A fresh CompilationState is used for the run and dropped afterwards;
        on failure nothing is memoized.
        """
        if self._intermediate is not None:
            return self._intermediate

        state = CompilationState()
        self._state = state
        try:
            self._visit(self._node)
        finally:
            self._state = None

        self._intermediate = state.source()
        self._helpers = tuple(state.helpers.sources)
        logger.debug(
            f"Generated {len(state.buf)} fragments, {len(self._helpers)} helper(s)"
        )
        return self._intermediate

    def rectify(self) -> asttypes.Node:
        """Parse the intermediate source and resolve sentinels (memoized).

        Raises:
            IntermediateSyntaxError: The intermediate source does not parse,
                usually because of malformed code in the template.
            RectificationError: Raised by the rectifier, unchanged.
        """
        if self._rectified is not None:
            return self._rectified

        source = self.generate()
        try:
            program = es5(source)
        except ECMASyntaxError as exc:
            raise IntermediateSyntaxError(
                f"Generated source failed to parse: {exc}", source
            ) from exc

        self._rectified = self._rectifier(program).rectify()
        logger.debug("Rectified intermediate program")
        return self._rectified

    def uglify(self) -> asttypes.Node:
        """Compress the rectified program (memoized)."""
        if self._ugly is None:
            self._ugly = self._compressor.compress(self.rectify())
            logger.debug("Compressed rectified program")
        return self._ugly

    def _visit(self, node: TemplateNode) -> None:
        """Dispatch `node` to its handler one nesting level deeper."""
        state = self._state
        if state is None:
            raise RuntimeError("_visit called outside generate()")
        state.depth += 1
        match node:
            case Block():
                for child in node.nodes:
                    self._visit(child)
            case Tag():
                self._visit_tag(node)
            case Text():
                self._visit_text(node)
            case Code():
                self._visit_code(node)
            case Case():
                self._visit_case(node)
            case When():
                self._visit_when(node)
            case Each():
                state.emit(self._visit_each(node), ";\n")
            case MixinBlock():
                self._visit_mixin_block(node)
            case Comment():
                self._visit_comment(node)
            case BlockComment():
                self._visit_block_comment(node)
            case Literal():
                self._visit_literal(node)
            case Doctype():
                self._visit_doctype(node)
            case Mixin():
                self._visit_mixin(node)
            case Filter():
                self._visit_filter(node)
            case _:
                assert_never(node)
        state.depth -= 1


def compile_tree(
    node: TemplateNode | Mapping[str, Any],
    options: CompileOptions | None = None,
    **overrides: Any,
) -> str:
    """Compile a template tree (or the parser's mapping form) in one call."""
    return Transform(node).compile(options, **overrides)
