"""Exceptions for the jaect compiler.

Exception Hierarchy:
CompileError (base)
├── UnsupportedConstructError   # doctype / mixin / filter nodes
├── InterpolationError          # unbalanced or empty #{} / !{} body
├── IntermediateSyntaxError     # generated source failed to parse
├── RectificationError          # sentinel could not be resolved
├── ConfigurationError          # invalid compile/compressor options
└── TreeLoadError               # malformed parser output

Compilation is all-or-nothing: none of these are caught inside the
package, so the first failure reaches the caller unchanged.

Example:
    ```
    J-GEN-001: Doctype nodes are not supported (line 1)
      Category: generator
    ```

"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Searchable error codes.

    Format: J-{CATEGORY}-{NUMBER}
    Categories: GEN (generator), PAR (intermediate parse), RCT (rectifier),
    CFG (configuration and input)
    """

    UNSUPPORTED_CONSTRUCT = "J-GEN-001"
    MALFORMED_INTERPOLATION = "J-GEN-002"
    INTERMEDIATE_SYNTAX = "J-PAR-001"
    RECTIFICATION_FAILED = "J-RCT-001"
    INVALID_OPTIONS = "J-CFG-001"
    INVALID_TREE = "J-CFG-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'generator', 'parser')."""
        prefix = self.value.split("-")[1]
        return {
            "GEN": "generator",
            "PAR": "parser",
            "RCT": "rectifier",
            "CFG": "configuration",
        }.get(prefix, "unknown")


class CompileError(Exception):
    """Base exception for all jaect compilation errors.

        >>> try:
        ...     Transform(tree).compile()
        ... except CompileError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: ErrorCode identifying the failure kind.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short diagnostic with its code and category."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        if self.code:
            return f"{header}\n  Category: {self.code.category}"
        return header


class UnsupportedConstructError(CompileError):
    """A node variant the generator permanently rejects."""

    code = ErrorCode.UNSUPPORTED_CONSTRUCT

    def __init__(self, node_type: str, lineno: int = 0):
        self.node_type = node_type
        self.lineno = lineno
        location = f" (line {lineno})" if lineno else ""
        super().__init__(f"{node_type} nodes are not supported{location}")


class InterpolationError(CompileError):
    """Embedded expression with unbalanced delimiters or no body.

    Attributes:
        source: The text being scanned.
        position: Offset where scanning gave up.
    """

    code = ErrorCode.MALFORMED_INTERPOLATION

    def __init__(self, message: str, source: str = "", position: int = -1):
        self.message = message
        self.source = source
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.source:
            return self.message
        pointer = " " * max(self.position, 0) + "^"
        return f"{self.message}\n   | {self.source}\n   | {pointer}"


class IntermediateSyntaxError(CompileError):
    """The generated intermediate source was not valid JavaScript.

    Usually caused by malformed code in a `-`/`=` line of the template;
    the full intermediate source is kept for debugging.
    """

    code = ErrorCode.INTERMEDIATE_SYNTAX

    def __init__(self, message: str, source: str):
        self.source = source
        super().__init__(message)


class RectificationError(CompileError):
    """The rectifier could not resolve a sentinel call."""

    code = ErrorCode.RECTIFICATION_FAILED


class ConfigurationError(CompileError):
    """Invalid compile or compressor options."""

    code = ErrorCode.INVALID_OPTIONS


class TreeLoadError(CompileError):
    """Parser output that does not describe a template tree."""

    code = ErrorCode.INVALID_TREE
