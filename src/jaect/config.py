"""Configuration values for compilation and compression.

Both option sets are frozen dataclasses: a single default instance is
shared by every `Transform` and is safe to read from any thread.

Example:
    >>> from jaect.config import CompileOptions
    >>> Transform(tree).compile(CompileOptions(beautify=True))
    >>> Transform(tree).compile(minify=True)

"""

from __future__ import annotations

from dataclasses import dataclass, fields

from jaect.exceptions import ConfigurationError

# Transforms that may drop, merge or reorder evaluation. Sentinel-derived
# calls carry side effects, so none of these may ever run.
UNSAFE_TRANSFORMS: frozenset[str] = frozenset(
    {
        "booleans",
        "dead_code",
        "sequences",
        "side_effects",
        "unused",
    }
)


@dataclass(frozen=True, slots=True)
class CompressorOptions:
    """Restricted transform configuration for the compressor.

    Attributes:
        booleans: Rewrite boolean expressions (always disabled).
        dead_code: Drop unreachable code (always disabled).
        hoist_vars: Merge every `var` in a function scope into one
            declaration at the top of that scope.
        sequences: Join statements into comma sequences (always disabled).
        side_effects: Drop expressions without effects (always disabled).
        unused: Drop unreferenced declarations (always disabled).
        warnings: Log skipped work at WARNING instead of DEBUG.
    """

    booleans: bool = False
    dead_code: bool = False
    hoist_vars: bool = True
    sequences: bool = False
    side_effects: bool = False
    unused: bool = False
    warnings: bool = False

    def __post_init__(self) -> None:
        enabled = sorted(
            f.name for f in fields(self) if f.name in UNSAFE_TRANSFORMS and getattr(self, f.name)
        )
        if enabled:
            raise ConfigurationError(
                f"Compressor transforms may alter sentinel-derived calls: {', '.join(enabled)}"
            )


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """Output options for `Transform.compile()`.

    Attributes:
        beautify: Print the compressed tree with two-space indentation.
        minify: Print the compressed tree with the minifying printer.
        indent: Indentation width for plain output.
    """

    beautify: bool = False
    minify: bool = False
    indent: int = 4

    def __post_init__(self) -> None:
        if self.beautify and self.minify:
            raise ConfigurationError("beautify and minify are mutually exclusive")
        if self.indent < 0:
            raise ConfigurationError(f"indent must be non-negative, got {self.indent}")

    @property
    def compressed(self) -> bool:
        return self.beautify or self.minify


DEFAULT_COMPRESSOR_OPTIONS = CompressorOptions()
DEFAULT_COMPILE_OPTIONS = CompileOptions()
