"""Pytest configuration and fixtures for jaect tests."""

from collections.abc import Callable

import pytest

from jaect import Transform
from jaect.compiler.state import CompilationState
from jaect.nodes import Block, Node, Tag, Text


@pytest.fixture
def state() -> CompilationState:
    """Create a fresh generator state."""
    return CompilationState()


@pytest.fixture
def paragraph() -> Block:
    """`p Hello #{name}` as a tree."""
    return Block([Tag("p", block=Block([Text("Hello #{name}")]))])


@pytest.fixture
def generate() -> Callable[..., str]:
    """Generate intermediate source for the given root-level nodes."""

    def _generate(*nodes: Node) -> str:
        return Transform(Block(nodes)).generate()

    return _generate


def squash(js: str) -> str:
    """Drop all whitespace so printer layout does not matter."""
    return "".join(js.split())


def assert_contains(js: str, *expected_parts: str) -> None:
    """Assert compiled output contains all parts, ignoring whitespace.

    Args:
        js: The compiled JavaScript.
        expected_parts: Fragments that should all be present.
    """
    actual = squash(js)
    for part in expected_parts:
        assert squash(part) in actual, (
            f"Compiled output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {js!r}"
        )
