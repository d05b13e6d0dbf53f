"""Pytest configuration and fixtures for jsxtv tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from jsxtv import Diagnostics, TransformConfig, generate, parse_source, transform
from jsxtv.nodes.base import Node


@pytest.fixture
def diagnostics() -> Diagnostics:
    """A fresh diagnostics sink."""
    return Diagnostics()


@pytest.fixture
def rewrite(diagnostics: Diagnostics) -> Callable[..., str]:
    """Parse, transform and print source, returning the printed code.

    Diagnostics of the run land in the ``diagnostics`` fixture.
    """

    def run(source: str, config: TransformConfig | None = None) -> str:
        tree = parse_source(source)
        transform(tree, config or TransformConfig(), diagnostics)
        return generate(tree)

    return run


@pytest.fixture
def rewrite_tree(diagnostics: Diagnostics) -> Callable[..., Node]:
    """Parse and transform source, returning the edited tree."""

    def run(source: str, config: TransformConfig | None = None) -> Node:
        tree = parse_source(source)
        transform(tree, config or TransformConfig(), diagnostics)
        return tree

    return run
