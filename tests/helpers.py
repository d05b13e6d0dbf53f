"""Assertion and tree helpers shared by jsxtv tests."""

from __future__ import annotations

from jsxtv.nodes.base import Node, walk
from jsxtv.nodes.predicates import array_to_data


def normalize(code: str) -> str:
    """Collapse every run of whitespace to a single space."""
    return " ".join(code.split())


def assert_contains(code: str, *expected_parts: str) -> None:
    """Assert printed code contains all expected parts, ignoring whitespace layout.

    Args:
        code: The printed program.
        expected_parts: Snippets that should all be present.
    """
    actual = normalize(code)
    for part in expected_parts:
        assert normalize(part) in actual, (
            f"Output missing expected content:\n  Missing: {part!r}\n  Actual: {actual!r}"
        )


def assert_not_contains(code: str, *unexpected_parts: str) -> None:
    actual = normalize(code)
    for part in unexpected_parts:
        assert normalize(part) not in actual, (
            f"Output has unexpected content:\n  Found: {part!r}\n  Actual: {actual!r}"
        )


def find_nodes(tree: Node, node_type: str) -> list[Node]:
    return [node for node in walk(tree) if node["type"] == node_type]


def flatten_concatenation(node: Node) -> list[Node]:
    """Split a left-nested ``a + b + c`` chain into its parts."""
    parts: list[Node] = []
    while node["type"] == "BinaryExpression" and node["operator"] == "+":
        parts.append(node["right"])
        node = node["left"]
    parts.append(node)
    return list(reversed(parts))


def marker_args(call: Node) -> list[object]:
    """Static values of a marker call's arguments (the context argument excluded).

    ``getLanguageList('open', 'tags', _ctx)`` gives ``['open', 'tags']``;
    arrays and objects become lists and dicts.
    """
    return [array_to_data(arg) for arg in call["arguments"][:-1]]
