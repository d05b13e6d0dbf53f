"""Depth-first traversal with visitors keyed by node type.

Visitors are called on entry to each node. They may edit the tree
through the ``NodePath`` they receive:

- ``replace_with`` on entry: the replacement is visited instead.
- ``replace_with`` on an ancestor: the walk of the stale subtree stops and
  the replacement is visited from the ancestor's position.
- ``insert_before`` / ``insert_after``: inserted siblings are not visited.
- ``remove`` / ``skip``: the node's children are not visited.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TypeAlias

from jsxtv.nodes.base import Node, child_fields, is_node
from jsxtv.traversal.path import NodePath

Visitor: TypeAlias = Callable[[NodePath], None]


class Traversal:
    """Walk a tree calling registered visitors.

    Example:
            >>> names = []
            >>> Traversal({"Identifier": lambda p: names.append(p.node["name"])}).run(root)

    """

    __slots__ = ("_visitors",)

    def __init__(self, visitors: Mapping[str, Visitor | Sequence[Visitor]]) -> None:
        self._visitors: dict[str, tuple[Visitor, ...]] = {}
        for node_type, handler in visitors.items():
            if callable(handler):
                self._visitors[node_type] = (handler,)
            else:
                self._visitors[node_type] = tuple(handler)

    def run(self, path: NodePath) -> None:
        """Visit every descendant of ``path.node`` (not the node itself)."""
        self._visit_children(path)

    def _enter(self, path: NodePath) -> None:
        node = path.node
        for handler in self._visitors.get(node["type"], ()):
            handler(path)
            if path.removed or path.node is not node:
                return

    def _visit(self, path: NodePath) -> None:
        while True:
            node = path.node
            path.reset_skip()
            self._enter(path)
            if path.removed or path.should_skip or not is_node(path.node):
                return
            if path.node is not node:
                continue
            self._visit_children(path)
            if path.removed or path.node is node or not path.is_attached():
                return

    def _visit_children(self, path: NodePath) -> None:
        node = path.node
        for field in child_fields(node):
            value = node.get(field)
            if isinstance(value, list):
                index = 0
                while index < len(value):
                    child = value[index]
                    if not is_node(child):
                        index += 1
                        continue
                    child_path = NodePath(child, path, value, index, field)
                    self._visit(child_path)
                    if _interrupted(path, node):
                        return
                    index = child_path.key
                    if not child_path.removed:
                        index += 1 + child_path.inserted_after
            elif is_node(value):
                self._visit(NodePath(value, path, node, field))
                if _interrupted(path, node):
                    return


def _interrupted(path: NodePath, node: Node) -> bool:
    """The subtree being walked was replaced or detached by a visitor."""
    return path.removed or path.node is not node or not path.is_attached()


def traverse(path: NodePath, visitors: Mapping[str, Visitor | Sequence[Visitor]]) -> None:
    """Visit the descendants of ``path`` with ``visitors``."""
    Traversal(visitors).run(path)
