"""Node paths: a node plus its position in the tree.

A ``NodePath`` links a node to its parent path and to the container that
holds it (the parent node itself, or one of the parent's child lists).
All tree edits made during a traversal go through paths so the walker can
tell when the part of the tree it is standing in has been replaced.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from jsxtv.nodes.base import Node


class NodePath:
    """Position of a node inside a syntax tree.

    Attributes:
        node: The node at this position.
        parent_path: Path of the parent node (None for the root).
        container: The parent node (for single-child fields) or the list
            holding the node (for list fields).
        key: Field name in the parent node, or index in the container list.
        list_key: Field name of the container list, None for single fields.

    """

    __slots__ = (
        "container",
        "inserted_after",
        "key",
        "list_key",
        "node",
        "parent_path",
        "removed",
        "_skip",
    )

    def __init__(
        self,
        node: Node,
        parent_path: NodePath | None = None,
        container: Node | list[Any] | None = None,
        key: str | int | None = None,
        list_key: str | None = None,
    ) -> None:
        self.node = node
        self.parent_path = parent_path
        self.container = container
        self.key = key
        self.list_key = list_key
        self.removed = False
        self.inserted_after = 0
        self._skip = False

    def __repr__(self) -> str:
        return f"<NodePath {self.node.get('type')} at {self.field!r}>"

    @property
    def parent(self) -> Node | None:
        return self.parent_path.node if self.parent_path is not None else None

    @property
    def field(self) -> str | None:
        """Name of the parent field holding this node."""
        if self.list_key is not None:
            return self.list_key
        return self.key if isinstance(self.key, str) else None

    @property
    def in_list(self) -> bool:
        return self.list_key is not None

    @property
    def should_skip(self) -> bool:
        return self._skip

    def skip(self) -> None:
        """Do not descend into this node's children."""
        self._skip = True

    def reset_skip(self) -> None:
        self._skip = False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def replace_with(self, node: Node) -> None:
        """Put ``node`` in this position. The path now points at it."""
        if self.container is None:
            raise ValueError("cannot replace the root of a traversal")
        self.container[self.key] = node  # type: ignore[index]
        self.node = node

    def insert_before(self, *nodes: Node) -> None:
        """Insert sibling nodes directly before this one."""
        container = self._require_list()
        index = self.key
        container[index:index] = nodes
        self.key = index + len(nodes)

    def insert_after(self, *nodes: Node) -> None:
        """Insert sibling nodes directly after this one."""
        container = self._require_list()
        index = self.key + 1
        container[index:index] = nodes
        self.inserted_after += len(nodes)

    def remove(self) -> None:
        """Detach this node from the tree."""
        if self.container is None:
            raise ValueError("cannot remove the root of a traversal")
        if self.in_list:
            del self.container[self.key]  # type: ignore[arg-type]
        else:
            self.container[self.key] = None  # type: ignore[index]
        self.removed = True

    def _require_list(self) -> list[Any]:
        if not self.in_list:
            raise ValueError(f"{self.node.get('type')} is not held in a list of siblings")
        return self.container  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_attached(self) -> bool:
        """Return True while every link from here to the root is intact.

        A path stops being attached when it or one of its ancestors is
        removed or replaced by another node.
        """
        path = self
        while path.parent_path is not None:
            parent = path.parent_path
            if path.in_list:
                holder = parent.node.get(path.list_key)
                if holder is not path.container:
                    return False
                index = path.key
                if not 0 <= index < len(holder) or holder[index] is not path.node:
                    return False
            else:
                if parent.node is not path.container:
                    return False
                if parent.node.get(path.key) is not path.node:
                    return False
            path = parent
        return True

    def ancestors(self) -> Iterator[NodePath]:
        """Yield parent paths from the nearest outwards."""
        path = self.parent_path
        while path is not None:
            yield path
            path = path.parent_path

    def find_ancestor(
        self,
        predicate: Callable[[Node], bool],
        max_depth: int | None = None,
    ) -> NodePath | None:
        """Return the nearest ancestor path whose node satisfies ``predicate``.

        Args:
            predicate: Test applied to each ancestor node.
            max_depth: Number of levels to search (1 means the parent only).
                None searches up to the root.
        """
        for depth, path in enumerate(self.ancestors(), start=1):
            if max_depth is not None and depth > max_depth:
                return None
            if predicate(path.node):
                return path
        return None
