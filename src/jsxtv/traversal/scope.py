"""Collision-free identifier generation."""

from __future__ import annotations

import re

from jsxtv.nodes import builders
from jsxtv.nodes.base import Node, walk

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_$]")


class Scope:
    """Names in use under a tree, plus the names generated against it.

    Generated names follow ``_<hint>``, ``_<hint>2``, ``_<hint>3``...
    and are never handed out twice, so every allocation made against the
    same scope is distinct from every other one and from every identifier
    already written in the tree.

    """

    __slots__ = ("_generated", "_names")

    def __init__(self, root: Node | None = None) -> None:
        self._names: set[str] = set()
        self._generated: list[str] = []
        if root is not None:
            self.collect(root)

    def collect(self, root: Node) -> None:
        """Record every identifier written under ``root``."""
        for node in walk(root):
            if node["type"] in ("Identifier", "JSXIdentifier"):
                self._names.add(node["name"])

    def has_name(self, name: str) -> bool:
        return name in self._names

    @property
    def generated(self) -> tuple[str, ...]:
        return tuple(self._generated)

    def generate_uid(self, hint: str = "uid") -> str:
        base = _NON_IDENTIFIER.sub("", hint).lstrip("_").rstrip("0123456789") or "ref"
        counter = 1
        while True:
            name = f"_{base}" if counter == 1 else f"_{base}{counter}"
            if name not in self._names:
                break
            counter += 1
        self._names.add(name)
        self._generated.append(name)
        return name

    def generate_uid_identifier(self, hint: str = "uid") -> Node:
        return builders.identifier(self.generate_uid(hint))
