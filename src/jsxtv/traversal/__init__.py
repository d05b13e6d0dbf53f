"""Tree traversal for jsxtv: node paths, visitors and scopes."""

from jsxtv.traversal.path import NodePath
from jsxtv.traversal.scope import Scope
from jsxtv.traversal.visitor import Traversal, Visitor, traverse

__all__ = [
    "NodePath",
    "Scope",
    "Traversal",
    "Visitor",
    "traverse",
]
