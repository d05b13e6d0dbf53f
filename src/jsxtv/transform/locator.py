"""Locate the component a descriptor statement belongs to."""

from __future__ import annotations

from jsxtv.nodes.base import Node
from jsxtv.nodes.predicates import is_function, is_identifier
from jsxtv.traversal import NodePath, traverse


def declared_name(node: Node) -> str | None:
    """Name bound by a variable or function declaration (first declarator)."""
    if node["type"] == "FunctionDeclaration":
        target = node.get("id")
    else:
        declarations = node.get("declarations") or ()
        target = declarations[0].get("id") if declarations else None
    return target["name"] if is_identifier(target) else None


def find_component(path: NodePath, name: str) -> NodePath | None:
    """Find the first declaration under ``path`` binding ``name``.

    Declarations are not searched below a matched declaration. Function
    declarations (``function Card() {}``) are recognised alongside
    variable declarations (``const Card = () => ...``).
    """
    found: list[NodePath] = []

    def visit_variable(declaration_path: NodePath) -> None:
        declaration_path.skip()
        if not found and declared_name(declaration_path.node) == name:
            found.append(declaration_path)

    def visit_function(declaration_path: NodePath) -> None:
        if found:
            declaration_path.skip()
        elif declared_name(declaration_path.node) == name:
            declaration_path.skip()
            found.append(declaration_path)

    traverse(path, {"VariableDeclaration": visit_variable, "FunctionDeclaration": visit_function})
    return found[0] if found else None


def component_function(node: Node) -> Node | None:
    """Return the function node defining a located component.

    None when a variable declaration's initialiser is not a function.
    """
    if node["type"] == "FunctionDeclaration":
        return node
    init = node["declarations"][0].get("init")
    return init if is_function(init) else None
