"""Node constructors for ESTree + JSX trees.

Every builder returns a fresh ``dict``; builders never share child nodes
they did not receive as arguments. Literals are emitted in the ESTree
dialect (``Literal``), which both esprima and the printer understand.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal as LiteralType

from jsxtv.nodes.base import Node

VariableKind = LiteralType["var", "let", "const"]


def identifier(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def string_literal(value: str) -> Node:
    return {"type": "Literal", "value": value}


def numeric_literal(value: int | float) -> Node:
    return {"type": "Literal", "value": value}


def null_literal() -> Node:
    return {"type": "Literal", "value": None, "raw": "null"}


def binary_expression(operator: str, left: Node, right: Node) -> Node:
    return {"type": "BinaryExpression", "operator": operator, "left": left, "right": right}


def logical_expression(operator: str, left: Node, right: Node) -> Node:
    return {"type": "LogicalExpression", "operator": operator, "left": left, "right": right}


def unary_expression(operator: str, argument: Node) -> Node:
    return {"type": "UnaryExpression", "operator": operator, "argument": argument, "prefix": True}


def conditional_expression(test: Node, consequent: Node, alternate: Node) -> Node:
    return {
        "type": "ConditionalExpression",
        "test": test,
        "consequent": consequent,
        "alternate": alternate,
    }


def member_expression(obj: Node, prop: Node, *, computed: bool = False) -> Node:
    return {"type": "MemberExpression", "object": obj, "property": prop, "computed": computed}


def call_expression(callee: Node, arguments: Sequence[Node] = ()) -> Node:
    return {"type": "CallExpression", "callee": callee, "arguments": list(arguments)}


def array_expression(elements: Sequence[Node] = ()) -> Node:
    return {"type": "ArrayExpression", "elements": list(elements)}


def object_expression(properties: Sequence[Node] = ()) -> Node:
    return {"type": "ObjectExpression", "properties": list(properties)}


def object_property(key: Node, value: Node, *, shorthand: bool = False) -> Node:
    return {
        "type": "Property",
        "key": key,
        "value": value,
        "kind": "init",
        "computed": False,
        "method": False,
        "shorthand": shorthand,
    }


def object_pattern(properties: Sequence[Node] = ()) -> Node:
    return {"type": "ObjectPattern", "properties": list(properties)}


def variable_declarator(target: Node, init: Node | None = None) -> Node:
    return {"type": "VariableDeclarator", "id": target, "init": init}


def variable_declaration(kind: VariableKind, declarations: Sequence[Node]) -> Node:
    return {"type": "VariableDeclaration", "kind": kind, "declarations": list(declarations)}


def return_statement(argument: Node | None) -> Node:
    return {"type": "ReturnStatement", "argument": argument}


def block_statement(body: Sequence[Node] = ()) -> Node:
    return {"type": "BlockStatement", "body": list(body)}


def jsx_identifier(name: str) -> Node:
    return {"type": "JSXIdentifier", "name": name}


def jsx_expression_container(expression: Node) -> Node:
    return {"type": "JSXExpressionContainer", "expression": expression}


def jsx_attribute(name: Node, value: Node | None = None) -> Node:
    return {"type": "JSXAttribute", "name": name, "value": value}


def concatenation(parts: Sequence[Node], operator: str = "+") -> Node:
    """Fold ``parts`` into a left-nested binary expression chain.

    ``[a, b, c]`` becomes ``(a + b) + c``.
    """
    if not parts:
        raise ValueError("concatenation requires at least one part")
    expression = parts[0]
    for part in parts[1:]:
        expression = binary_expression(operator, expression, part)
    return expression
