"""Control expression classification.

Recognises the conditional shapes that gate markup and maps them to the
control statement types understood by the renderer:

=====================  ==============
Shape                  Statement type
=====================  ==============
``isOpen``             ``ifTruthy``
``!isOpen``            ``ifFalsy``
``status === 'on'``    ``ifEqual``
``status !== other``   ``ifNotEqual``
=====================  ==============

At least one identifier in the shape must be a declared control variable;
any other shape fails classification and the caller leaves it untouched.
New shapes are added by extending ``get_expression_args`` and
``statement_type_for``.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from jsxtv.nodes.base import Node
from jsxtv.nodes.predicates import is_identifier, is_literal, is_type, literal_value
from jsxtv.utils.constants import COMPARISON_STATEMENTS

ArgType = Literal["identifier", "literal"]


@dataclass(frozen=True, slots=True)
class ExpressionArg:
    """A typed operand of a control expression."""

    type: ArgType
    value: str


@dataclass(frozen=True, slots=True)
class ControlStatement:
    """Classification result.

    ``statement_type`` is None when the expression is not a recognised
    control shape; ``args`` may still hold the operands that were found.
    """

    statement_type: str | None
    args: tuple[ExpressionArg, ...] = ()

    @property
    def matched(self) -> bool:
        return self.statement_type is not None and bool(self.args)


def js_string(value: Any) -> str:
    """Render a literal value the way JavaScript's ``String()`` would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _operand(node: Node) -> ExpressionArg | None:
    if is_identifier(node):
        return ExpressionArg("identifier", node["name"])
    if is_literal(node):
        return ExpressionArg("literal", js_string(literal_value(node)))
    return None


def get_expression_args(expression: Node) -> tuple[ExpressionArg, ...]:
    """Extract the typed operands of a control expression shape.

    A comparison whose operands are not both identifiers or literals
    yields no arguments.
    """
    if is_identifier(expression):
        return (ExpressionArg("identifier", expression["name"]),)
    if is_type(expression, "UnaryExpression") and is_identifier(expression["argument"]):
        return (ExpressionArg("identifier", expression["argument"]["name"]),)
    if is_type(expression, "BinaryExpression"):
        left = _operand(expression["left"])
        right = _operand(expression["right"])
        if left is None or right is None:
            return ()
        return left, right
    return ()


def statement_type_for(expression: Node) -> str | None:
    node_type = expression["type"]
    if node_type == "Identifier":
        return "ifTruthy"
    if node_type == "UnaryExpression" and expression["operator"] == "!":
        return "ifFalsy"
    if node_type == "BinaryExpression":
        return COMPARISON_STATEMENTS.get(expression["operator"])
    return None


def classify_control(
    expression: Node,
    control_names: Collection[str],
    replace_inverse: Mapping[str, str] | None = None,
) -> ControlStatement:
    """Classify the test expression of a conditional.

    Args:
        expression: Left operand of ``test && markup`` or the test of a
            ternary.
        control_names: Declared control variable names.
        replace_inverse: Generated replace-variable substitute back to the
            original name. Identifiers already renamed by the rewrite are
            reported under their original name.

    Returns:
        The statement type and arguments; ``statement_type`` is None when
        the shape is unsupported or mentions no control variable.
    """
    replace_inverse = replace_inverse or {}
    args = tuple(
        ExpressionArg("identifier", replace_inverse.get(arg.value, arg.value))
        if arg.type == "identifier"
        else arg
        for arg in get_expression_args(expression)
    )
    identifiers = [arg.value for arg in args if arg.type == "identifier"]
    if not identifiers or not any(name in control_names for name in identifiers):
        return ControlStatement(None, args)
    return ControlStatement(statement_type_for(expression), args)
