"""Type predicates and structural helpers for ESTree + JSX nodes.

Predicates accept both the ESTree dialect (``Literal``, ``Property``) and
the Babel dialect (``StringLiteral``, ``ObjectProperty``, ...), so trees
from either producer can be rewritten.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from jsxtv.nodes.base import Node, is_node
from jsxtv.utils.constants import REPEAT_METHODS, TEXT_INPUT_TYPES

_LITERAL_TYPES = frozenset(
    {"Literal", "StringLiteral", "NumericLiteral", "BooleanLiteral", "NullLiteral"}
)
_PROPERTY_TYPES = frozenset({"Property", "ObjectProperty"})
_FUNCTION_TYPES = frozenset(
    {"ArrowFunctionExpression", "FunctionExpression", "FunctionDeclaration"}
)
_PATTERN_TYPES = frozenset({"ObjectPattern", "ArrayPattern", "AssignmentPattern", "RestElement"})


def is_type(node: Any, node_type: str) -> bool:
    return is_node(node) and node["type"] == node_type


def is_identifier(node: Any, name: str | None = None) -> bool:
    if not is_type(node, "Identifier"):
        return False
    return name is None or node["name"] == name


def is_literal(node: Any) -> bool:
    """Return True for plain literal values (regular expressions excluded)."""
    return is_node(node) and node["type"] in _LITERAL_TYPES and "regex" not in node


def is_string_literal(node: Any) -> bool:
    if not is_literal(node):
        return False
    return node["type"] == "StringLiteral" or isinstance(node.get("value"), str)


def literal_value(node: Node) -> Any:
    """Return the Python value of a literal node (``None`` for ``null``)."""
    if node["type"] == "NullLiteral":
        return None
    return node.get("value")


def is_object_property(node: Any) -> bool:
    return is_node(node) and node["type"] in _PROPERTY_TYPES


def is_pattern(node: Any) -> bool:
    return is_node(node) and node["type"] in _PATTERN_TYPES


def is_member_expression(node: Any) -> bool:
    return is_type(node, "MemberExpression")


def is_call_expression(node: Any) -> bool:
    return is_type(node, "CallExpression")


def is_function(node: Any) -> bool:
    return is_node(node) and node["type"] in _FUNCTION_TYPES


def is_ternary(node: Any) -> bool:
    """Return True for a complete conditional expression ``a ? b : c``."""
    if not is_type(node, "ConditionalExpression"):
        return False
    return all(node.get(part) for part in ("test", "consequent", "alternate"))


def member_property_name(node: Node) -> str | None:
    """Return the static property name of a member expression, if any."""
    prop = node.get("property")
    if node.get("computed"):
        return prop.get("value") if is_string_literal(prop) else None
    if is_identifier(prop):
        return prop["name"]
    return None


def is_repeat_call(node: Any, methods: Collection[str] = REPEAT_METHODS) -> bool:
    """Return True for a call chain ending in a repeat method: ``x.map(fn)``."""
    if not is_call_expression(node):
        return False
    callee = node["callee"]
    return is_member_expression(callee) and member_property_name(callee) in methods


def repeat_call_receiver(node: Node) -> str | None:
    """Return the receiver name of ``name.map(...)`` or None for other shapes."""
    receiver = node["callee"]["object"]
    return receiver["name"] if is_identifier(receiver) else None


# ---------------------------------------------------------------------------
# JSX shapes
# ---------------------------------------------------------------------------


def jsx_element_name(node: Node) -> str | None:
    """Return the tag name of a JSX element (``Foo.Bar`` for member names)."""
    name = node["openingElement"]["name"]
    if name["type"] == "JSXIdentifier":
        return name["name"]
    if name["type"] == "JSXMemberExpression":
        parts = []
        while name["type"] == "JSXMemberExpression":
            parts.append(name["property"]["name"])
            name = name["object"]
        parts.append(name.get("name", ""))
        return ".".join(reversed(parts))
    return None


def is_jsx_component(node: Any) -> bool:
    """Return True for markup elements that render another component.

    Component tags start with an upper-case letter or use a member name
    (``<Card>``, ``<ui.Card>``); lower-case tags are host elements.
    """
    if not is_type(node, "JSXElement"):
        return False
    name = node["openingElement"]["name"]
    if name["type"] == "JSXMemberExpression":
        return True
    if name["type"] != "JSXIdentifier":
        return False
    first = name["name"][:1]
    return first.isalpha() and first.isupper()


def get_jsx_attribute(node: Node, name: str) -> Node | None:
    """Return the first attribute called ``name`` on a JSX element."""
    for attribute in node["openingElement"]["attributes"]:
        if attribute["type"] != "JSXAttribute":
            continue
        attr_name = attribute["name"]
        if attr_name["type"] == "JSXIdentifier" and attr_name["name"] == name:
            return attribute
    return None


def is_jsx_text_input(node: Any) -> bool:
    """Return True for ``<input>`` elements whose live value browsers hide."""
    if not is_type(node, "JSXElement") or jsx_element_name(node) != "input":
        return False
    type_attribute = get_jsx_attribute(node, "type")
    if type_attribute is None:
        return True
    value = type_attribute["value"]
    # type={'text'}
    if is_type(value, "JSXExpressionContainer"):
        value = value["expression"]
    return is_string_literal(value) and literal_value(value) in TEXT_INPUT_TYPES


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def array_to_data(node: Any) -> Any:
    """Convert a literal expression tree into plain Python data.

    Arrays become lists, objects become dicts and literals their values.
    Anything that is not static data (identifiers, calls, spreads)
    converts to ``None``.

    Example:
        ``[['title'], ['tags', {type: 'list'}]]`` becomes
        ``[["title"], ["tags", {"type": "list"}]]``.
    """
    if not is_node(node):
        return None
    node_type = node["type"]
    if node_type == "ArrayExpression":
        return [array_to_data(element) for element in node["elements"]]
    if node_type == "ObjectExpression":
        data: dict[str, Any] = {}
        for prop in node["properties"]:
            if not is_object_property(prop) or prop.get("computed"):
                continue
            key = prop["key"]
            if is_identifier(key):
                data[key["name"]] = array_to_data(prop["value"])
            elif is_literal(key):
                data[str(literal_value(key))] = array_to_data(prop["value"])
        return data
    if is_literal(node):
        return literal_value(node)
    if node_type == "TemplateLiteral" and not node["expressions"]:
        return "".join(quasi["value"].get("cooked") or "" for quasi in node["quasis"])
    if node_type == "UnaryExpression" and node["operator"] == "-":
        value = array_to_data(node["argument"])
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return -value
    return None
