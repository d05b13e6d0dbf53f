"""ESTree + JSX syntax tree support for jsxtv.

Nodes are plain dicts with a ``"type"`` key. ``builders`` constructs
them, ``predicates`` tests their shape.
"""

from jsxtv.nodes import builders
from jsxtv.nodes.base import VISITOR_KEYS, Node, child_fields, is_node, iter_child_nodes, walk
from jsxtv.nodes.predicates import (
    array_to_data,
    get_jsx_attribute,
    is_call_expression,
    is_function,
    is_identifier,
    is_jsx_component,
    is_jsx_text_input,
    is_literal,
    is_member_expression,
    is_object_property,
    is_pattern,
    is_repeat_call,
    is_string_literal,
    is_ternary,
    is_type,
    jsx_element_name,
    literal_value,
    member_property_name,
    repeat_call_receiver,
)

__all__ = [
    "VISITOR_KEYS",
    "Node",
    "array_to_data",
    "builders",
    "child_fields",
    "get_jsx_attribute",
    "is_call_expression",
    "is_function",
    "is_identifier",
    "is_jsx_component",
    "is_jsx_text_input",
    "is_literal",
    "is_member_expression",
    "is_node",
    "is_object_property",
    "is_pattern",
    "is_repeat_call",
    "is_string_literal",
    "is_ternary",
    "is_type",
    "iter_child_nodes",
    "jsx_element_name",
    "literal_value",
    "member_property_name",
    "repeat_call_receiver",
    "walk",
]
