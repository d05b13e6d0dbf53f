"""Stand-in declarations for list variables.

A list variable is replaced by a one-element array whose element renders
as template tags, so mapping over it emits the repeated markup exactly
once::

    let _uid3 = [getLanguageList('primitive', null, _uid4)];
    let _uid5 = [{ id: getLanguageList('objectProperty', 'id', _uid4) }];
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from jsxtv.nodes import builders
from jsxtv.nodes.base import Node
from jsxtv.transform.markers import MarkerFactory
from jsxtv.utils.constants import LIST_CHILD_TYPES


_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _property_key(name: str) -> Node:
    if _IDENTIFIER.match(name):
        return builders.identifier(name)
    return builders.string_literal(name)


def list_child(config: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return the child shape of a list config (``primitive`` by default)."""
    child = (config or {}).get("child")
    if not isinstance(child, Mapping) or "type" not in child:
        return {"type": "primitive"}
    return child


def build_list_declaration(
    target: str,
    config: Mapping[str, Any] | None,
    markers: MarkerFactory,
) -> Node | None:
    """Build ``let <target> = [...]`` for a list variable.

    Returns None for child shapes other than ``primitive`` and ``object``;
    the target is then left undeclared.
    """
    child = list_child(config)
    child_type = child.get("type")
    if not isinstance(child_type, str) or child_type not in LIST_CHILD_TYPES:
        return None
    if child_type == "object":
        props = [prop for prop in child.get("props") or () if isinstance(prop, str)]
        element = builders.object_expression(
            [
                builders.object_property(_property_key(prop), markers.list("objectProperty", prop))
                for prop in props
            ]
        )
    else:
        element = markers.list("primitive", None)
    return builders.variable_declaration(
        "let",
        [builders.variable_declarator(builders.identifier(target), builders.array_expression([element]))],
    )
