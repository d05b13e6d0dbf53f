"""Template variable descriptors.

A component declares its template variables with an assignment placed
next to its definition::

    Card.templateVars = [
        'title',                                   // replace
        ['visible', { type: 'control' }],
        ['tags', { type: 'list', aliases: ['labels'] }],
        ['rows', { type: 'list', child: { type: 'object', props: ['id'] } }],
    ];

This module recognises such assignments and sorts the declared variables
into the three processing queues. It never edits the tree; removing the
assignment is the caller's job.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from jsxtv.nodes.base import Node
from jsxtv.nodes.predicates import array_to_data, is_identifier, is_member_expression, is_type
from jsxtv.utils.constants import DESCRIPTOR_PROPERTY, VARIABLE_TYPES


@dataclass(frozen=True, slots=True)
class TemplateVar:
    """One declared template variable.

    Attributes:
        name: Variable name as written in the component.
        category: ``replace``, ``control`` or ``list``.
        config: The declared config object (``type``, ``aliases``, ``child``).
    """

    name: str
    category: str
    config: Mapping[str, Any] = field(default_factory=dict)

    @property
    def aliases(self) -> tuple[str, ...]:
        aliases = self.config.get("aliases") or ()
        return tuple(alias for alias in aliases if isinstance(alias, str))

    @property
    def child(self) -> Mapping[str, Any] | None:
        child = self.config.get("child")
        return child if isinstance(child, Mapping) else None

    def as_pair(self) -> tuple[str, Mapping[str, Any]]:
        return self.name, self.config


@dataclass(frozen=True, slots=True)
class TemplateVars:
    """Declared variables of one component, sorted into queues.

    Queues keep declaration order. ``dropped`` holds entries whose
    ``type`` is not a known category; they take part in no queue.
    """

    component: str
    replace: tuple[TemplateVar, ...] = ()
    control: tuple[TemplateVar, ...] = ()
    list: tuple[TemplateVar, ...] = ()
    dropped: tuple[tuple[str, Any], ...] = ()

    def names(self, category: str) -> tuple[str, ...]:
        return tuple(var.name for var in getattr(self, category))


def normalise_entry(entry: Any) -> tuple[str, dict[str, Any]] | None:
    """Turn a descriptor entry into a ``(name, config)`` pair.

    A bare name becomes ``(name, {})``; ``[name]`` and ``[name, config]``
    pairs keep their config (missing or non-object configs become ``{}``).
    Entries without a usable name return None.
    """
    if isinstance(entry, str):
        return entry, {}
    if isinstance(entry, list) and entry and isinstance(entry[0], str):
        config = entry[1] if len(entry) > 1 and isinstance(entry[1], dict) else {}
        return entry[0], config
    return None


def classify(component: str, entries: Sequence[Any]) -> TemplateVars:
    """Sort descriptor entries into replace, control and list queues.

    Entries without a ``type`` are ``replace`` variables. Entries with an
    unrecognised ``type`` land in ``dropped``.
    """
    queues: dict[str, list[TemplateVar]] = {category: [] for category in VARIABLE_TYPES}
    dropped: list[tuple[str, Any]] = []
    for entry in entries:
        pair = normalise_entry(entry)
        if pair is None:
            continue
        name, config = pair
        category = config.get("type") or "replace"
        if not isinstance(category, str) or category not in queues:
            dropped.append((name, category))
            continue
        queues[category].append(TemplateVar(name, category, config))
    return TemplateVars(
        component=component,
        replace=tuple(queues["replace"]),
        control=tuple(queues["control"]),
        list=tuple(queues["list"]),
        dropped=tuple(dropped),
    )


def descriptor_target(expression: Node, property_name: str = DESCRIPTOR_PROPERTY) -> str | None:
    """Return ``Card`` for ``Card.templateVars = ...``, None for anything else."""
    if not is_type(expression, "AssignmentExpression") or expression.get("operator") != "=":
        return None
    left = expression["left"]
    if not is_member_expression(left) or left.get("computed"):
        return None
    if not is_identifier(left["object"]) or not is_identifier(left["property"], property_name):
        return None
    return left["object"]["name"]


def parse_template_vars(
    expression: Node,
    property_name: str = DESCRIPTOR_PROPERTY,
) -> TemplateVars | None:
    """Extract the template variables declared by an assignment expression.

    Args:
        expression: Expression of an expression statement.
        property_name: Name of the declaring property.

    Returns:
        The classified variables, or None when ``expression`` is not a
        descriptor assignment. A descriptor whose value is not an array
        literal declares no variables.
    """
    component = descriptor_target(expression, property_name)
    if component is None:
        return None
    right = expression["right"]
    entries = array_to_data(right) if is_type(right, "ArrayExpression") else []
    return classify(component, entries)
