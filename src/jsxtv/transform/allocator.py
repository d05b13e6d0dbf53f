"""Substitute identifiers for template variables."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from jsxtv.traversal.scope import Scope
from jsxtv.transform.descriptors import TemplateVar


@dataclass(frozen=True, slots=True)
class VariableMap:
    """Original variable name to generated substitute, for one category.

    ``names`` keeps declaration order; a name declared twice in the same
    category is allocated once.
    """

    mapping: Mapping[str, str] = field(default_factory=dict)
    names: tuple[str, ...] = ()

    def __contains__(self, name: object) -> bool:
        return name in self.mapping

    def __getitem__(self, name: str) -> str:
        return self.mapping[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def get(self, name: str) -> str | None:
        return self.mapping.get(name)

    def inverse(self) -> dict[str, str]:
        """Generated substitute back to original name."""
        return {generated: name for name, generated in self.mapping.items()}


def allocate(scope: Scope, variables: Sequence[TemplateVar], hint: str = "uid") -> VariableMap:
    """Generate one free identifier per variable, in declaration order.

    Identifiers are unique within ``scope``, including every identifier
    generated by earlier calls against it.
    """
    mapping: dict[str, str] = {}
    names: list[str] = []
    for variable in variables:
        if variable.name in mapping:
            continue
        mapping[variable.name] = scope.generate_uid(hint)
        names.append(variable.name)
    return VariableMap(mapping, tuple(names))
