"""Transform configuration.

Example:
    >>> from jsxtv.config import TransformConfig
    >>> config = TransformConfig.from_options({"tidyOnly": True})
    >>> config.tidy_only
    True

"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from jsxtv.exceptions import ConfigError, ErrorCode
from jsxtv.utils.constants import (
    CONTEXT_PROP,
    CONTROL_MARKER,
    DESCRIPTOR_PROPERTY,
    INPUT_VALUE_PREFIX,
    LIST_MARKER,
    REPEAT_METHODS,
    REPLACE_MARKER,
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True, slots=True)
class TransformConfig:
    """Options for the template variable transform.

    Attributes:
        tidy_only: Remove descriptor statements and stop; no rewriting.
        descriptor_property: Property whose assignment declares the
            template variables (``Card.templateVars = [...]``).
        context_prop: Prop carrying the render context into components.
        uid_hint: Base for generated identifiers (``_uid``, ``_uid2``...).
        replace_marker: Callee of value markers.
        list_marker: Callee of list markers.
        control_marker: Callee of control markers.
        repeat_methods: Methods that repeat markup per list item.
        input_value_prefix: Prefix of the duplicated input ``value``.
        report_dropped: Report dropped descriptor entries and unknown list
            child shapes as warnings instead of debug records.
    """

    tidy_only: bool = False
    descriptor_property: str = DESCRIPTOR_PROPERTY
    context_prop: str = CONTEXT_PROP
    uid_hint: str = "uid"
    replace_marker: str = REPLACE_MARKER
    list_marker: str = LIST_MARKER
    control_marker: str = CONTROL_MARKER
    repeat_methods: frozenset[str] = field(default=REPEAT_METHODS)
    input_value_prefix: str = INPUT_VALUE_PREFIX
    report_dropped: bool = False

    def __post_init__(self) -> None:
        for name in (
            "descriptor_property",
            "context_prop",
            "replace_marker",
            "list_marker",
            "control_marker",
        ):
            value = getattr(self, name)
            if not isinstance(value, str) or not _IDENTIFIER.match(value):
                raise ConfigError(f"{name} must be a JavaScript identifier, got {value!r}")
        if not self.repeat_methods:
            raise ConfigError("repeat_methods must name at least one method")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> TransformConfig:
        """Build a config from plugin-style options.

        Keys may be written in camelCase (``tidyOnly``) or snake_case
        (``tidy_only``). Unknown keys raise ``ConfigError``.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in options.items():
            name = _CAMEL_BOUNDARY.sub("_", key).lower()
            if name not in known:
                raise ConfigError(f"Unknown option {key!r}", code=ErrorCode.UNKNOWN_OPTION)
            if name == "repeat_methods":
                value = frozenset([value] if isinstance(value, str) else value)
            values[name] = value
        return cls(**values)

    def merged(self, **overrides: Any) -> TransformConfig:
        return replace(self, **overrides)


DEFAULT_CONFIG = TransformConfig()
