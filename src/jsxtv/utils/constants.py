"""Shared constants for jsxtv."""

from __future__ import annotations

# Prop carrying the render context number into nested components
CONTEXT_PROP = "__context__"

# Assignment property that declares template variables on a component
DESCRIPTOR_PROPERTY = "templateVars"

# Marker call names understood by the downstream renderer
REPLACE_MARKER = "getLanguageReplace"
LIST_MARKER = "getLanguageList"
CONTROL_MARKER = "getLanguageControl"

# Call-chain methods that repeat markup once per list item
REPEAT_METHODS: frozenset[str] = frozenset({"map"})

# Browsers move the live `value` of these inputs out of the serialized DOM,
# so a scrape of the rendered page loses it.
TEXT_INPUT_TYPES: frozenset[str] = frozenset(
    {
        "text",
        "email",
        "search",
        "tel",
        "url",
    }
)

# Prefix for attributes duplicated to survive a static scrape
INPUT_VALUE_PREFIX = "jsxtv_"

# Descriptor categories, in queue order
VARIABLE_TYPES: tuple[str, ...] = ("replace", "control", "list")

# List child shapes with a synthesized stand-in
LIST_CHILD_TYPES: frozenset[str] = frozenset({"primitive", "object"})

# Comparison operators mapped to control statement types
COMPARISON_STATEMENTS: dict[str, str] = {
    "===": "ifEqual",
    "!==": "ifNotEqual",
}
