"""Shared hypothesis strategies for jsxtv property-based testing.

Provides reusable strategies at three levels:

- **Names**: JavaScript identifiers safe to use as template variables
- **Descriptors**: descriptor entries in every accepted spelling
- **Strings**: arbitrary text for literal quoting

Individual test modules compose them into property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

# Reserved words and names the test components already use
_EXCLUDED_NAMES = frozenset(
    {
        "arguments",
        "async",
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "eval",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "of",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
        # used by component templates in the property tests
        "item",
        "map",
        "props",
        "type",
    }
)

# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

js_name = st.from_regex(r"[a-z][a-zA-Z0-9]{0,10}", fullmatch=True).filter(
    lambda name: name not in _EXCLUDED_NAMES
)

# Distinct variable names for one component
variable_names = st.lists(js_name, min_size=1, max_size=6, unique=True)

# Names already written in a program, possibly colliding with generated ones
existing_names = st.sets(
    st.one_of(
        js_name,
        st.sampled_from(["_uid", "_uid2", "_uid3", "_uid5", "_uid10"]),
    ),
    max_size=12,
)

# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

categories = st.sampled_from(["replace", "control", "list"])


def untyped_entry(name: str) -> st.SearchStrategy[object]:
    """Every spelling of an entry without a ``type``."""
    return st.sampled_from([name, [name], [name, {}], [name, {"aliases": []}]])


def typed_entry(name: str) -> st.SearchStrategy[object]:
    return categories.map(lambda category: [name, {"type": category}])


descriptor_entries = variable_names.flatmap(
    lambda names: st.tuples(*(st.one_of(untyped_entry(n), typed_entry(n)) for n in names))
)

# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

literal_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), max_codepoint=0xFFFF),
    max_size=60,
)
