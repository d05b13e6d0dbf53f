"""Component rewriting.

``ComponentRewriter`` walks one component once and performs every rewrite
during that single walk:

- context setup: a ``__context__`` prop on the component parameter and,
  at the top of the component body, the context declaration followed by
  list stand-ins and replace-variable declarations
- ``__context__`` attributes on nested components (``+ 1`` inside a
  ``.map()``)
- a scrape-safe copy of ``value`` on text inputs
- renaming of replace and list variables, with alias tracking for
  ``const rows = items.map(...)``
- ternaries gated by control variables become marker-wrapped
  concatenations of both branches
- ``{cond && markup}`` slots gated by control variables always render
  ``markup``, bracketed by control markers
- list slots (``{rows}``, ``{items.map(...)}``) bracketed by list markers
  named after the original list variable

The list alias table is shared by all visitors and grows during the
walk, so a slot visited after ``const rows = items.map(...)`` is tagged
while one visited before is not.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator

from jsxtv.config import DEFAULT_CONFIG, TransformConfig
from jsxtv.diagnostics import Diagnostics, Severity
from jsxtv.exceptions import ErrorCode
from jsxtv.nodes import builders
from jsxtv.nodes.base import Node, walk
from jsxtv.nodes.predicates import (
    get_jsx_attribute,
    is_call_expression,
    is_function,
    is_identifier,
    is_jsx_component,
    is_jsx_text_input,
    is_object_property,
    is_repeat_call,
    is_ternary,
    is_type,
    member_property_name,
    repeat_call_receiver,
)
from jsxtv.traversal import NodePath, Scope, traverse
from jsxtv.transform.allocator import VariableMap, allocate
from jsxtv.transform.control import ControlStatement, classify_control
from jsxtv.transform.descriptors import TemplateVar, TemplateVars
from jsxtv.transform.lists import build_list_declaration
from jsxtv.transform.markers import MarkerFactory

logger = logging.getLogger(__name__)

_NAMED_DECLARATIONS = frozenset(
    {"FunctionDeclaration", "FunctionExpression", "ClassDeclaration", "ClassExpression"}
)
_LABEL_PARENTS = frozenset({"LabeledStatement", "BreakStatement", "ContinueStatement"})
_MODULE_SPECIFIERS = frozenset(
    {"ImportSpecifier", "ImportDefaultSpecifier", "ImportNamespaceSpecifier", "ExportSpecifier"}
)
_KEYED_MEMBERS = frozenset({"Property", "ObjectProperty", "MethodDefinition", "PropertyDefinition"})


class ListAliasTable:
    """Names that denote a list variable, mapped to the original list name.

    Sources are registered once per list variable; aliases always resolve
    to an original source name, so the table never forms a cycle.

    """

    __slots__ = ("_sources",)

    def __init__(self) -> None:
        self._sources: dict[str, str] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def add_source(self, name: str) -> None:
        self._sources[name] = name

    def register(self, alias: str, source: str) -> None:
        """Point ``alias`` at the original list behind ``source``."""
        original = self._sources.get(source)
        if original is None:
            return
        self._sources[alias] = original

    def source_of(self, name: str) -> str | None:
        return self._sources.get(name)

    def as_dict(self) -> dict[str, str]:
        return dict(self._sources)


# ---------------------------------------------------------------------------
# Identifier positions
# ---------------------------------------------------------------------------


def is_non_reference(path: NodePath) -> bool:
    """Identifier positions that name something other than a variable.

    Property keys, member property names, labels, module specifiers and
    declaration names.
    """
    parent = path.parent
    if parent is None:
        return False
    parent_type = parent["type"]
    field = path.field
    if parent_type in _KEYED_MEMBERS and field == "key":
        return not parent.get("computed")
    if parent_type == "MemberExpression" and field == "property":
        return not parent.get("computed")
    if parent_type in _LABEL_PARENTS or parent_type in _MODULE_SPECIFIERS:
        return True
    return parent_type in _NAMED_DECLARATIONS and field == "id"


def is_binding(path: NodePath) -> bool:
    """Identifier positions that declare a name rather than read one.

    Declarator names, parameters, catch parameters and every element of a
    destructuring pattern.
    """
    parent = path.parent
    if parent is None:
        return False
    parent_type = parent["type"]
    field = path.field
    if parent_type == "VariableDeclarator":
        return field == "id"
    if parent_type in ("ArrayPattern", "RestElement"):
        return True
    if parent_type == "AssignmentPattern":
        return field == "left"
    if parent_type == "CatchClause":
        return field == "param"
    if is_object_property(parent) and field == "value":
        return is_type(path.parent_path.parent, "ObjectPattern")
    return is_function(parent) and field == "params"


def _mentions(expression: Node, names: VariableMap) -> bool:
    return any(node["type"] == "Identifier" and node["name"] in names for node in walk(expression))


# ---------------------------------------------------------------------------
# Rewriter
# ---------------------------------------------------------------------------


class ComponentRewriter:
    """Rewrite one component for its declared template variables.

    Args:
        path: Path of the component declaration.
        function: The function node defining the component.
        template_vars: Classified template variables.
        scope: Scope used to generate collision-free identifiers.
        config: Transform configuration.
        diagnostics: Sink for reported irregularities.

    Identifiers are allocated on construction, in the order replace,
    control, list, then the context identifier.

    """

    def __init__(
        self,
        path: NodePath,
        function: Node,
        template_vars: TemplateVars,
        scope: Scope,
        config: TransformConfig = DEFAULT_CONFIG,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self._path = path
        self._function = function
        self._vars = template_vars
        self._config = config
        self._diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        hint = config.uid_hint
        self.replace_map = allocate(scope, template_vars.replace, hint)
        self.control_map = allocate(scope, template_vars.control, hint)
        self.list_map = allocate(scope, template_vars.list, hint)
        self.context = scope.generate_uid(hint)

        self.replace_inverse = self.replace_map.inverse()
        self.markers = MarkerFactory(config, self.context)
        self.aliases = ListAliasTable()

        self._props_name: str | None = None
        self._prepared = False
        self._seen_ternaries: dict[int, Node] = {}

    @property
    def component(self) -> str:
        return self._vars.component

    def rewrite(self) -> None:
        """Run the single rewriting walk over the component."""
        self._ensure_block_body()
        self._prepare_parameters()
        traverse(
            self._path,
            {
                "JSXElement": self._visit_jsx_element,
                "BlockStatement": self._visit_block,
                "Identifier": self._visit_identifier,
                "JSXExpressionContainer": self._visit_expression_container,
            },
        )
        logger.debug(
            "%s: %d replace, %d control, %d list variable(s), context %s",
            self.component,
            len(self.replace_map),
            len(self.control_map),
            len(self.list_map),
            self.context,
        )

    # ------------------------------------------------------------------
    # Context setup
    # ------------------------------------------------------------------

    def _ensure_block_body(self) -> None:
        # `() => <div/>` has no block to hold declarations
        body = self._function["body"]
        if not is_type(body, "BlockStatement"):
            self._function["body"] = builders.block_statement([builders.return_statement(body)])
            self._function["expression"] = False

    def _context_property(self) -> Node:
        name = self._config.context_prop
        return builders.object_property(
            builders.identifier(name), builders.identifier(name), shorthand=True
        )

    def _prepare_parameters(self) -> None:
        params = self._function.setdefault("params", [])
        if not params:
            params.append(builders.object_pattern([self._context_property()]))
            return

        first = params[0]
        pattern = first["left"] if is_type(first, "AssignmentPattern") else first
        if is_type(pattern, "ObjectPattern"):
            properties = pattern["properties"]
            for prop in properties:
                if is_object_property(prop) and is_identifier(prop["key"], self._config.context_prop):
                    return
            index = len(properties)
            if properties and properties[-1]["type"] == "RestElement":
                index -= 1
            properties.insert(index, self._context_property())
        elif is_identifier(pattern):
            self._props_name = pattern["name"]
        else:
            self._diagnostics.report(
                ErrorCode.UNSUPPORTED_PARAMETER,
                f"{self.component}: {pattern['type']} parameter cannot carry "
                f"{self._config.context_prop}; reading it from the enclosing scope",
                node=pattern,
            )

    def _context_declaration(self) -> Node:
        def source() -> Node:
            prop = builders.identifier(self._config.context_prop)
            if self._props_name is None:
                return prop
            return builders.member_expression(builders.identifier(self._props_name), prop)

        test = builders.binary_expression(
            "===",
            builders.unary_expression("typeof", source()),
            builders.string_literal("number"),
        )
        init = builders.conditional_expression(test, source(), builders.numeric_literal(0))
        return builders.variable_declaration(
            "let", [builders.variable_declarator(builders.identifier(self.context), init)]
        )

    def _unique(self, variables: tuple[TemplateVar, ...]) -> Iterator[TemplateVar]:
        seen: set[str] = set()
        for variable in variables:
            if variable.name not in seen:
                seen.add(variable.name)
                yield variable

    def _visit_block(self, path: NodePath) -> None:
        if self._prepared or path.node is not self._function["body"]:
            return
        self._prepared = True

        prelude = [self._context_declaration()]
        for variable in self._unique(self._vars.list):
            declaration = build_list_declaration(
                self.list_map[variable.name], variable.config, self.markers
            )
            if declaration is None:
                severity = Severity.WARNING if self._config.report_dropped else Severity.DEBUG
                self._diagnostics.report(
                    ErrorCode.UNKNOWN_LIST_CHILD,
                    f"{self.component}: list {variable.name!r} has unsupported child "
                    f"type {variable.child.get('type') if variable.child else None!r}",
                    severity=severity,
                )
            else:
                prelude.append(declaration)
            self.aliases.add_source(variable.name)
            for alias in variable.aliases:
                self.aliases.register(alias, variable.name)
        for name in self.replace_map:
            prelude.append(
                builders.variable_declaration(
                    "let",
                    [
                        builders.variable_declarator(
                            builders.identifier(self.replace_map[name]), self.markers.value(name)
                        )
                    ],
                )
            )
        path.node["body"][0:0] = prelude

    # ------------------------------------------------------------------
    # Markup elements
    # ------------------------------------------------------------------

    def _in_repeat(self, path: NodePath) -> bool:
        methods = self._config.repeat_methods
        return path.find_ancestor(lambda node: is_repeat_call(node, methods)) is not None

    def _visit_jsx_element(self, path: NodePath) -> None:
        node = path.node
        attributes = node["openingElement"]["attributes"]

        if is_jsx_component(node):
            context = builders.identifier(self.context)
            if self._in_repeat(path):
                context = builders.binary_expression("+", context, builders.numeric_literal(1))
            attributes.append(
                builders.jsx_attribute(
                    builders.jsx_identifier(self._config.context_prop),
                    builders.jsx_expression_container(context),
                )
            )

        if is_jsx_text_input(node):
            value = get_jsx_attribute(node, "value")
            if value is not None:
                attributes.append(
                    builders.jsx_attribute(
                        builders.jsx_identifier(f"{self._config.input_value_prefix}value"),
                        copy.deepcopy(value["value"]),
                    )
                )

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def _visit_identifier(self, path: NodePath) -> None:
        name = path.node["name"]
        if is_non_reference(path):
            return
        if name in self.control_map and not is_binding(path):
            self._rewrite_enclosing_ternary(path)
            if not path.is_attached():
                return
        if name in self.replace_map:
            self._rename_replace(path)
        elif name in self.list_map:
            self._rename_list(path)

    def _rename(self, path: NodePath, new_name: str) -> None:
        parent = path.parent
        if is_object_property(parent) and path.field == "value":
            # `{ title }` becomes `{ title: _uid }`; the key keeps its name
            parent["shorthand"] = False
            path.replace_with(builders.identifier(new_name))
        else:
            path.node["name"] = new_name

    def _rename_replace(self, path: NodePath) -> None:
        if is_binding(path):
            return
        if is_type(path.parent, "MemberExpression") and path.field == "object":
            return
        self._rename(path, self.replace_map[path.node["name"]])

    def _rename_list(self, path: NodePath) -> None:
        if is_binding(path):
            return
        name = path.node["name"]
        parent = path.parent
        if (
            is_type(parent, "MemberExpression")
            and path.field == "object"
            and member_property_name(parent) in self._config.repeat_methods
        ):
            self._register_repeat_alias(path.parent_path, name)
        self._rename(path, self.list_map[name])

    def _register_repeat_alias(self, member_path: NodePath, source: str) -> None:
        # const rows = items.map(fn)
        call_path = member_path.parent_path
        if member_path.field != "callee" or call_path is None or not is_call_expression(call_path.node):
            return
        declarator = call_path.parent
        if is_type(declarator, "VariableDeclarator") and call_path.field == "init":
            target = declarator["id"]
            if is_identifier(target):
                self.aliases.register(target["name"], source)

    # ------------------------------------------------------------------
    # Control rewriting
    # ------------------------------------------------------------------

    def _classify(self, expression: Node) -> ControlStatement:
        statement = classify_control(expression, self.control_map, self.replace_inverse)
        if not statement.matched and _mentions(expression, self.control_map):
            self._diagnostics.report(
                ErrorCode.UNRECOGNIZED_CONTROL,
                f"{self.component}: unsupported {expression['type']} control expression left as written",
                node=expression,
            )
        return statement

    def _rewrite_enclosing_ternary(self, path: NodePath) -> None:
        ternary_path = path.find_ancestor(is_ternary, max_depth=2)
        if ternary_path is None:
            return
        ternary = ternary_path.node
        if id(ternary) in self._seen_ternaries:
            return
        self._seen_ternaries[id(ternary)] = ternary

        statement = self._classify(ternary["test"])
        if not statement.matched:
            return
        opening, closing = self.markers.control_pair(statement.statement_type, statement.args)
        else_opening, else_closing = self.markers.control_pair("else", statement.args)
        ternary_path.replace_with(
            builders.concatenation(
                [
                    opening,
                    ternary["consequent"],
                    closing,
                    else_opening,
                    ternary["alternate"],
                    else_closing,
                ]
            )
        )

    # ------------------------------------------------------------------
    # Markup slots
    # ------------------------------------------------------------------

    def _list_source(self, expression: Node) -> str | None:
        """Original list name behind ``rows`` or ``rows.map(...)``."""
        if is_identifier(expression):
            return self.aliases.source_of(expression["name"])
        if is_repeat_call(expression, self._config.repeat_methods):
            receiver = repeat_call_receiver(expression)
            return self.aliases.source_of(receiver) if receiver else None
        return None

    def _bracket(self, path: NodePath, pairs: list[tuple[Node, Node]], content: Node) -> None:
        """Surround a slot with marker pairs, outermost pair first.

        Slots among markup children get the markers as sibling children
        and are replaced by ``content``. Attribute slots have no siblings;
        their expression becomes ``open + content + close``.
        """
        if path.in_list:
            for opening, closing in pairs:
                path.insert_before(opening)
                path.insert_after(closing)
            if content is not path.node:
                path.replace_with(content)
            return
        inner = path.node["expression"] if content is path.node else content
        for opening, closing in reversed(pairs):
            inner = builders.concatenation([opening, inner, closing])
        path.node["expression"] = inner

    def _visit_expression_container(self, path: NodePath) -> None:
        expression = path.node["expression"]
        if self._rewrite_logical_control(path, expression):
            return
        source = self._list_source(expression)
        if source is not None:
            self._bracket(path, [self.markers.list_pair(source)], path.node)

    def _rewrite_logical_control(self, path: NodePath, expression: Node) -> bool:
        # `||` would need inverted markers; only `&&` guards are control slots
        if not is_type(expression, "LogicalExpression") or expression["operator"] != "&&":
            return False
        statement = self._classify(expression["left"])
        if not statement.matched:
            return False
        right = expression["right"]
        pairs = [self.markers.control_pair(statement.statement_type, statement.args)]
        source = self._list_source(right)
        if source is not None:
            pairs.append(self.markers.list_pair(source))
        self._bracket(path, pairs, right)
        return True
