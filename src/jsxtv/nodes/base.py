"""Base definitions for jsxtv syntax trees.

Trees are ESTree-shaped JavaScript + JSX trees held as plain ``dict`` and
``list`` values, the JSON form emitted by esprima, acorn and
``@babel/parser``. Every node is a ``dict`` carrying a ``"type"`` key.

Nodes are mutable: the rewriting engine edits trees in place.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TypeAlias

Node: TypeAlias = dict[str, Any]

# Child fields per node type, in source order. Traversal order follows
# this table, so a field listed earlier is always visited first.
VISITOR_KEYS: dict[str, tuple[str, ...]] = {
    "Program": ("body",),
    "File": ("program",),
    # Statements
    "ExpressionStatement": ("expression",),
    "BlockStatement": ("body",),
    "EmptyStatement": (),
    "DebuggerStatement": (),
    "ReturnStatement": ("argument",),
    "ThrowStatement": ("argument",),
    "IfStatement": ("test", "consequent", "alternate"),
    "ForStatement": ("init", "test", "update", "body"),
    "ForInStatement": ("left", "right", "body"),
    "ForOfStatement": ("left", "right", "body"),
    "WhileStatement": ("test", "body"),
    "DoWhileStatement": ("body", "test"),
    "BreakStatement": ("label",),
    "ContinueStatement": ("label",),
    "LabeledStatement": ("label", "body"),
    "SwitchStatement": ("discriminant", "cases"),
    "SwitchCase": ("test", "consequent"),
    "TryStatement": ("block", "handler", "finalizer"),
    "CatchClause": ("param", "body"),
    # Declarations
    "VariableDeclaration": ("declarations",),
    "VariableDeclarator": ("id", "init"),
    "FunctionDeclaration": ("id", "params", "body"),
    "ClassDeclaration": ("id", "superClass", "body"),
    "ClassExpression": ("id", "superClass", "body"),
    "ClassBody": ("body",),
    "MethodDefinition": ("key", "value"),
    "PropertyDefinition": ("key", "value"),
    "ImportDeclaration": ("specifiers", "source"),
    "ImportSpecifier": ("imported", "local"),
    "ImportDefaultSpecifier": ("local",),
    "ImportNamespaceSpecifier": ("local",),
    "ExportNamedDeclaration": ("declaration", "specifiers", "source"),
    "ExportDefaultDeclaration": ("declaration",),
    "ExportAllDeclaration": ("source",),
    "ExportSpecifier": ("local", "exported"),
    # Expressions
    "Identifier": (),
    "Literal": (),
    "StringLiteral": (),
    "NumericLiteral": (),
    "BooleanLiteral": (),
    "NullLiteral": (),
    "ThisExpression": (),
    "Super": (),
    "ArrayExpression": ("elements",),
    "ObjectExpression": ("properties",),
    "Property": ("key", "value"),
    "ObjectProperty": ("key", "value"),
    "SpreadElement": ("argument",),
    "FunctionExpression": ("id", "params", "body"),
    "ArrowFunctionExpression": ("params", "body"),
    "UnaryExpression": ("argument",),
    "UpdateExpression": ("argument",),
    "AwaitExpression": ("argument",),
    "YieldExpression": ("argument",),
    "BinaryExpression": ("left", "right"),
    "LogicalExpression": ("left", "right"),
    "AssignmentExpression": ("left", "right"),
    "ConditionalExpression": ("test", "consequent", "alternate"),
    "CallExpression": ("callee", "arguments"),
    "NewExpression": ("callee", "arguments"),
    "MemberExpression": ("object", "property"),
    "ChainExpression": ("expression",),
    "SequenceExpression": ("expressions",),
    "TemplateLiteral": ("quasis", "expressions"),
    "TaggedTemplateExpression": ("tag", "quasi"),
    "TemplateElement": (),
    # Patterns
    "ObjectPattern": ("properties",),
    "ArrayPattern": ("elements",),
    "AssignmentPattern": ("left", "right"),
    "RestElement": ("argument",),
    # JSX
    "JSXElement": ("openingElement", "children", "closingElement"),
    "JSXFragment": ("openingFragment", "children", "closingFragment"),
    "JSXOpeningElement": ("name", "attributes"),
    "JSXClosingElement": ("name",),
    "JSXOpeningFragment": (),
    "JSXClosingFragment": (),
    "JSXAttribute": ("name", "value"),
    "JSXSpreadAttribute": ("argument",),
    "JSXExpressionContainer": ("expression",),
    "JSXSpreadChild": ("expression",),
    "JSXEmptyExpression": (),
    "JSXText": (),
    "JSXIdentifier": (),
    "JSXMemberExpression": ("object", "property"),
    "JSXNamespacedName": ("namespace", "name"),
}

# Bookkeeping fields that never hold child nodes
_NON_CHILD_FIELDS = frozenset({"type", "loc", "range", "start", "end", "extra", "comments"})


def is_node(value: Any) -> bool:
    """Return True if ``value`` looks like a syntax tree node."""
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def child_fields(node: Node) -> tuple[str, ...]:
    """Return the child fields of ``node`` in traversal order.

    Unknown node types fall back to every field holding a node or a
    list of nodes, in dictionary order.
    """
    keys = VISITOR_KEYS.get(node["type"])
    if keys is not None:
        return keys
    fields = []
    for name, value in node.items():
        if name in _NON_CHILD_FIELDS:
            continue
        if is_node(value) or (isinstance(value, list) and any(is_node(v) for v in value)):
            fields.append(name)
    return tuple(fields)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node``."""
    for name in child_fields(node):
        value = node.get(name)
        if isinstance(value, list):
            for item in value:
                if is_node(item):
                    yield item
        elif is_node(value):
            yield value


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every descendant, depth first, in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))
