"""JavaScript + JSX code generation from ESTree trees.

The printer aims for output that reparses to the same tree, not for
source fidelity: comments are dropped, strings are re-quoted with single
quotes and parentheses are emitted only where precedence requires them.

Node types are dispatched through a dict built once per printer, keyed by
the ``"type"`` field. Babel's literal and ``ObjectProperty`` spellings are
accepted alongside the ESTree ones.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from jsxtv.exceptions import UnsupportedNodeError
from jsxtv.nodes.base import Node

INDENT = "  "

PRIMARY = 20

# Binding power of binary and logical operators (higher binds tighter)
BINARY_PRECEDENCE: dict[str, int] = {
    "??": 4,
    "||": 5,
    "&&": 6,
    "|": 7,
    "^": 8,
    "&": 9,
    "==": 10,
    "!=": 10,
    "===": 10,
    "!==": 10,
    "<": 11,
    ">": 11,
    "<=": 11,
    ">=": 11,
    "instanceof": 11,
    "in": 11,
    "<<": 12,
    ">>": 12,
    ">>>": 12,
    "+": 13,
    "-": 13,
    "*": 14,
    "/": 14,
    "%": 14,
    "**": 15,
}

_PRECEDENCE: dict[str, int] = {
    "SequenceExpression": 1,
    "AssignmentExpression": 2,
    "ArrowFunctionExpression": 2,
    "YieldExpression": 2,
    "ConditionalExpression": 3,
    "UnaryExpression": 16,
    "AwaitExpression": 16,
    "UpdateExpression": 17,
    "NewExpression": 19,
    "CallExpression": 19,
    "MemberExpression": 19,
    "ChainExpression": 19,
    "TaggedTemplateExpression": 19,
}

_STRING_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

# Expression statements starting with these would parse as blocks or declarations
_STATEMENT_STARTS_AMBIGUOUS = ("{", "function", "class", "async function")


def precedence(node: Node) -> int:
    node_type = node["type"]
    if node_type in ("BinaryExpression", "LogicalExpression"):
        return BINARY_PRECEDENCE.get(node["operator"], PRIMARY)
    return _PRECEDENCE.get(node_type, PRIMARY)


def quote_string(value: str, quote: str = "'") -> str:
    """Quote ``value`` as a JavaScript string literal."""
    chars = []
    for char in value:
        if char == quote:
            chars.append("\\" + char)
        elif char in _STRING_ESCAPES:
            chars.append(_STRING_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chars.append(f"\\x{ord(char):02x}")
        else:
            chars.append(char)
    return quote + "".join(chars) + quote


def format_number(value: int | float) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return repr(value)


def _raw(node: Node) -> str | None:
    raw = node.get("raw")
    if raw is None:
        extra = node.get("extra")
        raw = extra.get("raw") if isinstance(extra, dict) else None
    return raw if isinstance(raw, str) else None


class CodePrinter:
    """Print ESTree + JSX nodes as JavaScript source.

    Example:
            >>> CodePrinter().print(parse_source("const a = <b c='d' />;"))
            "const a = <b c='d' />;\\n"

    """

    __slots__ = ("_dispatch", "_level")

    def __init__(self) -> None:
        self._level = 0
        self._dispatch: dict[str, Callable[[Node], str]] = {
            # Program and statements
            "File": lambda node: self._node(node["program"]),
            "Program": self._program,
            "ExpressionStatement": self._expression_statement,
            "BlockStatement": self._block,
            "EmptyStatement": lambda node: ";",
            "DebuggerStatement": lambda node: "debugger;",
            "ReturnStatement": self._return,
            "ThrowStatement": lambda node: f"throw {self._expr(node['argument'])};",
            "IfStatement": self._if,
            "ForStatement": self._for,
            "ForInStatement": lambda node: self._for_each(node, "in"),
            "ForOfStatement": lambda node: self._for_each(node, "of"),
            "WhileStatement": lambda node: f"while ({self._expr(node['test'])}) {self._body(node['body'])}",
            "DoWhileStatement": lambda node: f"do {self._body(node['body'])} while ({self._expr(node['test'])});",
            "BreakStatement": lambda node: self._jump("break", node),
            "ContinueStatement": lambda node: self._jump("continue", node),
            "LabeledStatement": lambda node: f"{node['label']['name']}: {self._node(node['body'])}",
            "SwitchStatement": self._switch,
            "TryStatement": self._try,
            "VariableDeclaration": self._variable_declaration,
            "VariableDeclarator": self._variable_declarator,
            "FunctionDeclaration": self._function,
            "ClassDeclaration": self._class,
            "ImportDeclaration": self._import,
            "ExportNamedDeclaration": self._export_named,
            "ExportDefaultDeclaration": self._export_default,
            "ExportAllDeclaration": self._export_all,
            # Expressions
            "Identifier": lambda node: node["name"],
            "Literal": self._literal,
            "StringLiteral": lambda node: quote_string(node["value"]),
            "NumericLiteral": lambda node: _raw(node) or format_number(node["value"]),
            "BooleanLiteral": lambda node: "true" if node["value"] else "false",
            "NullLiteral": lambda node: "null",
            "RegExpLiteral": lambda node: f"/{node['pattern']}/{node.get('flags', '')}",
            "ThisExpression": lambda node: "this",
            "Super": lambda node: "super",
            "TemplateLiteral": self._template_literal,
            "TaggedTemplateExpression": lambda node: (
                self._expr(node["tag"], 19) + self._template_literal(node["quasi"])
            ),
            "ArrayExpression": self._array,
            "ArrayPattern": self._array,
            "ObjectExpression": self._object,
            "ObjectPattern": self._object,
            "Property": self._property,
            "ObjectProperty": self._property,
            "SpreadElement": lambda node: "..." + self._expr(node["argument"], 2),
            "RestElement": lambda node: "..." + self._expr(node["argument"], 2),
            "AssignmentPattern": lambda node: f"{self._expr(node['left'], 3)} = {self._expr(node['right'], 2)}",
            "FunctionExpression": self._function,
            "ArrowFunctionExpression": self._arrow,
            "ClassExpression": self._class,
            "UnaryExpression": self._unary,
            "UpdateExpression": self._update,
            "AwaitExpression": lambda node: "await " + self._expr(node["argument"], 16),
            "YieldExpression": self._yield,
            "BinaryExpression": self._binary,
            "LogicalExpression": self._binary,
            "AssignmentExpression": lambda node: (
                f"{self._expr(node['left'], 3)} {node['operator']} {self._expr(node['right'], 2)}"
            ),
            "ConditionalExpression": lambda node: (
                f"{self._expr(node['test'], 4)} ? {self._expr(node['consequent'], 2)}"
                f" : {self._expr(node['alternate'], 2)}"
            ),
            "CallExpression": self._call,
            "NewExpression": self._new,
            "MemberExpression": self._member,
            "ChainExpression": lambda node: self._expr(node["expression"]),
            "SequenceExpression": lambda node: ", ".join(
                self._expr(expression, 2) for expression in node["expressions"]
            ),
            # JSX
            "JSXElement": self._jsx_element,
            "JSXFragment": self._jsx_fragment,
            "JSXAttribute": self._jsx_attribute,
            "JSXSpreadAttribute": lambda node: "{..." + self._expr(node["argument"], 2) + "}",
            "JSXExpressionContainer": lambda node: "{" + self._expr(node["expression"]) + "}",
            "JSXSpreadChild": lambda node: "{..." + self._expr(node["expression"], 2) + "}",
            "JSXEmptyExpression": lambda node: "",
            "JSXText": lambda node: _raw(node) if _raw(node) is not None else node["value"],
            "JSXIdentifier": lambda node: node["name"],
            "JSXMemberExpression": lambda node: f"{self._node(node['object'])}.{node['property']['name']}",
            "JSXNamespacedName": lambda node: f"{node['namespace']['name']}:{node['name']['name']}",
        }

    def print(self, node: Node) -> str:
        """Return source text for ``node``.

        Raises:
            UnsupportedNodeError: The tree holds a node type the printer
                does not know.
        """
        self._level = 0
        return self._node(node)

    # ------------------------------------------------------------------
    # Dispatch helpers
    # ------------------------------------------------------------------

    def _node(self, node: Node) -> str:
        handler = self._dispatch.get(node["type"])
        if handler is None:
            raise UnsupportedNodeError(node["type"])
        return handler(node)

    def _expr(self, node: Node, min_precedence: int = 0, *, wrap: bool = False) -> str:
        text = self._node(node)
        if wrap or precedence(node) < min_precedence:
            return f"({text})"
        return text

    def _pad(self) -> str:
        return INDENT * self._level

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _program(self, node: Node) -> str:
        statements = [self._node(statement) for statement in node["body"]]
        return "\n".join(statements) + "\n" if statements else ""

    def _expression_statement(self, node: Node) -> str:
        text = self._expr(node["expression"])
        if text.startswith(_STATEMENT_STARTS_AMBIGUOUS):
            text = f"({text})"
        return text + ";"

    def _block(self, node: Node) -> str:
        body = node["body"]
        if not body:
            return "{}"
        self._level += 1
        lines = [self._pad() + self._node(statement) for statement in body]
        self._level -= 1
        return "{\n" + "\n".join(lines) + "\n" + self._pad() + "}"

    def _body(self, node: Node) -> str:
        """Body of a loop or branch: blocks stay inline, statements follow."""
        return self._node(node)

    def _return(self, node: Node) -> str:
        argument = node.get("argument")
        if argument is None:
            return "return;"
        return f"return {self._expr(argument)};"

    def _jump(self, keyword: str, node: Node) -> str:
        label = node.get("label")
        return f"{keyword} {label['name']};" if label else f"{keyword};"

    def _if(self, node: Node) -> str:
        text = f"if ({self._expr(node['test'])}) {self._body(node['consequent'])}"
        alternate = node.get("alternate")
        if alternate is not None:
            text += f" else {self._body(alternate)}"
        return text

    def _for_init(self, node: Node | None) -> str:
        if node is None:
            return ""
        if node["type"] == "VariableDeclaration":
            return self._variable_declaration(node, semicolon=False)
        return self._expr(node)

    def _for(self, node: Node) -> str:
        init = self._for_init(node.get("init"))
        test = self._expr(node["test"]) if node.get("test") else ""
        update = self._expr(node["update"]) if node.get("update") else ""
        return f"for ({init}; {test}; {update}) {self._body(node['body'])}"

    def _for_each(self, node: Node, keyword: str) -> str:
        prefix = "for await" if node.get("await") else "for"
        left = self._for_init(node["left"])
        return f"{prefix} ({left} {keyword} {self._expr(node['right'], 2)}) {self._body(node['body'])}"

    def _switch(self, node: Node) -> str:
        lines = [f"switch ({self._expr(node['discriminant'])}) {{"]
        self._level += 1
        for case in node["cases"]:
            test = case.get("test")
            lines.append(self._pad() + (f"case {self._expr(test)}:" if test else "default:"))
            self._level += 1
            lines.extend(self._pad() + self._node(statement) for statement in case["consequent"])
            self._level -= 1
        self._level -= 1
        lines.append(self._pad() + "}")
        return "\n".join(lines)

    def _try(self, node: Node) -> str:
        text = "try " + self._block(node["block"])
        handler = node.get("handler")
        if handler is not None:
            param = handler.get("param")
            clause = f" catch ({self._expr(param)})" if param else " catch"
            text += clause + " " + self._block(handler["body"])
        finalizer = node.get("finalizer")
        if finalizer is not None:
            text += " finally " + self._block(finalizer)
        return text

    def _variable_declaration(self, node: Node, semicolon: bool = True) -> str:
        declarations = ", ".join(self._node(decl) for decl in node["declarations"])
        text = f"{node['kind']} {declarations}"
        return text + ";" if semicolon else text

    def _variable_declarator(self, node: Node) -> str:
        target = self._expr(node["id"])
        init = node.get("init")
        return f"{target} = {self._expr(init, 2)}" if init is not None else target

    def _import(self, node: Node) -> str:
        source = self._node(node["source"])
        specifiers = node.get("specifiers") or []
        if not specifiers:
            return f"import {source};"
        parts: list[str] = []
        named: list[str] = []
        for specifier in specifiers:
            kind = specifier["type"]
            local = specifier["local"]["name"]
            if kind == "ImportDefaultSpecifier":
                parts.append(local)
            elif kind == "ImportNamespaceSpecifier":
                parts.append(f"* as {local}")
            else:
                imported = self._module_name(specifier["imported"])
                named.append(imported if imported == local else f"{imported} as {local}")
        if named:
            parts.append("{ " + ", ".join(named) + " }")
        return f"import {', '.join(parts)} from {source};"

    def _module_name(self, node: Node) -> str:
        return node["name"] if node["type"] == "Identifier" else self._node(node)

    def _export_named(self, node: Node) -> str:
        declaration = node.get("declaration")
        if declaration is not None:
            return "export " + self._node(declaration)
        names = []
        for specifier in node.get("specifiers") or []:
            local = self._module_name(specifier["local"])
            exported = self._module_name(specifier["exported"])
            names.append(local if local == exported else f"{local} as {exported}")
        text = "export { " + ", ".join(names) + " }" if names else "export {}"
        if node.get("source") is not None:
            text += " from " + self._node(node["source"])
        return text + ";"

    def _export_default(self, node: Node) -> str:
        declaration = node["declaration"]
        if declaration["type"] in ("FunctionDeclaration", "ClassDeclaration"):
            return "export default " + self._node(declaration)
        text = self._expr(declaration, 2)
        if text.startswith(("function", "class")):
            text = f"({text})"
        return f"export default {text};"

    def _export_all(self, node: Node) -> str:
        exported = node.get("exported")
        alias = f" as {self._module_name(exported)}" if exported else ""
        return f"export *{alias} from {self._node(node['source'])};"

    # ------------------------------------------------------------------
    # Functions and classes
    # ------------------------------------------------------------------

    def _params(self, node: Node) -> str:
        return "(" + ", ".join(self._expr(param, 2) for param in node.get("params", ())) + ")"

    def _function(self, node: Node) -> str:
        prefix = "async function" if node.get("async") else "function"
        if node.get("generator"):
            prefix += "*"
        name = node.get("id")
        head = f"{prefix} {name['name']}" if name else prefix
        return f"{head}{self._params(node)} {self._block(node['body'])}"

    def _arrow(self, node: Node) -> str:
        prefix = "async " if node.get("async") else ""
        body = node["body"]
        if body["type"] == "BlockStatement":
            text = self._block(body)
        else:
            text = self._expr(body, 2)
            if text.startswith("{"):
                text = f"({text})"
        return f"{prefix}{self._params(node)} => {text}"

    def _method(self, key: str, kind: str, function: Node, *, static: bool = False) -> str:
        prefix = "static " if static else ""
        if kind in ("get", "set"):
            prefix += kind + " "
        if function.get("async"):
            prefix += "async "
        if function.get("generator"):
            prefix += "*"
        return f"{prefix}{key}{self._params(function)} {self._block(function['body'])}"

    def _property_key(self, node: Node) -> str:
        key = self._expr(node["key"], 2)
        return f"[{key}]" if node.get("computed") else key

    def _class(self, node: Node) -> str:
        head = "class"
        if node.get("id"):
            head += " " + node["id"]["name"]
        if node.get("superClass"):
            head += " extends " + self._expr(node["superClass"], 19)
        members = node["body"]["body"]
        if not members:
            return head + " {}"
        self._level += 1
        lines = [self._pad() + self._class_member(member) for member in members]
        self._level -= 1
        return head + " {\n" + "\n".join(lines) + "\n" + self._pad() + "}"

    def _class_member(self, node: Node) -> str:
        static = bool(node.get("static"))
        if node["type"] == "MethodDefinition":
            return self._method(self._property_key(node), node["kind"], node["value"], static=static)
        if node["type"] == "PropertyDefinition":
            text = ("static " if static else "") + self._property_key(node)
            value = node.get("value")
            return (text + f" = {self._expr(value, 2)}" if value is not None else text) + ";"
        return self._node(node)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _literal(self, node: Node) -> str:
        regex = node.get("regex")
        if isinstance(regex, dict):
            return f"/{regex['pattern']}/{regex.get('flags', '')}"
        if node.get("bigint") is not None:
            return f"{node['bigint']}n"
        value: Any = node.get("value")
        if isinstance(value, str):
            return quote_string(value)
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        raw = _raw(node)
        return raw if raw is not None else format_number(value)

    def _template_literal(self, node: Node) -> str:
        quasis = node["quasis"]
        expressions = node["expressions"]
        parts = []
        for index, quasi in enumerate(quasis):
            parts.append(quasi["value"]["raw"])
            if index < len(expressions):
                parts.append("${" + self._expr(expressions[index]) + "}")
        return "`" + "".join(parts) + "`"

    def _array(self, node: Node) -> str:
        elements = node["elements"]
        parts = ["" if element is None else self._expr(element, 2) for element in elements]
        if elements and elements[-1] is None:
            # a trailing hole needs its own comma
            parts.append("")
        return "[" + ", ".join(parts) + "]"

    def _object(self, node: Node) -> str:
        properties = node["properties"]
        if not properties:
            return "{}"
        return "{ " + ", ".join(self._node(prop) for prop in properties) + " }"

    def _property(self, node: Node) -> str:
        value = node["value"]
        kind = node.get("kind", "init")
        if kind in ("get", "set") or node.get("method"):
            return self._method(self._property_key(node), kind, value)
        key = self._property_key(node)
        if node.get("shorthand"):
            if value["type"] == "AssignmentPattern":
                return self._node(value)
            if value["type"] == "Identifier" and not node.get("computed") and value["name"] == key:
                return key
        return f"{key}: {self._expr(value, 2)}"

    def _unary(self, node: Node) -> str:
        operator = node["operator"]
        argument = self._expr(node["argument"], 16)
        if operator.isalpha():
            return f"{operator} {argument}"
        if operator in ("+", "-") and argument.startswith(operator):
            return f"{operator} {argument}"
        return operator + argument

    def _update(self, node: Node) -> str:
        argument = self._expr(node["argument"], 17)
        if node.get("prefix"):
            return node["operator"] + argument
        return argument + node["operator"]

    def _yield(self, node: Node) -> str:
        keyword = "yield*" if node.get("delegate") else "yield"
        argument = node.get("argument")
        return f"{keyword} {self._expr(argument, 2)}" if argument is not None else keyword

    def _binary(self, node: Node) -> str:
        operator = node["operator"]
        power = BINARY_PRECEDENCE[operator]
        left, right = node["left"], node["right"]
        if operator == "**":
            # `-a ** b` is a syntax error
            left_text = self._expr(
                left, power + 1, wrap=left["type"] in ("UnaryExpression", "AwaitExpression")
            )
            right_text = self._expr(right, power)
        else:
            left_text = self._expr(left, power, wrap=_mixes_nullish(operator, left))
            right_text = self._expr(right, power + 1, wrap=_mixes_nullish(operator, right))
        return f"{left_text} {operator} {right_text}"

    def _arguments(self, node: Node) -> str:
        return "(" + ", ".join(self._expr(arg, 2) for arg in node.get("arguments", ())) + ")"

    def _call(self, node: Node) -> str:
        callee = self._expr(node["callee"], 19)
        optional = "?." if node.get("optional") else ""
        return callee + optional + self._arguments(node)

    def _new(self, node: Node) -> str:
        callee = node["callee"]
        text = self._expr(callee, 19)
        if _contains_call(callee):
            text = f"({text})"
        return "new " + text + self._arguments(node)

    def _member(self, node: Node) -> str:
        obj = node["object"]
        text = self._expr(obj, 19)
        if obj["type"] == "Literal" and isinstance(obj.get("value"), int) and text.isdigit():
            text = f"({text})"
        optional = "?." if node.get("optional") else ""
        if node.get("computed"):
            return f"{text}{optional}[{self._expr(node['property'])}]"
        return f"{text}{optional or '.'}{self._node(node['property'])}"

    # ------------------------------------------------------------------
    # JSX
    # ------------------------------------------------------------------

    def _jsx_child(self, node: Node) -> str:
        if node["type"] in (
            "JSXText",
            "JSXElement",
            "JSXFragment",
            "JSXExpressionContainer",
            "JSXSpreadChild",
        ):
            return self._node(node)
        # markers and unwrapped expressions sit directly among children
        return "{" + self._expr(node) + "}"

    def _jsx_children(self, children: list[Node]) -> str:
        return "".join(self._jsx_child(child) for child in children)

    def _jsx_element(self, node: Node) -> str:
        opening = node["openingElement"]
        name = self._node(opening["name"])
        attributes = "".join(" " + self._node(attr) for attr in opening.get("attributes", ()))
        children = node.get("children") or []
        if not children and (opening.get("selfClosing") or node.get("closingElement") is None):
            return f"<{name}{attributes} />"
        return f"<{name}{attributes}>{self._jsx_children(children)}</{name}>"

    def _jsx_fragment(self, node: Node) -> str:
        return f"<>{self._jsx_children(node.get('children') or [])}</>"

    def _jsx_attribute(self, node: Node) -> str:
        name = self._node(node["name"])
        value = node.get("value")
        if value is None:
            return name
        if value["type"] in ("Literal", "StringLiteral") and isinstance(value.get("value"), str):
            raw = _raw(value)
            if raw is not None and raw[:1] in ("'", '"'):
                return f"{name}={raw}"
            text = value["value"]
            quote = "'" if '"' in text else '"'
            return f"{name}={quote}{text}{quote}"
        return f"{name}={self._node(value)}"


def _contains_call(callee: Node) -> bool:
    """A call anywhere along a member chain would end the ``new`` callee early."""
    node = callee
    while node["type"] == "MemberExpression":
        node = node["object"]
    return node["type"] == "CallExpression"


def _mixes_nullish(operator: str, operand: Node) -> bool:
    """``??`` cannot be mixed with ``||`` or ``&&`` without parentheses."""
    if operator not in ("??", "||", "&&") or operand["type"] != "LogicalExpression":
        return False
    inner = operand["operator"]
    return (operator == "??") != (inner == "??")


def generate(node: Node) -> str:
    """Print a tree (or any node) as JavaScript + JSX source."""
    return CodePrinter().print(node)
