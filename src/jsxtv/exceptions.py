"""Exceptions for jsxtv.

Exception Hierarchy:
JsxtvError (base)
├── SourceParseError        # Source text rejected by the parser
├── TreeFormatError         # JSON input is not an ESTree program
├── UnsupportedNodeError    # Printer met a node type it cannot emit
└── ConfigError             # Invalid transform options

The rewriting engine itself never raises for irregular input: unknown
shapes are left as written and reported to the diagnostics sink under the
same error codes.

"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Searchable error and diagnostic codes.

    Format: JTV-{CATEGORY}-{NUMBER}
    Categories: PAR (parsing), GEN (code generation), CFG (configuration),
    DSC (descriptor), LST (list), CTL (control), CMP (component)
    """

    # Parsing (JTV-PAR-xxx)
    SOURCE_SYNTAX = "JTV-PAR-001"
    TREE_FORMAT = "JTV-PAR-002"

    # Code generation (JTV-GEN-xxx)
    UNSUPPORTED_NODE = "JTV-GEN-001"

    # Configuration (JTV-CFG-xxx)
    UNKNOWN_OPTION = "JTV-CFG-001"
    INVALID_OPTION = "JTV-CFG-002"

    # Engine diagnostics
    UNKNOWN_VARIABLE_TYPE = "JTV-DSC-001"
    UNKNOWN_LIST_CHILD = "JTV-LST-001"
    UNRECOGNIZED_CONTROL = "JTV-CTL-001"
    COMPONENT_NOT_FOUND = "JTV-CMP-001"
    UNSUPPORTED_PARAMETER = "JTV-CMP-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'parser', 'descriptor')."""
        prefix = self.value.split("-")[1]
        return {
            "PAR": "parser",
            "GEN": "codegen",
            "CFG": "config",
            "DSC": "descriptor",
            "LST": "list",
            "CTL": "control",
            "CMP": "component",
        }.get(prefix, "unknown")


class JsxtvError(Exception):
    """Base exception for all jsxtv errors.

    Attributes:
        message: Human readable description.
        code: Searchable error code, when one applies.
    """

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"[{self.code.value}] {self.message}"


class SourceParseError(JsxtvError):
    """Source text could not be parsed into a syntax tree."""

    def __init__(
        self,
        message: str,
        *,
        lineno: int | None = None,
        col_offset: int | None = None,
        source: str | None = None,
        filename: str | None = None,
    ) -> None:
        self.lineno = lineno
        self.col_offset = col_offset
        self.source = source
        self.filename = filename
        super().__init__(message, code=ErrorCode.SOURCE_SYNTAX)

    def __str__(self) -> str:
        location = self.filename or "<source>"
        if self.lineno is not None:
            location = f"{location}:{self.lineno}"
        text = f"{super().__str__()} in {location}"
        snippet = self._snippet()
        return f"{text}\n{snippet}" if snippet else text

    def _snippet(self) -> str:
        if self.source is None or self.lineno is None:
            return ""
        lines = self.source.splitlines()
        if not 0 < self.lineno <= len(lines):
            return ""
        gutter = f"{self.lineno:>4} | "
        parts = [gutter + lines[self.lineno - 1]]
        if self.col_offset is not None:
            parts.append(" " * (len(gutter) + self.col_offset) + "^")
        return "\n".join(parts)


class TreeFormatError(JsxtvError):
    """JSON input did not hold an ESTree program."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.TREE_FORMAT)


class UnsupportedNodeError(JsxtvError):
    """The printer cannot emit a node of this type."""

    def __init__(self, node_type: str) -> None:
        self.node_type = node_type
        super().__init__(f"Cannot generate code for node type {node_type!r}", code=ErrorCode.UNSUPPORTED_NODE)


class ConfigError(JsxtvError):
    """Transform options are invalid."""

    def __init__(self, message: str, *, code: ErrorCode = ErrorCode.INVALID_OPTION) -> None:
        super().__init__(message, code=code)
