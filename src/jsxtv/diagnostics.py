"""Structured diagnostics for the rewriting engine.

The engine degrades instead of failing. Dropped descriptor entries and
unrecognised control shapes are reported to a ``Diagnostics`` sink as
``Diagnostic`` records and logged through the standard ``logging``
module, so callers can inspect or silence them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from jsxtv.exceptions import ErrorCode
from jsxtv.nodes.base import Node

logger = logging.getLogger(__name__)


class Severity(Enum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One reported irregularity.

    Attributes:
        code: Searchable diagnostic code.
        message: Human readable description.
        severity: How loudly the record is logged.
        lineno: 1-based source line of the offending node, when known.
        col_offset: 0-based column of the offending node, when known.
    """

    code: ErrorCode
    message: str
    severity: Severity = Severity.DEBUG
    lineno: int | None = None
    col_offset: int | None = None

    def format(self) -> str:
        location = f" (line {self.lineno})" if self.lineno is not None else ""
        return f"[{self.code.value}] {self.message}{location}"


class Diagnostics:
    """Collects diagnostics and forwards them to a logger.

    Example:
            >>> sink = Diagnostics()
            >>> transform(tree, diagnostics=sink)
            >>> [d.code for d in sink.warnings]

    """

    __slots__ = ("_logger", "_records")

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger
        self._records: list[Diagnostic] = []

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[Diagnostic, ...]:
        return tuple(self._records)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self._records if d.severity is Severity.WARNING)

    def codes(self) -> list[ErrorCode]:
        return [d.code for d in self._records]

    def report(
        self,
        code: ErrorCode,
        message: str,
        *,
        node: Node | None = None,
        severity: Severity = Severity.DEBUG,
    ) -> Diagnostic:
        lineno, col_offset = _location(node)
        diagnostic = Diagnostic(code, message, severity, lineno, col_offset)
        self._records.append(diagnostic)
        self._logger.log(severity.value, diagnostic.format())
        return diagnostic

    def clear(self) -> None:
        self._records.clear()


def _location(node: Node | None) -> tuple[int | None, int | None]:
    if not node:
        return None, None
    loc = node.get("loc")
    if isinstance(loc, dict) and isinstance(loc.get("start"), dict):
        start = loc["start"]
        return start.get("line"), start.get("column")
    return None, None
