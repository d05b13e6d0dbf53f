"""Source and JSON input.

``parse_source`` parses JavaScript + JSX text with esprima and returns the
ESTree tree as plain dicts. ``load_tree`` accepts a tree already produced
elsewhere (``@babel/parser``, acorn, esprima) as JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import esprima
from esprima.error_handler import Error as EsprimaError

from jsxtv.exceptions import SourceParseError, TreeFormatError
from jsxtv.nodes.base import Node

logger = logging.getLogger(__name__)


def parse_source(
    source: str,
    *,
    filename: str | None = None,
    module: bool = True,
) -> Node:
    """Parse JavaScript + JSX source into an ESTree ``Program``.

    Args:
        source: Source text.
        filename: Name used in error messages.
        module: Parse as an ES module (``import``/``export`` allowed).
            Scripts are parsed in sloppy mode.

    Returns:
        The Program node, with ``loc`` on every node.

    Raises:
        SourceParseError: The source is not valid JavaScript + JSX.
    """
    parse = esprima.parseModule if module else esprima.parseScript
    try:
        program = parse(source, {"jsx": True, "loc": True})
    except EsprimaError as exc:
        lineno = getattr(exc, "lineNumber", None)
        column = getattr(exc, "column", None)
        raise SourceParseError(
            getattr(exc, "description", None) or str(exc),
            lineno=lineno,
            # esprima columns are 1-based
            col_offset=column - 1 if isinstance(column, int) and column > 0 else None,
            source=source,
            filename=filename,
        ) from exc
    tree = program.toDict()
    logger.debug("Parsed %s: %d top-level statement(s)", filename or "<source>", len(tree["body"]))
    return tree


def load_tree(text: str) -> Node:
    """Load an ESTree program from JSON text.

    A Babel ``File`` wrapper is accepted and returned as is.

    Raises:
        TreeFormatError: The JSON is malformed or does not hold a program.
    """
    try:
        tree: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TreeFormatError(f"Invalid JSON at line {exc.lineno}: {exc.msg}") from exc
    if not isinstance(tree, dict):
        raise TreeFormatError(f"Expected a JSON object, got {type(tree).__name__}")
    program = tree.get("program") if tree.get("type") == "File" else tree
    if not isinstance(program, dict) or program.get("type") != "Program":
        raise TreeFormatError(f"Expected a Program node, got {tree.get('type')!r}")
    return tree
