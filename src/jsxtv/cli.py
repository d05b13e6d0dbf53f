"""Command-line entry point.

Usage:
    jsxtv Card.jsx                      # print the rewritten module
    jsxtv Card.jsx -o Card.tv.jsx       # write it to a file
    jsxtv Card.jsx --tidy-only          # only strip descriptors
    jsxtv Card.json --from-json --ast   # ESTree JSON in, ESTree JSON out
    jsxtv - < Card.jsx                  # read standard input
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jsxtv import __version__
from jsxtv.codegen import generate
from jsxtv.config import TransformConfig
from jsxtv.diagnostics import Diagnostics
from jsxtv.exceptions import ConfigError, JsxtvError
from jsxtv.parsing import load_tree, parse_source
from jsxtv.transform import transform

logger = logging.getLogger("jsxtv")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsxtv",
        description="Rewrite JSX components declaring templateVars for template extraction",
    )
    parser.add_argument("input", help="JSX source file, or '-' for standard input")
    parser.add_argument("-o", "--output", help="Write the result here instead of standard output")
    parser.add_argument("--config", help="JSON file of transform options (camelCase or snake_case)")
    parser.add_argument(
        "--tidy-only", action="store_true", help="Remove descriptors without rewriting components"
    )
    parser.add_argument("--ast", action="store_true", help="Emit the ESTree tree as JSON")
    parser.add_argument(
        "--from-json", action="store_true", help="Read an ESTree JSON tree instead of source"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every diagnostic")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log errors only")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(path: str | None, *, tidy_only: bool = False) -> TransformConfig:
    """Build the transform config from an options file and flags."""
    options: dict[str, Any] = {}
    if path is not None:
        try:
            options = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: invalid JSON ({exc.msg})") from exc
        if not isinstance(options, dict):
            raise ConfigError(f"{path}: options must be a JSON object")
    config = TransformConfig.from_options(options)
    if tidy_only:
        config = config.merged(tidy_only=True)
    return config


def _read_input(name: str) -> tuple[str, str]:
    if name == "-":
        return sys.stdin.read(), "<stdin>"
    return Path(name).read_text(encoding="utf-8"), name


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    try:
        config = load_config(args.config, tidy_only=args.tidy_only)
        text, filename = _read_input(args.input)
        tree = load_tree(text) if args.from_json else parse_source(text, filename=filename)
        diagnostics = Diagnostics()
        result = transform(tree, config, diagnostics)
        output = json.dumps(result.tree, indent=2) + "\n" if args.ast else generate(result.tree)
    except (JsxtvError, OSError) as exc:
        print(f"jsxtv: {exc}", file=sys.stderr)
        return 1

    rewritten = sum(1 for report in result.components if report.rewritten)
    logger.info("%s: %d descriptor(s), %d component(s) rewritten", filename, len(result.components), rewritten)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
