"""Program-level driver.

Scans a program for descriptor statements (``Card.templateVars = [...]``),
removes each one, and rewrites the component it names. With
``tidy_only`` the descriptors are removed and nothing else changes, which
is what production builds want.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from jsxtv.codegen import generate
from jsxtv.config import DEFAULT_CONFIG, TransformConfig
from jsxtv.diagnostics import Diagnostic, Diagnostics, Severity
from jsxtv.exceptions import ErrorCode, TreeFormatError
from jsxtv.nodes.base import Node
from jsxtv.parsing import parse_source
from jsxtv.traversal import NodePath, Scope, traverse
from jsxtv.transform.descriptors import TemplateVars, parse_template_vars
from jsxtv.transform.locator import component_function, find_component
from jsxtv.transform.rewriter import ComponentRewriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ComponentReport:
    """What was done to one component.

    Attributes:
        name: Component name from the descriptor.
        rewritten: False when the descriptor was only removed.
        replace: Replace variable to generated identifier.
        control: Control variable to generated identifier.
        list: List variable to generated identifier.
        context: Generated context identifier.
        aliases: Every name denoting a list, mapped to its original list.
    """

    name: str
    rewritten: bool = False
    replace: dict[str, str] = field(default_factory=dict)
    control: dict[str, str] = field(default_factory=dict)
    list: dict[str, str] = field(default_factory=dict)
    context: str | None = None
    aliases: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class TransformResult:
    """Outcome of a transform run.

    ``tree`` is the input tree, edited in place. ``code`` holds the printed
    program when the run started from source text.
    """

    tree: Node
    components: tuple[ComponentReport, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    code: str | None = None

    def component(self, name: str) -> ComponentReport | None:
        for report in self.components:
            if report.name == name:
                return report
        return None


def program_of(tree: Node) -> Node:
    """Return the Program node of a tree (unwrapping a Babel ``File``)."""
    if not isinstance(tree, dict):
        raise TreeFormatError(f"Expected an ESTree node, got {type(tree).__name__}")
    node_type = tree.get("type")
    if node_type == "File" and isinstance(tree.get("program"), dict):
        tree = tree["program"]
        node_type = tree.get("type")
    if node_type != "Program" or not isinstance(tree.get("body"), list):
        raise TreeFormatError(f"Expected a Program node, got {node_type!r}")
    return tree


class TemplateVarsTransformer:
    """Apply the template variable transform to ESTree programs.

    Args:
        config: Transform options.
        diagnostics: Sink for diagnostics; a fresh one per run when None.

    Example:
            >>> transformer = TemplateVarsTransformer(TransformConfig(tidy_only=True))
            >>> result = transformer.transform(tree)
            >>> [c.name for c in result.components]

    """

    __slots__ = ("_config", "_diagnostics", "_reports", "_scope")

    def __init__(
        self,
        config: TransformConfig = DEFAULT_CONFIG,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self._config = config
        self._diagnostics = diagnostics
        self._reports: list[ComponentReport] = []
        self._scope: Scope | None = None

    @property
    def config(self) -> TransformConfig:
        return self._config

    def transform(self, tree: Node) -> TransformResult:
        """Transform ``tree`` in place.

        Raises:
            TreeFormatError: ``tree`` is not a Program (or a File holding one).
        """
        program = program_of(tree)
        diagnostics = self._diagnostics if self._diagnostics is not None else Diagnostics()
        start = len(diagnostics)
        self._reports = []
        # one scope per program: uids never repeat across components
        self._scope = Scope(program)

        traverse(
            NodePath(program),
            {"ExpressionStatement": lambda path: self._visit_statement(path, diagnostics)},
        )
        logger.debug("Processed %d template descriptor(s)", len(self._reports))
        return TransformResult(
            tree=tree,
            components=tuple(self._reports),
            diagnostics=diagnostics.records[start:],
        )

    def _visit_statement(self, path: NodePath, diagnostics: Diagnostics) -> None:
        template_vars = parse_template_vars(
            path.node["expression"], self._config.descriptor_property
        )
        if template_vars is None:
            return

        severity = Severity.WARNING if self._config.report_dropped else Severity.DEBUG
        for name, category in template_vars.dropped:
            diagnostics.report(
                ErrorCode.UNKNOWN_VARIABLE_TYPE,
                f"{template_vars.component}: template variable {name!r} has unknown type {category!r}",
                node=path.node,
                severity=severity,
            )

        # removed before the search so sibling paths found below stay valid
        path.remove()
        if self._config.tidy_only:
            self._reports.append(ComponentReport(template_vars.component))
            return

        component_path = None
        if path.parent_path is not None:
            component_path = find_component(path.parent_path, template_vars.component)
        self._rewrite(template_vars, component_path, path, diagnostics)

    def _rewrite(
        self,
        template_vars: TemplateVars,
        component_path: NodePath | None,
        descriptor_path: NodePath,
        diagnostics: Diagnostics,
    ) -> None:
        name = template_vars.component
        function = component_function(component_path.node) if component_path is not None else None
        if function is None:
            reason = "is not declared" if component_path is None else "is not a function"
            diagnostics.report(
                ErrorCode.COMPONENT_NOT_FOUND,
                f"Component {name!r} {reason} next to its descriptor; nothing rewritten",
                node=descriptor_path.node,
            )
            self._reports.append(ComponentReport(name))
            return

        assert self._scope is not None
        rewriter = ComponentRewriter(
            component_path, function, template_vars, self._scope, self._config, diagnostics
        )
        logger.debug("Rewriting component %s", name)
        rewriter.rewrite()
        self._reports.append(
            ComponentReport(
                name=name,
                rewritten=True,
                replace=dict(rewriter.replace_map.mapping),
                control=dict(rewriter.control_map.mapping),
                list=dict(rewriter.list_map.mapping),
                context=rewriter.context,
                aliases=rewriter.aliases.as_dict(),
            )
        )


def transform(
    tree: Node,
    config: TransformConfig = DEFAULT_CONFIG,
    diagnostics: Diagnostics | None = None,
) -> TransformResult:
    """Apply the template variable transform to an ESTree program in place."""
    return TemplateVarsTransformer(config, diagnostics).transform(tree)


def transform_source(
    source: str,
    config: TransformConfig = DEFAULT_CONFIG,
    diagnostics: Diagnostics | None = None,
    *,
    filename: str | None = None,
) -> TransformResult:
    """Parse, transform and print JavaScript + JSX source.

    Raises:
        SourceParseError: ``source`` does not parse.
    """
    tree = parse_source(source, filename=filename)
    result = transform(tree, config, diagnostics)
    return replace(result, code=generate(tree))
