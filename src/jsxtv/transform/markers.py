"""Marker calls left in rewritten trees for the downstream renderer.

Three marker families are emitted; each takes the render context as its
last argument::

    getLanguageReplace('format', 'title', _ctx)
    getLanguageList('open' | 'close' | 'primitive' | 'objectProperty', 'tags', _ctx)
    getLanguageControl(['ifEqual', 'open'], [{type: 'identifier', value: 'status'},
                                             {type: 'literal', value: 'active'}], _ctx)

Executing the rewritten component once turns these into template tags.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from jsxtv.nodes import builders
from jsxtv.nodes.base import Node

if TYPE_CHECKING:
    from jsxtv.config import TransformConfig
    from jsxtv.transform.control import ExpressionArg


class MarkerFactory:
    """Build marker call expressions for one component.

    Args:
        config: Transform config naming the marker callees.
        context: Name of the component's context identifier.

    """

    __slots__ = ("_config", "context")

    def __init__(self, config: TransformConfig, context: str) -> None:
        self._config = config
        self.context = context

    def _call(self, callee: str, arguments: Sequence[Node]) -> Node:
        return builders.call_expression(
            builders.identifier(callee),
            [*arguments, builders.identifier(self.context)],
        )

    def value(self, name: str) -> Node:
        return self._call(
            self._config.replace_marker,
            [builders.string_literal("format"), builders.string_literal(name)],
        )

    def list(self, action: str, name: str | None) -> Node:
        label = builders.null_literal() if name is None else builders.string_literal(name)
        return self._call(self._config.list_marker, [builders.string_literal(action), label])

    def list_pair(self, name: str) -> tuple[Node, Node]:
        return self.list("open", name), self.list("close", name)

    def control(self, statement_type: str, phase: str, args: Sequence[ExpressionArg]) -> Node:
        targets = builders.array_expression(
            [builders.string_literal(statement_type), builders.string_literal(phase)]
        )
        arg_objects = builders.array_expression(
            [
                builders.object_expression(
                    [
                        builders.object_property(
                            builders.identifier("type"), builders.string_literal(arg.type)
                        ),
                        builders.object_property(
                            builders.identifier("value"), builders.string_literal(arg.value)
                        ),
                    ]
                )
                for arg in args
            ]
        )
        return self._call(self._config.control_marker, [targets, arg_objects])

    def control_pair(self, statement_type: str, args: Sequence[ExpressionArg]) -> tuple[Node, Node]:
        return self.control(statement_type, "open", args), self.control(statement_type, "close", args)
