"""The template variable transform.

Modules:
    descriptors: Recognise ``Component.templateVars = [...]`` and classify entries
    allocator: Collision-free substitute identifiers per variable category
    lists: Stand-in declarations for list variables
    control: Classify conditional expressions into control statements
    markers: Build marker calls for the downstream renderer
    locator: Find the component a descriptor belongs to
    rewriter: Rewrite one component in a single walk
    plugin: Program-level driver

"""

from jsxtv.transform.allocator import VariableMap, allocate
from jsxtv.transform.control import (
    ControlStatement,
    ExpressionArg,
    classify_control,
    get_expression_args,
)
from jsxtv.transform.descriptors import TemplateVar, TemplateVars, parse_template_vars
from jsxtv.transform.lists import build_list_declaration
from jsxtv.transform.locator import find_component
from jsxtv.transform.markers import MarkerFactory
from jsxtv.transform.plugin import (
    ComponentReport,
    TemplateVarsTransformer,
    TransformResult,
    transform,
)
from jsxtv.transform.rewriter import ComponentRewriter, ListAliasTable

__all__ = [
    "ComponentReport",
    "ComponentRewriter",
    "ControlStatement",
    "ExpressionArg",
    "ListAliasTable",
    "MarkerFactory",
    "TemplateVar",
    "TemplateVars",
    "TemplateVarsTransformer",
    "TransformResult",
    "VariableMap",
    "allocate",
    "build_list_declaration",
    "classify_control",
    "find_component",
    "get_expression_args",
    "parse_template_vars",
    "transform",
]
