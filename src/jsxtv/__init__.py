"""jsxtv: template variable extraction for JSX components.

Components declare which of their variables stand for template content::

    const Card = ({ title, visible, tags }) => (
        <div>
            <h1>{title}</h1>
            {visible && <Badge />}
            <ul>{tags.map((tag) => <li>{tag}</li>)}</ul>
        </div>
    );
    Card.templateVars = ['title', ['visible', { type: 'control' }], ['tags', { type: 'list' }]];

jsxtv rewrites such components so that rendering them once emits
renderer-neutral template markup: replace variables become value markers,
conditionals render every branch between control markers, and lists
render one item between list markers.

Quickstart:
    >>> from jsxtv import transform_source
    >>> result = transform_source(source)
    >>> print(result.code)

Trees:
    >>> from jsxtv import parse_source, transform, generate
    >>> tree = parse_source(source)
    >>> transform(tree, TransformConfig(tidy_only=True))
    >>> generate(tree)

Architecture:
Source → esprima → ESTree dicts → TemplateVarsTransformer → CodePrinter → Source

1. **Descriptors**: ``Component.templateVars = [...]`` statements are
   found, classified and removed
2. **Locator**: the named component declaration is found next to its
   descriptor
3. **Rewriter**: one walk over the component rewrites identifiers,
   conditionals, list slots and markup elements
4. **Printer**: the edited tree is printed back to JavaScript + JSX

Irregular input never raises inside the engine; it is reported to a
``Diagnostics`` sink and logged under the ``jsxtv`` logger.

"""

from jsxtv.codegen import generate
from jsxtv.config import DEFAULT_CONFIG, TransformConfig
from jsxtv.diagnostics import Diagnostic, Diagnostics, Severity
from jsxtv.exceptions import (
    ConfigError,
    ErrorCode,
    JsxtvError,
    SourceParseError,
    TreeFormatError,
    UnsupportedNodeError,
)
from jsxtv.parsing import load_tree, parse_source
from jsxtv.transform import (
    ComponentReport,
    TemplateVarsTransformer,
    TransformResult,
    transform,
)
from jsxtv.transform.plugin import transform_source

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "ComponentReport",
    "ConfigError",
    "Diagnostic",
    "Diagnostics",
    "ErrorCode",
    "JsxtvError",
    "Severity",
    "SourceParseError",
    "TemplateVarsTransformer",
    "TransformConfig",
    "TransformResult",
    "TreeFormatError",
    "UnsupportedNodeError",
    "__version__",
    "generate",
    "load_tree",
    "parse_source",
    "transform",
    "transform_source",
]
