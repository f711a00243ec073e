"""Motif: server-rendered UI components for logic-less templates.

Components are pure functions from typed props to trusted HTML
(``Markup``). A helper registry exposes them to a Handlebars-style
template engine, inline or in block form where the enclosed template
becomes the component's children.

Quickstart:
    >>> from motif import Environment
    >>> env = Environment()
    >>> env.from_string('{{button children="Save" variant="outline"}}').render()
    '<button data-slot="button" type="button" class="...">Save</button>'

Block form and composition:
    >>> page = env.from_string(
    ...     "{{#card}}{{#cardHeader}}{{cardTitle children=title}}{{/cardHeader}}{{/card}}"
    ... )
    >>> page.render(title="Revenue")

Direct factory calls:
    >>> from motif import ComponentKind, render_component
    >>> render_component(ComponentKind.AVATAR, {"name": "Ada Lovelace"})

Architecture:
Template Source → Lexer → Parser → Motif AST → Template.render
                                                  │
                       HelperRegistry ─→ component helper ─→ factory
                                                  │
                            VariantTable + merge_classes + serialize_attributes

Thread-Safety:
Factories are pure, the registry is frozen before first render, and
rendering keeps only local state. One Environment serves every request.

"""

from motif._types import Token, TokenType
from motif.components import (
    FACTORIES,
    ComponentKind,
    ComponentProps,
    render_component,
)
from motif.environment import (
    ChoiceLoader,
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    HelperError,
    HelperRegistry,
    RegistryFrozenError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UndefinedError,
    UnknownHelperError,
    create_registry,
    register_all,
)
from motif.render_context import RenderContext, get_render_context, render_context
from motif.template import HelperOptions, Template, pass_options
from motif.utils import Markup, VariantTable, escape, merge_classes, serialize_attributes

__version__ = "0.1.0"

__all__ = [
    "FACTORIES",
    "ChoiceLoader",
    "ComponentKind",
    "ComponentProps",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "HelperError",
    "HelperOptions",
    "HelperRegistry",
    "Markup",
    "RegistryFrozenError",
    "RenderContext",
    "SourceSnippet",
    "Template",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "Token",
    "TokenType",
    "UndefinedError",
    "UnknownHelperError",
    "VariantTable",
    "__version__",
    "create_registry",
    "escape",
    "get_render_context",
    "merge_classes",
    "pass_options",
    "register_all",
    "render_component",
    "render_context",
    "serialize_attributes",
]
