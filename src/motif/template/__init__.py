"""Motif template engine: lexer, parser, AST and renderer.

The engine understands a logic-less, Handlebars-compatible subset. All
logic lives in helpers; see ``motif.template.builtins`` for the ones
every environment carries.
"""

from motif.template.builtins import BUILTIN_HELPERS
from motif.template.core import Template
from motif.template.options import HelperOptions, pass_options
from motif.template.parser import parse

__all__ = ["BUILTIN_HELPERS", "HelperOptions", "Template", "parse", "pass_options"]
