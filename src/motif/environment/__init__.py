"""Motif environment: configuration, loaders, helper registry, errors."""

from motif.environment.exceptions import (
    ErrorCode,
    HelperError,
    RegistryFrozenError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    UndefinedError,
    UnknownHelperError,
    build_source_snippet,
)
from motif.environment.loaders import ChoiceLoader, DictLoader, FileSystemLoader, Loader
from motif.environment.registry import (
    HelperRegistry,
    component_helper,
    create_registry,
    register_all,
)
from motif.environment.core import Environment

__all__ = [
    "ChoiceLoader",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "HelperError",
    "HelperRegistry",
    "Loader",
    "RegistryFrozenError",
    "SourceSnippet",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "UndefinedError",
    "UnknownHelperError",
    "build_source_snippet",
    "component_helper",
    "create_registry",
    "register_all",
]
