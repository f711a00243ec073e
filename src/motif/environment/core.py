"""Motif Environment: configuration, helper lookup and template cache.

The Environment is built once at startup and shared by every render:

    >>> from motif import DictLoader, Environment
    >>> env = Environment(loader=DictLoader({"hello.hbs": "Hi {{name}}"}))
    >>> env.render("hello.hbs", {"name": "Ada"})
    'Hi Ada'

Helpers:
    Lookup order is the environment's ``HelperRegistry`` first, then the
    engine built-ins (``if``, ``unless``, ``each``, ``with``, ``lookup``,
    ``log``). Without an explicit registry the environment uses
    ``create_registry()``: every component helper plus the logic helpers.
    The registry is frozen here; registration must happen before.

Partials:
    ``{{> name}}`` resolves through ``partials`` (in-memory sources) and
    then the loader.

Thread-Safety:
    Configuration is read-only after construction. The template cache is
    guarded by a lock; rendering itself shares no mutable state.

"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Mapping
from typing import Any

from motif.environment.exceptions import TemplateNotFoundError, TemplateSyntaxError
from motif.environment.loaders import Loader
from motif.environment.registry import Helper, HelperRegistry, create_registry
from motif.template.builtins import BUILTIN_HELPERS
from motif.template.core import Template
from motif.template.parser import parse

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 400


class Environment:
    """Central configuration object for Motif templates.

    Args:
        loader: Source of named templates and partials
        helpers: Helper registry; frozen on assignment. Defaults to
            ``create_registry()``
        partials: In-memory partial sources, checked before the loader
        strict: Raise ``UndefinedError`` for a missing top-level variable
            instead of rendering it empty
        autoescape: HTML-escape ``{{expr}}`` output (``{{{expr}}}`` never is)
        cache_size: Maximum number of compiled templates kept
    """

    __slots__ = (
        "_cache",
        "_cache_lock",
        "_hits",
        "_misses",
        "_partials",
        "__weakref__",
        "autoescape",
        "cache_size",
        "helpers",
        "loader",
        "strict",
    )

    def __init__(
        self,
        loader: Loader | None = None,
        *,
        helpers: HelperRegistry | None = None,
        partials: Mapping[str, str] | None = None,
        strict: bool = False,
        autoescape: bool = True,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self.loader = loader
        self.helpers = (helpers if helpers is not None else create_registry()).freeze()
        self._partials: dict[str, str] = dict(partials or {})
        self.strict = strict
        self.autoescape = autoescape
        self.cache_size = cache_size
        self._cache: OrderedDict[str, Template] = OrderedDict()
        self._cache_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    # =========================================================================
    # Helpers & partials
    # =========================================================================

    def get_helper(self, name: str) -> Helper | None:
        helper = self.helpers.get(name)
        if helper is None:
            helper = BUILTIN_HELPERS.get(name)
        return helper

    def register_partial(self, name: str, source: str) -> None:
        """Add or replace an in-memory partial."""
        partials = self._partials.copy()
        partials[name] = source
        self._partials = partials
        with self._cache_lock:
            self._cache.pop(self._partial_key(name), None)

    @staticmethod
    def _partial_key(name: str) -> str:
        return f"partial:{name}"

    def get_partial(self, name: str) -> Template:
        """Template for ``{{> name}}``.

        Raises:
            TemplateNotFoundError: Neither ``partials`` nor the loader has it
        """
        source = self._partials.get(name)
        if source is not None:
            return self._cached(
                self._partial_key(name), lambda: self._compile(source, name, None)
            )
        try:
            return self.get_template(name)
        except TemplateNotFoundError as exc:
            raise TemplateNotFoundError(f"Partial '{name}' could not be found: {exc}") from exc

    # =========================================================================
    # Templates
    # =========================================================================

    def from_string(self, source: str, name: str | None = None) -> Template:
        """Compile template source. The result is not cached."""
        return self._compile(source, name, None)

    def get_template(self, name: str) -> Template:
        """Load, compile and cache a template by name.

        Raises:
            TemplateNotFoundError: No loader, or the loader lacks ``name``
            TemplateSyntaxError: The source does not parse
        """
        return self._cached(name, lambda: self._load(name))

    def render(self, name: str, data: Any = None, /, **kwargs: Any) -> str:
        """Shortcut for ``get_template(name).render(data, **kwargs)``."""
        return self.get_template(name).render(data, **kwargs)

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def cache_info(self) -> dict[str, int]:
        with self._cache_lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._cache),
                "max_size": self.cache_size,
            }

    def _load(self, name: str) -> Template:
        if self.loader is None:
            raise TemplateNotFoundError(
                f"Template '{name}' not found: no loader configured on this Environment"
            )
        source, filename = self.loader.get_source(name)
        return self._compile(source, name, filename)

    def _compile(self, source: str, name: str | None, filename: str | None) -> Template:
        try:
            node = parse(source, name, filename)
        except TemplateSyntaxError:
            logger.debug("Syntax error compiling template %s", name or "(inline)")
            raise
        return Template(self, node, name, filename, source)

    def _cached(self, key: str, build: Callable[[], Template]) -> Template:
        with self._cache_lock:
            template = self._cache.get(key)
            if template is not None:
                self._cache.move_to_end(key)
                self._hits += 1
                return template
            self._misses += 1

        logger.debug("Template cache miss: %s", key)
        template = build()

        if self.cache_size > 0:
            with self._cache_lock:
                self._cache[key] = template
                self._cache.move_to_end(key)
                while len(self._cache) > self.cache_size:
                    self._cache.popitem(last=False)
        return template

    def __repr__(self) -> str:
        return (
            f"<Environment loader={type(self.loader).__name__ if self.loader else None} "
            f"helpers={len(self.helpers)} strict={self.strict}>"
        )


__all__ = ["DEFAULT_CACHE_SIZE", "Environment"]
