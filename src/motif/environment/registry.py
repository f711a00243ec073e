"""Helper registry for the Motif environment.

``HelperRegistry`` is the string-keyed binding table the template engine
reads helpers from. It is written once during startup and frozen when an
``Environment`` is built; every render afterwards only reads it.

Supports:
    - ``registry.register("name", func)`` / ``@registry.register("name")``
    - ``registry["name"] = func`` (replaces an existing binding)
    - ``registry.update({"name": func})``
    - ``registry["name"]``, ``"name" in registry``, ``len(registry)``

All writes are copy-on-write: readers holding the previous table are never
affected by a concurrent registration.

Component helpers:
    ``register_all`` binds every ``ComponentKind`` under its helper name.
    The wrapper turns the tag's hash into props, escapes plain string
    values (``class``/``className`` only have ``"`` replaced), renders
    the enclosed block (block form) into ``children``, and returns the
    factory's ``Markup`` so it is spliced unescaped:

    ```handlebars
    {{#card variant="outlined"}}
      {{#cardHeader}}{{cardTitle children=title}}{{/cardHeader}}
      {{#cardContent}}{{{body}}}{{/cardContent}}
    {{/card}}
    ```

"""

from __future__ import annotations

import logging
from collections.abc import Callable, ItemsView, Iterator, KeysView, Mapping, ValuesView
from typing import Any

from motif.components import FACTORIES, ComponentKind
from motif.environment.exceptions import ErrorCode, HelperError, RegistryFrozenError
from motif.environment.logic import LOGIC_HELPERS
from motif.template.options import HelperOptions, pass_options
from motif.utils.html import Markup, escape

logger = logging.getLogger(__name__)

Helper = Callable[..., Any]


class HelperRegistry:
    """Dict-like, freezable table of template helpers."""

    __slots__ = ("_frozen", "_helpers")

    def __init__(self, helpers: Mapping[str, Helper] | None = None):
        self._helpers: dict[str, Helper] = dict(helpers or {})
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> HelperRegistry:
        """Make the registry read-only. Returns ``self`` for chaining."""
        self._frozen = True
        return self

    def _check_writable(self, name: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register helper '{name}': registry is frozen",
                suggestion="Register helpers before building the Environment",
            )

    def register(
        self, name: str, func: Helper | None = None, *, replace: bool = False
    ) -> Any:
        """Bind ``name`` to ``func``.

        Usable directly or as a decorator::

            @registry.register("shout")
            def shout(text):
                return str(text).upper()

        Raises:
            RegistryFrozenError: The registry has been frozen
            HelperError: ``name`` is already bound and ``replace`` is false
        """
        if func is None:

            def decorator(f: Helper) -> Helper:
                self.register(name, f, replace=replace)
                return f

            return decorator

        self._check_writable(name)
        if name in self._helpers and not replace:
            error = HelperError(
                f"Helper '{name}' is already registered",
                suggestion="Pass replace=True to override an existing helper",
            )
            error.code = ErrorCode.DUPLICATE_HELPER
            raise error
        new = self._helpers.copy()
        new[name] = func
        self._helpers = new
        return func

    def __getitem__(self, name: str) -> Helper:
        return self._helpers[name]

    def __setitem__(self, name: str, func: Helper) -> None:
        self.register(name, func, replace=True)

    def __contains__(self, name: object) -> bool:
        return name in self._helpers

    def __iter__(self) -> Iterator[str]:
        return iter(self._helpers)

    def __len__(self) -> int:
        return len(self._helpers)

    def get(self, name: str, default: Helper | None = None) -> Helper | None:
        return self._helpers.get(name, default)

    def update(self, mapping: Mapping[str, Helper]) -> None:
        """Batch update; replaces existing bindings."""
        for name in mapping:
            self._check_writable(name)
        new = self._helpers.copy()
        new.update(mapping)
        self._helpers = new

    def copy(self) -> HelperRegistry:
        """Unfrozen copy, for building a variant of a frozen registry."""
        return HelperRegistry(self._helpers)

    def keys(self) -> KeysView[str]:
        return self._helpers.keys()

    def values(self) -> ValuesView[Helper]:
        return self._helpers.values()

    def items(self) -> ItemsView[str, Helper]:
        return self._helpers.items()

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<HelperRegistry {len(self._helpers)} helpers, {state}>"


# Hash keys holding class tokens; merged by token before serialization
_CLASS_KEYS = frozenset({"class", "className"})


def _class_prop(value: Any) -> Any:
    """Class tokens kept verbatim except the attribute-closing quote.

    ``[&>svg]:size-4`` must reach the merger as the same token the variant
    tables use.
    """
    if isinstance(value, Markup):
        return value
    if isinstance(value, str):
        return value.replace('"', "&#34;")
    if isinstance(value, Mapping):
        return {_class_prop(str(key)): enabled for key, enabled in value.items()}
    if isinstance(value, list | tuple):
        return type(value)(_class_prop(item) for item in value)
    return value


def _escape_prop(value: Any) -> Any:
    if isinstance(value, str):
        return escape(value)
    if isinstance(value, Mapping):
        return {key: _escape_prop(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return type(value)(_escape_prop(item) for item in value)
    return value


def component_helper(kind: ComponentKind) -> Helper:
    """Template helper wrapping the factory for ``kind``.

    Inline form takes props only from the hash. Block form renders the
    enclosed template with the current context and uses the result as
    ``children``, overriding any ``children`` in the hash.
    """
    factory = FACTORIES[kind]

    @pass_options
    def helper(options: HelperOptions, *params: Any, **hash_args: Any) -> Markup:
        if params:
            logger.debug("%s ignores positional arguments %r", kind.helper_name, params)
        props = {
            key: _class_prop(value) if key in _CLASS_KEYS else _escape_prop(value)
            for key, value in hash_args.items()
        }
        if options.fn is not None:
            props["children"] = Markup(options.fn(options.context))
        return factory(props)

    helper.__name__ = f"{kind.helper_name}_helper"
    helper.__qualname__ = helper.__name__
    return helper


def register_all(registry: HelperRegistry) -> HelperRegistry:
    """Bind every component kind and the logic helpers on ``registry``.

    Call once, during startup, before the registry is frozen.
    """
    for kind in ComponentKind:
        registry.register(kind.helper_name, component_helper(kind))
    for name, func in LOGIC_HELPERS.items():
        registry.register(name, func)
    logger.debug("Registered %d helpers", len(registry))
    return registry


def create_registry(*, freeze: bool = True) -> HelperRegistry:
    """Registry with every component helper and the logic helpers.

    Pass ``freeze=False`` to add application helpers before handing it to
    an ``Environment``. Engine built-ins (``if``, ``each``...) are supplied
    by the Environment and need not be registered.
    """
    registry = register_all(HelperRegistry())
    return registry.freeze() if freeze else registry


__all__ = [
    "Helper",
    "HelperRegistry",
    "component_helper",
    "create_registry",
    "register_all",
]
