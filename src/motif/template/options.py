"""Invocation context passed to block-aware helpers.

Helpers are plain callables that receive positional params and the tag's
hash as keyword arguments. A helper that needs the enclosed block, the
current context or private data (``@index``...) is decorated with
``@pass_options`` and receives a ``HelperOptions`` as its first argument.

Example:
    >>> @pass_options
    ... def bold(options, **hash):
    ...     if options.fn is None:
    ...         return ""
    ...     return f"<b>{options.fn(options.context)}</b>"

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

BlockRenderer = Callable[..., str]

_PASS_OPTIONS = "_motif_pass_options"


@dataclass(frozen=True, slots=True)
class HelperOptions:
    """What a ``@pass_options`` helper sees of its call site.

    Attributes:
        name: Helper name as written in the template
        hash: ``key=value`` arguments (also passed as keyword arguments)
        fn: Renders the block body: ``fn(context, data=None)``; None inline
        inverse: Renders the ``{{else}}`` body; None inline, ``""`` if absent
        context: Data context at the call site (``this``)
        data: Private data frame (``index``, ``first``, ``root``...)
    """

    name: str
    hash: Mapping[str, Any]
    fn: BlockRenderer | None
    inverse: BlockRenderer | None
    context: Any
    data: Mapping[str, Any]

    @property
    def is_block(self) -> bool:
        return self.fn is not None


def pass_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Mark ``func`` to receive a ``HelperOptions`` before its params."""
    setattr(func, _PASS_OPTIONS, True)
    return func


def wants_options(func: Callable[..., Any]) -> bool:
    return getattr(func, _PASS_OPTIONS, False)


__all__ = ["BlockRenderer", "HelperOptions", "pass_options", "wants_options"]
