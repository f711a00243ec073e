"""Built-in helpers available in every Motif environment.

Block helpers:
    - ``{{#if cond [includeZero=true]}}...{{else}}...{{/if}}``
    - ``{{#unless cond}}...{{/unless}}``
    - ``{{#each items}}...{{else}}...{{/each}}`` with ``@index``,
      ``@first``, ``@last`` and (for mappings) ``@key``
    - ``{{#with obj}}...{{else}}...{{/with}}``

Inline helpers:
    - ``{{lookup obj key}}``: dynamic member lookup
    - ``{{log value... level="info"}}``: write to the ``motif.template``
      logger, renders nothing

Truthiness follows Python: ``None``, ``False``, ``0``, ``""`` and empty
containers are falsy. ``includeZero=true`` makes ``0`` truthy for ``if``
and ``unless``.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from motif.environment.exceptions import HelperError
from motif.template.options import HelperOptions, pass_options

logger = logging.getLogger("motif.template")


class _Missing:
    """Sentinel for a lookup that found nothing (distinct from ``None``)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def lookup_property(obj: Any, key: Any) -> Any:
    """Resolve ``obj[key]`` / ``obj.key`` for template paths.

    Mappings are subscripted, sequences accept integer indexes and
    ``length``, other objects use ``getattr``. Names starting with ``_``
    are never resolved. Returns ``MISSING`` when nothing is found.
    """
    if obj is None or obj is MISSING:
        return MISSING
    name = str(key)
    if name.startswith("_"):
        return MISSING
    if isinstance(obj, Mapping):
        if key in obj:
            return obj[key]
        return obj[name] if name in obj else MISSING
    if isinstance(obj, Sequence) and not isinstance(obj, str):
        if name == "length":
            return len(obj)
        if name.isdigit() and int(name) < len(obj):
            return obj[int(name)]
        return MISSING
    try:
        return getattr(obj, name)
    except AttributeError:
        return MISSING


def is_falsy(value: Any, *, include_zero: bool = False) -> bool:
    if include_zero and value == 0 and not isinstance(value, bool):
        return False
    return not value


def _require_block(options: HelperOptions) -> None:
    if options.fn is None:
        raise HelperError(f"'{options.name}' must be used as a block helper")


@pass_options
def if_(options: HelperOptions, condition: Any = None, *, includeZero: bool = False) -> str:
    _require_block(options)
    if is_falsy(condition, include_zero=includeZero):
        return options.inverse(options.context)
    return options.fn(options.context)


@pass_options
def unless(options: HelperOptions, condition: Any = None, *, includeZero: bool = False) -> str:
    _require_block(options)
    if is_falsy(condition, include_zero=includeZero):
        return options.fn(options.context)
    return options.inverse(options.context)


@pass_options
def each(options: HelperOptions, items: Any = None) -> str:
    _require_block(options)
    if isinstance(items, Mapping):
        entries: list[tuple[Any, Any]] = list(items.items())
    elif isinstance(items, Iterable) and not isinstance(items, str | bytes):
        entries = list(enumerate(items))
    else:
        entries = []

    if not entries:
        return options.inverse(options.context)

    keyed = isinstance(items, Mapping)
    last = len(entries) - 1
    out: list[str] = []
    for index, (key, item) in enumerate(entries):
        data = {"index": index, "first": index == 0, "last": index == last}
        if keyed:
            data["key"] = key
        out.append(options.fn(item, data=data))
    return "".join(out)


@pass_options
def with_(options: HelperOptions, context: Any = None) -> str:
    _require_block(options)
    if is_falsy(context):
        return options.inverse(options.context)
    return options.fn(context)


def lookup(obj: Any, key: Any) -> Any:
    value = lookup_property(obj, key)
    return None if value is MISSING else value


def log(*values: Any, level: str = "info") -> str:
    numeric = logging.getLevelNamesMapping().get(str(level).upper(), logging.INFO)
    logger.log(numeric, " ".join(str(v) for v in values))
    return ""


BUILTIN_HELPERS: dict[str, Any] = {
    "if": if_,
    "unless": unless,
    "each": each,
    "with": with_,
    "lookup": lookup,
    "log": log,
}


__all__ = ["BUILTIN_HELPERS", "MISSING", "is_falsy", "lookup_property"]
