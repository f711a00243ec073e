"""Logic helpers for Motif templates.

Side-effect-free primitives used with ``{{#if}}`` for conditional
branching, usually as subexpressions:
`{{#if (and user.active (gt count 0))}}...{{/if}}`

Categories:
**Comparison**:
    - `eq a b` / `ne a b`: strict equality (``True`` never equals ``1``)
    - `gt a b` / `lt a b` / `gte a b` / `lte a b`: ordering; operands that
      cannot be ordered (``None``, mixed types) compare ``false``

**Boolean**:
    - `and a b`: ``a`` when falsy, else ``b``
    - `or a b`: ``a`` when truthy, else ``b``
    - `not a`: boolean negation

**Text**:
    - `substring str start [end]`: upper-cased slice; ``""`` for absent input.
      Negative or out-of-range bounds are clamped and reversed bounds swapped.

Example:
    ```handlebars
    {{#each users}}
      {{avatar name=name}} {{substring name 0 1}}
      {{#if (eq role "admin")}}{{badge children="Admin"}}{{/if}}
    {{/each}}
    ```

None of these raise for absent or mismatched operands; they return a
falsy or empty result instead.

"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any


def _same_kind(a: Any, b: Any) -> bool:
    return isinstance(a, bool) == isinstance(b, bool)


def _compare(op: Callable[[Any, Any], Any], a: Any, b: Any) -> bool:
    if a is None or b is None or not _same_kind(a, b):
        return False
    try:
        return bool(op(a, b))
    except TypeError:
        return False


def eq(a: Any = None, b: Any = None) -> bool:
    """Strict equality."""
    return _same_kind(a, b) and bool(a == b)


def ne(a: Any = None, b: Any = None) -> bool:
    return not eq(a, b)


def gt(a: Any = None, b: Any = None) -> bool:
    return _compare(operator.gt, a, b)


def lt(a: Any = None, b: Any = None) -> bool:
    return _compare(operator.lt, a, b)


def gte(a: Any = None, b: Any = None) -> bool:
    return _compare(operator.ge, a, b)


def lte(a: Any = None, b: Any = None) -> bool:
    return _compare(operator.le, a, b)


def and_(a: Any = None, b: Any = None) -> Any:
    """``a and b``, returning the deciding operand."""
    return a and b


def or_(a: Any = None, b: Any = None) -> Any:
    """``a or b``, returning the deciding operand."""
    return a or b


def not_(a: Any = None) -> bool:
    return not a


def _bound(value: Any, length: int, default: int) -> int:
    if value is None:
        return default
    try:
        index = int(value)
    except (TypeError, ValueError):
        return 0
    return min(max(index, 0), length)


def substring(value: Any = None, start: Any = 0, end: Any = None) -> str:
    """Upper-cased ``value[start:end]``; ``""`` when ``value`` is empty.

    Example:
        >>> substring("ada", 0, 1)
        'A'
        >>> substring("lovelace", 4, 0)
        'LOVE'
    """
    if not value:
        return ""
    text = str(value)
    lo = _bound(start, len(text), 0)
    hi = _bound(end, len(text), len(text))
    if lo > hi:
        lo, hi = hi, lo
    return text[lo:hi].upper()


LOGIC_HELPERS: dict[str, Callable[..., Any]] = {
    "eq": eq,
    "ne": ne,
    "gt": gt,
    "lt": lt,
    "gte": gte,
    "lte": lte,
    "and": and_,
    "or": or_,
    "not": not_,
    "substring": substring,
}


__all__ = [
    "LOGIC_HELPERS",
    "and_",
    "eq",
    "gt",
    "gte",
    "lt",
    "lte",
    "ne",
    "not_",
    "or_",
    "substring",
]
