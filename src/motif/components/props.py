"""Closed props types for Motif components.

Templates hand components an open mapping (the helper's hash arguments).
Each component kind declares a frozen dataclass listing the props it
consumes; ``from_mapping`` partitions an open mapping into those fields
plus one ``attrs`` sub-mapping of passthrough HTML attributes:

    >>> props = BadgeProps.from_mapping({"variant": "outline", "className": "ml-2", "id": "b"})
    >>> props.variant, props.class_name, dict(props.attrs)
    ('outline', 'ml-2', {'id': 'b'})

camelCase keys map to snake_case fields (``timeAgo`` → ``time_ago``),
and ``class`` is accepted as an alias for ``className``. Keys consumed by
a field never reach ``attrs``, and neither do the ``RESERVED_KEYS``
(``variant``, ``size``, ``state``...) on kinds that have no such field.

"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Self

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")

_ALIASES = {"class": "class_name", "className": "class_name"}

# Styling and content keys; never forwarded as attributes, even to a kind
# that declares no field for them.
RESERVED_KEYS = frozenset({"variant", "size", "state", "className", "class", "children"})

# String spellings of false that templates pass for boolean props
_FALSE_STRINGS = frozenset({"", "false"})


def prop_field_name(key: str) -> str:
    """Map a template prop name to its dataclass field name.

    Example:
        >>> prop_field_name("changeDescription")
        'change_description'
        >>> prop_field_name("className")
        'class_name'
    """
    if key in _ALIASES:
        return _ALIASES[key]
    return _CAMEL_RE.sub(r"_\1", key).lower()


def prop_flag(value: Any) -> bool:
    """Truth of a boolean prop; the strings ``"false"`` and ``""`` are false.

    Example:
        >>> prop_flag("false"), prop_flag("true"), prop_flag(None), prop_flag(True)
        (False, True, False, True)
    """
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


@dataclass(frozen=True, slots=True)
class ComponentProps:
    """Props shared by every component kind.

    Attributes:
        class_name: Caller override merged last into the class string
        children: Pre-rendered inner markup (block content or hash argument)
        attrs: Passthrough HTML attributes, in caller order
    """

    class_name: str | None = None
    children: str | None = None
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    @property
    def content(self) -> str:
        """Children as text; absent children render as an empty string."""
        return "" if self.children is None else str(self.children)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls) if f.name != "attrs")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> Self:
        """Partition an open props mapping into declared fields and ``attrs``."""
        known = cls.field_names()
        values: dict[str, Any] = {}
        attrs: dict[str, Any] = {}
        for key, value in (mapping or {}).items():
            name = prop_field_name(key)
            if name in known:
                values[name] = value
            elif key in RESERVED_KEYS:
                continue
            elif key == "attrs" and isinstance(value, Mapping):
                attrs.update(value)
            else:
                attrs[key] = value
        return cls(**values, attrs=attrs)

    @classmethod
    def coerce(cls, props: Any) -> Self:
        """Accept an instance of this props type or an open mapping."""
        if isinstance(props, cls):
            return props
        if isinstance(props, ComponentProps):
            # A different kind's props: re-partition its public view.
            return cls.from_mapping(props.as_mapping())
        return cls.from_mapping(props)

    def as_mapping(self) -> dict[str, Any]:
        """Flatten back into an open mapping (fields first, then attrs)."""
        data = {
            name: getattr(self, name)
            for name in sorted(self.field_names())
            if getattr(self, name) is not None
        }
        data.update(self.attrs)
        return data


__all__ = ["RESERVED_KEYS", "ComponentProps", "prop_field_name", "prop_flag"]
