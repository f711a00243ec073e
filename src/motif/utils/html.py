"""HTML helpers for Motif components.

Provides the attribute serializer used by every component factory and
re-exports markupsafe's ``Markup``, the trusted-fragment type that the
template engine splices into output without escaping.

Attribute serialization is syntactic joining only: values are NOT
escaped. Callers supply already-safe values.

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from markupsafe import Markup, escape

AttributeValue = str | int | float | bool | None


def serialize_attributes(attributes: Mapping[str, Any] | None) -> str:
    """Serialize a mapping into an HTML attribute string.

    Rules:
        - ``None`` values are omitted entirely
        - ``True`` emits the bare attribute name
        - ``False`` omits the attribute (never ``attr="false"``)
        - everything else becomes ``name="value"`` via ``str()``

    Entries keep the mapping's iteration order and are joined with a
    single space. Empty input gives an empty string.

    Example:
        >>> serialize_attributes({"disabled": True, "hidden": False, "id": "x"})
        'disabled id="x"'
        >>> serialize_attributes({})
        ''
    """
    if not attributes:
        return ""
    parts: list[str] = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(name)
        else:
            parts.append(f'{name}="{value}"')
    return " ".join(parts)


def open_tag(tag: str, attributes: Mapping[str, Any], *, self_closing: bool = False) -> str:
    """Build an opening tag from an attribute mapping.

    No stray space is emitted when the serialized attributes are empty.

    Example:
        >>> open_tag("div", {"data-slot": "card", "class": "border"})
        '<div data-slot="card" class="border">'
        >>> open_tag("input", {"class": "w-full", "disabled": True}, self_closing=True)
        '<input class="w-full" disabled />'
    """
    attrs = serialize_attributes(attributes)
    head = f"<{tag} {attrs}" if attrs else f"<{tag}"
    return f"{head} />" if self_closing else f"{head}>"


def join_markup(*parts: str | None) -> str:
    """Join optional markup fragments, dropping absent or empty ones."""
    return "".join(part for part in parts if part)


__all__ = [
    "AttributeValue",
    "Markup",
    "escape",
    "join_markup",
    "open_tag",
    "serialize_attributes",
]
