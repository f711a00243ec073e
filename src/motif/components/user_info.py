"""User information block: name, email and id rows for a resolved user.

The caller supplies an already-resolved user record (mapping or object
with ``name``, ``email`` and ``id``). A missing record is a caller
contract violation: the block still renders, with empty values, and a
warning is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps
from motif.utils.classes import merge_classes
from motif.utils.html import Markup, open_tag

logger = logging.getLogger(__name__)

USER_INFO_CLASSES = "space-y-4"

_ROW_CLASSES = "p-4 bg-gray-50 rounded-lg border border-gray-100"
_LABEL_CLASSES = "text-xs font-semibold text-gray-500 uppercase tracking-wide"

# (label, field, value classes)
_ROWS = (
    ("Full Name", "name", "text-gray-900 mt-1 font-medium"),
    ("Email Address", "email", "text-gray-900 mt-1 font-medium"),
    ("User ID", "id", "text-gray-900 mt-1 font-mono text-sm"),
)


@dataclass(frozen=True, slots=True)
class UserInfoProps(ComponentProps):
    user: Any = None


def user_field(user: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object; ``None`` when missing."""
    if user is None:
        return None
    if isinstance(user, Mapping):
        return user.get(name)
    return getattr(user, name, None)


def create_user_info(props: UserInfoProps | Any) -> Markup:
    props = UserInfoProps.coerce(props)
    if props.user is None:
        logger.warning("userInfoFields rendered without a user record")

    rows = []
    for label, name, value_classes in _ROWS:
        value = user_field(props.user, name)
        rows.append(
            f'<div class="{_ROW_CLASSES}">'
            f'<label class="{_LABEL_CLASSES}">{label}</label>'
            f'<p class="{value_classes}">{"" if value is None else value}</p>'
            "</div>"
        )

    attributes = {
        "data-slot": "user-info",
        "class": merge_classes(USER_INFO_CLASSES, props.class_name),
        **props.attrs,
    }
    return Markup(f"{open_tag('div', attributes)}{''.join(rows)}</div>")


__all__ = ["UserInfoProps", "create_user_info", "user_field"]
