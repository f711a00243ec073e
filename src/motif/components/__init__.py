"""Motif component factories.

Each component kind is a pure function ``create_<kind>(props) -> Markup``
that accepts its props dataclass or an open mapping. ``ComponentKind``
enumerates the kinds; its values are the names templates call them by.

Example:
    >>> from motif.components import ComponentKind, render_component
    >>> render_component(ComponentKind.BADGE, {"children": "New", "variant": "outline"})
    Markup('<span data-slot="badge" class="...">New</span>')

Thread-Safety:
Factories read only their props and module-level tables. They hold no
state between calls.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from motif.components.activity_item import ActivityItemProps, create_activity_item
from motif.components.avatar import AvatarProps, create_avatar, get_initials
from motif.components.badge import BadgeProps, create_badge
from motif.components.button import ButtonProps, create_button
from motif.components.card import (
    CardProps,
    CardRegionProps,
    create_card,
    create_card_action,
    create_card_content,
    create_card_description,
    create_card_footer,
    create_card_header,
    create_card_title,
)
from motif.components.input import InputProps, create_input
from motif.components.kpi import KPIProps, create_kpi
from motif.components.props import ComponentProps
from motif.components.user_info import UserInfoProps, create_user_info
from motif.utils.html import Markup

Factory = Callable[[Any], Markup]


class ComponentKind(Enum):
    """Component kinds, valued by their template helper name."""

    BUTTON = "button"
    INPUT = "input"
    CARD = "card"
    CARD_HEADER = "cardHeader"
    CARD_TITLE = "cardTitle"
    CARD_DESCRIPTION = "cardDescription"
    CARD_ACTION = "cardAction"
    CARD_CONTENT = "cardContent"
    CARD_FOOTER = "cardFooter"
    BADGE = "badge"
    AVATAR = "avatar"
    KPI = "kpi"
    ACTIVITY_ITEM = "activityItem"
    USER_INFO = "userInfoFields"

    @property
    def helper_name(self) -> str:
        return self.value


FACTORIES: Mapping[ComponentKind, Factory] = MappingProxyType(
    {
        ComponentKind.BUTTON: create_button,
        ComponentKind.INPUT: create_input,
        ComponentKind.CARD: create_card,
        ComponentKind.CARD_HEADER: create_card_header,
        ComponentKind.CARD_TITLE: create_card_title,
        ComponentKind.CARD_DESCRIPTION: create_card_description,
        ComponentKind.CARD_ACTION: create_card_action,
        ComponentKind.CARD_CONTENT: create_card_content,
        ComponentKind.CARD_FOOTER: create_card_footer,
        ComponentKind.BADGE: create_badge,
        ComponentKind.AVATAR: create_avatar,
        ComponentKind.KPI: create_kpi,
        ComponentKind.ACTIVITY_ITEM: create_activity_item,
        ComponentKind.USER_INFO: create_user_info,
    }
)


def render_component(kind: ComponentKind | str, props: Any = None) -> Markup:
    """Render a component by kind (or helper name)."""
    return FACTORIES[ComponentKind(kind)](props or {})


__all__ = [
    "FACTORIES",
    "ActivityItemProps",
    "AvatarProps",
    "BadgeProps",
    "ButtonProps",
    "CardProps",
    "CardRegionProps",
    "ComponentKind",
    "ComponentProps",
    "Factory",
    "InputProps",
    "KPIProps",
    "UserInfoProps",
    "create_activity_item",
    "create_avatar",
    "create_badge",
    "create_button",
    "create_card",
    "create_card_action",
    "create_card_content",
    "create_card_description",
    "create_card_footer",
    "create_card_header",
    "create_card_title",
    "create_input",
    "create_kpi",
    "create_user_info",
    "get_initials",
    "render_component",
]
