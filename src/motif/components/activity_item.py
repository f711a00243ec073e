"""Activity feed row: status dot, title, optional description, relative time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps
from motif.utils.classes import VariantTable
from motif.utils.html import Markup, join_markup, open_tag

activity_item_variants = VariantTable(
    "flex items-center justify-between py-4 hover:bg-gray-50 px-4 rounded-lg transition-colors",
    axes={
        "hasBorder": {
            "true": "border-b border-gray-100",
            "false": "",
        },
    },
    defaults={"hasBorder": "true"},
)

STATUS_COLORS = {
    "blue": "bg-blue-600",
    "green": "bg-green-600",
    "yellow": "bg-yellow-600",
    "red": "bg-red-600",
    "purple": "bg-purple-600",
}
DEFAULT_STATUS_COLOR = "blue"


@dataclass(frozen=True, slots=True)
class ActivityItemProps(ComponentProps):
    has_border: bool | None = None
    title: str | None = None
    description: str | None = None
    time_ago: str | None = None
    status_color: str | None = None


def status_color_classes(color: str | None) -> str:
    return STATUS_COLORS.get(color or DEFAULT_STATUS_COLOR, STATUS_COLORS[DEFAULT_STATUS_COLOR])


def create_activity_item(props: ActivityItemProps | Any) -> Markup:
    props = ActivityItemProps.coerce(props)
    classes = activity_item_variants.resolve({"hasBorder": props.has_border}, props.class_name)
    dot = status_color_classes(props.status_color)

    description = (
        f'<p class="text-xs text-gray-500 mt-1">{props.description}</p>'
        if props.description
        else ""
    )
    body = join_markup(
        '<div class="flex items-center gap-4">',
        f'<div class="relative"><div class="w-3 h-3 {dot} rounded-full status-dot"></div></div>',
        "<div>",
        f'<p class="text-sm font-medium text-gray-900">{props.title or ""}</p>',
        description,
        "</div></div>",
        f'<span class="text-xs text-gray-500 font-medium">{props.time_ago or ""}</span>',
    )
    attributes = {"data-slot": "activity-item", "class": classes, **props.attrs}
    return Markup(f"{open_tag('div', attributes)}{body}</div>")


__all__ = [
    "ActivityItemProps",
    "STATUS_COLORS",
    "activity_item_variants",
    "create_activity_item",
    "status_color_classes",
]
