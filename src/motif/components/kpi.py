"""KPI (key performance indicator) tile.

Structural props drive optional fragments:

- ``title``, ``value``, ``description``: text rows, omitted when absent
  (``value`` is kept when it is ``0``)
- ``iconPath`` + ``iconColor``: an SVG icon badge, colour from a fixed table
- ``change`` + ``trend`` + ``changeDescription``: a change row; trend
  styling and glyph apply only when both ``change`` and ``trend`` are set

Unknown colours and trends degrade to the table defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps
from motif.utils.classes import VariantTable
from motif.utils.html import Markup, join_markup, open_tag

kpi_variants = VariantTable(
    "rounded-lg border bg-card text-card-foreground shadow-sm transition-all hover:shadow-md",
    axes={
        "variant": {
            "default": "border-gray-200",
            "gradient": "bg-gradient-to-br from-white to-gray-50 border-gray-200",
            "outlined": "border-2 border-gray-300",
        },
        "size": {
            "default": "p-6",
            "sm": "p-4",
            "lg": "p-8",
        },
    },
    defaults={"variant": "default", "size": "default"},
)

ICON_COLORS = {
    "blue": "bg-blue-100 text-blue-600",
    "purple": "bg-purple-100 text-purple-600",
    "cyan": "bg-cyan-100 text-cyan-600",
    "green": "bg-green-100 text-green-600",
    "yellow": "bg-yellow-100 text-yellow-600",
    "red": "bg-red-100 text-red-600",
    "gray": "bg-gray-100 text-gray-600",
}
DEFAULT_ICON_COLOR = "blue"

TREND_COLORS = {
    "up": "text-green-600",
    "down": "text-red-600",
    "neutral": "text-gray-600",
}
DEFAULT_TREND = "neutral"

_TREND_PATHS = {
    "up": "M13 7h8m0 0v8m0-8l-8 8-4-4-6 6",
    "down": "M13 17h8m0 0V9m0 8l-8-8-4 4-6-6",
}


@dataclass(frozen=True, slots=True)
class KPIProps(ComponentProps):
    variant: str | None = None
    size: str | None = None
    title: str | None = None
    value: str | int | float | None = None
    description: str | None = None
    icon_path: str | None = None
    icon_color: str | None = None
    change: str | None = None
    trend: str | None = None
    change_description: str | None = None


def icon_color_classes(color: str | None) -> str:
    return ICON_COLORS.get(color or DEFAULT_ICON_COLOR, ICON_COLORS[DEFAULT_ICON_COLOR])


def trend_color_classes(trend: str | None) -> str:
    return TREND_COLORS.get(trend or DEFAULT_TREND, TREND_COLORS[DEFAULT_TREND])


def trend_icon(trend: str | None) -> str:
    """SVG glyph for ``up``/``down``; empty for anything else."""
    path = _TREND_PATHS.get(trend or "")
    if path is None:
        return ""
    return (
        '<svg class="w-3 h-3" fill="none" stroke="currentColor" viewBox="0 0 24 24">'
        f'<path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="{path}" />'
        "</svg>"
    )


def _icon(props: KPIProps) -> str:
    if not props.icon_path:
        return ""
    return (
        '<div class="flex h-10 w-10 shrink-0 items-center justify-center rounded-lg '
        f'{icon_color_classes(props.icon_color)}">'
        '<svg class="w-5 h-5" fill="none" stroke="currentColor" viewBox="0 0 24 24">'
        '<path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" '
        f'd="{props.icon_path}" />'
        "</svg></div>"
    )


def _change(props: KPIProps) -> str:
    if not props.change:
        return ""
    description = (
        f'<span class="text-xs text-muted-foreground ml-1">{props.change_description}</span>'
        if props.change_description
        else ""
    )
    if props.trend:
        return (
            f'<div class="mt-2 flex items-center gap-1 {trend_color_classes(props.trend)}">'
            f"{trend_icon(props.trend)}"
            f'<span class="text-sm font-medium">{props.change}</span>'
            f"{description}</div>"
        )
    return (
        '<div class="mt-2">'
        f'<span class="text-sm font-medium text-foreground">{props.change}</span>'
        f"{description}</div>"
    )


def create_kpi(props: KPIProps | Any) -> Markup:
    props = KPIProps.coerce(props)
    classes = kpi_variants.resolve(
        {"variant": props.variant, "size": props.size}, props.class_name
    )

    title = (
        f'<p class="text-sm font-medium text-muted-foreground mb-1">{props.title}</p>'
        if props.title
        else ""
    )
    value = (
        f'<h3 class="text-2xl font-bold text-foreground">{props.value}</h3>'
        if props.value is not None
        else ""
    )
    description = (
        f'<p class="text-xs text-muted-foreground mt-1">{props.description}</p>'
        if props.description
        else ""
    )

    body = join_markup(
        '<div class="flex items-start justify-between"><div class="flex-1">',
        title,
        f'<div class="flex items-baseline gap-2">{value}</div>',
        description,
        _change(props),
        "</div>",
        _icon(props),
        "</div>",
    )
    attributes = {"data-slot": "kpi", "class": classes, **props.attrs}
    return Markup(f"{open_tag('div', attributes)}{body}</div>")


__all__ = [
    "ICON_COLORS",
    "KPIProps",
    "TREND_COLORS",
    "create_kpi",
    "icon_color_classes",
    "kpi_variants",
    "trend_color_classes",
    "trend_icon",
]
