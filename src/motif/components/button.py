"""Button component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps, prop_flag
from motif.utils.classes import VariantTable
from motif.utils.html import Markup, open_tag

button_variants = VariantTable(
    "inline-flex items-center justify-center gap-2 whitespace-nowrap rounded-md text-sm "
    "font-medium transition-all disabled:pointer-events-none disabled:opacity-50 "
    "[&_svg]:pointer-events-none [&_svg:not([class*='size-'])]:size-4 shrink-0 "
    "[&_svg]:shrink-0 outline-none focus-visible:border-ring focus-visible:ring-ring/50 "
    "focus-visible:ring-[3px]",
    axes={
        "variant": {
            "default": "bg-primary text-primary-foreground shadow-xs hover:bg-primary/90",
            "destructive": (
                "bg-destructive text-white shadow-xs hover:bg-destructive/90 "
                "focus-visible:ring-destructive/20"
            ),
            "outline": (
                "border bg-background shadow-xs hover:bg-accent hover:text-accent-foreground"
            ),
            "secondary": "bg-secondary text-secondary-foreground shadow-xs hover:bg-secondary/80",
            "ghost": "hover:bg-accent hover:text-accent-foreground",
            "link": "text-primary underline-offset-4 hover:underline",
        },
        "size": {
            "default": "h-9 px-4 py-2",
            "sm": "h-8 rounded-md gap-1.5 px-3",
            "lg": "h-10 rounded-md px-6",
            "icon": "size-9",
        },
    },
    defaults={"variant": "default", "size": "default"},
)


@dataclass(frozen=True, slots=True)
class ButtonProps(ComponentProps):
    variant: str | None = None
    size: str | None = None
    type: str | None = None
    href: str | None = None
    disabled: bool | None = None


def create_button(props: ButtonProps | Any) -> Markup:
    """Render a ``<button>``, or an ``<a>`` when ``href`` is given."""
    props = ButtonProps.coerce(props)
    classes = button_variants.resolve(
        {"variant": props.variant, "size": props.size}, props.class_name
    )
    content = props.content

    if props.href:
        attributes: dict[str, Any] = {
            "data-slot": "button",
            "class": classes,
            "href": props.href,
            "aria-disabled": "true" if prop_flag(props.disabled) else None,
            **props.attrs,
        }
        return Markup(f"{open_tag('a', attributes)}{content}</a>")

    attributes = {
        "data-slot": "button",
        "type": props.type or "button",
        "class": classes,
        "disabled": prop_flag(props.disabled),
        **props.attrs,
    }
    return Markup(f"{open_tag('button', attributes)}{content}</button>")


__all__ = ["ButtonProps", "button_variants", "create_button"]
