"""Badge component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps
from motif.utils.classes import VariantTable
from motif.utils.html import Markup, open_tag

badge_variants = VariantTable(
    "inline-flex items-center justify-center rounded-full border px-2 py-0.5 text-xs "
    "font-medium w-fit whitespace-nowrap shrink-0 [&>svg]:size-3 gap-1 "
    "[&>svg]:pointer-events-none focus-visible:border-ring focus-visible:ring-ring/50 "
    "focus-visible:ring-[3px] aria-invalid:ring-destructive/20 "
    "dark:aria-invalid:ring-destructive/40 aria-invalid:border-destructive "
    "transition-[color,box-shadow] overflow-hidden",
    axes={
        "variant": {
            "default": (
                "border-transparent bg-primary text-primary-foreground [a&]:hover:bg-primary/90"
            ),
            "secondary": (
                "border-transparent bg-secondary text-secondary-foreground "
                "[a&]:hover:bg-secondary/90"
            ),
            "destructive": (
                "border-transparent bg-destructive text-white [a&]:hover:bg-destructive/90 "
                "focus-visible:ring-destructive/20 dark:focus-visible:ring-destructive/40 "
                "dark:bg-destructive/60"
            ),
            "outline": "text-foreground [a&]:hover:bg-accent [a&]:hover:text-accent-foreground",
        },
    },
    defaults={"variant": "default"},
)


@dataclass(frozen=True, slots=True)
class BadgeProps(ComponentProps):
    variant: str | None = None


def create_badge(props: BadgeProps | Any) -> Markup:
    props = BadgeProps.coerce(props)
    classes = badge_variants.resolve({"variant": props.variant}, props.class_name)
    attributes = {"data-slot": "badge", "class": classes, **props.attrs}
    return Markup(f"{open_tag('span', attributes)}{props.content}</span>")


__all__ = ["BadgeProps", "badge_variants", "create_badge"]
