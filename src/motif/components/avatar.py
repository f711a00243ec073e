"""Avatar component.

Renders an ``<img>`` when ``src`` is given, otherwise a ``<div>`` showing
initials computed from ``name``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps
from motif.utils.classes import VariantTable, merge_classes
from motif.utils.html import Markup, open_tag

avatar_variants = VariantTable(
    "relative flex shrink-0 overflow-hidden rounded-full",
    axes={
        "variant": {
            "default": "bg-muted",
            "primary": "bg-primary text-primary-foreground",
            "secondary": "bg-secondary text-secondary-foreground",
            "accent": "bg-accent text-accent-foreground",
            "destructive": "bg-destructive text-destructive-foreground",
        },
        "size": {
            "sm": "size-8 text-xs",
            "md": "size-10 text-sm",
            "lg": "size-12 text-base",
            "xl": "size-16 text-lg",
        },
    },
    defaults={"variant": "default", "size": "md"},
)

_FALLBACK_CLASSES = "flex items-center justify-center font-semibold"


@dataclass(frozen=True, slots=True)
class AvatarProps(ComponentProps):
    variant: str | None = None
    size: str | None = None
    name: str | None = None
    src: str | None = None
    alt: str | None = None


def get_initials(name: str | None) -> str:
    """Initials for a display name.

    Example:
        >>> get_initials("Ada Lovelace")
        'AL'
        >>> get_initials("Prince")
        'P'
        >>> get_initials("  ")
        ''
    """
    if not name:
        return ""
    parts = str(name).split()
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def create_avatar(props: AvatarProps | Any) -> Markup:
    props = AvatarProps.coerce(props)
    selections = {"variant": props.variant, "size": props.size}

    if props.src:
        attributes = {
            "data-slot": "avatar",
            "class": avatar_variants.resolve(selections, props.class_name),
            "src": props.src,
            "alt": props.alt or props.name or "Avatar",
            **props.attrs,
        }
        return Markup(open_tag("img", attributes, self_closing=True))

    attributes = {
        "data-slot": "avatar",
        "class": merge_classes(
            avatar_variants.resolve(selections), _FALLBACK_CLASSES, props.class_name
        ),
        **props.attrs,
    }
    return Markup(f"{open_tag('div', attributes)}{get_initials(props.name)}</div>")


__all__ = ["AvatarProps", "avatar_variants", "create_avatar", "get_initials"]
