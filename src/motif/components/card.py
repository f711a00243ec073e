"""Card component family.

A card is assembled from independent regions. Each factory takes its
inner markup as ``children``; composition happens by feeding one
factory's output into another's ``children``, never by a factory
calling another factory:

    >>> header = create_card_header({"children": create_card_title({"children": "Profile"})})
    >>> body = create_card_content({"children": "<p>Hi</p>"})
    >>> card = create_card({"children": header + body})

Every region renders as a ``<div>`` tagged with ``data-slot`` so region
styles can target each other (``has-data-[slot=card-action]:...``).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps
from motif.utils.classes import VariantTable, merge_classes
from motif.utils.html import Markup, open_tag

card_variants = VariantTable(
    "bg-card text-card-foreground flex flex-col gap-6 rounded-xl border shadow-sm",
    axes={
        "variant": {
            "default": "border-gray-200",
            "gradient": (
                "bg-gradient-to-br from-white dark:from-gray-900 to-gray-50 "
                "dark:to-gray-800 border-gray-200"
            ),
            "outlined": "border-2 border-gray-300",
        },
        "padding": {
            "none": "",
            "sm": "py-4",
            "md": "py-6",
            "lg": "py-8",
        },
    },
    defaults={"variant": "default", "padding": "md"},
)

CARD_HEADER_CLASSES = (
    "@container/card-header grid auto-rows-min grid-rows-[auto_auto] items-start gap-2 px-6 "
    "has-data-[slot=card-action]:grid-cols-[1fr_auto] [.border-b]:pb-6"
)
CARD_TITLE_CLASSES = "leading-none font-semibold"
CARD_DESCRIPTION_CLASSES = "text-muted-foreground text-sm"
CARD_ACTION_CLASSES = "col-start-2 row-span-2 row-start-1 self-start justify-self-end"
CARD_CONTENT_CLASSES = "px-6"
CARD_FOOTER_CLASSES = "flex items-center px-6 [.border-t]:pt-6"


@dataclass(frozen=True, slots=True)
class CardProps(ComponentProps):
    variant: str | None = None
    padding: str | None = None


@dataclass(frozen=True, slots=True)
class CardRegionProps(ComponentProps):
    """Props for the card regions: only ``class_name``, ``children`` and attrs."""


def _slot(slot: str, classes: str, props: ComponentProps) -> Markup:
    attributes = {"data-slot": slot, "class": classes, **props.attrs}
    return Markup(f"{open_tag('div', attributes)}{props.content}</div>")


def create_card(props: CardProps | Any) -> Markup:
    props = CardProps.coerce(props)
    classes = card_variants.resolve(
        {"variant": props.variant, "padding": props.padding}, props.class_name
    )
    return _slot("card", classes, props)


def _region(slot: str, base: str) -> Callable[[CardRegionProps | Any], Markup]:
    def create(props: CardRegionProps | Any) -> Markup:
        props = CardRegionProps.coerce(props)
        return _slot(slot, merge_classes(base, props.class_name), props)

    create.__name__ = f"create_{slot.replace('-', '_')}"
    create.__qualname__ = create.__name__
    create.__doc__ = f"Render the ``{slot}`` region of a card."
    return create


create_card_header = _region("card-header", CARD_HEADER_CLASSES)
create_card_title = _region("card-title", CARD_TITLE_CLASSES)
create_card_description = _region("card-description", CARD_DESCRIPTION_CLASSES)
create_card_action = _region("card-action", CARD_ACTION_CLASSES)
create_card_content = _region("card-content", CARD_CONTENT_CLASSES)
create_card_footer = _region("card-footer", CARD_FOOTER_CLASSES)


__all__ = [
    "CardProps",
    "CardRegionProps",
    "card_variants",
    "create_card",
    "create_card_action",
    "create_card_content",
    "create_card_description",
    "create_card_footer",
    "create_card_header",
    "create_card_title",
]
