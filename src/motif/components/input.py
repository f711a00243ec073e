"""Input component.

Standard input attributes are declared props so they can be emitted in
their lowercase HTML spelling (``maxLength`` → ``maxlength``), and event
handler names (``onInput``) become inline handler attributes (``oninput``).
Unrecognised props pass through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from motif.components.props import ComponentProps, prop_flag
from motif.utils.classes import VariantTable
from motif.utils.html import Markup, open_tag

input_variants = VariantTable(
    "w-full appearance-none bg-white text-foreground placeholder:text-muted-foreground "
    "border border-gray-300 rounded-md ring-offset-white transition-colors "
    "focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-primary "
    "focus-visible:ring-offset-2 disabled:cursor-not-allowed disabled:opacity-50",
    axes={
        "variant": {
            "default": "",
            "subtle": "bg-gray-100",
            "ghost": "bg-transparent border-transparent focus-visible:border-gray-300",
        },
        "size": {
            "lg": "h-10 px-4 text-sm",
            "md": "h-9 px-3 text-sm",
            "sm": "h-8 px-2.5 text-xs",
        },
        "state": {
            "normal": "",
            "error": "border-red-500 focus-visible:ring-red-500",
            "success": "border-green-500 focus-visible:ring-green-500",
        },
    },
    defaults={"variant": "default", "size": "md", "state": "normal"},
)

# field name → HTML attribute name, in emission order
_VALUE_ATTRS = (
    ("id", "id"),
    ("name", "name"),
    ("type", "type"),
    ("value", "value"),
    ("placeholder", "placeholder"),
    ("min", "min"),
    ("max", "max"),
    ("step", "step"),
    ("pattern", "pattern"),
    ("auto_complete", "autocomplete"),
    ("max_length", "maxlength"),
    ("min_length", "minlength"),
)
_FLAG_ATTRS = (
    ("disabled", "disabled"),
    ("read_only", "readonly"),
    ("required", "required"),
    ("auto_focus", "autofocus"),
)
_EVENT_ATTRS = (
    ("on_input", "oninput"),
    ("on_change", "onchange"),
    ("on_blur", "onblur"),
    ("on_focus", "onfocus"),
)


@dataclass(frozen=True, slots=True)
class InputProps(ComponentProps):
    variant: str | None = None
    size: str | None = None
    state: str | None = None

    id: str | None = None
    name: str | None = None
    type: str | None = None
    value: str | int | float | None = None
    placeholder: str | None = None
    min: str | int | float | None = None
    max: str | int | float | None = None
    step: str | int | float | None = None
    pattern: str | None = None
    auto_complete: str | None = None
    max_length: int | None = None
    min_length: int | None = None

    disabled: bool | None = None
    read_only: bool | None = None
    required: bool | None = None
    auto_focus: bool | None = None

    on_input: str | None = None
    on_change: str | None = None
    on_blur: str | None = None
    on_focus: str | None = None


def input_attributes(props: InputProps) -> dict[str, Any]:
    """Collect the HTML attributes for an input, excluding ``class``."""
    attributes: dict[str, Any] = {}
    for field_name, attr in _VALUE_ATTRS:
        attributes[attr] = getattr(props, field_name)
    for field_name, attr in _FLAG_ATTRS:
        attributes[attr] = prop_flag(getattr(props, field_name))
    for field_name, attr in _EVENT_ATTRS:
        attributes[attr] = getattr(props, field_name) or None
    attributes.update(props.attrs)
    return attributes


def create_input(props: InputProps | Any) -> Markup:
    props = InputProps.coerce(props)
    classes = input_variants.resolve(
        {"variant": props.variant, "size": props.size, "state": props.state},
        props.class_name,
    )
    attributes = {"class": classes, **input_attributes(props)}
    return Markup(open_tag("input", attributes, self_closing=True))


__all__ = ["InputProps", "create_input", "input_attributes", "input_variants"]
