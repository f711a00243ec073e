"""Utility-class merging and variant tables for Motif components.

Components describe their styling as a base class string plus a table of
named variant axes. Resolution concatenates base → axis fragments (in
declaration order) → caller override, then merges the result so that the
last class touching a CSS property group wins:

    >>> merge_classes("p-6 text-sm", "p-2")
    'text-sm p-2'
    >>> merge_classes("px-4", "p-2")
    'p-2'
    >>> merge_classes("p-2", "px-4")
    'p-2 px-4'

Conflicts are scoped by modifiers, so ``hover:bg-red-500`` and
``bg-blue-500`` never collide. Classes without a known group are only
deduplicated (last occurrence kept).

Thread-Safety:
All functions are pure. ``VariantTable`` is immutable after construction.

"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

# =============================================================================
# Class groups
# =============================================================================

_DISPLAY = frozenset(
    {
        "block",
        "inline-block",
        "inline",
        "flex",
        "inline-flex",
        "grid",
        "inline-grid",
        "contents",
        "table",
        "flow-root",
        "hidden",
    }
)
_POSITION = frozenset({"static", "fixed", "absolute", "relative", "sticky"})
_TEXT_TRANSFORM = frozenset({"uppercase", "lowercase", "capitalize", "normal-case"})
_TEXT_DECORATION = frozenset({"underline", "overline", "line-through", "no-underline"})
_FONT_SIZES = frozenset(
    {"xs", "sm", "base", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl", "7xl", "8xl", "9xl"}
)
_TEXT_ALIGN = frozenset({"left", "center", "right", "justify", "start", "end"})
_FONT_WEIGHTS = frozenset(
    {"thin", "extralight", "light", "normal", "medium", "semibold", "bold", "extrabold", "black"}
)
_FONT_FAMILIES = frozenset({"sans", "serif", "mono"})
_BORDER_STYLES = frozenset({"solid", "dashed", "dotted", "double", "hidden", "none"})
_SIDES = ("x", "y", "t", "r", "b", "l", "s", "e")
_CORNERS = ("t", "r", "b", "l", "s", "e", "tl", "tr", "br", "bl", "ss", "se", "ee", "es")
_SHADOW_SIZES = frozenset({"", "2xs", "xs", "sm", "md", "lg", "xl", "2xl", "inner", "none"})

_LENGTH_RE = re.compile(r"^-?(\d+(\.\d+)?(px|rem|em|%|vh|vw|ch)?|px|full|auto|screen)$")
_ARBITRARY_LENGTH_RE = re.compile(r"^\[(length:)?-?\d+(\.\d+)?[a-z%]*\]$")

# Simple prefix → group, longest prefix first so "min-w-" beats "w-".
_PREFIX_GROUPS: tuple[tuple[str, str], ...] = tuple(
    sorted(
        {
            "p-": "p",
            "px-": "px",
            "py-": "py",
            "pt-": "pt",
            "pr-": "pr",
            "pb-": "pb",
            "pl-": "pl",
            "ps-": "ps",
            "pe-": "pe",
            "m-": "m",
            "mx-": "mx",
            "my-": "my",
            "mt-": "mt",
            "mr-": "mr",
            "mb-": "mb",
            "ml-": "ml",
            "ms-": "ms",
            "me-": "me",
            "gap-": "gap",
            "gap-x-": "gap-x",
            "gap-y-": "gap-y",
            "space-x-": "space-x",
            "space-y-": "space-y",
            "size-": "size",
            "w-": "w",
            "h-": "h",
            "min-w-": "min-w",
            "max-w-": "max-w",
            "min-h-": "min-h",
            "max-h-": "max-h",
            "opacity-": "opacity",
            "z-": "z",
            "items-": "align-items",
            "justify-items-": "justify-items",
            "justify-self-": "justify-self",
            "justify-": "justify-content",
            "self-": "align-self",
            "content-": "align-content",
            "place-items-": "place-items",
            "leading-": "leading",
            "tracking-": "tracking",
            "overflow-": "overflow",
            "overflow-x-": "overflow-x",
            "overflow-y-": "overflow-y",
            "whitespace-": "whitespace",
            "cursor-": "cursor",
            "duration-": "duration",
            "ease-": "ease",
            "grid-cols-": "grid-cols",
            "grid-rows-": "grid-rows",
            "col-span-": "col-span",
            "col-start-": "col-start",
            "col-end-": "col-end",
            "row-span-": "row-span",
            "row-start-": "row-start",
            "row-end-": "row-end",
            "auto-rows-": "auto-rows",
            "auto-cols-": "auto-cols",
            "appearance-": "appearance",
            "pointer-events-": "pointer-events",
            "select-": "select",
            "object-": "object",
            "top-": "top",
            "right-": "right",
            "bottom-": "bottom",
            "left-": "left",
            "inset-": "inset",
            "inset-x-": "inset-x",
            "inset-y-": "inset-y",
            "basis-": "basis",
            "order-": "order",
            "translate-x-": "translate-x",
            "translate-y-": "translate-y",
            "scale-": "scale",
            "rotate-": "rotate",
            "fill-": "fill",
            "stroke-": "stroke",
            "from-": "gradient-from",
            "via-": "gradient-via",
            "to-": "gradient-to",
            "line-clamp-": "line-clamp",
        }.items(),
        key=lambda item: len(item[0]),
        reverse=True,
    )
)

# Group → narrower groups it overrides when it appears later.
_CONFLICTS: dict[str, tuple[str, ...]] = {
    "p": ("px", "py", "pt", "pr", "pb", "pl", "ps", "pe"),
    "px": ("pr", "pl"),
    "py": ("pt", "pb"),
    "m": ("mx", "my", "mt", "mr", "mb", "ml", "ms", "me"),
    "mx": ("mr", "ml"),
    "my": ("mt", "mb"),
    "gap": ("gap-x", "gap-y"),
    "size": ("w", "h"),
    "inset": ("inset-x", "inset-y", "top", "right", "bottom", "left"),
    "inset-x": ("right", "left"),
    "inset-y": ("top", "bottom"),
    "overflow": ("overflow-x", "overflow-y"),
    "border-w": tuple(f"border-w-{side}" for side in _SIDES),
    "border-w-x": ("border-w-r", "border-w-l"),
    "border-w-y": ("border-w-t", "border-w-b"),
    "rounded": tuple(f"rounded-{corner}" for corner in _CORNERS),
    "text-size": ("leading",),
}


def _is_length(value: str) -> bool:
    return bool(_LENGTH_RE.match(value) or _ARBITRARY_LENGTH_RE.match(value))


def _text_group(value: str) -> str:
    if value in _FONT_SIZES or _ARBITRARY_LENGTH_RE.match(value):
        return "text-size"
    if value in _TEXT_ALIGN:
        return "text-align"
    return "text-color"


def _border_group(rest: str) -> str:
    # rest is what follows "border"; "" | "-2" | "-b" | "-b-2" | "-gray-200" | "-dashed"
    if not rest:
        return "border-w"
    value = rest[1:]
    side, _, width = value.partition("-")
    if side in _SIDES:
        if not width or width.isdigit() or _ARBITRARY_LENGTH_RE.match(width):
            return f"border-w-{side}"
        return f"border-color-{side}"
    if value.isdigit() or _ARBITRARY_LENGTH_RE.match(value):
        return "border-w"
    if value in _BORDER_STYLES:
        return "border-style"
    return "border-color"


def _rounded_group(rest: str) -> str:
    if not rest:
        return "rounded"
    corner, _, _ = rest[1:].partition("-")
    if corner in _CORNERS:
        return f"rounded-{corner}"
    return "rounded"


def _ring_group(rest: str) -> str:
    if not rest:
        return "ring-w"
    value = rest[1:]
    if value.startswith("offset-"):
        offset = value[len("offset-") :]
        return "ring-offset-w" if offset.isdigit() else "ring-offset-color"
    if value.isdigit() or value == "inset" or _ARBITRARY_LENGTH_RE.match(value):
        return "ring-w"
    return "ring-color"


def class_group(utility: str) -> str | None:
    """Return the property group of a utility class (modifiers stripped).

    Returns None for classes the merger does not know; those are only
    deduplicated, never treated as conflicting.

    Example:
        >>> class_group("px-4")
        'px'
        >>> class_group("text-sm")
        'text-size'
        >>> class_group("text-gray-500")
        'text-color'
        >>> class_group("status-dot") is None
        True
    """
    base = utility.lstrip("!")
    if base.startswith("-"):
        base = base[1:]

    if base in _DISPLAY:
        return "display"
    if base in _POSITION:
        return "position"
    if base in _TEXT_TRANSFORM:
        return "text-transform"
    if base in _TEXT_DECORATION:
        return "text-decoration"
    if base in ("shrink", "grow") or base.startswith(("shrink-", "grow-")):
        return base.split("-", 1)[0]
    if base in ("transition", "truncate"):
        return base
    if base.startswith("transition-"):
        return "transition"
    if base.startswith("text-"):
        return _text_group(base[len("text-") :])
    if base.startswith("font-"):
        value = base[len("font-") :]
        if value in _FONT_WEIGHTS:
            return "font-weight"
        if value in _FONT_FAMILIES:
            return "font-family"
        return None
    if base.startswith("bg-"):
        value = base[len("bg-") :]
        if value.startswith(("gradient-", "linear-", "radial-")) or value == "none":
            return "bg-image"
        return "bg-color"
    if base == "border" or base.startswith("border-"):
        return _border_group(base[len("border") :])
    if base == "rounded" or base.startswith("rounded-"):
        return _rounded_group(base[len("rounded") :])
    if base == "ring" or base.startswith("ring-"):
        return _ring_group(base[len("ring") :])
    if base == "shadow" or base.startswith("shadow-"):
        value = base[len("shadow-") :] if base != "shadow" else ""
        return "shadow" if value in _SHADOW_SIZES or value.startswith("[") else "shadow-color"
    if base == "outline" or base.startswith("outline-"):
        value = base[len("outline-") :] if base != "outline" else ""
        if not value or value.isdigit():
            return "outline-w"
        if value in ("none", "hidden", "solid", "dashed", "dotted", "double"):
            return "outline-style"
        return "outline-color"
    if base.startswith("flex-"):
        value = base[len("flex-") :]
        if value in ("row", "row-reverse", "col", "col-reverse"):
            return "flex-direction"
        if value in ("wrap", "wrap-reverse", "nowrap"):
            return "flex-wrap"
        return "flex"

    for prefix, group in _PREFIX_GROUPS:
        if base.startswith(prefix):
            return group
    return None


def split_modifiers(cls: str) -> tuple[tuple[str, ...], str]:
    """Split ``hover:dark:bg-x`` into ``(("hover", "dark"), "bg-x")``.

    Colons inside square brackets (arbitrary variants and values) do not
    split: ``[&>svg]:size-3`` → ``(("[&>svg]",), "size-3")``.
    """
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(cls):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth = max(0, depth - 1)
        elif ch == ":" and depth == 0:
            parts.append(cls[start:i])
            start = i + 1
    return tuple(parts), cls[start:]


def _modifier_key(modifiers: tuple[str, ...]) -> str:
    # Order of plain modifiers is irrelevant; arbitrary ones keep position.
    plain = sorted(m for m in modifiers if not m.startswith("["))
    arbitrary = [m for m in modifiers if m.startswith("[")]
    return ":".join(plain + arbitrary)


def _flatten(values: Iterable[Any]) -> list[str]:
    classes: list[str] = []
    queue = list(values)
    while queue:
        value = queue.pop(0)
        if not value:
            continue
        if isinstance(value, str):
            classes.extend(value.split())
        elif isinstance(value, Mapping):
            for name, enabled in value.items():
                if enabled:
                    classes.extend(str(name).split())
        elif isinstance(value, (list, tuple)):
            queue[0:0] = list(value)
        else:
            classes.extend(str(value).split())
    return classes


def merge_classes(*values: Any) -> str:
    """Flatten class inputs and resolve utility conflicts (last wins).

    Accepts strings, None, lists/tuples, and ``{class: bool}`` mappings.

    Example:
        >>> merge_classes("rounded-md px-4", {"opacity-50": True, "hidden": False}, "rounded-xl")
        'px-4 opacity-50 rounded-xl'
    """
    classes = _flatten(values)
    seen: set[str] = set()
    kept: list[str] = []

    for cls in reversed(classes):
        modifiers, utility = split_modifiers(cls)
        scope = _modifier_key(modifiers)
        important = "!" if utility.startswith("!") or utility.endswith("!") else ""
        group = class_group(utility.rstrip("!"))

        key = f"{scope}|{important}|{group}" if group is not None else f"={cls}"
        if key in seen:
            continue
        seen.add(key)
        if group is not None:
            for narrower in _CONFLICTS.get(group, ()):
                seen.add(f"{scope}|{important}|{narrower}")
        kept.append(cls)

    kept.reverse()
    return " ".join(kept)


# =============================================================================
# Variant tables
# =============================================================================


def _axis_key(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True, slots=True)
class VariantTable:
    """Base classes plus named variant axes with declared defaults.

    Axes are resolved in declaration order, so a later axis overrides an
    earlier one when both touch the same property group. The caller's
    override always comes last.

    Example:
        >>> table = VariantTable(
        ...     "rounded-md",
        ...     axes={"size": {"sm": "h-8 px-2", "md": "h-9 px-3"}},
        ...     defaults={"size": "md"},
        ... )
        >>> table.resolve({"size": "sm"})
        'rounded-md h-8 px-2'
        >>> table.resolve({"size": "huge"}, "px-6")
        'rounded-md h-9 px-6'

    Raises:
        ValueError: If an axis has no default, or its default is not one
            of the axis values.
    """

    base: str
    axes: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    defaults: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for axis, values in self.axes.items():
            default = self.defaults.get(axis)
            if default is None:
                raise ValueError(f"Variant axis '{axis}' has no default")
            if default not in values:
                raise ValueError(
                    f"Default '{default}' for axis '{axis}' is not one of: "
                    f"{', '.join(values)}"
                )
        object.__setattr__(
            self,
            "axes",
            MappingProxyType({k: MappingProxyType(dict(v)) for k, v in self.axes.items()}),
        )
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    @property
    def axis_names(self) -> tuple[str, ...]:
        return tuple(self.axes)

    def select(self, axis: str, value: Any) -> str:
        """Return the value key used for ``axis``, falling back to its default."""
        values = self.axes[axis]
        key = _axis_key(value)
        if key is None:
            return self.defaults[axis]
        if key not in values:
            logger.debug(
                "Unknown value %r for variant axis '%s'; using default '%s'",
                value,
                axis,
                self.defaults[axis],
            )
            return self.defaults[axis]
        return key

    def fragments(self, selections: Mapping[str, Any] | None = None) -> list[str]:
        selections = selections or {}
        return [
            self.axes[axis][self.select(axis, selections.get(axis))] for axis in self.axes
        ]

    def resolve(
        self,
        selections: Mapping[str, Any] | None = None,
        override: str | None = None,
    ) -> str:
        """Resolve selections plus an override into one merged class string."""
        return merge_classes(self.base, *self.fragments(selections), override)


def resolve(
    base: str,
    selections: Mapping[str, Any] | None = None,
    override: str | None = None,
    *,
    table: VariantTable | None = None,
) -> str:
    """Resolve ``base`` and optional variant selections into a class string.

    Without a table this is ``merge_classes(base, override)``.
    """
    if table is None:
        return merge_classes(base, override)
    return merge_classes(base, *table.fragments(selections), override)


__all__ = [
    "VariantTable",
    "class_group",
    "merge_classes",
    "resolve",
    "split_modifiers",
]
