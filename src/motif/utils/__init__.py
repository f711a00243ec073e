"""Pure helpers shared by components and the template engine."""

from motif.utils.classes import VariantTable, class_group, merge_classes, resolve
from motif.utils.html import Markup, escape, join_markup, open_tag, serialize_attributes

__all__ = [
    "Markup",
    "VariantTable",
    "class_group",
    "escape",
    "join_markup",
    "merge_classes",
    "open_tag",
    "resolve",
    "serialize_attributes",
]
