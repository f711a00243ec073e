"""Tests for utility-class merging and variant tables."""

from __future__ import annotations

import logging
from types import MappingProxyType

import pytest

from motif.utils.classes import VariantTable, class_group, merge_classes, resolve, split_modifiers


@pytest.fixture
def table() -> VariantTable:
    return VariantTable(
        "rounded-md text-sm",
        axes={
            "size": {"sm": "h-8 px-2", "md": "h-9 px-3"},
            "tone": {"plain": "bg-white", "loud": "bg-red-500 text-white"},
        },
        defaults={"size": "md", "tone": "plain"},
    )


class TestMergeClasses:
    """Conflict resolution keeps the last class per property group."""

    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            (("p-6 text-sm", "p-2"), "text-sm p-2"),
            (("px-4", "p-2"), "p-2"),
            (("p-2", "px-4"), "p-2 px-4"),
            (("text-sm text-gray-500", "text-lg"), "text-gray-500 text-lg"),
            (("border border-gray-200", "border-2"), "border-gray-200 border-2"),
            (("flex", "hidden"), "hidden"),
            (
                ("rounded-md px-4", {"opacity-50": True, "hidden": False}, "rounded-xl"),
                "px-4 opacity-50 rounded-xl",
            ),
        ],
    )
    def test_conflicts(self, values: tuple, expected: str) -> None:
        """Later classes replace earlier ones in the same group."""
        assert merge_classes(*values) == expected

    def test_unknown_classes_are_deduplicated(self) -> None:
        """Classes with no known group keep only their last occurrence."""
        assert merge_classes("status-dot foo", "status-dot") == "foo status-dot"

    def test_empty_inputs(self) -> None:
        """None, empty strings and empty containers contribute nothing."""
        assert merge_classes() == ""
        assert merge_classes(None, "", [], {}) == ""

    def test_nested_sequences_flatten_in_order(self) -> None:
        assert merge_classes("a", ["b", None, ("c", "d")], "e") == "a b c d e"

    def test_modifiers_scope_conflicts(self) -> None:
        """A hover: class never conflicts with the unmodified class."""
        assert merge_classes("hover:bg-red-500 bg-blue-500", "bg-green-500") == (
            "hover:bg-red-500 bg-green-500"
        )

    def test_modifier_order_is_irrelevant(self) -> None:
        assert merge_classes("hover:focus:bg-red-500", "focus:hover:bg-blue-500") == (
            "focus:hover:bg-blue-500"
        )

    def test_important_is_separate_scope(self) -> None:
        assert merge_classes("!p-2", "p-4") == "!p-2 p-4"


class TestClassGroup:
    """Group classification of single utilities."""

    @pytest.mark.parametrize(
        ("utility", "group"),
        [
            ("px-4", "px"),
            ("-mt-2", "mt"),
            ("min-w-0", "min-w"),
            ("text-sm", "text-size"),
            ("text-gray-500", "text-color"),
            ("text-center", "text-align"),
            ("font-bold", "font-weight"),
            ("border", "border-w"),
            ("border-2", "border-w"),
            ("border-b", "border-w-b"),
            ("border-gray-200", "border-color"),
            ("rounded-xl", "rounded"),
            ("rounded-t-lg", "rounded-t"),
            ("shadow-sm", "shadow"),
            ("flex", "display"),
            ("flex-col", "flex-direction"),
            ("flex-1", "flex"),
            ("bg-gradient-to-br", "bg-image"),
            ("bg-white", "bg-color"),
            ("ring-[3px]", "ring-w"),
            ("ring-ring/50", "ring-color"),
        ],
    )
    def test_known_groups(self, utility: str, group: str) -> None:
        assert class_group(utility) == group

    def test_unknown_class(self) -> None:
        assert class_group("status-dot") is None


class TestSplitModifiers:
    def test_plain_modifiers(self) -> None:
        assert split_modifiers("hover:dark:bg-x") == (("hover", "dark"), "bg-x")

    def test_no_modifiers(self) -> None:
        assert split_modifiers("p-2") == ((), "p-2")

    def test_colon_inside_brackets_does_not_split(self) -> None:
        """Arbitrary variants keep their inner colons."""
        assert split_modifiers("[&>svg]:size-3") == (("[&>svg]",), "size-3")
        assert split_modifiers("[&_svg:not([class*='size-'])]:size-4") == (
            ("[&_svg:not([class*='size-'])]",),
            "size-4",
        )


class TestVariantTable:
    """Variant table construction and resolution."""

    def test_defaults_apply(self, table: VariantTable) -> None:
        assert table.resolve() == "rounded-md text-sm h-9 px-3 bg-white"

    def test_selection(self, table: VariantTable) -> None:
        assert table.resolve({"size": "sm", "tone": "loud"}) == (
            "rounded-md text-sm h-8 px-2 bg-red-500 text-white"
        )

    def test_override_comes_last_and_wins(self, table: VariantTable) -> None:
        assert table.resolve({"size": "sm"}, "px-6") == "rounded-md text-sm h-8 bg-white px-6"

    def test_unknown_value_falls_back(self, table: VariantTable, caplog) -> None:
        """Unknown selections use the default and log at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="motif.utils.classes"):
            result = table.resolve({"size": "huge"})
        assert result == table.resolve({"size": "md"})
        assert any("huge" in record.getMessage() for record in caplog.records)

    def test_unknown_axis_is_ignored(self, table: VariantTable) -> None:
        assert table.resolve({"shape": "round"}) == table.resolve()

    def test_boolean_selection_maps_to_axis_keys(self) -> None:
        bordered = VariantTable(
            "flex",
            axes={"hasBorder": {"true": "border-b", "false": ""}},
            defaults={"hasBorder": "true"},
        )
        assert bordered.resolve({"hasBorder": False}) == "flex"
        assert bordered.resolve({"hasBorder": True}) == "flex border-b"
        assert bordered.resolve({"hasBorder": None}) == "flex border-b"

    def test_axis_names_keep_declaration_order(self, table: VariantTable) -> None:
        assert table.axis_names == ("size", "tone")

    def test_missing_default_rejected(self) -> None:
        with pytest.raises(ValueError, match="no default"):
            VariantTable("x", axes={"size": {"sm": "h-8"}}, defaults={})

    def test_default_outside_axis_rejected(self) -> None:
        with pytest.raises(ValueError, match="not one of"):
            VariantTable("x", axes={"size": {"sm": "h-8"}}, defaults={"size": "lg"})

    def test_tables_are_read_only(self, table: VariantTable) -> None:
        assert isinstance(table.axes, MappingProxyType)
        with pytest.raises(TypeError):
            table.axes["size"]["xl"] = "h-12"  # type: ignore[index]


class TestResolveFunction:
    def test_without_table(self) -> None:
        assert resolve("p-6 text-sm", override="p-2") == "text-sm p-2"

    def test_with_table(self, table: VariantTable) -> None:
        assert resolve("shadow", {"tone": "loud"}, "text-xs", table=table) == (
            "shadow h-9 px-3 bg-red-500 text-white text-xs"
        )
