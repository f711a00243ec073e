"""Property-based tests for class resolution, attributes and components."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from motif import ComponentKind, render_component
from motif.components.avatar import get_initials
from motif.components.button import button_variants
from motif.utils.classes import merge_classes
from motif.utils.html import serialize_attributes

from .strategies import (
    attribute_mapping,
    button_selection,
    class_string,
    display_name,
    multi_word_name,
    padding_override,
    unknown_axis_value,
)


class TestMergeProperties:
    @given(class_string)
    def test_idempotent(self, classes: str) -> None:
        once = merge_classes(classes)
        assert merge_classes(once) == once

    @given(class_string)
    def test_output_tokens_come_from_input(self, classes: str) -> None:
        assert set(merge_classes(classes).split()) <= set(classes.split())

    @given(class_string)
    def test_last_class_always_survives(self, classes: str) -> None:
        tokens = classes.split()
        if tokens:
            assert merge_classes(classes).split()[-1] == tokens[-1]

    @given(padding_override)
    def test_override_replaces_padding(self, override: str) -> None:
        assert merge_classes("p-6 text-sm", override).split() == ["text-sm", override]


class TestVariantProperties:
    @given(button_selection)
    def test_deterministic(self, selection: dict[str, str]) -> None:
        assert button_variants.resolve(selection) == button_variants.resolve(dict(selection))

    @given(button_selection)
    def test_selected_fragment_applied(self, selection: dict[str, str]) -> None:
        resolved = button_variants.resolve(selection).split()
        fragment = button_variants.axes["variant"][selection["variant"]].split()
        assert fragment[-1] in resolved

    @given(unknown_axis_value, unknown_axis_value)
    def test_unknown_values_fall_back(self, variant: object, size: object) -> None:
        assert button_variants.resolve({"variant": variant, "size": size}) == (
            button_variants.resolve()
        )

    @given(button_selection, padding_override)
    def test_caller_override_wins(self, selection: dict[str, str], override: str) -> None:
        assert button_variants.resolve(selection, override).split()[-1] == override


class TestAttributeProperties:
    @given(attribute_mapping)
    def test_serializer_rules(self, attributes: dict[str, object]) -> None:
        html = serialize_attributes(attributes)
        valued = [v for v in attributes.values() if v is not None and not isinstance(v, bool)]

        assert html.count('="') == len(valued)
        for name, value in attributes.items():
            if value is True:
                assert name in html.split(" ")
        assert "True" not in html
        assert "False" not in html
        assert "None" not in html

    @given(attribute_mapping)
    def test_empty_only_without_present_values(self, attributes: dict[str, object]) -> None:
        present = [v for v in attributes.values() if v is not None and v is not False]
        assert (serialize_attributes(attributes) == "") == (not present)


class TestComponentProperties:
    @given(multi_word_name)
    def test_initials_from_first_and_last_word(self, name: str) -> None:
        words = name.split()
        initials = (words[0][0] + words[-1][0]).upper()
        assert get_initials(name) == initials
        assert render_component(ComponentKind.AVATAR, {"name": name}).endswith(
            f">{initials}</div>"
        )

    @given(display_name)
    def test_initials_are_short_uppercase(self, name: str) -> None:
        initials = get_initials(name)
        assert 1 <= len(initials) <= 2
        assert initials == initials.upper()

    @given(st.sampled_from(["default", "secondary", "destructive", "outline"]), display_name)
    def test_badge_children_text_preserved(self, variant: str, label: str) -> None:
        html = render_component(ComponentKind.BADGE, {"variant": variant, "children": label})
        assert html.startswith('<span data-slot="badge"')
        assert html.endswith(f">{label}</span>")
