"""Tests for closed component props and open-mapping partitioning."""

from __future__ import annotations

import dataclasses

import pytest

from motif.components import (
    FACTORIES,
    ActivityItemProps,
    BadgeProps,
    ButtonProps,
    CardRegionProps,
    ComponentKind,
    InputProps,
    render_component,
)
from motif.components.props import RESERVED_KEYS, prop_field_name, prop_flag


class TestPropFieldName:
    @pytest.mark.parametrize(
        ("key", "field"),
        [
            ("className", "class_name"),
            ("class", "class_name"),
            ("timeAgo", "time_ago"),
            ("changeDescription", "change_description"),
            ("readOnly", "read_only"),
            ("variant", "variant"),
            ("data-test", "data-test"),
        ],
    )
    def test_mapping(self, key: str, field: str) -> None:
        assert prop_field_name(key) == field


class TestFromMapping:
    """Partitioning a template hash into fields and passthrough attrs."""

    def test_fields_and_attrs(self) -> None:
        props = BadgeProps.from_mapping({"variant": "outline", "className": "ml-2", "id": "b"})
        assert props.variant == "outline"
        assert props.class_name == "ml-2"
        assert dict(props.attrs) == {"id": "b"}

    def test_class_alias(self) -> None:
        assert BadgeProps.from_mapping({"class": "ml-2"}).class_name == "ml-2"

    def test_camel_case_fields(self) -> None:
        props = ActivityItemProps.from_mapping(
            {"timeAgo": "2h", "statusColor": "green", "hasBorder": False}
        )
        assert (props.time_ago, props.status_color, props.has_border) == ("2h", "green", False)
        assert dict(props.attrs) == {}

    def test_attrs_mapping_is_merged(self) -> None:
        props = ButtonProps.from_mapping({"attrs": {"aria-label": "Close"}, "id": "x"})
        assert dict(props.attrs) == {"aria-label": "Close", "id": "x"}

    def test_unknown_keys_keep_caller_order(self) -> None:
        props = InputProps.from_mapping({"data-b": "2", "name": "q", "data-a": "1"})
        assert list(props.attrs) == ["data-b", "data-a"]
        assert props.name == "q"

    def test_reserved_keys_never_become_attrs(self) -> None:
        props = CardRegionProps.from_mapping(
            {"variant": "outlined", "size": "lg", "state": "error", "class": "mt-2", "id": "h"}
        )
        assert dict(props.attrs) == {"id": "h"}
        assert props.class_name == "mt-2"

    def test_reserved_keys_still_fill_declared_fields(self) -> None:
        props = InputProps.from_mapping({"variant": "ghost", "size": "lg", "state": "error"})
        assert (props.variant, props.size, props.state) == ("ghost", "lg", "error")
        assert dict(props.attrs) == {}

    def test_reserved_key_set(self) -> None:
        assert {"variant", "size", "state", "className", "class", "children"} == RESERVED_KEYS

    def test_none_mapping(self) -> None:
        props = ButtonProps.from_mapping(None)
        assert props.children is None
        assert props.content == ""

    def test_coerce_passes_instances_through(self) -> None:
        props = ButtonProps(variant="ghost")
        assert ButtonProps.coerce(props) is props

    def test_coerce_repartitions_other_kinds(self) -> None:
        """Props of another kind are flattened and re-partitioned."""
        badge = BadgeProps(variant="outline", class_name="ml-2", attrs={"id": "b"})
        button = ButtonProps.coerce(badge)
        assert button.variant == "outline"
        assert button.class_name == "ml-2"
        assert dict(button.attrs) == {"id": "b"}

    def test_as_mapping(self) -> None:
        props = BadgeProps(variant="outline", children="New", attrs={"id": "b"})
        assert props.as_mapping() == {"children": "New", "variant": "outline", "id": "b"}


class TestPropFlag:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, True),
            (False, False),
            (None, False),
            ("true", True),
            ("disabled", True),
            ("false", False),
            ("FALSE", False),
            ("", False),
            (1, True),
            (0, False),
        ],
    )
    def test_prop_flag(self, value: object, expected: bool) -> None:
        assert prop_flag(value) is expected


class TestImmutability:
    def test_props_are_frozen(self) -> None:
        props = ButtonProps(variant="ghost")
        with pytest.raises(dataclasses.FrozenInstanceError):
            props.variant = "link"  # type: ignore[misc]

    def test_attrs_are_read_only(self) -> None:
        props = ButtonProps(attrs={"id": "x"})
        with pytest.raises(TypeError):
            props.attrs["id"] = "y"  # type: ignore[index]

    def test_factory_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            FACTORIES[ComponentKind.BUTTON] = lambda props: ""  # type: ignore[index]


class TestComponentKind:
    def test_every_kind_has_a_factory(self) -> None:
        assert set(FACTORIES) == set(ComponentKind)

    def test_helper_names(self) -> None:
        assert [kind.helper_name for kind in ComponentKind] == [
            "button",
            "input",
            "card",
            "cardHeader",
            "cardTitle",
            "cardDescription",
            "cardAction",
            "cardContent",
            "cardFooter",
            "badge",
            "avatar",
            "kpi",
            "activityItem",
            "userInfoFields",
        ]

    def test_render_by_kind_or_name(self) -> None:
        by_kind = render_component(ComponentKind.BADGE, {"children": "New"})
        by_name = render_component("badge", {"children": "New"})
        assert by_kind == by_name
        assert by_kind.startswith('<span data-slot="badge"')

    def test_unknown_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            render_component("carousel")
