"""Tests for Option/Dependency models and the surface file format."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from optiongate.core.models import (
    Dependency,
    Option,
    SurfaceSpec,
    coerce_priority,
    is_valid_priority,
    name_to_key,
)

EXAMPLE_SURFACE = Path(__file__).parent.parent / "examples" / "surface.yaml"


class TestNameToKey:
    """Display names become selector-safe keys."""

    def test_spaces_become_underscores(self):
        assert name_to_key("Float Button Colors") == "float_button_colors"

    def test_punctuation_removed(self):
        assert name_to_key("Show (on) Pages!") == "show_on_pages"

    def test_whitespace_runs_collapse(self):
        assert name_to_key("  Pin   It  ") == "pin_it"

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            name_to_key(42)


class TestPriority:
    """Priority coercion and validity."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, 0),
            (True, 0),
            (10, 10),
            ("10", 10),
            (" 3 ", 3),
            ("2.5", 2),
            (7.9, 7),
            (float("nan"), 0),
            ("abc", 0),
            ([1], 0),
        ],
    )
    def test_coerce(self, raw, expected):
        assert coerce_priority(raw) == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [(1, True), ("15", True), (0, False), (-4, False), ("1.5", False), (None, False), (True, False)],
    )
    def test_is_valid(self, raw, expected):
        assert is_valid_priority(raw) is expected

    def test_option_keeps_raw_priority(self):
        option = Option(key="a", priority="abc")
        assert option.priority == 0
        assert option.raw_priority == "abc"

    def test_missing_priority(self):
        option = Option(key="a")
        assert option.priority == 0
        assert option.raw_priority is None

    def test_raw_priority_not_serialized(self):
        assert "raw_priority" not in Option(key="a", priority=3).model_dump()


class TestOption:
    """Option construction."""

    def test_frozen(self):
        option = Option(key="a", priority=1)
        with pytest.raises(ValidationError):
            option.priority = 2

    def test_create_derives_key_from_name(self):
        option = Option.create(name="Float Location", priority=5)
        assert option.key == "float_location"
        assert option.priority == 5

    def test_create_needs_key_or_name(self):
        with pytest.raises(ValueError):
            Option.create(priority=5)

    def test_element_id_defaults_to_wrapper(self):
        assert Option(key="float_location").element_id == "float_location_wrapper"
        assert Option(key="x", element="custom").element_id == "custom"

    def test_from_attributes(self):
        option = Option.from_attributes(
            "float_background",
            {
                "data-dep": "float_location",
                "data-dep_val": '["left", "right"]',
                "data-priority": "15",
                "premium": "pro",
            },
        )
        assert option.priority == 15
        assert option.premium == "pro"
        assert option.has_dependency
        assert option.dependency.controller_key == "float_location"
        assert option.dependency.values == '["left", "right"]'

    def test_from_attributes_without_dependency(self):
        option = Option.from_attributes("floating_panel", {"data-priority": "10"})
        assert option.dependency is None
        assert not option.has_dependency


class TestDependency:
    """Dependency construction and parsing."""

    def test_parent_alias(self):
        dep = Dependency(parent="float_location", values=["left"])
        assert dep.controller_key == "float_location"

    def test_from_attributes_missing_dep(self):
        assert Dependency.from_attributes({}) is None

    def test_from_attributes_default_values(self):
        dep = Dependency.from_attributes({"data-dep": "floating_panel"})
        assert dep.values == "[]"
        assert dep.required().values == ()


class TestSurfaceSpec:
    """Surface files load into specs and live surfaces."""

    def test_load_example(self):
        spec = SurfaceSpec.from_yaml(EXAMPLE_SURFACE)
        assert len(spec.options) == 6
        assert spec.get_option("float_button_shape").premium == "pro"
        assert spec.get_option("missing") is None
        assert len(spec.rules) == 1
        assert spec.rules[0].control_names() == ["float_style_source", "float_default_colors"]

    def test_condition_equals_keeps_booleans(self):
        spec = SurfaceSpec.from_yaml(EXAMPLE_SURFACE)
        first = spec.rules[0].any_of[0]
        assert first[0].equals is False
        assert first[1].equals == "custom_color"

    def test_build_surface_registers_wrappers(self):
        spec = SurfaceSpec.from_yaml(EXAMPLE_SURFACE)
        surface = spec.build_surface()
        for option in spec.options:
            assert surface.has_element(option.element_id)
        assert surface.find_by_name("float_location").value == "left"

    def test_build_surface_copies_controls(self):
        spec = SurfaceSpec.from_yaml(EXAMPLE_SURFACE)
        surface = spec.build_surface()
        surface.set_value("float_location", "top")
        assert spec.controls[1].value == "left"

    def test_yaml_save_and_load(self, tmp_path):
        spec = SurfaceSpec.from_yaml(EXAMPLE_SURFACE)
        path = tmp_path / "out" / "surface.yaml"
        spec.to_yaml(path)
        loaded = SurfaceSpec.from_yaml(path)
        assert [o.key for o in loaded.options] == [o.key for o in spec.options]
        assert loaded.get_option("float_background").dependency.required() == (
            spec.get_option("float_background").dependency.required()
        )

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        spec = SurfaceSpec.from_yaml(path)
        assert spec.options == []

    def test_summary(self):
        spec = SurfaceSpec.from_yaml(EXAMPLE_SURFACE)
        assert "Options: 6 (5 dependent)" in spec.summary()
