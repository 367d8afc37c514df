"""Tests for dependency evaluation in both rendering contexts."""

import pytest

from optiongate.core.errors import MalformedDependencyError, UnknownContextError
from optiongate.core.models import Control, Dependency, Option
from optiongate.core.values import BoolValue, TextValue
from optiongate.visibility import (
    Context,
    Surface,
    is_visible,
    resolve_controller,
    resolve_value,
)


def _dependent(controller: str, values, container: str | None = None) -> Option:
    return Option(
        key="dependent",
        dependency=Dependency(controller_key=controller, values=values),
        container=container,
    )


def _select(name: str, value, **kwargs) -> Control:
    return Control(name=name, kind="select", value=value, **kwargs)


COLOR_VALUES = '["custom_color", "custom_color_outlines"]'


class TestSettingsPage:
    """Membership AND controller container visible."""

    def test_member_value_visible(self):
        surface = Surface([_select("float_default_colors", "custom_color", container="c1")])
        option = _dependent("float_default_colors", COLOR_VALUES)
        assert is_visible(option, Context.SETTINGS_PAGE, surface)

    def test_non_member_value_hidden(self):
        surface = Surface([_select("float_default_colors", "other", container="c1")])
        option = _dependent("float_default_colors", COLOR_VALUES)
        assert not is_visible(option, Context.SETTINGS_PAGE, surface)

    def test_hidden_container_hides_dependent(self):
        surface = Surface(
            [_select("float_default_colors", "custom_color", container="c1")],
            elements={"c1": False},
        )
        option = _dependent("float_default_colors", COLOR_VALUES)
        assert not is_visible(option, Context.SETTINGS_PAGE, surface)

    def test_only_nearest_container_is_checked(self):
        """An ancestor's hidden wrapper is not chased."""
        surface = Surface(
            [_select("b", "x", container="b_wrapper")],
            elements={"a_wrapper": False, "b_wrapper": True},
        )
        assert is_visible(_dependent("b", '["x"]'), Context.SETTINGS_PAGE, surface)

    def test_scalar_requirement_never_matches(self):
        surface = Surface([_select("float_default_colors", "custom_color")])
        option = _dependent("float_default_colors", '"custom_color"')
        assert not is_visible(option, Context.SETTINGS_PAGE, surface)

    def test_context_accepts_string(self):
        surface = Surface([_select("a", "x")])
        assert is_visible(_dependent("a", '["x"]'), "settings-page", surface)


class TestEmbedded:
    """Membership OR scalar equality, scoped to the enclosing group."""

    def test_member_value_visible(self):
        surface = Surface([_select("a", "x", group="w1")])
        assert is_visible(_dependent("a", '["x"]', container="w1"), Context.EMBEDDED, surface)

    def test_scalar_requirement_matches(self):
        surface = Surface([_select("a", "custom_color", group="w1")])
        option = _dependent("a", "custom_color", container="w1")
        assert is_visible(option, Context.EMBEDDED, surface)

    def test_scalar_requirement_mismatch(self):
        surface = Surface([_select("a", "other", group="w1")])
        option = _dependent("a", '"custom_color"', container="w1")
        assert not is_visible(option, Context.EMBEDDED, surface)

    def test_container_visibility_ignored(self):
        surface = Surface([_select("a", "x", container="c1")], elements={"c1": False})
        assert is_visible(_dependent("a", '["x"]'), Context.EMBEDDED, surface)

    def test_group_scoping_picks_own_widget(self):
        """Two widgets carry the same option; each reads its own control."""
        surface = Surface(
            [
                _select("widget-swp[1][location]", "left", swp_name="location", group="w1"),
                _select("widget-swp[2][location]", "top", swp_name="location", group="w2"),
            ]
        )
        assert is_visible(_dependent("location", '["top"]', container="w2"), "embedded", surface)
        assert not is_visible(_dependent("location", '["top"]', container="w1"), "embedded", surface)


class TestValueMatching:
    """Strict tagged-value comparison."""

    def test_checkbox_checked(self):
        surface = Surface([Control(name="floating_panel", kind="checkbox", checked=True)])
        assert is_visible(_dependent("floating_panel", "[true]"), Context.SETTINGS_PAGE, surface)

    def test_checkbox_unchecked(self):
        surface = Surface([Control(name="floating_panel", kind="checkbox", checked=False)])
        assert not is_visible(_dependent("floating_panel", "[true]"), Context.SETTINGS_PAGE, surface)
        assert is_visible(_dependent("floating_panel", "[false]"), Context.SETTINGS_PAGE, surface)

    def test_literal_true_text_matches_boolean_only(self):
        surface = Surface([_select("a", "true")])
        assert is_visible(_dependent("a", "[true]"), Context.SETTINGS_PAGE, surface)
        assert not is_visible(_dependent("a", '["true"]'), Context.SETTINGS_PAGE, surface)

    def test_numeric_text_matches_json_number(self):
        surface = Surface([_select("count", "10")])
        assert is_visible(_dependent("count", "[10]"), Context.SETTINGS_PAGE, surface)


class TestAbsentController:
    """A missing controller reads as false."""

    @pytest.mark.parametrize("context", list(Context))
    def test_hidden_unless_false_required(self, context):
        surface = Surface()
        assert not is_visible(_dependent("missing", '["custom_color"]'), context, surface)

    @pytest.mark.parametrize("context", list(Context))
    def test_visible_when_false_required(self, context):
        surface = Surface()
        assert is_visible(_dependent("missing", "[false]"), context, surface)

    def test_resolve_value(self):
        assert resolve_value(None) == BoolValue(False)
        assert resolve_value(_select("a", None)) == TextValue("")


class TestResolveController:
    """Fallback chain: group, page-global name, field suffix."""

    def test_embedded_falls_back_to_page_name(self):
        surface = Surface([_select("a", "x")])
        control = resolve_controller("a", Context.EMBEDDED, surface, group="w9")
        assert control is not None and control.name == "a"

    def test_embedded_without_group_uses_page_name(self):
        surface = Surface([_select("a", "x")])
        assert resolve_controller("a", Context.EMBEDDED, surface).name == "a"

    def test_field_suffix_fallback(self):
        surface = Surface([_select("swp_other", "left", field="widget-3-float_location")])
        control = resolve_controller("float_location", Context.SETTINGS_PAGE, surface)
        assert control.name == "swp_other"

    def test_settings_page_ignores_group(self):
        surface = Surface(
            [
                _select("location", "page"),
                _select("widget-location", "group", swp_name="location", group="w1"),
            ]
        )
        control = resolve_controller("location", Context.SETTINGS_PAGE, surface, group="w1")
        assert control.value == "page"

    def test_all_lookups_miss(self):
        assert resolve_controller("nothing", Context.EMBEDDED, Surface()) is None


class TestEvaluatorErrors:
    """Errors raised for a single evaluation."""

    def test_no_dependency_is_visible(self):
        assert is_visible(Option(key="a"), Context.SETTINGS_PAGE, Surface())

    def test_malformed_payload_raises(self):
        surface = Surface([_select("a", "x")])
        with pytest.raises(MalformedDependencyError):
            is_visible(_dependent("a", "[oops"), Context.SETTINGS_PAGE, surface)

    def test_unknown_context_raises(self):
        with pytest.raises(UnknownContextError):
            is_visible(_dependent("a", "[true]"), "sidebar", Surface())

    def test_context_parse_is_lenient_on_case(self):
        assert Context.parse(" Embedded ") is Context.EMBEDDED
