"""Tests for tagged values and required-value parsing."""

import pytest

from optiongate.core.errors import MalformedDependencyError
from optiongate.core.values import (
    BoolValue,
    RequiredValues,
    TextValue,
    normalize,
    parse_required,
)


class TestNormalize:
    """normalize() converts raw control values into tagged values."""

    def test_booleans(self):
        assert normalize(True) == BoolValue(True)
        assert normalize(False) == BoolValue(False)

    def test_literal_true_false_strings(self):
        assert normalize("true") == BoolValue(True)
        assert normalize("false") == BoolValue(False)

    def test_other_strings_stay_text(self):
        assert normalize("custom_color") == TextValue("custom_color")
        assert normalize("True") == TextValue("True")
        assert normalize("10") == TextValue("10")

    def test_none_is_empty_text(self):
        assert normalize(None) == TextValue("")

    def test_numbers_become_text(self):
        assert normalize(5) == TextValue("5")
        assert normalize(2.0) == TextValue("2")

    def test_bool_and_text_never_equal(self):
        assert BoolValue(True) != TextValue("true")


class TestParseRequired:
    """parse_required() decodes data-dep_val payloads."""

    def test_json_list_of_strings(self):
        required = parse_required('["custom_color", "custom_color_outlines"]')
        assert required == RequiredValues(
            values=(TextValue("custom_color"), TextValue("custom_color_outlines"))
        )
        assert not required.scalar

    def test_required_strings_are_not_converted_to_booleans(self):
        required = parse_required('[true, "false"]')
        assert required.values == (BoolValue(True), TextValue("false"))

    def test_numbers_become_text(self):
        required = parse_required("[1, 2.0]")
        assert required.values == (TextValue("1"), TextValue("2"))

    def test_decoded_list(self):
        required = parse_required(["left", False])
        assert required.values == (TextValue("left"), BoolValue(False))

    def test_json_scalar(self):
        required = parse_required('"custom_color"')
        assert required.scalar
        assert required.values == (TextValue("custom_color"),)

    def test_bare_attribute_text_is_scalar(self):
        required = parse_required("custom_color")
        assert required.scalar
        assert required.to_json() == "custom_color"

    @pytest.mark.parametrize(
        "payload",
        ["[oops", '{"a": 1}', "null", "", "[[1]]", '[{"x": 1}]', None],
    )
    def test_malformed_payloads_raise(self, payload):
        with pytest.raises(MalformedDependencyError):
            parse_required(payload)


class TestRequiredValues:
    """Membership and scalar equality."""

    def test_contains(self):
        required = parse_required('["a", true]')
        assert required.contains(TextValue("a"))
        assert required.contains(BoolValue(True))
        assert not required.contains(TextValue("true"))

    def test_scalar_is_not_a_set(self):
        required = parse_required('"a"')
        assert not required.contains(TextValue("a"))
        assert required.equals_scalar(TextValue("a"))
        assert not required.equals_scalar(TextValue("b"))

    def test_list_never_equals_scalar(self):
        required = parse_required('["a"]')
        assert not required.equals_scalar(TextValue("a"))
