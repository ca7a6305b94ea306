"""Tests for the property registry and declaration parsing."""

import pytest

from flexcss.errors import InvalidValueError, ParseError, ParseErrorKind, UnknownPropertyError
from flexcss.properties import PARSERS, REGISTRY, PropertyDeclaration, PropertyId, parse_declaration, resolve
from flexcss.syntax.parsing import ComponentStream
from flexcss.values import AbsoluteLength, Display, MaybeAuto, Number, Percentage, Ratio, SidedValue
from flexcss.values.generic import NonNegative


def declare(name, value):
    return parse_declaration(name, ComponentStream.from_string(value))


class TestRegistry:
    def test_every_property_has_a_parser(self):
        assert set(PARSERS) == set(PropertyId)
        assert all(REGISTRY[id.value].id is id for id in PropertyId)

    @pytest.mark.parametrize("name, id", [
        ("width", PropertyId.width),
        ("WIDTH", PropertyId.width),
        ("Justify-Content", PropertyId.justify_content),
        ("border-width-top", PropertyId.border_width_top),
        ("border-top-width", PropertyId.border_width_top),
        ("border-left-width", PropertyId.border_width_left),
    ])
    def test_resolve(self, name, id):
        assert resolve(name).id is id

    @pytest.mark.parametrize("name", ["float", "grid-template", "", "widths"])
    def test_unknown(self, name):
        assert resolve(name) is None

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            REGISTRY["float"] = REGISTRY["width"]


class TestParseDeclaration:
    def test_width(self):
        assert declare("width", "100%") == PropertyDeclaration(PropertyId.width, MaybeAuto(Percentage(1.0)))

    def test_alias_declares_the_canonical_property(self):
        assert declare("border-top-width", "2px").id is PropertyId.border_width_top

    def test_keyword(self):
        assert declare("display", "none").value is Display.none

    def test_number(self):
        assert declare("flex-grow", "2").value == NonNegative(Number(2.0))

    def test_ratio(self):
        assert declare("aspect-ratio", "16 / 9").value == MaybeAuto(Ratio.new(16, 9))

    def test_shorthand(self):
        value = declare("margin", "1px 2px").value
        assert value == SidedValue.new_2(MaybeAuto(AbsoluteLength(1)), MaybeAuto(AbsoluteLength(2)))

    def test_unknown_property(self):
        with pytest.raises(UnknownPropertyError) as info:
            declare("float", "left")
        assert info.value.detail == "float"

    def test_invalid_value_is_not_an_unknown_property(self):
        with pytest.raises(InvalidValueError) as info:
            declare("display", "5px")
        assert not isinstance(info.value, UnknownPropertyError)

    def test_important_is_accepted(self):
        assert declare("width", "10px !important") == declare("width", "10px")
        assert declare("width", "10px ! IMPORTANT") == declare("width", "10px")

    def test_value_must_be_exhausted(self):
        with pytest.raises(ParseError) as info:
            declare("margin", "1px 2px 3px 4px 5px")
        assert info.value.kind == ParseErrorKind.declaration_value_not_exhausted
        assert info.value.detail == "5px"

    def test_trailing_garbage_after_important(self):
        with pytest.raises(ParseError) as info:
            declare("width", "10px !important x")
        assert info.value.kind == ParseErrorKind.declaration_value_not_exhausted

    @pytest.mark.parametrize("name, value", [
        ("flex-grow", "-1"),
        ("flex-shrink", "-0.5"),
        ("aspect-ratio", "-1"),
    ])
    def test_negative_is_invalid(self, name, value):
        with pytest.raises(InvalidValueError):
            declare(name, value)

    def test_empty_value(self):
        with pytest.raises(ParseError) as info:
            declare("width", "")
        assert info.value.kind == ParseErrorKind.end_of_input

    @pytest.mark.parametrize("value, kind", [
        ("url(a b)", ParseErrorKind.bad_url),
        ('"abc\n', ParseErrorKind.bad_string),
    ])
    def test_malformed_token(self, value, kind):
        with pytest.raises(InvalidValueError) as info:
            declare("width", value)
        assert info.value.kind == kind

    def test_color(self):
        assert declare("color", "#fff").value.as_rgba() == (1, 1, 1, 1)
