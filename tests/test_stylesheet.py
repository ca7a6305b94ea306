"""Tests for parsing stylesheets into rules, error reporting, and applying rules to entities."""

import logging

import pytest

from flexcss.context import Context
from flexcss.errors import ContextualErrorKind, InvalidRuleError, InvalidValueError, ParseErrorKind, SelectorParseError, UnknownPropertyError
from flexcss.properties import PropertyDeclaration, PropertyId
from flexcss.style import Paint, Size, Style, Val
from flexcss.stylesheet import InlineStyle, Stylesheet, parse_inline
from flexcss.syntax.preprocessing import Location
from flexcss.tag import Identity
from flexcss.values import Color, Display


def parse(text):
    errors = []
    return Stylesheet.parse(text, on_error=errors.append), errors


class TestParse:
    def test_rules(self):
        stylesheet, errors = parse(".a { width: 10px; display: none } #b, .c { }")
        assert errors == []
        assert len(stylesheet.rules) == 2
        first, second = stylesheet.rules
        assert str(first.selectors) == ".a"
        assert [declaration.id for declaration in first.declarations] == [PropertyId.width, PropertyId.display]
        assert str(second.selectors) == "#b, .c"
        assert second.declarations == ()

    def test_location(self):
        stylesheet = Stylesheet.parse("", location="app.css")
        assert stylesheet.location == "app.css"
        assert stylesheet.rules == ()

    def test_load(self, tmp_path):
        path = tmp_path / "app.css"
        path.write_text(".panel { width: 50%; }\n", encoding="utf-8")
        stylesheet = Stylesheet.load(path)
        assert stylesheet.location == str(path)
        (rule,) = stylesheet.rules
        assert str(rule.selectors) == ".panel"


class TestErrors:
    def test_unknown_property(self):
        stylesheet, errors = parse("\n.a { float: left; width: 1px }")
        (error,) = errors
        assert error.kind == ContextualErrorKind.unsupported_property
        assert error.css == "float"
        assert isinstance(error.error, UnknownPropertyError)
        assert error.location == Location(2, 6)
        assert str(error) == "Unsupported/unrecognised property name (float), Unknown property: float"
        assert error.error_string_with_location() == "Failed to parse css at (line: 2, col: 6): Unsupported/unrecognised property name (float), Unknown property: float"
        (rule,) = stylesheet.rules
        assert [declaration.id for declaration in rule.declarations] == [PropertyId.width]

    def test_invalid_value(self):
        _, errors = parse(".a { width: 10foo }")
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_value
        assert error.css == "width: 10foo"
        assert isinstance(error.error, InvalidValueError)
        assert error.error.kind == ParseErrorKind.unexpected_dimension
        assert str(error).startswith("The value of a property is invalid: ")
        assert error.location == Location(1, 13)

    def test_value_not_exhausted(self):
        _, errors = parse(".a { width: 1px 2px }")
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_value
        assert error.error.kind == ParseErrorKind.declaration_value_not_exhausted

    def test_bad_declaration(self):
        stylesheet, errors = parse(".a { width 1px; height: 2px }")
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_value
        assert error.error.kind == ParseErrorKind.unexpected_token
        (rule,) = stylesheet.rules
        assert [declaration.id for declaration in rule.declarations] == [PropertyId.height]

    def test_at_rule(self):
        stylesheet, errors = parse("@media screen { .a { width: 1px } } .b { }")
        (error,) = errors
        assert error.kind == ContextualErrorKind.unsupported_at_rule
        assert str(error) == "Unsupported/unrecognised @-rule (media), Unsupported @-rule: media"
        assert error.location == Location(1, 1)
        (rule,) = stylesheet.rules
        assert str(rule.selectors) == ".b"

    def test_nested_at_rule(self):
        stylesheet, errors = parse(".a { @apply --x; width: 1px }")
        assert [error.kind for error in errors] == [ContextualErrorKind.unsupported_at_rule]
        (rule,) = stylesheet.rules
        assert len(rule.declarations) == 1

    def test_invalid_selector(self):
        stylesheet, errors = parse(".a > .b { width: 1px } .c { width: 2px }")
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_selector
        assert error.css == ".a > .b"
        assert isinstance(error.error, SelectorParseError)
        assert str(error).startswith("Invalid selector (.a > .b), ")
        (rule,) = stylesheet.rules
        assert str(rule.selectors) == ".c"

    def test_rule_without_block(self):
        stylesheet, errors = parse(".a { } .b")
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_selector
        assert isinstance(error.error, InvalidRuleError)
        assert len(stylesheet.rules) == 1

    def test_errors_are_logged_by_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flexcss.stylesheet"):
            stylesheet = Stylesheet.parse(".a { float: left }")
        assert len(stylesheet.rules) == 1
        (record,) = caplog.records
        assert record.getMessage() == "Failed to parse css at (line: 1, col: 6): Unsupported/unrecognised property name (float), Unknown property: float"

    @pytest.mark.parametrize("declaration", [
        "width: 1e1000000px",
        "width: 1e400px",
        "flex-grow: 1" + "0" * 400,
        "height: 1e999%",
    ])
    def test_out_of_range_value(self, declaration):
        stylesheet, errors = parse(f".a {{ {declaration}; min-width: 2px }}")
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_value
        assert error.error.kind == ParseErrorKind.invalid_value
        (rule,) = stylesheet.rules
        assert [declaration.id for declaration in rule.declarations] == [PropertyId.min_width]

    @pytest.mark.parametrize("text, kind", [
        (".a { width: url(a b); height: 2px }", ParseErrorKind.bad_url),
        ('.a { width: "abc\n; height: 2px }', ParseErrorKind.bad_string),
    ])
    def test_malformed_token_value(self, text, kind):
        stylesheet, errors = parse(text)
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_value
        assert error.error.kind == kind
        (rule,) = stylesheet.rules
        assert [declaration.id for declaration in rule.declarations] == [PropertyId.height]

    def test_inline_errors(self):
        errors = []
        declarations = parse_inline("display: 5px; width: 1px", on_error=errors.append)
        assert [declaration.id for declaration in declarations] == [PropertyId.width]
        (error,) = errors
        assert error.kind == ContextualErrorKind.invalid_value
        assert error.css == "display: 5px"


class TestApply:
    STYLESHEET = """
        .panel { width: 100px; display: none; color: #000 }
        #menu { width: 50% }
        .dark, .light { color: white }
    """

    def test_matching_rules_in_document_order(self):
        stylesheet, _ = parse(self.STYLESHEET)
        rules = list(stylesheet.matching_rules(Identity.from_string("#menu.panel")))
        assert [str(rule.selectors) for rule in rules] == [".panel", "#menu"]

    def test_declarations_for(self):
        stylesheet, _ = parse(self.STYLESHEET)
        declarations = list(stylesheet.declarations_for(Identity.from_string(".light")))
        assert declarations == [PropertyDeclaration(PropertyId.color, Color(1.0, 1.0, 1.0, 1.0))]

    def test_later_rule_wins_regardless_of_specificity(self):
        stylesheet, _ = parse("#menu { width: 1px } .panel { width: 2px }")
        style = Style()
        stylesheet.apply(Identity.from_string("#menu.panel"), Context(), style)
        assert style.size.width == Val.px(2.0)

    def test_apply_style_and_paint(self):
        stylesheet, _ = parse(self.STYLESHEET)
        identity = Identity.from_string("#menu.panel")
        style, paint = Style(), Paint()
        stylesheet.apply(identity, Context(), style)
        stylesheet.apply(identity, Context(), paint)
        assert style == Style(display=Display.none, size=Size(Val.percent(50.0), Val.auto()))
        assert paint.color == Color(0.0, 0.0, 0.0, 1.0)

    def test_no_match(self):
        stylesheet, _ = parse(self.STYLESHEET)
        style = Style()
        stylesheet.apply(Identity.from_string(".other"), Context(), style)
        assert style == Style()

    def test_important_does_not_reorder(self):
        style = InlineStyle("width: 1px !important; width: 2px").to_style()
        assert style.size.width == Val.px(2.0)
