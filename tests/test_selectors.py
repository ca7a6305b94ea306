"""Tests for parsing of selector lists and matching them against identities."""

import pytest

from flexcss.errors import SelectorParseError
from flexcss.selectors import (
    AttributeSelector,
    CaseSensitivity,
    ClassSelector,
    IdSelector,
    PseudoClassSelector,
    SelectorList,
    Specificity,
    TypeSelector,
    UniversalSelector,
    matches,
)
from flexcss.syntax.grammar import TokenProduction
from flexcss.syntax.parsing import parse_stylesheet
from flexcss.syntax.tokenizing import HashToken, HashTokenType
from flexcss.tag import Identity


class TestMatching:
    @pytest.mark.parametrize("selectors, tag, matched", [
        (".panel", "#menu.panel", True),
        ("#menu", "#menu.panel", True),
        ("#menu.panel", "#menu.panel.dark", True),
        ("#menu.dark", "#menu.panel", False),
        (".panel.dark", ".panel", False),
        ("#other", "#menu", False),
        (".a, .b", ".b", True),
        (".a, #b", ".c", False),
        ("*", "", True),
        ("*.panel", ".panel", True),
    ])
    def test_matches(self, selectors, tag, matched):
        assert SelectorList.parse(selectors).matches(Identity.from_string(tag)) == matched

    @pytest.mark.parametrize("selectors", [
        "div",
        "div.panel",
        "[data-x]",
        ".panel[lang|=en i]",
        ".panel:hover",
        ":not(.dark)",
        "a:nth-child(2n + 1)",
    ])
    def test_never_matching_selectors_parse(self, selectors):
        assert not SelectorList.parse(selectors).matches(Identity.from_string("#menu.panel"))

    def test_module_level_matches(self):
        assert matches(SelectorList.parse(".x"), Identity.new(classes=["y", "x"]))
        assert not matches(SelectorList.parse("#a"), Identity.new("b"))

    def test_case_sensitivity(self):
        selectors = SelectorList.parse("#Menu.Panel")
        identity = Identity.from_string("#menu.panel")
        assert not selectors.matches(identity)
        assert selectors.matches(identity, CaseSensitivity.ascii_case_insensitive)


class TestParsing:
    def test_components(self):
        (selector,) = SelectorList.parse("*#menu.panel[x]:hover")
        assert selector.components == (
            UniversalSelector(),
            IdSelector("menu"),
            ClassSelector("panel"),
            AttributeSelector("x", "[x]"),
            PseudoClassSelector("hover", ":hover"),
        )

    def test_type_selector(self):
        (selector,) = SelectorList.parse("button")
        assert selector.components == (TypeSelector("button"),)

    def test_list(self):
        selectors = SelectorList.parse("  .a ,.b,  #c  ")
        assert len(selectors) == 3
        assert str(selectors) == ".a, .b, #c"

    def test_functional_pseudo_class_text(self):
        (selector,) = SelectorList.parse(".x:not(.y, .z)")
        assert str(selector) == ".x:not(.y, .z)"

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "#123",
        ".x,",
        ",.x",
        ".x..y",
        "::before",
    ])
    def test_invalid(self, text):
        with pytest.raises(SelectorParseError):
            SelectorList.parse(text)

    @pytest.mark.parametrize("text", ["a b", ".a > .b", ".a + .b", ".a ~ .b"])
    def test_combinators_are_rejected(self, text):
        with pytest.raises(SelectorParseError) as info:
            SelectorList.parse(text)
        assert "combinators are not supported" in info.value.detail

    def test_error_location(self):
        with pytest.raises(SelectorParseError) as info:
            SelectorList.parse(".a >.b")
        assert info.value.location.column == 3

    def test_qualified_rule_prelude(self):
        (rule,) = parse_stylesheet("#menu.panel, .dark { }").rules
        assert str(rule.selector_list) == "#menu.panel, .dark"

    def test_qualified_rule_invalid_prelude(self):
        (rule,) = parse_stylesheet("a > b { }").rules
        with pytest.raises(SelectorParseError):
            rule.selector_list

    def test_token_production_attributes(self):
        production = TokenProduction(HashToken, type=HashTokenType.id)
        assert production.type is HashToken
        assert production.attributes == {"type": HashTokenType.id}


class TestSpecificity:
    @pytest.mark.parametrize("text, specificity", [
        ("*", Specificity(0, 0, 0)),
        ("div", Specificity(0, 0, 1)),
        (".a", Specificity(0, 1, 0)),
        ("#a", Specificity(1, 0, 0)),
        ("div#a.b.c[x]:hover", Specificity(1, 4, 1)),
    ])
    def test_specificity(self, text, specificity):
        (selector,) = SelectorList.parse(text)
        assert selector.specificity == specificity

    def test_ordering(self):
        assert Specificity(1, 0, 0) > Specificity(0, 9, 9)
        assert Specificity(0, 1, 0) > Specificity(0, 0, 9)

    def test_specificity_for(self):
        selectors = SelectorList.parse(".panel, #menu, #other")
        assert selectors.specificity_for(Identity.from_string("#menu.panel")) == Specificity(1, 0, 0)
        assert selectors.specificity_for(Identity.from_string(".panel")) == Specificity(0, 1, 0)
        assert selectors.specificity_for(Identity.from_string(".dark")) is None
