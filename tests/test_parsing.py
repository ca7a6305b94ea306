"""Tests for parsing of stylesheets and declaration lists, and for the component value cursor."""

import pytest

from flexcss.errors import ParseError, ParseErrorKind
from flexcss.syntax.parsing import (
    AtRule,
    BadDeclaration,
    BadRule,
    ComponentStream,
    Declaration,
    Function,
    QualifiedRule,
    SimpleBlock,
    parse_declaration_list,
    parse_list_of_component_values,
    parse_stylesheet,
    source,
)
from flexcss.syntax.preprocessing import Location
from flexcss.syntax.tokenizing import DimensionToken, IdentToken


class TestParseStylesheet:
    def test_qualified_rule(self):
        stylesheet = parse_stylesheet(".a { width: 10px; }")
        (rule,) = stylesheet.rules
        assert isinstance(rule, QualifiedRule)
        assert source(rule.prelude) == ".a "
        (declaration,) = rule.declarations
        assert declaration.name == "width"
        assert source(declaration.value) == "10px"
        assert not declaration.important

    def test_source_reproduces_input(self):
        text = "/* x */ .a, #b { width: 10px !important; color: red }\n@media screen { .c { } }"
        assert source(parse_stylesheet(text)) == text

    def test_important_is_split_off_the_value(self):
        (rule,) = parse_stylesheet(".a { width: 10px ! IMPORTANT }").rules
        (declaration,) = rule.declarations
        assert declaration.important
        assert source(declaration.value) == "10px"

    def test_at_rule(self):
        rules = parse_stylesheet("@media screen { .a { } } .b { }").rules
        assert [type(rule) for rule in rules] == [AtRule, QualifiedRule]
        assert rules[0].name == "media"
        assert rules[0].block is not None

    def test_at_rule_without_block(self):
        (rule,) = parse_stylesheet("@import 'x.css';").rules
        assert isinstance(rule, AtRule)
        assert rule.block is None

    def test_rule_without_block(self):
        rules = parse_stylesheet(".a { } .b").rules
        assert [type(rule) for rule in rules] == [QualifiedRule, BadRule]
        assert source(rules[1].prelude) == ".b"

    def test_location(self):
        stylesheet = parse_stylesheet("", location="style.css")
        assert stylesheet.location == "style.css"
        assert stylesheet.rules == ()


class TestParseDeclarationList:
    def test_declarations(self):
        contents = parse_declaration_list("width: 100%; height: 100px;")
        assert [declaration.name for declaration in contents.declarations] == ["width", "height"]

    def test_bad_declaration_is_recovered_from(self):
        contents = parse_declaration_list("width 10px; height: 5px")
        items = [item for item in contents if isinstance(item, (Declaration, BadDeclaration))]
        assert [type(item) for item in items] == [BadDeclaration, Declaration]
        assert source(items[0]) == "width 10px;"

    def test_empty_value_is_bad(self):
        contents = parse_declaration_list("width: ; height: 5px")
        assert [declaration.name for declaration in contents.declarations] == ["height"]

    def test_nested_at_rule(self):
        contents = parse_declaration_list("@apply --x; width: 1px")
        assert [type(rule) for rule in contents.rules] == [AtRule]
        assert [declaration.name for declaration in contents.declarations] == ["width"]

    def test_function_and_block_are_single_values(self):
        (declaration,) = parse_declaration_list("color: rgb(1, (2), 3)").declarations
        (value,) = declaration.value
        assert isinstance(value, Function)
        assert value.name == "rgb"
        assert any(isinstance(item, SimpleBlock) for item in value.value)


class TestComponentStream:
    def test_whitespace_is_skipped(self):
        stream = ComponentStream.from_string("  a  b ")
        assert stream.expect_ident() == "a"
        assert stream.expect_ident() == "b"
        assert stream.is_exhausted()

    def test_next_at_end(self):
        stream = ComponentStream.from_string("")
        with pytest.raises(ParseError) as info:
            stream.next()
        assert info.value.kind == ParseErrorKind.end_of_input

    def test_try_parse_rewinds(self):
        stream = ComponentStream.from_string("10px auto")
        assert stream.try_parse(lambda input: input.expect_ident_matching("auto")) is None
        assert isinstance(stream.peek(), DimensionToken)

    def test_try_parse_consumes_on_success(self):
        stream = ComponentStream.from_string("AUTO 10px")
        assert stream.try_parse(lambda input: input.expect_ident_matching("auto")) == "AUTO"
        assert isinstance(stream.next(), DimensionToken)

    def test_mark_and_restore(self):
        stream = ComponentStream.from_string("a b")
        stream.mark()
        stream.next()
        stream.restore_mark()
        assert isinstance(stream.peek(), IdentToken)
        assert stream.peek().value == "a"

    def test_expect_exhausted(self):
        stream = ComponentStream.from_string("a b")
        stream.next()
        with pytest.raises(ParseError) as info:
            stream.expect_exhausted()
        assert info.value.kind == ParseErrorKind.declaration_value_not_exhausted
        assert info.value.detail == "b"
        assert info.value.location == Location(1, 3)

    def test_expect_delim(self):
        stream = ComponentStream.from_string("/ x")
        assert stream.expect_delim("/") == "/"
        with pytest.raises(ParseError):
            stream.expect_delim("/")

    def test_unbalanced_close_bracket(self):
        stream = ComponentStream(parse_list_of_component_values("]"))
        with pytest.raises(ParseError) as info:
            stream.expect_ident()
        assert info.value.kind == ParseErrorKind.unbalanced_close_square_bracket
