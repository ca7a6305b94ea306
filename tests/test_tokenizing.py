"""Tests for input preprocessing and tokenization."""

import math

import pytest

from flexcss.syntax.preprocessing import Location
from flexcss.syntax.tokenizing import (
    BadStringToken,
    ColonToken,
    CommentToken,
    DimensionToken,
    FunctionToken,
    HashToken,
    HashTokenType,
    IdentToken,
    NumberToken,
    NumberTokenSign,
    NumberTokenType,
    PercentageToken,
    StringToken,
    URLToken,
    WhitespaceToken,
    normalize_input,
    tokenize,
)


def tokens_of(text, **kwargs):
    return list(tokenize(normalize_input(text), **kwargs))


class TestTokenKinds:
    def test_declaration(self):
        tokens = tokens_of("width: 10px")
        assert [type(token) for token in tokens] == [IdentToken, ColonToken, WhitespaceToken, DimensionToken]
        assert tokens[0].value == "width"
        assert tokens[3].value == 10
        assert tokens[3].unit == "px"
        assert tokens[3].type == NumberTokenType.integer

    def test_dimension_unit_is_kept_as_written(self):
        (token,) = tokens_of("10PX")
        assert token.unit == "PX"

    def test_number(self):
        (token,) = tokens_of("1.5")
        assert isinstance(token, NumberToken)
        assert token.value == 1.5
        assert token.type == NumberTokenType.number

    def test_negative_number(self):
        (token,) = tokens_of("-2")
        assert token.value == -2
        assert token.sign == NumberTokenSign.minus
        assert token.type == NumberTokenType.integer

    def test_exponent(self):
        (token,) = tokens_of("1e2")
        assert token.value == 100
        assert token.type == NumberTokenType.number

    def test_exponent_out_of_range(self):
        (token,) = tokens_of("1e1000000")
        assert token.value == math.inf
        (token,) = tokens_of("1e-1000000")
        assert token.value == 0

    def test_percentage_value_as_written(self):
        (token,) = tokens_of("50%")
        assert isinstance(token, PercentageToken)
        assert token.value == 50

    def test_hash_usable_as_id(self):
        (token,) = tokens_of("#menu")
        assert isinstance(token, HashToken)
        assert token.value == "menu"
        assert token.type == HashTokenType.id

    def test_hash_not_usable_as_id(self):
        (token,) = tokens_of("#123")
        assert token.type == HashTokenType.unrestricted

    def test_function(self):
        tokens = tokens_of("calc(1px)")
        assert isinstance(tokens[0], FunctionToken)
        assert tokens[0].value == "calc"

    def test_unquoted_url(self):
        (token,) = tokens_of("url(foo.png)")
        assert isinstance(token, URLToken)
        assert token.value == "foo.png"

    def test_string(self):
        (token,) = tokens_of("'abc'")
        assert isinstance(token, StringToken)
        assert token.value == "abc"

    def test_bad_string_is_a_token(self):
        errors = []
        tokens = tokens_of('"abc\ndef', parser_error=errors.append)
        assert isinstance(tokens[0], BadStringToken)
        assert errors == ["Newline in string"]

    def test_comment_is_whitespace(self):
        tokens = tokens_of("/* note */a")
        assert isinstance(tokens[0], CommentToken)
        assert isinstance(tokens[0], WhitespaceToken)
        assert tokens[0].value == " note "


class TestSourceAndLocation:
    @pytest.mark.parametrize("text", [
        "a { width: 10px; }",
        "a\r\nb\fc\rd",
        "#x.y, .z { color: rgb(1, 2, 3) } /* end */",
        "url( 'x' )",
    ])
    def test_source_reproduces_input(self, text):
        assert "".join(token.source for token in tokens_of(text)) == text

    def test_line_and_column(self):
        tokens = tokens_of("a\n  b")
        assert tokens[0].location == Location(1, 1)
        assert tokens[2].location == Location(2, 3)

    def test_crlf_is_one_newline(self):
        tokens = tokens_of("a\r\nb")
        assert tokens[1].value == "\n"
        assert tokens[2].location == Location(2, 1)

    def test_lone_carriage_return_is_a_newline(self):
        tokens = tokens_of("a\rb")
        assert [type(token) for token in tokens] == [IdentToken, WhitespaceToken, IdentToken]
        assert tokens[1].source == "\r"
        assert tokens[2].location == Location(2, 1)

    def test_null_is_replaced(self):
        (token,) = tokens_of("a\0b")
        assert token.value == "a\uFFFDb"
        assert token.source == "a\0b"
