"""Tokenization (lexing) of CSS text, per sections 3 and 4 of http://drafts.csswg.org/css-syntax/.

No input is lost as tokens are vended: whitespace and comments become tokens too, and every token keeps the exact text it was formed from (`source`) along with where that text starts (`location`). The latter is what diagnostics report as "line" and "column".

Malformed input never aborts tokenization. Unterminated strings and broken `url(...)` values become `BadStringToken` and `BadURLToken`, respectively, which the value parsers reject explicitly.
"""

from .preprocessing import filter_code_points, FilteredCodePoint, Location
from ..utils import CP, BufferedPeekingReader, is_surrogate_code_point_ordinal, IteratorReader, join, parser_error, PeekingUnreadingReader

from abc import ABC
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from decimal import Decimal, localcontext, Overflow
from enum import StrEnum
from functools import partial
from itertools import chain
from typing import cast, ClassVar, TypeVar

NO_LOCATION = Location(0, 0)

@dataclass(frozen=True, kw_only=True, slots=True)
class Token(ABC):
    """A class of objects that group code point sequences as part of tokenization.

    Tokenization turns a stream of code points into a stream of these objects, each one a word, a number, a bracket, a comment, a quoted string, etc. Tokens are the input of the parser proper.
    """
    source: str # The original text the token was formed from
    location: Location = NO_LOCATION # Where `source` starts in the input

class HashTokenType(StrEnum):
    id = 'id' # The hash would be a valid identifier, i.e. usable as an id selector
    unrestricted = 'unrestricted'

class NumberTokenSign(StrEnum):
    plus = '+'
    minus = '-'

class NumberTokenType(StrEnum):
    integer = 'integer' # The number was written without a fractional part or exponent
    number = 'number'

@dataclass(frozen=True, kw_only=True, slots=True)
class AtKeywordToken(Token):
    value: str

@dataclass(frozen=True, kw_only=True, slots=True)
class BadStringToken(Token):
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class BadURLToken(Token):
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class CDCToken(Token):
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class CDOToken(Token):
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class ColonToken(Token):
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class CommaToken(Token):
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class DelimToken(Token):
    value: str

@dataclass(frozen=True, kw_only=True, slots=True)
class NumberToken(Token):
    value: int | float
    sign: NumberTokenSign | None = None
    type: NumberTokenType = NumberTokenType.integer

@dataclass(frozen=True, kw_only=True, slots=True)
class PercentageToken(Token):
    value: int | float # As written, i.e. `50` for "50%"
    sign: NumberTokenSign | None = None

@dataclass(frozen=True, kw_only=True, slots=True)
class DimensionToken(Token):
    value: int | float
    unit: str # As written; units are compared ASCII case-insensitively by the consumers
    sign: NumberTokenSign | None = None
    type: NumberTokenType = NumberTokenType.integer

@dataclass(frozen=True, kw_only=True, slots=True)
class FunctionToken(Token):
    value: str # The function name, without the opening parenthesis

@dataclass(frozen=True, kw_only=True, slots=True)
class HashToken(Token):
    value: str
    type: HashTokenType = HashTokenType.unrestricted

@dataclass(frozen=True, kw_only=True, slots=True)
class IdentToken(Token):
    value: str

@dataclass(frozen=True, kw_only=True, slots=True)
class StringToken(Token):
    value: str

@dataclass(frozen=True, kw_only=True, slots=True)
class URLToken(Token):
    value: str

@dataclass(frozen=True, kw_only=True, slots=True)
class SemicolonToken(Token):
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class WhitespaceToken(Token):
    value: str

@dataclass(frozen=True, kw_only=True, slots=True)
class CommentToken(WhitespaceToken):
    """Class of tokens capturing comments ("/* ... */"), beyond what CSS Syntax prescribes.

    CSS Syntax discards comments during tokenization. Keeping them as a subclass of `WhitespaceToken` preserves the input while letting every parser treat comments as plain white-space. `value` holds the text between "/*" and "*/".
    """
    pass

@dataclass(frozen=True, kw_only=True, slots=True)
class OpenBraceToken(Token):
    mirror_type: ClassVar[type[Token]]

@dataclass(frozen=True, kw_only=True, slots=True)
class OpenBracketToken(Token):
    mirror_type: ClassVar[type[Token]]

@dataclass(frozen=True, kw_only=True, slots=True)
class OpenParenToken(Token):
    mirror_type: ClassVar[type[Token]]

@dataclass(frozen=True, kw_only=True, slots=True)
class CloseBraceToken(Token):
    mirror_type: ClassVar[type[Token]]

@dataclass(frozen=True, kw_only=True, slots=True)
class CloseBracketToken(Token):
    mirror_type: ClassVar[type[Token]]

@dataclass(frozen=True, kw_only=True, slots=True)
class CloseParenToken(Token):
    mirror_type: ClassVar[type[Token]]

CloseBraceToken.mirror_type = OpenBraceToken
CloseBracketToken.mirror_type = OpenBracketToken
CloseParenToken.mirror_type = OpenParenToken
OpenBraceToken.mirror_type = CloseBraceToken
OpenBracketToken.mirror_type = CloseBracketToken
OpenParenToken.mirror_type = CloseParenToken

def tokenize(input: PeekingUnreadingReader[FilteredCodePoint], *, parser_error: Callable[..., None] = parser_error) -> Iterator[Token]:
    """Generate a sequence of tokens from a sequence of [filtered] code points.

    Implements http://drafts.csswg.org/css-syntax/#css-tokenize, except that `<unicode-range-token>` is never produced (no supported property uses one).

    :param input: The code points to tokenize; see `normalize_input` for obtaining one from a string
    :param parser_error: Called with a message whenever CSS Syntax calls for a "parse error"; tokenization always recovers from these
    """
    consumed: list[FilteredCodePoint] = [] # Code points making up the token being formed
    def current_cp() -> FilteredCodePoint:
        """See http://drafts.csswg.org/css-syntax/#current-input-code-point."""
        return consumed[-1]
    def next(n: int) -> str:
        """See http://drafts.csswg.org/css-syntax/#next-input-code-point."""
        return join(input.peek(n))
    def consume(n: int) -> None:
        """Move `n` code points from the stream to `consumed`; at end of stream, the empty string (the "EOF code point") is consumed instead."""
        consumed.extend(input.read(n) or [ FilteredCodePoint('', source='') ])
    def reconsume(*cps: FilteredCodePoint) -> None:
        """See http://drafts.csswg.org/css-syntax/#reconsume-the-current-input-code-point."""
        assert cps and list(cps) == consumed[-len(cps):]
        input.unread(cp for cp in cps if cp.source) # The EOF code point is never put back
        del consumed[-len(cps):]
    T = TypeVar('T', bound=Token)
    def sourced(cls: type[T]) -> Callable[..., T]:
        """Return a constructor of `cls` tokens that fills in `source` and `location` from what was consumed."""
        def create(*args, **kwargs) -> T:
            location = consumed[0].location if consumed else NO_LOCATION
            return cls(*args, **kwargs, source=join(cp.source for cp in consumed), location=location)
        return create
    def consume_comment_token() -> CommentToken:
        """Tokenize the "/* ... */" sequence at the head of the stream (comments are kept, unlike what CSS Syntax mandates)."""
        assert next(2) == '/*'
        consume(2)
        while next(1):
            if next(2) == '*/':
                consume(2)
                return sourced(CommentToken)(value=join(consumed[2:-2]))
            consume(1)
        parser_error('Unterminated comment')
        return sourced(CommentToken)(value=join(consumed[2:]))
    def is_valid_escape(cps: str | None = None) -> bool:
        """See http://drafts.csswg.org/css-syntax/#starts-with-a-valid-escape."""
        if not cps:
            cps = current_cp() + next(1)
        return cps[0:1] == '\\' and not is_newline(cps[1:2])
    def consume_escaped_code_point() -> CP:
        """See http://drafts.csswg.org/css-syntax/#consume-escaped-code-point."""
        consume(1)
        match consumed[-1]:
            case cp if is_hex_digit(cp):
                mark = len(consumed)
                while is_hex_digit(next(1)) and len(consumed) - mark < 5:
                    consume(1)
                digits = join(consumed[mark-1:])
                if is_whitespace(next(1)):
                    consume(1)
                num = int(digits, 16)
                return '\uFFFD' if (num == 0 or is_surrogate_code_point_ordinal(num) or num > 0x10ffff) else chr(num)
            case '':
                parser_error('Escape at end of input')
                return '\uFFFD'
            case _ as cp:
                return cp
    def consume_ident_sequence() -> str:
        """See http://drafts.csswg.org/css-syntax/#consume-name."""
        result = ''
        while True:
            consume(1)
            match consumed[-1]:
                case cp if is_ident_code_point(cp):
                    result += cp
                case _ if is_valid_escape():
                    result += consume_escaped_code_point()
                case _:
                    reconsume(current_cp())
                    return result
    def consume_ident_like_token() -> FunctionToken | IdentToken | URLToken | BadURLToken:
        """See http://drafts.csswg.org/css-syntax/#consume-ident-like-token."""
        string = consume_ident_sequence()
        if next(1) != '(':
            return sourced(IdentToken)(value=string)
        consume(1)
        if string.lower() == 'url':
            while all(is_whitespace(cp) for cp in next(2)) and next(2):
                consume(1)
            cps = next(2)
            if not (cps[0:1] in ('"', '\'') or (is_whitespace(cps[0:1]) and cps[1:2] in ('"', '\''))):
                return consume_url_token()
        return sourced(FunctionToken)(value=string)
    def consume_number() -> tuple[int | float, NumberTokenType, NumberTokenSign | None]:
        """See http://drafts.csswg.org/css-syntax/#consume-number."""
        type = NumberTokenType.integer
        number, exponent = '', ''
        sign: NumberTokenSign | None = None
        if (cp := next(1)) in ('+', '-'):
            consume(1)
            number += (sign := NumberTokenSign(cp))
        while is_digit(cp := next(1)):
            consume(1)
            number += cp
        if (cps := next(2))[0:1] == '.' and is_digit(cps[1:2]):
            consume(1)
            number += '.'
            while is_digit(cp := next(1)):
                consume(1)
                number += cp
            type = NumberTokenType.number
        if (cps := next(3))[0:1] in ('E', 'e') and ((cps[1:2] in ('-', '+') and is_digit(cps[2:3])) or is_digit(cps[1:2])):
            consume(1)
            if (cp := next(1)) in ('+', '-'):
                consume(1)
                exponent += cp
            while is_digit(cp := next(1)):
                consume(1)
                exponent += cp
            type = NumberTokenType.number
        # `Decimal` keeps e.g. "1.2" from becoming `1.2000000000000002` the way `12 * 10**-1` would
        with localcontext() as context:
            context.traps[Overflow] = False # Out-of-range magnitudes become infinities, for the value parsers to reject
            value = Decimal(number) * Decimal(10) ** Decimal(exponent or '0')
        return (int(value) if type == NumberTokenType.integer else float(value)), type, sign
    def consume_numeric_token() -> DimensionToken | NumberToken | PercentageToken:
        """See http://drafts.csswg.org/css-syntax/#consume-numeric-token."""
        value, type, sign = consume_number()
        if starts_ident_sequence(next(3)):
            return sourced(DimensionToken)(value=value, sign=sign, type=type, unit=consume_ident_sequence())
        elif next(1) == '%':
            consume(1)
            return sourced(PercentageToken)(value=value, sign=sign)
        else:
            return sourced(NumberToken)(value=value, sign=sign, type=type)
    def consume_remnants_of_bad_url() -> None:
        """See http://drafts.csswg.org/css-syntax/#consume-remnants-of-bad-url."""
        while True:
            consume(1)
            match consumed[-1]:
                case ')' | '':
                    return
                case _ if is_valid_escape():
                    consume_escaped_code_point()
    def consume_url_token() -> URLToken | BadURLToken:
        """See http://drafts.csswg.org/css-syntax/#consume-url-token."""
        while is_whitespace(next(1)):
            consume(1)
        value = ''
        while True:
            consume(1)
            match cast(str, consumed[-1]):
                case ')':
                    break
                case '':
                    parser_error('Unterminated URL')
                    break
                case cp if is_whitespace(cp):
                    while is_whitespace(cp := next(1)):
                        consume(1)
                    if cp in (')', ''):
                        consume(1)
                        if cp == '':
                            parser_error('Unterminated URL')
                        break
                    consume_remnants_of_bad_url()
                    return sourced(BadURLToken)()
                case cp if cp in ('"', '\'', '(') or is_non_printable_code_point(cp):
                    parser_error('Invalid code point in URL')
                    consume_remnants_of_bad_url()
                    return sourced(BadURLToken)()
                case '\\':
                    if is_valid_escape():
                        reconsume(current_cp())
                        consume(1)
                        value += consume_escaped_code_point()
                    else:
                        parser_error('Invalid escape in URL')
                        consume_remnants_of_bad_url()
                        return sourced(BadURLToken)()
                case _ as cp:
                    value += cp
        return sourced(URLToken)(value=value)
    def starts_ident_sequence(cps: str | None = None) -> bool:
        """See http://drafts.csswg.org/css-syntax/#would-start-an-identifier."""
        if not cps:
            cps = current_cp() + next(2)
        match cps[0:1]:
            case '-':
                return is_ident_start_code_point(cp := cps[1:2]) or cp == '-' or is_valid_escape(cps[1:3])
            case '\\':
                return is_valid_escape(cps[0:2])
            case cp:
                return is_ident_start_code_point(cp)
    def starts_number(cps: str | None = None) -> bool:
        """See http://drafts.csswg.org/css-syntax/#starts-with-a-number."""
        if not cps:
            cps = current_cp() + next(2)
        match cps[0:1]:
            case '+' | '-':
                return is_digit(cp := cps[1:2]) or (cp == '.' and is_digit(cps[2:3]))
            case '.':
                return is_digit(cps[1:2])
            case cp:
                return is_digit(cp)
    def consume_string_token() -> StringToken | BadStringToken:
        """See http://drafts.csswg.org/css-syntax/#consume-string-token."""
        ending_cp = consumed[-1]
        value = ''
        while True:
            consume(1)
            match cast(str, consumed[-1]):
                case cp if cp == ending_cp:
                    break
                case '':
                    parser_error('Unterminated string')
                    break
                case cp if is_newline(cp):
                    parser_error('Newline in string')
                    reconsume(current_cp())
                    return sourced(BadStringToken)()
                case '\\':
                    if not (cp := next(1)):
                        pass
                    elif is_newline(cp):
                        consume(1)
                    else:
                        value += consume_escaped_code_point()
                case _ as cp:
                    value += cp
        return sourced(StringToken)(value=value)
    def consume_token() -> Token | None:
        """See http://drafts.csswg.org/css-syntax/#consume-token."""
        assert not consumed
        consume(1)
        match consumed[-1]:
            case cp if is_whitespace(cp):
                while is_whitespace(next(1)):
                    consume(1)
                return sourced(WhitespaceToken)(value=join(consumed))
            case '"' | '\'':
                return consume_string_token()
            case '#' as cp:
                if is_ident_code_point(next(1)) or is_valid_escape(next(2)):
                    type = HashTokenType.id if starts_ident_sequence(next(3)) else HashTokenType.unrestricted
                    return sourced(HashToken)(type=type, value=consume_ident_sequence())
                return sourced(DelimToken)(value=cp)
            case '(':
                return sourced(OpenParenToken)()
            case ')':
                return sourced(CloseParenToken)()
            case '+' | '.' as cp:
                if starts_number():
                    reconsume(current_cp())
                    return consume_numeric_token()
                return sourced(DelimToken)(value=cp)
            case ',':
                return sourced(CommaToken)()
            case '-' as cp:
                if starts_number():
                    reconsume(current_cp())
                    return consume_numeric_token()
                elif next(2) == '->':
                    consume(2)
                    return sourced(CDCToken)()
                elif starts_ident_sequence():
                    reconsume(current_cp())
                    return consume_ident_like_token()
                return sourced(DelimToken)(value=cp)
            case ':':
                return sourced(ColonToken)()
            case ';':
                return sourced(SemicolonToken)()
            case '<' as cp:
                if next(3) == '!--':
                    consume(3)
                    return sourced(CDOToken)()
                return sourced(DelimToken)(value=cp)
            case '@' as cp:
                if starts_ident_sequence(next(3)):
                    return sourced(AtKeywordToken)(value=consume_ident_sequence())
                return sourced(DelimToken)(value=cp)
            case '[':
                return sourced(OpenBracketToken)()
            case '\\' as cp:
                if is_valid_escape():
                    reconsume(current_cp())
                    return consume_ident_like_token()
                parser_error('Invalid escape')
                return sourced(DelimToken)(value=cp)
            case ']':
                return sourced(CloseBracketToken)()
            case '{':
                return sourced(OpenBraceToken)()
            case '}':
                return sourced(CloseBraceToken)()
            case cp if is_digit(cp):
                reconsume(current_cp())
                return consume_numeric_token()
            case cp if is_ident_start_code_point(cp):
                reconsume(current_cp())
                return consume_ident_like_token()
            case '/' if next(1) == '*':
                reconsume(current_cp())
                return consume_comment_token()
            case '':
                return None
            case _ as cp:
                return sourced(DelimToken)(value=cp)
    while token := consume_token():
        yield token
        consumed.clear()

def normalize_input(input: str | Callable[[], CP] | Iterable[str]) -> PeekingUnreadingReader[FilteredCodePoint]:
    """Turn a string (or a `next`-like callable, or an iterable of strings) into the filtered code point reader `tokenize` expects."""
    match input:
        case str():
            input = partial(builtins_next, iter(input), '')
        case Callable(): # type: ignore # See http://github.com/python/typeshed/issues/11766
            pass
        case Iterable():
            input = partial(builtins_next, chain.from_iterable(input), '')
        case _:
            raise TypeError(f"Cannot tokenize {input!r}")
    return BufferedPeekingReader(IteratorReader(filter_code_points(input)))

builtins_next = next # `tokenize` shadows `next` with its own "next input code point" helper

def is_digit(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#digit."""
    return '0' <= cp <= '9' and cp != ''

def is_hex_digit(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#hex-digit."""
    return is_digit(cp) or ('A' <= cp <= 'F') or ('a' <= cp <= 'f')

def is_ident_code_point(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#ident-code-point."""
    return is_ident_start_code_point(cp) or is_digit(cp) or cp == '-'

def is_ident_start_code_point(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#ident-start-code-point."""
    return ('A' <= cp <= 'Z') or ('a' <= cp <= 'z') or is_non_ascii_ident_code_point(cp) or cp == '_'

def is_newline(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#newline."""
    return cp == '\n'

def is_non_ascii_ident_code_point(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#non-ascii-ident-code-point."""
    return cp == '\u00b7' or '\u00c0' <= cp <= '\u00d6' or '\u00d8' <= cp <= '\u00f6' or '\u00f8' <= cp <= '\u037d' or '\u037f' <= cp <= '\u1fff' or cp in ('\u200c', '\u200d', '\u203f', '\u2040') or '\u2070' <= cp <= '\u218f' or '\u2c00' <= cp <= '\u2fef' or '\u3001' <= cp <= '\ud7ff' or '\uf900' <= cp <= '\ufdcf' or '\ufdf0' <= cp <= '\ufffd' or cp >= '\U00010000'

def is_non_printable_code_point(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#non-printable-code-point."""
    return '\u0000' <= cp <= '\u0008' or cp == '\u000b' or '\u000e' <= cp <= '\u001f' or cp == '\u007f'

def is_whitespace(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#whitespace."""
    return is_newline(cp) or cp in ('\t', ' ')
