"""Implements the parts of [CSS Syntax](http://drafts.csswg.org/css-syntax/) related to parsing (see section 5) of CSS text.

The parser builds a concrete syntax tree: every product is a list of tokens and other products, in input order, so that `source` reproduces the exact text any product was parsed from. Rule preludes and declaration values are left as lists of component values; turning those into selectors and typed values is the job of `flexcss.selectors` and `flexcss.values`, which read them through a `ComponentStream`.

Only the flat subset of CSS is parsed: rule blocks hold declarations (and at-rules), never nested style rules.

# Deviations

* For preservation of input, "discarding" of a token is equivalent to consuming it; there's no `discard_token` procedure
* EOF (end-of-file) token isn't featured in the parse tree, and `None` is used to identify the condition
* Declarations that fail to parse are kept, as `BadDeclaration` products, instead of being dropped; likewise a qualified rule cut short by the end of input becomes a `BadRule`
"""

from . import tokenizing
from .preprocessing import Location
from .tokenizing import Token, tokenize
from .tokenizing import AtKeywordToken, BadStringToken, BadURLToken, CDOToken, CDCToken, CloseBraceToken, CloseBracketToken, CloseParenToken, ColonToken, DelimToken, FunctionToken, IdentToken, OpenBraceToken, OpenBracketToken, OpenParenToken, SemicolonToken, WhitespaceToken
from ..errors import ParseError, ParseErrorKind
from ..utils import Appender, ascii_lower, eq_ignore_ascii_case, parser_error, T

import builtins
from itertools import chain

from collections.abc import Callable, Iterable, Iterator, MutableSequence, Sequence
from typing import cast, Protocol, runtime_checkable, TypeAlias, Union

# A [parse] _product_ is an object returned by the parser and its constituents; products make up other products, ultimately making up a parse tree
Product = Sequence[Union['Product', Token]]

MutableProduct = list[Union['MutableProduct', Token]] # The parser builds its products by appending to them

class Function(MutableProduct):
    """Class of parse products that represent parsed CSS function calls.

    Example: in `color: rgb(100, 0, 0)`, `rgb(100, 0, 0)` is parsed to a `Function` with `'rgb'` for its `name` and the component values between the parentheses for its `value`.

    See also http://drafts.csswg.org/css-syntax/#function.
    """
    @property
    def name(self) -> str:
        return cast(FunctionToken, self[0]).value
    @property
    def value(self) -> Sequence['ComponentValue']:
        return self[1] # type: ignore

class SimpleBlock(MutableProduct):
    """Class of parse products that represent sequences of component values surrounded by a pair of parentheses/brackets/braces.

    See also http://drafts.csswg.org/css-syntax/#simple-block.
    """
    @property
    def token(self) -> Token:
        return self[0] # type: ignore
    @property
    def value(self) -> Sequence['ComponentValue']:
        return self[1] # type: ignore

ComponentValue = Token | Function | SimpleBlock # See http://drafts.csswg.org/css-syntax/#component-value

class Declaration(MutableProduct):
    """Class of parse products that represent a CSS declaration.

    Example: `color: red !important` is parsed as a `Declaration` with `'color'` for its `name`, a list holding the identifier token `red` for its `value` (the white-space around the value and the `!important` marker are kept apart from it), and `True` for `important`.

    See also http://drafts.csswg.org/css-syntax/#declaration.
    """
    @property
    def name(self) -> str:
        return cast(IdentToken, self[0]).value
    @property
    def value(self) -> Sequence[ComponentValue]:
        return cast(Sequence[ComponentValue], self[4])
    @property
    def important(self) -> bool:
        return bool(self[6])

class BadDeclaration(MutableProduct):
    """Class of parse products holding the component values skipped while recovering from a malformed declaration, up to and including the `;` that ends it."""
    pass

class Rule(MutableProduct):
    """An abstract class of parse products that represent a CSS rule.

    See http://drafts.csswg.org/css-syntax/#css-rule.
    """
    pass

class AtRule(Rule):
    """Class of parse products that represent a so-called "at-rule" (e.g. `@media screen { ... }` or `@import "foo.css";`).

    See http://drafts.csswg.org/css-syntax/#at-rule.
    """
    @property
    def name(self) -> str:
        return cast(AtKeywordToken, self[0]).value
    @property
    def prelude(self) -> Sequence[ComponentValue]:
        return cast(Sequence[ComponentValue], self[1])
    @property
    def block(self) -> SimpleBlock | None:
        """The `{ ... }` block, unparsed; `None` for at-rules ended by a `;` or by the end of input."""
        return self[2] if len(self) > 2 and isinstance(self[2], SimpleBlock) else None

class QualifiedRule(Rule):
    """A class of parse products that represent the commonly known CSS "style" rule.

    The "prelude" part of the rule (its selector list) remains unparsed here; see `flexcss.selectors`.

    See http://drafts.csswg.org/css-syntax/#qualified-rule.
    """
    @property
    def prelude(self) -> Sequence[ComponentValue]:
        return cast(Sequence[ComponentValue], self[0])
    @property
    def block(self) -> 'Block':
        return cast(Block, self[1])
    @property
    def declarations(self) -> Sequence[Declaration]:
        """The declarations of the rule; a short-hand for accessing the declarations on the contents of the block of the rule."""
        return self.block.contents.declarations

class BadRule(Rule):
    """Class of parse products for qualified rules that ended (with the input) before their block started; holds the prelude consumed so far."""
    @property
    def prelude(self) -> Sequence[ComponentValue]:
        return cast(Sequence[ComponentValue], self[0])

class Contents(MutableProduct):
    """A class of parse products that represent contents of a block, or of a stylesheet.

    Contents hold everything in between the pair of braces of a block: declarations, rules, white-space and semicolons, and the products of error recovery.
    """
    @property
    def declarations(self) -> Sequence[Declaration]:
        return tuple(item for item in self if isinstance(item, Declaration))
    @property
    def rules(self) -> Sequence[Rule]:
        return tuple(item for item in self if isinstance(item, Rule))

class Block(MutableProduct):
    """A class of parse products for the `{ ... }` body of a rule: the opening brace, the `Contents`, and the closing brace (absent if the input ended first)."""
    @property
    def token(self) -> Token:
        return self[0] # type: ignore
    @property
    def contents(self) -> Contents:
        return self[1] # type: ignore

class StyleSheet(MutableProduct):
    """A class of parse products that represent an entire parsed stylesheet, e.g. what is usually written end-to-end in a CSS file."""
    Location: TypeAlias = str
    location: Location | None = None # See http://drafts.csswg.org/cssom-1/#concept-css-style-sheet-location
    @property
    def contents(self) -> Contents:
        return cast(Contents, self[0])
    @property
    def rules(self) -> Sequence[Rule]:
        """The top-level rules of the style sheet, in document order."""
        return self.contents.rules
    def __init__(self, *args, location: Location | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.location = location

class TokenStream:
    """A class of [token streams][spec], objects which a parser normally uses for token consumption.

    The stream is fed by an iterator of tokens; consumed tokens are kept so that the stream can be rewound to a mark.

    See http://drafts.csswg.org/css-syntax/#css-token-stream.
    """
    _index: int = 0
    _tokens: list[Token | None]
    _marked_indexes: list[int]
    def __init__(self, source: Iterator[Token]):
        self._source = source
        self._tokens = []
        self._marked_indexes = []
    def next_token(self) -> Token | None:
        """See http://drafts.csswg.org/css-syntax/#token-stream-next-token."""
        if self._index >= len(self._tokens):
            self._tokens.append(next(self._source, None))
        return self._tokens[self._index]
    def empty(self) -> bool:
        """See http://drafts.csswg.org/css-syntax/#token-stream-empty."""
        return not self.next_token()
    def consume_token(self) -> Token | None:
        """See http://drafts.csswg.org/css-syntax/#token-stream-consume-a-token."""
        token = self.next_token()
        self._index += 1
        return token
    def mark(self) -> None:
        """See http://drafts.csswg.org/css-syntax/#token-stream-mark."""
        self._marked_indexes.append(self._index)
    def restore_mark(self) -> None:
        """See http://drafts.csswg.org/css-syntax/#token-stream-restore-a-mark."""
        self._index = self._marked_indexes.pop()
    def discard_mark(self) -> None:
        """See http://drafts.csswg.org/css-syntax/#token-stream-discard-a-mark."""
        self._marked_indexes.pop()

@runtime_checkable
class Input(Protocol):
    """The input interface that the parser expects, modeled after `TokenStream`."""
    def next_token(self) -> Token | None: raise NotImplementedError
    def empty(self) -> bool: raise NotImplementedError
    def consume_token(self) -> Token | None: raise NotImplementedError
    def mark(self) -> None: raise NotImplementedError
    def restore_mark(self) -> None: raise NotImplementedError
    def discard_mark(self) -> None: raise NotImplementedError

def consume_token(input: Input, *, to: Appender[Token]) -> Token:
    token = input.consume_token()
    assert token, 'End-of-stream condition' # The caller must have checked `empty`; a parse tree never features `None`
    to.append(token)
    return token

def discard_whitespace(input: Input, *, to: Appender[list[WhitespaceToken]]) -> list[WhitespaceToken]:
    """Consume consecutive white-space tokens ahead, appending them as one list.

    Comments are white-space too, `CommentToken` being a subclass of `WhitespaceToken`.

    See http://drafts.csswg.org/css-syntax#token-stream-discard-whitespace.
    """
    consumed: list[WhitespaceToken] = []
    while isinstance(input.next_token(), WhitespaceToken):
        consume_token(input, to=consumed) # type: ignore # The loop condition guarantees a `WhitespaceToken`
    to.append(consumed)
    return consumed

def consume_at_rule(input: Input, *, nested: bool = False, to: Appender[AtRule]) -> AtRule:
    """Implements http://drafts.csswg.org/css-syntax/#consume-at-rule.

    The block of an at-rule, if any, is consumed as a simple block; no at-rule is understood by this package, so its contents need no structure.
    """
    rule = AtRule()
    assert isinstance(input.next_token(), AtKeywordToken)
    consume_token(input, to=rule)
    rule.append([]) # The prelude
    while not input.empty():
        match input.next_token():
            case SemicolonToken():
                consume_token(input, to=rule)
                break
            case CloseBraceToken():
                if nested:
                    break
                parser_error('Unbalanced "}" in at-rule prelude')
                consume_token(input, to=cast(Appender[ComponentValue], rule.prelude))
            case OpenBraceToken():
                consume_simple_block(input, to=rule)
                break
            case _:
                consume_component_value(input, to=cast(Appender[ComponentValue], rule.prelude))
    to.append(rule)
    return rule

def consume_block(input: Input, *, to: Appender[Block]) -> Block:
    """Implements http://drafts.csswg.org/css-syntax/#consume-block."""
    block = Block()
    assert isinstance(input.next_token(), OpenBraceToken)
    consume_token(input, to=block)
    consume_declaration_list(input, nested=True, to=block)
    if input.empty():
        parser_error('Unterminated block')
    else:
        assert isinstance(input.next_token(), CloseBraceToken)
        consume_token(input, to=block)
    to.append(block)
    return block

def consume_declaration_list(input: Input, *, nested: bool = False, to: Appender[Contents]) -> Contents:
    """Consume declarations (and at-rules) until the end of input or, when `nested`, the `}` ending the block.

    Resembles http://drafts.csswg.org/css-syntax/#consume-block-contents, except that anything that does not parse as a declaration is recovered from as a `BadDeclaration` rather than tried as a nested rule.
    """
    contents = Contents()
    while not input.empty():
        match input.next_token():
            case WhitespaceToken() | SemicolonToken():
                consume_token(input, to=contents)
            case CloseBraceToken() if nested:
                break
            case AtKeywordToken():
                consume_at_rule(input, nested=nested, to=contents)
            case _:
                input.mark()
                if consume_declaration(input, nested=nested, to=contents):
                    input.discard_mark()
                else:
                    input.restore_mark()
                    bad = BadDeclaration()
                    if isinstance(input.next_token(), CloseBraceToken): # Not nested, so the brace closes nothing
                        parser_error('Unbalanced "}"')
                        consume_token(input, to=bad)
                    consume_remnants_of_bad_declaration(input, nested=nested, to=bad)
                    contents.append(bad)
    to.append(contents)
    return contents

def consume_component_value(input: Input, *, to: Appender[ComponentValue]) -> ComponentValue:
    """Implements http://drafts.csswg.org/css-syntax/#consume-component-value."""
    match input.next_token():
        case OpenBraceToken() | OpenBracketToken() | OpenParenToken():
            return consume_simple_block(input, to=to)
        case FunctionToken():
            return consume_function(input, to=to)
        case _:
            return consume_token(input, to=to)

def consume_declaration(input: Input, *, nested: bool = False, to: Appender[Declaration]) -> Declaration | None:
    """Implements http://drafts.csswg.org/css-syntax/#consume-declaration.

    Returns `None`, having appended nothing to `to`, if the input ahead is not a valid declaration; the caller is expected to have marked the input so it can rewind and recover.
    """
    decl = Declaration()
    if not isinstance(input.next_token(), IdentToken):
        return None
    consume_token(input, to=decl)
    discard_whitespace(input, to=decl) # type: ignore
    if not isinstance(input.next_token(), ColonToken):
        return None
    consume_token(input, to=decl)
    discard_whitespace(input, to=decl) # type: ignore
    consume_list_of_component_values(input, nested=nested, stop_token=SemicolonToken, to=decl) # type: ignore
    match tuple(((index, item) for index, item in enumerate(decl.value) if not isinstance(item, WhitespaceToken)))[-2:]: # The last two non-whitespace values... (§ 5.5.6 step 6)
        case ((i, DelimToken(value='!')), (j, IdentToken() as second)) if ascii_lower(second.value) == 'important': # ...are they a "!" followed by "important"?
            pass
        case _:
            i = len(decl.value)
            j = i - 1
    decl.append(cast(MutableProduct, pre_match_ws := list(reversed(match_whitespace(reversed(decl.value[:i])))))) # White-space preceding the match, or trailing the value if there was no match
    decl.append(cast(MutableProduct, decl.value[i:j+1])) # The "!important" match, empty if there was none
    decl.append(cast(MutableProduct, post_match_ws := match_whitespace(decl.value[j+1:])))
    assert isinstance(decl.value, MutableSequence)
    del decl.value[i-len(pre_match_ws):j+1+len(post_match_ws)]
    if not decl.value:
        return None # A declaration needs a value
    if (block := builtins.next((item for item in decl.value if (isinstance(item, SimpleBlock) and isinstance(item.token, OpenBraceToken))), None)) and any((item for item in decl.value if (item is not block and not isinstance(item, WhitespaceToken)))):
        return None # A {}-block value must be the only value
    to.append(decl)
    return decl

def consume_function(input: Input, *, to: Appender[Function]) -> Function:
    """Implements http://drafts.csswg.org/css-syntax/#consume-function."""
    assert isinstance(input.next_token(), FunctionToken)
    function = Function()
    consume_token(input, to=function)
    function.append([])
    while not input.empty():
        match input.next_token():
            case CloseParenToken():
                consume_token(input, to=function)
                break
            case _:
                consume_component_value(input, to=cast(Appender[ComponentValue], function.value))
    to.append(function)
    return function

def consume_list_of_component_values(input: Input, *, stop_token: type[Token | None] = type(None), nested: bool = False, to: Appender[list[ComponentValue]]) -> list[ComponentValue]:
    """Implements http://drafts.csswg.org/css-syntax/#consume-list-of-components."""
    values: list[ComponentValue] = []
    while not input.empty():
        match input.next_token():
            case stop_token(): # type: ignore # `stop_token` is a class, which is all class patterns need
                break
            case CloseBraceToken():
                if nested:
                    break
                parser_error('Unbalanced "}"')
                consume_token(input, to=values)
            case _:
                consume_component_value(input, to=values)
    to.append(values)
    return values

def consume_simple_block(input: Input, *, to: Appender[SimpleBlock]) -> SimpleBlock:
    """Implements http://drafts.csswg.org/css-syntax/#consume-simple-block."""
    assert isinstance(token := input.next_token(), (OpenBraceToken, OpenBracketToken, OpenParenToken))
    ending_token = token.mirror_type
    block = SimpleBlock()
    consume_token(input, to=block)
    block.append([])
    while not input.empty():
        match input.next_token():
            case ending_token(): # type: ignore # `ending_token` is a class
                consume_token(input, to=block)
                break
            case _:
                consume_component_value(input, to=cast(Appender[ComponentValue], block.value))
    to.append(block)
    return block

def consume_qualified_rule(input: Input, *, to: Appender[QualifiedRule | BadRule]) -> QualifiedRule | BadRule:
    """Implements http://drafts.csswg.org/css-syntax/#consume-qualified-rule, for top-level rules only."""
    prelude: list[ComponentValue] = []
    while not input.empty():
        match input.next_token():
            case CloseBraceToken():
                parser_error('Unbalanced "}" in rule prelude')
                consume_token(input, to=prelude)
            case OpenBraceToken():
                rule = QualifiedRule([ prelude ])
                consume_block(input, to=rule)
                to.append(rule)
                return rule
            case _:
                consume_component_value(input, to=prelude)
    parser_error('Qualified rule without a block')
    bad = BadRule([ prelude ])
    to.append(bad)
    return bad

def consume_remnants_of_bad_declaration(input: Input, *, nested: bool, to: Appender[Token | ComponentValue]) -> None:
    """Implements http://drafts.csswg.org/css-syntax/#consume-the-remnants-of-a-bad-declaration."""
    while not input.empty():
        match input.next_token():
            case SemicolonToken():
                consume_token(input, to=to)
                break
            case CloseBraceToken():
                if nested:
                    return
                consume_token(input, to=to)
            case _:
                consume_component_value(input, to=to)

def consume_stylesheet_contents(input: Input, *, to: Appender[Contents]) -> Contents:
    """Implements http://drafts.csswg.org/css-syntax/#consume-stylesheet-contents."""
    contents = Contents()
    while not input.empty():
        match input.next_token():
            case WhitespaceToken() | CDCToken() | CDOToken():
                consume_token(input, to=contents)
            case AtKeywordToken():
                consume_at_rule(input, to=contents)
            case _:
                consume_qualified_rule(input, to=contents)
    to.append(contents)
    return contents

def normalize_input(input: Input | Iterable[Token] | Iterable[str]) -> Input:
    """Wrap input (if needed) into a token stream the parser can use directly.

    Implements http://drafts.csswg.org/css-syntax/#normalize-into-a-token-stream, accepting any iterable (e.g. a file) where CSS Syntax says "list" or "string".

    :param input: Already a token stream (returned as is), or an iterable of tokens, or anything `tokenizing.normalize_input` accepts (a string, notably)
    """
    if isinstance(input, Input):
        return input
    if isinstance(input, str):
        return TokenStream(tokenize(tokenizing.normalize_input(input)))
    try:
        input = iter(cast(Iterable, input))
    except TypeError:
        assert not isinstance(input, Iterable)
    else:
        try:
            item = next(input) # Items are assumed to all be of one type, so the first tells whether these are tokens or text
        except StopIteration:
            pass
        else:
            input = chain((item,), input)
            if isinstance(item, Token):
                return TokenStream(input)
    return TokenStream(tokenize(tokenizing.normalize_input(input)))

def parse_stylesheet(input, *, location: StyleSheet.Location | None = None) -> StyleSheet:
    """Parse a stylesheet.

    Implements http://drafts.csswg.org/css-syntax/#parse-stylesheet.

    :param input: see `normalize_input`
    :param location: see `StyleSheet.location`
    :returns: the concrete syntax tree of `input` parsed as a stylesheet
    """
    input = normalize_input(input)
    stylesheet = StyleSheet(location=location)
    consume_stylesheet_contents(input, to=stylesheet)
    return stylesheet

def parse_declaration_list(input) -> Contents:
    """Parse the contents of a style attribute, i.e. a declaration list without a selector or braces (e.g. `"width: 100%; height: 100px;"`).

    See http://drafts.csswg.org/css-syntax/#parse-block-contents.
    """
    return consume_declaration_list(normalize_input(input), to=[])

def parse_list_of_component_values(input) -> list[ComponentValue]:
    """Implements http://drafts.csswg.org/css-syntax/#parse-list-of-component-values."""
    return consume_list_of_component_values(normalize_input(input), to=[])

def source(element: Product | Token) -> str:
    """Return the source text of a parser product.

    E.g. if "body { }" was parsed into `[ IdentToken(...), OpenBraceToken(...), ... ]`, then calling `source` on the latter list will return the former string.
    """
    return element.source if isinstance(element, Token) else ''.join(source(item) for item in element)

def tokens(product: Iterable | Token) -> Iterator[Token]:
    """Yield every token contained in a parser product, transitively."""
    match product:
        case Token():
            yield product
        case Iterable():
            for item in product:
                yield from tokens(item)
        case _:
            raise TypeError

def location_of(product: Product | Token) -> Location | None:
    """Return the location of the first token of a product, or `None` for an empty product."""
    return builtins.next((token.location for token in tokens(product)), None)

def match_whitespace(tokens: Iterable[ComponentValue]) -> Sequence[WhitespaceToken]:
    """Find the [longest] sequence of consecutive white-space tokens at the head of a stream of component values."""
    matched: list[WhitespaceToken] = []
    for token in tokens:
        if not isinstance(token, WhitespaceToken):
            break
        matched.append(token)
    return matched

def unexpected(value: ComponentValue, location: Location | None = None, *, error: type[ParseError] = ParseError) -> ParseError:
    """Return the error describing `value` being found where it was not expected.

    Malformed tokens and stray closing brackets have kinds of their own; everything else is an "unexpected token".
    """
    kind = ParseErrorKind.unexpected_token
    match value:
        case BadStringToken():
            kind = ParseErrorKind.bad_string
        case BadURLToken():
            kind = ParseErrorKind.bad_url
        case CloseParenToken():
            kind = ParseErrorKind.unbalanced_close_parenthesis
        case CloseBracketToken():
            kind = ParseErrorKind.unbalanced_close_square_bracket
        case CloseBraceToken():
            kind = ParseErrorKind.unbalanced_close_curly_bracket
        case Function():
            kind = ParseErrorKind.unexpected_function
    return error(kind, location=location or location_of(value), detail=source(value))

class ComponentStream:
    """A cursor over a sequence of component values, e.g. the value of a `Declaration`.

    This is what value parsers consume. White-space (comments included) between component values is skipped implicitly. Since functions and blocks are single component values, skipping over one skips everything nested in it.

    Errors are raised, as `ParseError`, rather than returned; `try_parse` turns them into `None` for parsers that need to attempt alternatives.
    """
    _values: Sequence[ComponentValue]
    _index: int
    _marked_indexes: list[int]
    _end_location: Location | None
    def __init__(self, values: Sequence[ComponentValue], *, location: Location | None = None):
        """
        :param values: The component values to vend
        :param location: Location to report for errors at the end of `values`; defaults to the location of the last of them
        """
        self._values = values
        self._index = 0
        self._marked_indexes = []
        self._end_location = location if location is not None else (location_of(values[-1]) if values else None)
    @classmethod
    def from_string(cls, text: str) -> 'ComponentStream':
        return cls(parse_list_of_component_values(text))
    def skip_whitespace(self) -> None:
        while self._index < len(self._values) and isinstance(self._values[self._index], WhitespaceToken):
            self._index += 1
    def peek(self) -> ComponentValue | None:
        """Return the next non-white-space component value without consuming it, or `None` at the end."""
        self.skip_whitespace()
        return self._values[self._index] if self._index < len(self._values) else None
    def next(self) -> ComponentValue:
        """Consume and return the next non-white-space component value.

        :raises ParseError: at the end of the values (`end_of_input`)
        """
        if (value := self.peek()) is None:
            raise ParseError(ParseErrorKind.end_of_input, location=self._end_location)
        self._index += 1
        return value
    def is_exhausted(self) -> bool:
        return self.peek() is None
    @property
    def location(self) -> Location | None:
        """Location of the next component value, or of the end of the values."""
        value = self.peek()
        return self._end_location if value is None else location_of(value)
    def mark(self) -> None:
        self._marked_indexes.append(self._index)
    def restore_mark(self) -> None:
        self._index = self._marked_indexes.pop()
    def discard_mark(self) -> None:
        self._marked_indexes.pop()
    def try_parse(self, parse: Callable[['ComponentStream'], T]) -> T | None:
        """Call `parse` on this stream, rewinding the stream and returning `None` if it raises a `ParseError`."""
        self.mark()
        try:
            result = parse(self)
        except ParseError:
            self.restore_mark()
            return None
        self.discard_mark()
        return result
    def expect_exhausted(self) -> None:
        """:raises ParseError: if any non-white-space component value remains (`declaration_value_not_exhausted`)"""
        if (value := self.peek()) is not None:
            raise ParseError(ParseErrorKind.declaration_value_not_exhausted, location=self.location, detail=source(value))
    def expect_ident(self) -> str:
        """Consume an identifier and return its value."""
        match value := self.next():
            case IdentToken():
                return value.value
            case _:
                raise unexpected(value)
    def expect_ident_matching(self, name: str) -> str:
        """Consume an identifier equal to `name`, ASCII case-insensitively, and return it as written."""
        location = self.location
        if not eq_ignore_ascii_case(ident := self.expect_ident(), name):
            raise ParseError(ParseErrorKind.unexpected_token, location=location, detail=ident)
        return ident
    def expect_delim(self, delim: str) -> str:
        """Consume a delimiter token with value `delim`."""
        match value := self.next():
            case DelimToken() if value.value == delim:
                return delim
            case _:
                raise unexpected(value)
