"""Parsing and matching of CSS selectors per the [CSS Selectors Level 4](http://drafts.csswg.org/selectors-4/) specification, within the subset this engine supports.

The parsing method chosen with this module is a so-called recursive descent parser (RDP). An RDP allows a straightforward implementation when the grammar is defined with a BNF-like syntax, which happens to be the case with Selectors (see http://drafts.csswg.org/selectors-4/#grammar). Being an RDP, the parser is composed of callables, each designed to consume and parse (or reject) input in the stream, typically according to a grammar production rule.

In context of parsing implemented with this module, "accepting" input means to consume a number of tokens (including zero, depending on the parser) from the stream, and return a corresponding _parse product_ containing these arranged in meaningful fashion. A parser "rejecting" input means that the parser returns `None`, signifying a mismatch between what was expected in the input vs. what was encountered in its place.

The parse product is then turned into a `SelectorList` of typed simple selectors. A selector is a compound selector: a sequence of simple selectors all of which must match. Combinators, including the descendant combinator (white-space between simple selectors), are rejected since entities are matched in isolation here, without a tree to walk. Type, attribute and pseudo-class selectors are parsed but never match.
"""

from .errors import SelectorParseError
from .syntax.grammar import any_value, whitespace, Production, AlternativesProduction, CommaSeparatedRepetitionProduction, ConcatenationProduction, NonEmptyProduction, OptionalProduction, ReferenceProduction, RepetitionProduction, TokenProduction
from .syntax.parsing import ComponentValue, Input as TokenStream, Product, normalize_input, parse_list_of_component_values, source, tokens
from .syntax.tokenizing import Token, BadStringToken, BadURLToken, CloseBraceToken, CloseBracketToken, CloseParenToken, ColonToken, DelimToken, FunctionToken, HashToken, HashTokenType, IdentToken, OpenBraceToken, OpenBracketToken, OpenParenToken, StringToken, WhitespaceToken
from .tag import Identity
from .utils import ascii_lower

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum
from functools import singledispatch
from typing import cast, TypeAlias

@singledispatch
def parse(production: Production, input: TokenStream) -> Product | Token | None:
    """The generic parse procedure written to parse input in accordance with the Selectors grammar.

    Per the applied `singledispatch` decorator, this procedure is only called for productions for which no more applicable overload variant of `parse` is defined (those are annotated with `parse.register` decorator).

    :param production: A grammar element (see the `Grammar` class for the set of elements constituting the grammar)
    :param input: Input for parsing according to `production`
    :returns: The result of parsing a portion of input consumed per `production`
    """
    match production:
        case _ if production == any_value: return parse_any_value(input)
        case _: raise ValueError(f"No suitable `parse` method for {production}")

@parse.register
def _(production: AlternativesProduction, input: TokenStream) -> Product | Token | None:
    """Variant of `parse` for productions of the `|` combinator variety (see https://drafts.csswg.org/css-values-4/#component-combinators)."""
    input.mark()
    for element in production.elements:
        result = parse(element, input)
        if result is not None:
            input.discard_mark()
            return result
    input.restore_mark()
    return None

def parse_any_value(input: TokenStream) -> Product | None:
    """Variant of `parse` for specifically the `any_value` production.

    `any_value` is a production of an opaque type, defined in prose rather than in terms of the combinators, so it isn't distinguished by _type_ but by value and dispatching of this procedure is done in the fall-back `parse` procedure variant.

    The token that ends the value (an unmatched closing bracket, a malformed token, or the end of input) is left in the stream.
    """
    result: list[Token] = []
    count = { type: 0 for type in { OpenBraceToken, OpenBracketToken, OpenParenToken } }
    while True:
        input.mark()
        match token := input.consume_token():
            case None | BadStringToken() | BadURLToken():
                input.restore_mark()
                break
            case OpenParenToken() | OpenBracketToken() | OpenBraceToken():
                count[type(token)] += 1
            case CloseParenToken() | CloseBracketToken() | CloseBraceToken():
                if count[token.mirror_type] <= 0:
                    input.restore_mark()
                    break
                count[token.mirror_type] -= 1
        input.discard_mark()
        result.append(token)
    if result:
        return result
    else:
        return None

@parse.register
def _(production: ConcatenationProduction, input: TokenStream) -> Product | None:
    """Variant of `parse` for productions of the ` ` combinator variety (see "juxtaposing components" at https://drafts.csswg.org/css-values-4/#component-combinators)."""
    result: list[Product | Token] = []
    input.mark()
    for element in production.elements:
        if (value := parse(element, input)) is None:
            input.restore_mark()
            return None
        result.append(value)
    input.discard_mark()
    return result

@parse.register
def _(production: NonEmptyProduction, input: TokenStream) -> Product | None:
    """Variant of `parse` for productions of the `!` multiplier variety (see https://drafts.csswg.org/css-values-4/#mult-req)."""
    input.mark()
    result = cast(Product, parse(production.element, input)) # The element of a non-empty production is concatenation, and the `parse` overload for `ConcatenationProduction` never returns a `Token`, only `Product | None`
    if result and any(tokens(result)):
        input.discard_mark()
        return result
    else:
        input.restore_mark()
        return None

@parse.register
def _(production: ReferenceProduction, input: TokenStream) -> Product | Token | None:
    """Variant of `parse` for production _references_.

    A production reference is featured in grammar rules.
    """
    return parse(production.element, input) # Parsing a production reference naturally implies parsing of the referenced production

@parse.register
def _(production: RepetitionProduction, input: TokenStream) -> Product | None:
    """Variant of `parse` for productions of the `*` multiplier variety and its related sub-types (see http://drafts.csswg.org/css-values-4/#mult-zero-plus).

    Separators, where the production has them, are featured in the product between the repeated elements.
    """
    result: list[Product | Token] = []
    count = 0
    input.mark()
    while production.max is None or count < production.max:
        if count and production.separator:
            input.mark()
            separator = parse(production.separator, input)
            if separator is None:
                input.restore_mark()
                break
        value = parse(production.element, input)
        if value is None:
            if count and production.separator:
                input.restore_mark()
            break
        if count and production.separator:
            assert separator is not None
            result.append(separator)
            input.discard_mark()
        result.append(value)
        count += 1
    if count >= production.min:
        input.discard_mark()
        return result
    else:
        input.restore_mark()
        return None

@parse.register
def _(production: TokenProduction, input: TokenStream) -> Token | None:
    """Variant of `parse` for token productions.

    A token production can be identified in the grammar at https://drafts.csswg.org/selectors-4/#grammar with the `<...-token>` text.
    """
    input.mark()
    if isinstance(token := input.consume_token(), production.type) and all((getattr(token, name) == value) for name, value in production.attributes.items()):
        input.discard_mark()
        return token
    input.restore_mark()
    return None

def parse_selector_list(input: TokenStream) -> Product | None:
    """Parse input according to the `selector_list` production in the grammar (see `grammar` below), returning the parse product."""
    return cast(Product | None, parse(grammar.selector_list, input))

class Grammar:
    """The grammar defining the language of selector list expressions this engine supports.

    Normally a grammar would be defined as a set of rules, where each rule would feature a component to the left side of the `->` operator and a component to the right side of the operator. Owing to relative simplicity of the Selectors grammar -- where the left-hand side component is always a production name _reference_ -- we leverage Python's meta-programming facilities and use class attribute assignment statements to define the rules instead, where the assigned value is the right side of the rule. Each attribute of the grammar is assigned the corresponding name automatically, owing to the `__set_name__` dunder method of the common production (super)class.

    A subset of http://drafts.csswg.org/selectors-4/#grammar: namespaces, pseudo-elements and combinators are not featured, and a selector list is a list of compound selectors.
    """
    type_selector = AlternativesProduction(TokenProduction(IdentToken), TokenProduction(DelimToken, value='*'))
    id_selector = TokenProduction(HashToken, type=HashTokenType.id)
    class_selector = ConcatenationProduction(TokenProduction(DelimToken, value='.'), TokenProduction(IdentToken))
    attr_matcher = ConcatenationProduction(OptionalProduction(AlternativesProduction(*(TokenProduction(DelimToken, value=value) for value in ('~', '|', '^', '$', '*')))), TokenProduction(DelimToken, value='='))
    attr_modifier = AlternativesProduction(*(TokenProduction(IdentToken, value=value) for value in ('i', 's')))
    attribute_selector = AlternativesProduction(ConcatenationProduction(TokenProduction(OpenBracketToken), OptionalProduction(whitespace), TokenProduction(IdentToken), OptionalProduction(whitespace), TokenProduction(CloseBracketToken)), ConcatenationProduction(TokenProduction(OpenBracketToken), OptionalProduction(whitespace), TokenProduction(IdentToken), OptionalProduction(whitespace), ReferenceProduction(attr_matcher), OptionalProduction(whitespace), AlternativesProduction(TokenProduction(StringToken), TokenProduction(IdentToken)), OptionalProduction(whitespace), OptionalProduction(ReferenceProduction(attr_modifier)), OptionalProduction(whitespace), TokenProduction(CloseBracketToken)))
    pseudo_class_selector = AlternativesProduction(ConcatenationProduction(TokenProduction(ColonToken), TokenProduction(IdentToken)), ConcatenationProduction(TokenProduction(ColonToken), TokenProduction(FunctionToken), ReferenceProduction(any_value), TokenProduction(CloseParenToken)))
    subclass_selector = AlternativesProduction(ReferenceProduction(id_selector), ReferenceProduction(class_selector), ReferenceProduction(attribute_selector), ReferenceProduction(pseudo_class_selector))
    compound_selector = NonEmptyProduction(ConcatenationProduction(OptionalProduction(ReferenceProduction(type_selector)), RepetitionProduction(ReferenceProduction(subclass_selector))))
    compound_selector_list = CommaSeparatedRepetitionProduction(ReferenceProduction(compound_selector))
    selector_list = ReferenceProduction(compound_selector_list)

grammar = Grammar()

class CaseSensitivity(StrEnum):
    """See https://docs.rs/selectors (`CaseSensitivity`) and http://drafts.csswg.org/selectors-4/#case-sensitive."""
    case_sensitive = 'case_sensitive'
    ascii_case_insensitive = 'ascii_case_insensitive'
    def eq(self, a: str, b: str) -> bool:
        match self:
            case CaseSensitivity.case_sensitive:
                return a == b
            case CaseSensitivity.ascii_case_insensitive:
                return ascii_lower(a) == ascii_lower(b)
    def contains(self, names: Iterable[str], name: str) -> bool:
        if self == CaseSensitivity.case_sensitive and isinstance(names, frozenset):
            return name in names
        return any(self.eq(item, name) for item in names)

@dataclass(frozen=True, slots=True, order=True)
class Specificity:
    """See http://drafts.csswg.org/selectors-4/#specificity-rules; compared lexicographically, the greater wins."""
    ids: int = 0
    classes: int = 0
    types: int = 0
    def __add__(self, other: 'Specificity') -> 'Specificity':
        return Specificity(self.ids + other.ids, self.classes + other.classes, self.types + other.types)

@dataclass(frozen=True, slots=True)
class UniversalSelector:
    """`*`, which matches everything."""
    specificity = Specificity()
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity) -> bool:
        return True

@dataclass(frozen=True, slots=True)
class TypeSelector:
    """E.g. `div`. Entities have no type here, so it never matches."""
    name: str
    specificity = Specificity(0, 0, 1)
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity) -> bool:
        return False

@dataclass(frozen=True, slots=True)
class IdSelector:
    name: str
    specificity = Specificity(1, 0, 0)
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity) -> bool:
        return identity.id is not None and case_sensitivity.eq(identity.id, self.name)

@dataclass(frozen=True, slots=True)
class ClassSelector:
    name: str
    specificity = Specificity(0, 1, 0)
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity) -> bool:
        return case_sensitivity.contains(identity.classes, self.name)

@dataclass(frozen=True, slots=True)
class AttributeSelector:
    """E.g. `[lang|=en]`; entities have no attributes here, so it never matches."""
    name: str
    css: str # As written, brackets included
    specificity = Specificity(0, 1, 0)
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity) -> bool:
        return False

@dataclass(frozen=True, slots=True)
class PseudoClassSelector:
    """E.g. `:hover` or `:not(.x)`; never matches."""
    name: str
    css: str
    specificity = Specificity(0, 1, 0)
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity) -> bool:
        return False

SimpleSelector: TypeAlias = UniversalSelector | TypeSelector | IdSelector | ClassSelector | AttributeSelector | PseudoClassSelector

@dataclass(frozen=True, slots=True)
class Selector:
    """A compound selector, e.g. `#menu.panel`, which matches an entity if every one of its simple selectors does."""
    components: tuple[SimpleSelector, ...]
    @property
    def specificity(self) -> Specificity:
        return sum((component.specificity for component in self.components), Specificity())
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> bool:
        return all(component.matches(identity, case_sensitivity) for component in self.components)
    def __str__(self) -> str:
        return ''.join(css(component) for component in self.components)

@dataclass(frozen=True, slots=True)
class SelectorList:
    """A non-empty list of selectors, e.g. `.panel, #menu`, which matches an entity if any of its selectors does."""
    selectors: tuple[Selector, ...]
    def __iter__(self) -> Iterator[Selector]:
        return iter(self.selectors)
    def __len__(self) -> int:
        return len(self.selectors)
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> bool:
        return any(selector.matches(identity, case_sensitivity) for selector in self.selectors)
    def specificity_for(self, identity: Identity, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> Specificity | None:
        """Return the greatest specificity of the selectors matching `identity`, or `None` if none matches.

        Nothing in this package applies declarations in order of specificity; this is for callers that want to.
        """
        return max((selector.specificity for selector in self.selectors if selector.matches(identity, case_sensitivity)), default=None)
    def __str__(self) -> str:
        return ', '.join(str(selector) for selector in self.selectors)
    @classmethod
    def parse(cls, input: str | Iterable[ComponentValue]) -> 'SelectorList':
        """Parse a selector list, e.g. the prelude of a qualified rule.

        :param input: The text of the selector list, or its component values
        :raises SelectorParseError: if `input` is not a selector list of the supported subset
        """
        values = parse_list_of_component_values(input) if isinstance(input, str) else input
        flattened = strip_whitespace(list(tokens(values)))
        if not flattened:
            raise SelectorParseError(detail="Empty selector list")
        stream = normalize_input(flattened)
        product = parse_selector_list(stream)
        if product is None:
            raise SelectorParseError(location=flattened[0].location, detail=source(flattened))
        if not stream.empty():
            remnant = stream.next_token()
            assert remnant is not None
            raise SelectorParseError(location=remnant.location, detail=f"Unexpected {source(remnant)!r}" + (" (combinators are not supported)" if is_combinator(remnant) else ''))
        return cls(tuple(compound_selector(item) for item in cast(Sequence, product)[::2])) # Every other item is a comma separator

def strip_whitespace(values: list[Token]) -> list[Token]:
    start, end = 0, len(values)
    while start < end and isinstance(values[start], WhitespaceToken):
        start += 1
    while end > start and isinstance(values[end - 1], WhitespaceToken):
        end -= 1
    return values[start:end]

def is_combinator(token: Token) -> bool:
    return isinstance(token, WhitespaceToken) or (isinstance(token, DelimToken) and token.value in ('>', '+', '~'))

def compound_selector(product: Product) -> Selector:
    """Build the selector of a `compound_selector` parse product."""
    type_part, subclass_parts = product
    components: list[SimpleSelector] = []
    match type_part:
        case [DelimToken(value='*')]:
            components.append(UniversalSelector())
        case [IdentToken() as name]:
            components.append(TypeSelector(name.value))
    components.extend(subclass_selector(part) for part in cast(Sequence, subclass_parts))
    return Selector(tuple(components))

def subclass_selector(product: Product | Token) -> SimpleSelector:
    match product:
        case HashToken():
            return IdSelector(product.value)
        case [DelimToken(value='.'), IdentToken() as name]:
            return ClassSelector(name.value)
        case [OpenBracketToken(), _, IdentToken() as name, *_]:
            return AttributeSelector(name.value, source(product))
        case [ColonToken(), IdentToken() as name]:
            return PseudoClassSelector(name.value, source(product))
        case [ColonToken(), FunctionToken() as function, *_]:
            return PseudoClassSelector(function.value, source(product))
        case _:
            raise ValueError(f"Not a subclass selector product: {product!r}")

def css(component: SimpleSelector) -> str:
    """Return the text of a simple selector."""
    match component:
        case UniversalSelector():
            return '*'
        case TypeSelector():
            return component.name
        case IdSelector():
            return '#' + component.name
        case ClassSelector():
            return '.' + component.name
        case AttributeSelector() | PseudoClassSelector():
            return component.css

def matches(selectors: SelectorList, identity: Identity, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> bool:
    return selectors.matches(identity, case_sensitivity)
