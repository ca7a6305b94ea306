"""Grammar elements ("productions") in the sense of the value definition syntax of http://drafts.csswg.org/css-values-4/#value-defs.

A grammar built from these classes is data; it does nothing by itself. `flexcss.selectors` walks such a grammar with a recursive-descent `parse` procedure to turn tokens into parse products.

Note that a production is not the same as a [parse] product: the former is an element of a grammar, the latter the result of parsing a sequence of tokens in accordance with a production.
"""

from .tokenizing import Token, CommaToken, WhitespaceToken

import builtins
from collections.abc import Iterable, Mapping

class Production:
    """An [abstract] class of grammar elements.

    Productions assigned as class attributes (see `flexcss.selectors.Grammar`) acquire the attribute name as their `name`, courtesy of `__set_name__`.
    """
    name: str
    def __set_name__(self, _, name):
        assert not hasattr(self, "name") or self.name == name
        self.name = name

class ReferenceProduction(Production):
    """Class of productions expressing a _reference_ to some production.

    References point to the referenced production directly rather than by name, since the grammar is written as Python objects instead of being parsed from text.
    """
    element: Production
    def __init__(self, element: Production):
        self.element = element

class AlternativesProduction(Production):
    """Class of productions expressing exactly one production out of an _ordered_ set of alternatives; the first alternative that accepts input wins.

    Implements the `|` combinator, see http://drafts.csswg.org/css-values-4/#component-combinators.
    """
    elements: Iterable[Production]
    def __init__(self, *elements: Production):
        self.elements = elements

class ConcatenationProduction(Production):
    """Class of productions equivalent to an ordered sequence of productions.

    Implements "juxtaposing components", see http://drafts.csswg.org/css-values-4/#component-combinators.
    """
    elements: Iterable[Production]
    def __init__(self, *elements: Production):
        self.elements = elements

class NonEmptyProduction(Production):
    """Class of productions that behave like `ConcatenationProduction` but only accept a concatenation that consumed at least one token.

    Implements the `[...]!` notation, see http://drafts.csswg.org/css-values-4/#mult-req.
    """
    element: ConcatenationProduction
    def __init__(self, element: ConcatenationProduction):
        self.element = element

class RepetitionProduction(Production):
    """Class of productions that express repetition of an element, with a lower and an optional upper bound on the number of repetitions.

    Implements the `*` notation and its relatives, see http://drafts.csswg.org/css-values-4/#mult-zero-plus.
    """
    element: Production
    min: int
    max: int | None
    separator: Production | None
    def __init__(self, element: Production, min: int = 0, max: int | None = None, *, separator: Production | None = None):
        """
        :param element: The repeating part of this production
        :param min: The least number of repetitions the parser must accept
        :param max: The most repetitions the parser will consume; `None` means no upper bound
        :param separator: A production that must be accepted between every two repetitions, if any
        """
        assert min >= 0
        assert max is None or max > 0
        assert max is None or min <= max
        self.element = element
        self.min = min
        self.max = max
        self.separator = separator

class OptionalProduction(RepetitionProduction):
    """Class of productions accepting their element at most once.

    Implements the `?` notation, see http://drafts.csswg.org/css-values-4/#mult-opt.
    """
    def __init__(self, element: Production):
        super().__init__(element, 0, 1)

class TokenProduction(Production):
    """Class of productions that express a token of some type, optionally one with particular attribute values."""
    type: type[Token]
    attributes: Mapping
    def __init__(self, type: builtins.type[Token], /, **attributes):
        """
        :param type: The type of token this production accepts
        :param attributes: Values that attributes of the token must equal, by attribute name (e.g. `type` of a `HashToken`, hence `type` being positional-only)
        """
        self.type = type
        self.attributes = attributes

whitespace = RepetitionProduction(TokenProduction(WhitespaceToken), min=1) # Mandatory white-space; comments are `WhitespaceToken` too

class CommaSeparatedRepetitionProduction(RepetitionProduction):
    """Class of productions that express a non-empty comma-separated repetition of an element, the comma optionally surrounded by white-space.

    Implements the `#` notation, see http://drafts.csswg.org/css-values-4/#mult-comma.
    """
    delimiter = ConcatenationProduction(OptionalProduction(whitespace), TokenProduction(CommaToken), OptionalProduction(whitespace))
    def __init__(self, element: Production):
        super().__init__(element, 1, None, separator=self.delimiter)

# See http://drafts.csswg.org/css-syntax/#any-value
any_value = Production()
any_value.name = 'any_value'
