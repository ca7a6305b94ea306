"""Ratios, see https://drafts.csswg.org/css-values-4/#ratios."""

from .generic import MaybeAuto, NonNegative
from .number import Number, parse_non_negative_number

from ..syntax.parsing import ComponentStream

from dataclasses import dataclass
from functools import total_ordering
import math
from typing import TypeAlias

@total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class Ratio:
    """A ratio `antecedent / consequent` of two non-negative numbers, e.g. `16 / 9`.

    Ratios order, and compare equal, by their fraction; `2 / 4` equals `1 / 2`.
    """
    antecedent: NonNegative[Number]
    consequent: NonNegative[Number] = NonNegative(Number.one())
    @classmethod
    def new(cls, antecedent: float, consequent: float = 1.0) -> 'Ratio':
        return cls(NonNegative(Number(float(antecedent))), NonNegative(Number(float(consequent))))
    def is_degenerate(self) -> bool:
        """See https://drafts.csswg.org/css-values-4/#degenerate-ratio."""
        return any(term.is_zero() or term.is_infinite() for term in (self.antecedent, self.consequent))
    def as_fraction(self) -> float:
        """Return `antecedent / consequent`; a zero consequent gives infinity, or NaN for `0 / 0`."""
        antecedent, consequent = float(self.antecedent), float(self.consequent)
        if consequent == 0:
            return math.nan if antecedent == 0 else math.inf
        return antecedent / consequent
    def __eq__(self, other):
        if not isinstance(other, Ratio):
            return NotImplemented
        return self.as_fraction() == other.as_fraction()
    def __lt__(self, other):
        if not isinstance(other, Ratio):
            return NotImplemented
        return self.as_fraction() < other.as_fraction()
    def __hash__(self):
        return hash(self.as_fraction())
    @classmethod
    def parse(cls, input: ComponentStream) -> 'Ratio':
        """Parse `<number [0,∞]> [ / <number [0,∞]> ]?`; the consequent defaults to `1`."""
        antecedent = parse_non_negative_number(input)
        if input.try_parse(lambda input: input.expect_delim('/')) is None:
            return cls(antecedent)
        return cls(antecedent, parse_non_negative_number(input))

RatioOrAuto: TypeAlias = MaybeAuto[Ratio]

def parse_ratio_or_auto(input: ComponentStream) -> RatioOrAuto:
    return MaybeAuto.parse_with(input, Ratio.parse)
