"""Percentages, see https://drafts.csswg.org/css-values-4/#percentages."""

from .parse import AllowedValues, to_float
from ..errors import InvalidValueError, ParseErrorKind
from ..syntax.parsing import ComponentStream, Function, source, unexpected
from ..syntax.tokenizing import PercentageToken

from dataclasses import dataclass, field, replace
import math

@dataclass(frozen=True, slots=True, order=True)
class Percentage:
    """A fraction of some reference length; `50%` is stored as `0.5`.

    `clamping` is set only for percentages that result from a `calc()` expression, and defines the range `get` clamps them into. It takes no part in comparisons.
    """
    value: float
    clamping: AllowedValues | None = field(default=None, compare=False)
    @classmethod
    def zero(cls) -> 'Percentage':
        return cls(0.0)
    @classmethod
    def one(cls) -> 'Percentage':
        return cls(1.0)
    @classmethod
    def hundred(cls) -> 'Percentage':
        return cls(1.0)
    def is_hundred(self) -> bool:
        return self.value == 1
    def is_calc(self) -> bool:
        return self.clamping is not None
    def get(self) -> float:
        """Return the fraction, clamped if this is a `calc()` percentage."""
        return self.value if self.clamping is None else self.clamping.clamp(self.value)
    def reverse(self) -> 'Percentage':
        """Return the complement of this percentage, i.e. `100% - self`."""
        return replace(self, value=1 - self.value)
    def limit_to_hundred(self) -> 'Percentage':
        return replace(self, value=min(self.value, 1.0))
    def try_sum(self, other: 'Percentage') -> 'Percentage':
        """Add two percentages; any clamping is lost."""
        return Percentage(self.value + other.value)
    def as_number(self) -> float:
        """Return the percentage on the 0 to 100 scale, e.g. `50.0` for `50%`."""
        return self.value * 100
    def is_zero(self) -> bool:
        return self.value == 0
    def is_negative(self) -> bool:
        return self.value < 0
    def is_infinite(self) -> bool:
        return math.isinf(self.value)
    def __mul__(self, factor: float) -> 'Percentage':
        return Percentage(self.value * factor)
    @classmethod
    def parse_internal(cls, input: ComponentStream, allowed_values: AllowedValues = AllowedValues.all) -> 'Percentage':
        location = input.location
        match value := input.next():
            case PercentageToken():
                if not allowed_values.is_ok(fraction := to_float(value, location) / 100):
                    raise InvalidValueError(location=location, detail=f"{source(value)} is not {allowed_values}")
                return cls(fraction)
            case Function():
                raise InvalidValueError(ParseErrorKind.function_not_supported, location=location, detail=value.name)
            case _:
                raise unexpected(value, location, error=InvalidValueError)
    @classmethod
    def parse(cls, input: ComponentStream) -> 'Percentage':
        return cls.parse_internal(input)
