"""Bare numbers, see https://drafts.csswg.org/css-values-4/#numbers."""

from .generic import NonNegative
from .parse import AllowedValues, to_float
from ..errors import InvalidValueError, ParseErrorKind
from ..syntax.parsing import ComponentStream, Function, source, unexpected
from ..syntax.tokenizing import NumberToken

from dataclasses import dataclass
import math

@dataclass(frozen=True, slots=True, order=True)
class Number:
    """A number without a unit or `%`."""
    value: float
    @classmethod
    def zero(cls) -> 'Number':
        return cls(0.0)
    @classmethod
    def one(cls) -> 'Number':
        return cls(1.0)
    def is_zero(self) -> bool:
        return self.value == 0
    def is_negative(self) -> bool:
        return self.value < 0
    def is_infinite(self) -> bool:
        return math.isinf(self.value)
    def __mul__(self, factor: float) -> 'Number':
        return Number(self.value * factor)
    def __float__(self) -> float:
        return float(self.value)
    @classmethod
    def parse_internal(cls, input: ComponentStream, allowed_values: AllowedValues = AllowedValues.all) -> 'Number':
        location = input.location
        match value := input.next():
            case NumberToken():
                if not allowed_values.is_ok(number := to_float(value, location)):
                    raise InvalidValueError(location=location, detail=f"{source(value)} is not {allowed_values}")
                return cls(number)
            case Function():
                raise InvalidValueError(ParseErrorKind.function_not_supported, location=location, detail=value.name)
            case _:
                raise unexpected(value, location, error=InvalidValueError)
    @classmethod
    def parse(cls, input: ComponentStream) -> 'Number':
        return cls.parse_internal(input)

def parse_non_negative_number(input: ComponentStream) -> NonNegative[Number]:
    return NonNegative(Number.parse_internal(input, AllowedValues.non_negative))
