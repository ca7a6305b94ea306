"""Conventions shared by the value parsers of this package.

Every value type offers a `parse` callable taking a `ComponentStream` and returning the parsed value, or raising `InvalidValueError` (or another `ParseError`). Parsers consume only what they need; checking that nothing is left over is the job of the declaration parser.
"""

from ..errors import InvalidValueError
from ..syntax.parsing import ComponentStream, source
from ..syntax.preprocessing import Location
from ..syntax.tokenizing import DimensionToken, NumberToken, PercentageToken
from ..utils import T

from collections.abc import Callable
from enum import StrEnum
import math

class AllowedValues(StrEnum):
    """A range restriction that numeric parsers enforce on the literal values they read."""
    all = 'all'
    non_negative = 'non_negative'
    at_least_one = 'at_least_one'
    def is_ok(self, value: float) -> bool:
        match self:
            case AllowedValues.all:
                return True
            case AllowedValues.non_negative:
                return value >= 0
            case AllowedValues.at_least_one:
                return value >= 1
    def clamp(self, value: float) -> float:
        """Return `value` brought into range; only values originating from `calc()` are ever clamped, literals out of range are rejected instead."""
        match self:
            case AllowedValues.non_negative if value < 0:
                return 0.0
            case AllowedValues.at_least_one if value < 1:
                return 1.0
            case _:
                return value

def parse_str(parse: Callable[[ComponentStream], T], text: str) -> T:
    """Parse `text` with a value parser, e.g. `parse_str(Ratio.parse, '16 / 9')`.

    Input remaining after `parse` is done is not an error here.
    """
    return parse(ComponentStream.from_string(text))

def to_float(token: NumberToken | PercentageToken | DimensionToken, location: Location | None) -> float:
    """Return the numeric value of `token` as a float.

    :raises InvalidValueError: if the value is out of the range of finite floats, e.g. `1e400px`
    """
    try:
        value = float(token.value)
    except OverflowError: # An integer too large for a float
        value = math.inf
    if not math.isfinite(value):
        raise InvalidValueError(location=location, detail=f"{source(token)} is out of range")
    return value
