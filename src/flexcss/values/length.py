"""Lengths, see https://drafts.csswg.org/css-values-4/#lengths.

Three kinds of length are supported, each resolved into pixels differently: absolute lengths by fixed ratios, font-relative lengths against the font sizes of a `Context`, and viewport-relative lengths against its viewport size. `calc()` is not; parsing it fails with a `function_not_supported` error.

Conversion of absolute lengths is done through "app units", 60 to the pixel, assuming 96 pixels to the inch.
"""

from .generic import MaybeAuto, NonNegative
from .parse import AllowedValues, to_float
from .percentage import Percentage
from ..context import Context
from ..errors import InvalidValueError, ParseErrorKind
from ..syntax.parsing import ComponentStream, Function, source, unexpected
from ..syntax.tokenizing import DimensionToken, NumberToken, PercentageToken
from ..utils import ascii_lower

from dataclasses import dataclass, replace
from enum import StrEnum
from functools import total_ordering
import math
import sys
from typing import TypeAlias

AU_PER_PX = 60.0
AU_PER_IN = AU_PER_PX * 96
AU_PER_PC = AU_PER_IN / 6
AU_PER_PT = AU_PER_IN / 72
AU_PER_CM = AU_PER_PX / 2.54
AU_PER_MM = AU_PER_CM / 10
AU_PER_Q = AU_PER_MM / 4

EX_RATIO = 0.5 # x-height per em, absent font metrics
CH_RATIO_HORIZONTAL = 0.5 # Advance of "0" per em, absent font metrics
CH_RATIO_VERTICAL = 1.0

class AbsoluteUnit(StrEnum):
    px = 'px'
    mm = 'mm'
    cm = 'cm'
    q = 'q' # Quarter-millimeters
    in_ = 'in'
    pc = 'pc' # Picas, 1/6 in
    pt = 'pt' # Points, 1/72 in

AU_PER_UNIT = {
    AbsoluteUnit.px: AU_PER_PX,
    AbsoluteUnit.mm: AU_PER_MM,
    AbsoluteUnit.cm: AU_PER_CM,
    AbsoluteUnit.q: AU_PER_Q,
    AbsoluteUnit.in_: AU_PER_IN,
    AbsoluteUnit.pc: AU_PER_PC,
    AbsoluteUnit.pt: AU_PER_PT,
}

class FontRelativeUnit(StrEnum):
    em = 'em' # The font size of the element
    rem = 'rem' # The font size of the root element
    ex = 'ex'
    ch = 'ch'

class ViewportRelativeUnit(StrEnum):
    vw = 'vw'
    vh = 'vh'
    vmin = 'vmin'
    vmax = 'vmax'

def clamp_to_finite(pixels: float) -> float:
    """Bring `pixels` into the range of finite floats; NaN (e.g. `0 * inf`) becomes zero."""
    if math.isnan(pixels):
        return 0.0
    return max(-sys.float_info.max, min(pixels, sys.float_info.max))

class Dimension:
    """Behaviour common to the length classes below, each of which has a `value` and a `unit`."""
    __slots__ = ()
    value: float
    unit: StrEnum
    def is_zero(self) -> bool:
        return self.value == 0
    def is_negative(self) -> bool:
        return self.value < 0
    def is_infinite(self) -> bool:
        return math.isinf(self.value)
    def __mul__(self, factor: float):
        return replace(self, value=self.value * factor) # type: ignore
    def __lt__(self, other):
        """Relative lengths only order against lengths of the same unit; comparing others raises `TypeError`."""
        if type(other) is not type(self) or other.unit != self.unit:
            return NotImplemented
        return self.value < other.value

@total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class AbsoluteLength(Dimension):
    """See https://drafts.csswg.org/css-values-4/#absolute-lengths."""
    value: float
    unit: AbsoluteUnit = AbsoluteUnit.px
    @classmethod
    def zero(cls) -> 'AbsoluteLength':
        return cls(0.0)
    @classmethod
    def one(cls) -> 'AbsoluteLength':
        return cls(1.0)
    def to_px(self) -> float:
        return clamp_to_finite(self.value * (AU_PER_UNIT[self.unit] / AU_PER_PX))
    def to_computed_px(self, context: Context) -> float:
        return self.to_px()
    def __lt__(self, other):
        """Absolute lengths order by their pixel value, whatever their units."""
        if not isinstance(other, AbsoluteLength):
            return NotImplemented
        return self.to_px() < other.to_px()

@total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class FontRelativeLength(Dimension):
    """See https://drafts.csswg.org/css-values-4/#font-relative-lengths."""
    value: float
    unit: FontRelativeUnit = FontRelativeUnit.em
    @classmethod
    def zero(cls) -> 'FontRelativeLength':
        return cls(0.0)
    @classmethod
    def one(cls) -> 'FontRelativeLength':
        return cls(1.0)
    def to_px(self, base: float, vertical: bool, root_base: float) -> float:
        """
        :param base: The font size of the element
        :param vertical: Whether the text is laid out vertically, which widens `ch`
        :param root_base: The font size of the root element
        """
        match self.unit:
            case FontRelativeUnit.em:
                return base * self.value
            case FontRelativeUnit.rem:
                return root_base * self.value
            case FontRelativeUnit.ex:
                return base * self.value * EX_RATIO
            case FontRelativeUnit.ch:
                return base * self.value * (CH_RATIO_VERTICAL if vertical else CH_RATIO_HORIZONTAL)
    def to_computed_px(self, context: Context) -> float:
        return clamp_to_finite(self.to_px(context.font_size, context.vertical_text, context.root_font_size))

@total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class ViewportRelativeLength(Dimension):
    """See https://drafts.csswg.org/css-values-4/#viewport-relative-lengths."""
    value: float
    unit: ViewportRelativeUnit = ViewportRelativeUnit.vw
    @classmethod
    def zero(cls) -> 'ViewportRelativeLength':
        return cls(0.0)
    @classmethod
    def one(cls) -> 'ViewportRelativeLength':
        return cls(1.0)
    def to_px(self, viewport_size: tuple[float, float]) -> float:
        """Resolve against a viewport of (width, height), truncating toward zero so that rounding errors don't compound on small viewports."""
        width, height = viewport_size
        match self.unit:
            case ViewportRelativeUnit.vw:
                length = width
            case ViewportRelativeUnit.vh:
                length = height
            case ViewportRelativeUnit.vmin:
                length = min(width, height)
            case ViewportRelativeUnit.vmax:
                length = max(width, height)
        pixels = length * self.value / 100
        return clamp_to_finite(float(math.trunc(pixels)) if math.isfinite(pixels) else pixels)
    def to_computed_px(self, context: Context) -> float:
        return self.to_px(context.viewport_size)

NoCalcLength: TypeAlias = AbsoluteLength | FontRelativeLength | ViewportRelativeLength
LengthPercentage: TypeAlias = NoCalcLength | Percentage
LengthPercentageOrAuto: TypeAlias = MaybeAuto[LengthPercentage]

def parse_dimension(unit: str, value: float) -> NoCalcLength:
    """Return the length of `value` in `unit`, matched ASCII case-insensitively.

    :raises InvalidValueError: with the `unexpected_dimension` kind if `unit` is not a length unit
    """
    unit = ascii_lower(unit)
    if unit in AbsoluteUnit.__members__.values():
        return AbsoluteLength(value, AbsoluteUnit(unit))
    elif unit in FontRelativeUnit.__members__.values():
        return FontRelativeLength(value, FontRelativeUnit(unit))
    elif unit in ViewportRelativeUnit.__members__.values():
        return ViewportRelativeLength(value, ViewportRelativeUnit(unit))
    raise InvalidValueError(ParseErrorKind.unexpected_dimension, detail=unit)

def parse_length_internal(input: ComponentStream, allowed_values: AllowedValues = AllowedValues.all, *, percentage: bool = False) -> LengthPercentage:
    """Parse a length or, if `percentage`, a length or a percentage.

    A number is a length only if it's zero (e.g. `0`, but not `5`, which is missing its unit).
    """
    location = input.location
    match value := input.peek():
        case DimensionToken():
            input.next()
            if not allowed_values.is_ok(number := to_float(value, location)):
                raise InvalidValueError(location=location, detail=f"{source(value)} is not {allowed_values}")
            try:
                return parse_dimension(value.unit, number)
            except InvalidValueError as error:
                error.location = location
                raise
        case NumberToken():
            input.next()
            if not allowed_values.is_ok(number := to_float(value, location)):
                raise InvalidValueError(location=location, detail=f"{source(value)} is not {allowed_values}")
            if number != 0:
                raise InvalidValueError(ParseErrorKind.missing_dimension, location=location, detail=source(value))
            return AbsoluteLength.zero()
        case PercentageToken() if percentage:
            return Percentage.parse_internal(input, allowed_values)
        case Function():
            input.next()
            raise InvalidValueError(ParseErrorKind.function_not_supported, location=location, detail=value.name)
        case _:
            raise unexpected(input.next(), location, error=InvalidValueError)

def parse_length(input: ComponentStream) -> NoCalcLength:
    return parse_length_internal(input) # type: ignore # Never a `Percentage` without `percentage=True`

def parse_non_negative_length(input: ComponentStream) -> NonNegative[NoCalcLength]:
    return NonNegative(parse_length_internal(input, AllowedValues.non_negative)) # type: ignore

def parse_length_percentage(input: ComponentStream) -> LengthPercentage:
    return parse_length_internal(input, percentage=True)

def parse_non_negative_length_percentage(input: ComponentStream) -> NonNegative[LengthPercentage]:
    return NonNegative(parse_length_internal(input, AllowedValues.non_negative, percentage=True))

def parse_length_percentage_or_auto(input: ComponentStream) -> LengthPercentageOrAuto:
    return MaybeAuto.parse_with(input, parse_length_percentage)
