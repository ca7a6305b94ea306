"""Typed CSS values and their parsers.

Every value type here is parsed from a `flexcss.syntax.parsing.ComponentStream`, see `flexcss.values.parse` for the conventions. Lengths resolve to pixels given a `flexcss.context.Context`.
"""

from .color import Color
from .generic import MaybeAuto, NonNegative, Numeric
from .keywords import AlignContent, AlignItems, AlignSelf, Direction, Display, FlexDirection, FlexWrap, JustifyContent, Overflow, PositionType
from .length import AbsoluteLength, AbsoluteUnit, FontRelativeLength, FontRelativeUnit, LengthPercentage, LengthPercentageOrAuto, NoCalcLength, ViewportRelativeLength, ViewportRelativeUnit
from .number import Number
from .parse import AllowedValues, parse_str
from .percentage import Percentage
from .ratio import Ratio, RatioOrAuto
from .shorthand import SidedValue
