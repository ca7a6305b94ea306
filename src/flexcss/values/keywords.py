"""Keyword values of the flexbox layout properties.

Each enumeration's members have the keywords as written for values, e.g. `JustifyContent.space_between == 'space-between'`.
"""

from ..errors import InvalidValueError, ParseErrorKind
from ..syntax.parsing import ComponentStream, unexpected
from ..syntax.tokenizing import IdentToken
from ..utils import ascii_lower

from enum import StrEnum
from typing import Self

class Keyword(StrEnum):
    """Base for closed sets of keywords, matched ASCII case-insensitively."""
    @classmethod
    def parse(cls, input: ComponentStream) -> Self:
        location = input.location
        match value := input.next():
            case IdentToken():
                try:
                    return cls(ascii_lower(value.value))
                except ValueError:
                    raise InvalidValueError(ParseErrorKind.invalid_keyword, location=location, detail=value.value) from None
            case _:
                raise unexpected(value, location, error=InvalidValueError)

class Display(Keyword):
    """See https://drafts.csswg.org/css-display/#the-display-properties."""
    flex = 'flex'
    none = 'none'

class Direction(Keyword):
    """See https://drafts.csswg.org/css-writing-modes/#direction."""
    inherit = 'inherit'
    ltr = 'ltr'
    rtl = 'rtl'

class Overflow(Keyword):
    visible = 'visible'
    hidden = 'hidden'

class PositionType(Keyword):
    """The `position` property; only `relative` and `absolute` positioning is supported."""
    relative = 'relative'
    absolute = 'absolute'

class FlexDirection(Keyword):
    """See https://drafts.csswg.org/css-flexbox/#flex-direction-property."""
    row = 'row'
    column = 'column'
    row_reverse = 'row-reverse'
    column_reverse = 'column-reverse'

class FlexWrap(Keyword):
    nowrap = 'nowrap'
    wrap = 'wrap'
    wrap_reverse = 'wrap-reverse'

class AlignItems(Keyword):
    """See https://drafts.csswg.org/css-flexbox/#align-items-property."""
    flex_start = 'flex-start'
    flex_end = 'flex-end'
    center = 'center'
    baseline = 'baseline'
    stretch = 'stretch'

class AlignSelf(Keyword):
    auto = 'auto' # Defer to the `align-items` of the parent
    flex_start = 'flex-start'
    flex_end = 'flex-end'
    center = 'center'
    baseline = 'baseline'
    stretch = 'stretch'

class AlignContent(Keyword):
    """See https://drafts.csswg.org/css-flexbox/#align-content-property."""
    flex_start = 'flex-start'
    flex_end = 'flex-end'
    center = 'center'
    stretch = 'stretch'
    space_between = 'space-between'
    space_around = 'space-around'

class JustifyContent(Keyword):
    flex_start = 'flex-start'
    flex_end = 'flex-end'
    center = 'center'
    space_between = 'space-between'
    space_around = 'space-around'
    space_evenly = 'space-evenly'
