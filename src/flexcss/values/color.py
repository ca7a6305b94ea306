"""Colours, see https://drafts.csswg.org/css-color-3/#colorunits.

Resolution of the `<color>` syntax (keywords, hex notations and the `rgb()`/`hsl()` family) is left to `tinycss2.color3`, fed the source of the value.
"""

from ..errors import InvalidValueError, ParseErrorKind
from ..syntax.parsing import ComponentStream, source

from dataclasses import dataclass

import tinycss2.color3

@dataclass(frozen=True, slots=True)
class Color:
    """A colour in the sRGB space, each component in the range 0.0 to 1.0."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0
    @classmethod
    def rgb_u8(cls, red: int, green: int, blue: int, alpha: float = 1.0) -> 'Color':
        """Return the colour of 0 to 255 components, as in `rgb(65, 75, 85)`."""
        return cls(red / 255, green / 255, blue / 255, alpha)
    def as_rgba(self) -> tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.alpha)
    @classmethod
    def parse(cls, input: ComponentStream) -> 'Color':
        """Parse a single component value as a colour.

        `currentcolor` is rejected: this engine has no inherited `color` to refer to.
        """
        location = input.location
        value = input.next()
        match tinycss2.color3.parse_color(text := source(value)):
            case None:
                raise InvalidValueError(location=location, detail=f"{text} is not a colour")
            case str(): # 'currentColor'
                raise InvalidValueError(ParseErrorKind.invalid_keyword, location=location, detail=text)
            case rgba:
                return cls(rgba.red, rgba.green, rgba.blue, rgba.alpha)

WHITE = Color(1.0, 1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)
