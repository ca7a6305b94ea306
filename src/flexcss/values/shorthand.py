"""Values of the box shorthands, e.g. `margin`, that take one to four values for the four sides of a box."""

from ..syntax.parsing import ComponentStream
from ..utils import T

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic

@dataclass(frozen=True, slots=True)
class SidedValue(Generic[T]):
    top: T
    right: T
    bottom: T
    left: T
    @classmethod
    def new_1(cls, all: T) -> 'SidedValue[T]':
        return cls(all, all, all, all)
    @classmethod
    def new_2(cls, vertical: T, horizontal: T) -> 'SidedValue[T]':
        return cls(vertical, horizontal, vertical, horizontal)
    @classmethod
    def new_3(cls, top: T, horizontal: T, bottom: T) -> 'SidedValue[T]':
        return cls(top, horizontal, bottom, horizontal)
    @classmethod
    def new_4(cls, top: T, right: T, bottom: T, left: T) -> 'SidedValue[T]':
        return cls(top, right, bottom, left)
    @classmethod
    def parse_with(cls, input: ComponentStream, parse: Callable[[ComponentStream], T]) -> 'SidedValue[T]':
        """Parse one to four values with `parse`, expanding them in the usual top, right, bottom, left order.

        The first value is required; parsing stops quietly at the first of the others `parse` rejects, leaving it for the caller to report.

        See https://drafts.csswg.org/css-box-4/#margin-shorthand.
        """
        top = parse(input)
        if (right := input.try_parse(parse)) is None:
            return cls.new_1(top)
        if (bottom := input.try_parse(parse)) is None:
            return cls.new_2(top, right)
        if (left := input.try_parse(parse)) is None:
            return cls.new_3(top, right, bottom)
        return cls.new_4(top, right, bottom, left)
