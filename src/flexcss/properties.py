"""The closed set of supported properties, and parsing of declarations of them into typed `PropertyDeclaration` values.

The registry maps a property name to the parser of its value. It's built once, at import time, and can't be extended: a property not listed in `PropertyId` is unknown, which is reported differently from a known property with a value of the wrong kind.
"""

from .errors import UnknownPropertyError
from .syntax.parsing import ComponentStream
from .syntax.preprocessing import Location
from .utils import ascii_lower
from .values.color import Color
from .values.keywords import AlignContent, AlignItems, AlignSelf, Direction, Display, FlexDirection, FlexWrap, JustifyContent, Overflow, PositionType
from .values.length import parse_length_percentage_or_auto
from .values.number import parse_non_negative_number
from .values.ratio import parse_ratio_or_auto
from .values.shorthand import SidedValue

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

class PropertyId(StrEnum):
    """The supported properties; values are the property names as written in CSS."""
    display = 'display'
    direction = 'direction'
    width = 'width'
    height = 'height'
    min_width = 'min-width'
    min_height = 'min-height'
    max_width = 'max-width'
    max_height = 'max-height'
    overflow = 'overflow'
    position = 'position'
    top = 'top'
    right = 'right'
    bottom = 'bottom'
    left = 'left'
    flex_direction = 'flex-direction'
    flex_wrap = 'flex-wrap'
    flex_grow = 'flex-grow'
    flex_shrink = 'flex-shrink'
    flex_basis = 'flex-basis'
    aspect_ratio = 'aspect-ratio'
    align_items = 'align-items'
    align_self = 'align-self'
    align_content = 'align-content'
    justify_content = 'justify-content'
    margin = 'margin'
    margin_top = 'margin-top'
    margin_right = 'margin-right'
    margin_bottom = 'margin-bottom'
    margin_left = 'margin-left'
    padding = 'padding'
    padding_top = 'padding-top'
    padding_right = 'padding-right'
    padding_bottom = 'padding-bottom'
    padding_left = 'padding-left'
    border_width = 'border-width'
    border_width_top = 'border-width-top'
    border_width_right = 'border-width-right'
    border_width_bottom = 'border-width-bottom'
    border_width_left = 'border-width-left'
    color = 'color'

ValueParser = Callable[[ComponentStream], Any]

@dataclass(frozen=True, slots=True)
class Property:
    id: PropertyId
    parse: ValueParser

@dataclass(frozen=True, slots=True)
class PropertyDeclaration:
    """A property with its parsed value, e.g. `PropertyDeclaration(PropertyId.width, MaybeAuto(Percentage(1.0)))` for `width: 100%`.

    The type of `value` is determined by `id`, see `PARSERS`.
    """
    id: PropertyId
    value: Any

def parse_sided(input: ComponentStream) -> SidedValue:
    return SidedValue.parse_with(input, parse_length_percentage_or_auto)

PARSERS: Mapping[PropertyId, ValueParser] = MappingProxyType({
    PropertyId.display: Display.parse,
    PropertyId.direction: Direction.parse,
    PropertyId.width: parse_length_percentage_or_auto,
    PropertyId.height: parse_length_percentage_or_auto,
    PropertyId.min_width: parse_length_percentage_or_auto,
    PropertyId.min_height: parse_length_percentage_or_auto,
    PropertyId.max_width: parse_length_percentage_or_auto,
    PropertyId.max_height: parse_length_percentage_or_auto,
    PropertyId.overflow: Overflow.parse,
    PropertyId.position: PositionType.parse,
    PropertyId.top: parse_length_percentage_or_auto,
    PropertyId.right: parse_length_percentage_or_auto,
    PropertyId.bottom: parse_length_percentage_or_auto,
    PropertyId.left: parse_length_percentage_or_auto,
    PropertyId.flex_direction: FlexDirection.parse,
    PropertyId.flex_wrap: FlexWrap.parse,
    PropertyId.flex_grow: parse_non_negative_number,
    PropertyId.flex_shrink: parse_non_negative_number,
    PropertyId.flex_basis: parse_length_percentage_or_auto,
    PropertyId.aspect_ratio: parse_ratio_or_auto,
    PropertyId.align_items: AlignItems.parse,
    PropertyId.align_self: AlignSelf.parse,
    PropertyId.align_content: AlignContent.parse,
    PropertyId.justify_content: JustifyContent.parse,
    PropertyId.margin: parse_sided,
    PropertyId.margin_top: parse_length_percentage_or_auto,
    PropertyId.margin_right: parse_length_percentage_or_auto,
    PropertyId.margin_bottom: parse_length_percentage_or_auto,
    PropertyId.margin_left: parse_length_percentage_or_auto,
    PropertyId.padding: parse_sided,
    PropertyId.padding_top: parse_length_percentage_or_auto,
    PropertyId.padding_right: parse_length_percentage_or_auto,
    PropertyId.padding_bottom: parse_length_percentage_or_auto,
    PropertyId.padding_left: parse_length_percentage_or_auto,
    PropertyId.border_width: parse_sided,
    PropertyId.border_width_top: parse_length_percentage_or_auto,
    PropertyId.border_width_right: parse_length_percentage_or_auto,
    PropertyId.border_width_bottom: parse_length_percentage_or_auto,
    PropertyId.border_width_left: parse_length_percentage_or_auto,
    PropertyId.color: Color.parse,
})

ALIASES = { # Standard spellings of the border width longhands
    'border-top-width': PropertyId.border_width_top,
    'border-right-width': PropertyId.border_width_right,
    'border-bottom-width': PropertyId.border_width_bottom,
    'border-left-width': PropertyId.border_width_left,
}

REGISTRY: Mapping[str, Property] = MappingProxyType({ name: Property(id, PARSERS[id]) for name, id in (*((id.value, id) for id in PropertyId), *ALIASES.items()) })

def resolve(name: str) -> Property | None:
    """Look up a property by name, ASCII case-insensitively; `None` means the property is unknown."""
    return REGISTRY.get(ascii_lower(name))

def parse_important(input: ComponentStream) -> None:
    """See http://drafts.csswg.org/css-cascade/#importance."""
    input.expect_delim('!')
    input.expect_ident_matching('important')

def parse_declaration(name: str, input: ComponentStream, *, location: Location | None = None) -> PropertyDeclaration:
    """Parse the value of a declaration of property `name`.

    A trailing `!important` is accepted but has no effect; declarations apply in the order they're written regardless.

    :param name: The property name, as written
    :param input: The value of the declaration
    :param location: Location of the property name, for reporting it as unknown
    :raises UnknownPropertyError: if no property is called `name`
    :raises ParseError: if the value is not valid for the property, or is followed by anything other than `!important`
    """
    if (property := resolve(name)) is None:
        raise UnknownPropertyError(location=location, detail=name)
    value = property.parse(input)
    input.try_parse(parse_important)
    input.expect_exhausted()
    return PropertyDeclaration(property.id, value)
