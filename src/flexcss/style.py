"""Application of parsed declarations to the style and paint of a UI node.

The structures written to are "targets". Any object with the attributes of `StyleTarget` (box model and flex layout) or `PaintTarget` (fill colour) will do, so a host may supply its own; `Style` and `Paint` are the ones this package provides, initialized the way a flexbox layout engine initializes a fresh node.

Lengths are resolved to pixels here, against a `Context`; percentages are kept as such, for the layout engine to resolve against the size of the containing node.
"""

from .context import Context
from .properties import PropertyDeclaration, PropertyId
from .values.color import Color, WHITE
from .values.generic import MaybeAuto
from .values.keywords import AlignContent, AlignItems, AlignSelf, Direction, Display, FlexDirection, FlexWrap, JustifyContent, Overflow, PositionType
from .values.length import LengthPercentage
from .values.percentage import Percentage
from .values.ratio import Ratio
from .values.shorthand import SidedValue

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Protocol, runtime_checkable

class ValKind(StrEnum):
    auto = 'auto'
    undefined = 'undefined' # Not set; layout falls back on its own default
    px = 'px'
    percent = 'percent'

@dataclass(frozen=True, slots=True)
class Val:
    """A length as a layout engine takes it: `Val.px(10.0)`, `Val.percent(50.0)` (on the 0 to 100 scale), `Val.auto()` or `Val.undefined()`."""
    kind: ValKind
    value: float = 0.0
    @classmethod
    def auto(cls) -> 'Val':
        return cls(ValKind.auto)
    @classmethod
    def undefined(cls) -> 'Val':
        return cls(ValKind.undefined)
    @classmethod
    def px(cls, value: float) -> 'Val':
        return cls(ValKind.px, value)
    @classmethod
    def percent(cls, value: float) -> 'Val':
        return cls(ValKind.percent, value)

@dataclass(frozen=True, slots=True)
class UiRect:
    left: Val = Val.undefined()
    right: Val = Val.undefined()
    top: Val = Val.undefined()
    bottom: Val = Val.undefined()

@dataclass(frozen=True, slots=True)
class Size:
    width: Val = Val.auto()
    height: Val = Val.auto()

@runtime_checkable
class StyleTarget(Protocol):
    """Targets of the layout properties; the rect and size attributes are replaced, never mutated in place."""
    display: Display
    direction: Direction
    position_type: PositionType
    flex_direction: FlexDirection
    flex_wrap: FlexWrap
    align_items: AlignItems
    align_self: AlignSelf
    align_content: AlignContent
    justify_content: JustifyContent
    position: UiRect
    margin: UiRect
    padding: UiRect
    border: UiRect
    flex_grow: float
    flex_shrink: float
    flex_basis: Val
    size: Size
    min_size: Size
    max_size: Size
    aspect_ratio: float | None
    overflow: Overflow

@runtime_checkable
class PaintTarget(Protocol):
    color: Color

@dataclass(slots=True)
class Style:
    display: Display = Display.flex
    direction: Direction = Direction.inherit
    position_type: PositionType = PositionType.relative
    flex_direction: FlexDirection = FlexDirection.row
    flex_wrap: FlexWrap = FlexWrap.nowrap
    align_items: AlignItems = AlignItems.stretch
    align_self: AlignSelf = AlignSelf.auto
    align_content: AlignContent = AlignContent.stretch
    justify_content: JustifyContent = JustifyContent.flex_start
    position: UiRect = field(default_factory=UiRect)
    margin: UiRect = field(default_factory=UiRect)
    padding: UiRect = field(default_factory=UiRect)
    border: UiRect = field(default_factory=UiRect)
    flex_grow: float = 0.0
    flex_shrink: float = 1.0
    flex_basis: Val = Val.auto()
    size: Size = field(default_factory=Size)
    min_size: Size = field(default_factory=Size)
    max_size: Size = field(default_factory=Size)
    aspect_ratio: float | None = None
    overflow: Overflow = Overflow.visible

@dataclass(slots=True)
class Paint:
    color: Color = WHITE

def to_val(value: MaybeAuto[LengthPercentage], context: Context) -> Val:
    match value.non_auto():
        case None:
            return Val.auto()
        case Percentage() as percentage:
            return Val.percent(percentage.as_number())
        case length:
            return Val.px(length.to_computed_px(context))

def to_rect(value: SidedValue[MaybeAuto[LengthPercentage]], context: Context) -> UiRect:
    return UiRect(left=to_val(value.left, context), right=to_val(value.right, context), top=to_val(value.top, context), bottom=to_val(value.bottom, context))

def to_aspect_ratio(value: MaybeAuto[Ratio]) -> float | None:
    ratio = value.non_auto()
    return None if ratio is None else ratio.as_fraction()

def apply(declaration: PropertyDeclaration, context: Context, target: object) -> None:
    """Write the value of `declaration` into the field of `target` it is for, resolving lengths against `context`.

    Declarations for fields `target` lacks are ignored, e.g. `color` on a `Style`. A shorthand (e.g. `margin`) replaces all four sides, a single side (e.g. `margin-top`) replaces just its own, so whichever of the two is applied last wins for that side.
    """
    if isinstance(target, StyleTarget):
        apply_to_style(declaration, context, target)
    if isinstance(target, PaintTarget):
        apply_to_paint(declaration, target)

def apply_to_style(declaration: PropertyDeclaration, context: Context, style: StyleTarget) -> None:
    value = declaration.value
    match declaration.id:
        case PropertyId.display:
            style.display = value
        case PropertyId.direction:
            style.direction = value
        case PropertyId.width:
            style.size = replace(style.size, width=to_val(value, context))
        case PropertyId.height:
            style.size = replace(style.size, height=to_val(value, context))
        case PropertyId.min_width:
            style.min_size = replace(style.min_size, width=to_val(value, context))
        case PropertyId.min_height:
            style.min_size = replace(style.min_size, height=to_val(value, context))
        case PropertyId.max_width:
            style.max_size = replace(style.max_size, width=to_val(value, context))
        case PropertyId.max_height:
            style.max_size = replace(style.max_size, height=to_val(value, context))
        case PropertyId.overflow:
            style.overflow = value

        case PropertyId.position:
            style.position_type = value
        case PropertyId.top:
            style.position = replace(style.position, top=to_val(value, context))
        case PropertyId.right:
            style.position = replace(style.position, right=to_val(value, context))
        case PropertyId.bottom:
            style.position = replace(style.position, bottom=to_val(value, context))
        case PropertyId.left:
            style.position = replace(style.position, left=to_val(value, context))

        case PropertyId.flex_direction:
            style.flex_direction = value
        case PropertyId.flex_wrap:
            style.flex_wrap = value
        case PropertyId.flex_grow:
            style.flex_grow = float(value)
        case PropertyId.flex_shrink:
            style.flex_shrink = float(value)
        case PropertyId.flex_basis:
            style.flex_basis = to_val(value, context)
        case PropertyId.aspect_ratio:
            style.aspect_ratio = to_aspect_ratio(value)

        case PropertyId.align_items:
            style.align_items = value
        case PropertyId.align_self:
            style.align_self = value
        case PropertyId.align_content:
            style.align_content = value
        case PropertyId.justify_content:
            style.justify_content = value

        case PropertyId.margin:
            style.margin = to_rect(value, context)
        case PropertyId.margin_top:
            style.margin = replace(style.margin, top=to_val(value, context))
        case PropertyId.margin_right:
            style.margin = replace(style.margin, right=to_val(value, context))
        case PropertyId.margin_bottom:
            style.margin = replace(style.margin, bottom=to_val(value, context))
        case PropertyId.margin_left:
            style.margin = replace(style.margin, left=to_val(value, context))

        case PropertyId.padding:
            style.padding = to_rect(value, context)
        case PropertyId.padding_top:
            style.padding = replace(style.padding, top=to_val(value, context))
        case PropertyId.padding_right:
            style.padding = replace(style.padding, right=to_val(value, context))
        case PropertyId.padding_bottom:
            style.padding = replace(style.padding, bottom=to_val(value, context))
        case PropertyId.padding_left:
            style.padding = replace(style.padding, left=to_val(value, context))

        case PropertyId.border_width:
            style.border = to_rect(value, context)
        case PropertyId.border_width_top:
            style.border = replace(style.border, top=to_val(value, context))
        case PropertyId.border_width_right:
            style.border = replace(style.border, right=to_val(value, context))
        case PropertyId.border_width_bottom:
            style.border = replace(style.border, bottom=to_val(value, context))
        case PropertyId.border_width_left:
            style.border = replace(style.border, left=to_val(value, context))

        case PropertyId.color:
            pass # Paint

def apply_to_paint(declaration: PropertyDeclaration, paint: PaintTarget) -> None:
    match declaration.id:
        case PropertyId.color:
            paint.color = declaration.value
        case _:
            pass
