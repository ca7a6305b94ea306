"""Tests for resolving declarations into the style and paint of a node."""

import sys
from types import SimpleNamespace

import pytest

from flexcss.context import Context
from flexcss.properties import PropertyDeclaration, PropertyId
from flexcss.stylesheet import InlineStyle, apply_all, parse_inline
from flexcss.style import Paint, Size, Style, UiRect, Val, apply
from flexcss.values import AlignSelf, Color, Direction, Display, FlexDirection, JustifyContent, Overflow, PositionType


def style_of(text, context=Context()):
    return InlineStyle(text).to_style(context)


class TestDefaults:
    def test_style(self):
        style = Style()
        assert style.display is Display.flex
        assert style.direction is Direction.inherit
        assert style.position_type is PositionType.relative
        assert style.flex_direction is FlexDirection.row
        assert style.align_self is AlignSelf.auto
        assert style.justify_content is JustifyContent.flex_start
        assert style.flex_grow == 0.0
        assert style.flex_shrink == 1.0
        assert style.flex_basis == Val.auto()
        assert style.size == Size(Val.auto(), Val.auto())
        assert style.margin == UiRect(Val.undefined(), Val.undefined(), Val.undefined(), Val.undefined())
        assert style.aspect_ratio is None
        assert style.overflow is Overflow.visible

    def test_paint(self):
        assert Paint().color == Color(1.0, 1.0, 1.0, 1.0)

    def test_defaults_are_not_shared(self):
        a, b = Style(), Style()
        apply(PropertyDeclaration(PropertyId.flex_grow, 2.0), Context(), a)
        assert b.flex_grow == 0.0


class TestInlineStyle:
    def test_to_style(self):
        style = style_of("width: 100%; height: 100px; justify-content: space-between;")
        assert style == Style(size=Size(Val.percent(100.0), Val.px(100.0)), justify_content=JustifyContent.space_between)

    def test_to_paint(self):
        paint = InlineStyle("color: rgb(65, 75, 85);").to_paint()
        assert paint.color.as_rgba() == pytest.approx((65 / 255, 75 / 255, 85 / 255, 1.0))

    def test_text_is_kept(self):
        assert InlineStyle("width: 1px").text == "width: 1px"

    def test_invalid_declarations_are_skipped(self):
        errors = []
        style = InlineStyle("width: 5; height: 7px; float: left").to_style(on_error=errors.append)
        assert style == Style(size=Size(Val.auto(), Val.px(7.0)))
        assert len(errors) == 2


class TestLengths:
    def test_absolute(self):
        assert style_of("width: 1in").size.width == Val.px(96.0)

    def test_font_relative(self):
        context = Context(font_size=10.0, root_font_size=20.0)
        style = style_of("width: 2em; height: 2rem", context)
        assert style.size == Size(Val.px(20.0), Val.px(40.0))

    def test_viewport_relative(self):
        context = Context(viewport_size=(801.0, 600.0))
        style = style_of("width: 50vw; height: 50vh", context)
        assert style.size == Size(Val.px(400.0), Val.px(300.0))

    def test_viewport_overflow_is_clamped(self):
        style = style_of("width: 1e307vw; height: 1e307vh", Context(viewport_size=(800.0, 600.0)))
        assert style.size == Size(Val.px(sys.float_info.max), Val.px(sys.float_info.max))
        assert style_of("width: 1e307vw").size.width == Val.px(0.0)

    def test_auto(self):
        style = style_of("width: 10px; width: auto; flex-basis: auto")
        assert style.size.width == Val.auto()
        assert style.flex_basis == Val.auto()


class TestBoxProperties:
    def test_shorthand(self):
        style = style_of("margin: 1px 2px 3px")
        assert style.margin == UiRect(left=Val.px(2.0), right=Val.px(2.0), top=Val.px(1.0), bottom=Val.px(3.0))

    def test_longhand_after_shorthand(self):
        style = style_of("padding: 1px; padding-left: 5%")
        assert style.padding == UiRect(left=Val.percent(5.0), right=Val.px(1.0), top=Val.px(1.0), bottom=Val.px(1.0))

    def test_shorthand_after_longhand(self):
        style = style_of("border-left-width: 5px; border-width: 1px")
        assert style.border == UiRect(Val.px(1.0), Val.px(1.0), Val.px(1.0), Val.px(1.0))

    def test_margin_side_leaves_position_alone(self):
        style = style_of("margin-top: 4px; left: 3px")
        assert style.margin == UiRect(top=Val.px(4.0))
        assert style.position == UiRect(left=Val.px(3.0))

    def test_position(self):
        style = style_of("position: absolute; top: 0; right: 10%")
        assert style.position_type is PositionType.absolute
        assert style.position == UiRect(top=Val.px(0.0), right=Val.percent(10.0))

    def test_sizes(self):
        style = style_of("min-width: 1px; max-height: 50%")
        assert style.min_size == Size(Val.px(1.0), Val.auto())
        assert style.max_size == Size(Val.auto(), Val.percent(50.0))


class TestFlexProperties:
    def test_keywords(self):
        style = style_of("display: none; flex-direction: column-reverse; align-self: center; overflow: hidden")
        assert style.display is Display.none
        assert style.flex_direction is FlexDirection.column_reverse
        assert style.align_self is AlignSelf.center
        assert style.overflow is Overflow.hidden

    def test_grow_and_shrink(self):
        style = style_of("flex-grow: 2; flex-shrink: 0.5")
        assert style.flex_grow == 2.0
        assert isinstance(style.flex_grow, float)
        assert style.flex_shrink == 0.5

    @pytest.mark.parametrize("text, ratio", [
        ("aspect-ratio: 16 / 8", 2.0),
        ("aspect-ratio: 3", 3.0),
        ("aspect-ratio: auto", None),
    ])
    def test_aspect_ratio(self, text, ratio):
        assert style_of(text).aspect_ratio == ratio


class TestTargets:
    def test_color_does_not_touch_style(self):
        style = Style()
        apply_all(parse_inline("color: red"), Context(), style)
        assert style == Style()

    def test_layout_does_not_touch_paint(self):
        paint = InlineStyle("width: 10px; display: none").to_paint()
        assert paint == Paint()

    def test_host_paint_target(self):
        node = SimpleNamespace(color=None, label="x")
        apply_all(parse_inline("color: #000"), Context(), node)
        assert node.color == Color(0.0, 0.0, 0.0, 1.0)

    def test_host_style_target(self):
        node = SimpleNamespace(**{name: getattr(Style(), name) for name in Style.__slots__})
        apply_all(parse_inline("width: 5px; color: red"), Context(), node)
        assert node.size == Size(Val.px(5.0), Val.auto())
        assert not hasattr(node, "color")

    def test_other_objects_are_ignored(self):
        apply_all(parse_inline("width: 5px; color: red"), Context(), object())
