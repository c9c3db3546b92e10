from __future__ import annotations

import math
import unittest

from luvatrix_axis.canvas import RecordingCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy.base import (
    TickLabelEngine,
    axis_line_points,
    normalize_horizontal_anchor,
    normalize_vertical_anchor,
)
from luvatrix_axis.geometry import Point, Rect
from luvatrix_axis.style import DEFAULT_THEME, LabelStyle, LineStyle
from luvatrix_axis.text import MonospaceTextMeasurer
from luvatrix_axis.tick import Tick


def _context(*, rtl: bool = False) -> ChartContext:
    # 10 px per character, 10 px per line.
    return ChartContext(is_rtl=rtl, text_measurer=MonospaceTextMeasurer(char_width_ratio=1.0, default_font_size_px=10.0))


def _tick(context: ChartContext, text: str, location: float | None) -> Tick[str]:
    return Tick(value=text, text_element=context.create_text_element(text), location=location)


class RotatedLabelTests(unittest.TestCase):
    def test_zero_rotation_returns_unrotated_dimensions(self) -> None:
        for h, w in [(0.0, 0.0), (10.0, 40.0), (12.5, 3.0), (0.0, 99.0)]:
            self.assertEqual(TickLabelEngine.calculate_width_for_rotated_label(0, h, w), w)
            self.assertEqual(TickLabelEngine.calculate_height_for_rotated_label(0, h, w), h)

    def test_rotated_label_bounds(self) -> None:
        self.assertAlmostEqual(TickLabelEngine.calculate_width_for_rotated_label(30, 10.0, 40.0), 37.141016, places=4)
        self.assertAlmostEqual(TickLabelEngine.calculate_height_for_rotated_label(30, 10.0, 40.0), 21.443376, places=4)

    def test_rotated_height_is_never_below_line_height(self) -> None:
        self.assertEqual(TickLabelEngine.calculate_height_for_rotated_label(5, 20.0, 1.0), 20.0)


class CollisionTests(unittest.TestCase):
    def test_spread_labels_do_not_collide(self) -> None:
        context = _context()
        for padding in (0.0, 50.0):
            engine = TickLabelEngine(context, minimum_padding_between_labels=padding)
            ticks = [_tick(context, "abcd", loc) for loc in (0.0, 100.0, 200.0)]
            report = engine.collides(ticks, "down")
            self.assertFalse(report.ticks_collide)
            self.assertFalse(report.alternate_ticks_used)

    def test_wide_labels_collide(self) -> None:
        context = _context()
        engine = TickLabelEngine(context)
        ticks = [_tick(context, "abcdefg", loc) for loc in (0.0, 100.0, 200.0)]
        self.assertTrue(engine.collides(ticks, "down").ticks_collide)

    def test_collision_is_monotonic_in_padding(self) -> None:
        context = _context()
        layouts = [
            [("abcdefg", 0.0), ("abcdefg", 100.0), ("abcdefg", 200.0)],
            [("ab", 0.0), ("abcdef", 30.0), ("abc", 95.0), ("a", 180.0)],
        ]
        for anchor in ("centered", "after", "before", "inside"):
            for orientation in ("down", "left"):
                for layout in layouts:
                    collided = False
                    for padding in range(0, 201, 10):
                        engine = TickLabelEngine(context, label_anchor=anchor, minimum_padding_between_labels=padding)
                        ticks = [_tick(context, text, loc) for text, loc in layout]
                        result = engine.collides(ticks, orientation).ticks_collide
                        if collided:
                            self.assertTrue(result, f"{anchor}/{orientation} padding={padding}")
                        collided = collided or result

    def test_none_and_empty_tick_lists_do_not_collide(self) -> None:
        engine = TickLabelEngine(_context())
        report = engine.collides(None, "down")
        self.assertFalse(report.ticks_collide)
        self.assertIsNone(report.ticks)
        self.assertFalse(engine.collides([], "left").ticks_collide)

    def test_ticks_are_sorted_by_location_and_unplaced_ticks_dropped(self) -> None:
        context = _context()
        engine = TickLabelEngine(context, minimum_padding_between_labels=0)
        ticks = [_tick(context, "c", 200.0), _tick(context, "x", None), _tick(context, "a", 0.0), _tick(context, "b", 100.0)]
        report = engine.collides(ticks, "down")
        self.assertFalse(report.ticks_collide)
        assert report.ticks is not None
        self.assertEqual([t.value for t in report.ticks], ["a", "b", "c"])

    def test_vertical_inside_anchor_treats_first_and_last_asymmetrically(self) -> None:
        context = _context()
        engine = TickLabelEngine(context, label_anchor="inside", minimum_padding_between_labels=0)
        fits = [_tick(context, "a", loc) for loc in (0.0, 15.0, 40.0)]
        self.assertFalse(engine.collides(fits, "left").ticks_collide)
        crowded = [_tick(context, "a", loc) for loc in (0.0, 14.0, 40.0)]
        self.assertTrue(engine.collides(crowded, "left").ticks_collide)

    def test_vertical_labels_stack_upward_from_each_tick(self) -> None:
        context = _context()
        engine = TickLabelEngine(context, label_anchor="after", minimum_padding_between_labels=0)
        self.assertTrue(engine.collides([_tick(context, "a", 0.0), _tick(context, "b", 5.0)], "right").ticks_collide)
        self.assertFalse(engine.collides([_tick(context, "a", 0.0), _tick(context, "b", 10.0)], "right").ticks_collide)

    def test_reading_direction_changes_horizontal_extent(self) -> None:
        ltr = _context()
        rtl = _context(rtl=True)
        ltr_engine = TickLabelEngine(ltr, label_anchor="after", minimum_padding_between_labels=0)
        rtl_engine = TickLabelEngine(rtl, label_anchor="after", minimum_padding_between_labels=0)

        self.assertTrue(ltr_engine.collides([_tick(ltr, "abcd", 0.0), _tick(ltr, "abcd", 35.0)], "down").ticks_collide)
        self.assertFalse(ltr_engine.collides([_tick(ltr, "abcd", 0.0), _tick(ltr, "abcd", 45.0)], "down").ticks_collide)
        self.assertTrue(rtl_engine.collides([_tick(rtl, "abcd", 0.0), _tick(rtl, "abcd", 35.0)], "down").ticks_collide)
        self.assertFalse(rtl_engine.collides([_tick(rtl, "abcd", 0.0), _tick(rtl, "abcd", 45.0)], "down").ticks_collide)


class AnchorNormalizationTests(unittest.TestCase):
    def test_horizontal_anchor(self) -> None:
        self.assertEqual(normalize_horizontal_anchor("before", False, False, False), "rtl")
        self.assertEqual(normalize_horizontal_anchor("before", True, False, False), "ltr")
        self.assertEqual(normalize_horizontal_anchor("after", False, False, False), "ltr")
        self.assertEqual(normalize_horizontal_anchor("after", True, False, False), "rtl")
        self.assertEqual(normalize_horizontal_anchor("inside", False, True, False), "ltr")
        self.assertEqual(normalize_horizontal_anchor("inside", False, False, True), "rtl")
        self.assertIsNone(normalize_horizontal_anchor("inside", False, False, False))
        self.assertIsNone(normalize_horizontal_anchor("centered", True, True, True))

    def test_vertical_anchor(self) -> None:
        self.assertEqual(normalize_vertical_anchor("before", False, False), "under")
        self.assertEqual(normalize_vertical_anchor("after", False, False), "over")
        self.assertEqual(normalize_vertical_anchor("inside", True, False), "over")
        self.assertEqual(normalize_vertical_anchor("inside", False, True), "under")
        self.assertEqual(normalize_vertical_anchor("inside", False, False), "center")
        self.assertEqual(normalize_vertical_anchor("centered", True, False), "center")


class LabelPlacementTests(unittest.TestCase):
    def test_defaults(self) -> None:
        engine = TickLabelEngine(_context())
        self.assertEqual(engine.default_tick_label_anchor, "centered")
        self.assertEqual(engine.tick_label_justification, "inside")
        self.assertEqual(engine.minimum_padding_between_labels, 50.0)
        self.assertEqual(engine.normal.offset_from_axis, 5.0)
        self.assertEqual(engine.normal.offset_from_tick, 5.0)
        self.assertEqual(engine.normal.rotation, 0.0)
        self.assertFalse(engine.rotate_on_collision)

    def test_collision_profile_requires_collision_rotation(self) -> None:
        plain = TickLabelEngine(_context(), label_rotation=10, label_collision_offset_from_axis=9)
        self.assertIs(plain.placement(collision=True), plain.normal)

        rotating = TickLabelEngine(
            _context(),
            label_anchor="centered",
            label_collision_rotation=45,
            label_collision_offset_from_axis=9,
            label_collision_offset_from_tick=3,
        )
        profile = rotating.placement(collision=True)
        self.assertEqual(profile.anchor, "after")
        self.assertEqual(profile.rotation, 45.0)
        self.assertEqual(profile.offset_from_axis, 9.0)
        self.assertEqual(profile.offset_from_tick, 3.0)
        self.assertIs(rotating.placement(collision=False), rotating.normal)

    def test_rejects_unknown_anchor_and_justification(self) -> None:
        with self.assertRaisesRegex(ValueError, "anchor"):
            TickLabelEngine(_context(), label_anchor="middle")  # type: ignore[arg-type]
        with self.assertRaisesRegex(ValueError, "justification"):
            TickLabelEngine(_context(), label_justification="center")  # type: ignore[arg-type]


class DecorateTicksTests(unittest.TestCase):
    def test_missing_style_takes_theme_defaults(self) -> None:
        context = _context()
        engine = TickLabelEngine(context)
        tick = _tick(context, "a", 0.0)
        engine.decorate_ticks([tick])
        assert tick.text_element is not None
        self.assertEqual(tick.text_element.style, DEFAULT_THEME.label_style)

    def test_partial_style_keeps_caller_values(self) -> None:
        context = _context()
        engine = TickLabelEngine(context)
        tick = _tick(context, "a", 0.0)
        assert tick.text_element is not None
        tick.text_element.style = LabelStyle(color=(1, 2, 3, 255))
        engine.decorate_ticks([tick, Tick(value="bare")])

        style = tick.text_element.style
        assert style is not None
        self.assertEqual(style.color, (1, 2, 3, 255))
        self.assertEqual(style.font_size_px, DEFAULT_THEME.label_style.font_size_px)
        self.assertEqual(style.font_family, DEFAULT_THEME.label_style.font_family)

    def test_strategy_label_style_overrides_theme(self) -> None:
        context = _context()
        engine = TickLabelEngine(context, label_style=LabelStyle(font_size_px=20.0))
        tick = _tick(context, "a", 0.0)
        engine.decorate_ticks([tick])
        assert tick.text_element is not None and tick.text_element.style is not None
        self.assertEqual(tick.text_element.style.font_size_px, 20.0)
        self.assertEqual(tick.text_element.style.color, DEFAULT_THEME.label_style.color)


class UpdateTickWidthTests(unittest.TestCase):
    def test_horizontal_unrotated_labels_are_unbounded(self) -> None:
        context = _context()
        engine = TickLabelEngine(context)
        tick = _tick(context, "abcd", 0.0)
        assert tick.text_element is not None
        tick.text_element.max_width = 10.0
        tick.text_element.max_width_strategy = "truncate"
        engine.update_tick_width([tick], 300.0, 40.0, "down")
        self.assertIsNone(tick.text_element.max_width)
        self.assertIsNone(tick.text_element.max_width_strategy)

    def test_vertical_labels_are_limited_to_axis_width(self) -> None:
        context = _context()
        engine = TickLabelEngine(context)
        tick = _tick(context, "abcdefghijkl", 0.0)
        engine.update_tick_width([tick], 100.0, 400.0, "left")
        assert tick.text_element is not None
        self.assertEqual(tick.text_element.max_width, 95.0)
        self.assertEqual(tick.text_element.max_width_strategy, "ellipsize")
        self.assertLessEqual(tick.text_element.measurement.width_px, 95.0)

    def test_rotated_horizontal_labels_use_perpendicular_component(self) -> None:
        context = _context()
        engine = TickLabelEngine(context, label_rotation=30)
        tick = _tick(context, "abcd", 0.0)
        engine.update_tick_width([tick], 300.0, 45.0, "up")
        assert tick.text_element is not None
        self.assertEqual(tick.text_element.max_width, 80.0)


class MeasureTests(unittest.TestCase):
    def test_vertical_thickness_is_widest_label_plus_offset(self) -> None:
        context = _context()
        engine = TickLabelEngine(context)
        ticks = [_tick(context, "abcd", 0.0), _tick(context, "ab \n cdef", 50.0)]
        self.assertEqual(engine.measure_vertically_drawn_ticks(ticks, 200.0, 300.0), 45.0)

    def test_horizontal_thickness_counts_lines_and_is_capped(self) -> None:
        context = _context()
        engine = TickLabelEngine(context)
        ticks = [_tick(context, "abcd", 0.0), _tick(context, "ab\ncdef", 50.0)]
        self.assertEqual(engine.measure_horizontally_drawn_ticks(ticks, 300.0, 100.0), 27.0)
        self.assertEqual(engine.measure_horizontally_drawn_ticks(ticks, 300.0, 20.0), 20.0)

    def test_split_label_trims_lines(self) -> None:
        context = _context()
        lines = TickLabelEngine.split_label(context.create_text_element(" ab \ncd "))
        self.assertEqual([line.text for line in lines], ["ab", "cd"])
        self.assertEqual(TickLabelEngine.label_height(lines), 22.0)
        self.assertEqual(TickLabelEngine.label_height([]), 0.0)


class DrawAxisLineTests(unittest.TestCase):
    BOUNDS = Rect(left=0.0, top=100.0, width=200.0, height=30.0)

    def test_axis_line_edges(self) -> None:
        b = self.BOUNDS
        self.assertEqual(axis_line_points("up", b), (Point(0.0, 130.0), Point(200.0, 130.0)))
        self.assertEqual(axis_line_points("down", b), (Point(0.0, 100.0), Point(200.0, 100.0)))
        self.assertEqual(axis_line_points("right", b), (Point(0.0, 100.0), Point(0.0, 130.0)))
        self.assertEqual(axis_line_points("left", b), (Point(200.0, 100.0), Point(200.0, 130.0)))

    def test_axis_line_style_defaults_to_label_color(self) -> None:
        canvas = RecordingCanvas()
        TickLabelEngine(_context()).draw_axis_line(canvas, "down", self.BOUNDS)
        (line,) = canvas.lines
        self.assertEqual(line.points, (Point(0.0, 100.0), Point(200.0, 100.0)))
        self.assertEqual(line.stroke, DEFAULT_THEME.label_style.color)
        self.assertEqual(line.stroke_width, 1.0)
        self.assertIsNone(line.dash_pattern)

    def test_axis_line_style_is_honoured(self) -> None:
        canvas = RecordingCanvas()
        engine = TickLabelEngine(_context(), axis_line_style=LineStyle(color=(9, 9, 9, 255), stroke_width=2.0, dash_pattern=(2, 1)))
        engine.draw_axis_line(canvas, "left", self.BOUNDS)
        (line,) = canvas.lines
        self.assertEqual(line.stroke, (9, 9, 9, 255))
        self.assertEqual(line.stroke_width, 2.0)
        self.assertEqual(line.dash_pattern, (2, 1))


class DrawLabelTests(unittest.TestCase):
    HORIZONTAL = Rect(left=0.0, top=100.0, width=200.0, height=30.0)
    VERTICAL = Rect(left=0.0, top=0.0, width=60.0, height=200.0)

    def _draw(self, engine: TickLabelEngine, text: str, location: float, orientation: str, bounds: Rect, **flags: bool):
        canvas = RecordingCanvas()
        tick = _tick(engine.context, text, location)
        engine.draw_label(
            canvas,
            tick,
            orientation=orientation,  # type: ignore[arg-type]
            axis_bounds=bounds,
            is_first=flags.get("is_first", False),
            is_last=flags.get("is_last", False),
        )
        return canvas.texts

    def test_centered_label_below_axis(self) -> None:
        (text,) = self._draw(TickLabelEngine(_context()), "abcd", 50.0, "down", self.HORIZONTAL)
        self.assertEqual((text.x, text.y), (50.0, 105.0))
        self.assertIsNone(text.text_direction)
        self.assertEqual(text.rotation, 0.0)

    def test_centered_label_above_axis(self) -> None:
        (text,) = self._draw(TickLabelEngine(_context()), "abcd", 50.0, "up", self.HORIZONTAL)
        self.assertEqual(text.y, 115.0)

    def test_anchor_moves_label_off_the_tick(self) -> None:
        (after,) = self._draw(TickLabelEngine(_context(), label_anchor="after"), "abcd", 50.0, "down", self.HORIZONTAL)
        self.assertEqual((after.x, after.text_direction), (45.0, "ltr"))
        (before,) = self._draw(TickLabelEngine(_context(), label_anchor="before"), "abcd", 50.0, "down", self.HORIZONTAL)
        self.assertEqual((before.x, before.text_direction), (55.0, "rtl"))
        (rtl_after,) = self._draw(
            TickLabelEngine(_context(rtl=True), label_anchor="after"), "abcd", 50.0, "down", self.HORIZONTAL
        )
        self.assertEqual((rtl_after.x, rtl_after.text_direction), (55.0, "rtl"))

    def test_inside_anchor_keeps_end_labels_inside(self) -> None:
        engine = TickLabelEngine(_context(), label_anchor="inside")
        (first,) = self._draw(engine, "abcd", 50.0, "down", self.HORIZONTAL, is_first=True)
        (last,) = self._draw(engine, "abcd", 50.0, "down", self.HORIZONTAL, is_last=True)
        (middle,) = self._draw(engine, "abcd", 50.0, "down", self.HORIZONTAL)
        self.assertEqual(first.text_direction, "ltr")
        self.assertEqual(last.text_direction, "rtl")
        self.assertEqual(middle.x, 50.0)

    def test_vertical_axis_justification(self) -> None:
        (left_inside,) = self._draw(TickLabelEngine(_context()), "abcd", 100.0, "left", self.VERTICAL)
        self.assertEqual((left_inside.x, left_inside.y, left_inside.text_direction), (55.0, 95.0, "rtl"))
        (left_outside,) = self._draw(
            TickLabelEngine(_context(), label_justification="outside"), "abcd", 100.0, "left", self.VERTICAL
        )
        self.assertEqual((left_outside.x, left_outside.text_direction), (0.0, "ltr"))
        (right_inside,) = self._draw(TickLabelEngine(_context()), "abcd", 100.0, "right", self.VERTICAL)
        self.assertEqual((right_inside.x, right_inside.text_direction), (5.0, "ltr"))
        (right_outside,) = self._draw(
            TickLabelEngine(_context(), label_justification="outside"), "abcd", 100.0, "right", self.VERTICAL
        )
        self.assertEqual((right_outside.x, right_outside.text_direction), (60.0, "rtl"))

    def test_vertical_anchor_over_and_under(self) -> None:
        (over,) = self._draw(TickLabelEngine(_context(), label_anchor="after"), "abcd", 100.0, "left", self.VERTICAL)
        self.assertEqual(over.y, 85.0)
        (under,) = self._draw(TickLabelEngine(_context(), label_anchor="before"), "abcd", 100.0, "left", self.VERTICAL)
        self.assertEqual(under.y, 105.0)

    def test_multi_line_label_advances_per_line(self) -> None:
        below = self._draw(TickLabelEngine(_context()), "ab\ncd", 50.0, "down", self.HORIZONTAL)
        self.assertEqual([(t.text, t.y) for t in below], [("ab", 105.0), ("cd", 117.0)])
        above = self._draw(TickLabelEngine(_context()), "ab\ncd", 50.0, "up", self.HORIZONTAL)
        self.assertEqual([t.y for t in above], [103.0, 115.0])

    def test_label_rotation_is_passed_in_radians(self) -> None:
        (text,) = self._draw(TickLabelEngine(_context(), label_rotation=30), "abcd", 50.0, "down", self.HORIZONTAL)
        self.assertAlmostEqual(text.rotation, math.radians(30))


if __name__ == "__main__":
    unittest.main()
