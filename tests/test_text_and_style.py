from __future__ import annotations

import unittest

from luvatrix_axis.context import ChartContext
from luvatrix_axis.geometry import Rect, validate_axis_direction
from luvatrix_axis.style import (
    DEFAULT_THEME,
    LabelStyle,
    LineStyle,
    coerce_color,
    parse_hex_color,
    validate_chart_theme,
    with_opacity,
)
from luvatrix_axis.text import MonospaceTextMeasurer, TextElement, TextMeasurement


class CountingMeasurer:
    def __init__(self) -> None:
        self.calls = 0
        self._inner = MonospaceTextMeasurer(char_width_ratio=1.0, default_font_size_px=10.0)

    def measure_text(self, text: str, style: LabelStyle | None) -> TextMeasurement:
        self.calls += 1
        return self._inner.measure_text(text, style)


class TextElementTests(unittest.TestCase):
    def test_measurement_is_cached_until_a_setting_changes(self) -> None:
        measurer = CountingMeasurer()
        element = TextElement("abcd", measurer=measurer)
        self.assertEqual(element.measurement.width_px, 40.0)
        element.measurement
        self.assertEqual(measurer.calls, 1)

        element.style = None
        element.text_direction = None
        element.measurement
        self.assertEqual(measurer.calls, 1)

        element.style = LabelStyle(font_size_px=20.0)
        self.assertEqual(element.measurement.width_px, 80.0)
        self.assertEqual(element.measurement.height_px, 20.0)
        self.assertEqual(measurer.calls, 2)

    def test_max_width_strategies(self) -> None:
        element = TextElement("abcdefghij", measurer=MonospaceTextMeasurer(char_width_ratio=1.0, default_font_size_px=10.0))
        element.max_width = 45.0
        element.max_width_strategy = "ellipsize"
        self.assertEqual(element.display_text, "abc…")
        self.assertEqual(element.measurement.width_px, 40.0)

        element.max_width_strategy = "truncate"
        self.assertEqual(element.display_text, "abcd")

        element.max_width_strategy = "ellipsize"
        element.max_width = 10.0
        self.assertEqual(element.display_text, "…")
        element.max_width = 5.0
        self.assertEqual(element.display_text, "")

        element.max_width = None
        self.assertEqual(element.display_text, "abcdefghij")

    def test_text_that_fits_is_untouched(self) -> None:
        element = TextElement("ab", measurer=MonospaceTextMeasurer(char_width_ratio=1.0, default_font_size_px=10.0))
        element.max_width = 20.0
        element.max_width_strategy = "ellipsize"
        self.assertEqual(element.display_text, "ab")

    def test_setters_validate(self) -> None:
        element = TextElement("a", measurer=MonospaceTextMeasurer())
        with self.assertRaises(ValueError):
            element.max_width_strategy = "wrap"  # type: ignore[assignment]
        with self.assertRaises(ValueError):
            element.text_direction = "up"  # type: ignore[assignment]
        with self.assertRaises(ValueError):
            element.opacity = 1.5
        self.assertEqual(element.opacity, 1.0)

    def test_with_text_copies_settings(self) -> None:
        element = TextElement("ab\ncd", measurer=MonospaceTextMeasurer(), style=LabelStyle(font_size_px=9.0))
        element.max_width = 30.0
        element.max_width_strategy = "truncate"
        element.text_direction = "rtl"
        element.opacity = 0.25
        copy = element.with_text("ab")
        self.assertEqual(copy.text, "ab")
        self.assertEqual(copy.style, element.style)
        self.assertEqual(copy.max_width, 30.0)
        self.assertEqual(copy.max_width_strategy, "truncate")
        self.assertEqual(copy.text_direction, "rtl")
        self.assertEqual(copy.opacity, 0.25)
        self.assertTrue(TextElement.element_settings_same(copy, element.with_text("ab")))
        self.assertFalse(TextElement.element_settings_same(copy, element))

    def test_context_creates_elements_with_its_measurer(self) -> None:
        measurer = MonospaceTextMeasurer(char_width_ratio=0.5, default_font_size_px=10.0)
        element = ChartContext(text_measurer=measurer).create_text_element("abcd")
        self.assertIs(element.measurer, measurer)
        self.assertEqual(element.measurement.width_px, 20.0)

    def test_monospace_measurer_validates(self) -> None:
        with self.assertRaises(ValueError):
            MonospaceTextMeasurer(char_width_ratio=0.0)
        with self.assertRaises(ValueError):
            MonospaceTextMeasurer(default_font_size_px=-1.0)


class StyleTests(unittest.TestCase):
    def test_label_style_merge_and_fill_missing(self) -> None:
        base = LabelStyle(color=(1, 1, 1, 255), font_size_px=12.0)
        override = LabelStyle(font_size_px=20.0)
        self.assertEqual(base.merge(override), LabelStyle(color=(1, 1, 1, 255), font_size_px=20.0))
        self.assertEqual(override.fill_missing(base), LabelStyle(color=(1, 1, 1, 255), font_size_px=20.0))
        self.assertIs(base.merge(None), base)

    def test_style_validation(self) -> None:
        with self.assertRaises(ValueError):
            LabelStyle(font_size_px=0.0)
        with self.assertRaises(ValueError):
            LabelStyle(font_weight=1001)
        with self.assertRaises(ValueError):
            LineStyle(stroke_width=-1.0)
        with self.assertRaises(ValueError):
            LineStyle(dash_pattern=(2, 0))

    def test_colors(self) -> None:
        self.assertEqual(parse_hex_color("#ff000080"), (255, 0, 0, 128))
        self.assertEqual(parse_hex_color("#00ff00"), (0, 255, 0, 255))
        with self.assertRaises(ValueError):
            parse_hex_color("#fff")
        self.assertEqual(coerce_color([1, 2, 3]), (1, 2, 3, 255))
        with self.assertRaises(ValueError):
            coerce_color((300, 0, 0))
        self.assertEqual(with_opacity((10, 20, 30, 200), 0.5), (10, 20, 30, 100))
        self.assertEqual(with_opacity((10, 20, 30, 200), 2.0), (10, 20, 30, 200))

    def test_tick_line_style_defaults(self) -> None:
        style = DEFAULT_THEME.create_tick_line_style(None)
        self.assertEqual(style.color, DEFAULT_THEME.label_style.color)
        self.assertEqual(style.stroke_width, 1.0)
        self.assertIsNone(style.dash_pattern)


class ThemeValidationTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(validate_chart_theme(), DEFAULT_THEME)

    def test_overrides_are_coerced(self) -> None:
        theme = validate_chart_theme({"tick_color": "#000000", "tick_length": 6, "label_style": {"font_size_px": 20.0}})
        self.assertEqual(theme.tick_color, (0, 0, 0, 255))
        self.assertEqual(theme.tick_length, 6)
        self.assertEqual(theme.label_style.font_size_px, 20.0)
        self.assertEqual(theme.label_style.font_family, DEFAULT_THEME.label_style.font_family)

    def test_invalid_tokens(self) -> None:
        for overrides in (
            {"unknown": 1},
            {"tick_length": -1},
            {"tick_length": True},
            {"range_band_size": 2.0},
            {"label_style": {"font_stretch": 1}},
            {"label_style": "big"},
            {"line_color": "blue"},
        ):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    validate_chart_theme(overrides)


class GeometryTests(unittest.TestCase):
    def test_rect(self) -> None:
        rect = Rect.from_ltrb(10.0, 20.0, 40.0, 25.0)
        self.assertEqual((rect.width, rect.height, rect.right, rect.bottom), (30.0, 5.0, 40.0, 25.0))
        self.assertEqual(rect.shift(1.0, -1.0), Rect(left=11.0, top=19.0, width=30.0, height=5.0))
        self.assertTrue(rect.contains(40.0, 25.0))
        with self.assertRaises(ValueError):
            Rect(left=0.0, top=0.0, width=-1.0, height=0.0)

    def test_axis_direction(self) -> None:
        self.assertEqual(validate_axis_direction("left"), "left")
        with self.assertRaises(ValueError):
            validate_axis_direction("sideways")


if __name__ == "__main__":
    unittest.main()
