from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from luvatrix_axis.geometry import TextDirection
from luvatrix_axis.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, font_metrics, text_size
from luvatrix_axis.style import LabelStyle


MaxWidthStrategy = Literal["ellipsize", "truncate"]

ELLIPSIS = "…"

# Fonts report a line box noticeably taller than the drawn glyphs; labels line up
# with ticks better when only this share of it is treated as the label height.
DRAWN_HEIGHT_RATIO = 0.70


@dataclass(frozen=True)
class TextMeasurement:
    width_px: float
    height_px: float
    baseline_px: float


class TextMeasurer(Protocol):
    """Measures a single line of text in a given style."""

    def measure_text(self, text: str, style: LabelStyle | None) -> TextMeasurement:
        ...


@dataclass(frozen=True)
class MonospaceTextMeasurer:
    """Deterministic estimate for monospace faces: every glyph has the same advance."""

    char_width_ratio: float = 0.6
    height_ratio: float = 1.0
    default_font_size_px: float = DEFAULT_FONT_SIZE_PX

    def __post_init__(self) -> None:
        if self.char_width_ratio <= 0:
            raise ValueError("char_width_ratio must be > 0")
        if self.height_ratio <= 0:
            raise ValueError("height_ratio must be > 0")
        if self.default_font_size_px <= 0:
            raise ValueError("default_font_size_px must be > 0")

    def measure_text(self, text: str, style: LabelStyle | None) -> TextMeasurement:
        size = self.default_font_size_px
        if style is not None and style.font_size_px is not None:
            size = style.font_size_px
        height = size * self.height_ratio
        return TextMeasurement(
            width_px=len(text) * size * self.char_width_ratio,
            height_px=height,
            baseline_px=height * 0.8,
        )


@dataclass(frozen=True)
class PillowTextMeasurer:
    """Measures text with the same fonts the raster canvas draws with."""

    default_font_family: str = DEFAULT_FONT_FAMILY
    default_font_size_px: float = DEFAULT_FONT_SIZE_PX

    def measure_text(self, text: str, style: LabelStyle | None) -> TextMeasurement:
        family = self.default_font_family
        size = self.default_font_size_px
        if style is not None:
            family = style.font_family or family
            size = style.font_size_px or size
        width, _ = text_size(text, font_family=family, font_size_px=size)
        ascent, descent = font_metrics(font_family=family, font_size_px=size)
        return TextMeasurement(
            width_px=float(width),
            height_px=float(ascent + descent) * DRAWN_HEIGHT_RATIO,
            baseline_px=float(ascent),
        )


class TextElement:
    """A label string with mutable layout settings and a lazily computed measurement.

    Any setter that changes a value drops the cached measurement, so the next
    read of `measurement` reflects the new style, width limit or direction.
    """

    def __init__(self, text: str, *, measurer: TextMeasurer, style: LabelStyle | None = None) -> None:
        self._text = text
        self._measurer = measurer
        self._style = style
        self._max_width: float | None = None
        self._max_width_strategy: MaxWidthStrategy | None = None
        self._text_direction: TextDirection | None = None
        self._opacity: float | None = None
        self._measurement: TextMeasurement | None = None
        self._display_text: str | None = None

    def __repr__(self) -> str:
        return f"TextElement({self._text!r}, style={self._style!r}, max_width={self._max_width!r})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def measurer(self) -> TextMeasurer:
        return self._measurer

    @property
    def style(self) -> LabelStyle | None:
        return self._style

    @style.setter
    def style(self, value: LabelStyle | None) -> None:
        if self._style == value:
            return
        self._style = value
        self._invalidate()

    @property
    def max_width(self) -> float | None:
        return self._max_width

    @max_width.setter
    def max_width(self, value: float | None) -> None:
        if self._max_width == value:
            return
        self._max_width = value
        self._invalidate()

    @property
    def max_width_strategy(self) -> MaxWidthStrategy | None:
        return self._max_width_strategy

    @max_width_strategy.setter
    def max_width_strategy(self, value: MaxWidthStrategy | None) -> None:
        if value is not None and value not in ("ellipsize", "truncate"):
            raise ValueError(f"unknown max width strategy: {value!r}")
        if self._max_width_strategy == value:
            return
        self._max_width_strategy = value
        self._invalidate()

    @property
    def text_direction(self) -> TextDirection | None:
        return self._text_direction

    @text_direction.setter
    def text_direction(self, value: TextDirection | None) -> None:
        if value is not None and value not in ("ltr", "rtl"):
            raise ValueError(f"unknown text direction: {value!r}")
        if self._text_direction == value:
            return
        self._text_direction = value
        self._invalidate()

    @property
    def opacity(self) -> float:
        return 1.0 if self._opacity is None else self._opacity

    @opacity.setter
    def opacity(self, value: float | None) -> None:
        if value is not None and (value < 0.0 or value > 1.0):
            raise ValueError("opacity must be in [0, 1]")
        if self._opacity == value:
            return
        self._opacity = value
        self._invalidate()

    @property
    def measurement(self) -> TextMeasurement:
        if self._measurement is None:
            self._refresh()
        assert self._measurement is not None
        return self._measurement

    @property
    def display_text(self) -> str:
        """The text as it will be drawn, after applying the max width strategy."""
        if self._display_text is None:
            self._refresh()
        assert self._display_text is not None
        return self._display_text

    def with_text(self, text: str) -> "TextElement":
        out = TextElement(text, measurer=self._measurer, style=self._style)
        out._max_width = self._max_width
        out._max_width_strategy = self._max_width_strategy
        out._text_direction = self._text_direction
        out._opacity = self._opacity
        return out

    @staticmethod
    def element_settings_same(a: "TextElement", b: "TextElement") -> bool:
        # Compares settings only; reading `measurement` here would force a layout.
        return (
            a.style == b.style
            and a.max_width == b.max_width
            and a.max_width_strategy == b.max_width_strategy
            and a.text == b.text
            and a.text_direction == b.text_direction
        )

    def _invalidate(self) -> None:
        self._measurement = None
        self._display_text = None

    def _refresh(self) -> None:
        shown = self._fit_text()
        self._display_text = shown
        self._measurement = self._measurer.measure_text(shown, self._style)

    def _fit_text(self) -> str:
        limit = self._max_width
        strategy = self._max_width_strategy
        if limit is None or strategy is None:
            return self._text
        if self._measurer.measure_text(self._text, self._style).width_px <= limit:
            return self._text
        suffix = ELLIPSIS if strategy == "ellipsize" else ""
        # Longest prefix that still fits together with the suffix.
        lo, hi = 0, len(self._text)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            candidate = self._text[:mid].rstrip() + suffix
            if self._measurer.measure_text(candidate, self._style).width_px <= limit:
                lo = mid
            else:
                hi = mid - 1
        if lo == 0:
            if suffix and self._measurer.measure_text(suffix, self._style).width_px <= limit:
                return suffix
            return ""
        return self._text[:lo].rstrip() + suffix
