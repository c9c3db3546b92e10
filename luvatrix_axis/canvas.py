from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Protocol, Sequence

import numpy as np

from luvatrix_axis.geometry import Point, Rect, TextDirection
from luvatrix_axis.raster import draw_polyline, draw_text, fill_rect, new_canvas
from luvatrix_axis.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX
from luvatrix_axis.style import RGBA, LabelStyle, with_opacity
from luvatrix_axis.text import TextElement


class ChartCanvas(Protocol):
    """Drawing surface the axis paints onto."""

    def draw_line(
        self,
        points: Sequence[Point],
        *,
        stroke: RGBA,
        stroke_width: float = 1.0,
        dash_pattern: Sequence[int] | None = None,
    ) -> None:
        ...

    def draw_rect(
        self,
        rect: Rect,
        *,
        fill: RGBA | None = None,
        stroke: RGBA | None = None,
        stroke_width: float = 1.0,
    ) -> None:
        ...

    def draw_text(self, element: TextElement, x: float, y: float, *, rotation: float = 0.0) -> None:
        """Draw `element`; `rotation` is in radians, clockwise with y growing down.

        `x` is the left edge of ltr text, the right edge of rtl text and the
        center of text with no direction.
        """
        ...


@dataclass(frozen=True)
class LineCommand:
    points: tuple[Point, ...]
    stroke: RGBA
    stroke_width: float
    dash_pattern: tuple[int, ...] | None


@dataclass(frozen=True)
class RectCommand:
    rect: Rect
    fill: RGBA | None
    stroke: RGBA | None
    stroke_width: float


@dataclass(frozen=True)
class TextCommand:
    text: str
    x: float
    y: float
    rotation: float
    style: LabelStyle | None
    text_direction: TextDirection | None
    opacity: float


@dataclass
class RecordingCanvas:
    """Collects draw calls as immutable records instead of painting them."""

    commands: list[LineCommand | RectCommand | TextCommand] = field(default_factory=list)

    def draw_line(
        self,
        points: Sequence[Point],
        *,
        stroke: RGBA,
        stroke_width: float = 1.0,
        dash_pattern: Sequence[int] | None = None,
    ) -> None:
        self.commands.append(
            LineCommand(
                points=tuple(points),
                stroke=stroke,
                stroke_width=stroke_width,
                dash_pattern=tuple(dash_pattern) if dash_pattern is not None else None,
            )
        )

    def draw_rect(
        self,
        rect: Rect,
        *,
        fill: RGBA | None = None,
        stroke: RGBA | None = None,
        stroke_width: float = 1.0,
    ) -> None:
        self.commands.append(RectCommand(rect=rect, fill=fill, stroke=stroke, stroke_width=stroke_width))

    def draw_text(self, element: TextElement, x: float, y: float, *, rotation: float = 0.0) -> None:
        self.commands.append(
            TextCommand(
                text=element.display_text,
                x=x,
                y=y,
                rotation=rotation,
                style=element.style,
                text_direction=element.text_direction,
                opacity=element.opacity,
            )
        )

    @property
    def lines(self) -> list[LineCommand]:
        return [c for c in self.commands if isinstance(c, LineCommand)]

    @property
    def rects(self) -> list[RectCommand]:
        return [c for c in self.commands if isinstance(c, RectCommand)]

    @property
    def texts(self) -> list[TextCommand]:
        return [c for c in self.commands if isinstance(c, TextCommand)]

    def clear(self) -> None:
        self.commands.clear()


class RasterChartCanvas:
    """Paints onto an RGBA uint8 array of shape (height, width, 4)."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: RGBA = (0, 0, 0, 0),
        default_text_color: RGBA = (255, 255, 255, 255),
    ) -> None:
        self.pixels = new_canvas(width, height, color=background)
        self.default_text_color = default_text_color

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def draw_line(
        self,
        points: Sequence[Point],
        *,
        stroke: RGBA,
        stroke_width: float = 1.0,
        dash_pattern: Sequence[int] | None = None,
    ) -> None:
        if len(points) < 2 or stroke_width <= 0:
            return
        xs = np.asarray([round(p.x) for p in points], dtype=np.int64)
        ys = np.asarray([round(p.y) for p in points], dtype=np.int64)
        draw_polyline(
            self.pixels,
            xs,
            ys,
            color=stroke,
            width=max(1, int(round(stroke_width))),
            dash_pattern=dash_pattern,
        )

    def draw_rect(
        self,
        rect: Rect,
        *,
        fill: RGBA | None = None,
        stroke: RGBA | None = None,
        stroke_width: float = 1.0,
    ) -> None:
        x0 = int(round(rect.left))
        y0 = int(round(rect.top))
        x1 = int(round(rect.right)) - 1
        y1 = int(round(rect.bottom)) - 1
        if x1 < x0 or y1 < y0:
            return
        if fill is not None:
            fill_rect(self.pixels, x0, y0, x1, y1, fill)
        if stroke is not None:
            outline = [Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1), Point(x0, y0)]
            self.draw_line(outline, stroke=stroke, stroke_width=stroke_width)

    def draw_text(self, element: TextElement, x: float, y: float, *, rotation: float = 0.0) -> None:
        text = element.display_text
        if not text:
            return
        style = element.style or LabelStyle()
        color = with_opacity(style.color or self.default_text_color, element.opacity)
        width = element.measurement.width_px
        if rotation != 0:
            if element.text_direction == "rtl":
                y += width
        elif element.text_direction == "rtl":
            x -= math.trunc(width)
        elif element.text_direction is None:
            x -= math.trunc(width / 2.0)
        draw_text(
            self.pixels,
            x,
            y,
            text,
            color,
            font_family=style.font_family or DEFAULT_FONT_FAMILY,
            font_size_px=style.font_size_px or DEFAULT_FONT_SIZE_PX,
            rotate_deg=math.degrees(rotation),
        )
