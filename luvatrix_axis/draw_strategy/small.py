from __future__ import annotations

from typing import TypeVar

from luvatrix_axis.canvas import ChartCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy.base import TickDrawStrategy, TickLabelEngine
from luvatrix_axis.geometry import AxisDirection, Point, Rect
from luvatrix_axis.style import LineStyle
from luvatrix_axis.tick import Tick


D = TypeVar("D")


class SmallTickDrawStrategy(TickDrawStrategy[D]):
    """A short tick perpendicular to the axis line, then the label."""

    draws_axis_line_by_default = True

    def __init__(
        self,
        context: ChartContext,
        *,
        tick_length: int | None = None,
        line_style: LineStyle | None = None,
        **label_options,
    ) -> None:
        if tick_length is not None and tick_length < 0:
            raise ValueError("tick_length must be >= 0")
        super().__init__(TickLabelEngine(context, **label_options))
        self._tick_length = tick_length
        self._line_style = line_style

    @property
    def tick_length(self) -> int:
        if self._tick_length is None:
            return self.context.theme.tick_length
        return self._tick_length

    @property
    def line_style(self) -> LineStyle:
        return self.context.theme.create_tick_line_style(self._line_style)

    def calculate_tick_positions(
        self,
        tick: Tick[D],
        orientation: AxisDirection,
        axis_bounds: Rect,
        tick_length: int | None = None,
    ) -> tuple[Point, Point]:
        assert tick.location is not None
        location = tick.location
        length = self.tick_length if tick_length is None else tick_length
        if orientation == "up":
            return Point(location, axis_bounds.bottom - length), Point(location, axis_bounds.bottom)
        if orientation == "down":
            return Point(location, axis_bounds.top), Point(location, axis_bounds.top + length)
        if orientation == "right":
            return Point(axis_bounds.left, location), Point(axis_bounds.left + length, location)
        return Point(axis_bounds.right - length, location), Point(axis_bounds.right, location)

    def draw_tick_line(self, canvas: ChartCanvas, start: Point, end: Point) -> None:
        style = self.line_style
        assert style.color is not None
        canvas.draw_line(
            [start, end],
            stroke=style.color,
            stroke_width=style.stroke_width if style.stroke_width is not None else 1.0,
            dash_pattern=style.dash_pattern,
        )

    def draw(
        self,
        canvas: ChartCanvas,
        tick: Tick[D],
        *,
        orientation: AxisDirection,
        axis_bounds: Rect,
        draw_area_bounds: Rect,
        is_first: bool,
        is_last: bool,
        collision: bool = False,
    ) -> None:
        start, end = self.calculate_tick_positions(tick, orientation, axis_bounds)
        self.draw_tick_line(canvas, start, end)
        self.engine.draw_label(
            canvas,
            tick,
            orientation=orientation,
            axis_bounds=axis_bounds,
            is_first=is_first,
            is_last=is_last,
            collision=collision,
        )
