from __future__ import annotations

from typing import TypeVar

from luvatrix_axis.canvas import ChartCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy.base import TickDrawStrategy, TickLabelEngine
from luvatrix_axis.geometry import AxisDirection, Point, Rect
from luvatrix_axis.style import LineStyle, with_opacity
from luvatrix_axis.tick import Tick


D = TypeVar("D")


class GridlineTickDrawStrategy(TickDrawStrategy[D]):
    """Each tick becomes a line across the whole draw area."""

    def __init__(
        self,
        context: ChartContext,
        *,
        tick_length: int | None = None,
        line_style: LineStyle | None = None,
        axis_line_style: LineStyle | None = None,
        **label_options,
    ) -> None:
        if tick_length is not None and tick_length < 0:
            raise ValueError("tick_length must be >= 0")
        engine = TickLabelEngine(
            context,
            axis_line_style=axis_line_style if axis_line_style is not None else line_style,
            **label_options,
        )
        super().__init__(engine)
        self.tick_length = 0 if tick_length is None else tick_length
        self._line_style = line_style

    @property
    def line_style(self) -> LineStyle:
        style = self._line_style
        return LineStyle(
            color=style.color if style is not None and style.color is not None else self.context.theme.tick_color,
            dash_pattern=style.dash_pattern if style is not None else None,
            stroke_width=style.stroke_width if style is not None else None,
        )

    def calculate_line_positions(
        self,
        tick: Tick[D],
        orientation: AxisDirection,
        axis_bounds: Rect,
        draw_area_bounds: Rect,
        *,
        collision: bool = False,
    ) -> tuple[Point, Point]:
        assert tick.location is not None
        location = tick.location
        if orientation == "up":
            return Point(location, axis_bounds.bottom - self.tick_length), Point(location, draw_area_bounds.bottom)
        if orientation == "down":
            return Point(location, draw_area_bounds.top + self.tick_length), Point(location, axis_bounds.top)
        outward = self.engine.placement(collision).anchor in ("after", "before")
        if orientation == "right":
            start_x = axis_bounds.right if outward else axis_bounds.left + self.tick_length
            return Point(start_x, location), Point(draw_area_bounds.left, location)
        start_x = axis_bounds.left if outward else axis_bounds.right
        return Point(start_x, location), Point(draw_area_bounds.right, location)

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
        start, end = self.calculate_line_positions(tick, orientation, axis_bounds, draw_area_bounds, collision=collision)
        style = self.line_style
        assert style.color is not None
        opacity = tick.text_element.opacity if tick.text_element is not None else 1.0
        canvas.draw_line(
            [start, end],
            stroke=with_opacity(style.color, opacity),
            stroke_width=style.stroke_width if style.stroke_width is not None else 1.0,
            dash_pattern=style.dash_pattern,
        )
        self.engine.draw_label(
            canvas,
            tick,
            orientation=orientation,
            axis_bounds=axis_bounds,
            is_first=is_first,
            is_last=is_last,
            collision=collision,
        )
