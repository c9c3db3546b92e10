from __future__ import annotations

from typing import Sequence, TypeVar

from luvatrix_axis.canvas import ChartCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy.base import TickDrawStrategy, TickLabelEngine, axis_line_points
from luvatrix_axis.geometry import AxisDirection, Rect
from luvatrix_axis.style import RGBA, LabelStyle, LineStyle
from luvatrix_axis.tick import CollisionReport, Tick


D = TypeVar("D")

NONE_AXIS_LINE_COLOR: RGBA = (0x60, 0x60, 0x60, 255)


class NoneDrawStrategy(TickDrawStrategy[D]):
    """Draws no ticks and takes up no space; only the axis line, when asked."""

    def __init__(self, context: ChartContext, *, axis_line_style: LineStyle | None = None) -> None:
        super().__init__(TickLabelEngine(context))
        style = axis_line_style or LineStyle()
        self.axis_line_style = LineStyle(
            color=style.color if style.color is not None else NONE_AXIS_LINE_COLOR,
            dash_pattern=style.dash_pattern,
            stroke_width=style.stroke_width,
        )
        self.none_label_style = LabelStyle()

    def decorate_ticks(self, ticks: Sequence[Tick[D]]) -> None:
        for tick in ticks:
            if tick.text_element is not None:
                tick.text_element.style = self.none_label_style

    def update_tick_width(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        orientation: AxisDirection,
        *,
        collision: bool = False,
    ) -> None:
        return None

    def collides(self, ticks: Sequence[Tick[D]] | None, orientation: AxisDirection | None) -> CollisionReport[D]:
        return CollisionReport(ticks_collide=False, ticks=ticks)

    def measure_vertically_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        return 0.0

    def measure_horizontally_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        return 0.0

    @property
    def axis_line_width(self) -> float:
        width = self.axis_line_style.stroke_width
        return 1.0 if width is None else float(width)

    def draw_axis_line(self, canvas: ChartCanvas, orientation: AxisDirection, axis_bounds: Rect) -> None:
        start, end = axis_line_points(orientation, axis_bounds)
        assert self.axis_line_style.color is not None
        canvas.draw_line(
            [start, end],
            stroke=self.axis_line_style.color,
            stroke_width=self.axis_line_width,
            dash_pattern=self.axis_line_style.dash_pattern,
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
        return None
