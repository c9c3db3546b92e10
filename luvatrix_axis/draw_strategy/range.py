from __future__ import annotations

from typing import Sequence, TypeVar

from luvatrix_axis.canvas import ChartCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy.base import MULTI_LINE_LABEL_PADDING, TickDrawStrategy
from luvatrix_axis.draw_strategy.small import SmallTickDrawStrategy
from luvatrix_axis.geometry import AxisDirection, Rect, TickLabelAnchor
from luvatrix_axis.style import LabelStyle, LineStyle
from luvatrix_axis.tick import RangeTick, Tick


D = TypeVar("D")

DEFAULT_RANGE_LABEL_STYLE = LabelStyle(font_size_px=9.0)
DEFAULT_LABEL_OFFSET_FROM_AXIS = 2.0
DEFAULT_LABEL_OFFSET_FROM_TICK = -4.0


class RangeTickDrawStrategy(TickDrawStrategy[D]):
    """Shaded bands with boundary ticks for `RangeTick`s.

    Plain ticks in the same list are drawn by the held small tick strategy, so
    range and point ticks can share one axis.
    """

    draws_axis_line_by_default = True

    def __init__(
        self,
        context: ChartContext,
        *,
        tick_length: int | None = None,
        line_style: LineStyle | None = None,
        range_tick_length: int | None = None,
        range_shade_height: float | None = None,
        range_shade_offset_from_axis: float | None = None,
        range_tick_offset: float | None = None,
        range_label_style: LabelStyle | None = None,
        range_shade_style: LineStyle | None = None,
        label_style: LabelStyle | None = None,
        label_anchor: TickLabelAnchor | None = None,
        label_offset_from_axis: float | None = None,
        label_offset_from_tick: float | None = None,
        **label_options,
    ) -> None:
        self.small = SmallTickDrawStrategy(
            context,
            tick_length=tick_length,
            line_style=line_style,
            label_style=label_style if label_style is not None else DEFAULT_RANGE_LABEL_STYLE,
            label_anchor=label_anchor or "after",
            label_offset_from_axis=(
                DEFAULT_LABEL_OFFSET_FROM_AXIS if label_offset_from_axis is None else label_offset_from_axis
            ),
            label_offset_from_tick=(
                DEFAULT_LABEL_OFFSET_FROM_TICK if label_offset_from_tick is None else label_offset_from_tick
            ),
            **label_options,
        )
        super().__init__(self.small.engine)
        if range_tick_length is not None and range_tick_length < 0:
            raise ValueError("range_tick_length must be >= 0")
        if range_shade_height is not None and range_shade_height <= 1:
            raise ValueError("range_shade_height must be > 1")
        self.range_tick_length = 24 if range_tick_length is None else range_tick_length
        self.range_shade_height = 12.0 if range_shade_height is None else float(range_shade_height)
        self.range_shade_offset_from_axis = 12.0 if range_shade_offset_from_axis is None else float(range_shade_offset_from_axis)
        self.range_tick_offset = 12.0 if range_tick_offset is None else float(range_tick_offset)
        self._range_label_style = range_label_style
        self._range_shade_style = range_shade_style

    @property
    def range_shade_style(self) -> LineStyle:
        return self.context.theme.create_tick_line_style(self._range_shade_style)

    @property
    def range_label_style(self) -> LabelStyle:
        if self._range_label_style is not None:
            return self._range_label_style
        base = self.engine.label_style
        return base.merge(
            LabelStyle(
                color=base.color or self.context.theme.tick_color,
                font_size_px=self.range_shade_height - 1.0,
            )
        )

    def measure_vertically_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        engine = self.engine
        placement = engine.placement(collision)
        widest = 0.0
        for tick in ticks:
            if tick.text_element is None:
                continue
            lines = engine.split_label(tick.text_element)
            label = (
                engine.calculate_width_for_rotated_label(placement.rotation, engine.label_height(lines), engine.label_width(lines))
                + placement.offset_from_axis
            )
            widest = max(widest, label)
            if isinstance(tick, RangeTick):
                widest = max(widest, placement.offset_from_axis + self.range_shade_height)
        return float(round(widest))

    def measure_horizontally_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        engine = self.engine
        placement = engine.placement(collision)
        tallest = 0.0
        for tick in ticks:
            if tick.text_element is None:
                continue
            lines = engine.split_label(tick.text_element)
            label = engine.calculate_height_for_rotated_label(
                placement.rotation, engine.label_height(lines), engine.label_width(lines)
            )
            if isinstance(tick, RangeTick):
                tallest = max(
                    tallest,
                    label + self.range_shade_offset_from_axis,
                    self.range_shade_offset_from_axis + self.range_shade_height,
                )
            else:
                tallest = max(tallest, label + placement.offset_from_axis)
        return min(float(max_height), float(round(tallest)))

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
        if isinstance(tick, RangeTick):
            self.draw_range_shade_and_label(canvas, tick, orientation=orientation, axis_bounds=axis_bounds, is_last=is_last)
            return
        self.small.draw(
            canvas,
            tick,
            orientation=orientation,
            axis_bounds=axis_bounds,
            draw_area_bounds=draw_area_bounds,
            is_first=is_first,
            is_last=is_last,
            collision=collision,
        )

    def range_shade_rect(
        self, tick: RangeTick[D], orientation: AxisDirection, axis_bounds: Rect, *, is_last: bool
    ) -> tuple[Rect, tuple[Tick[D], Tick[D]]]:
        start_tick: Tick[D] = Tick(value=tick.range_start_value, location=tick.range_start_location - self.range_tick_offset)
        # The last band reaches past its end value to close the axis.
        end_location = (
            tick.range_end_location + self.range_tick_offset if is_last else tick.range_end_location - self.range_tick_offset
        )
        end_tick: Tick[D] = Tick(value=tick.range_end_value, location=end_location)

        start, _ = self.small.calculate_tick_positions(start_tick, orientation, axis_bounds, self.range_tick_length)
        end, _ = self.small.calculate_tick_positions(end_tick, orientation, axis_bounds, self.range_tick_length)
        if orientation in ("up", "down"):
            shade = Rect(
                left=min(start.x, end.x),
                top=start.y + self.range_shade_offset_from_axis,
                width=abs(end.x - start.x),
                height=self.range_shade_height,
            )
        else:
            top = min(start.y, end.y)
            if orientation == "right":
                left = axis_bounds.left + self.range_shade_offset_from_axis
            else:
                left = axis_bounds.right - self.range_shade_offset_from_axis - self.range_shade_height
            shade = Rect(left=left, top=top, width=self.range_shade_height, height=abs(end.y - start.y))
        return shade, (start_tick, end_tick)

    def draw_range_shade_and_label(
        self,
        canvas: ChartCanvas,
        tick: RangeTick[D],
        *,
        orientation: AxisDirection,
        axis_bounds: Rect,
        is_last: bool,
    ) -> None:
        shade, (start_tick, end_tick) = self.range_shade_rect(tick, orientation, axis_bounds, is_last=is_last)
        shade_style = self.range_shade_style
        assert shade_style.color is not None
        canvas.draw_rect(
            shade,
            fill=shade_style.color,
            stroke=shade_style.color,
            stroke_width=shade_style.stroke_width if shade_style.stroke_width is not None else 1.0,
        )
        for boundary in (start_tick, end_tick):
            a, b = self.small.calculate_tick_positions(boundary, orientation, axis_bounds, self.range_tick_length)
            self.small.draw_tick_line(canvas, a, b)

        if tick.text_element is None:
            return
        tick.text_element.style = self.range_label_style
        lines = self.engine.split_label(tick.text_element)
        label_width = self.engine.label_width(lines)
        label_height = self.engine.label_height(lines)
        start, _ = self.small.calculate_tick_positions(start_tick, orientation, axis_bounds, self.range_tick_length)

        multi_line_offset = 0.0
        for line in lines:
            if orientation in ("up", "down"):
                line.text_direction = "ltr"
                y = float(int(start.y) + self.range_shade_offset_from_axis - 1)
                x = float(round(shade.left + (shade.width - label_width) / 2.0))
            elif orientation == "right":
                line.text_direction = "ltr"
                x = shade.left
                y = float(round(shade.top + (shade.height - label_height) / 2.0))
            else:
                line.text_direction = "rtl"
                x = shade.right
                y = float(round(shade.top + (shade.height - label_height) / 2.0))
            canvas.draw_text(line, x, y + multi_line_offset)
            multi_line_offset += MULTI_LINE_LABEL_PADDING + round(line.measurement.height_px)
