from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from luvatrix_axis.canvas import ChartCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy.base import TickDrawStrategy
from luvatrix_axis.draw_strategy.render_spec import RenderSpec, SmallTickRenderSpec
from luvatrix_axis.errors import AxisLayoutError
from luvatrix_axis.formatter import TickFormatter
from luvatrix_axis.geometry import AxisDirection, Rect, Size, is_vertical, validate_axis_direction
from luvatrix_axis.scale import Scale, ScaleOutputExtent
from luvatrix_axis.tick import Tick
from luvatrix_axis.tick_provider import TickHint, TickProvider


LOGGER = logging.getLogger(__name__)

D = TypeVar("D")


class Axis(Generic[D]):
    """Wires a scale, tick provider, formatter and draw strategy into one axis.

    Call `measure` to learn how thick the axis wants to be, `layout` once its
    bounds are known, then `paint`.
    """

    def __init__(
        self,
        *,
        scale: Scale[D],
        tick_provider: TickProvider[D],
        tick_formatter: TickFormatter[Any],
        direction: AxisDirection,
        context: ChartContext | None = None,
        render_spec: RenderSpec | None = None,
        reverse_output_range: bool = False,
        force_draw_axis_line: bool | None = None,
    ) -> None:
        self.context = context or ChartContext()
        self.scale = scale
        self.tick_provider = tick_provider
        self.direction = validate_axis_direction(direction)
        self.reverse_output_range = reverse_output_range
        self.force_draw_axis_line = force_draw_axis_line
        self.tick_hint: TickHint[D] | None = None
        self.has_tick_collision = False
        self._tick_formatter = tick_formatter
        self._formatter_cache: dict[Any, str] = {}
        self._render_spec = render_spec or SmallTickRenderSpec()
        self.draw_strategy: TickDrawStrategy[D] = self._render_spec.create_draw_strategy(self.context)
        self._provided_ticks: list[Tick[D]] = []
        self._ticks: list[Tick[D]] = []
        self._component_bounds: Rect | None = None
        self._draw_area_bounds: Rect | None = None

    @property
    def tick_formatter(self) -> TickFormatter[Any]:
        return self._tick_formatter

    @tick_formatter.setter
    def tick_formatter(self, formatter: TickFormatter[Any]) -> None:
        if formatter != self._tick_formatter:
            self._formatter_cache.clear()
        self._tick_formatter = formatter

    @property
    def render_spec(self) -> RenderSpec:
        return self._render_spec

    @render_spec.setter
    def render_spec(self, spec: RenderSpec) -> None:
        self._render_spec = spec
        self.draw_strategy = spec.create_draw_strategy(self.context)

    @property
    def is_vertical(self) -> bool:
        return is_vertical(self.direction)

    @property
    def draw_axis_line(self) -> bool:
        if self.force_draw_axis_line is not None:
            return self.force_draw_axis_line
        return self.draw_strategy.draws_axis_line_by_default

    @property
    def ticks(self) -> list[Tick[D]]:
        """Ticks that will be drawn by the next `paint`."""
        return list(self._ticks)

    @property
    def component_bounds(self) -> Rect | None:
        return self._component_bounds

    def measure(self, max_width: float, max_height: float) -> Size:
        if self.is_vertical:
            self.scale.range = ScaleOutputExtent(max_height, 0.0)
            self._update_provided_ticks()
            thickness = self.draw_strategy.measure_vertically_drawn_ticks(
                self._provided_ticks, max_width, max_height, collision=self.has_tick_collision
            )
        else:
            self.scale.range = ScaleOutputExtent(0.0, max_width)
            self._update_provided_ticks()
            thickness = self.draw_strategy.measure_horizontally_drawn_ticks(
                self._provided_ticks, max_width, max_height, collision=self.has_tick_collision
            )
        if self.draw_axis_line:
            thickness += self.draw_strategy.axis_line_width
        LOGGER.debug("axis %s measured %.1f px thick", self.direction, thickness)
        if self.is_vertical:
            return Size(thickness, max_height)
        return Size(max_width, thickness)

    def layout(self, component_bounds: Rect, draw_area_bounds: Rect) -> None:
        self._component_bounds = component_bounds
        self._draw_area_bounds = draw_area_bounds

        if self.is_vertical:
            start, end = component_bounds.bottom, component_bounds.top
        else:
            start, end = component_bounds.left, component_bounds.right
        if self.reverse_output_range:
            start, end = end, start
        self.scale.range = ScaleOutputExtent(start, end)

        if not self._has_valid_size:
            self._ticks = []
            return
        self._update_provided_ticks()
        self.draw_strategy.update_tick_width(
            self._provided_ticks,
            component_bounds.width,
            component_bounds.height,
            self.direction,
            collision=self.has_tick_collision,
        )
        self._ticks = [
            tick
            for tick in self._provided_ticks
            if tick.location is not None and self.scale.is_range_value_within_viewport(tick.location)
        ]

    def paint(self, canvas: ChartCanvas) -> None:
        if self._component_bounds is None or self._draw_area_bounds is None:
            raise AxisLayoutError("Axis.paint() called before layout()")
        if not self._has_valid_size:
            return

        tick_axis_bounds = self._component_bounds
        if self.draw_axis_line:
            self.draw_strategy.draw_axis_line(canvas, self.direction, self._component_bounds)
            line_width = self.draw_strategy.axis_line_width
            if self.direction == "up":
                tick_axis_bounds = tick_axis_bounds.shift(0.0, -line_width)
            elif self.direction == "down":
                tick_axis_bounds = tick_axis_bounds.shift(0.0, line_width)
            elif self.direction == "right":
                tick_axis_bounds = tick_axis_bounds.shift(line_width, 0.0)
            else:
                tick_axis_bounds = tick_axis_bounds.shift(-line_width, 0.0)

        last = len(self._ticks) - 1
        for i, tick in enumerate(self._ticks):
            self.draw_strategy.draw(
                canvas,
                tick,
                orientation=self.direction,
                axis_bounds=tick_axis_bounds,
                draw_area_bounds=self._draw_area_bounds,
                is_first=i == 0,
                is_last=i == last,
                collision=self.has_tick_collision,
            )

    @property
    def _has_valid_size(self) -> bool:
        bounds = self._component_bounds
        return bounds is not None and bounds.width > 0 and bounds.height > 0

    def _update_provided_ticks(self) -> None:
        self._provided_ticks = self.tick_provider.get_ticks(
            context=self.context,
            scale=self.scale,
            formatter=self._tick_formatter,
            formatter_cache=self._formatter_cache,
            draw_strategy=self.draw_strategy,
            orientation=self.direction,
            tick_hint=self.tick_hint,
        )
        if not self._provided_ticks:
            LOGGER.debug("tick provider returned no ticks for axis %s", self.direction)
        report = self.draw_strategy.collides(self._provided_ticks, self.direction)
        if report.ticks_collide and not self.has_tick_collision:
            LOGGER.debug("axis %s tick labels collide", self.direction)
        self.has_tick_collision = report.ticks_collide
