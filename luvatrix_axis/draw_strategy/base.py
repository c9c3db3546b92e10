from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import math
from typing import Generic, Literal, Sequence, TypeVar

from luvatrix_axis.canvas import ChartCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.geometry import (
    TICK_LABEL_ANCHORS,
    TICK_LABEL_JUSTIFICATIONS,
    AxisDirection,
    Point,
    Rect,
    TextDirection,
    TickLabelAnchor,
    TickLabelJustification,
    is_vertical,
)
from luvatrix_axis.style import LabelStyle, LineStyle
from luvatrix_axis.text import TextElement
from luvatrix_axis.tick import CollisionReport, Tick


D = TypeVar("D")

VerticalDirection = Literal["over", "center", "under"]

LABEL_SPLIT_PATTERN = "\n"
MULTI_LINE_LABEL_PADDING = 2.0


@dataclass(frozen=True)
class LabelPlacement:
    """Where labels go for one draw pass."""

    anchor: TickLabelAnchor
    offset_from_axis: float
    offset_from_tick: float
    rotation: float


def normalize_horizontal_anchor(
    anchor: TickLabelAnchor, is_rtl: bool, is_first: bool, is_last: bool
) -> TextDirection | None:
    """Reading direction a label grows in from its tick; None means centered."""
    if anchor == "before":
        return "ltr" if is_rtl else "rtl"
    if anchor == "after":
        return "rtl" if is_rtl else "ltr"
    if anchor == "inside":
        if is_first:
            return "ltr"
        if is_last:
            return "rtl"
        return None
    return None


def normalize_vertical_anchor(anchor: TickLabelAnchor, is_first: bool, is_last: bool) -> VerticalDirection:
    if anchor == "before":
        return "under"
    if anchor == "after":
        return "over"
    if anchor == "inside":
        if is_first:
            return "over"
        if is_last:
            return "under"
        return "center"
    return "center"


def axis_line_points(orientation: AxisDirection, axis_bounds: Rect) -> tuple[Point, Point]:
    """The edge of `axis_bounds` that touches the draw area."""
    if orientation == "up":
        return axis_bounds.bottom_left, axis_bounds.bottom_right
    if orientation == "down":
        return axis_bounds.top_left, axis_bounds.top_right
    if orientation == "right":
        return axis_bounds.top_left, axis_bounds.bottom_left
    return axis_bounds.top_right, axis_bounds.bottom_right


class TickLabelEngine(Generic[D]):
    """Label geometry shared by every draw strategy.

    Holds only the configuration captured at construction. All per-tick
    results are written onto the `Tick` and `TextElement` objects passed in,
    so running the same calls twice over the same ticks gives the same output.
    """

    def __init__(
        self,
        context: ChartContext,
        *,
        label_style: LabelStyle | None = None,
        axis_line_style: LineStyle | None = None,
        label_anchor: TickLabelAnchor | None = None,
        label_justification: TickLabelJustification | None = None,
        label_offset_from_axis: float | None = None,
        label_collision_offset_from_axis: float | None = None,
        label_offset_from_tick: float | None = None,
        label_collision_offset_from_tick: float | None = None,
        minimum_padding_between_labels: float | None = None,
        label_rotation: float | None = None,
        label_collision_rotation: float | None = None,
    ) -> None:
        anchor = label_anchor or "centered"
        justification = label_justification or "inside"
        if anchor not in TICK_LABEL_ANCHORS:
            raise ValueError(f"unknown tick label anchor: {anchor!r}")
        if justification not in TICK_LABEL_JUSTIFICATIONS:
            raise ValueError(f"unknown tick label justification: {justification!r}")

        self.context = context
        self.tick_label_justification: TickLabelJustification = justification
        self.default_tick_label_anchor: TickLabelAnchor = anchor
        self.minimum_padding_between_labels = 50.0 if minimum_padding_between_labels is None else float(minimum_padding_between_labels)
        self.rotate_on_collision = label_collision_rotation is not None
        self._label_style = label_style
        self._axis_line_style = axis_line_style

        self.normal = LabelPlacement(
            anchor=anchor,
            offset_from_axis=5.0 if label_offset_from_axis is None else float(label_offset_from_axis),
            offset_from_tick=5.0 if label_offset_from_tick is None else float(label_offset_from_tick),
            rotation=0.0 if label_rotation is None else float(label_rotation),
        )
        self.on_collision = LabelPlacement(
            anchor="after",
            offset_from_axis=5.0 if label_collision_offset_from_axis is None else float(label_collision_offset_from_axis),
            offset_from_tick=5.0 if label_collision_offset_from_tick is None else float(label_collision_offset_from_tick),
            rotation=0.0 if label_collision_rotation is None else float(label_collision_rotation),
        )

    def placement(self, collision: bool = False) -> LabelPlacement:
        if collision and self.rotate_on_collision:
            return self.on_collision
        return self.normal

    @property
    def label_style(self) -> LabelStyle:
        return self.context.theme.label_style.merge(self._label_style)

    @property
    def axis_line_style(self) -> LineStyle:
        style = self._axis_line_style
        return LineStyle(
            color=style.color if style is not None and style.color is not None else self.label_style.color,
            dash_pattern=style.dash_pattern if style is not None else None,
            stroke_width=style.stroke_width if style is not None and style.stroke_width is not None else 1.0,
        )

    def decorate_ticks(self, ticks: Sequence[Tick[D]]) -> None:
        defaults = self.label_style
        for tick in ticks:
            element = tick.text_element
            if element is None:
                continue
            if element.style is None:
                element.style = defaults
            else:
                element.style = element.style.fill_missing(defaults)

    def update_tick_width(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        orientation: AxisDirection,
        *,
        collision: bool = False,
    ) -> None:
        placement = self.placement(collision)
        vertical = is_vertical(orientation)
        rotation_rads = abs(math.radians(placement.rotation - (90.0 if vertical else 0.0)))
        available_space = (max_width if vertical else max_height) - placement.offset_from_axis
        sin_rotation = math.sin(rotation_rads)
        max_text_width = None if sin_rotation == 0 else float(math.floor(available_space / sin_rotation))

        for tick in ticks:
            element = tick.text_element
            if element is None:
                continue
            if max_text_width is not None:
                element.max_width = max_text_width
                element.max_width_strategy = "ellipsize"
            else:
                element.max_width = None
                element.max_width_strategy = None

    def collides(self, ticks: Sequence[Tick[D]] | None, orientation: AxisDirection | None) -> CollisionReport[D]:
        """Sweep the labels in pixel order and report the first overlap.

        Rotated labels are compared by their unrotated extents.
        """
        if ticks is None:
            return CollisionReport(ticks_collide=False, ticks=None)

        vertical = orientation is not None and is_vertical(orientation)
        placed = sorted((t for t in ticks if t.location is not None), key=lambda t: t.location)  # type: ignore[arg-type, return-value]
        anchor = self.default_tick_label_anchor
        padding = self.minimum_padding_between_labels
        previous_end = -math.inf

        for i, tick in enumerate(placed):
            location = float(tick.location)  # type: ignore[arg-type]
            is_first = i == 0
            is_last = i == len(placed) - 1
            lines = self.split_label(tick.text_element) if tick.text_element is not None else []

            if vertical:
                adjusted = self.label_height(lines) + padding
                if anchor == "inside":
                    if is_first:
                        collides = False
                        previous_end = location + adjusted
                    elif is_last:
                        collides = previous_end > location - adjusted
                        previous_end = location
                    else:
                        half = adjusted / 2.0
                        collides = previous_end > location - half
                        previous_end = location + half
                else:
                    collides = previous_end > location
                    previous_end = location + adjusted
            else:
                direction = normalize_horizontal_anchor(anchor, self.context.is_rtl, is_first, is_last)
                adjusted = self.label_width(lines) + padding
                if direction == "ltr":
                    collides = previous_end > location
                    previous_end = location + adjusted
                elif direction == "rtl":
                    collides = previous_end > location - adjusted
                    previous_end = location
                else:
                    half = adjusted / 2.0
                    collides = previous_end > location - half
                    previous_end = location + half

            if collides:
                return CollisionReport(ticks_collide=True, ticks=placed)

        return CollisionReport(ticks_collide=False, ticks=placed)

    def measure_vertically_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        placement = self.placement(collision)
        widest = 0.0
        for tick in ticks:
            if tick.text_element is None:
                continue
            lines = self.split_label(tick.text_element)
            widest = max(
                widest,
                self.calculate_width_for_rotated_label(placement.rotation, self.label_height(lines), self.label_width(lines))
                + placement.offset_from_axis,
            )
        return float(round(widest))

    def measure_horizontally_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        placement = self.placement(collision)
        tallest = 0.0
        for tick in ticks:
            if tick.text_element is None:
                continue
            lines = self.split_label(tick.text_element)
            tallest = max(
                tallest,
                self.calculate_height_for_rotated_label(placement.rotation, self.label_height(lines), self.label_width(lines)),
            )
        return min(float(max_height), float(round(tallest)) + placement.offset_from_axis)

    @staticmethod
    def calculate_width_for_rotated_label(rotation: float, label_height: float, label_length: float) -> float:
        if rotation == 0:
            return label_length
        rad = math.radians(rotation)
        # Treat the label as a hypotenuse and extend it by half its own thickness.
        label_length += label_height / 2.0 * math.tan(rad)
        return label_length * math.cos(rad)

    @staticmethod
    def calculate_height_for_rotated_label(rotation: float, label_height: float, label_length: float) -> float:
        if rotation == 0:
            return label_height
        rad = math.radians(rotation)
        label_length += label_height / 2.0 * math.tan(rad)
        angle = math.pi / 2.0 - abs(rad)
        return max(label_height, label_length * math.cos(angle))

    @staticmethod
    def split_label(label: TextElement) -> list[TextElement]:
        return [label.with_text(line.strip()) for line in label.text.split(LABEL_SPLIT_PATTERN)]

    @staticmethod
    def label_width(lines: Sequence[TextElement]) -> float:
        if not lines:
            return 0.0
        return max(line.measurement.width_px for line in lines)

    @staticmethod
    def label_height(lines: Sequence[TextElement]) -> float:
        if not lines:
            return 0.0
        n = len(lines)
        return lines[0].measurement.height_px * n + MULTI_LINE_LABEL_PADDING * (n - 1)

    def draw_axis_line(self, canvas: ChartCanvas, orientation: AxisDirection, axis_bounds: Rect) -> None:
        start, end = axis_line_points(orientation, axis_bounds)
        style = self.axis_line_style
        assert style.color is not None
        canvas.draw_line(
            [start, end],
            stroke=style.color,
            stroke_width=style.stroke_width if style.stroke_width is not None else 1.0,
            dash_pattern=style.dash_pattern,
        )

    def draw_label(
        self,
        canvas: ChartCanvas,
        tick: Tick[D],
        *,
        orientation: AxisDirection,
        axis_bounds: Rect,
        is_first: bool,
        is_last: bool,
        collision: bool = False,
    ) -> None:
        if tick.text_element is None:
            return
        placement = self.placement(collision)
        location = tick.location or 0.0
        label_offset = tick.label_offset or 0.0
        lines = self.split_label(tick.text_element)
        label_height = self.label_height(lines)
        rotation = math.radians(placement.rotation)
        multi_line_offset = 0.0

        for line in lines:
            if orientation in ("up", "down"):
                if orientation == "down":
                    y = axis_bounds.top + placement.offset_from_axis
                else:
                    y = axis_bounds.bottom - label_height - placement.offset_from_axis
                direction = normalize_horizontal_anchor(placement.anchor, self.context.is_rtl, is_first, is_last)
                line.text_direction = direction
                if direction == "rtl":
                    x = float(round(location + placement.offset_from_tick + label_offset))
                elif direction == "ltr":
                    x = float(round(location - placement.offset_from_tick - label_offset))
                else:
                    x = float(round(location - label_offset))
            else:
                if orientation == "left":
                    if self.tick_label_justification == "inside":
                        x = axis_bounds.right - placement.offset_from_axis
                        line.text_direction = "rtl"
                    else:
                        x = axis_bounds.left
                        line.text_direction = "ltr"
                else:
                    if self.tick_label_justification == "inside":
                        x = axis_bounds.left + placement.offset_from_axis
                        line.text_direction = "ltr"
                    else:
                        x = axis_bounds.right
                        line.text_direction = "rtl"
                vertical_direction = normalize_vertical_anchor(placement.anchor, is_first, is_last)
                if vertical_direction == "over":
                    y = float(round(location - label_height - placement.offset_from_tick - label_offset))
                elif vertical_direction == "under":
                    y = float(round(location + placement.offset_from_tick + label_offset))
                else:
                    y = float(round(location - label_height / 2.0 + label_offset))

            canvas.draw_text(line, x, y + multi_line_offset, rotation=rotation)
            multi_line_offset += MULTI_LINE_LABEL_PADDING + round(line.measurement.height_px)


class TickDrawStrategy(ABC, Generic[D]):
    """Contract every tick draw strategy fulfils for an axis.

    The label geometry lives on `engine`; the defaults below delegate to it and
    each variant only has to say how a single tick is drawn.
    """

    draws_axis_line_by_default = False

    def __init__(self, engine: TickLabelEngine[D]) -> None:
        self.engine = engine

    @property
    def context(self) -> ChartContext:
        return self.engine.context

    def decorate_ticks(self, ticks: Sequence[Tick[D]]) -> None:
        self.engine.decorate_ticks(ticks)

    def update_tick_width(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        orientation: AxisDirection,
        *,
        collision: bool = False,
    ) -> None:
        self.engine.update_tick_width(ticks, max_width, max_height, orientation, collision=collision)

    def collides(self, ticks: Sequence[Tick[D]] | None, orientation: AxisDirection | None) -> CollisionReport[D]:
        return self.engine.collides(ticks, orientation)

    def measure_vertically_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        return self.engine.measure_vertically_drawn_ticks(ticks, max_width, max_height, collision=collision)

    def measure_horizontally_drawn_ticks(
        self,
        ticks: Sequence[Tick[D]],
        max_width: float,
        max_height: float,
        *,
        collision: bool = False,
    ) -> float:
        return self.engine.measure_horizontally_drawn_ticks(ticks, max_width, max_height, collision=collision)

    def draw_axis_line(self, canvas: ChartCanvas, orientation: AxisDirection, axis_bounds: Rect) -> None:
        self.engine.draw_axis_line(canvas, orientation, axis_bounds)

    @property
    def axis_line_width(self) -> float:
        width = self.engine.axis_line_style.stroke_width
        return 1.0 if width is None else float(width)

    @abstractmethod
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
        raise NotImplementedError
