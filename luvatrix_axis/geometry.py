from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


AxisDirection = Literal["up", "down", "left", "right"]
TickLabelAnchor = Literal["before", "centered", "after", "inside"]
TickLabelJustification = Literal["inside", "outside"]
TextDirection = Literal["ltr", "rtl"]

AXIS_DIRECTIONS: tuple[str, ...] = ("up", "down", "left", "right")
TICK_LABEL_ANCHORS: tuple[str, ...] = ("before", "centered", "after", "inside")
TICK_LABEL_JUSTIFICATIONS: tuple[str, ...] = ("inside", "outside")


def is_vertical(direction: AxisDirection) -> bool:
    return direction in ("left", "right")


def validate_axis_direction(direction: str) -> AxisDirection:
    if direction not in AXIS_DIRECTIONS:
        raise ValueError(f"unknown axis direction: {direction!r}")
    return direction  # type: ignore[return-value]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Rect width/height must be >= 0")

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        return cls(left=left, top=top, width=right - left, height=bottom - top)

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def top_right(self) -> Point:
        return Point(self.right, self.top)

    @property
    def bottom_left(self) -> Point:
        return Point(self.left, self.bottom)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def shift(self, dx: float, dy: float) -> "Rect":
        return Rect(left=self.left + dx, top=self.top + dy, width=self.width, height=self.height)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom
