from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from luvatrix_axis.text import TextElement


D = TypeVar("D")


@dataclass(eq=False)
class Tick(Generic[D]):
    """A tick owned by one axis for one layout pass.

    `location` stays None until the scale has placed the tick; the draw
    strategies fill in label geometry on the same record.
    """

    value: D
    text_element: TextElement | None = None
    location: float | None = None
    label_offset: float | None = None


@dataclass(eq=False, kw_only=True)
class RangeTick(Tick[D]):
    range_start_value: D
    range_start_location: float
    range_end_value: D
    range_end_location: float


@dataclass(frozen=True)
class CollisionReport(Generic[D]):
    ticks_collide: bool
    ticks: Sequence[Tick[D]] | None = None
    alternate_ticks_used: bool = False
