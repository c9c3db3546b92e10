from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Generic, MutableMapping, Sequence, TypeVar

from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy.base import TickDrawStrategy
from luvatrix_axis.formatter import TickFormatter
from luvatrix_axis.geometry import AxisDirection
from luvatrix_axis.numeric import generate_nice_ticks
from luvatrix_axis.scale import LinearScale, OrdinalScale, Scale
from luvatrix_axis.style import LabelStyle
from luvatrix_axis.tick import RangeTick, Tick


LOGGER = logging.getLogger(__name__)

D = TypeVar("D")


@dataclass(frozen=True)
class TickSpec(Generic[D]):
    value: D
    label: str | None = None
    style: LabelStyle | None = None


@dataclass(frozen=True)
class RangeTickSpec(TickSpec[D]):
    range_start: Any = None
    range_end: Any = None

    def __post_init__(self) -> None:
        if self.range_start is None or self.range_end is None:
            raise ValueError("RangeTickSpec needs both range_start and range_end")


@dataclass(frozen=True)
class TickHint(Generic[D]):
    start: D
    end: D
    tick_count: int


class TickProvider(ABC, Generic[D]):
    """Produces the candidate ticks for one layout pass."""

    @abstractmethod
    def get_ticks(
        self,
        *,
        context: ChartContext,
        scale: Scale[D],
        formatter: TickFormatter[Any],
        formatter_cache: MutableMapping[Any, str],
        draw_strategy: TickDrawStrategy[D],
        orientation: AxisDirection | None,
        tick_hint: TickHint[D] | None = None,
    ) -> list[Tick[D]]:
        raise NotImplementedError

    def create_ticks(
        self,
        values: Sequence[D],
        *,
        context: ChartContext,
        scale: Scale[D],
        formatter: TickFormatter[Any],
        formatter_cache: MutableMapping[Any, str],
        draw_strategy: TickDrawStrategy[D],
        step_size: float | None = None,
    ) -> list[Tick[D]]:
        labels = formatter.format(list(values), formatter_cache, step_size=step_size)
        ticks: list[Tick[D]] = [
            Tick(
                value=value,
                text_element=context.create_text_element(label),
                location=scale.domain_to_pixel(value),
            )
            for value, label in zip(values, labels)
        ]
        draw_strategy.decorate_ticks(ticks)
        return ticks


class StaticTickProvider(TickProvider[D]):
    """Ticks at fixed values; only the ones inside the viewport are kept."""

    def __init__(self, specs: Sequence[TickSpec[D]], *, tick_increment: int = 1) -> None:
        if tick_increment < 1:
            raise ValueError("tick_increment must be >= 1")
        self.specs = tuple(specs)
        self.tick_increment = tick_increment

    def get_ticks(
        self,
        *,
        context: ChartContext,
        scale: Scale[D],
        formatter: TickFormatter[Any],
        formatter_cache: MutableMapping[Any, str],
        draw_strategy: TickDrawStrategy[D],
        orientation: AxisDirection | None,
        tick_hint: TickHint[D] | None = None,
    ) -> list[Tick[D]]:
        step_size = None
        if isinstance(scale, LinearScale):
            for spec in self.specs:
                scale.add_domain(spec.value)
            step_size = scale.domain_step_size

        formatted: list[str] = []
        if any(spec.label is None for spec in self.specs):
            formatted = formatter.format([spec.value for spec in self.specs], formatter_cache, step_size=step_size)

        ticks: list[Tick[D]] = []
        for i in range(0, len(self.specs), self.tick_increment):
            spec = self.specs[i]
            if scale.compare_domain_value_to_viewport(spec.value) != 0:
                continue
            element = context.create_text_element(spec.label if spec.label is not None else formatted[i], spec.style)
            if isinstance(spec, RangeTickSpec):
                start = scale.domain_to_pixel(spec.range_start)
                end = scale.domain_to_pixel(spec.range_end)
                if start is None or end is None:
                    LOGGER.debug("range tick %r has a bound outside the scale domain", spec.value)
                    continue
                ticks.append(
                    RangeTick(
                        value=spec.value,
                        text_element=element,
                        location=scale.domain_to_pixel(spec.value),
                        range_start_value=spec.range_start,
                        range_start_location=start,
                        range_end_value=spec.range_end,
                        range_end_location=end,
                    )
                )
            else:
                ticks.append(Tick(value=spec.value, text_element=element, location=scale.domain_to_pixel(spec.value)))

        draw_strategy.decorate_ticks(ticks)
        return ticks


class NumericTickProvider(TickProvider[Any]):
    """Evenly spaced "nice" ticks over the viewport of a linear scale."""

    def __init__(self, desired_tick_count: int = 6) -> None:
        if desired_tick_count < 1:
            raise ValueError("desired_tick_count must be >= 1")
        self.desired_tick_count = desired_tick_count

    def get_ticks(
        self,
        *,
        context: ChartContext,
        scale: Scale[Any],
        formatter: TickFormatter[Any],
        formatter_cache: MutableMapping[Any, str],
        draw_strategy: TickDrawStrategy[Any],
        orientation: AxisDirection | None,
        tick_hint: TickHint[Any] | None = None,
    ) -> list[Tick[Any]]:
        if not isinstance(scale, LinearScale):
            raise TypeError(f"NumericTickProvider needs a LinearScale, got {type(scale).__name__}")
        if tick_hint is not None:
            lo, hi = scale.to_number(tick_hint.start), scale.to_number(tick_hint.end)
            target = max(1, tick_hint.tick_count)
        else:
            lo, hi = scale.viewport_domain
            target = self.desired_tick_count
        numbers = generate_nice_ticks(lo, hi, target)
        step = float(numbers[1] - numbers[0]) if numbers.size > 1 else None
        values = [scale.from_number(float(v)) for v in numbers]
        return self.create_ticks(
            values,
            context=context,
            scale=scale,
            formatter=formatter,
            formatter_cache=formatter_cache,
            draw_strategy=draw_strategy,
            step_size=step,
        )


class OrdinalTickProvider(TickProvider[str]):
    """One tick per ordinal domain value."""

    def get_ticks(
        self,
        *,
        context: ChartContext,
        scale: Scale[str],
        formatter: TickFormatter[Any],
        formatter_cache: MutableMapping[Any, str],
        draw_strategy: TickDrawStrategy[str],
        orientation: AxisDirection | None,
        tick_hint: TickHint[str] | None = None,
    ) -> list[Tick[str]]:
        if not isinstance(scale, OrdinalScale):
            raise TypeError(f"OrdinalTickProvider needs an OrdinalScale, got {type(scale).__name__}")
        return self.create_ticks(
            scale.domain,
            context=context,
            scale=scale,
            formatter=formatter,
            formatter_cache=formatter_cache,
            draw_strategy=draw_strategy,
        )


class EndPointsTickProvider(TickProvider[Any]):
    """Ticks at the first and last value of the viewport."""

    def get_ticks(
        self,
        *,
        context: ChartContext,
        scale: Scale[Any],
        formatter: TickFormatter[Any],
        formatter_cache: MutableMapping[Any, str],
        draw_strategy: TickDrawStrategy[Any],
        orientation: AxisDirection | None,
        tick_hint: TickHint[Any] | None = None,
    ) -> list[Tick[Any]]:
        step_size = None
        if tick_hint is not None:
            start, end = tick_hint.start, tick_hint.end
        elif isinstance(scale, LinearScale):
            lo, hi = scale.viewport_domain
            start, end = scale.from_number(lo), scale.from_number(hi)
            step_size = scale.domain_step_size
        elif isinstance(scale, OrdinalScale):
            if not scale.domain:
                return []
            start, end = scale.domain[0], scale.domain[-1]
        else:
            raise TypeError(f"unsupported scale: {type(scale).__name__}")
        return self.create_ticks(
            [start, end],
            context=context,
            scale=scale,
            formatter=formatter,
            formatter_cache=formatter_cache,
            draw_strategy=draw_strategy,
            step_size=step_size,
        )
