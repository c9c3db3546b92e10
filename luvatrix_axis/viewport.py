from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable, Generic, Sequence, TypeVar

from luvatrix_axis.scale import Scale


LOGGER = logging.getLogger(__name__)

D = TypeVar("D")


def find_nearest_viewport_start(scale: Scale[D], domain_fn: Callable[[int], D], data: Sequence[Any]) -> int:
    """Index of the first datum inside the viewport of `scale`.

    When no datum is inside the viewport but the data straddles its start, the
    datum just before the start is returned instead. With every datum on one
    side, the nearest end of the data is returned. `data` must be ordered by
    domain and non-empty.
    """
    assert len(data) > 0, "data must not be empty"

    if scale.compare_domain_value_to_viewport(domain_fn(0)) == 0:
        return 0

    start = 1
    end = len(data) - 1
    while end >= start:
        mid = (end - start) // 2 + start
        comparison = scale.compare_domain_value_to_viewport(domain_fn(mid))
        previous = scale.compare_domain_value_to_viewport(domain_fn(mid - 1))

        if previous == -1 and comparison == 0:
            return mid
        # Straddling the viewport start.
        if previous == -1 and comparison == 1:
            return mid - 1

        if comparison == -1:
            start = mid + 1
        else:
            end = mid - 1

    return _nearest_edge_index(scale, domain_fn, data)


def find_nearest_viewport_end(scale: Scale[D], domain_fn: Callable[[int], D], data: Sequence[Any]) -> int:
    """Index of the last datum inside the viewport of `scale`; mirror of the start search."""
    assert len(data) > 0, "data must not be empty"

    last = len(data) - 1
    if scale.compare_domain_value_to_viewport(domain_fn(last)) == 0:
        return last

    start = 1
    end = last
    while end >= start:
        mid = (end - start) // 2 + start
        comparison = scale.compare_domain_value_to_viewport(domain_fn(mid))
        previous = scale.compare_domain_value_to_viewport(domain_fn(mid - 1))

        if previous == 0 and comparison == 1:
            return mid - 1
        # Straddling the viewport end.
        if previous == -1 and comparison == 1:
            return mid

        if comparison == 1:
            end = mid - 1
        else:
            start = mid + 1

    return _nearest_edge_index(scale, domain_fn, data)


def _nearest_edge_index(scale: Scale[D], domain_fn: Callable[[int], D], data: Sequence[Any]) -> int:
    # Every datum is on one side of the viewport.
    if scale.compare_domain_value_to_viewport(domain_fn(len(data) - 1)) == -1:
        return len(data) - 1
    return 0


@dataclass(frozen=True)
class SeriesAccessors(Generic[D]):
    """Index based accessors into one series' data."""

    data: Sequence[Any]
    domain_fn: Callable[[int], D | None]
    domain_lower_bound_fn: Callable[[int], D | None] | None = None
    domain_upper_bound_fn: Callable[[int], D | None] | None = None
    measure_fn: Callable[[int], float | None] | None = None
    measure_offset_fn: Callable[[int], float | None] | None = None
    measure_lower_bound_fn: Callable[[int], float | None] | None = None
    measure_upper_bound_fn: Callable[[int], float | None] | None = None


def add_domain_values(scale: Any, series: SeriesAccessors[D], *, vertical: bool = True) -> None:
    """Feed every domain value of `series`, and its bounds, into `scale.add_domain`.

    Horizontally rendered charts list domains top to bottom, so their values are
    added last to first.
    """
    indices = range(len(series.data)) if vertical else range(len(series.data) - 1, -1, -1)
    for i in indices:
        value = series.domain_fn(i)
        if value is None:
            continue
        scale.add_domain(value)
        if series.domain_lower_bound_fn is not None and series.domain_upper_bound_fn is not None:
            lower = series.domain_lower_bound_fn(i)
            upper = series.domain_upper_bound_fn(i)
            if lower is not None and upper is not None:
                scale.add_domain(lower)
                scale.add_domain(upper)


def viewport_index_range(scale: Scale[D], series: SeriesAccessors[D]) -> tuple[int, int] | None:
    if not series.data:
        return None
    domain_fn: Callable[[int], Any] = series.domain_fn
    return (
        find_nearest_viewport_start(scale, domain_fn, series.data),
        find_nearest_viewport_end(scale, domain_fn, series.data),
    )


def measure_values_in_viewport(scale: Scale[D], series: SeriesAccessors[D]) -> list[float]:
    """Measure values (with offsets and bounds) of the data visible in the viewport."""
    if series.measure_fn is None:
        raise ValueError("series has no measure_fn")
    bounds = viewport_index_range(scale, series)
    if bounds is None:
        return []
    start, end = bounds
    LOGGER.debug("measuring series indices %d..%d inside the viewport", start, end)

    values: list[float] = []
    for i in range(start, end + 1):
        measure = series.measure_fn(i)
        offset = series.measure_offset_fn(i) if series.measure_offset_fn is not None else 0.0
        if measure is None or offset is None:
            continue
        values.append(float(measure + offset))
        if series.measure_lower_bound_fn is not None and series.measure_upper_bound_fn is not None:
            values.append(float((series.measure_lower_bound_fn(i) or 0.0) + offset))
            values.append(float((series.measure_upper_bound_fn(i) or 0.0) + offset))
    return values
