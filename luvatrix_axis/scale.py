from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Literal, Protocol, TypeVar

import numpy as np

from luvatrix_axis.errors import AxisDataError
from luvatrix_axis.numeric import infer_resolution
from luvatrix_axis.style import DEFAULT_THEME, ChartTheme


LOGGER = logging.getLogger(__name__)

D_contra = TypeVar("D_contra", contravariant=True)

RangeBandType = Literal[
    "none",
    "fixed",
    "fixed_domain",
    "fixed_percent_of_step",
    "style_assigned_percent_of_step",
    "fixed_space_from_step",
]


@dataclass(frozen=True)
class ScaleOutputExtent:
    start: float
    end: float

    @property
    def min(self) -> float:
        return min(self.start, self.end)

    @property
    def max(self) -> float:
        return max(self.start, self.end)

    @property
    def diff(self) -> float:
        return self.end - self.start

    @property
    def width(self) -> float:
        return abs(self.diff)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class RangeBandConfig:
    """How wide the band reserved for one domain value is."""

    type: RangeBandType = "none"
    size: float = 0.0

    def __post_init__(self) -> None:
        if self.type not in (
            "none",
            "fixed",
            "fixed_domain",
            "fixed_percent_of_step",
            "style_assigned_percent_of_step",
            "fixed_space_from_step",
        ):
            raise ValueError(f"unknown range band type: {self.type!r}")
        if self.type in ("fixed_percent_of_step", "style_assigned_percent_of_step"):
            if self.size < 0.0 or self.size > 1.0:
                raise ValueError("range band percent of step must be in [0, 1]")
        elif self.size < 0.0:
            raise ValueError("range band size must be >= 0")

    @classmethod
    def none(cls) -> "RangeBandConfig":
        return cls("none", 0.0)

    @classmethod
    def fixed(cls, pixels: float) -> "RangeBandConfig":
        return cls("fixed", float(pixels))

    @classmethod
    def fixed_domain(cls, domain_size: float) -> "RangeBandConfig":
        return cls("fixed_domain", float(domain_size))

    @classmethod
    def step_chart_band(cls) -> "RangeBandConfig":
        return cls("fixed_percent_of_step", 1.0)

    @classmethod
    def percent_of_step(cls, percent: float) -> "RangeBandConfig":
        return cls("fixed_percent_of_step", float(percent))

    @classmethod
    def style_assigned_percent(cls, theme: ChartTheme = DEFAULT_THEME) -> "RangeBandConfig":
        return cls("style_assigned_percent_of_step", float(theme.range_band_size))

    @classmethod
    def fixed_space_between_step(cls, pixels: float) -> "RangeBandConfig":
        return cls("fixed_space_from_step", float(pixels))

    def band_for_step(self, step_px: float, *, scaling_factor: float = 1.0) -> float:
        if self.type == "fixed":
            return self.size
        if self.type == "fixed_domain":
            return self.size * abs(scaling_factor)
        if self.type == "fixed_space_from_step":
            return max(0.0, step_px - self.size)
        if self.type in ("fixed_percent_of_step", "style_assigned_percent_of_step"):
            return step_px * self.size
        return 0.0


class Scale(Protocol[D_contra]):
    """Domain to pixel mapping consumed by the tick pipeline and viewport locator."""

    @property
    def range(self) -> ScaleOutputExtent:
        ...

    @range.setter
    def range(self, extent: ScaleOutputExtent) -> None:
        ...

    @property
    def range_band(self) -> float:
        ...

    def domain_to_pixel(self, value: D_contra) -> float | None:
        ...

    def pixel_to_domain(self, pixel: float) -> object:
        ...

    def compare_domain_value_to_viewport(self, value: D_contra) -> int:
        ...

    def is_range_value_within_viewport(self, pixel: float) -> bool:
        ...


class LinearScale:
    """Continuous numeric scale with an optional viewport window in domain units."""

    def __init__(
        self,
        *,
        domain: tuple[float, float] | None = None,
        range_band_config: RangeBandConfig | None = None,
    ) -> None:
        self._values: set[float] = set()
        self._range = ScaleOutputExtent(0.0, 1.0)
        self._viewport: tuple[float, float] | None = None
        self.range_band_config = range_band_config or RangeBandConfig.none()
        if domain is not None:
            self.add_domain(domain[0])
            self.add_domain(domain[1])

    def to_number(self, value: object) -> float:
        return float(value)  # type: ignore[arg-type]

    def from_number(self, value: float) -> object:
        return value

    @property
    def range(self) -> ScaleOutputExtent:
        return self._range

    @range.setter
    def range(self, extent: ScaleOutputExtent) -> None:
        self._range = extent

    def add_domain(self, value: object) -> None:
        number = self.to_number(value)
        if not np.isfinite(number):
            raise AxisDataError(f"domain value must be finite, got {value!r}")
        self._values.add(number)

    def reset_domain(self) -> None:
        self._values.clear()

    def set_viewport_domain(self, start: object, end: object) -> None:
        lo = self.to_number(start)
        hi = self.to_number(end)
        if hi < lo:
            lo, hi = hi, lo
        self._viewport = (lo, hi)

    def reset_viewport(self) -> None:
        self._viewport = None

    @property
    def domain_extent(self) -> tuple[float, float] | None:
        if not self._values:
            return None
        return (min(self._values), max(self._values))

    @property
    def viewport_domain(self) -> tuple[float, float]:
        if self._viewport is not None:
            return self._viewport
        extent = self.domain_extent
        if extent is None:
            return (0.0, 1.0)
        return extent

    @property
    def scaling_factor(self) -> float:
        lo, hi = self.viewport_domain
        if hi == lo:
            return 1.0
        return self._range.diff / (hi - lo)

    @property
    def domain_step_size(self) -> float | None:
        return infer_resolution(np.fromiter(self._values, dtype=np.float64, count=len(self._values)))

    @property
    def step_size(self) -> float:
        step = self.domain_step_size
        if step is None:
            return self._range.width
        return step * abs(self.scaling_factor)

    @property
    def range_band(self) -> float:
        return self.range_band_config.band_for_step(self.step_size, scaling_factor=self.scaling_factor)

    def domain_to_pixel(self, value: object) -> float | None:
        lo, hi = self.viewport_domain
        if hi == lo:
            # Single-value domain sits in the middle of the range.
            return self._range.start + self._range.diff / 2.0
        return self._range.start + (self.to_number(value) - lo) * self.scaling_factor

    def pixel_to_domain(self, pixel: float) -> object:
        lo, hi = self.viewport_domain
        if hi == lo or self._range.diff == 0:
            return self.from_number(lo)
        return self.from_number(lo + (pixel - self._range.start) / self.scaling_factor)

    def compare_domain_value_to_viewport(self, value: object) -> int:
        lo, hi = self.viewport_domain
        number = self.to_number(value)
        if number < lo:
            return -1
        if number > hi:
            return 1
        return 0

    def is_range_value_within_viewport(self, pixel: float) -> bool:
        return self._range.contains(pixel)


class DateTimeScale(LinearScale):
    """Linear scale over `datetime` values; naive datetimes are read as UTC."""

    def to_number(self, value: object) -> float:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.timestamp()
        return float(value)  # type: ignore[arg-type]

    def from_number(self, value: float) -> object:
        return datetime.fromtimestamp(value, tz=timezone.utc)


class OrdinalScale:
    """Scale over discrete string values laid out in insertion order.

    When the range runs from a larger to a smaller pixel (vertical axes) the
    first domain value sits at the range start and later values step toward
    the range end.
    """

    def __init__(self, *, range_band_config: RangeBandConfig | None = None, theme: ChartTheme = DEFAULT_THEME) -> None:
        self._domain: list[str] = []
        self._index: dict[str, int] = {}
        self._range = ScaleOutputExtent(0.0, 1.0)
        self._viewport_scale = 1.0
        self._viewport_translate = 0.0
        self._range_band_config = RangeBandConfig.style_assigned_percent(theme)
        if range_band_config is not None:
            self.range_band_config = range_band_config

    @property
    def range_band_config(self) -> RangeBandConfig:
        return self._range_band_config

    @range_band_config.setter
    def range_band_config(self, config: RangeBandConfig) -> None:
        if config.type in ("none", "fixed_domain"):
            raise ValueError("ordinal range band config must not be none or fixed_domain")
        self._range_band_config = config

    @property
    def domain(self) -> tuple[str, ...]:
        return tuple(self._domain)

    @property
    def range(self) -> ScaleOutputExtent:
        return self._range

    @range.setter
    def range(self, extent: ScaleOutputExtent) -> None:
        self._range = extent

    @property
    def _reversed(self) -> bool:
        return self._range.start > self._range.end

    @property
    def range_width(self) -> float:
        return self._range.width

    @property
    def viewport_scaling_factor(self) -> float:
        return self._viewport_scale

    @property
    def viewport_translate(self) -> float:
        return self._viewport_translate

    def add_domain(self, value: str) -> None:
        if value in self._index:
            return
        self._index[value] = len(self._domain)
        self._domain.append(value)

    def reset_domain(self) -> None:
        self._domain.clear()
        self._index.clear()

    @property
    def step_size(self) -> float:
        if not self._domain:
            return 0.0
        return self._viewport_scale * (self.range_width / float(len(self._domain)))

    @property
    def range_band(self) -> float:
        return self._range_band_config.band_for_step(self.step_size)

    def _signed_step(self) -> float:
        return -self.step_size if self._reversed else self.step_size

    def domain_to_pixel(self, value: str) -> float | None:
        i = self._index.get(value)
        if i is None:
            return None
        step = self._signed_step()
        return self._viewport_translate + self._range.start + step / 2.0 + step * i

    def pixel_to_domain(self, pixel: float) -> str:
        if not self._domain:
            raise AxisDataError("ordinal scale has no domain values")
        step = self._signed_step()
        if step == 0:
            return self._domain[0]
        index = (pixel - self._viewport_translate - self._range.start - step / 2.0) / step
        return self._domain[max(0, min(int(round(index)), len(self._domain) - 1))]

    def set_viewport_settings(self, viewport_scale: float, viewport_translate: float) -> None:
        if viewport_scale <= 0:
            raise ValueError("viewport_scale must be > 0")
        self._viewport_scale = float(viewport_scale)
        # Do not allow panning beyond either end of the data.
        overflow = self.range_width * (self._viewport_scale - 1.0)
        if self._reversed:
            self._viewport_translate = max(0.0, min(overflow, float(viewport_translate)))
        else:
            self._viewport_translate = min(0.0, max(-overflow, float(viewport_translate)))

    def reset_viewport_settings(self) -> None:
        self._viewport_scale = 1.0
        self._viewport_translate = 0.0

    def set_viewport(self, viewport_data_size: int, starting_domain: str | None = None) -> None:
        """Zoom so `viewport_data_size` values fill the range, starting at `starting_domain`."""
        if viewport_data_size <= 0:
            raise AxisDataError("viewport_data_size cannot be less than 1")
        if not self._domain:
            self.reset_viewport_settings()
            return
        size = min(viewport_data_size, len(self._domain))
        self._viewport_scale = len(self._domain) / float(size)
        index = 0 if starting_domain is None else self._index.get(starting_domain, 0)
        step = self.step_size
        translate = step * index if self._reversed else -(step * index)
        self.set_viewport_settings(self._viewport_scale, translate)

    def compare_domain_value_to_viewport(self, value: str) -> int:
        pixel = self.domain_to_pixel(value)
        if pixel is None:
            LOGGER.debug("ordinal value %r is not in the scale domain", value)
            return -1
        if self._range.contains(pixel):
            return 0
        before = pixel > self._range.max if self._reversed else pixel < self._range.min
        return -1 if before else 1

    def is_range_value_within_viewport(self, pixel: float) -> bool:
        return self._range.contains(pixel)
