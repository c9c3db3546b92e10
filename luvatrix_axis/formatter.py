from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Generic, Hashable, MutableMapping, Sequence, TypeVar

from luvatrix_axis.numeric import format_tick


D = TypeVar("D", bound=Hashable)


class TickFormatter(ABC, Generic[D]):
    """Turns tick domain values into label strings."""

    @abstractmethod
    def format(
        self,
        values: Sequence[D],
        cache: MutableMapping[D, str],
        step_size: float | None = None,
    ) -> list[str]:
        raise NotImplementedError


class SimpleTickFormatter(TickFormatter[D]):
    """Formats one value at a time, memoizing results in the caller's cache."""

    def format(
        self,
        values: Sequence[D],
        cache: MutableMapping[D, str],
        step_size: float | None = None,
    ) -> list[str]:
        out: list[str] = []
        for value in values:
            label = cache.get(value)
            if label is None:
                label = self.format_value(value, step_size=step_size)
                cache[value] = label
            out.append(label)
        return out

    @abstractmethod
    def format_value(self, value: D, *, step_size: float | None = None) -> str:
        raise NotImplementedError


class OrdinalTickFormatter(SimpleTickFormatter[str]):
    def format_value(self, value: str, *, step_size: float | None = None) -> str:
        return value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OrdinalTickFormatter)

    def __hash__(self) -> int:
        return hash(OrdinalTickFormatter)


class NumericTickFormatter(SimpleTickFormatter[float]):
    """Step-aware decimal labels, or a caller supplied `formatter` callable."""

    def __init__(self, formatter: Callable[[float], str] | None = None) -> None:
        self.formatter = formatter

    def format_value(self, value: float, *, step_size: float | None = None) -> str:
        if self.formatter is not None:
            return self.formatter(value)
        return format_tick(float(value), step=step_size)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NumericTickFormatter) and self.formatter == other.formatter

    def __hash__(self) -> int:
        return hash((NumericTickFormatter, self.formatter))


class DateTimeTickFormatter(SimpleTickFormatter[datetime]):
    def __init__(self, pattern: str = "%Y-%m-%d") -> None:
        if not pattern:
            raise ValueError("pattern must not be empty")
        self.pattern = pattern

    def format_value(self, value: datetime, *, step_size: float | None = None) -> str:
        return value.strftime(self.pattern)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DateTimeTickFormatter) and self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash((DateTimeTickFormatter, self.pattern))
