"""Round tick steps, tick label text and domain resolution for numeric scales."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import numpy as np


DEFAULT_LABEL_DECIMALS = 6
MAX_LABEL_DECIMALS = 12

# (mantissa bound, nice mantissa); anything past the last bound becomes 10.
_ROUNDED_MANTISSAS = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
_CEILED_MANTISSAS = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))


def nice_number(value: float, *, round_result: bool) -> float:
    magnitude = 10.0 ** np.floor(np.log10(value))
    mantissa = value / magnitude
    if round_result:
        for bound, nice in _ROUNDED_MANTISSAS:
            if mantissa < bound:
                return float(nice * magnitude)
    else:
        for bound, nice in _CEILED_MANTISSAS:
            if mantissa <= bound:
                return float(nice * magnitude)
    return float(10.0 * magnitude)


def nice_step(lo: float, hi: float, target: int) -> float:
    """Round step that splits [lo, hi] into roughly `target` ticks."""
    span = nice_number(hi - lo, round_result=False)
    return nice_number(span / max(target - 1, 1), round_result=True)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Multiples of a round step lying inside [vmin, vmax]."""
    if target <= 0:
        raise ValueError("target must be > 0")
    lo, hi = min(vmin, vmax), max(vmin, vmax)
    if lo == hi:
        return np.asarray([lo], dtype=np.float64)

    step = nice_step(lo, hi, target)
    first = int(np.ceil(lo / step))
    last = int(np.floor(hi / step))
    return np.arange(first, last + 1, dtype=np.float64) * step


def label_decimals(step: float | None) -> int:
    if step is None or not np.isfinite(step) or step <= 0:
        return DEFAULT_LABEL_DECIMALS
    exponent = int(Decimal(str(step)).normalize().as_tuple().exponent)
    return min(MAX_LABEL_DECIMALS, max(0, -exponent))


def format_tick(value: float, *, step: float | None = None) -> str:
    """Label for a tick value, with as many decimals as `step` needs."""
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0

    magnitude = abs(value)
    tiny_step = step is not None and abs(step) < 1e-4
    if magnitude != 0 and (magnitude >= 1e6 or magnitude < 1e-6 or tiny_step):
        return f"{value:.4e}"

    exact = Decimal(str(value))
    try:
        text = format(exact.quantize(Decimal(1).scaleb(-label_decimals(step))), "f")
    except InvalidOperation:
        text = format(exact, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def infer_resolution(values: np.ndarray) -> float | None:
    """Smallest gap between distinct finite values, ignoring float noise."""
    distinct = np.unique(values[np.isfinite(values)])
    if distinct.size < 2:
        return None
    gaps = np.diff(distinct)
    noise = max(1e-12, float(distinct[-1] - distinct[0]) * 1e-9)
    significant = gaps[gaps > noise]
    if significant.size == 0:
        return None
    return float(significant.min())
