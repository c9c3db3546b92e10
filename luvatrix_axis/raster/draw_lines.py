from __future__ import annotations

from typing import Sequence

import numpy as np

from luvatrix_axis.raster.canvas import draw_pixel
from luvatrix_axis.style import RGBA


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    dash_pattern: Sequence[int] | None = None,
) -> None:
    if xs.size < 2:
        return
    # Dash phase carries across segments so corners do not restart the pattern.
    phase = 0
    for i in range(xs.size - 1):
        phase = _draw_line_segment(
            dst,
            int(xs[i]),
            int(ys[i]),
            int(xs[i + 1]),
            int(ys[i + 1]),
            color=color,
            width=width,
            dash_pattern=dash_pattern,
            phase=phase,
        )


def _dash_on(dash_pattern: Sequence[int] | None, step: int) -> bool:
    if not dash_pattern:
        return True
    pattern = list(dash_pattern)
    if len(pattern) % 2 == 1:
        pattern = pattern * 2
    pos = step % sum(pattern)
    for i, length in enumerate(pattern):
        if pos < length:
            return i % 2 == 0
        pos -= length
    return True


def _draw_line_segment(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    width: int,
    dash_pattern: Sequence[int] | None,
    phase: int,
) -> int:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        if _dash_on(dash_pattern, phase):
            _draw_square_brush(dst, x0, y0, color=color, width=width)
        phase += 1
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return phase


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
