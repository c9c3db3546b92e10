from __future__ import annotations

from functools import lru_cache
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from luvatrix_axis.style import RGBA


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "Comic Mono"
DEFAULT_FONT_SIZE_PX = 12.0
MONO_FONT_FALLBACK_PATTERNS = (
    "comicmono",
    "comic mono",
    "menlo",
    "monaco",
    "courier new",
    "courier",
    "dejavusansmono",
    "dejavu sans mono",
)


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: float = 0.0,
) -> None:
    """Blend `text` into `dst` with its unrotated top-left corner at (x, y).

    Positive rotation turns the text clockwise around that corner (y grows down).
    """
    if not text:
        return
    font = load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    mask, shift_x, shift_y = _rotate_mask(mask, rotate_deg=rotate_deg)
    _blend_mask(dst, int(round(x + shift_x)), int(round(y + shift_y)), mask, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    font = load_font(font_family=font_family, font_size_px=font_size_px)
    if not text:
        ascent, descent = font_metrics(font_family=font_family, font_size_px=font_size_px)
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    return (w, h)


def font_metrics(*, font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> tuple[int, int]:
    font = load_font(font_family=font_family, font_size_px=font_size_px)
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return (int(ascent), int(descent))
    size = max(1, int(round(font_size_px)))
    return (size, 0)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    sx1 = sx0 + (x1 - x0)
    sy1 = sy0 + (y1 - y0)

    cov = mask[sy0:sy1, sx0:sx1].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    if not text:
        return np.zeros((1, 1), dtype=np.uint8)
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        LOGGER.debug("no font file found for %r, using Pillow default font", font_family)
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        LOGGER.debug("could not load font file %s, using Pillow default font", font_path)
        return ImageFont.load_default()


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + MONO_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            name = path.name.lower().replace(" ", "")
            if p in stem or p in name:
                return path
    return None


def _rotate_mask(mask: np.ndarray, *, rotate_deg: float) -> tuple[np.ndarray, float, float]:
    """Rotate clockwise about the top-left corner.

    Returns the rotated mask and the offset of its top-left relative to the
    original anchor.
    """
    turns = rotate_deg / 90.0
    if float(turns).is_integer():
        k = int(turns) % 4
        h, w = mask.shape
        if k == 0:
            return mask, 0.0, 0.0
        # np.rot90 turns counter-clockwise; clockwise quarter turns are negative k.
        rotated = np.rot90(mask, k=-k)
        if k == 1:
            return rotated, float(-h), 0.0
        if k == 2:
            return rotated, float(-w), float(-h)
        return rotated, 0.0, float(-w)

    h, w = mask.shape
    rad = math.radians(rotate_deg)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    corners = [(0.0, 0.0), (w, 0.0), (0.0, h), (w, h)]
    xs = [cx * cos_a - cy * sin_a for cx, cy in corners]
    ys = [cx * sin_a + cy * cos_a for cx, cy in corners]
    image = Image.fromarray(mask)
    # PIL rotates counter-clockwise for positive angles.
    rotated = image.rotate(-rotate_deg, resample=Image.Resampling.BILINEAR, expand=True)
    return np.asarray(rotated, dtype=np.uint8), min(xs), min(ys)
