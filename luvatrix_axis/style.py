from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
import re
from typing import Any, Mapping


RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


def parse_hex_color(value: str) -> RGBA:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"color must be a hex color (#RRGGBB or #RRGGBBAA), got {value!r}")
    raw = value[1:]
    r = int(raw[0:2], 16)
    g = int(raw[2:4], 16)
    b = int(raw[4:6], 16)
    a = int(raw[6:8], 16) if len(raw) == 8 else 255
    return (r, g, b, a)


def coerce_color(value: Any) -> RGBA:
    if isinstance(value, str):
        return parse_hex_color(value)
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = tuple(int(c) for c in value)
        if any(c < 0 or c > 255 for c in channels):
            raise ValueError(f"color channels must be in [0, 255], got {value!r}")
        if len(channels) == 3:
            return (channels[0], channels[1], channels[2], 255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise ValueError(f"unsupported color value: {value!r}")


def with_opacity(color: RGBA, opacity: float) -> RGBA:
    a = int(round(max(0.0, min(1.0, opacity)) * color[3]))
    return (color[0], color[1], color[2], a)


@dataclass(frozen=True)
class LabelStyle:
    """Text style where every field is optional.

    Unset fields are filled from the theme when ticks are decorated, so a caller
    can pin only the color of one label and inherit the rest.
    """

    color: RGBA | None = None
    font_family: str | None = None
    font_size_px: float | None = None
    font_weight: int | None = None
    line_height: float | None = None

    def __post_init__(self) -> None:
        if self.font_size_px is not None and self.font_size_px <= 0:
            raise ValueError("LabelStyle font_size_px must be > 0")
        if self.font_weight is not None and (self.font_weight < 1 or self.font_weight > 1000):
            raise ValueError("LabelStyle font_weight must be in [1, 1000]")
        if self.line_height is not None and self.line_height <= 0:
            raise ValueError("LabelStyle line_height must be > 0")

    def merge(self, other: "LabelStyle | None") -> "LabelStyle":
        """Return a copy where every field set on `other` wins."""
        if other is None:
            return self
        overrides = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
        return replace(self, **overrides)

    def fill_missing(self, defaults: "LabelStyle") -> "LabelStyle":
        """Return a copy where only the unset fields are taken from `defaults`."""
        return defaults.merge(self)


@dataclass(frozen=True)
class LineStyle:
    color: RGBA | None = None
    dash_pattern: tuple[int, ...] | None = None
    stroke_width: float | None = None

    def __post_init__(self) -> None:
        if self.stroke_width is not None and self.stroke_width < 0:
            raise ValueError("LineStyle stroke_width must be >= 0")
        if self.dash_pattern is not None and any(d <= 0 for d in self.dash_pattern):
            raise ValueError("LineStyle dash_pattern entries must be > 0")


@dataclass(frozen=True)
class ChartTheme:
    tick_color: RGBA = (255, 255, 255, 255)
    tick_length: int = 3
    line_color: RGBA = (124, 138, 156, 255)
    no_data_color: RGBA = (224, 224, 224, 255)
    range_band_size: float = 0.65
    label_style: LabelStyle = field(
        default_factory=lambda: LabelStyle(
            color=(208, 218, 232, 255),
            font_family="Comic Mono",
            font_size_px=12.0,
            font_weight=400,
            line_height=1.2,
        )
    )

    def create_tick_line_style(self, style: LineStyle | None) -> LineStyle:
        return LineStyle(
            color=style.color if style is not None and style.color is not None else self.label_style.color,
            dash_pattern=style.dash_pattern if style is not None else None,
            stroke_width=style.stroke_width if style is not None and style.stroke_width is not None else 1.0,
        )


DEFAULT_THEME = ChartTheme()


def validate_chart_theme(overrides: Mapping[str, Any] | None = None) -> ChartTheme:
    """Validate and merge theme overrides against the defaults.

    Colors may be given as hex strings or RGB(A) tuples. `label_style` accepts a
    `LabelStyle` or a mapping of its fields.
    """

    raw: dict[str, Any] = {f.name: getattr(DEFAULT_THEME, f.name) for f in fields(DEFAULT_THEME)}
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in ("tick_color", "line_color", "no_data_color"):
        raw[key] = coerce_color(raw[key])

    if isinstance(raw["tick_length"], bool) or not isinstance(raw["tick_length"], int) or raw["tick_length"] < 0:
        raise ValueError("Token `tick_length` must be a non-negative integer")

    band = raw["range_band_size"]
    if not isinstance(band, (int, float)) or float(band) < 0.0 or float(band) > 1.0:
        raise ValueError("Token `range_band_size` must be in [0, 1]")

    label_style = raw["label_style"]
    if isinstance(label_style, Mapping):
        style_raw = asdict(DEFAULT_THEME.label_style)
        for key, value in label_style.items():
            if key not in style_raw:
                raise ValueError(f"Unknown label style field: {key}")
            style_raw[key] = value
        if style_raw["color"] is not None:
            style_raw["color"] = coerce_color(style_raw["color"])
        label_style = LabelStyle(**style_raw)
    elif not isinstance(label_style, LabelStyle):
        raise ValueError("Token `label_style` must be a LabelStyle or a mapping")

    return ChartTheme(
        tick_color=raw["tick_color"],
        tick_length=int(raw["tick_length"]),
        line_color=raw["line_color"],
        no_data_color=raw["no_data_color"],
        range_band_size=float(band),
        label_style=label_style,
    )
