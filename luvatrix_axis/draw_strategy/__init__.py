from .base import (
    LabelPlacement,
    TickDrawStrategy,
    TickLabelEngine,
    axis_line_points,
    normalize_horizontal_anchor,
    normalize_vertical_anchor,
)
from .gridline import GridlineTickDrawStrategy
from .none import NoneDrawStrategy
from .range import RangeTickDrawStrategy
from .render_spec import (
    BaseRenderSpec,
    GridlineRenderSpec,
    NoneRenderSpec,
    RangeTickRenderSpec,
    RenderSpec,
    SmallTickRenderSpec,
)
from .small import SmallTickDrawStrategy

__all__ = [
    "BaseRenderSpec",
    "GridlineRenderSpec",
    "GridlineTickDrawStrategy",
    "LabelPlacement",
    "NoneDrawStrategy",
    "NoneRenderSpec",
    "RangeTickDrawStrategy",
    "RangeTickRenderSpec",
    "RenderSpec",
    "SmallTickDrawStrategy",
    "SmallTickRenderSpec",
    "TickDrawStrategy",
    "TickLabelEngine",
    "axis_line_points",
    "normalize_horizontal_anchor",
    "normalize_vertical_anchor",
]
