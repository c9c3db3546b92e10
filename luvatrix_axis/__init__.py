from luvatrix_axis.axis import Axis
from luvatrix_axis.canvas import ChartCanvas, RasterChartCanvas, RecordingCanvas
from luvatrix_axis.context import ChartContext
from luvatrix_axis.draw_strategy import (
    GridlineRenderSpec,
    GridlineTickDrawStrategy,
    LabelPlacement,
    NoneDrawStrategy,
    NoneRenderSpec,
    RangeTickDrawStrategy,
    RangeTickRenderSpec,
    RenderSpec,
    SmallTickDrawStrategy,
    SmallTickRenderSpec,
    TickDrawStrategy,
    TickLabelEngine,
)
from luvatrix_axis.errors import AxisDataError, AxisLayoutError
from luvatrix_axis.formatter import DateTimeTickFormatter, NumericTickFormatter, OrdinalTickFormatter, TickFormatter
from luvatrix_axis.geometry import Point, Rect, Size
from luvatrix_axis.scale import DateTimeScale, LinearScale, OrdinalScale, RangeBandConfig, Scale, ScaleOutputExtent
from luvatrix_axis.style import DEFAULT_THEME, ChartTheme, LabelStyle, LineStyle, validate_chart_theme
from luvatrix_axis.text import MonospaceTextMeasurer, PillowTextMeasurer, TextElement, TextMeasurement, TextMeasurer
from luvatrix_axis.tick import CollisionReport, RangeTick, Tick
from luvatrix_axis.tick_provider import (
    EndPointsTickProvider,
    NumericTickProvider,
    OrdinalTickProvider,
    RangeTickSpec,
    StaticTickProvider,
    TickHint,
    TickProvider,
    TickSpec,
)
from luvatrix_axis.viewport import (
    SeriesAccessors,
    add_domain_values,
    find_nearest_viewport_end,
    find_nearest_viewport_start,
    measure_values_in_viewport,
    viewport_index_range,
)

__all__ = [
    "Axis",
    "AxisDataError",
    "AxisLayoutError",
    "ChartCanvas",
    "ChartContext",
    "ChartTheme",
    "CollisionReport",
    "DEFAULT_THEME",
    "DateTimeScale",
    "DateTimeTickFormatter",
    "EndPointsTickProvider",
    "GridlineRenderSpec",
    "GridlineTickDrawStrategy",
    "LabelPlacement",
    "LabelStyle",
    "LineStyle",
    "LinearScale",
    "MonospaceTextMeasurer",
    "NoneDrawStrategy",
    "NoneRenderSpec",
    "NumericTickFormatter",
    "NumericTickProvider",
    "OrdinalScale",
    "OrdinalTickFormatter",
    "OrdinalTickProvider",
    "PillowTextMeasurer",
    "Point",
    "RangeBandConfig",
    "RangeTick",
    "RangeTickDrawStrategy",
    "RangeTickRenderSpec",
    "RangeTickSpec",
    "RasterChartCanvas",
    "RecordingCanvas",
    "Rect",
    "RenderSpec",
    "Scale",
    "ScaleOutputExtent",
    "SeriesAccessors",
    "Size",
    "SmallTickDrawStrategy",
    "SmallTickRenderSpec",
    "StaticTickProvider",
    "TextElement",
    "TextMeasurement",
    "TextMeasurer",
    "Tick",
    "TickDrawStrategy",
    "TickFormatter",
    "TickHint",
    "TickLabelEngine",
    "TickProvider",
    "TickSpec",
    "add_domain_values",
    "find_nearest_viewport_end",
    "find_nearest_viewport_start",
    "measure_values_in_viewport",
    "validate_chart_theme",
    "viewport_index_range",
]
