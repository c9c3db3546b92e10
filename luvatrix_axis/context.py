from __future__ import annotations

from dataclasses import dataclass, field

from luvatrix_axis.style import DEFAULT_THEME, ChartTheme, LabelStyle
from luvatrix_axis.text import PillowTextMeasurer, TextElement, TextMeasurer


@dataclass(frozen=True)
class ChartContext:
    """Everything a draw pass needs from its host, passed in explicitly."""

    theme: ChartTheme = DEFAULT_THEME
    is_rtl: bool = False
    text_measurer: TextMeasurer = field(default_factory=PillowTextMeasurer)

    def create_text_element(self, text: str, style: LabelStyle | None = None) -> TextElement:
        return TextElement(text, measurer=self.text_measurer, style=style)
