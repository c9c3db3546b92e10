from .canvas import draw_hline, draw_pixel, fill_rect, new_canvas
from .draw_lines import draw_polyline
from .draw_text import draw_text, font_metrics, text_size

__all__ = [
    "draw_hline",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "fill_rect",
    "font_metrics",
    "new_canvas",
    "text_size",
]
