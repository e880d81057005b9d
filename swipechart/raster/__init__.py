from .canvas import blend_mask, blit, draw_hline, draw_vline, fill_circle, fill_polygon, fill_rounded_rect, new_canvas
from .draw_lines import draw_dashed_vline, draw_segment
from .draw_markers import draw_ring_marker
from .draw_text import draw_text, text_size

__all__ = [
    "blend_mask",
    "blit",
    "draw_dashed_vline",
    "draw_hline",
    "draw_ring_marker",
    "draw_segment",
    "draw_text",
    "draw_vline",
    "fill_circle",
    "fill_polygon",
    "fill_rounded_rect",
    "new_canvas",
    "text_size",
]
