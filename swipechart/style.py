from __future__ import annotations

from dataclasses import dataclass

from swipechart.hit_test import DEFAULT_SELECTION_RADIUS
from swipechart.mapping import PlotInsets
from swipechart.selection import DEFAULT_DESELECT_DELAY_S


RGBA = tuple[int, int, int, int]


def rgba_from_hex(value: int, alpha: int = 255) -> RGBA:
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, alpha)


@dataclass(frozen=True)
class ChartStyle:
    """Colors, label formats and geometry shared by the chart core and its renderer.

    Date formats use ``strftime`` directives and are applied in the chart's time zone.
    """

    background: RGBA = (255, 255, 255, 0)
    grid_color: RGBA = rgba_from_hex(0xE0E0E0)
    line_color: RGBA = rgba_from_hex(0xFF0202)
    scatter_color: RGBA = rgba_from_hex(0xFF0202)
    disabled_color: RGBA = (128, 128, 128, 255)
    text_color: RGBA = (0, 0, 0, 255)
    axis_color: RGBA = (0, 0, 0, 255)
    surface_alpha: float = 0.2
    ticker_format: str = "%H:%M"
    balloon_format: str = "%d %b %Y"
    balloon_unit: str = ""
    ticker_font_px: float = 12.0
    screen_scale: float = 0.5
    dash_lengths: tuple[int, int] = (7, 3)
    line_width: int = 2
    insets: PlotInsets = PlotInsets()
    selection_radius: float = DEFAULT_SELECTION_RADIUS
    deselect_delay_s: float = DEFAULT_DESELECT_DELAY_S

    def __post_init__(self) -> None:
        if not 0.0 <= self.surface_alpha <= 1.0:
            raise ValueError("surface_alpha must be in [0, 1]")
        if self.ticker_font_px <= 0:
            raise ValueError("ticker_font_px must be > 0")
        if self.screen_scale <= 0:
            raise ValueError("screen_scale must be > 0")
        if self.selection_radius <= 0:
            raise ValueError("selection_radius must be > 0")
        if self.deselect_delay_s <= 0:
            raise ValueError("deselect_delay_s must be > 0")
        if self.line_width <= 0:
            raise ValueError("line_width must be > 0")
        if len(self.dash_lengths) != 2 or min(self.dash_lengths) <= 0:
            raise ValueError("dash_lengths must be two positive lengths")
