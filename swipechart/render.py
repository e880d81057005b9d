from __future__ import annotations

import numpy as np

from swipechart.axis import AxisName
from swipechart.chart import Chart
from swipechart.dates import format_date
from swipechart.mapping import CoordinateMapper
from swipechart.raster import (
    blit,
    draw_dashed_vline,
    draw_hline,
    draw_ring_marker,
    draw_segment,
    draw_text,
    draw_vline,
    fill_polygon,
    fill_rounded_rect,
    new_canvas,
    text_size,
)
from swipechart.scales import TickSet, format_ticks_for_axis
from swipechart.selection import Tooltip
from swipechart.style import RGBA


SCATTER_RADIUS = 12.0
SELECTED_SCATTER_RADIUS = 20.0
CLIP_MARGIN = 6
BALLOON_FONT_PX = 18.0
BALLOON_DATE_FONT_PX = 10.0
BALLOON_COLOR: RGBA = (0, 0, 0, 178)
BALLOON_TEXT_COLOR: RGBA = (255, 255, 255, 255)


def finite_runs(values: np.ndarray) -> list[tuple[int, int]]:
    """Half-open ``(start, end)`` index runs of consecutive non-missing values."""

    idx = np.flatnonzero(np.isfinite(values))
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = start
    for v in idx[1:].tolist():
        if v == prev + 1:
            prev = v
            continue
        runs.append((start, prev + 1))
        start = v
        prev = v
    runs.append((start, prev + 1))
    return runs


def _with_alpha(color: RGBA, alpha: float) -> RGBA:
    return (color[0], color[1], color[2], int(max(0.0, min(1.0, alpha)) * color[3]))


class ChartRenderer:
    """Rasterizes a ``Chart`` into an RGBA ``(H, W, 4)`` uint8 array.

    Layers are painted back to front: grid, axis, tick labels, then the data
    layers (filled surface, lines, scatters, balloon) clipped to the plot area.
    """

    def __init__(self, chart: Chart) -> None:
        self.chart = chart

    def render(self) -> np.ndarray:
        chart = self.chart
        style = chart.style
        width = int(round(chart.size[0]))
        height = int(round(chart.size[1]))
        canvas = new_canvas(width, height, style.background)
        mapper = chart.mapper()
        if mapper is None:
            # An axis without ticks has nothing to map this frame.
            chart.needs_display = False
            return canvas

        ticks_x = chart.ticks("x")
        tick_px = mapper.x_positions(ticks_x.values)
        self._draw_grid(canvas, mapper, tick_px)
        self._draw_axis(canvas, mapper)
        self._draw_tickers(canvas, mapper, ticks_x, tick_px, chart.ticks("y"))

        data = new_canvas(width, height)
        px, py = mapper.points(chart.series.keys, chart.series.values)
        self._draw_surface(data, mapper, px, py)
        self._draw_lines(data, px, py)
        self._draw_scatters(data, mapper, px, py)
        if chart.tooltip is not None:
            self._draw_balloon(data, mapper, chart.tooltip)

        x0 = max(0, int(style.insets.left) - CLIP_MARGIN)
        y0 = max(0, int(style.insets.top) - CLIP_MARGIN)
        x1 = min(width, int(round(mapper.plot_right)) + 1)
        y1 = min(height, int(round(mapper.plot_bottom)) + 1)
        if x1 > x0 and y1 > y0:
            blit(canvas, data[y0:y1, x0:x1], x0, y0)
        chart.needs_display = False
        return canvas

    def tick_labels(self, axis: AxisName, ticks: TickSet) -> list[str]:
        chart = self.chart
        if chart.axis(axis).kind == "date":
            return [format_date(t, chart.style.ticker_format, chart.tz) for t in ticks.values.tolist()]
        return format_ticks_for_axis(ticks)

    def _draw_grid(self, canvas: np.ndarray, mapper: CoordinateMapper, tick_px: np.ndarray) -> None:
        style = self.chart.style
        top = int(round(style.insets.top))
        bottom = int(round(mapper.plot_bottom))
        for x in tick_px.tolist():
            draw_dashed_vline(canvas, int(round(x)), top, bottom, style.grid_color, dash=style.dash_lengths)

    def _draw_axis(self, canvas: np.ndarray, mapper: CoordinateMapper) -> None:
        style = self.chart.style
        y = int(round(mapper.plot_bottom))
        draw_hline(canvas, int(round(style.insets.left)), int(round(mapper.plot_right)), y, style.axis_color)

    def _draw_tickers(
        self,
        canvas: np.ndarray,
        mapper: CoordinateMapper,
        ticks_x: TickSet,
        tick_px: np.ndarray,
        ticks_y: TickSet,
    ) -> None:
        style = self.chart.style
        font_px = style.ticker_font_px
        bottom = int(round(mapper.plot_bottom))
        for x, label in zip(tick_px.tolist(), self.tick_labels("x", ticks_x), strict=False):
            draw_text(canvas, x, bottom + 3, label, style.text_color, font_size_px=font_px, anchor="top_center")
            draw_vline(canvas, int(round(x)), bottom, bottom + 5, style.axis_color)

        label_x = mapper.plot_right + 10.0
        for value, label in zip(ticks_y.values.tolist(), self.tick_labels("y", ticks_y), strict=False):
            draw_text(
                canvas,
                label_x,
                mapper.y_position(value),
                label,
                style.text_color,
                font_size_px=font_px,
                anchor="middle_left",
            )

    def _draw_surface(self, layer: np.ndarray, mapper: CoordinateMapper, px: np.ndarray, py: np.ndarray) -> None:
        chart = self.chart
        color = _with_alpha(chart.style.line_color, chart.style.surface_alpha)
        y_range = chart.y_axis.axis_range
        values = chart.series.values
        # A missing value closes the current region; regions of one point have no area.
        for start, end in finite_runs(values):
            if end - start < 2:
                continue
            base = mapper.baseline_y(float(values[start]), y_lower=y_range.lower, y_upper=y_range.upper)
            polygon = [(float(px[start]), base)]
            polygon.extend((float(px[i]), float(py[i])) for i in range(start, end))
            polygon.append((float(px[end - 1]), base))
            fill_polygon(layer, polygon, color)

    def _draw_lines(self, layer: np.ndarray, px: np.ndarray, py: np.ndarray) -> None:
        chart = self.chart
        style = chart.style
        values = chart.series.values
        for i in range(1, values.size):
            if np.isnan(values[i]) or np.isnan(values[i - 1]):
                continue
            disabled = chart.is_disabled(i) and chart.is_disabled(i - 1)
            draw_segment(
                layer,
                float(px[i - 1]),
                float(py[i - 1]),
                float(px[i]),
                float(py[i]),
                color=style.disabled_color if disabled else style.line_color,
                width=style.line_width,
            )

    def _draw_scatters(self, layer: np.ndarray, mapper: CoordinateMapper, px: np.ndarray, py: np.ndarray) -> None:
        chart = self.chart
        style = chart.style
        bounds = mapper.bounds
        keys = chart.series.keys
        values = chart.series.values
        for i in range(keys.size):
            value = float(values[i])
            key = float(keys[i])
            if np.isnan(value) or key < bounds.lmin_x or key > bounds.lmax_x:
                continue
            if value < bounds.lmin_y or value > bounds.lmax_y:
                continue
            radius = SELECTED_SCATTER_RADIUS if i == chart.selected else SCATTER_RADIUS
            color = style.disabled_color if chart.is_disabled(i) else style.scatter_color
            draw_ring_marker(layer, float(px[i]), float(py[i]), radius * style.screen_scale, color)

    def _draw_balloon(self, layer: np.ndarray, mapper: CoordinateMapper, tooltip: Tooltip) -> None:
        style = self.chart.style
        value_w, value_h = text_size(tooltip.value_text, font_size_px=BALLOON_FONT_PX)
        date_w, date_h = text_size(tooltip.date_text, font_size_px=BALLOON_DATE_FONT_PX)
        bw = max(value_w, date_w) + 10
        bh = value_h + date_h + 10
        bx = tooltip.anchor[0] - bw / 2.0
        bx = max(bx, style.insets.left)
        bx = min(bx, mapper.width - style.insets.right - bw)
        by = mapper.plot_bottom - 45
        x = int(round(bx))
        y = int(round(by))
        fill_rounded_rect(layer, x, y, bw, bh, 5, BALLOON_COLOR)
        draw_text(layer, x + 5, y + 5, tooltip.value_text, BALLOON_TEXT_COLOR, font_size_px=BALLOON_FONT_PX)
        draw_text(layer, x + 5, y + 5 + value_h, tooltip.date_text, BALLOON_TEXT_COLOR, font_size_px=BALLOON_DATE_FONT_PX)
