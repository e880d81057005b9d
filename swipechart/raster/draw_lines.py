from __future__ import annotations

import numpy as np

from swipechart.raster.canvas import RGBA, blend_mask, draw_vline


def draw_segment(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
    """Stroke a straight segment with a square brush of ``width`` pixels.

    The segment is clipped to the canvas first and the brush footprint is
    collected into one coverage mask, so translucent colors are blended once
    per pixel.
    """

    radius = max(0, width // 2)
    clipped = clip_segment(x0, y0, x1, y1, -radius, -radius, dst.shape[1] - 1 + radius, dst.shape[0] - 1 + radius)
    if clipped is None:
        return
    x0, y0, x1, y1 = (int(round(v)) for v in clipped)
    steps = max(abs(x1 - x0), abs(y1 - y0)) + 1
    xs = np.rint(np.linspace(x0, x1, steps)).astype(np.int64)
    ys = np.rint(np.linspace(y0, y1, steps)).astype(np.int64)
    left = int(xs.min()) - radius
    top = int(ys.min()) - radius
    mask = np.zeros((int(ys.max()) - top + radius + 1, int(xs.max()) - left + radius + 1), dtype=np.uint8)
    for oy in range(2 * radius + 1):
        for ox in range(2 * radius + 1):
            mask[ys - top - radius + oy, xs - left - radius + ox] = 255
    blend_mask(dst, left, top, mask, color)


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    xmin: float,
    ymin: float,
    xmax: float,
    ymax: float,
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a segment to a rectangle; None when nothing is inside."""

    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


def draw_dashed_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, dash: tuple[int, int] = (7, 3)) -> None:
    on, off = dash
    top = min(y0, y1)
    bottom = max(y0, y1)
    for y in range(top, bottom + 1, on + off):
        draw_vline(dst, x, y, min(bottom, y + on - 1), color)
