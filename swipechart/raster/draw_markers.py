from __future__ import annotations

import numpy as np

from swipechart.raster.canvas import RGBA, fill_circle


RING_CENTER_COLOR: RGBA = (255, 255, 255, 255)


def draw_ring_marker(dst: np.ndarray, x: float, y: float, radius: float, color: RGBA) -> None:
    """A filled disc of ``color`` with a white center of half the radius."""

    fill_circle(dst, x, y, radius, color)
    fill_circle(dst, x, y, radius * 0.5, RING_CENTER_COLOR)
