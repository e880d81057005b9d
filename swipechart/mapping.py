from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PlotInsets:
    top: float = 5.0
    bottom: float = 15.0
    left: float = 15.0
    right: float = 40.0


@dataclass(frozen=True)
class VisibleBounds:
    lmin_x: float
    lmax_x: float
    lmin_y: float
    lmax_y: float


@dataclass(frozen=True)
class CoordinateMapper:
    """Maps chart coordinates into the pixel space of a ``width`` x ``height`` widget.

    X is accumulated from key deltas (see ``x_positions``); Y is affine over the
    visible Y bounds, growing downwards.
    """

    bounds: VisibleBounds
    width: float
    height: float
    insets: PlotInsets = PlotInsets()

    def __post_init__(self) -> None:
        if self.plot_width <= 0 or self.plot_height <= 0:
            raise ValueError("plot area width/height must be > 0")
        if not (self.bounds.lmax_x > self.bounds.lmin_x) or not (self.bounds.lmax_y > self.bounds.lmin_y):
            raise ValueError("visible bounds must have positive span")

    @property
    def plot_width(self) -> float:
        return self.width - self.insets.right - self.insets.left

    @property
    def plot_height(self) -> float:
        return self.height - self.insets.bottom - self.insets.top

    @property
    def plot_bottom(self) -> float:
        return self.height - self.insets.bottom

    @property
    def plot_right(self) -> float:
        return self.width - self.insets.right

    @property
    def coe_y(self) -> float:
        return self.plot_height / (self.bounds.lmax_y - self.bounds.lmin_y)

    def x_positions(self, keys: np.ndarray) -> np.ndarray:
        """Pixel X for an ascending coordinate sequence (data keys or ticks).

        The first entry sits on the left edge of the plot area; each following
        one advances by its delta from the previous entry, scaled by the visible
        X span. Data points and tick marks both go through here so they share
        one scale.
        """

        keys = np.asarray(keys, dtype=np.float64)
        if keys.size == 0:
            return np.zeros(0, dtype=np.float64)
        span = self.bounds.lmax_x - self.bounds.lmin_x
        steps = self.plot_width * (np.diff(keys) / span)
        return np.concatenate(([0.0], np.cumsum(steps))) + self.insets.left

    def y_positions(self, values: np.ndarray) -> np.ndarray:
        values = np.asarray(values, dtype=np.float64)
        return self.coe_y * (self.bounds.lmax_y - values) + self.insets.top

    def y_position(self, value: float) -> float:
        return float(self.coe_y * (self.bounds.lmax_y - value) + self.insets.top)

    def x_position(self, key: float) -> float:
        span = self.bounds.lmax_x - self.bounds.lmin_x
        return float(self.insets.left + self.plot_width * ((key - self.bounds.lmin_x) / span))

    def map_to_pixel(self, key: float, value: float) -> tuple[float, float]:
        return (self.x_position(key), self.y_position(value))

    def points(self, keys: np.ndarray, values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        return self.x_positions(keys), self.y_positions(values)

    def baseline_y(self, value: float, *, y_lower: float, y_upper: float) -> float:
        """Where a filled surface closes: the zero line if visible, else the nearer plot edge."""

        if y_lower <= 0 <= y_upper:
            return self.y_position(0.0)
        return self.plot_bottom if value > 0 else self.insets.top
