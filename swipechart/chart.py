from __future__ import annotations

from datetime import timezone, tzinfo
import logging
import time
from typing import Any, Callable, Literal, Protocol

import numpy as np

from swipechart.adapters import normalize_keys, normalize_status, normalize_values
from swipechart.axis import Axis, AxisKind, AxisName
from swipechart.dates import format_date
from swipechart.hit_test import HitResult, hit_test
from swipechart.mapping import CoordinateMapper, VisibleBounds
from swipechart.scales import AxisRange, TickSet
from swipechart.selection import DeselectTimer, SelectionState, Tooltip
from swipechart.series import DataSeries
from swipechart.style import ChartStyle


LOGGER = logging.getLogger(__name__)

SwipeDirection = Literal["left", "right"]

DEFAULT_RANGE_X = (0.0, 100.0)
DEFAULT_RANGE_Y = (-20.0, 150.0)


class ChartDelegate(Protocol):
    def emit_swipe(self, direction: bool) -> None: ...

    def emit_long_press(self, chart: "Chart") -> None: ...


class Chart:
    """Interactive chart core: ranges, data, ticks, pixel mapping and point selection.

    Every mutation replaces state wholesale and recomputes synchronously, so a
    read (render or hit test) right after a setter always sees fresh ticks.
    Drawing code polls ``needs_display`` and resets it after a repaint.
    """

    def __init__(
        self,
        width: float = 320.0,
        height: float = 200.0,
        *,
        style: ChartStyle | None = None,
        tz: tzinfo = timezone.utc,
        x_kind: AxisKind = "numeric",
        y_kind: AxisKind = "numeric",
        tick_count_x: int = 5,
        tick_count_y: int = 5,
        delegate: ChartDelegate | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.style = style if style is not None else ChartStyle()
        self.tz = tz
        self.delegate = delegate
        self._clock = clock
        self._width = 0.0
        self._height = 0.0
        self.set_size(width, height)
        self.x_axis = Axis("x", AxisRange(*DEFAULT_RANGE_X), kind=x_kind, tick_count=tick_count_x, tz=tz)
        self.y_axis = Axis("y", AxisRange(*DEFAULT_RANGE_Y), kind=y_kind, tick_count=tick_count_y, tz=tz)
        self._series = DataSeries()
        self._already_sorted = True
        self._selection = SelectionState(timer=DeselectTimer(delay=self.style.deselect_delay_s))
        self.needs_display = True

    @property
    def size(self) -> tuple[float, float]:
        return (self._width, self._height)

    @property
    def series(self) -> DataSeries:
        return self._series

    @property
    def already_sorted(self) -> bool:
        return self._already_sorted

    @property
    def selected(self) -> int | None:
        return self._selection.selected

    @property
    def tooltip(self) -> Tooltip | None:
        return self._selection.tooltip

    @property
    def deselect_timer(self) -> DeselectTimer:
        return self._selection.timer

    def axis(self, name: AxisName) -> Axis:
        if name == "x":
            return self.x_axis
        if name == "y":
            return self.y_axis
        raise ValueError("axis must be 'x' or 'y'")

    def set_size(self, width: float, height: float) -> "Chart":
        insets = self.style.insets
        if width - insets.left - insets.right <= 0 or height - insets.top - insets.bottom <= 0:
            raise ValueError("chart size leaves no plot area inside the insets")
        self._width = float(width)
        self._height = float(height)
        self.needs_display = True
        return self

    def set_range(self, axis: AxisName, lower: float, upper: float) -> bool:
        """Store a new range and regenerate that axis; out-of-order bounds are ignored."""

        changed = self.axis(axis).set_range(lower, upper)
        if changed:
            self.needs_display = True
        return changed

    def set_range_x(self, lower: float, upper: float) -> bool:
        return self.set_range("x", lower, upper)

    def set_range_y(self, lower: float, upper: float) -> bool:
        return self.set_range("y", lower, upper)

    def set_axis_kind(self, axis: AxisName, kind: AxisKind) -> "Chart":
        self.axis(axis).set_kind(kind)
        self.needs_display = True
        return self

    def set_tick_count(self, axis: AxisName, tick_count: int) -> "Chart":
        self.axis(axis).set_tick_count(tick_count)
        self.needs_display = True
        return self

    def set_tick_origin(self, axis: AxisName, origin: float) -> "Chart":
        self.axis(axis).set_origin(origin)
        self.needs_display = True
        return self

    def set_time_zone(self, tz: tzinfo) -> "Chart":
        self.tz = tz
        self.x_axis.set_time_zone(tz)
        self.y_axis.set_time_zone(tz)
        self.needs_display = True
        return self

    def set_data(self, keys: Any, values: Any, already_sorted: bool = True) -> None:
        """Replace the data; the longer of ``keys``/``values`` is truncated to the shorter.

        With ``already_sorted=False`` points are stably sorted by key first.
        """

        key_arr = normalize_keys(keys, tz=self.tz)
        value_arr = normalize_values(values)
        if key_arr.size != value_arr.size:
            LOGGER.debug("truncating data to %d points (keys=%d, values=%d)", min(key_arr.size, value_arr.size), key_arr.size, value_arr.size)
        self._already_sorted = bool(already_sorted)
        series = DataSeries.from_arrays(key_arr, value_arr, already_sorted=already_sorted)
        self._series = series.with_status(self._series.disabled)
        self.unselect()

    def clear_data(self) -> None:
        self.unselect()
        self._already_sorted = True
        self._series = DataSeries()
        self.needs_display = True

    def set_status(self, mask: Any) -> None:
        self._series = self._series.with_status(normalize_status(mask))
        self.needs_display = True

    def is_disabled(self, index: int) -> bool:
        return self._series.is_disabled(index)

    def ticks(self, axis: AxisName) -> TickSet:
        return self.axis(axis).ticks

    def visible_bounds(self) -> VisibleBounds | None:
        span_x = self.x_axis.visible_span()
        span_y = self.y_axis.visible_span()
        if span_x is None or span_y is None:
            return None
        return VisibleBounds(lmin_x=span_x[0], lmax_x=span_x[1], lmin_y=span_y[0], lmax_y=span_y[1])

    def mapper(self) -> CoordinateMapper | None:
        bounds = self.visible_bounds()
        if bounds is None:
            return None
        return CoordinateMapper(bounds=bounds, width=self._width, height=self._height, insets=self.style.insets)

    def map_to_pixel(self, key: float, value: float) -> tuple[float, float] | None:
        mapper = self.mapper()
        if mapper is None:
            return None
        return mapper.map_to_pixel(key, value)

    def point_positions(self) -> tuple[np.ndarray, np.ndarray] | None:
        mapper = self.mapper()
        if mapper is None:
            return None
        return mapper.points(self._series.keys, self._series.values)

    def hit_test(self, point: tuple[float, float]) -> HitResult | None:
        mapper = self.mapper()
        if mapper is None:
            return None
        return hit_test(mapper, self._series, point, radius=self.style.selection_radius)

    def format_value(self, value: float) -> str:
        return f"{value:.2f} {self.style.balloon_unit}".rstrip()

    def on_long_press(self, point: tuple[float, float], now: float | None = None) -> Tooltip | None:
        now = self._clock() if now is None else now
        hit = self.hit_test(point)
        tooltip: Tooltip | None = None
        if hit is None:
            self.unselect()
        else:
            tooltip = Tooltip(
                index=hit.index,
                anchor=(hit.x, hit.y),
                value_text=self.format_value(float(self._series.values[hit.index])),
                date_text=format_date(float(self._series.keys[hit.index]), self.style.balloon_format, self.tz),
            )
            self._selection.select(tooltip, now)
        self.needs_display = True
        if self.delegate is not None:
            self.delegate.emit_long_press(self)
        return tooltip

    def on_swipe(self, direction: SwipeDirection) -> None:
        if direction not in {"left", "right"}:
            raise ValueError("direction must be 'left' or 'right'")
        self.unselect()
        if self.delegate is not None:
            self.delegate.emit_swipe(direction == "right")

    def unselect(self) -> None:
        self._selection.clear()
        self.needs_display = True

    def poll(self, now: float | None = None) -> bool:
        """Fire the deselect timer if due; returns True when the selection was dropped."""

        now = self._clock() if now is None else now
        if self._selection.poll(now):
            self.needs_display = True
            return True
        return False

    def expire_selection(self, token: int) -> bool:
        if self._selection.expire(token):
            self.needs_display = True
            return True
        return False
