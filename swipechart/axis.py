from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone, tzinfo
import logging
from typing import Literal

import numpy as np

from swipechart.dates import DateStrategy, correct_dst, create_date_tick_vector, tick_step_date
from swipechart.scales import AxisRange, TickSet, create_tick_vector, tick_step, trim_ticks


LOGGER = logging.getLogger(__name__)

AxisName = Literal["x", "y"]
AxisKind = Literal["numeric", "date"]


@dataclass
class Axis:
    """One chart axis: its configuration plus the tick set generated from it.

    The tick set is rebuilt in full whenever the range, kind, tick count,
    origin or time zone changes.
    """

    name: AxisName
    axis_range: AxisRange
    kind: AxisKind = "numeric"
    tick_count: int = 5
    origin: float = 0.0
    keep_one_outlier: bool = False
    tz: tzinfo = timezone.utc

    _ticks: TickSet = field(default_factory=TickSet)
    _strategy: DateStrategy = "none"

    def __post_init__(self) -> None:
        if self.name not in {"x", "y"}:
            raise ValueError("axis name must be 'x' or 'y'")
        if self.kind not in {"numeric", "date"}:
            raise ValueError("axis kind must be 'numeric' or 'date'")
        if self.tick_count < 1:
            raise ValueError("tick_count must be >= 1")
        self.regenerate()

    @property
    def ticks(self) -> TickSet:
        return self._ticks

    @property
    def last_strategy(self) -> DateStrategy:
        return self._strategy

    def set_range(self, lower: float, upper: float) -> bool:
        if not (lower < upper):
            LOGGER.debug("rejected %s range (%r, %r)", self.name, lower, upper)
            return False
        axis_range = AxisRange(float(lower), float(upper))
        self._store(axis_range, *self._generate(axis_range))
        return True

    def set_kind(self, kind: AxisKind) -> "Axis":
        if kind not in {"numeric", "date"}:
            raise ValueError("axis kind must be 'numeric' or 'date'")
        self.kind = kind
        self.regenerate()
        return self

    def set_tick_count(self, tick_count: int) -> "Axis":
        if tick_count < 1:
            raise ValueError("tick_count must be >= 1")
        self.tick_count = int(tick_count)
        self.regenerate()
        return self

    def set_origin(self, origin: float) -> "Axis":
        self.origin = float(origin)
        self.regenerate()
        return self

    def set_time_zone(self, tz: tzinfo) -> "Axis":
        self.tz = tz
        self.regenerate()
        return self

    def regenerate(self) -> TickSet:
        self._store(self.axis_range, *self._generate(self.axis_range))
        return self._ticks

    def _generate(self, axis_range: AxisRange) -> tuple[np.ndarray, float, DateStrategy]:
        try:
            if self.kind == "date":
                step, strategy = tick_step_date(axis_range, self.tick_count)
                values = create_date_tick_vector(step, self.origin, axis_range, strategy=strategy, tz=self.tz)
                values = trim_ticks(values, axis_range, keep_one_outlier=self.keep_one_outlier)
                if self.name == "y":
                    values = correct_dst(values, self.origin, self.tz)
            else:
                step, strategy = tick_step(axis_range, self.tick_count), "none"
                values = create_tick_vector(step, self.origin, axis_range)
                values = trim_ticks(values, axis_range, keep_one_outlier=self.keep_one_outlier)
        except (ValueError, OverflowError, OSError) as exc:
            # Spans that overflow a float or dates past the calendar's reach.
            LOGGER.debug("%s axis cannot tick %s: %s", self.name, axis_range, exc)
            return np.zeros(0, dtype=np.float64), 0.0, "none"
        return values, step, strategy

    def _store(self, axis_range: AxisRange, values: np.ndarray, step: float, strategy: DateStrategy) -> None:
        self.axis_range = axis_range
        self._strategy = strategy
        self._ticks = TickSet(values=values, step=step, origin=self.origin)
        if values.size == 0:
            LOGGER.debug("%s axis produced no ticks for %s", self.name, axis_range)

    def visible_span(self) -> tuple[float, float] | None:
        """The interval used to map this axis to pixels, or None when there is nothing to draw.

        X spans whole tick steps from the first tick and may run past the
        configured upper bound; Y is the configured range itself.
        """

        if self._ticks.is_empty:
            return None
        if self.name == "x":
            lmin = float(self._ticks.values[0])
            return (lmin, lmin + self._ticks.step * len(self._ticks))
        return (self.axis_range.lower, self.axis_range.upper)
