from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
import math
from typing import Sequence

import numpy as np


MANTISSA_CANDIDATES = (1.0, 2.0, 2.5, 5.0, 10.0)
# Added to the tick count so ranges that are exact multiples of it don't jitter between two steps.
TICK_COUNT_EPSILON = 1e-10


@dataclass(frozen=True)
class AxisRange:
    lower: float
    upper: float

    def __post_init__(self) -> None:
        if not (self.lower < self.upper):
            raise ValueError("range lower bound must be < upper bound")

    @property
    def span(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True, eq=False)
class TickSet:
    """Ascending tick coordinates together with the step and origin that produced them."""

    values: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))
    step: float = 0.0
    origin: float = 0.0

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def is_empty(self) -> bool:
        return self.values.size == 0

    @property
    def first(self) -> float | None:
        if self.values.size == 0:
            return None
        return float(self.values[0])

    def as_tuple(self) -> tuple[float, ...]:
        return tuple(float(v) for v in self.values)


def get_mantissa(value: float) -> tuple[float, float]:
    """Split ``value`` into ``(mantissa, magnitude)``.

    For example 142.6 gives a mantissa of 1.426 and a magnitude of 100.
    """

    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"mantissa is undefined for {value!r}")
    magnitude = 10.0 ** math.floor(math.log10(value))
    return value / magnitude, magnitude


def pick_closest(target: float, candidates: Sequence[float]) -> float:
    if not candidates:
        raise ValueError("candidates must not be empty")
    if len(candidates) == 1:
        return float(candidates[0])

    index = 0
    for candidate in candidates:
        if target < candidate:
            break
        index += 1

    if index >= len(candidates):
        return float(candidates[-1])
    if index == 0:
        return float(candidates[0])

    lower = candidates[index - 1]
    upper = candidates[index]
    # Ties go to the larger candidate.
    return float(lower if target - lower < upper - target else upper)


def clean_mantissa(value: float) -> float:
    """Return a number close to ``value`` whose mantissa is one of 1, 2, 2.5, 5 or 10."""

    mantissa, magnitude = get_mantissa(value)
    return pick_closest(mantissa, MANTISSA_CANDIDATES) * magnitude


def raw_tick_step(axis_range: AxisRange, tick_count: int) -> float:
    return axis_range.span / (float(tick_count) + TICK_COUNT_EPSILON)


def tick_step(axis_range: AxisRange, tick_count: int) -> float:
    return clean_mantissa(raw_tick_step(axis_range, tick_count))


def create_tick_vector(step: float, origin: float, axis_range: AxisRange) -> np.ndarray:
    """Every ``origin + k * step`` from the step at or below the range to the step at or above it."""

    if not math.isfinite(step) or step <= 0:
        return np.zeros(0, dtype=np.float64)
    first_step = math.floor((axis_range.lower - origin) / step)
    last_step = math.ceil((axis_range.upper - origin) / step)
    count = max(0, last_step - first_step + 1)
    k = np.arange(first_step, first_step + count, dtype=np.float64)
    return origin + k * step


def trim_ticks(ticks: np.ndarray, axis_range: AxisRange, *, keep_one_outlier: bool = False) -> np.ndarray:
    """Clip ascending ``ticks`` to ``axis_range``.

    Ticks that don't reach into the range from both sides are unusable and
    produce an empty result. With ``keep_one_outlier`` one tick beyond each
    bound survives, which keeps grid lines smooth while panning.
    """

    count = int(ticks.size)
    low_hits = np.flatnonzero(ticks >= axis_range.lower)
    high_hits = np.flatnonzero(ticks <= axis_range.upper)
    if low_hits.size == 0 or high_hits.size == 0:
        return np.zeros(0, dtype=np.float64)

    low_index = int(low_hits[0])
    high_index = int(high_hits[-1])
    slack = 1 if keep_one_outlier else 0
    trim_front = max(0, low_index - slack)
    trim_back = max(0, count - 1 - high_index - slack)
    return ticks[trim_front : count - trim_back].copy()


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    decimals = _decimals_from_step(step) if step is not None else 6
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e9 or abs_v < 1e-6):
        return f"{value:.3e}"

    quant = Decimal("1").scaleb(-decimals)
    try:
        out = format(Decimal(str(value)).quantize(quant), "f")
    except InvalidOperation:
        out = repr(value)
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: TickSet | np.ndarray) -> list[str]:
    values = ticks.values if isinstance(ticks, TickSet) else ticks
    if values.size == 0:
        return []
    if isinstance(ticks, TickSet) and ticks.step > 0:
        step = ticks.step
    elif values.size > 1:
        step = float(abs(values[1] - values[0]))
    else:
        return [format_tick(float(values[0]))]
    return [format_tick(float(v), step=step) for v in values]


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    exp = Decimal(repr(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exp)))
