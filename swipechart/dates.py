from __future__ import annotations

import calendar
from datetime import datetime, timezone, tzinfo
import logging
from typing import Literal

import numpy as np

from swipechart.scales import AxisRange, clean_mantissa, create_tick_vector, pick_closest, raw_tick_step


LOGGER = logging.getLogger(__name__)

DateStrategy = Literal["none", "uniform_time_in_day", "uniform_day_in_month"]

SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
# Average month and year lengths, leap years included.
SECONDS_PER_MONTH = SECONDS_PER_DAY * 30.4375
SECONDS_PER_YEAR = SECONDS_PER_MONTH * 12

DATE_STEP_LADDER = (
    # seconds, minutes, hours
    1.0,
    2.5,
    5.0,
    10.0,
    15.0,
    30.0,
    60.0,
    2.5 * 60,
    5.0 * 60,
    10.0 * 60,
    15.0 * 60,
    30.0 * 60,
    SECONDS_PER_HOUR,
    # hours to a day
    SECONDS_PER_HOUR * 2,
    SECONDS_PER_HOUR * 3,
    SECONDS_PER_HOUR * 6,
    SECONDS_PER_HOUR * 12,
    SECONDS_PER_DAY,
    # days, weeks, months
    SECONDS_PER_DAY * 2,
    SECONDS_PER_DAY * 5,
    SECONDS_PER_DAY * 7,
    SECONDS_PER_DAY * 14,
    SECONDS_PER_MONTH,
    SECONDS_PER_MONTH * 2,
    SECONDS_PER_MONTH * 3,
    SECONDS_PER_MONTH * 6,
    SECONDS_PER_YEAR,
)

# A clamped day this far from the naive tick day means the tick rolled into a neighbouring month.
MONTH_ROLL_THRESHOLD_DAYS = 15


def date_to_key(value: datetime, tz: tzinfo = timezone.utc) -> float:
    """Seconds since the epoch for ``value``; naive datetimes are read in ``tz``."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.timestamp()


def key_to_date(key: float, tz: tzinfo = timezone.utc) -> datetime:
    return datetime.fromtimestamp(float(key), tz)


def format_date(key: float, fmt: str, tz: tzinfo = timezone.utc) -> str:
    return key_to_date(key, tz).strftime(fmt)


def is_dst(key: float, tz: tzinfo) -> bool:
    offset = key_to_date(key, tz).dst()
    return bool(offset)


def add_months(value: datetime, months: int) -> datetime:
    """Shift ``value`` by whole calendar months, clamping the day to the target month."""

    index = value.year * 12 + (value.month - 1) + months
    year, month0 = divmod(index, 12)
    day = min(value.day, calendar.monthrange(year, month0 + 1)[1])
    return value.replace(year=year, month=month0 + 1, day=day)


def tick_step_date(axis_range: AxisRange, tick_count: int) -> tuple[float, DateStrategy]:
    """Pick a calendar-friendly step (seconds, minutes, ..., months, years) for ``axis_range``.

    The step only guides ``create_date_tick_vector``: months and years have
    uneven lengths, so the returned strategy tells the generator how to re-align
    each tick to a day or time of day instead of using the raw multiple.
    """

    step = raw_tick_step(axis_range, tick_count)
    strategy: DateStrategy = "none"
    if step < 1.0:
        step = clean_mantissa(step)
    elif step < SECONDS_PER_YEAR:
        step = pick_closest(step, DATE_STEP_LADDER)
        if step > SECONDS_PER_MONTH - 1:
            strategy = "uniform_day_in_month"
        elif step > SECONDS_PER_DAY - 1:
            strategy = "uniform_time_in_day"
    else:
        step = clean_mantissa(step / SECONDS_PER_YEAR) * SECONDS_PER_YEAR
        strategy = "uniform_day_in_month"
    return step, strategy


def create_date_tick_vector(
    step: float,
    origin: float,
    axis_range: AxisRange,
    *,
    strategy: DateStrategy,
    tz: tzinfo,
) -> np.ndarray:
    ticks = create_tick_vector(step, origin, axis_range)
    if ticks.size == 0 or strategy == "none":
        return ticks

    uniform = key_to_date(origin, tz)
    if strategy == "uniform_time_in_day":
        adjusted = [_with_time_of(key_to_date(t, tz), uniform).timestamp() for t in ticks.tolist()]
    elif strategy == "uniform_day_in_month":
        adjusted = [_with_day_of(key_to_date(t, tz), uniform).timestamp() for t in ticks.tolist()]
    else:
        raise ValueError(f"unknown date strategy: {strategy}")

    # Re-alignment may collapse neighbouring raw ticks onto the same instant.
    unique = list(dict.fromkeys(adjusted))
    if len(unique) != len(adjusted):
        LOGGER.debug("date ticks collapsed from %d to %d under %s", len(adjusted), len(unique), strategy)
    return np.asarray(unique, dtype=np.float64)


def correct_dst(ticks: np.ndarray, origin: float, tz: tzinfo) -> np.ndarray:
    """Shift ticks whose DST state differs from the origin's by one hour."""

    if ticks.size == 0:
        return ticks
    origin_in_dst = is_dst(origin, tz)
    out = ticks.astype(np.float64, copy=True)
    for i, key in enumerate(out.tolist()):
        tick_in_dst = is_dst(key, tz)
        if tick_in_dst != origin_in_dst:
            out[i] = key + (-SECONDS_PER_HOUR if tick_in_dst else SECONDS_PER_HOUR)
    return out


def _with_time_of(tick: datetime, uniform: datetime) -> datetime:
    return tick.replace(hour=uniform.hour, minute=uniform.minute, second=uniform.second, microsecond=0)


def _with_day_of(tick: datetime, uniform: datetime) -> datetime:
    month_days = calendar.monthrange(tick.year, tick.month)[1]
    uniform_day = min(uniform.day, month_days)
    if uniform_day - tick.day < -MONTH_ROLL_THRESHOLD_DAYS:
        tick = add_months(tick, 1)
    elif uniform_day - tick.day > MONTH_ROLL_THRESHOLD_DAYS:
        tick = add_months(tick, -1)
    day = min(uniform.day, calendar.monthrange(tick.year, tick.month)[1])
    return tick.replace(
        day=day,
        hour=uniform.hour,
        minute=uniform.minute,
        second=uniform.second,
        microsecond=0,
    )
