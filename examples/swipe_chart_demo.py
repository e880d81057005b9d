from __future__ import annotations

from datetime import datetime, timedelta
import logging
from pathlib import Path
from zoneinfo import ZoneInfo

import numpy as np
from PIL import Image

from swipechart import Chart, ChartRenderer, ChartStyle, date_to_key


LOGGER = logging.getLogger(__name__)

TZ = ZoneInfo("Europe/Rome")
PAGE = timedelta(days=7)


class WeekPager:
    """Shows one week of a daily log and pages through it on swipes."""

    def __init__(self, chart: Chart, keys: np.ndarray, values: np.ndarray, start: datetime) -> None:
        self.chart = chart
        self.keys = keys
        self.values = values
        self.start = start
        chart.delegate = self

    def emit_swipe(self, direction: bool) -> None:
        self.start += -PAGE if direction else PAGE
        self.show()

    def emit_long_press(self, chart: Chart) -> None:
        if chart.tooltip is not None:
            LOGGER.info("selected %s on %s", chart.tooltip.value_text, chart.tooltip.date_text)

    def show(self) -> None:
        lower = date_to_key(self.start, TZ)
        upper = date_to_key(self.start + PAGE, TZ)
        page = (self.keys >= lower) & (self.keys < upper)
        # Data X positions start at the first key, so each page begins on the window's lower bound.
        self.chart.set_tick_origin("x", lower)
        self.chart.set_range_x(lower, upper)
        self.chart.set_data(self.keys[page], self.values[page])
        self.chart.set_status([datetime.fromtimestamp(k, TZ).weekday() >= 5 for k in self.keys[page].tolist()])


def _daily_log(start: datetime, days: int) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(7)
    keys = np.asarray([date_to_key(start + timedelta(days=i), TZ) for i in range(days)])
    values = np.round(72.0 + np.cumsum(rng.normal(0.0, 0.3, days)), 1)
    # Skipped entries.
    values[[5, 6, 17]] = np.nan
    return keys, values


def _save_rgba(path: Path, frame: np.ndarray) -> None:
    Image.fromarray(frame, mode="RGBA").save(path)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    style = ChartStyle(ticker_format="%d/%m", balloon_unit="kg", background=(255, 255, 255, 255))
    chart = Chart(640, 320, style=style, tz=TZ, x_kind="date", tick_count_x=7)
    chart.set_range_y(68.0, 76.0)

    first_day = datetime(2024, 3, 4, 7, 30, tzinfo=TZ)
    keys, values = _daily_log(first_day, 28)
    pager = WeekPager(chart, keys, values, start=first_day + 2 * PAGE)
    pager.show()

    renderer = ChartRenderer(chart)
    frames = {"swipe_demo_week.png": renderer.render()}

    positions = chart.point_positions()
    if positions is not None:
        px, py = positions
        finite = np.flatnonzero(np.isfinite(py))
        if finite.size:
            i = int(finite[finite.size // 2])
            chart.on_long_press((float(px[i]), float(py[i])))
    frames["swipe_demo_selected.png"] = renderer.render()

    chart.on_swipe("right")
    frames["swipe_demo_previous_week.png"] = renderer.render()

    for name, frame in frames.items():
        _save_rgba(out_dir / name, frame)
        print(f"wrote {out_dir / name}")


if __name__ == "__main__":
    main()
