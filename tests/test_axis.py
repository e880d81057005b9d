from __future__ import annotations

from datetime import datetime
import unittest
from zoneinfo import ZoneInfo

from swipechart.axis import Axis
from swipechart.dates import SECONDS_PER_DAY, date_to_key, key_to_date
from swipechart.scales import AxisRange


ROME = ZoneInfo("Europe/Rome")


class AxisTests(unittest.TestCase):
    def test_numeric_x_axis_ticks_and_visible_span(self) -> None:
        axis = Axis("x", AxisRange(0.0, 100.0))
        self.assertEqual(axis.ticks.as_tuple(), (0.0, 20.0, 40.0, 60.0, 80.0, 100.0))
        self.assertEqual(axis.ticks.step, 20.0)
        # Whole steps from the first tick, one past the last.
        self.assertEqual(axis.visible_span(), (0.0, 120.0))

    def test_y_axis_visible_span_is_configured_range(self) -> None:
        axis = Axis("y", AxisRange(-20.0, 150.0))
        self.assertEqual(axis.visible_span(), (-20.0, 150.0))

    def test_invalid_range_is_ignored(self) -> None:
        axis = Axis("x", AxisRange(0.0, 100.0))
        before = axis.ticks.as_tuple()
        self.assertFalse(axis.set_range(10.0, 10.0))
        self.assertFalse(axis.set_range(50.0, 0.0))
        self.assertEqual(axis.axis_range, AxisRange(0.0, 100.0))
        self.assertEqual(axis.ticks.as_tuple(), before)

    def test_set_range_regenerates_ticks(self) -> None:
        axis = Axis("x", AxisRange(0.0, 100.0))
        self.assertTrue(axis.set_range(0.0, 10.0))
        self.assertEqual(axis.ticks.as_tuple(), (0.0, 2.0, 4.0, 6.0, 8.0, 10.0))

    def test_origin_and_outlier_flags(self) -> None:
        axis = Axis("x", AxisRange(0.0, 100.0), origin=5.0)
        self.assertEqual(axis.ticks.as_tuple(), (5.0, 25.0, 45.0, 65.0, 85.0))
        axis.keep_one_outlier = True
        axis.regenerate()
        self.assertEqual(axis.ticks.as_tuple(), (-15.0, 5.0, 25.0, 45.0, 65.0, 85.0, 105.0))

    def test_rejects_bad_configuration(self) -> None:
        with self.assertRaises(ValueError):
            Axis("x", AxisRange(0.0, 1.0), tick_count=0)
        with self.assertRaises(ValueError):
            Axis("z", AxisRange(0.0, 1.0))  # type: ignore[arg-type]
        axis = Axis("y", AxisRange(0.0, 1.0))
        with self.assertRaises(ValueError):
            axis.set_tick_count(0)
        with self.assertRaises(ValueError):
            axis.set_kind("log")  # type: ignore[arg-type]

    def test_date_kind_reports_strategy(self) -> None:
        axis = Axis("x", AxisRange(0.0, 10 * SECONDS_PER_DAY), kind="date")
        self.assertEqual(axis.last_strategy, "uniform_time_in_day")
        self.assertEqual(axis.ticks.step, 2 * SECONDS_PER_DAY)
        axis.set_kind("numeric")
        self.assertEqual(axis.last_strategy, "none")

    def test_dst_correction_applies_to_y_only(self) -> None:
        origin = date_to_key(datetime(2024, 3, 1, 8, 30, tzinfo=ROME))
        axis_range = AxisRange(origin, origin + 60 * SECONDS_PER_DAY)
        x_axis = Axis("x", axis_range, kind="date", origin=origin, tz=ROME)
        y_axis = Axis("y", axis_range, kind="date", origin=origin, tz=ROME)

        x_hours = [key_to_date(k, ROME).hour for k in x_axis.ticks.values.tolist()]
        y_hours = [key_to_date(k, ROME).hour for k in y_axis.ticks.values.tolist()]
        self.assertEqual(set(x_hours), {8})
        # Ticks past the spring-forward switch move back one hour.
        self.assertIn(7, y_hours)
        self.assertEqual(y_hours[0], 8)

    def test_overflowing_span_yields_empty_ticks(self) -> None:
        axis = Axis("x", AxisRange(0.0, 100.0))
        self.assertTrue(axis.set_range(-1e308, 1e308))
        self.assertEqual(axis.axis_range, AxisRange(-1e308, 1e308))
        self.assertTrue(axis.ticks.is_empty)
        self.assertIsNone(axis.visible_span())

    def test_dates_past_calendar_yield_empty_ticks(self) -> None:
        axis = Axis("x", AxisRange(0.0, 100.0), kind="date")
        self.assertTrue(axis.set_range(0.0, 1e12))
        self.assertEqual(axis.axis_range, AxisRange(0.0, 1e12))
        self.assertTrue(axis.ticks.is_empty)
        self.assertEqual(axis.last_strategy, "none")

    def test_axis_recovers_after_degenerate_range(self) -> None:
        axis = Axis("y", AxisRange(0.0, 100.0))
        axis.set_range(-1e308, 1e308)
        self.assertTrue(axis.set_range(0.0, 10.0))
        self.assertEqual(axis.ticks.as_tuple(), (0.0, 2.0, 4.0, 6.0, 8.0, 10.0))


if __name__ == "__main__":
    unittest.main()
