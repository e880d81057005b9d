from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from swipechart import Chart, ChartDataError, ChartStyle, VisibleBounds


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _chart(**kwargs) -> Chart:
    # 155 x 120 leaves a 100 x 100 plot area; X ticks 0..100 give a visible X span of 0..120.
    chart = Chart(155.0, 120.0, **kwargs)
    chart.set_range_y(0.0, 10.0)
    return chart


class ChartConfigurationTests(unittest.TestCase):
    def test_defaults(self) -> None:
        chart = Chart()
        self.assertEqual(chart.x_axis.axis_range.lower, 0.0)
        self.assertEqual(chart.x_axis.axis_range.upper, 100.0)
        self.assertEqual(chart.y_axis.axis_range.lower, -20.0)
        self.assertEqual(chart.y_axis.axis_range.upper, 150.0)
        self.assertEqual(len(chart.series), 0)
        self.assertIsNone(chart.selected)
        self.assertTrue(chart.needs_display)

    def test_visible_bounds(self) -> None:
        chart = _chart()
        self.assertEqual(chart.visible_bounds(), VisibleBounds(0.0, 120.0, 0.0, 10.0))

    def test_set_range_rejects_inverted_bounds(self) -> None:
        chart = _chart()
        before = chart.ticks("x").as_tuple()
        self.assertFalse(chart.set_range("x", 5.0, 5.0))
        self.assertEqual(chart.ticks("x").as_tuple(), before)
        self.assertTrue(chart.set_range_x(0.0, 10.0))
        self.assertEqual(chart.ticks("x").as_tuple(), (0.0, 2.0, 4.0, 6.0, 8.0, 10.0))

    def test_unknown_axis(self) -> None:
        with self.assertRaises(ValueError):
            _chart().ticks("z")  # type: ignore[arg-type]

    def test_size_must_leave_plot_area(self) -> None:
        with self.assertRaises(ValueError):
            Chart(50.0, 120.0)
        chart = _chart()
        with self.assertRaises(ValueError):
            chart.set_size(155.0, 10.0)
        self.assertEqual(chart.size, (155.0, 120.0))

    def test_tick_configuration(self) -> None:
        chart = _chart()
        chart.set_tick_count("x", 10)
        self.assertEqual(chart.ticks("x").step, 10.0)
        chart.set_tick_origin("x", 5.0)
        self.assertEqual(chart.ticks("x").first, 5.0)
        chart.set_axis_kind("x", "date")
        self.assertEqual(chart.x_axis.kind, "date")

    def test_extreme_ranges_leave_nothing_to_draw(self) -> None:
        chart = _chart()
        self.assertTrue(chart.set_range_x(-1e308, 1e308))
        self.assertTrue(chart.ticks("x").is_empty)
        self.assertIsNone(chart.visible_bounds())
        self.assertIsNone(chart.mapper())
        self.assertIsNone(chart.hit_test((50.0, 50.0)))
        self.assertTrue(chart.set_range_x(0.0, 100.0))
        self.assertEqual(chart.visible_bounds(), VisibleBounds(0.0, 120.0, 0.0, 10.0))

    def test_date_range_past_calendar_has_no_ticks(self) -> None:
        chart = Chart(x_kind="date")
        self.assertTrue(chart.set_range_x(0.0, 1e12))
        self.assertTrue(chart.ticks("x").is_empty)
        self.assertIsNone(chart.mapper())


class ChartDataTests(unittest.TestCase):
    def test_mismatched_lengths_are_truncated(self) -> None:
        chart = _chart()
        chart.set_data([0.0, 10.0, 20.0], [1.0, 2.0])
        self.assertEqual(len(chart.series), 2)
        np.testing.assert_array_equal(chart.series.keys, [0.0, 10.0])

    def test_unsorted_data_is_sorted_stably(self) -> None:
        chart = _chart()
        chart.set_data([30.0, 10.0, 20.0, 10.0], [3.0, 1.0, 2.0, 1.5], already_sorted=False)
        np.testing.assert_array_equal(chart.series.keys, [10.0, 10.0, 20.0, 30.0])
        np.testing.assert_array_equal(chart.series.values, [1.0, 1.5, 2.0, 3.0])
        self.assertFalse(chart.already_sorted)

    def test_sorted_flag_keeps_order(self) -> None:
        chart = _chart()
        chart.set_data([30.0, 10.0], [3.0, 1.0])
        np.testing.assert_array_equal(chart.series.keys, [30.0, 10.0])

    def test_none_values_are_missing(self) -> None:
        chart = _chart()
        chart.set_data([0.0, 10.0], [1.0, None])
        self.assertTrue(chart.series.is_missing(1))

    def test_bad_keys_raise(self) -> None:
        chart = _chart()
        with self.assertRaises(ChartDataError):
            chart.set_data([0.0, float("nan")], [1.0, 2.0])
        with self.assertRaises(ChartDataError):
            chart.set_data("abc", [1.0])

    def test_clear_data(self) -> None:
        chart = _chart()
        chart.set_data([0.0, 60.0], [5.0, 8.0])
        chart.on_long_press((65.0, 25.0), now=0.0)
        chart.clear_data()
        self.assertEqual(len(chart.series), 0)
        self.assertIsNone(chart.selected)

    def test_status_mask(self) -> None:
        chart = _chart()
        chart.set_data([0.0, 10.0, 20.0], [1.0, 2.0, 3.0])
        chart.set_status([False, True])
        self.assertFalse(chart.is_disabled(0))
        self.assertTrue(chart.is_disabled(1))
        # Entries beyond the mask are enabled.
        self.assertFalse(chart.is_disabled(2))
        self.assertFalse(chart.is_disabled(-1))

    def test_status_mask_survives_data_replacement(self) -> None:
        chart = _chart()
        chart.set_status([True])
        chart.set_data([0.0, 10.0], [1.0, 2.0])
        self.assertTrue(chart.is_disabled(0))


class ChartMappingTests(unittest.TestCase):
    def test_point_positions(self) -> None:
        chart = _chart()
        chart.set_data([0.0, 60.0], [5.0, 8.0])
        positions = chart.point_positions()
        assert positions is not None
        np.testing.assert_allclose(positions[0], [15.0, 65.0])
        np.testing.assert_allclose(positions[1], [55.0, 25.0])

    def test_ticks_map_identically_through_both_paths(self) -> None:
        chart = _chart()
        mapper = chart.mapper()
        assert mapper is not None
        ticks = chart.ticks("x").values
        expected = [chart.map_to_pixel(t, 0.0)[0] for t in ticks.tolist()]  # type: ignore[index]
        np.testing.assert_allclose(mapper.x_positions(ticks), expected)

    def test_map_to_pixel(self) -> None:
        x, y = _chart().map_to_pixel(60.0, 5.0)  # type: ignore[misc]
        self.assertAlmostEqual(x, 65.0)
        self.assertEqual(y, 55.0)

    def test_leading_missing_point_shifts_later_points(self) -> None:
        chart = _chart()
        chart.set_data([10.0, 20.0, 40.0], [1.0, 2.0, 3.0])
        before = chart.point_positions()
        chart.set_data([0.0, 10.0, 20.0, 40.0], [None, 1.0, 2.0, 3.0])
        after = chart.point_positions()
        assert before is not None and after is not None
        self.assertTrue(np.isnan(after[1][0]))
        np.testing.assert_allclose(np.diff(after[0][1:]), np.diff(before[0]))
        self.assertTrue(np.all(np.diff(after[0][1:]) > 0))
        np.testing.assert_allclose(after[1][1:], before[1])


class ChartInteractionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.delegate = mock.Mock()
        self.chart = _chart(delegate=self.delegate, clock=self.clock)
        self.chart.set_data([0.0, 60.0], [5.0, 8.0])

    def test_long_press_selects_nearest_point(self) -> None:
        tooltip = self.chart.on_long_press((66.0, 26.0))
        assert tooltip is not None
        self.assertEqual(tooltip.index, 1)
        self.assertEqual(tooltip.value_text, "8.00")
        self.assertEqual(tooltip.date_text, "01 Jan 1970")
        self.assertEqual(self.chart.selected, 1)
        self.delegate.emit_long_press.assert_called_once_with(self.chart)

    def test_value_text_carries_unit(self) -> None:
        chart = _chart(style=ChartStyle(balloon_unit="kg"))
        chart.set_data([0.0, 60.0], [5.0, 8.0])
        tooltip = chart.on_long_press((66.0, 26.0), now=0.0)
        assert tooltip is not None
        self.assertEqual(tooltip.value_text, "8.00 kg")

    def test_long_press_miss_clears_selection(self) -> None:
        self.chart.on_long_press((66.0, 26.0))
        self.assertIsNone(self.chart.on_long_press((110.0, 100.0)))
        self.assertIsNone(self.chart.selected)
        self.assertEqual(self.delegate.emit_long_press.call_count, 2)

    def test_missing_point_is_not_selectable(self) -> None:
        self.chart.set_data([0.0, 60.0], [5.0, None])
        self.assertIsNone(self.chart.on_long_press((65.0, 25.0)))

    def test_selection_expires_after_delay(self) -> None:
        self.chart.on_long_press((66.0, 26.0))
        self.clock.now = 9.0
        self.assertFalse(self.chart.poll())
        self.assertEqual(self.chart.selected, 1)
        self.clock.now = 10.0
        self.assertTrue(self.chart.poll())
        self.assertIsNone(self.chart.selected)

    def test_new_selection_restarts_delay(self) -> None:
        self.chart.on_long_press((66.0, 26.0))
        self.clock.now = 8.0
        self.chart.on_long_press((16.0, 56.0))
        self.clock.now = 12.0
        self.assertFalse(self.chart.poll())
        self.assertEqual(self.chart.selected, 0)

    def test_expire_selection_by_token(self) -> None:
        self.chart.on_long_press((66.0, 26.0))
        token = self.chart.deselect_timer.token
        assert token is not None
        self.assertTrue(self.chart.expire_selection(token))
        self.assertIsNone(self.chart.selected)
        self.assertFalse(self.chart.expire_selection(token))

    def test_swipe_unselects_and_notifies(self) -> None:
        self.chart.on_long_press((66.0, 26.0))
        self.chart.on_swipe("right")
        self.assertIsNone(self.chart.selected)
        self.delegate.emit_swipe.assert_called_once_with(True)
        self.chart.on_swipe("left")
        self.delegate.emit_swipe.assert_called_with(False)
        with self.assertRaises(ValueError):
            self.chart.on_swipe("up")  # type: ignore[arg-type]

    def test_data_replacement_clears_selection(self) -> None:
        self.chart.on_long_press((66.0, 26.0))
        self.chart.set_data([0.0, 60.0], [5.0, 8.0])
        self.assertIsNone(self.chart.selected)
        self.assertFalse(self.chart.deselect_timer.pending)

    def test_works_without_delegate(self) -> None:
        chart = _chart()
        chart.set_data([0.0, 60.0], [5.0, 8.0])
        self.assertIsNotNone(chart.on_long_press((66.0, 26.0), now=0.0))
        chart.on_swipe("left")


if __name__ == "__main__":
    unittest.main()
