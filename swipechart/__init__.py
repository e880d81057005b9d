from swipechart.axis import Axis
from swipechart.chart import Chart, ChartDelegate
from swipechart.dates import date_to_key, format_date, key_to_date, tick_step_date
from swipechart.errors import ChartDataError
from swipechart.hit_test import HitResult
from swipechart.mapping import CoordinateMapper, PlotInsets, VisibleBounds
from swipechart.render import ChartRenderer
from swipechart.scales import AxisRange, TickSet, clean_mantissa, tick_step
from swipechart.selection import DeselectTimer, Tooltip
from swipechart.series import DataSeries
from swipechart.style import ChartStyle

__all__ = [
    "Axis",
    "AxisRange",
    "Chart",
    "ChartDataError",
    "ChartDelegate",
    "ChartRenderer",
    "ChartStyle",
    "CoordinateMapper",
    "DataSeries",
    "DeselectTimer",
    "HitResult",
    "PlotInsets",
    "TickSet",
    "Tooltip",
    "VisibleBounds",
    "clean_mantissa",
    "date_to_key",
    "format_date",
    "key_to_date",
    "tick_step",
    "tick_step_date",
]
