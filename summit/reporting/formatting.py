"""
Metric value formatting.

Turns a metric's sink into the strings shown in the summary:
- counters, gauges and rates give a primary value plus "extra" annotations
- trends give one value per configured trend column
"""

from datetime import timedelta
from typing import List, Optional, Tuple

from ..core.sinks import CounterSink, GaugeSink, RateSink, TrendSink
from ..core.types import Metric
from .trend_columns import TrendColumns

NO_DATA = "[no data]"

SUCC_MARK = "✓"
FAIL_MARK = "✗"


def non_trend_metric_value(
    elapsed: timedelta, time_unit: Optional[str], metric: Metric
) -> Tuple[str, List[str]]:
    """
    Format a counter, gauge or rate metric.

    Args:
        elapsed: Test run duration, used for the counter's per-second rate
        time_unit: Fixed time unit for time values, if configured
        metric: Metric to format

    Returns:
        (value, extras) tuple. Unsupported sinks give ``("[no data]", [])``.
    """
    sink = metric.sink

    if isinstance(sink, CounterSink):
        seconds = elapsed.total_seconds()
        rate = sink.value / seconds if seconds > 0 else 0.0
        return metric.humanize_value(sink.value, time_unit), [
            metric.humanize_value(rate, time_unit) + "/s"
        ]

    if isinstance(sink, GaugeSink):
        return metric.humanize_value(sink.value, time_unit), [
            "min=" + metric.humanize_value(sink.min, time_unit),
            "max=" + metric.humanize_value(sink.max, time_unit),
        ]

    if isinstance(sink, RateSink):
        if sink.total == 0:
            return NO_DATA, []
        fails = sink.total - sink.trues
        return metric.humanize_value(sink.trues / sink.total, time_unit), [
            f"{SUCC_MARK} {sink.trues}",
            f"{FAIL_MARK} {fails}",
        ]

    return NO_DATA, []


def trend_metric_values(
    time_unit: Optional[str], metric: Metric, columns: TrendColumns
) -> List[str]:
    """Format each trend column for a metric with a TrendSink."""
    sink = metric.sink
    assert isinstance(sink, TrendSink), f"{metric.name} is not a trend"
    return [metric.humanize_value(column.get(sink), time_unit) for column in columns]


__all__ = [
    "NO_DATA",
    "SUCC_MARK",
    "FAIL_MARK",
    "non_trend_metric_value",
    "trend_metric_values",
]
