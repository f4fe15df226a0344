"""Summit - End-of-run Summaries for Test Results

Renders the text summary shown after a test run: a tree of groups and checks
with pass/fail marks, followed by an aligned table of metrics (counters,
gauges, rates and trends) with configurable trend statistics.

Usage:
    import sys
    from datetime import timedelta
    from summit import Group, Metric, MetricType, SummaryData, configure, summarize

    configure(trend_stats=["avg", "p(95)", "p(99.9)"], time_unit="ms")

    root = Group()
    root.check("status is 200").record(True)

    reqs = Metric("http_reqs", MetricType.COUNTER)
    reqs.add(10)

    summarize(
        sys.stdout,
        "",
        SummaryData(metrics={"http_reqs": reqs}, root=root, time=timedelta(seconds=1)),
    )

Pytest Usage:
    pytest -p summit.pytest --summit-summary
"""

import contextvars
from typing import Optional, Sequence

from .core.types import (
    Check,
    Group,
    Metric,
    MetricType,
    SubMetric,
    ValueType,
)
from .core.sinks import CounterSink, GaugeSink, RateSink, Sink, TrendSink
from .core.humanize import TIME_UNITS
from .reporting import (
    Colors,
    EmptyStatError,
    InvalidPercentileError,
    StatError,
    SummaryData,
    TrendColumn,
    TrendColumns,
    UnknownStatFormatError,
    str_width,
    summarize,
)

__version__ = "0.1.0"

_DEFAULT_CONFIG = {
    "trend_stats": None,
    "time_unit": None,
    "no_color": False,
}

# Global configuration
_config: contextvars.ContextVar[dict] = contextvars.ContextVar(
    "summit_config",
    default=_DEFAULT_CONFIG,
)

# Trend columns used when summarize() is not given any
_trend_columns: contextvars.ContextVar[Optional[TrendColumns]] = contextvars.ContextVar(
    "summit_trend_columns", default=None
)


def configure(
    trend_stats: Optional[Sequence[str]] = None,
    time_unit: Optional[str] = None,
    no_color: Optional[bool] = None,
) -> None:
    """
    Configure summit settings. Call once, before rendering any summary.

    Args:
        trend_stats: Trend columns to show, e.g. ["avg", "p(99)"]
        time_unit: Fixed unit for time values: "s", "ms" or "us" ("" for automatic)
        no_color: Disable ANSI colors

    Raises:
        StatError: A trend stat is neither a known column nor a percentile
        ValueError: Unknown time unit

    Example:
        from summit import configure

        configure(trend_stats=["avg", "min", "max", "p(99)"], time_unit="ms")
    """
    config = _config.get().copy()

    if trend_stats is not None:
        columns = get_trend_columns()
        for stat in trend_stats:
            columns.verify(stat)

        updated = TrendColumns(columns)
        updated.update(trend_stats)
        _trend_columns.set(updated)
        config["trend_stats"] = list(trend_stats)

    if time_unit is not None:
        if time_unit and time_unit not in TIME_UNITS:
            raise ValueError(
                f"invalid time unit {time_unit!r}, expected one of {', '.join(TIME_UNITS)}"
            )
        config["time_unit"] = time_unit or None
    if no_color is not None:
        config["no_color"] = no_color

    _config.set(config)


def get_config() -> dict:
    """Get current summit configuration."""
    return _config.get().copy()


def get_trend_columns() -> TrendColumns:
    """Get the configured trend columns (the defaults if never configured)."""
    columns = _trend_columns.get()
    if columns is None:
        return TrendColumns()
    return columns


def reset_config() -> None:
    """Restore the default configuration and trend columns."""
    _config.set(_DEFAULT_CONFIG)
    _trend_columns.set(None)


__all__ = [
    # Configuration
    "configure",
    "get_config",
    "get_trend_columns",
    "reset_config",
    # Types
    "Check",
    "Group",
    "Metric",
    "MetricType",
    "SubMetric",
    "ValueType",
    # Sinks
    "Sink",
    "CounterSink",
    "GaugeSink",
    "RateSink",
    "TrendSink",
    # Summary
    "SummaryData",
    "summarize",
    "Colors",
    "str_width",
    # Trend columns
    "TrendColumn",
    "TrendColumns",
    "StatError",
    "EmptyStatError",
    "UnknownStatFormatError",
    "InvalidPercentileError",
]
