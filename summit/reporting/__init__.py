"""
Summit Reporting Module

Renders the end-of-run text summary: the group/check tree followed by an
aligned table of metrics.

Usage:
    from summit.reporting import SummaryData, TrendColumns, summarize

    columns = TrendColumns()
    columns.update(["avg", "p(99)"])

    summarize(sys.stdout, "", SummaryData(metrics=metrics), columns=columns)
"""

from .colors import Colors
from .formatting import NO_DATA, non_trend_metric_value, trend_metric_values
from .groups import summarize_check, summarize_group
from .metrics import ColumnWidths, format_metrics, measure_columns, summarize_metrics
from .summary import SummaryData, summarize
from .trend_columns import (
    DEFAULT_TREND_COLUMNS,
    EmptyStatError,
    InvalidPercentileError,
    StatError,
    TrendColumn,
    TrendColumns,
    UnknownStatFormatError,
    parse_trend_stats,
)
from .width import str_width

__all__ = [
    # Summary
    "SummaryData",
    "summarize",
    "summarize_group",
    "summarize_check",
    "summarize_metrics",
    # Columns
    "ColumnWidths",
    "format_metrics",
    "measure_columns",
    "non_trend_metric_value",
    "trend_metric_values",
    "NO_DATA",
    # Trend columns
    "TrendColumn",
    "TrendColumns",
    "DEFAULT_TREND_COLUMNS",
    "parse_trend_stats",
    "StatError",
    "EmptyStatError",
    "UnknownStatFormatError",
    "InvalidPercentileError",
    # Output
    "Colors",
    "str_width",
]
