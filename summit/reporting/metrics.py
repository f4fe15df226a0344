"""
Metrics section of the summary.

Rendering is done in two passes because column widths depend on every
metric:

1. ``format_metrics`` formats each metric once and ``measure_columns`` builds
   a ``ColumnWidths`` table from the results.
2. ``render_metric_line`` pads each cell to the widths in that table.

Lines are always emitted in sorted metric-name order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Iterable, List, Mapping, Optional, TextIO

from ..core.sinks import TrendSink
from ..core.types import Metric
from .colors import Colors
from .formatting import FAIL_MARK, SUCC_MARK, non_trend_metric_value, trend_metric_values
from .output import write
from .trend_columns import TrendColumns
from .width import pad, str_width

SUB_METRIC_INDENT = "  "


@dataclass
class FormattedMetric:
    """Display strings for one metric, before padding."""

    metric: Metric
    trend_cols: Optional[List[str]] = None
    value: str = ""
    extra: List[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return display_name_for_metric(self.metric)

    @property
    def indent(self) -> str:
        return indent_for_metric(self.metric)


@dataclass
class ColumnWidths:
    """Widest cell per column, computed over all metrics."""

    name: int = 0
    value: int = 0
    extras: List[int] = field(default_factory=list)
    trend_cols: List[int] = field(default_factory=list)


def display_name_for_metric(metric: Metric) -> str:
    if metric.sub is not None and metric.sub.parent:
        return "{ " + metric.sub.suffix + " }"
    return metric.name


def indent_for_metric(metric: Metric) -> str:
    if metric.sub is not None and metric.sub.parent:
        return SUB_METRIC_INDENT
    return ""


def metric_mark(metric: Metric, colors: Colors) -> str:
    """Colored pass/fail mark; a blank when no threshold applies."""
    if metric.tainted is None:
        return colors.standard(" ")
    if metric.tainted:
        return colors.failure(FAIL_MARK)
    return colors.success(SUCC_MARK)


def format_metrics(
    metrics: Mapping[str, Metric],
    elapsed: timedelta,
    time_unit: Optional[str],
    columns: TrendColumns,
) -> Dict[str, FormattedMetric]:
    """
    Finalize and format every metric.

    Calls ``calc()`` on each sink. The returned dict is keyed like ``metrics``.
    """
    formatted: Dict[str, FormattedMetric] = {}

    for name, metric in metrics.items():
        if metric.sink is not None:
            metric.sink.calc()

        if isinstance(metric.sink, TrendSink):
            formatted[name] = FormattedMetric(
                metric, trend_cols=trend_metric_values(time_unit, metric, columns)
            )
            continue

        value, extra = non_trend_metric_value(elapsed, time_unit, metric)
        formatted[name] = FormattedMetric(metric, value=value, extra=extra)

    return formatted


def measure_columns(formatted: Iterable[FormattedMetric], trend_col_count: int) -> ColumnWidths:
    """Build the width table for a set of formatted metrics."""
    widths = ColumnWidths(trend_cols=[0] * trend_col_count)

    for fm in formatted:
        # Sub-metric indentation shares the name column
        widths.name = max(widths.name, str_width(fm.display_name + fm.indent))

        if fm.trend_cols is not None:
            for i, value in enumerate(fm.trend_cols):
                widths.trend_cols[i] = max(widths.trend_cols[i], str_width(value))
            continue

        widths.value = max(widths.value, str_width(fm.value))

        # A single extra is never padded, so it does not widen its slot
        if len(fm.extra) > 1:
            for i, extra in enumerate(fm.extra):
                if i == len(widths.extras):
                    widths.extras.append(0)
                widths.extras[i] = max(widths.extras[i], str_width(extra))

    return widths


def _format_trend_cols(
    trend_cols: List[str], widths: ColumnWidths, columns: TrendColumns, colors: Colors
) -> str:
    cells = [
        column.key + "=" + colors.value(value) + pad(value, widths.trend_cols[i])
        for i, (column, value) in enumerate(zip(columns, trend_cols))
    ]
    return " ".join(cells)


def _format_extra(extra: List[str], widths: ColumnWidths, colors: Colors) -> str:
    if not extra:
        return ""
    if len(extra) == 1:
        return " " + colors.extra(extra[0])
    parts = [colors.extra(ex) + pad(ex, widths.extras[i]) for i, ex in enumerate(extra)]
    return " " + " ".join(parts)


def format_data(fm: FormattedMetric, widths: ColumnWidths, columns: TrendColumns, colors: Colors) -> str:
    """Value cells of a metric line: trend columns, or value plus extras."""
    if fm.trend_cols is not None:
        return _format_trend_cols(fm.trend_cols, widths, columns, colors)

    data = colors.value(fm.value) + pad(fm.value, widths.value)
    return data + _format_extra(fm.extra, widths, colors)


def render_metric_line(
    indent: str,
    fm: FormattedMetric,
    widths: ColumnWidths,
    columns: TrendColumns,
    colors: Colors,
) -> str:
    """Render one padded metric line, newline included."""
    name = fm.display_name
    dots = "." * max(0, widths.name - str_width(name) - str_width(fm.indent) + 3)
    return (
        indent
        + fm.indent
        + metric_mark(fm.metric, colors)
        + " "
        + name
        + colors.gray(dots + ":")
        + " "
        + format_data(fm, widths, columns, colors)
        + "\n"
    )


def summarize_metrics(
    out: TextIO,
    indent: str,
    elapsed: timedelta,
    time_unit: Optional[str],
    metrics: Mapping[str, Metric],
    columns: TrendColumns,
    colors: Colors,
) -> None:
    """Write the metrics section, one aligned line per metric."""
    formatted = format_metrics(metrics, elapsed, time_unit, columns)
    widths = measure_columns(formatted.values(), len(columns))

    for name in sorted(formatted):
        write(out, render_metric_line(indent, formatted[name], widths, columns, colors))


__all__ = [
    "FormattedMetric",
    "ColumnWidths",
    "display_name_for_metric",
    "indent_for_metric",
    "metric_mark",
    "format_metrics",
    "measure_columns",
    "format_data",
    "render_metric_line",
    "summarize_metrics",
]
