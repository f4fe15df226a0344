"""
End-of-run summary.

Usage:
    import sys
    from summit.reporting import SummaryData, summarize

    data = SummaryData(metrics=metrics, root=root_group, time=elapsed)
    summarize(sys.stdout, "", data)

Output looks like:

    █ login

      ✓ status is 200
      ✗ has token
       ↳  66% — ✓ 2 / ✗ 1

    checks..............: 83.33% ✓ 5 ✗ 1
    http_req_duration...: avg=120.50ms min=80.10ms med=110.00ms max=301.20ms p(90)=180.00ms p(95)=250.00ms
    http_reqs...........: 6      0.5/s
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Optional, TextIO

from ..core.types import Group, Metric
from .colors import Colors
from .groups import summarize_group
from .metrics import summarize_metrics
from .trend_columns import TrendColumns

GROUPS_INDENT = "    "
METRICS_INDENT = "  "


@dataclass
class SummaryData:
    """
    Everything the summary shows.

    Attributes:
        metrics: Metrics by name
        root: Root of the group tree, if the run had checks or groups
        time: Elapsed run time, used for counter rates
        time_unit: Fixed unit for time values ("s", "ms", "us"), if any
    """

    metrics: Dict[str, Metric] = field(default_factory=dict)
    root: Optional[Group] = None
    time: timedelta = field(default_factory=timedelta)
    time_unit: Optional[str] = None


def summarize(
    out: TextIO,
    indent: str,
    data: SummaryData,
    columns: Optional[TrendColumns] = None,
    colors: Optional[Colors] = None,
) -> None:
    """
    Write a human readable summary of ``data`` to ``out``.

    Args:
        out: Text stream to write to
        indent: Prefix for every line
        data: Groups, metrics and run time to summarize
        columns: Trend columns to show (default: the configured ones)
        colors: Color roles (default: per configured ``no_color``)
    """
    if columns is None or colors is None:
        from .. import get_config, get_trend_columns

        if columns is None:
            columns = get_trend_columns()
        if colors is None:
            colors = Colors(enabled=not get_config()["no_color"])

    if data.root is not None:
        summarize_group(out, indent + GROUPS_INDENT, data.root, colors)

    summarize_metrics(
        out, indent + METRICS_INDENT, data.time, data.time_unit, data.metrics, columns, colors
    )


__all__ = ["SummaryData", "summarize"]
