"""
Summit Pytest Plugin

Prints a summary of the test session: every test as a check, grouped by
module and class, followed by session metrics. Enable it in conftest.py:

    pytest_plugins = ["summit.pytest"]

or on the command line:

    pytest -p summit.pytest --summit-summary --summary-trend-stats "avg,p(99)"

The plugin records:
- one check per test, under groups named after its module and classes
- ``tests``: counter of executed tests
- ``checks``: rate of passing tests (tainted below --summary-checks-threshold)
- ``test_duration``: trend of call durations, with one sub-metric per outcome
"""

from __future__ import annotations

import io
import time
from datetime import timedelta
from typing import TYPE_CHECKING, Dict, Optional

import pytest

from .core.humanize import TIME_UNITS
from .core.types import Group, Metric, MetricType, SubMetric, ValueType
from .reporting import Colors, StatError, SummaryData, TrendColumns, parse_trend_stats, summarize
from .snapshot import save_snapshot

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.reports import TestReport
    from _pytest.terminal import TerminalReporter


PLUGIN_NAME = "summit-summary"


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_addoption(parser: Parser) -> None:
    """Add summit command-line options."""
    group = parser.getgroup("summit", "Summit end-of-run summary")
    group.addoption(
        "--summit-summary",
        action="store_true",
        default=False,
        help="Print a checks and metrics summary at the end of the session",
    )
    group.addoption(
        "--summary-trend-stats",
        action="store",
        default=None,
        help="Comma-separated trend stats to show (e.g., 'avg,min,max,p(99)')",
    )
    group.addoption(
        "--summary-time-unit",
        action="store",
        default=None,
        choices=TIME_UNITS,
        help="Fixed time unit for durations (default: automatic)",
    )
    group.addoption(
        "--summary-no-color",
        action="store_true",
        default=False,
        help="Disable colors in the summary",
    )
    group.addoption(
        "--summary-checks-threshold",
        action="store",
        type=float,
        default=None,
        help="Minimum rate of passing tests; the checks metric is marked failed below it",
    )
    group.addoption(
        "--summary-export",
        action="store",
        default=None,
        help="Also save the summary as a JSON snapshot to this path",
    )


def pytest_configure(config: Config) -> None:
    """Register the summary collector when the summary is enabled."""
    if not config.getoption("--summit-summary", default=False):
        return

    columns = TrendColumns()
    stats = parse_trend_stats(config.getoption("--summary-trend-stats") or "")
    try:
        for stat in stats:
            columns.verify(stat)
    except StatError as e:
        raise pytest.UsageError(f"--summary-trend-stats: {e}") from e
    if stats:
        columns.update(stats)

    collector = SummaryCollector(
        columns=columns,
        time_unit=config.getoption("--summary-time-unit"),
        colors=Colors(enabled=not config.getoption("--summary-no-color")),
        checks_threshold=config.getoption("--summary-checks-threshold"),
        export_path=config.getoption("--summary-export"),
    )
    config.pluginmanager.register(collector, PLUGIN_NAME)


# =============================================================================
# Session State
# =============================================================================


class SummaryCollector:
    """Collects checks and metrics for one session and prints them at the end."""

    def __init__(
        self,
        columns: TrendColumns,
        time_unit: Optional[str] = None,
        colors: Optional[Colors] = None,
        checks_threshold: Optional[float] = None,
        export_path: Optional[str] = None,
    ):
        self.columns = columns
        self.time_unit = time_unit
        self.colors = colors or Colors()
        self.checks_threshold = checks_threshold
        self.export_path = export_path
        self.root = Group()
        self.metrics: Dict[str, Metric] = {}
        self.start_time = time.time()

    def _metric(
        self,
        name: str,
        metric_type: MetricType,
        contains: ValueType = ValueType.DEFAULT,
        sub: Optional[SubMetric] = None,
    ) -> Metric:
        if name not in self.metrics:
            self.metrics[name] = Metric(name, metric_type, contains=contains, sub=sub)
        return self.metrics[name]

    def record(self, nodeid: str, passed: bool, outcome: str, duration: Optional[float]) -> None:
        """
        Record one test result.

        Args:
            nodeid: Pytest node id, e.g. "tests/test_api.py::TestLogin::test_ok"
            passed: Whether the test passed
            outcome: Outcome name used for the duration sub-metric
            duration: Call duration in seconds, if the test was called
        """
        *group_path, check_name = nodeid.split("::")
        group = self.root
        for name in group_path:
            group = group.group(name)
        group.check(check_name).record(passed)

        self._metric("checks", MetricType.RATE).add(passed)

        if duration is None:
            return

        self._metric("tests", MetricType.COUNTER).add(1)
        ms = duration * 1000
        self._metric("test_duration", MetricType.TREND, ValueType.TIME).add(ms)
        suffix = f"outcome:{outcome}"
        self._metric(
            f"test_duration{{{suffix}}}",
            MetricType.TREND,
            ValueType.TIME,
            sub=SubMetric(parent="test_duration", suffix=suffix),
        ).add(ms)

    def summary_data(self) -> SummaryData:
        """Summary data for everything recorded so far."""
        checks = self.metrics.get("checks")
        if checks is not None and self.checks_threshold is not None:
            sink = checks.sink
            rate = sink.trues / sink.total if sink.total else 0.0
            checks.tainted = rate < self.checks_threshold

        return SummaryData(
            metrics=dict(self.metrics),
            root=self.root,
            time=timedelta(seconds=time.time() - self.start_time),
            time_unit=self.time_unit,
        )

    def pytest_runtest_logreport(self, report: TestReport) -> None:
        if report.skipped:
            return
        if report.when == "call":
            self.record(report.nodeid, report.passed, report.outcome, report.duration)
        elif report.failed:
            # Setup and teardown errors count as failed checks
            self.record(report.nodeid, False, "error", None)

    def pytest_terminal_summary(self, terminalreporter: TerminalReporter) -> None:
        data = self.summary_data()

        if self.export_path:
            save_snapshot(data, self.export_path)

        buffer = io.StringIO()
        summarize(buffer, "", data, columns=self.columns, colors=self.colors)

        terminalreporter.write_sep("=", "summit summary")
        terminalreporter.write("\n" + buffer.getvalue())
