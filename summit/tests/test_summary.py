"""
End-to-end tests for summarize() and configuration.

Tests cover:
1. Full summaries: groups followed by metrics
2. Pass/fail marks on metric lines
3. configure() defaults for trend columns, time unit and colors
4. Best-effort output
5. NaN and infinite values
6. Color roles
"""

import io
import math
from datetime import timedelta

import pytest

from summit import (
    EmptyStatError,
    Group,
    Metric,
    MetricType,
    SummaryData,
    TrendColumns,
    UnknownStatFormatError,
    ValueType,
    configure,
    get_config,
    get_trend_columns,
    reset_config,
    summarize,
)
from summit.reporting.colors import Colors
from summit.snapshot import snapshot_from_dict


@pytest.fixture(autouse=True)
def clean_config():
    """Every test starts and ends with the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def summary_data():
    """One passing check under the unnamed root and one counter."""
    root = Group()
    root.check("status is 200").passes = 5

    reqs = Metric("http_reqs", MetricType.COUNTER)
    reqs.add(10)

    return SummaryData(metrics={"http_reqs": reqs}, root=root, time=timedelta(seconds=1))


def render(data, indent="", columns=None, colors=None):
    out = io.StringIO()
    summarize(out, indent, data, columns=columns, colors=colors)
    return out.getvalue()


# =============================================================================
# 1. Full summaries
# =============================================================================


class TestSummarize:
    """Tests for the full summary."""

    def test_groups_then_metrics(self, summary_data):
        """Checks are indented four spaces, metrics two (plus the mark)."""
        assert render(summary_data, colors=Colors(enabled=False)) == (
            "    ✓ status is 200\n" "\n" "    http_reqs...: 10 10/s\n"
        )

    def test_base_indent(self, summary_data):
        """The base indent prefixes every line."""
        output = render(summary_data, indent="\t", colors=Colors(enabled=False))
        assert all(line.startswith("\t") for line in output.splitlines() if line)

    def test_without_root_group(self, summary_data):
        """Without a group tree only metrics are shown."""
        summary_data.root = None
        assert render(summary_data, colors=Colors(enabled=False)) == (
            "    http_reqs...: 10 10/s\n"
        )

    def test_named_groups(self, summary_data):
        """Named groups sit under the root with headers."""
        summary_data.root.group("login").check("has token").record(False)
        output = render(summary_data, colors=Colors(enabled=False))
        assert output.startswith(
            "    ✓ status is 200\n"
            "\n"
            "    █ login\n"
            "\n"
            "      ✗ has token\n"
            "       ↳  0% — ✓ 0 / ✗ 1\n"
            "\n"
        )

    def test_group_tree_not_modified(self, summary_data):
        """Rendering leaves checks untouched."""
        render(summary_data)
        check = summary_data.root.checks["status is 200"]
        assert (check.passes, check.fails) == (5, 0)


# =============================================================================
# 2. Marks
# =============================================================================


class TestMetricMarks:
    """Tests for success marks on metric lines."""

    SUCCESS_MARK = "\x1b[32m✓\x1b[0m"

    def test_no_mark_without_threshold(self, summary_data):
        """Untainted metrics get no mark."""
        output = render(summary_data, colors=Colors(enabled=True))
        assert self.SUCCESS_MARK not in output
        assert "10/s" in output

    def test_success_mark_when_passing(self, summary_data):
        """Passing metrics get a green mark."""
        summary_data.metrics["http_reqs"].tainted = False
        output = render(summary_data, colors=Colors(enabled=True))
        assert output.count(self.SUCCESS_MARK) == 1


# =============================================================================
# 3. Configuration
# =============================================================================


class TestConfigure:
    """Tests for configure() and the defaults summarize() uses."""

    def test_default_config(self):
        """Nothing configured: default columns, automatic units, colors on."""
        assert get_config() == {"trend_stats": None, "time_unit": None, "no_color": False}
        assert get_trend_columns().keys() == ["avg", "min", "med", "max", "p(90)", "p(95)"]

    def test_configured_trend_stats(self):
        """Configured stats are used when no columns are passed."""
        configure(trend_stats=["max", "p(99)"], no_color=True)

        duration = Metric("dur", MetricType.TREND, ValueType.TIME)
        duration.add(100)
        output = render(SummaryData(metrics={"dur": duration}), columns=None)

        assert "max=100.00ms p(99)=100.00ms" in output
        assert "avg=" not in output

    def test_explicit_columns_win(self):
        """Columns passed to summarize() override the configured ones."""
        configure(trend_stats=["max"], no_color=True)
        columns = TrendColumns()
        columns.update(["min"])

        duration = Metric("dur", MetricType.TREND)
        duration.add(1)
        output = render(SummaryData(metrics={"dur": duration}), columns=columns)
        assert "min=1" in output
        assert "max=" not in output

    def test_no_color(self, summary_data):
        """no_color removes every escape sequence."""
        configure(no_color=True)
        assert "\x1b" not in render(summary_data)

    def test_invalid_stats_raise(self):
        """Invalid stats are rejected before anything changes."""
        with pytest.raises(EmptyStatError):
            configure(trend_stats=["avg", ""])
        with pytest.raises(UnknownStatFormatError):
            configure(trend_stats=["bogus"])
        assert len(get_trend_columns()) == 6

    def test_time_unit(self):
        """Known time units are stored; unknown ones raise."""
        configure(time_unit="ms")
        assert get_config()["time_unit"] == "ms"
        with pytest.raises(ValueError, match="invalid time unit"):
            configure(time_unit="h")

    def test_reset(self):
        """reset_config() restores the defaults."""
        configure(trend_stats=["avg"], time_unit="s", no_color=True)
        reset_config()
        assert get_config()["no_color"] is False
        assert len(get_trend_columns()) == 6


# =============================================================================
# 4. Best-effort output
# =============================================================================


class BrokenStream(io.StringIO):
    """A stream whose writes always fail."""

    def write(self, text):
        raise OSError("broken pipe")


class TestBestEffortOutput:
    """Tests for write failures."""

    def test_write_errors_are_swallowed(self, summary_data):
        """A broken stream does not make summarize() fail."""
        summarize(BrokenStream(), "", summary_data, colors=Colors(enabled=False))

    def test_closed_stream(self, summary_data):
        """Writing to a closed stream is ignored."""
        out = io.StringIO()
        out.close()
        summarize(out, "", summary_data, colors=Colors(enabled=False))


# =============================================================================
# 5. Non-finite values
# =============================================================================


class TestNonFiniteValues:
    """Tests for NaN and infinite samples, which JSON snapshots can carry."""

    def test_nan_and_inf_render(self):
        """Non-finite values are printed instead of aborting the summary."""
        data = snapshot_from_dict(
            {
                "elapsed_seconds": 1,
                "metrics": [
                    {"name": "wait", "type": "gauge", "contains": "time",
                     "sink": {"value": math.nan}},
                    {"name": "bytes", "type": "counter", "contains": "data",
                     "sink": {"value": math.inf}},
                    {"name": "dur", "type": "trend", "contains": "time",
                     "sink": {"values": [1, math.inf]}},
                ],
            }
        )

        output = render(data, colors=Colors(enabled=False))

        assert "bytes...: inf inf/s" in output
        assert "wait....: nan min=nan max=nan" in output
        assert "max=inf" in output


# =============================================================================
# 6. Color roles
# =============================================================================


class TestColorRoles:
    """Tests for the color roles the summary uses."""

    @pytest.mark.parametrize(
        "role,expected",
        [
            ("success", "\x1b[32mx\x1b[0m"),
            ("failure", "\x1b[31mx\x1b[0m"),
            ("gray", "\x1b[2mx\x1b[0m"),
            ("value", "\x1b[36mx\x1b[0m"),
            ("extra", "\x1b[2;36mx\x1b[0m"),
            ("standard", "x"),
        ],
    )
    def test_roles(self, role, expected):
        """Each role maps to a fixed ANSI style."""
        assert getattr(Colors(enabled=True), role)("x") == expected

    @pytest.mark.parametrize("role", ["success", "failure", "gray", "value", "extra", "standard"])
    def test_disabled(self, role):
        """Disabled colors leave text unchanged."""
        assert getattr(Colors(enabled=False), role)("x") == "x"
