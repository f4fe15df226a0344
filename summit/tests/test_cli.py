"""
Tests for the summit command line.

Tests cover:
1. summit render
2. summit verify-stats
3. Argument handling
"""

import json

import pytest

from summit.cli import main


@pytest.fixture
def snapshot_file(tmp_path):
    """A snapshot with one passing check and a request counter."""
    path = tmp_path / "summary.json"
    path.write_text(
        json.dumps(
            {
                "elapsed_seconds": 1,
                "root_group": {
                    "name": "",
                    "checks": [{"name": "status is 200", "passes": 5, "fails": 0}],
                    "groups": [],
                },
                "metrics": [
                    {"name": "http_reqs", "type": "counter", "sink": {"value": 10}},
                    {
                        "name": "http_req_duration",
                        "type": "trend",
                        "contains": "time",
                        "sink": {"values": [1500]},
                    },
                ],
            }
        )
    )
    return path


# =============================================================================
# 1. render
# =============================================================================


class TestRender:
    """Tests for `summit render`."""

    def test_render(self, snapshot_file, capsys):
        """The snapshot is rendered to stdout."""
        assert main(["render", str(snapshot_file), "--no-color", "--summary-trend-stats", "max"]) == 0
        assert capsys.readouterr().out == (
            "    ✓ status is 200\n"
            "\n"
            "    http_req_duration...: max=1.50s\n"
            "    http_reqs...........: 10 10/s\n"
        )

    def test_time_unit(self, snapshot_file, capsys):
        """--summary-time-unit fixes the unit of time values."""
        argv = ["render", str(snapshot_file), "--no-color", "--summary-time-unit", "ms"]
        assert main(argv + ["--summary-trend-stats", "max"]) == 0
        assert "max=1500.00ms" in capsys.readouterr().out

    def test_indent(self, snapshot_file, capsys):
        """--indent prefixes every line."""
        assert main(["render", str(snapshot_file), "--no-color", "--indent", "2"]) == 0
        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        assert all(line.startswith("      ") for line in lines)

    def test_colors_by_default(self, snapshot_file, capsys):
        """Output is colored unless --no-color is given."""
        main(["render", str(snapshot_file)])
        assert "\x1b[" in capsys.readouterr().out

    def test_invalid_trend_stats(self, snapshot_file, capsys):
        """Invalid stats fail before rendering anything."""
        assert main(["render", str(snapshot_file), "--summary-trend-stats", "avg,p(abc)"]) == 1
        out = capsys.readouterr().out
        assert out == (
            "Invalid --summary-trend-stats: invalid percentile stat value, accepts a number\n"
        )

    def test_missing_snapshot(self, tmp_path, capsys):
        """A missing file is reported."""
        assert main(["render", str(tmp_path / "nope.json")]) == 1
        assert "No snapshot found" in capsys.readouterr().out

    def test_invalid_snapshot(self, tmp_path, capsys):
        """A broken file is reported."""
        path = tmp_path / "broken.json"
        path.write_text("{")
        assert main(["render", str(path)]) == 1
        assert capsys.readouterr().out.startswith("Invalid snapshot:")


# =============================================================================
# 2. verify-stats
# =============================================================================


class TestVerifyStats:
    """Tests for `summit verify-stats`."""

    def test_all_valid(self, capsys):
        """Known columns and percentiles pass."""
        assert main(["verify-stats", "avg", "p(99.9)"]) == 0
        assert capsys.readouterr().out == "  avg: ok\n  p(99.9): ok\n"

    def test_reports_each_failure(self, capsys):
        """Every stat is reported, and any failure fails the command."""
        assert main(["verify-stats", "avg", "p(abc)", "foo"]) == 1
        assert capsys.readouterr().out == (
            "  avg: ok\n"
            "  p(abc): invalid percentile stat value, accepts a number\n"
            "  foo: invalid stat, unknown format\n"
        )


# =============================================================================
# 3. Arguments
# =============================================================================


class TestArguments:
    """Tests for argument handling."""

    def test_no_command(self, capsys):
        """Without a command, help is printed and the exit code is 1."""
        assert main([]) == 1
        assert "render" in capsys.readouterr().out

    def test_unknown_time_unit(self, snapshot_file):
        """Only known time units are accepted."""
        with pytest.raises(SystemExit):
            main(["render", str(snapshot_file), "--summary-time-unit", "h"])
