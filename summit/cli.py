"""
Summit CLI

Command-line interface for rendering saved summaries.

Usage:
    # Render a summary snapshot
    summit render results.json

    # Choose trend statistics and time unit
    summit render results.json --summary-trend-stats "avg,p(95),p(99.9)" --summary-time-unit ms

    # Check trend statistics before using them
    summit verify-stats avg "p(99)" "p(abc)"
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional


def cmd_render(args: argparse.Namespace) -> int:
    """Render a summary snapshot to stdout."""
    from .reporting import Colors, StatError, TrendColumns, parse_trend_stats, summarize
    from .snapshot import SnapshotError, load_snapshot

    snapshot_path = Path(args.snapshot)
    if not snapshot_path.exists():
        print(f"No snapshot found at {snapshot_path}")
        return 1

    columns = TrendColumns()
    if args.summary_trend_stats:
        stats = parse_trend_stats(args.summary_trend_stats)
        try:
            for stat in stats:
                columns.verify(stat)
        except StatError as e:
            print(f"Invalid --summary-trend-stats: {e}")
            return 1
        columns.update(stats)

    try:
        data = load_snapshot(snapshot_path)
    except SnapshotError as e:
        print(f"Invalid snapshot: {e}")
        return 1

    if args.summary_time_unit is not None:
        data.time_unit = args.summary_time_unit or None

    summarize(
        sys.stdout,
        " " * args.indent,
        data,
        columns=columns,
        colors=Colors(enabled=not args.no_color),
    )
    return 0


def cmd_verify_stats(args: argparse.Namespace) -> int:
    """Check trend statistics."""
    from .reporting import StatError, TrendColumns

    columns = TrendColumns()
    failed = False

    for stat in args.stats:
        try:
            columns.verify(stat)
            print(f"  {stat}: ok")
        except StatError as e:
            print(f"  {stat}: {e}")
            failed = True

    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    from .core.humanize import TIME_UNITS

    parser = argparse.ArgumentParser(
        prog="summit",
        description="Summit - end-of-run summaries for test results",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # render
    render_parser = subparsers.add_parser("render", help="Render a summary snapshot")
    render_parser.add_argument("snapshot", help="Path to a summary snapshot (JSON)")
    render_parser.add_argument(
        "--summary-trend-stats",
        default="",
        help="Comma-separated trend stats, e.g. 'avg,min,max,p(99)'",
    )
    render_parser.add_argument(
        "--summary-time-unit",
        choices=["", *TIME_UNITS],
        default=None,
        help="Fixed time unit for time values (default: automatic)",
    )
    render_parser.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    render_parser.add_argument(
        "--indent", type=int, default=0, help="Spaces to indent every line with"
    )

    # verify-stats
    verify_parser = subparsers.add_parser(
        "verify-stats", help="Check trend stats like 'p(99.9)'"
    )
    verify_parser.add_argument("stats", nargs="+", help="Stats to check")

    args = parser.parse_args(argv)

    if args.command == "render":
        return cmd_render(args)
    elif args.command == "verify-stats":
        return cmd_verify_stats(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
