"""
Trend Columns

Statistics shown for trend metrics in the summary, e.g. ``avg=12ms min=3ms``.

The default columns are ``avg, min, med, max, p(90), p(95)``. Any percentile
can be requested with the ``p(N)`` syntax.

Usage:
    from summit.reporting.trend_columns import TrendColumns

    columns = TrendColumns()
    columns.verify("p(99.9)")            # raises StatError if invalid
    columns.update(["avg", "p(99)"])     # avg=... p(99)=...
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from ..core.sinks import TrendSink

logger = logging.getLogger(__name__)


class StatError(ValueError):
    """An invalid trend column stat."""


class EmptyStatError(StatError):
    def __init__(self) -> None:
        super().__init__("invalid stat, empty string")


class UnknownStatFormatError(StatError):
    def __init__(self) -> None:
        super().__init__("invalid stat, unknown format")


class InvalidPercentileError(StatError):
    def __init__(self) -> None:
        super().__init__("invalid percentile stat value, accepts a number")


@dataclass(frozen=True)
class TrendColumn:
    """A named statistic read from a trend sink."""

    key: str
    get: Callable[[TrendSink], float]


DEFAULT_TREND_COLUMNS = (
    TrendColumn("avg", lambda sink: sink.avg),
    TrendColumn("min", lambda sink: sink.min),
    TrendColumn("med", lambda sink: sink.med),
    TrendColumn("max", lambda sink: sink.max),
    TrendColumn("p(90)", lambda sink: sink.p(0.90)),
    TrendColumn("p(95)", lambda sink: sink.p(0.95)),
)


def _parse_number(text: str) -> float:
    # float() is more lenient than the number syntax we accept
    if not text or text != text.strip() or "_" in text:
        raise ValueError(text)
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(text)
    return number


def percentile_getter(stat: str) -> Callable[[TrendSink], float]:
    """
    Build the getter for a ``p(N)`` stat.

    Raises:
        EmptyStatError: ``stat`` is empty
        UnknownStatFormatError: ``stat`` is not wrapped in ``p(`` and ``)``
        InvalidPercentileError: the wrapped value is not a number
    """
    if stat == "":
        raise EmptyStatError()

    if not stat.startswith("p(") or not stat.endswith(")"):
        raise UnknownStatFormatError()

    try:
        percentile = _parse_number(stat[2:-1])
    except ValueError:
        raise InvalidPercentileError() from None

    fraction = percentile / 100
    return lambda sink: sink.p(fraction)


class TrendColumns:
    """
    Ordered set of trend columns.

    Built once (usually from ``--summary-trend-stats``) and handed to the
    summary renderer. Not safe to change while a summary is being rendered.
    """

    def __init__(self, columns: Optional[Iterable[TrendColumn]] = None):
        self._columns: List[TrendColumn] = list(
            DEFAULT_TREND_COLUMNS if columns is None else columns
        )

    def __iter__(self) -> Iterator[TrendColumn]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __getitem__(self, index: int) -> TrendColumn:
        return self._columns[index]

    def __repr__(self) -> str:
        return f"TrendColumns({self.keys()!r})"

    def keys(self) -> List[str]:
        """Column keys in display order."""
        return [column.key for column in self._columns]

    def find(self, key: str) -> Optional[TrendColumn]:
        """Get the current column with this key, if any."""
        for column in self._columns:
            if column.key == key:
                return column
        return None

    def verify(self, stat: str) -> None:
        """
        Check that ``stat`` is a current column key or a percentile.

        Raises:
            StatError: One of its subclasses, naming what is wrong
        """
        if stat == "":
            raise EmptyStatError()

        if self.find(stat) is not None:
            return

        percentile_getter(stat)

    def update(self, stats: Sequence[str]) -> None:
        """
        Replace the columns with ``stats``, in that order.

        Percentiles are built fresh; other stats must match an existing
        column key. Unknown stats are skipped. If nothing usable remains the
        current columns are kept.
        """
        columns: List[TrendColumn] = []

        for stat in stats:
            try:
                columns.append(TrendColumn(stat, percentile_getter(stat)))
                continue
            except StatError:
                pass

            column = self.find(stat)
            if column is not None:
                columns.append(column)
            else:
                logger.debug("Dropping unknown trend stat %r", stat)

        if columns:
            self._columns = columns
        else:
            logger.debug("No usable trend stats in %r, keeping %s", stats, self.keys())


def parse_trend_stats(value: str) -> List[str]:
    """Split a comma-separated ``--summary-trend-stats`` value."""
    return [stat.strip() for stat in value.split(",")] if value else []


__all__ = [
    "StatError",
    "EmptyStatError",
    "UnknownStatFormatError",
    "InvalidPercentileError",
    "TrendColumn",
    "TrendColumns",
    "DEFAULT_TREND_COLUMNS",
    "percentile_getter",
    "parse_trend_stats",
]
