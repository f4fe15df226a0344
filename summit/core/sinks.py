"""
Metric sinks.

A sink holds the finalized aggregation of one metric's samples:
- CounterSink: accumulated total
- GaugeSink: last observed value plus running bounds
- RateSink: how many samples were true out of the total
- TrendSink: the sample distribution (avg, min, med, max, percentiles)

Every sink exposes ``calc()``. The summary renderer calls it before reading
values, so it must be safe to call any number of times.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Union


class Sink:
    """Base class for all sinks."""

    def add(self, value: Union[float, int, bool]) -> None:
        raise NotImplementedError

    def calc(self) -> None:
        """Finalize derived values. Idempotent."""


@dataclass
class CounterSink(Sink):
    value: float = 0.0

    def add(self, value: Union[float, int, bool]) -> None:
        self.value += float(value)


@dataclass
class GaugeSink(Sink):
    value: float = 0.0
    min: float = 0.0
    max: float = 0.0
    min_set: bool = False

    def add(self, value: Union[float, int, bool]) -> None:
        value = float(value)
        self.value = value
        if value > self.max:
            self.max = value
        if value < self.min or not self.min_set:
            self.min = value
            self.min_set = True


@dataclass
class RateSink(Sink):
    trues: int = 0
    total: int = 0

    def add(self, value: Union[float, int, bool]) -> None:
        self.total += 1
        if value:
            self.trues += 1


@dataclass
class TrendSink(Sink):
    """
    Distribution of samples.

    ``avg`` and ``med`` are only meaningful after ``calc()``; ``p()`` calls it
    itself.
    """

    values: List[float] = field(default_factory=list)
    count: int = 0
    min: float = 0.0
    max: float = 0.0
    sum: float = 0.0
    avg: float = 0.0
    med: float = 0.0
    jumbled: bool = False

    def add(self, value: Union[float, int, bool]) -> None:
        value = float(value)
        self.values.append(value)
        self.count += 1
        self.sum += value
        if self.count == 1:
            self.min = self.max = value
        else:
            self.min = min(self.min, value)
            self.max = max(self.max, value)
        self.jumbled = True

    def calc(self) -> None:
        if self.count == 0:
            return

        if self.jumbled:
            self.values.sort()
            self.jumbled = False

        self.avg = self.sum / self.count
        middle = self.count // 2
        if self.count % 2 == 0:
            self.med = (self.values[middle - 1] + self.values[middle]) / 2
        else:
            self.med = self.values[middle]

    def p(self, pct: float) -> float:
        """
        Percentile of the samples, ``pct`` given as a fraction (0.95 for p(95)).

        Interpolates linearly between the two closest samples when the
        percentile does not land on one.
        """
        if self.count == 0:
            return 0.0
        if math.isnan(pct):
            return math.nan
        if self.count == 1:
            return self.values[0]

        self.calc()
        # p(0) and p(100) bound anything outside them
        i = min(max(pct, 0.0), 1.0) * (self.count - 1)
        lower = self.values[int(math.floor(i))]
        upper = self.values[int(math.ceil(i))]
        return lower + (upper - lower) * (i - math.floor(i))


__all__ = [
    "Sink",
    "CounterSink",
    "GaugeSink",
    "RateSink",
    "TrendSink",
]
