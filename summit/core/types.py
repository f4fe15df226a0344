"""
Core type definitions for Summit.

This module provides the fundamental types used throughout the library:
- MetricType: Which kind of sink a metric aggregates into
- ValueType: What a metric's raw values represent (plain numbers, time, data)
- Check / Group: The tree of named checks a test run produces
- Metric: A named metric with its sink and pass/fail judgment
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .humanize import format_bytes, format_duration, format_float, format_rate
from .sinks import CounterSink, GaugeSink, RateSink, Sink, TrendSink


class MetricType(Enum):
    """How samples of a metric are aggregated."""

    COUNTER = "counter"  # Running total (requests, iterations)
    GAUGE = "gauge"  # Last value with min/max (active users)
    RATE = "rate"  # Fraction of true samples (checks, failures)
    TREND = "trend"  # Distribution (durations)


class ValueType(Enum):
    """What the raw values of a metric represent."""

    DEFAULT = "default"
    TIME = "time"  # Milliseconds
    DATA = "data"  # Bytes


_SINKS_BY_TYPE = {
    MetricType.COUNTER: CounterSink,
    MetricType.GAUGE: GaugeSink,
    MetricType.RATE: RateSink,
    MetricType.TREND: TrendSink,
}


def new_sink(metric_type: MetricType) -> Sink:
    """Create an empty sink for a metric type."""
    return _SINKS_BY_TYPE[metric_type]()


@dataclass
class Check:
    """A named check with its pass and fail counts."""

    name: str
    passes: int = 0
    fails: int = 0

    def record(self, passed: bool) -> None:
        if passed:
            self.passes += 1
        else:
            self.fails += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "passes": self.passes, "fails": self.fails}


@dataclass
class Group:
    """
    A named group of checks and nested groups.

    The root group usually has an empty name. Checks and groups are kept in
    the order they were first added, which is also the order they are
    rendered in.
    """

    name: str = ""
    checks: Dict[str, Check] = field(default_factory=dict)
    groups: Dict[str, "Group"] = field(default_factory=dict)

    def group(self, name: str) -> "Group":
        """Get the nested group called ``name``, creating it if needed."""
        if name not in self.groups:
            self.groups[name] = Group(name)
        return self.groups[name]

    def check(self, name: str) -> Check:
        """Get the check called ``name``, creating it if needed."""
        if name not in self.checks:
            self.checks[name] = Check(name)
        return self.checks[name]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "checks": [check.to_dict() for check in self.checks.values()],
            "groups": [group.to_dict() for group in self.groups.values()],
        }


@dataclass(frozen=True)
class SubMetric:
    """Marks a metric as a filtered view of another one, e.g. ``{ status:200 }``."""

    parent: str
    suffix: str


@dataclass
class Metric:
    """
    A metric as shown in the summary.

    Attributes:
        name: Unique metric name (sub-metrics include their suffix)
        type: How samples are aggregated
        contains: What the raw values represent
        sink: Aggregated values (created from ``type`` if omitted)
        tainted: None when no threshold applies, True when failing, False when passing
        sub: Parent relation for sub-metrics
    """

    name: str
    type: MetricType
    contains: ValueType = ValueType.DEFAULT
    sink: Optional[Sink] = None
    tainted: Optional[bool] = None
    sub: Optional[SubMetric] = None

    def __post_init__(self) -> None:
        if self.sink is None:
            self.sink = new_sink(self.type)

    def add(self, value: Any) -> None:
        """Add a sample to the sink."""
        assert self.sink is not None
        self.sink.add(value)

    def humanize_value(self, value: float, time_unit: Optional[str] = None) -> str:
        """Format a raw value of this metric for display."""
        if self.type == MetricType.RATE:
            return format_rate(value)
        if self.contains == ValueType.TIME:
            return format_duration(value, time_unit)
        if self.contains == ValueType.DATA:
            return format_bytes(value)
        return format_float(value)


__all__ = [
    "MetricType",
    "ValueType",
    "Check",
    "Group",
    "SubMetric",
    "Metric",
    "new_sink",
]
