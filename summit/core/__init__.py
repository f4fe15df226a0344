"""Core types: groups, checks, metrics and their sinks."""

from .sinks import CounterSink, GaugeSink, RateSink, Sink, TrendSink
from .types import Check, Group, Metric, MetricType, SubMetric, ValueType, new_sink

__all__ = [
    "Check",
    "Group",
    "Metric",
    "MetricType",
    "SubMetric",
    "ValueType",
    "new_sink",
    "Sink",
    "CounterSink",
    "GaugeSink",
    "RateSink",
    "TrendSink",
]
