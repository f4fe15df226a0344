"""
Summary snapshots.

A snapshot is a JSON document holding everything a summary shows, so a
summary can be rendered again later (``summit render results.json``):

    {
        "elapsed_seconds": 12.5,
        "time_unit": "ms",
        "root_group": {
            "name": "",
            "checks": [{"name": "status is 200", "passes": 5, "fails": 0}],
            "groups": []
        },
        "metrics": [
            {"name": "http_reqs", "type": "counter", "sink": {"value": 10}},
            {"name": "http_req_duration", "type": "trend", "contains": "time",
             "sink": {"values": [12.1, 30.4]}}
        ]
    }
"""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .core.sinks import CounterSink, GaugeSink, RateSink, Sink, TrendSink
from .core.types import Check, Group, Metric, MetricType, SubMetric, ValueType
from .reporting.summary import SummaryData


class SnapshotError(ValueError):
    """A snapshot document that cannot be turned into summary data."""


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise SnapshotError(f"{where}: missing {key!r}")
    return data[key]


def _group_from_dict(data: Dict[str, Any]) -> Group:
    group = Group(data.get("name", ""))

    for check_data in data.get("checks", []):
        name = _require(check_data, "name", f"check in group {group.name!r}")
        group.checks[name] = Check(
            name,
            passes=int(check_data.get("passes", 0)),
            fails=int(check_data.get("fails", 0)),
        )

    for group_data in data.get("groups", []):
        subgroup = _group_from_dict(group_data)
        group.groups[subgroup.name] = subgroup

    return group


def _sink_from_dict(metric_type: MetricType, data: Dict[str, Any]) -> Sink:
    if metric_type == MetricType.COUNTER:
        return CounterSink(value=float(data.get("value", 0)))

    if metric_type == MetricType.GAUGE:
        value = float(data.get("value", 0))
        return GaugeSink(
            value=value,
            min=float(data.get("min", value)),
            max=float(data.get("max", value)),
            min_set=True,
        )

    if metric_type == MetricType.RATE:
        return RateSink(trues=int(data.get("trues", 0)), total=int(data.get("total", 0)))

    sink = TrendSink()
    for value in data.get("values", []):
        sink.add(value)
    return sink


def _metric_from_dict(data: Dict[str, Any]) -> Metric:
    name = _require(data, "name", "metric")

    try:
        metric_type = MetricType(_require(data, "type", f"metric {name!r}"))
    except ValueError:
        raise SnapshotError(f"metric {name!r}: unknown type {data['type']!r}") from None

    try:
        contains = ValueType(data.get("contains", "default"))
    except ValueError:
        raise SnapshotError(
            f"metric {name!r}: unknown value type {data['contains']!r}"
        ) from None

    sub: Optional[SubMetric] = None
    if data.get("sub"):
        sub = SubMetric(
            parent=_require(data["sub"], "parent", f"metric {name!r} sub"),
            suffix=_require(data["sub"], "suffix", f"metric {name!r} sub"),
        )

    return Metric(
        name=name,
        type=metric_type,
        contains=contains,
        sink=_sink_from_dict(metric_type, data.get("sink") or {}),
        tainted=data.get("tainted"),
        sub=sub,
    )


def snapshot_from_dict(data: Dict[str, Any]) -> SummaryData:
    """
    Build summary data from a parsed snapshot document.

    Raises:
        SnapshotError: The document is missing names or uses unknown types
    """
    root = None
    if data.get("root_group") is not None:
        root = _group_from_dict(data["root_group"])

    metrics: Dict[str, Metric] = {}
    for metric_data in data.get("metrics", []):
        metric = _metric_from_dict(metric_data)
        metrics[metric.name] = metric

    return SummaryData(
        metrics=metrics,
        root=root,
        time=timedelta(seconds=float(data.get("elapsed_seconds", 0))),
        time_unit=data.get("time_unit") or None,
    )


def _sink_to_dict(sink: Optional[Sink]) -> Dict[str, Any]:
    if isinstance(sink, CounterSink):
        return {"value": sink.value}
    if isinstance(sink, GaugeSink):
        return {"value": sink.value, "min": sink.min, "max": sink.max}
    if isinstance(sink, RateSink):
        return {"trues": sink.trues, "total": sink.total}
    if isinstance(sink, TrendSink):
        return {"values": list(sink.values)}
    return {}


def snapshot_to_dict(data: SummaryData) -> Dict[str, Any]:
    """Convert summary data to a snapshot document."""
    return {
        "elapsed_seconds": data.time.total_seconds(),
        "time_unit": data.time_unit,
        "root_group": data.root.to_dict() if data.root is not None else None,
        "metrics": [
            {
                "name": metric.name,
                "type": metric.type.value,
                "contains": metric.contains.value,
                "tainted": metric.tainted,
                "sub": (
                    {"parent": metric.sub.parent, "suffix": metric.sub.suffix}
                    if metric.sub is not None
                    else None
                ),
                "sink": _sink_to_dict(metric.sink),
            }
            for metric in data.metrics.values()
        ],
    }


def load_snapshot(path: Union[str, Path]) -> SummaryData:
    """Load summary data from a snapshot file."""
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise SnapshotError(f"{path}: expected a JSON object")
    return snapshot_from_dict(data)


def save_snapshot(data: SummaryData, path: Union[str, Path]) -> None:
    """Save summary data to a snapshot file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(snapshot_to_dict(data), f, indent=2)


__all__ = [
    "SnapshotError",
    "snapshot_from_dict",
    "snapshot_to_dict",
    "load_snapshot",
    "save_snapshot",
]
