"""
Value humanization for summary output.

Metrics store raw numbers: time values are milliseconds, data values are
bytes. These helpers turn them into the short strings shown in summaries.
"""

import math
from typing import Optional

# Units accepted for --summary-time-unit
TIME_UNITS = ("s", "ms", "us")

_DATA_SIZES = ("B", "kB", "MB", "GB", "TB", "PB", "EB")


def format_float(value: float) -> str:
    """Format a float with up to six decimals, trailing zeros trimmed."""
    if math.isnan(value) or math.isinf(value):
        return str(value)
    text = f"{value:.6f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def format_rate(value: float) -> str:
    """Format a 0..1 fraction as a percentage, truncated to two decimals."""
    if math.isnan(value) or math.isinf(value):
        return f"{value}%"
    return f"{int(value * 100 * 100) / 100:.2f}%"


def format_bytes(value: float) -> str:
    """SI byte sizes: ``9 B``, ``1.5 kB``, ``12 MB``."""
    if math.isnan(value) or math.isinf(value):
        return str(value)
    size = int(value) if value > 0 else 0
    if size < 10:
        return f"{size} B"

    exponent = 0
    while exponent < len(_DATA_SIZES) - 1 and size >= 1000 ** (exponent + 1):
        exponent += 1
    scaled = math.floor(size / 1000**exponent * 10 + 0.5) / 10
    if scaled < 10:
        return f"{scaled:.1f} {_DATA_SIZES[exponent]}"
    return f"{scaled:.0f} {_DATA_SIZES[exponent]}"


def format_duration(ms: float, time_unit: Optional[str] = None) -> str:
    """
    Format a duration given in milliseconds.

    Args:
        ms: Duration in milliseconds
        time_unit: Fixed unit ("s", "ms" or "us"); picks one automatically if empty

    Returns:
        Duration string such as ``1.25s``, ``120.00ms`` or ``2m3.50s``
    """
    if math.isnan(ms) or math.isinf(ms):
        return str(ms)

    if time_unit == "s":
        return f"{ms / 1000:.2f}s"
    if time_unit == "ms":
        return f"{ms:.2f}ms"
    if time_unit == "us":
        return f"{ms * 1000:.2f}µs"

    if ms == 0:
        return "0s"

    magnitude = abs(ms)
    if magnitude >= 60_000:
        minutes = int(ms / 60_000)
        seconds = (ms - minutes * 60_000) / 1000
        return f"{minutes}m{abs(seconds):.2f}s"
    if magnitude >= 1000:
        return f"{ms / 1000:.2f}s"
    if magnitude >= 1:
        return f"{ms:.2f}ms"
    if magnitude >= 0.001:
        return f"{ms * 1000:.2f}µs"
    return f"{int(ms * 1_000_000)}ns"


__all__ = [
    "TIME_UNITS",
    "format_float",
    "format_rate",
    "format_bytes",
    "format_duration",
]
