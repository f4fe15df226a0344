"""Groups and checks section of the summary."""

from typing import TextIO

from ..core.types import Check, Group
from .colors import Colors
from .formatting import FAIL_MARK, SUCC_MARK
from .output import write

GROUP_PREFIX = "█"
DETAILS_PREFIX = "↳"
GROUP_INDENT = "  "


def summarize_check(out: TextIO, indent: str, check: Check, colors: Colors) -> None:
    """
    Write a check line, plus a details line if any evaluation failed.

    The details line shows the truncated pass percentage and the raw counts.
    """
    if check.fails > 0:
        paint, mark = colors.failure, FAIL_MARK
    else:
        paint, mark = colors.success, SUCC_MARK

    write(out, paint(f"{indent}{mark} {check.name}") + "\n")

    if check.fails > 0:
        percent = int(100 * (check.passes / (check.passes + check.fails)))
        details = (
            f"{indent} {DETAILS_PREFIX}  {percent}% — "
            f"{SUCC_MARK} {check.passes} / {FAIL_MARK} {check.fails}"
        )
        write(out, paint(details) + "\n")


def summarize_group(out: TextIO, indent: str, group: Group, colors: Colors) -> None:
    """Write a group's header, its checks, then its nested groups, depth first."""
    if group.name:
        write(out, f"{indent}{GROUP_PREFIX} {group.name}\n\n")
        indent = indent + GROUP_INDENT

    for check in group.checks.values():
        summarize_check(out, indent, check, colors)
    if group.checks:
        write(out, "\n")

    for subgroup in group.groups.values():
        summarize_group(out, indent, subgroup, colors)


__all__ = [
    "GROUP_PREFIX",
    "DETAILS_PREFIX",
    "summarize_check",
    "summarize_group",
]
