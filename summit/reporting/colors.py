"""
Color roles for summary output.

The renderer only picks a role per cell (success, failure, value, ...). The
escape sequences come from rich styles rendered with the standard 8-color
system, so output looks the same on any ANSI terminal.
"""

from typing import Optional

from rich.color import ColorSystem
from rich.style import Style

SUCCESS = Style(color="green")
FAILURE = Style(color="red")
GRAY = Style(dim=True)
VALUE = Style(color="cyan")
EXTRA = Style(color="cyan", dim=True)
STANDARD = Style()


class Colors:
    """Applies color roles to text, or leaves it plain when disabled."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._system: Optional[ColorSystem] = ColorSystem.STANDARD if enabled else None

    def paint(self, style: Style, text: str) -> str:
        return style.render(text, color_system=self._system)

    def success(self, text: str) -> str:
        return self.paint(SUCCESS, text)

    def failure(self, text: str) -> str:
        return self.paint(FAILURE, text)

    def gray(self, text: str) -> str:
        return self.paint(GRAY, text)

    def value(self, text: str) -> str:
        return self.paint(VALUE, text)

    def extra(self, text: str) -> str:
        return self.paint(EXTRA, text)

    def standard(self, text: str) -> str:
        return self.paint(STANDARD, text)


__all__ = [
    "Colors",
    "SUCCESS",
    "FAILURE",
    "GRAY",
    "VALUE",
    "EXTRA",
    "STANDARD",
]
