"""Display width of terminal strings."""

import unicodedata
from typing import Iterator

_ESC = "\x1b"


def _elements(text: str) -> Iterator[str]:
    """
    Yield the first character of each NFKD normalization segment.

    A segment is a starter followed by the combining characters attached to
    it, so ``"é"`` (``e`` + U+0301 after decomposition) is one element.
    """
    started = False
    for char in unicodedata.normalize("NFKD", text):
        if started and unicodedata.combining(char):
            continue
        started = True
        yield char


def str_width(text: str) -> int:
    """
    Return the number of columns ``text`` occupies on an ANSI terminal.

    Escape sequences (``ESC [ ... final`` and two-character ``ESC x``) take no
    space. Every other normalization segment counts as one column, so wide
    East Asian characters are under-counted.
    """
    width = 0
    in_esc = False
    in_long_esc = False

    for char in _elements(text):
        code = ord(char)

        if char == _ESC:
            in_esc = True
            continue
        if in_esc and char == "[":
            in_long_esc = True
            continue
        if in_long_esc:
            # parameter and intermediate bytes up to the final byte
            if 0x40 <= code <= 0x7E:
                in_esc = False
                in_long_esc = False
            continue
        if in_esc and not in_long_esc and 0x40 <= code <= 0x5F:
            in_esc = False
            continue

        width += 1

    return width


def pad(text: str, width: int) -> str:
    """Spaces needed after ``text`` to fill ``width`` columns."""
    return " " * max(0, width - str_width(text))


__all__ = ["str_width", "pad"]
