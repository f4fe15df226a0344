"""Best-effort writes to the summary stream."""

import logging
from typing import TextIO

logger = logging.getLogger(__name__)


def write(out: TextIO, text: str) -> None:
    """
    Write ``text`` to ``out``.

    A summary that cannot be printed should not fail the run, so write errors
    are logged and dropped.
    """
    try:
        out.write(text)
    except (OSError, ValueError) as e:
        logger.debug("Failed to write summary output: %s", e)


__all__ = ["write"]
