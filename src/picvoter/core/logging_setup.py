"""Logging setup for the picvoter service."""

from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "picvoter-stderr"


class LevelPrefixFormatter(logging.Formatter):
    """Render records as ``"<level>: <message>"`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return f"{record.levelname.lower()}: {message}"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stderr handler on the root logger.

    Calling this more than once replaces the level but never stacks handlers.

    Args:
        level: Level name (``"info"``, ``"DEBUG"``...) or numeric level.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level

    root = logging.getLogger()
    root.setLevel(resolved)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(LevelPrefixFormatter("%(message)s"))
    root.addHandler(handler)
