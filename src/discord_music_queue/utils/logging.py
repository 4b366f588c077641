"""Console log formatting and per-session logger helpers."""

from __future__ import annotations

import logging
import os
import sys


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the levelname and tags records with their guild.

    Records logged through :func:`session_logger` carry a ``guild_id`` extra;
    it is rendered as a ``[guild <id>]`` prefix on the message.

    Colors are disabled when the ``NO_COLOR`` environment variable is set or
    when the output stream is not a TTY (e.g. redirected to a file).
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",     # cyan
        logging.INFO: "\033[32m",      # green
        logging.WARNING: "\033[33m",   # yellow
        logging.ERROR: "\033[31m",     # red
        logging.CRITICAL: "\033[1;31m",  # bold red
    }
    RESET = "\033[0m"

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = getattr(self, "_stream", None) or sys.stdout
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        guild_id = getattr(record, "guild_id", None)
        use_color = self._use_color()
        if guild_id is None and not use_color:
            return super().format(record)

        record = logging.makeLogRecord(record.__dict__)
        if guild_id is not None:
            record.msg = f"[guild {guild_id}] {record.getMessage()}"
            record.args = None
        if use_color:
            color = self.COLORS.get(record.levelno, "")
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def session_logger(logger: logging.Logger, guild_id: int) -> logging.LoggerAdapter:
    """Wrap ``logger`` so every record carries the session's ``guild_id``."""
    return logging.LoggerAdapter(logger, {"guild_id": guild_id})
