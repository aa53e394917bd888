"""
Logging setup for the command line front-end.

Report lines are written through the ``stepreport`` logger to stdout.
Informational lines are printed as-is so the boxes line up; warnings and
above carry a level prefix.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "stepreport"


class ReportFormatter(logging.Formatter):
    """Formatter that leaves INFO and DEBUG lines bare."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno < logging.WARNING:
            return message
        return f"[{record.levelname}] {message}"


def configure_logging(
    level: str = "info", stream: TextIO | None = None
) -> logging.Logger:
    """
    Configure the report logger with a single stream handler.

    Calling this again replaces the previous handler, so repeated CLI
    invocations in one process do not duplicate lines.

    Parameters:
        level: Log level string (e.g., "info", "debug", "warning").
        stream: Destination stream, stdout when omitted.

    Returns:
        The configured report logger.
    """
    lvl = logging.getLevelName(level.upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(ReportFormatter())
    logger.addHandler(handler)
    logger.setLevel(lvl)
    logger.propagate = False
    return logger


__all__ = ["configure_logging", "ReportFormatter", "LOGGER_NAME"]
