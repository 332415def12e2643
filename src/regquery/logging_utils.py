"""Logging setup for the regquery command line.

Progress messages (the version header, ``Processing hive ...``, export
notices) are part of what the user reads on the console, so they are printed
as bare lines. Warnings and errors keep their level name. Log files always
get timestamped records.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PROGRESS_FORMAT = "%(message)s"
PROBLEM_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConsoleFormatter(logging.Formatter):
    """Print records below WARNING as plain lines and prefix the rest with their level.

    Examples
    --------
    >>> formatter = ConsoleFormatter()
    >>> record = logging.makeLogRecord({"msg": "Processing hive 'SAM'", "levelno": logging.INFO})
    >>> formatter.format(record)
    "Processing hive 'SAM'"

    """

    def __init__(self) -> None:
        """Initialize with the progress format and a second formatter for problems."""
        super().__init__(PROGRESS_FORMAT)
        self._problem_formatter = logging.Formatter(PROBLEM_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return self._problem_formatter.format(record)
        return super().format(record)


def resolve_level(log_level: int | str) -> int:
    """Turn a level name such as ``"warning"`` into its number; unknown names mean INFO."""
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for a regquery run.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Also append log records to this file, always with timestamps.
    trace_mode : bool, default False
        Use timestamped records with logger names on the console as well.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    trace_formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(trace_formatter if trace_mode else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(trace_formatter)
            root_logger.addHandler(file_handler)
            root_logger.debug("Logging to file: %s", log_file)

    return root_logger
