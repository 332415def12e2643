"""Saving a value's raw data to disk."""

from __future__ import annotations

import logging
from pathlib import Path

from regquery.exceptions import ExportError
from regquery.hive.types import Value

logger = logging.getLogger(__name__)


def export_value(value: Value, destination: str | Path) -> Path:
    """Write the raw bytes of ``value`` to ``destination``.

    Missing parent directories are created. An existing file is overwritten.

    Parameters
    ----------
    value : Value
        Value whose raw data is written
    destination : str or Path
        Target file

    Returns
    -------
    Path
        The written file

    Raises
    ------
    ExportError
        If the directory or the file cannot be written

    """
    path = Path(destination)
    logger.info(f"Saving contents of '{value.name}' to '{destination}'")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(value.raw)
    except OSError as e:
        raise ExportError(str(destination), original_error=e) from e

    logger.debug(f"Wrote {value.size:,} bytes to {path}")
    return path
