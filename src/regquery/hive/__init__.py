"""Hive stores: the read-only registry model and the backends that search it."""

from __future__ import annotations

from pathlib import Path

from regquery.hive.memory import InMemoryHiveStore
from regquery.hive.types import (
    Hit,
    HiveStore,
    Key,
    KeyHit,
    Value,
    ValueHit,
    format_timestamp,
    strip_root_key_name,
)


def open_hive_store(hive_path: str | Path, recover_deleted: bool = False) -> HiveStore:
    """Create the default file-backed hive store; the hive is read on ``parse()``."""
    from regquery.hive.python_registry import PythonRegistryHiveStore

    return PythonRegistryHiveStore(hive_path, recover_deleted=recover_deleted)


__all__ = [
    "Hit",
    "HiveStore",
    "InMemoryHiveStore",
    "Key",
    "KeyHit",
    "Value",
    "ValueHit",
    "format_timestamp",
    "open_hive_store",
    "strip_root_key_name",
]
