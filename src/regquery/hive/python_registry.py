"""Hive store backed by the ``python-registry`` library.

The library does all binary parsing. This module only walks its key objects
once and copies what the query pipeline needs into the read-only
:class:`~regquery.hive.types.Key` tree, so searching is shared with
:class:`~regquery.hive.memory.InMemoryHiveStore`.
"""

from __future__ import annotations

import logging
import struct
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from Registry import Registry, RegistryParse

from regquery.constants import MAX_SINGLE_CELL_DATA, RESIDENT_DATA_FLAG
from regquery.encoding import hex_rendering
from regquery.exceptions import HiveError
from regquery.hive.memory import InMemoryHiveStore
from regquery.hive.types import Key, Value

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (RegistryParse.RegistryException, UnicodeDecodeError, ValueError, struct.error)


def _key_timestamp(registry_key: Any) -> Optional[datetime]:
    """Return the key's last write time as an aware UTC datetime."""
    try:
        timestamp = registry_key.timestamp()
    except (ValueError, OverflowError):
        return None
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def render_data(registry_value: Any, raw: bytes) -> str:
    """Render value data as text.

    Strings are shown as text, integers in decimal, multi-strings joined with
    spaces, and everything else (including data the library cannot decode) as
    a hex rendering of the raw bytes.
    """
    try:
        data = registry_value.value()
    except _DECODE_ERRORS as exc:
        logger.debug("Falling back to hex for value '%s': %s", registry_value.name(), exc)
        return hex_rendering(raw)

    if isinstance(data, (bytes, bytearray)):
        return hex_rendering(bytes(data))
    if isinstance(data, list):
        return " ".join(str(item) for item in data if item != "")
    if isinstance(data, str):
        return data.rstrip("\x00")
    return str(data)


def read_slack(registry_value: Any) -> bytes:
    """Return the bytes of the data cell that lie past the value's logical length.

    Only data stored in a single cell can carry slack; resident data and big
    data records yield ``b""``.
    """
    vk_record = registry_value._vkrecord
    try:
        stored_length = vk_record.raw_data_length()
        if stored_length & RESIDENT_DATA_FLAG or stored_length < 5 or stored_length > MAX_SINGLE_CELL_DATA:
            return b""
        cell = RegistryParse.HBINCell(vk_record._buf, vk_record.data_offset(), vk_record)
        start = cell.data_offset() + vk_record.data_length()
        end = cell.offset() + cell.size()
        return bytes(vk_record._buf[start:end]) if end > start else b""
    except _DECODE_ERRORS as exc:
        logger.debug("Could not read slack for value '%s': %s", registry_value.name(), exc)
        return b""


def convert_value(registry_value: Any) -> Value:
    """Copy a python-registry value into a :class:`Value`."""
    try:
        raw = bytes(registry_value.raw_data())
    except _DECODE_ERRORS as exc:
        logger.debug("Could not read raw data for value '%s': %s", registry_value.name(), exc)
        raw = b""
    return Value(
        name=registry_value.name(),
        type_name=registry_value.value_type_str(),
        raw=raw,
        data_text=render_data(registry_value, raw),
        slack=read_slack(registry_value),
    )


def convert_key(registry_key: Any) -> Key:
    """Copy a python-registry key and everything below it into a :class:`Key` tree."""
    return Key(
        path=registry_key.path(),
        name=registry_key.name(),
        last_write=_key_timestamp(registry_key),
        values=tuple(convert_value(value) for value in registry_key.values()),
        subkeys=tuple(convert_key(subkey) for subkey in registry_key.subkeys()),
    )


class PythonRegistryHiveStore(InMemoryHiveStore):
    """Hive store reading an offline hive file with python-registry.

    Parameters
    ----------
    hive_path : str or Path
        Path to the hive file
    recover_deleted : bool, default False
        Requested recovery of deleted keys and values. python-registry only
        reads allocated records, so this is reported and otherwise ignored.

    """

    def __init__(self, hive_path: str | Path, recover_deleted: bool = False) -> None:
        """Initialize the store for a hive file; nothing is read until :meth:`parse`."""
        super().__init__(root=None, hive_path=str(hive_path))
        self.recover_deleted = recover_deleted

    def parse(self) -> None:
        """Read the hive file and build the key tree.

        Raises
        ------
        HiveError
            If the file cannot be read or is not a valid hive

        """
        if self.recover_deleted:
            logger.warning(
                "Deleted key/value recovery is not supported by this backend; searching allocated records only"
            )

        try:
            registry = Registry.Registry(self.hive_path)
            self._root = convert_key(registry.root())
        except OSError as exc:
            raise HiveError(f"Could not read hive '{self.hive_path}': {exc}", self.hive_path, exc) from exc
        except RegistryParse.RegistryException as exc:
            raise HiveError(f"Could not parse hive '{self.hive_path}': {exc}", self.hive_path, exc) from exc

        logger.debug("Parsed hive '%s' with root key '%s'", self.hive_path, self._root.name)
