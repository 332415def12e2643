"""Read-only data model shared by the hive stores and the query pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional, Protocol, Union, runtime_checkable

from regquery.constants import KEY_PATH_SEPARATOR
from regquery.encoding import hex_rendering


def strip_root_key_name(key_path: str) -> str:
    """Drop the root key's own name from a key path.

    Everything up to and including the first separator is removed. A path
    without a separator (the root key itself) is returned unchanged.

    Examples
    --------
    >>> strip_root_key_name("CsiTool-CreateHive-{0}\\\\Software\\\\Microsoft")
    'Software\\\\Microsoft'
    >>> strip_root_key_name("ROOT")
    'ROOT'

    """
    _, separator, remainder = key_path.partition(KEY_PATH_SEPARATOR)
    return remainder if separator else key_path


def format_timestamp(timestamp: Optional[datetime]) -> str:
    """Format a last write time for display; a missing time renders as an empty string."""
    if timestamp is None:
        return ""
    return timestamp.isoformat(sep=" ", timespec="microseconds")


@dataclass(frozen=True)
class Value:
    """A registry value record.

    Attributes
    ----------
    name : str
        Value name
    type_name : str
        Declared registry type, e.g. ``RegSZ``
    raw : bytes
        Raw data payload
    data_text : str
        Rendered form of the data
    slack : bytes
        Bytes in the data cell past the logical data length

    """

    name: str
    type_name: str
    raw: bytes = b""
    data_text: str = ""
    slack: bytes = b""

    @property
    def size(self) -> int:
        return len(self.raw)

    @property
    def slack_text(self) -> str:
        return hex_rendering(self.slack)

    def to_text(self) -> str:
        """Return the full multi-line description of this value."""
        lines = [
            f"Value name: {self.name}",
            f"Value type: {self.type_name}",
            f"Value data: {self.data_text}",
            f"Value data size: {self.size:,}",
        ]
        if self.slack:
            lines.append(f"Value slack: {self.slack_text}")
        return "\n".join(lines)


@dataclass(frozen=True, eq=False)
class Key:
    """A registry key with its values and subkeys, in hive order."""

    path: str
    name: str
    last_write: Optional[datetime] = None
    values: tuple[Value, ...] = field(default_factory=tuple)
    subkeys: tuple["Key", ...] = field(default_factory=tuple)

    @property
    def display_path(self) -> str:
        return strip_root_key_name(self.path)

    def walk(self) -> Iterator["Key"]:
        """Yield this key and every descendant, depth first, parents before children."""
        stack = [self]
        while stack:
            key = stack.pop()
            yield key
            stack.extend(reversed(key.subkeys))

    def to_text(self) -> str:
        """Return the full recursive description of this key and everything below it."""
        return "\n".join(self._text_lines())

    def _text_lines(self) -> list[str]:
        lines = [
            f"Key path: {self.display_path}",
            f"Last write time: {format_timestamp(self.last_write)}",
            f"Value count: {len(self.values):,}",
            f"Subkey count: {len(self.subkeys):,}",
        ]
        for index, value in enumerate(self.values):
            lines.append("")
            lines.append(f"------------ Value #{index:,} ------------")
            lines.extend(value.to_text().splitlines())
        for subkey in self.subkeys:
            lines.append("")
            lines.extend(subkey._text_lines())
        return lines


@dataclass(frozen=True)
class KeyHit:
    """A match on a key."""

    key: Key

    @property
    def value(self) -> None:
        return None

    @property
    def key_path(self) -> str:
        return self.key.path

    @property
    def display_path(self) -> str:
        return strip_root_key_name(self.key.path)


@dataclass(frozen=True)
class ValueHit:
    """A match on a value, with the key that owns it."""

    key: Key
    value: Value

    @property
    def key_path(self) -> str:
        return self.key.path

    @property
    def display_path(self) -> str:
        return strip_root_key_name(self.key.path)


Hit = Union[KeyHit, ValueHit]


@runtime_checkable
class HiveStore(Protocol):
    """Query surface every hive backend offers to the pipeline."""

    @property
    def root(self) -> Key: ...

    def parse(self) -> None: ...

    def get_key(self, path: str) -> Optional[Key]: ...

    def find_by_value_size(self, min_bytes: int) -> list[tuple[Key, Value]]: ...

    def find_by_last_write_time(self, start: Optional[datetime], end: Optional[datetime]) -> list[KeyHit]: ...

    def find_in_key_name(self, term: str, is_regex: bool) -> list[KeyHit]: ...

    def find_in_value_name(self, term: str, is_regex: bool) -> list[ValueHit]: ...

    def find_in_value_data(self, term: str, is_regex: bool, literal: bool) -> list[ValueHit]: ...

    def find_in_value_data_slack(self, term: str, is_regex: bool, literal: bool) -> list[ValueHit]: ...
