"""Hive store that searches a key tree already held in memory.

``InMemoryHiveStore`` holds the search logic for every backend: a backend
only has to turn its hive into a :class:`~regquery.hive.types.Key` tree in
:meth:`InMemoryHiveStore.parse`. Tests and library callers can hand a tree
to the store directly.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, Iterator, Optional

from regquery.constants import KEY_PATH_SEPARATOR
from regquery.encoding import hex_rendering, term_encodings
from regquery.exceptions import HiveError
from regquery.hive.types import Key, KeyHit, Value, ValueHit

logger = logging.getLogger(__name__)

TextMatcher = Callable[[str], bool]


def text_matcher(term: str, is_regex: bool) -> TextMatcher:
    """Build a case-insensitive matcher for a term.

    Parameters
    ----------
    term : str
        Search term
    is_regex : bool
        Treat ``term`` as a regular expression instead of a substring

    Returns
    -------
    Callable[[str], bool]
        Predicate over candidate text

    Raises
    ------
    re.error
        If ``is_regex`` is set and ``term`` does not compile

    """
    if is_regex:
        pattern = re.compile(term, re.IGNORECASE)
        return lambda text: pattern.search(text) is not None

    needle = term.casefold()
    return lambda text: needle in text.casefold()


def data_matcher(term: str, is_regex: bool, literal: bool) -> TextMatcher:
    """Build a matcher for rendered value data or slack.

    Besides the raw term, a non-regex, non-literal search also looks for the
    hex rendering of the term's single-byte and UTF-16LE encodings, since
    binary data is rendered as hex text.
    """
    matchers = [text_matcher(term, is_regex)]
    if not is_regex and not literal:
        matchers.extend(text_matcher(hex_rendering(encoded), False) for encoded in term_encodings(term))
    return lambda text: any(matcher(text) for matcher in matchers)


class InMemoryHiveStore:
    """Hive store over an in-memory key tree.

    Parameters
    ----------
    root : Key, optional
        Root key of the hive. Subclasses that parse a file leave this unset
        and assign it in :meth:`parse`.
    hive_path : str, default "<memory>"
        Label used in log and error messages

    """

    def __init__(self, root: Optional[Key] = None, hive_path: str = "<memory>") -> None:
        """Initialize the store with an optional ready-made tree."""
        self.hive_path = hive_path
        self._root = root

    @property
    def root(self) -> Key:
        if self._root is None:
            raise HiveError("Hive has not been parsed", hive_path=self.hive_path)
        return self._root

    def parse(self) -> None:
        """Check that a tree is present; there is nothing else to parse in memory."""
        if self._root is None:
            raise HiveError("No key tree supplied to the in-memory hive store", hive_path=self.hive_path)

    def _keys(self) -> Iterator[Key]:
        return self.root.walk()

    def _values(self) -> Iterator[tuple[Key, Value]]:
        for key in self._keys():
            for value in key.values:
                yield key, value

    def get_key(self, path: str) -> Optional[Key]:
        """Find a key by path, with or without the root key name, ignoring case."""
        parts = [part for part in path.split(KEY_PATH_SEPARATOR) if part]
        if parts and parts[0].casefold() == self.root.name.casefold():
            parts = parts[1:]

        key = self.root
        for part in parts:
            wanted = part.casefold()
            key = next((subkey for subkey in key.subkeys if subkey.name.casefold() == wanted), None)
            if key is None:
                logger.debug("No subkey named '%s' while resolving '%s'", part, path)
                return None
        return key

    def find_by_value_size(self, min_bytes: int) -> list[tuple[Key, Value]]:
        """Return every value whose raw data is at least ``min_bytes`` long."""
        return [(key, value) for key, value in self._values() if value.size >= min_bytes]

    def find_by_last_write_time(self, start: Optional[datetime], end: Optional[datetime]) -> list[KeyHit]:
        """Return keys whose last write time falls within ``[start, end]``.

        Both bounds are inclusive and either may be ``None`` for an open
        range. Keys without a last write time never match.
        """
        hits = []
        for key in self._keys():
            last_write = key.last_write
            if last_write is None:
                continue
            if start is not None and last_write < start:
                continue
            if end is not None and last_write > end:
                continue
            hits.append(KeyHit(key))
        return hits

    def find_in_key_name(self, term: str, is_regex: bool) -> list[KeyHit]:
        matches = text_matcher(term, is_regex)
        return [KeyHit(key) for key in self._keys() if matches(key.name)]

    def find_in_value_name(self, term: str, is_regex: bool) -> list[ValueHit]:
        matches = text_matcher(term, is_regex)
        return [ValueHit(key, value) for key, value in self._values() if matches(value.name)]

    def find_in_value_data(self, term: str, is_regex: bool, literal: bool) -> list[ValueHit]:
        matches = data_matcher(term, is_regex, literal)
        return [ValueHit(key, value) for key, value in self._values() if matches(value.data_text)]

    def find_in_value_data_slack(self, term: str, is_regex: bool, literal: bool) -> list[ValueHit]:
        matches = data_matcher(term, is_regex, literal)
        return [
            ValueHit(key, value) for key, value in self._values() if value.slack and matches(value.slack_text)
        ]
