"""Translate search criteria into the concrete match handed to the hive store."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from regquery.encoding import hex_rendering, term_encodings
from regquery.exceptions import InvalidPatternError
from regquery.query.criteria import DataSearch, NameSearch, SearchCriteria, SearchField


@dataclass(frozen=True)
class MatchPredicate:
    """How a term search matches.

    Attributes
    ----------
    field : SearchField
        Part of the hive being searched
    term : str
        Raw search term as the user typed it
    is_regex : bool
        Term is a regular expression
    literal : bool
        Match only the exact term; the hive store skips the encoding fallbacks
    encodings : tuple[bytes, ...]
        Single-byte and UTF-16LE encodings of a non-regex data or slack term,
        derived whether or not ``literal`` is set

    """

    field: SearchField
    term: str
    is_regex: bool = False
    literal: bool = False
    encodings: tuple[bytes, ...] = field(default_factory=tuple)

    @property
    def searches_data(self) -> bool:
        return self.field in (SearchField.DATA, SearchField.SLACK)

    @property
    def hex_renderings(self) -> tuple[str, ...]:
        """Textual form of each candidate encoding, as the hive store renders binary data."""
        return tuple(hex_rendering(encoded) for encoded in self.encodings)


def build_predicate(criteria: SearchCriteria) -> Optional[MatchPredicate]:
    """Build the match predicate for term searches.

    Parameters
    ----------
    criteria : SearchCriteria
        Selected query mode

    Returns
    -------
    MatchPredicate or None
        Predicate for name/data/slack searches, ``None`` for the other modes

    Raises
    ------
    InvalidPatternError
        If a regular expression term does not compile

    """
    if not isinstance(criteria, (NameSearch, DataSearch)):
        return None

    if criteria.is_regex:
        try:
            re.compile(criteria.term, re.IGNORECASE)
        except re.error as exc:
            raise InvalidPatternError(criteria.term, exc) from exc
        return MatchPredicate(criteria.field, criteria.term, is_regex=True)

    if isinstance(criteria, NameSearch):
        return MatchPredicate(criteria.field, criteria.term)

    return MatchPredicate(
        criteria.field, criteria.term, literal=criteria.literal, encodings=term_encodings(criteria.term)
    )
