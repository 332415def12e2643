"""Ordering and summarising of query hits."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from regquery.constants import ZERO_TIMESTAMP
from regquery.hive.types import Hit, format_timestamp
from regquery.query.criteria import DataSearch, NameSearch, SearchCriteria, SearchField, SizeThreshold, TimeRange

SortKey = Callable[[Hit], Any]


def sort_key_for(criteria: SearchCriteria) -> SortKey | None:
    """Return the ordering key for a search mode, or ``None`` if the mode has no ordering.

    Data and slack searches both order by the value's data text.
    """
    if isinstance(criteria, SizeThreshold):
        return lambda hit: hit.value.size
    if isinstance(criteria, TimeRange):
        return lambda hit: hit.key.last_write or ZERO_TIMESTAMP
    if isinstance(criteria, NameSearch):
        if criteria.field is SearchField.KEY:
            return lambda hit: hit.key.name
        return lambda hit: hit.value.name
    if isinstance(criteria, DataSearch):
        return lambda hit: hit.value.data_text
    return None


def sort_hits(hits: Sequence[Hit], criteria: SearchCriteria) -> list[Hit]:
    """Return the hits in ascending order for the mode; ties keep their original order."""
    key = sort_key_for(criteria)
    if key is None:
        return list(hits)
    return sorted(hits, key=key)


def pluralize(count: int, noun: str) -> str:
    """Append ``s`` to ``noun`` unless ``count`` is exactly one.

    Examples
    --------
    >>> pluralize(1, "key")
    'key'
    >>> pluralize(0, "key")
    'keys'

    """
    return noun if count == 1 else f"{noun}s"


def summary_line(criteria: SearchCriteria, count: int) -> str:
    """Build the closing ``Found ...`` line for a search.

    Parameters
    ----------
    criteria : SearchCriteria
        The search mode that produced the hits
    count : int
        Number of hits

    Returns
    -------
    str
        Summary line with the count and a correctly pluralised noun

    """
    found = f"Found {count:,}"

    if isinstance(criteria, SizeThreshold):
        return f"{found} {pluralize(count, 'value')} with size greater or equal to {criteria.min_bytes:,} bytes"

    if isinstance(criteria, TimeRange):
        start = format_timestamp(criteria.start)
        end = format_timestamp(criteria.end)
        if criteria.start is not None and criteria.end is None:
            window = f"after {start}"
        elif criteria.end is not None and criteria.start is None:
            window = f"before {end}"
        else:
            window = f"between {start} and {end}"
        return f"{found} {pluralize(count, 'key')} with last write {window}"

    if isinstance(criteria, NameSearch):
        noun = "key" if criteria.field is SearchField.KEY else "value"
        line = f"{found} {pluralize(count, noun)}"
    elif isinstance(criteria, DataSearch):
        noun = "value data hit" if criteria.field is SearchField.DATA else "value slack hit"
        line = f"{found} {pluralize(count, noun)}"
    else:
        raise ValueError(f"{type(criteria).__name__} has no search summary")

    if criteria.is_regex:
        line += " (via RegEx)"
    return line
