"""Run the selected query against a hive store."""

from __future__ import annotations

import logging

from regquery.exceptions import KeyNotFoundError, ValueNotFoundError
from regquery.hive.types import Hit, HiveStore, Key, Value, ValueHit
from regquery.query.criteria import DataSearch, NameSearch, SearchCriteria, SearchField, SizeThreshold, TimeRange
from regquery.query.predicate import MatchPredicate

logger = logging.getLogger(__name__)


def lookup_key(store: HiveStore, key_path: str) -> Key:
    """Resolve ``key_path`` or raise :class:`KeyNotFoundError`."""
    key = store.get_key(key_path)
    if key is None:
        raise KeyNotFoundError(key_path)
    return key


def lookup_value(key: Key, key_path: str, value_name: str) -> Value:
    """Return the value of ``key`` named exactly ``value_name`` or raise :class:`ValueNotFoundError`."""
    for value in key.values:
        if value.name == value_name:
            return value
    raise ValueNotFoundError(key_path, value_name)


def execute_query(store: HiveStore, criteria: SearchCriteria, predicate: MatchPredicate | None = None) -> list[Hit]:
    """Search the hive and return hits in the order the store produced them.

    Parameters
    ----------
    store : HiveStore
        Parsed hive store
    criteria : SearchCriteria
        One of the search modes (size, time range, name, data)
    predicate : MatchPredicate, optional
        Match built for name and data searches

    Returns
    -------
    list[Hit]
        A new list the caller may reorder

    Raises
    ------
    ValueError
        If ``criteria`` is a single key/value lookup or a term search has no predicate

    """
    if isinstance(criteria, SizeThreshold):
        hits: list[Hit] = [ValueHit(key, value) for key, value in store.find_by_value_size(criteria.min_bytes)]
    elif isinstance(criteria, TimeRange):
        hits = list(store.find_by_last_write_time(criteria.start, criteria.end))
    elif isinstance(criteria, (NameSearch, DataSearch)):
        if predicate is None:
            raise ValueError("Term searches need a match predicate")
        hits = list(_find_terms(store, predicate))
    else:
        raise ValueError(f"{type(criteria).__name__} is not a search mode")

    logger.debug("%s returned %d hit(s)", type(criteria).__name__, len(hits))
    return hits


def _find_terms(store: HiveStore, predicate: MatchPredicate) -> list[Hit]:
    if predicate.field is SearchField.KEY:
        return list(store.find_in_key_name(predicate.term, predicate.is_regex))
    if predicate.field is SearchField.VALUE:
        return list(store.find_in_value_name(predicate.term, predicate.is_regex))
    if predicate.field is SearchField.DATA:
        return list(store.find_in_value_data(predicate.term, predicate.is_regex, predicate.literal))
    return list(store.find_in_value_data_slack(predicate.term, predicate.is_regex, predicate.literal))
