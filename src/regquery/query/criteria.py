#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Search criteria and selection of the query mode.

A run performs exactly one kind of query. :func:`select_mode` inspects the
typed arguments and returns the criteria for the highest-precedence mode
whose inputs are present:

1. ``--KeyName`` and ``--ValueName`` -> :class:`SingleValue`
2. ``--KeyName`` -> :class:`SingleKey`
3. ``--MinSize`` above zero -> :class:`SizeThreshold`
4. ``--StartDate`` or ``--EndDate`` -> :class:`TimeRange`
5. first non-empty of ``--sk``, ``--sv``, ``--sd``, ``--ss`` ->
   :class:`NameSearch` or :class:`DataSearch`

When nothing applies the result is ``None``. Lower-precedence inputs are
ignored, never evaluated.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from dateutil import parser as date_parser

from regquery.exceptions import InvalidDateError, ValidationError

# Fills in the parts of a date the user left out
MISSING_DATE_PARTS = datetime(1, 1, 1)


class SearchField(str, Enum):
    """Which part of the hive a term search looks at."""

    KEY = "key"
    VALUE = "value"
    DATA = "data"
    SLACK = "slack"


@dataclass(frozen=True)
class QueryArguments:
    """Typed view of the command-line inputs that drive a query."""

    hive: str
    key_name: str = ""
    value_name: str = ""
    save_to_name: str = ""
    recursive: bool = False
    min_size: int = 0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    sk: str = ""
    sv: str = ""
    sd: str = ""
    ss: str = ""
    regex: bool = False
    literal: bool = False
    sort: bool = False
    suppress_data: bool = False
    recover: bool = False

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> "QueryArguments":
        """Build arguments from a parsed namespace, turning ``None`` strings into empty ones."""
        return cls(
            hive=namespace.hive,
            key_name=namespace.key_name or "",
            value_name=namespace.value_name or "",
            save_to_name=namespace.save_to_name or "",
            recursive=bool(namespace.recursive),
            min_size=namespace.min_size or 0,
            start_date=namespace.start_date,
            end_date=namespace.end_date,
            sk=namespace.sk or "",
            sv=namespace.sv or "",
            sd=namespace.sd or "",
            ss=namespace.ss or "",
            regex=bool(namespace.regex),
            literal=bool(namespace.literal),
            sort=bool(namespace.sort),
            suppress_data=bool(namespace.suppress_data),
            recover=bool(namespace.recover),
        )


@dataclass(frozen=True)
class SingleValue:
    key_path: str
    value_name: str


@dataclass(frozen=True)
class SingleKey:
    key_path: str
    recursive: bool = False


@dataclass(frozen=True)
class SizeThreshold:
    min_bytes: int


@dataclass(frozen=True)
class TimeRange:
    """Last write time window; either bound may be open but not both."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.start is None and self.end is None:
            raise ValidationError("A time range needs a start date, an end date, or both")


@dataclass(frozen=True)
class NameSearch:
    field: SearchField
    term: str
    is_regex: bool = False

    def __post_init__(self) -> None:
        if self.field not in (SearchField.KEY, SearchField.VALUE):
            raise ValidationError(f"Name searches apply to keys or values, not {self.field.value}")


@dataclass(frozen=True)
class DataSearch:
    field: SearchField
    term: str
    is_regex: bool = False
    literal: bool = False

    def __post_init__(self) -> None:
        if self.field not in (SearchField.DATA, SearchField.SLACK):
            raise ValidationError(f"Data searches apply to value data or slack, not {self.field.value}")


SearchCriteria = Union[SingleValue, SingleKey, SizeThreshold, TimeRange, NameSearch, DataSearch]


@dataclass(frozen=True)
class DateParseResult:
    """Outcome of parsing one user-supplied timestamp.

    ``ok`` with a ``None`` value means the bound was not supplied.
    """

    ok: bool
    value: Optional[datetime] = None
    reason: Optional[str] = None

    @property
    def absent(self) -> bool:
        return self.ok and self.value is None


def parse_timestamp(text: Optional[str]) -> DateParseResult:
    """Parse a timestamp bound.

    Text without an explicit UTC offset is taken to be UTC. Text with an
    offset is converted to UTC. Date parts missing from the text are taken
    from January 1 at midnight, so "2021" means the start of 2021.

    Parameters
    ----------
    text : str or None
        User-supplied timestamp, or ``None`` when the bound was not given

    Returns
    -------
    DateParseResult
        Parsed UTC datetime, an absent bound, or a failure with its reason

    Examples
    --------
    >>> parse_timestamp("2021-01-01").value
    datetime.datetime(2021, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    >>> parse_timestamp(None).absent
    True
    >>> parse_timestamp("not a date").ok
    False

    """
    if text is None:
        return DateParseResult(ok=True)

    try:
        parsed = date_parser.parse(text, default=MISSING_DATE_PARTS)
    except (ValueError, OverflowError) as exc:
        return DateParseResult(ok=False, reason=str(exc))

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    else:
        parsed = parsed.astimezone(timezone.utc)
    return DateParseResult(ok=True, value=parsed)


def build_time_range(start_date: Optional[str], end_date: Optional[str]) -> TimeRange:
    """Build a :class:`TimeRange` from the raw bound strings.

    Raises
    ------
    InvalidDateError
        If a supplied bound does not parse

    """
    start = parse_timestamp(start_date)
    if not start.ok:
        raise InvalidDateError("StartDate", start_date, start.reason)

    end = parse_timestamp(end_date)
    if not end.ok:
        raise InvalidDateError("EndDate", end_date, end.reason)

    return TimeRange(start=start.value, end=end.value)


def select_mode(args: QueryArguments) -> Optional[SearchCriteria]:
    """Pick the single query mode for a run.

    Parameters
    ----------
    args : QueryArguments
        Parsed command-line inputs

    Returns
    -------
    SearchCriteria or None
        Criteria for the highest-precedence mode, or ``None`` if there is nothing to do

    Raises
    ------
    InvalidDateError
        If the time range mode is selected and a supplied date does not parse

    """
    if args.key_name:
        if args.value_name:
            return SingleValue(key_path=args.key_name, value_name=args.value_name)
        return SingleKey(key_path=args.key_name, recursive=args.recursive)

    if args.min_size > 0:
        return SizeThreshold(min_bytes=args.min_size)

    if args.start_date is not None or args.end_date is not None:
        return build_time_range(args.start_date, args.end_date)

    if args.sk:
        return NameSearch(SearchField.KEY, args.sk, is_regex=args.regex)
    if args.sv:
        return NameSearch(SearchField.VALUE, args.sv, is_regex=args.regex)
    if args.sd:
        return DataSearch(SearchField.DATA, args.sd, is_regex=args.regex, literal=args.literal)
    if args.ss:
        return DataSearch(SearchField.SLACK, args.ss, is_regex=args.regex, literal=args.literal)

    return None
