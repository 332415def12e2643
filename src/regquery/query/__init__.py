"""Query pipeline: mode selection, matching, execution and presentation of results.

The runner in :mod:`regquery.query.runner` ties the stages together; it is
not imported here so that the CLI can defer loading it.
"""

from regquery.query.criteria import (
    DataSearch,
    NameSearch,
    QueryArguments,
    SearchCriteria,
    SearchField,
    SingleKey,
    SingleValue,
    SizeThreshold,
    TimeRange,
    parse_timestamp,
    select_mode,
)
from regquery.query.executor import execute_query, lookup_key, lookup_value
from regquery.query.export import export_value
from regquery.query.highlight import HighlightConfig, HighlightRule, build_highlight_config
from regquery.query.predicate import MatchPredicate, build_predicate
from regquery.query.render import OutputRenderer
from regquery.query.results import pluralize, sort_hits, summary_line

__all__ = [
    "DataSearch",
    "HighlightConfig",
    "HighlightRule",
    "MatchPredicate",
    "NameSearch",
    "OutputRenderer",
    "QueryArguments",
    "SearchCriteria",
    "SearchField",
    "SingleKey",
    "SingleValue",
    "SizeThreshold",
    "TimeRange",
    "build_highlight_config",
    "build_predicate",
    "execute_query",
    "export_value",
    "lookup_key",
    "lookup_value",
    "parse_timestamp",
    "pluralize",
    "select_mode",
    "sort_hits",
    "summary_line",
]
