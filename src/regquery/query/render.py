"""Console rendering of query results.

Lines are built as plain strings by the ``format_*`` helpers and printed
through a ``rich`` console by :class:`OutputRenderer`, which applies the
search highlighting to hit lines.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from regquery.hive.types import Hit, Key, Value, format_timestamp
from regquery.query.criteria import DataSearch, NameSearch, SearchCriteria, SearchField, SizeThreshold, TimeRange
from regquery.query.highlight import HighlightConfig

SECTION_RULE = "------------"


def format_hit_line(hit: Hit, criteria: SearchCriteria, suppress_data: bool = False) -> str:
    """Format one search hit for display.

    Parameters
    ----------
    hit : Hit
        Key or value hit returned by the executor
    criteria : SearchCriteria
        Search mode that produced the hit
    suppress_data : bool, default False
        Omit the data/slack column of value data searches

    Returns
    -------
    str
        Single display line

    """
    path = hit.display_path

    if isinstance(criteria, TimeRange):
        return f"Last write: {format_timestamp(hit.key.last_write)}  Key: {path}"

    if isinstance(criteria, NameSearch) and criteria.field is SearchField.KEY:
        return f"Key: {path}"

    value = hit.value
    if value is None:
        return f"Key: {path}"

    line = f"Key: {path}, Value: {value.name}"
    if isinstance(criteria, SizeThreshold):
        return f"{line}, Size: {value.size:,}"
    if isinstance(criteria, DataSearch) and not suppress_data:
        if criteria.field is SearchField.SLACK:
            return f"{line}, Slack: {value.slack_text}"
        return f"{line}, Data: {value.data_text}"
    return line


def format_key_listing(key: Key) -> list[str]:
    """Flat dump of a key: its summary, its direct subkeys and its values."""
    lines = [
        f"Key: {key.display_path}",
        f"Last write time: {format_timestamp(key.last_write)}",
        f"Number of Values: {len(key.values):,}",
        f"Number of Subkeys: {len(key.subkeys):,}",
        "",
    ]

    for index, subkey in enumerate(key.subkeys):
        lines.append(f"{SECTION_RULE} Subkey #{index:,} {SECTION_RULE}")
        lines.append(f"Name: {subkey.name} (Last write: {format_timestamp(subkey.last_write)})")
    lines.append("")

    for index, value in enumerate(key.values):
        lines.append(f"{SECTION_RULE} Value #{index:,} {SECTION_RULE}")
        lines.append(f"Name: {value.name} ({value.type_name})")
        data = f"Data: {value.data_text}"
        if value.slack:
            data += f" (Slack: {value.slack_text})"
        lines.append(data)

    return lines


class OutputRenderer:
    """Writes query output to a console.

    Parameters
    ----------
    console : rich.console.Console
        Destination console, normally stdout
    highlight : HighlightConfig, optional
        Rules applied to hit lines; an empty configuration when omitted

    """

    def __init__(self, console: Console, highlight: Optional[HighlightConfig] = None) -> None:
        """Initialize the renderer."""
        self.console = console
        self.highlight = highlight or HighlightConfig()

    def line(self, text: str | Text = "") -> None:
        self.console.print(text, soft_wrap=True, highlight=False, markup=False)

    def root_key(self, key: Key) -> None:
        self.line(f"Root key name: {key.name}")
        self.line()

    def key_listing(self, key: Key, recursive: bool = False) -> None:
        """Dump a key flat, or with everything below it when ``recursive`` is set."""
        if recursive:
            for text in key.to_text().splitlines():
                self.line(text)
            return
        for text in format_key_listing(key):
            self.line(text)

    def value_detail(self, value: Value) -> None:
        for text in value.to_text().splitlines():
            self.line(text)

    def hits(self, hits: Sequence[Hit], criteria: SearchCriteria, suppress_data: bool = False) -> None:
        """Print one highlighted line per hit."""
        for hit in hits:
            self.line(self.highlight.apply(format_hit_line(hit, criteria, suppress_data)))

    def summary(self, text: str) -> None:
        self.line()
        self.line(text)

    def elapsed(self, seconds: float) -> None:
        self.line()
        self.line(f"Search took {seconds:,.3f} seconds")
