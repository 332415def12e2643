"""Highlight rules that mark search terms in rendered hit lines.

The rules only change presentation: they are applied to ``rich`` text
objects as the renderer prints them and never touch the hits themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from rich.text import Text

from regquery.constants import DEFAULT_HIGHLIGHT_BACKGROUND, DEFAULT_HIGHLIGHT_FOREGROUND
from regquery.query.predicate import MatchPredicate


@dataclass(frozen=True)
class HighlightRule:
    """One highlighted pattern.

    Attributes
    ----------
    pattern : str
        Text or regular expression to mark
    is_regex : bool
        Interpret ``pattern`` as a regular expression
    ignore_case : bool
        Case-insensitive matching; always on for search highlighting
    foreground : str
        Text color
    background : str
        Background color

    """

    pattern: str
    is_regex: bool = False
    ignore_case: bool = True
    foreground: str = DEFAULT_HIGHLIGHT_FOREGROUND
    background: str = DEFAULT_HIGHLIGHT_BACKGROUND

    @property
    def style(self) -> str:
        return f"{self.foreground} on {self.background}"

    def apply(self, text: Text) -> int:
        """Mark every match of this rule in ``text``; returns the number of matches."""
        if self.is_regex:
            flags = re.IGNORECASE if self.ignore_case else 0
            return text.highlight_regex(re.compile(self.pattern, flags), style=self.style)
        return text.highlight_words([self.pattern], style=self.style, case_sensitive=not self.ignore_case)


@dataclass
class HighlightConfig:
    """Highlight rules for one run, handed to the output renderer.

    ``foreground`` and ``background`` are the colors of the base rule that new
    rules inherit.
    """

    foreground: str = DEFAULT_HIGHLIGHT_FOREGROUND
    background: str = DEFAULT_HIGHLIGHT_BACKGROUND
    rules: list[HighlightRule] = field(default_factory=list)

    @property
    def patterns(self) -> list[str]:
        return [rule.pattern for rule in self.rules]

    def add(self, pattern: str, is_regex: bool = False) -> None:
        """Add a case-insensitive rule in the base colors; empty patterns are skipped."""
        if not pattern:
            return
        self.rules.append(
            HighlightRule(pattern, is_regex=is_regex, foreground=self.foreground, background=self.background)
        )

    def apply(self, line: str | Text) -> Text:
        """Return ``line`` as rich text with every rule applied."""
        text = line.copy() if isinstance(line, Text) else Text(line)
        for rule in self.rules:
            rule.apply(text)
        return text


def build_highlight_config(
    predicate: Optional[MatchPredicate],
    foreground: Optional[str] = None,
    background: Optional[str] = None,
) -> HighlightConfig:
    """Create the highlight rules for a search.

    The raw term always gets a rule. A non-regex value data or slack search
    also highlights the hex renderings of the term's single-byte and
    UTF-16LE encodings, since that is how binary data is displayed.

    Parameters
    ----------
    predicate : MatchPredicate or None
        Active term search; ``None`` produces an empty configuration
    foreground : str, optional
        Base rule text color, defaults to red
    background : str, optional
        Base rule background color, defaults to green

    Returns
    -------
    HighlightConfig
        Rules in the order raw term, single-byte rendering, UTF-16LE rendering

    """
    config = HighlightConfig(
        foreground=foreground or DEFAULT_HIGHLIGHT_FOREGROUND,
        background=background or DEFAULT_HIGHLIGHT_BACKGROUND,
    )
    if predicate is None:
        return config

    config.add(predicate.term, is_regex=predicate.is_regex)
    for rendering in predicate.hex_renderings:
        config.add(rendering)
    return config
