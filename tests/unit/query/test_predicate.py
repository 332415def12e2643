"""Unit tests for predicate building and search highlighting."""

import pytest
from rich.text import Text

from regquery.exceptions import InvalidPatternError
from regquery.query.criteria import DataSearch, NameSearch, SearchField, SingleKey, SizeThreshold
from regquery.query.highlight import HighlightConfig, build_highlight_config
from regquery.query.predicate import MatchPredicate, build_predicate


@pytest.mark.unit
class TestBuildPredicate:
    """Test translation of criteria into match predicates."""

    def test_non_term_modes_have_no_predicate(self):
        assert build_predicate(SizeThreshold(10)) is None
        assert build_predicate(SingleKey("Software")) is None

    def test_name_search(self):
        predicate = build_predicate(NameSearch(SearchField.KEY, "run"))

        assert predicate.term == "run"
        assert predicate.encodings == ()
        assert not predicate.searches_data

    def test_data_search_has_two_encodings(self):
        predicate = build_predicate(DataSearch(SearchField.DATA, "AB"))

        assert predicate.encodings == (b"AB", b"A\x00B\x00")
        assert predicate.hex_renderings == ("41-42", "41-00-42-00")

    def test_literal_data_search(self):
        predicate = build_predicate(DataSearch(SearchField.SLACK, "AB", literal=True))

        assert predicate.literal
        assert predicate.encodings == (b"AB", b"A\x00B\x00")

    def test_regex_search(self):
        predicate = build_predicate(DataSearch(SearchField.DATA, "^a.c$", is_regex=True))

        assert predicate.is_regex
        assert predicate.encodings == ()

    def test_invalid_regex(self):
        with pytest.raises(InvalidPatternError) as exc_info:
            build_predicate(NameSearch(SearchField.VALUE, "(unclosed", is_regex=True))

        assert exc_info.value.parameter_value == "(unclosed"


@pytest.mark.unit
class TestHighlightConfig:
    """Test construction of highlight rules."""

    def test_no_predicate_gives_empty_config(self):
        assert build_highlight_config(None).rules == []

    @pytest.mark.parametrize("field", [SearchField.DATA, SearchField.SLACK])
    @pytest.mark.parametrize("literal", [False, True])
    def test_plain_data_search_has_three_patterns(self, field, literal):
        config = build_highlight_config(build_predicate(DataSearch(field, "AB", literal=literal)))

        assert config.patterns == ["AB", "41-42", "41-00-42-00"]

    def test_hex_patterns_come_from_predicate_encodings(self):
        predicate = MatchPredicate(SearchField.DATA, "x", encodings=(b"\x01\xff",))

        assert build_highlight_config(predicate).patterns == ["x", "01-FF"]

    def test_regex_data_search_has_one_pattern(self):
        config = build_highlight_config(build_predicate(DataSearch(SearchField.DATA, "A.B", is_regex=True)))

        assert config.patterns == ["A.B"]
        assert config.rules[0].is_regex

    @pytest.mark.parametrize("field", [SearchField.KEY, SearchField.VALUE])
    def test_name_search_has_one_pattern(self, field):
        config = build_highlight_config(build_predicate(NameSearch(field, "run")))

        assert config.patterns == ["run"]

    def test_default_colors(self):
        config = build_highlight_config(build_predicate(NameSearch(SearchField.KEY, "run")))

        assert config.rules[0].style == "red on green"
        assert all(rule.ignore_case for rule in config.rules)

    def test_configured_colors(self):
        config = build_highlight_config(build_predicate(NameSearch(SearchField.KEY, "run")), "white", "blue")

        assert config.rules[0].style == "white on blue"

    def test_apply_marks_matches_ignoring_case(self):
        config = build_highlight_config(build_predicate(NameSearch(SearchField.KEY, "run")))

        text = config.apply("Key: Software\\RUN, Value: Runner")

        assert [(span.start, span.end) for span in text.spans] == [(14, 17), (26, 29)]

    def test_apply_regex(self):
        config = build_highlight_config(build_predicate(NameSearch(SearchField.VALUE, "o.e", is_regex=True)))

        text = config.apply("Value: OneDrive")

        assert [(span.start, span.end) for span in text.spans] == [(7, 10)]

    def test_apply_does_not_modify_input(self):
        config = HighlightConfig()
        config.add("a")
        original = Text("banana")

        config.apply(original)

        assert original.spans == []

    def test_empty_pattern_is_skipped(self):
        config = HighlightConfig()
        config.add("")

        assert config.rules == []
