"""Unit tests for the query runner and its error boundary."""

import io
import logging
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console
from utils import build_sample_hive

from regquery.exceptions import HiveError
from regquery.hive import InMemoryHiveStore
from regquery.query.criteria import QueryArguments
from regquery.query.runner import EXIT_SUCCESS, run_query


def memory_factory(hive_path, recover_deleted=False):
    return InMemoryHiveStore(build_sample_hive(), hive_path=str(hive_path))


def run(args: QueryArguments, factory=memory_factory, **kwargs) -> list[str]:
    buffer = io.StringIO()
    console = Console(file=buffer, width=60, color_system=None, highlight=False)
    assert run_query(args, console, store_factory=factory, **kwargs) == EXIT_SUCCESS
    return buffer.getvalue().splitlines()


@pytest.mark.unit
class TestRunQuery:
    """Test complete runs against the sample hive."""

    def test_missing_hive(self, tmp_path, caplog):
        factory = MagicMock()
        missing = tmp_path / "missing.dat"

        with caplog.at_level(logging.WARNING):
            lines = run(QueryArguments(hive=str(missing), sk="run"), factory)

        assert lines == []
        factory.assert_not_called()
        assert f"'{missing}' does not exist. Exiting" in caplog.text

    def test_nothing_to_do(self, hive_file, caplog):
        with caplog.at_level(logging.WARNING):
            lines = run(QueryArguments(hive=str(hive_file)))

        assert lines == []
        assert "Nothing to do! =(" in caplog.text

    def test_progress_is_logged(self, hive_file, caplog):
        with caplog.at_level(logging.INFO):
            run(QueryArguments(hive=str(hive_file), sk="run"))

        assert f"Processing hive '{hive_file}'" in caplog.text

    def test_size_search(self, hive_file):
        lines = run(QueryArguments(hive=str(hive_file), min_size=100))

        assert lines[:6] == [
            "Root key name: ROOT",
            "",
            "Key: Software\\Run, Value: OneDrive, Size: 150",
            "Key: Software\\Run, Value: Updater, Size: 300",
            "",
            "Found 2 values with size greater or equal to 100 bytes",
        ]
        assert lines[6] == ""
        assert lines[7].startswith("Search took ") and lines[7].endswith(" seconds")

    def test_sorted_search(self, hive_file):
        lines = run(QueryArguments(hive=str(hive_file), sv="e", sort=True))

        hit_lines = [line for line in lines if line.startswith("Key: ")]
        assert hit_lines == [
            "Key: Software, Value: (default)",
            "Key: Software\\Run, Value: OneDrive",
            "Key: Software\\Run, Value: Updater",
            "Key: Software\\Microsoft, Value: Version",
        ]

    def test_time_range(self, hive_file):
        lines = run(QueryArguments(hive=str(hive_file), start_date="2021-01-01"))

        assert "Last write: 2021-01-01 00:00:00.000000+00:00  Key: Software\\Microsoft" in lines
        assert "Found 2 keys with last write after 2021-01-01 00:00:00.000000+00:00" in lines

    def test_empty_result(self, hive_file):
        lines = run(QueryArguments(hive=str(hive_file), sk="nothing-matches-this"))

        assert "Found 0 keys" in lines

    def test_single_key(self, hive_file):
        lines = run(QueryArguments(hive=str(hive_file), key_name="Software\\Run"))

        assert lines[:3] == ["Root key name: ROOT", "", "Key: Software\\Run"]
        assert lines[-1].startswith("Search took ")

    def test_single_value_with_export(self, hive_file, tmp_path, caplog):
        target = tmp_path / "export" / "updater.bin"
        args = QueryArguments(
            hive=str(hive_file), key_name="Software\\Run", value_name="Updater", save_to_name=str(target)
        )

        with caplog.at_level(logging.INFO):
            lines = run(args)

        assert lines[0] == "Value name: Updater"
        assert target.read_bytes() == b"ABC" + b"\x00" * 297
        assert f"Saving contents of 'Updater' to '{target}'" in caplog.text

    def test_key_not_found_reports_time(self, hive_file, caplog):
        with caplog.at_level(logging.WARNING):
            lines = run(QueryArguments(hive=str(hive_file), key_name="Software\\Nope"))

        assert "Key 'Software\\Nope' not found." in caplog.text
        assert lines[-1].startswith("Search took ")

    def test_value_not_found_reports_time(self, hive_file, caplog):
        with caplog.at_level(logging.WARNING):
            lines = run(QueryArguments(hive=str(hive_file), key_name="Software\\Run", value_name="Nope"))

        assert "Value 'Nope' not found for key 'Software\\Run'." in caplog.text
        assert lines[-1].startswith("Search took ")

    def test_invalid_date(self, hive_file, caplog):
        with caplog.at_level(logging.ERROR):
            lines = run(QueryArguments(hive=str(hive_file), start_date="not a date"))

        assert lines == []
        assert "'StartDate' is not a valid datetime value" in caplog.text

    def test_invalid_regex(self, hive_file, caplog):
        with caplog.at_level(logging.ERROR):
            lines = run(QueryArguments(hive=str(hive_file), sk="(", regex=True))

        assert lines == []
        assert "Invalid regular expression '('" in caplog.text

    def test_unexpected_error(self, hive_file, caplog):
        factory = MagicMock(side_effect=HiveError("Could not parse hive"))

        with caplog.at_level(logging.ERROR):
            lines = run(QueryArguments(hive=str(hive_file), sk="run"), factory)

        assert lines == []
        assert "There was an error: Could not parse hive" in caplog.text

    def test_error_while_rendering_keeps_printed_hits(self, hive_file, caplog):
        first_line = "Key: Software\\Run, Value: OneDrive, Size: 150"
        failing_format = MagicMock(side_effect=[first_line, RuntimeError("render failed")])

        with patch("regquery.query.render.format_hit_line", failing_format):
            with caplog.at_level(logging.ERROR):
                lines = run(QueryArguments(hive=str(hive_file), min_size=100))

        assert lines == ["Root key name: ROOT", "", first_line]
        assert not any(line.startswith("Found") for line in lines)
        assert "There was an error: render failed" in caplog.text

    def test_search_time_is_logged(self, hive_file, caplog):
        with caplog.at_level(logging.DEBUG):
            run(QueryArguments(hive=str(hive_file), sk="run"))

        assert "Starting: Hive search" in caplog.text
        assert "Hive search completed in" in caplog.text

    def test_recover_is_forwarded(self, hive_file):
        factory = MagicMock(side_effect=memory_factory)

        run(QueryArguments(hive=str(hive_file), sk="run", recover=True), factory)

        factory.assert_called_once_with(str(hive_file), recover_deleted=True)
