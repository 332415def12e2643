"""Unit tests for the read-only hive data model."""

from datetime import datetime, timezone

import pytest

from regquery.hive.types import Key, KeyHit, Value, ValueHit, format_timestamp, strip_root_key_name


@pytest.mark.unit
class TestStripRootKeyName:
    """Test removal of the root key name from key paths."""

    def test_strips_first_segment(self):
        assert strip_root_key_name("CsiTool-CreateHive-{0}\\Software\\Microsoft") == "Software\\Microsoft"

    def test_root_path_unchanged(self):
        assert strip_root_key_name("ROOT") == "ROOT"

    def test_single_level(self):
        assert strip_root_key_name("ROOT\\System") == "System"

    def test_empty_path(self):
        assert strip_root_key_name("") == ""


@pytest.mark.unit
class TestFormatTimestamp:
    """Test last write time formatting."""

    def test_missing_time(self):
        assert format_timestamp(None) == ""

    def test_utc_time(self):
        ts = datetime(2021, 1, 2, 3, 4, 5, 600, tzinfo=timezone.utc)
        assert format_timestamp(ts) == "2021-01-02 03:04:05.000600+00:00"


@pytest.mark.unit
class TestValue:
    """Test the value record."""

    def test_size_is_raw_length(self):
        assert Value("v", "RegBinary", raw=b"\x00" * 12).size == 12

    def test_slack_text_is_hex(self):
        assert Value("v", "RegBinary", slack=b"AB").slack_text == "41-42"

    def test_to_text_without_slack(self):
        text = Value("Path", "RegSZ", raw=b"abcd", data_text="C:\\x").to_text()

        assert text.splitlines() == [
            "Value name: Path",
            "Value type: RegSZ",
            "Value data: C:\\x",
            "Value data size: 4",
        ]

    def test_to_text_with_slack(self):
        text = Value("Blob", "RegBinary", slack=b"\x01\xff").to_text()

        assert text.splitlines()[-1] == "Value slack: 01-FF"


@pytest.mark.unit
class TestKey:
    """Test the key record."""

    def test_walk_is_preorder(self, sample_root):
        names = [key.name for key in sample_root.walk()]

        assert names == ["ROOT", "Software", "Microsoft", "Run", "System"]

    def test_display_path(self, sample_root):
        software = sample_root.subkeys[0]

        assert software.subkeys[1].display_path == "Software\\Run"

    def test_to_text_is_recursive(self, sample_root):
        lines = sample_root.subkeys[0].to_text().splitlines()

        assert lines[0] == "Key path: Software"
        assert "Key path: Software\\Microsoft" in lines
        assert "Key path: Software\\Run" in lines
        assert "Value name: OneDrive" in lines
        assert "Subkey count: 2" in lines

    def test_to_text_numbers_values(self, sample_root):
        run = sample_root.subkeys[0].subkeys[1]
        lines = run.to_text().splitlines()

        assert "------------ Value #0 ------------" in lines
        assert "------------ Value #1 ------------" in lines

    def test_missing_last_write_renders_empty(self, sample_root):
        system = sample_root.subkeys[1]

        assert "Last write time: " in system.to_text().splitlines()


@pytest.mark.unit
class TestHits:
    """Test key and value hits."""

    def test_key_hit_has_no_value(self, sample_root):
        hit = KeyHit(sample_root.subkeys[1])

        assert hit.value is None
        assert hit.key_path == "ROOT\\System"
        assert hit.display_path == "System"

    def test_value_hit(self, sample_root):
        system = sample_root.subkeys[1]
        hit = ValueHit(system, system.values[0])

        assert hit.value.name == "Blob"
        assert hit.display_path == "System"

    def test_keys_compare_by_identity(self):
        assert Key("A", "A") != Key("A", "A")
