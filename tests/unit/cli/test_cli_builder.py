"""Unit tests for the regquery argument parser."""

import pytest

from regquery.cli.builder import ArgumentParseError, create_parser, normalize_flag_case


@pytest.mark.unit
@pytest.mark.cli
class TestNormalizeFlagCase:
    """Test case-insensitive option matching."""

    @pytest.fixture
    def parser(self):
        return create_parser()

    @pytest.mark.parametrize("flag", ["--Hive", "--hive", "--HIVE", "--hIvE"])
    def test_option_spellings(self, parser, flag):
        assert normalize_flag_case([flag, "x"], parser) == ["--Hive", "x"]

    def test_equals_form(self, parser):
        assert normalize_flag_case(["--HIVE=C:\\NTUSER.DAT"], parser) == ["--Hive=C:\\NTUSER.DAT"]

    def test_values_are_untouched(self, parser):
        assert normalize_flag_case(["--SK", "--HIVE"], parser) == ["--sk", "--HIVE"]

    def test_unknown_options_are_untouched(self, parser):
        assert normalize_flag_case(["--Bogus", "-X"], parser) == ["--Bogus", "-X"]

    def test_switches_do_not_consume_values(self, parser):
        argv = ["--sort", "--REGEX", "--suppressdata"]

        assert normalize_flag_case(argv, parser) == ["--Sort", "--RegEx", "--SuppressData"]

    def test_stops_at_double_dash(self, parser):
        assert normalize_flag_case(["--sort", "--", "--sort"], parser) == ["--Sort", "--", "--sort"]

    def test_ambient_options(self, parser):
        assert normalize_flag_case(["--LOG-LEVEL", "debug", "--No-Color"], parser) == [
            "--log-level",
            "debug",
            "--no-color",
        ]


@pytest.mark.unit
@pytest.mark.cli
class TestCreateParser:
    """Test the parsed namespace."""

    def test_defaults(self):
        args = create_parser().parse_args(["--Hive", "NTUSER.DAT"])

        assert args.hive == "NTUSER.DAT"
        assert args.key_name is None
        assert args.min_size is None
        assert args.start_date is None
        assert not args.sort
        assert not args.recover
        assert args.log_level == "INFO"
        assert not args.no_config

    def test_all_query_options(self):
        args = create_parser().parse_args(
            [
                "--Hive", "SAM",
                "--KeyName", "SAM\\Domains",
                "--ValueName", "F",
                "--SaveToName", "out.bin",
                "--Recursive",
                "--MinSize", "100",
                "--StartDate", "2021-01-01",
                "--EndDate", "2021-02-01",
                "--sk", "a", "--sv", "b", "--sd", "c", "--ss", "d",
                "--RegEx", "--Literal", "--Sort", "--SuppressData", "--Recover",
            ]
        )  # fmt: skip

        assert args.key_name == "SAM\\Domains"
        assert args.value_name == "F"
        assert args.save_to_name == "out.bin"
        assert args.min_size == 100
        assert (args.sk, args.sv, args.sd, args.ss) == ("a", "b", "c", "d")
        assert args.recursive and args.regex and args.literal and args.sort and args.suppress_data and args.recover

    def test_log_level_is_case_insensitive(self):
        args = create_parser().parse_args(["--Hive", "x", "--log-level", "debug"])

        assert args.log_level == "DEBUG"

    def test_missing_hive_shows_help(self, capsys):
        with pytest.raises(ArgumentParseError):
            create_parser().parse_args(["--sk", "run"])

        captured = capsys.readouterr()
        assert "usage: regquery" in captured.out
        assert "--Hive" in captured.err

    def test_bad_min_size_shows_help(self, capsys):
        with pytest.raises(ArgumentParseError):
            create_parser().parse_args(["--Hive", "x", "--MinSize", "big"])

        assert "usage: regquery" in capsys.readouterr().out

    @pytest.mark.parametrize("flag", ["-h", "-?", "--help"])
    def test_help_flags(self, flag, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args([flag])

        assert exc_info.value.code == 0
        assert "Query offline Windows registry hives" in capsys.readouterr().out
