#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser for the regquery command line.

Option names are matched without regard to case, so ``--Hive``, ``--hive``
and ``--HIVE=x`` are the same option. Argument errors print the help text
instead of failing the process.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, NoReturn, Sequence

from regquery import __version__
from regquery.constants import DEFAULT_LOG_LEVEL

EXIT_SUCCESS = 0

LOG_LEVEL_CHOICES = ["DEBUG", "INFO", "WARNING", "ERROR"]


class ArgumentParseError(Exception):
    """Raised by :class:`QueryArgumentParser` instead of exiting on bad arguments."""

    def __init__(self, message: str):
        """Initialize with the argparse error message."""
        super().__init__(message)
        self.message = message


class QueryArgumentParser(argparse.ArgumentParser):
    """Argument parser that shows the help text when the arguments are invalid."""

    def error(self, message: str) -> NoReturn:
        self.print_help()
        print(f"\nError: {message}", file=sys.stderr)
        raise ArgumentParseError(message)


def create_parser() -> QueryArgumentParser:
    """Create and configure the argument parser."""
    parser = QueryArgumentParser(
        prog="regquery",
        description="Query offline Windows registry hives for keys and values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  regquery --Hive NTUSER.DAT --KeyName "Software\\Microsoft\\Windows\\CurrentVersion\\Run"
  regquery --Hive NTUSER.DAT --KeyName "Software\\Microsoft" --Recursive
  regquery --Hive SAM --KeyName "SAM\\Domains\\Account" --ValueName F --SaveToName F.bin
  regquery --Hive SYSTEM --MinSize 100000 --Sort
  regquery --Hive SOFTWARE --StartDate "2021-01-01" --EndDate "2021-02-01 12:00"
  regquery --Hive NTUSER.DAT --sk "run" --Sort
  regquery --Hive NTUSER.DAT --sd "^c:\\\\windows" --RegEx
  regquery --Hive NTUSER.DAT --ss "password" --SuppressData

Dates without a UTC offset are read as UTC. Option names are not case sensitive.
""",
    )

    parser.add_argument("-h", "-?", "--help", action="help", help="Show this help message and exit")
    parser.add_argument("--Hive", dest="hive", required=True, metavar="PATH", help="Hive file to search")

    lookup_group = parser.add_argument_group("Key and value lookup")
    lookup_group.add_argument(
        "--KeyName", dest="key_name", metavar="KEY", help="Key to dump, with or without the root key name"
    )
    lookup_group.add_argument(
        "--ValueName", dest="value_name", metavar="VALUE", help="Value of --KeyName to dump (exact name)"
    )
    lookup_group.add_argument(
        "--SaveToName", dest="save_to_name", metavar="PATH", help="Save the raw data of --ValueName to this file"
    )
    lookup_group.add_argument(
        "--Recursive", dest="recursive", action="store_true", help="Dump --KeyName with all of its subkeys"
    )

    search_group = parser.add_argument_group("Searches")
    search_group.add_argument(
        "--MinSize", dest="min_size", type=int, metavar="BYTES", help="Find values with data at least this large"
    )
    search_group.add_argument(
        "--StartDate", dest="start_date", metavar="DATE", help="Find keys last written at or after this time"
    )
    search_group.add_argument(
        "--EndDate", dest="end_date", metavar="DATE", help="Find keys last written at or before this time"
    )
    search_group.add_argument("--sk", dest="sk", metavar="TERM", help="Search key names")
    search_group.add_argument("--sv", dest="sv", metavar="TERM", help="Search value names")
    search_group.add_argument("--sd", dest="sd", metavar="TERM", help="Search value data")
    search_group.add_argument("--ss", dest="ss", metavar="TERM", help="Search value slack")
    search_group.add_argument(
        "--RegEx", dest="regex", action="store_true", help="Treat search terms as regular expressions"
    )
    search_group.add_argument(
        "--Literal",
        dest="literal",
        action="store_true",
        help="Match --sd/--ss terms as given, without searching for their hex encodings",
    )
    search_group.add_argument("--Sort", dest="sort", action="store_true", help="Sort search results")
    search_group.add_argument(
        "--SuppressData", dest="suppress_data", action="store_true", help="Omit data and slack from --sd/--ss results"
    )
    search_group.add_argument(
        "--Recover", dest="recover", action="store_true", help="Request recovery of deleted keys and values"
    )

    general_group = parser.add_argument_group("General options")
    general_group.add_argument(
        "--config",
        metavar="PATH",
        help="Path to configuration file (TOML, YAML or JSON). "
        "If not specified, searches for .regquery.toml, .regquery.yaml, .regquery.yml or .regquery.json "
        "from the current directory upwards, then in the home directory.",
    )
    general_group.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Disable loading of configuration files, including REGQUERY_CONFIG and --config.",
    )
    general_group.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        type=str.upper,
        default=DEFAULT_LOG_LEVEL,
        help=f"Set logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    general_group.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    general_group.add_argument(
        "--trace", action="store_true", help="Enable trace mode with timestamped debug logging"
    )
    general_group.add_argument("--no-color", dest="no_color", action="store_true", help="Disable colored output")
    general_group.add_argument("--version", "-V", action="version", version=f"regquery {__version__}")

    return parser


def _long_options(parser: argparse.ArgumentParser) -> dict[str, str]:
    options: dict[str, str] = {}
    for action in parser._actions:
        for option in action.option_strings:
            if option.startswith("--"):
                options[option.lower()] = option
    return options


def normalize_flag_case(argv: Sequence[str], parser: argparse.ArgumentParser) -> list[str]:
    """Rewrite long options to the spelling the parser defines.

    Parameters
    ----------
    argv : Sequence[str]
        Raw command-line arguments
    parser : argparse.ArgumentParser
        Parser whose long options are the canonical spellings

    Returns
    -------
    list[str]
        Arguments with known options re-cased; values, unknown options and
        everything after ``--`` are left alone

    Examples
    --------
    >>> normalize_flag_case(["--HIVE=ntuser.dat", "--SK", "Run"], create_parser())
    ['--Hive=ntuser.dat', '--sk', 'Run']

    """
    options = _long_options(parser)
    normalized: list[str] = []
    expects_value = False

    for index, arg in enumerate(argv):
        if arg == "--":
            normalized.extend(argv[index:])
            break

        if expects_value or not arg.startswith("--"):
            normalized.append(arg)
            expects_value = False
            continue

        name, separator, value = arg.partition("=")
        canonical = options.get(name.lower(), name)
        normalized.append(f"{canonical}{separator}{value}")
        expects_value = not separator and _takes_value(parser, canonical)

    return normalized


def _takes_value(parser: argparse.ArgumentParser, option: str) -> bool:
    action: Any = parser._option_string_actions.get(option)
    return action is not None and action.nargs != 0
