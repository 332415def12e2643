"""Command-line interface for regquery.

Query an offline Windows registry hive: dump a key or a value, export a
value's data, or search keys and values by name, last write time, size,
data or slack.

Configuration Files
-------------------
Defaults for the boolean switches, logging and highlight colors can be set
in ``.regquery.toml`` (or ``.yaml``/``.yml``/``.json``), in a
``[tool.regquery]`` table of ``pyproject.toml``, or in the file named by the
REGQUERY_CONFIG environment variable. Command-line flags always win.

Examples
--------
Search key names::

    $ regquery --Hive NTUSER.DAT --sk run

Dump a key and everything below it::

    $ regquery --Hive NTUSER.DAT --KeyName "Software\\Microsoft" --Recursive

Export a value::

    $ regquery --Hive SAM --KeyName "SAM\\Domains\\Account" --ValueName F --SaveToName F.bin

"""

import argparse
import logging
import os
import sys
from typing import Any, Dict

from regquery.cli.builder import EXIT_SUCCESS, ArgumentParseError, create_parser, normalize_flag_case
from regquery.cli.config import HIGHLIGHT_KEYS, load_config_with_priority
from regquery.cli.output import create_console
from regquery.constants import ENV_CONFIG_VAR
from regquery.logging_utils import configure_logging, resolve_level
from regquery.query.criteria import QueryArguments

logger = logging.getLogger(__name__)

__all__ = [
    "main",
    "create_parser",
    "normalize_flag_case",
]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes precedence over --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = resolve_level(parsed_args.log_level)

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_config(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    """Load configuration for this run, or an empty dict when disabled.

    Raises
    ------
    argparse.ArgumentTypeError
        If a named configuration file cannot be loaded

    """
    if parsed_args.no_config:
        return {}
    return load_config_with_priority(explicit_path=parsed_args.config, env_var_path=os.environ.get(ENV_CONFIG_VAR))


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit status; ``EXIT_SUCCESS`` once the arguments have been read

    """
    argv = sys.argv[1:] if args is None else list(args)

    parser = create_parser()
    argv = normalize_flag_case(argv, parser)
    try:
        parsed_args = parser.parse_args(argv)
    except ArgumentParseError:
        return EXIT_SUCCESS

    try:
        config = _load_config(parsed_args)
    except argparse.ArgumentTypeError as e:
        _setup_logging_level(parsed_args)
        logger.error(str(e))
        return EXIT_SUCCESS

    option_defaults = {key: value for key, value in config.items() if key not in HIGHLIGHT_KEYS}
    if option_defaults:
        parser.set_defaults(**option_defaults)
        parsed_args = parser.parse_args(argv)

    _setup_logging_level(parsed_args)

    # regquery.query.runner imports regquery.cli.timing
    from regquery.query.runner import run_query

    return run_query(
        QueryArguments.from_namespace(parsed_args),
        create_console(parsed_args),
        highlight_foreground=config.get("highlight_foreground"),
        highlight_background=config.get("highlight_background"),
    )


if __name__ == "__main__":
    sys.exit(main())
