"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/regquery/cli/output.py
import argparse
import os
import sys
from typing import TextIO

from rich.console import Console


def should_use_color(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if colored output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if search terms should be highlighted with color

    Notes
    -----
    Color is used when:
    - The --no-color flag is not set
    - AND the NO_COLOR environment variable is not set
    - AND the output stream is a TTY

    """
    if getattr(args, "no_color", False) or os.environ.get("NO_COLOR"):
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


def create_console(args: argparse.Namespace, stream: TextIO | None = None) -> Console:
    """Create the console that query results are printed to.

    Without color the console writes plain text: no styles, no terminal
    control codes.
    """
    target = stream or sys.stdout
    if should_use_color(args, target):
        return Console(file=target, force_terminal=True, highlight=False, emoji=False)
    return Console(file=target, no_color=True, color_system=None, highlight=False, emoji=False)
