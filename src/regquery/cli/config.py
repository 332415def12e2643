#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the regquery CLI.

A configuration file supplies defaults for the boolean query switches,
logging and highlight colors. Files may be TOML, YAML or JSON, or a
``[tool.regquery]`` table in ``pyproject.toml``. Command-line flags always
take precedence over configured values.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DOTFILE_NAMES = [".regquery.toml", ".regquery.yaml", ".regquery.yml", ".regquery.json"]
PYPROJECT_NAME = "pyproject.toml"

# Recognised keys and the type each value must have
CONFIG_KEYS: Dict[str, type] = {
    "sort": bool,
    "suppress_data": bool,
    "regex": bool,
    "literal": bool,
    "recover": bool,
    "recursive": bool,
    "no_color": bool,
    "log_level": str,
    "log_file": str,
    "highlight_foreground": str,
    "highlight_background": str,
}

# Keys that are not command-line options
HIGHLIGHT_KEYS = ("highlight_foreground", "highlight_background")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.regquery]`` table of a pyproject.toml, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {pyproject_path}: {e}") from e

    section = data.get("tool", {}).get("regquery", {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.regquery] section in {pyproject_path} must be a table, got {type(section).__name__}"
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file from ``start_dir`` up to the filesystem root.

    In each directory the dotfiles are checked in the order of
    ``DOTFILE_NAMES``, then a pyproject.toml that has a ``[tool.regquery]``
    table. Unreadable pyproject files are skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DOTFILE_NAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject_path = current / PYPROJECT_NAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug(f"Skipping {pyproject_path}: {e}")

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file.

    Parent directories of ``start_dir`` are searched first, then the user's
    home directory for the dotfiles only.
    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in DOTFILE_NAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping as stored in the file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed or has an unsupported extension

    Examples
    --------
    >>> config = load_config_file(".regquery.toml")
    >>> config.get("sort")
    True

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if config_path.name.lower() == PYPROJECT_NAME:
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid configuration in {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at the top level, got {type(config).__name__}"
        )
    return config


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Keep the recognised keys whose values have the expected type.

    Unknown keys and values of the wrong type are logged as warnings and
    dropped.
    """
    valid: Dict[str, Any] = {}
    for key, value in config.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            logger.warning(f"Ignoring unknown configuration key '{key}'")
            continue
        if not isinstance(value, expected):
            logger.warning(
                f"Ignoring configuration key '{key}': expected {expected.__name__}, got {type(value).__name__}"
            )
            continue
        valid[key] = value
    return valid


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (REGQUERY_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Validated configuration (empty if no file was found)

    Raises
    ------
    argparse.ArgumentTypeError
        If an explicitly named file cannot be loaded

    """
    path: Optional[Path | str] = explicit_path or env_var_path or discover_config_file()
    if not path:
        return {}

    logger.debug(f"Loading configuration from {path}")
    return validate_config(load_config_file(path))
