#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the regquery package.

This module defines the error taxonomy used by the query pipeline. Each
class maps onto one way a run can end early, so the runner can decide how
loudly to report it without inspecting messages.

Exception Hierarchy
-------------------
- RegQueryError (base exception)

  - ValidationError (bad user input)
    - InvalidDateError (unparseable --StartDate/--EndDate)
    - InvalidPatternError (regular expression does not compile)

  - FileError (file access and I/O)
    - HiveNotFoundError (hive path missing)
    - ExportError (value export write failures)

  - NotFoundError (lookup misses)
    - KeyNotFoundError
    - ValueNotFoundError

  - HiveError (hive store parse/query failures)

"""

from typing import Any


class RegQueryError(Exception):
    """Base exception class for all regquery-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(RegQueryError):
    """Exception raised for invalid input parameters.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidDateError(ValidationError):
    """Exception raised when a supplied date bound cannot be parsed.

    Parameters
    ----------
    parameter_name : str
        Flag name of the bound, e.g. ``StartDate``
    parameter_value : str
        The text the user supplied
    reason : str, optional
        Parser explanation

    """

    def __init__(self, parameter_name: str, parameter_value: str | None, reason: str | None = None):
        """Initialize the invalid date error."""
        message = f"'{parameter_name}' is not a valid datetime value"
        if reason:
            message += f" ({reason})"
        super().__init__(message, parameter_name=parameter_name, parameter_value=parameter_value)
        self.reason = reason


class InvalidPatternError(ValidationError):
    """Exception raised when a regular expression search term does not compile."""

    def __init__(self, pattern: str, original_error: Exception | None = None):
        """Initialize the invalid pattern error."""
        message = f"Invalid regular expression '{pattern}'"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message, parameter_name="pattern", parameter_value=pattern, original_error=original_error)


class FileError(RegQueryError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class HiveNotFoundError(FileError):
    """Exception raised when the hive file does not exist."""

    def __init__(self, file_path: str, message: str | None = None):
        """Initialize the hive not found error."""
        if message is None:
            message = f"'{file_path}' does not exist. Exiting"
        super().__init__(message, file_path=file_path)


class ExportError(FileError):
    """Exception raised when value data cannot be written to disk."""

    def __init__(self, file_path: str, original_error: Exception | None = None):
        """Initialize the export error."""
        message = f"Failed to save value data to '{file_path}'"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class NotFoundError(RegQueryError):
    """Base exception for a key or value lookup that found nothing."""


class KeyNotFoundError(NotFoundError):
    """Exception raised when ``--KeyName`` does not resolve to a key."""

    def __init__(self, key_path: str):
        """Initialize the key not found error."""
        super().__init__(f"Key '{key_path}' not found.")
        self.key_path = key_path


class ValueNotFoundError(NotFoundError):
    """Exception raised when ``--ValueName`` is not present under the key."""

    def __init__(self, key_path: str, value_name: str):
        """Initialize the value not found error."""
        super().__init__(f"Value '{value_name}' not found for key '{key_path}'.")
        self.key_path = key_path
        self.value_name = value_name


class HiveError(RegQueryError):
    """Exception raised when the hive store fails to parse or query a hive.

    Parameters
    ----------
    message : str
        Description of the failure
    hive_path : str, optional
        Path of the hive being processed
    original_error : Exception, optional
        The backend exception

    """

    def __init__(self, message: str, hive_path: str | None = None, original_error: Exception | None = None):
        """Initialize the hive error."""
        super().__init__(message, original_error=original_error)
        self.hive_path = hive_path


__all__ = [
    "RegQueryError",
    "ValidationError",
    "InvalidDateError",
    "InvalidPatternError",
    "FileError",
    "HiveNotFoundError",
    "ExportError",
    "NotFoundError",
    "KeyNotFoundError",
    "ValueNotFoundError",
    "HiveError",
]
