"""Exception hierarchy for scriptsort.

Argument, directory, settings and allocation errors are fatal and end
the run with exit code 1. FileReadError is the only recoverable error:
bundle assembly records it and carries on with the next file.
"""

from pathlib import Path


class ScriptSortError(Exception):
    """Base exception for all scriptsort errors."""


class ArgumentError(ScriptSortError):
    """Raised for a missing directory argument or an invalid cutoff."""


class SettingsError(ScriptSortError):
    """Raised when the settings file cannot be parsed or validated."""


class DirectoryError(ScriptSortError):
    """Raised when the scripts directory cannot be opened.

    Attributes:
        path: The directory that could not be read.
        reason: The underlying system error message.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error opening directory '{path}': {reason}")


class FileReadError(ScriptSortError):
    """Raised when a single script cannot be read during bundling.

    Attributes:
        path: The file that could not be read.
        reason: The underlying system error message.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading file '{path}': {reason}")


class AllocationError(ScriptSortError):
    """Raised when the output buffer cannot be allocated or grown."""
