"""Error types raised by the turf editor."""

from typing import Optional


class TurfError(Exception):
    """Base class for all editor errors."""


class FileLoadError(TurfError):
    """The file given on the command line could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load {path}: {reason}")
        self.path = path
        self.reason = reason


class TerminalDriverError(TurfError):
    """Writing to or querying the terminal failed mid-session."""


class OutOfBounds(TurfError, IndexError):
    """A buffer coordinate referenced a line or column that does not exist."""

    def __init__(self, line: int, column: Optional[int] = None):
        if column is None:
            message = f"line {line} out of range"
        else:
            message = f"position ({line}, {column}) out of range"
        super().__init__(message)
        self.line = line
        self.column = column
