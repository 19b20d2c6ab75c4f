"""In-memory line buffer and the file source that fills it."""

import logging
import os
from typing import Optional

from .errors import FileLoadError, OutOfBounds

logger = logging.getLogger(__name__)


class TextBuffer:
    """Ordered list of lines, one string per logical line.

    Lines never reorder; they are only inserted into, split, and joined by
    explicit edits. An empty buffer (no lines at all) is a valid state.
    """

    lines: list[str]

    def __init__(self, lines: Optional[list[str]] = None):
        self.lines = list(lines) if lines is not None else []

    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, index: int) -> Optional[str]:
        """Return the line at index, or None if there is no such line."""
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def line_length(self, index: int) -> int:
        line = self.line_at(index)
        return len(line) if line is not None else 0

    def _check_position(self, line: int, column: int, limit: int) -> str:
        text = self.line_at(line)
        if text is None or not 0 <= column <= limit:
            raise OutOfBounds(line, column)
        return text

    def insert_char(self, line: int, column: int, ch: str):
        """Insert ch into line before column."""
        text = self._check_position(line, column, self.line_length(line))
        self.lines[line] = text[:column] + ch + text[column:]

    def split_line(self, line: int, column: int):
        """Break line in two at column; the tail becomes line + 1."""
        text = self._check_position(line, column, self.line_length(line))
        self.lines[line:line + 1] = [text[:column], text[column:]]

    def delete_char(self, line: int, column: int):
        """Remove the character at column."""
        text = self._check_position(line, column, self.line_length(line) - 1)
        self.lines[line] = text[:column] + text[column + 1:]

    def join_lines(self, line: int):
        """Append line + 1 onto line and remove it."""
        if self.line_at(line) is None or self.line_at(line + 1) is None:
            raise OutOfBounds(line)
        self.lines[line:line + 2] = [self.lines[line] + self.lines[line + 1]]

    def append_line(self, text: str = ""):
        self.lines.append(text)


def _split_lines(content: str) -> list[str]:
    # str.splitlines() would also split on form feeds and U+2028
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_lines(path: str) -> list[str]:
    """Read a UTF-8 text file into a list of lines without terminators.

    Relative paths resolve against the current working directory. A trailing
    newline does not add an empty last line, and an empty file gives [].

    Raises:
        FileLoadError: the file is missing, unreadable or not valid UTF-8.
    """
    full_path = os.path.join(os.getcwd(), path)
    try:
        with open(full_path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except FileNotFoundError as e:
        raise FileLoadError(path, "no such file") from e
    except PermissionError as e:
        raise FileLoadError(path, "permission denied") from e
    except IsADirectoryError as e:
        raise FileLoadError(path, "is a directory") from e
    except UnicodeDecodeError as e:
        raise FileLoadError(path, "not valid UTF-8 text") from e
    except OSError as e:
        raise FileLoadError(path, e.strerror or str(e)) from e

    lines = _split_lines(content) if content else []
    logger.info("Loaded %d lines from %s", len(lines), full_path)
    return lines
