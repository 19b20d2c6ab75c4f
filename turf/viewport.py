"""Viewport: terminal size, scroll offsets and screen projection.

The viewport maps buffer coordinates ``(line, column)`` onto screen
coordinates ``(col, row)`` through two offsets: ``row_off`` is the first
buffer line shown on screen and ``col_off`` the first column shown of
every line. Scrolling is horizontal; long lines are never wrapped.
"""

from typing import NamedTuple, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .buffer import TextBuffer
    from .cursor import CursorPosition


def saturating_sub(a: int, b: int) -> int:
    """Return a - b, or 0 if that would be negative."""
    return a - b if a > b else 0


class ScreenPosition(NamedTuple):
    col: int
    row: int


class Viewport:
    width: int
    height: int
    row_off: int
    col_off: int

    def __init__(self, width: int, height: int, row_off: int = 0, col_off: int = 0):
        self.width = max(0, width)
        self.height = max(0, height)
        self.row_off = max(0, row_off)
        self.col_off = max(0, col_off)

    def __repr__(self):
        return (f"Viewport(width={self.width}, height={self.height}, "
                f"row_off={self.row_off}, col_off={self.col_off})")

    def state(self) -> tuple[int, int, int, int]:
        return (self.width, self.height, self.row_off, self.col_off)

    @property
    def is_degenerate(self) -> bool:
        """True when the terminal has no room to show anything."""
        return self.width == 0 or self.height == 0

    def resize(self, width: int, height: int):
        """Record a new size. Offsets are fixed up by the next scroll()."""
        self.width = max(0, width)
        self.height = max(0, height)

    def scroll(self, cursor: "CursorPosition") -> bool:
        """Move the offsets by the smallest amount that shows the cursor.

        Returns True if either offset changed. A zero-sized viewport leaves
        the offsets alone.
        """
        if self.is_degenerate:
            return False
        before = (self.row_off, self.col_off)

        if cursor.line < self.row_off:
            self.row_off = cursor.line
        elif cursor.line >= self.row_off + self.height:
            self.row_off = saturating_sub(cursor.line + 1, self.height)

        if cursor.column < self.col_off:
            self.col_off = cursor.column
        elif cursor.column >= self.col_off + self.width:
            self.col_off = saturating_sub(cursor.column + 1, self.width)

        return (self.row_off, self.col_off) != before

    def project(self, cursor: "CursorPosition") -> Optional[ScreenPosition]:
        """Screen cell for a buffer position, clamped into the visible area."""
        if self.is_degenerate:
            return None
        row = min(saturating_sub(cursor.line, self.row_off), self.height - 1)
        col = min(saturating_sub(cursor.column, self.col_off), self.width - 1)
        return ScreenPosition(col, row)

    def visible_rows(self, buffer: "TextBuffer") -> list[Optional[str]]:
        """Visible slice of each buffer line, or None past the end of file."""
        rows: list[Optional[str]] = []
        for r in range(self.height):
            line = buffer.line_at(self.row_off + r)
            if line is None:
                rows.append(None)
            else:
                rows.append(line[self.col_off:self.col_off + self.width])
        return rows
