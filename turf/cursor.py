"""Cursor position and navigation."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .buffer import TextBuffer
from .viewport import ScreenPosition, Viewport


@dataclass
class CursorPosition:
    line: int = 0
    column: int = 0


class Motion(Enum):
    """Navigation intents understood by CursorController."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


class CursorController:
    """Owns the cursor's buffer position and keeps it on screen.

    Every move is clamped against the buffer first and then handed to
    Viewport.scroll(), so the screen projection is always inside the
    terminal. An empty buffer pins the cursor at (0, 0).
    """

    def __init__(self, buffer: TextBuffer, viewport: Viewport):
        self.buffer = buffer
        self.viewport = viewport
        self.position = CursorPosition()

    def _snapshot(self):
        return (self.position.line, self.position.column,
                self.viewport.row_off, self.viewport.col_off)

    def clamp(self):
        """Pull the position back inside the buffer."""
        count = self.buffer.line_count()
        if count == 0:
            self.position.line = 0
            self.position.column = 0
            return
        self.position.line = min(max(0, self.position.line), count - 1)
        self.position.column = min(max(0, self.position.column),
                                   self.buffer.line_length(self.position.line))

    def set_position(self, line: int, column: int) -> bool:
        """Jump to (line, column), clamped, and scroll it into view."""
        before = self._snapshot()
        self.position.line = line
        self.position.column = column
        self.clamp()
        self.viewport.scroll(self.position)
        return self._snapshot() != before

    def screen_position(self) -> Optional[ScreenPosition]:
        return self.viewport.project(self.position)

    def move(self, motion: Motion) -> bool:
        """Apply a navigation intent.

        Returns True if the buffer position or the viewport offsets changed,
        which is exactly when the screen needs redrawing.
        """
        if self.buffer.line_count() == 0:
            return False
        before = self._snapshot()
        line, column = self.position.line, self.position.column
        last_line = self.buffer.line_count() - 1

        if motion is Motion.UP:
            line = max(0, line - 1)
        elif motion is Motion.DOWN:
            line = min(last_line, line + 1)
        elif motion is Motion.PAGE_UP:
            line = max(0, line - self.viewport.height)
        elif motion is Motion.PAGE_DOWN:
            line = min(last_line, line + self.viewport.height)
        elif motion is Motion.LEFT:
            if column > 0:
                column -= 1
            elif line > 0:
                line -= 1
                column = self.buffer.line_length(line)
        elif motion is Motion.RIGHT:
            if column < self.buffer.line_length(line):
                column += 1
            elif line < last_line:
                line += 1
                column = 0
        elif motion is Motion.HOME:
            column = 0
        elif motion is Motion.END:
            column = self.buffer.line_length(line)

        # Vertical moves never leave the cursor past the end of a shorter line
        self.position.line = line
        self.position.column = min(column, self.buffer.line_length(line))
        self.viewport.scroll(self.position)
        return self._snapshot() != before
