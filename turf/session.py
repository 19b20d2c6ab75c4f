"""Editor session: owns the editing state and runs the event loop."""

import logging
from typing import Optional, TYPE_CHECKING

from .buffer import TextBuffer
from .commands import CommandRegistry
from .cursor import CursorController
from .keyboard import Event, KeyEvent, ResizeEvent
from .render import Renderer
from .settings import Settings
from .viewport import Viewport, saturating_sub

if TYPE_CHECKING:
    from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class EditorSession:
    """Single-file editing session.

    The session exclusively owns the buffer, the viewport and the cursor
    controller; they are only mutated from the event loop. The terminal is
    passed in and only entered into UI mode by run().
    """

    def __init__(self, terminal: "TerminalInterface", buffer: Optional[TextBuffer] = None,
                 settings: Optional[Settings] = None, filename: Optional[str] = None):
        self.terminal = terminal
        self.settings = settings or Settings()
        self.buffer = buffer if buffer is not None else TextBuffer()
        self.filename = filename
        banner = self.settings.banner_text if self.settings.show_banner else None
        self.renderer = Renderer(placeholder=self.settings.placeholder, banner=banner)
        self.viewport = Viewport(0, 0)
        self.cursor = CursorController(self.buffer, self.viewport)
        self.command_registry = CommandRegistry(quit_key=self.settings.quit_key)
        self.running = False
        self.dirty = False
        self.frames_rendered = 0

    def _text_area_size(self, width: int, height: int) -> tuple[int, int]:
        """Terminal size minus the rows taken by the banner."""
        return (width, saturating_sub(height, self.renderer.top))

    def resize(self, width: int, height: int) -> bool:
        """Adopt a new terminal size and scroll the cursor back into view.

        The cursor's buffer position is never changed by a resize.
        """
        before = self.viewport.state()
        self.viewport.resize(*self._text_area_size(width, height))
        self.viewport.scroll(self.cursor.position)
        logger.debug("Resized to %dx%d, viewport %r", width, height, self.viewport)
        return self.viewport.state() != before

    def run(self):
        """Run the main editor loop until the quit key is pressed."""
        logger.info("Starting session for %s (%d lines)",
                    self.filename or "<empty buffer>", self.buffer.line_count())
        self.running = True
        with self.terminal.ui_mode():
            self.resize(*self.terminal.size())
            self.render()
            try:
                while self.running:
                    event = self.terminal.poll_event(timeout=self.settings.poll_timeout)
                    if event is None:
                        continue
                    self.handle_event(event)
                    # Only draw when needed
                    if self.dirty and self.running:
                        self.render()
            except KeyboardInterrupt:
                # Ctrl-C quits like the quit key
                self.running = False
        logger.info("Session ended after %d frames", self.frames_rendered)

    def render(self):
        self.renderer.render(self.terminal, self.buffer, self.viewport, self.cursor.position)
        self.frames_rendered += 1
        self.dirty = False

    def handle_event(self, event: Event) -> bool:
        """Process one input event; returns True if the frame is now dirty."""
        if isinstance(event, ResizeEvent):
            self.resize(event.width, event.height)
            changed = True
        elif isinstance(event, KeyEvent):
            changed = self.command_registry.execute(self, event)
        else:
            changed = False
        if changed:
            self.dirty = True
        return changed

    def insert_char(self, ch: str):
        """Insert ch at the cursor and move the cursor past it."""
        if self.buffer.line_count() == 0:
            self.buffer.append_line()
        pos = self.cursor.position
        self.buffer.insert_char(pos.line, pos.column, ch)
        self.cursor.set_position(pos.line, pos.column + 1)

    def insert_newline(self):
        """Split the current line at the cursor; the cursor starts the new line."""
        if self.buffer.line_count() == 0:
            self.buffer.append_line()
        pos = self.cursor.position
        self.buffer.split_line(pos.line, pos.column)
        self.cursor.set_position(pos.line + 1, 0)

    def delete_backward(self) -> bool:
        """Delete the character before the cursor, joining lines at column 0."""
        line, column = self.cursor.position.line, self.cursor.position.column
        if column > 0:
            self.buffer.delete_char(line, column - 1)
            self.cursor.set_position(line, column - 1)
            return True
        if line > 0 and self.buffer.line_count() > line:
            previous_length = self.buffer.line_length(line - 1)
            self.buffer.join_lines(line - 1)
            self.cursor.set_position(line - 1, previous_length)
            return True
        return False

    def delete_forward(self) -> bool:
        """Delete the character under the cursor, joining lines at the end."""
        line, column = self.cursor.position.line, self.cursor.position.column
        if column < self.buffer.line_length(line):
            self.buffer.delete_char(line, column)
        elif line + 1 < self.buffer.line_count():
            self.buffer.join_lines(line)
        else:
            return False
        self.cursor.set_position(line, column)
        return True
