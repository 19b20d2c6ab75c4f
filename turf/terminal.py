"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import sys
import termios
from contextlib import contextmanager
from typing import Optional

import blessed

from .errors import TerminalDriverError
from .keyboard import Event, KeyboardHandler, ResizeEvent

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Output is buffered by write() and sent to the terminal in one piece by
    flush(). Input comes from a curtsies Input that is active while the UI
    mode is entered.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.keyboard = KeyboardHandler()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._pending: list[str] = []
        self._old_termios = None
        self._last_size: Optional[tuple[int, int]] = None

    def enter_ui_mode(self):
        """Enter fullscreen, raw input mode."""
        self._emit(self.term.enter_fullscreen + self.term.hide_cursor + self.term.clear)
        self.is_fullscreen = True
        self._last_size = self.size()
        try:
            from curtsies import Input  # type: ignore
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()  # type: ignore
        except Exception as e:
            self._curtsies_input = None
            raise TerminalDriverError(f"Cannot read keyboard input: {e}") from e
        self._disable_flow_control()

    def leave_ui_mode(self):
        """Restore the terminal. Safe to call when not in UI mode."""
        self._restore_flow_control()
        if self._curtsies_input is not None:
            try:
                # Exit raw mode context
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            self.is_fullscreen = False
            self._pending.clear()
            self._emit(self.term.normal_cursor + self.term.exit_fullscreen)

    @contextmanager
    def ui_mode(self):
        """Enter UI mode for the duration of a with block.

        The terminal is restored on every way out of the block, including
        exceptions raised while entering.
        """
        try:
            self.enter_ui_mode()
            yield self
        finally:
            self.leave_ui_mode()

    def _disable_flow_control(self):
        # Let Ctrl-S and Ctrl-Q reach the editor instead of the tty
        try:
            self._old_termios = termios.tcgetattr(sys.stdin)
            new_settings = list(self._old_termios)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except (termios.error, AttributeError, OSError, ValueError):
            self._old_termios = None

    def _restore_flow_control(self):
        if self._old_termios is None:
            return
        try:
            termios.tcsetattr(sys.stdin, termios.TCSANOW, self._old_termios)
        except (termios.error, OSError, ValueError):
            logger.warning("Could not restore terminal settings")
        finally:
            self._old_termios = None

    def size(self) -> tuple[int, int]:
        """Terminal size as (width, height) in character cells."""
        try:
            return (max(0, self.term.width), max(0, self.term.height))
        except OSError as e:
            raise TerminalDriverError(f"Cannot query terminal size: {e}") from e

    def move_cursor(self, col: int, row: int):
        self._pending.append(self.term.move_xy(col, row))

    def hide_cursor(self):
        self._pending.append(self.term.hide_cursor)

    def show_cursor(self):
        self._pending.append(self.term.normal_cursor)

    def write(self, text: str):
        self._pending.append(text)

    def flush(self):
        """Send everything written since the last flush."""
        data = ''.join(self._pending)
        self._pending.clear()
        self._emit(data)

    def _emit(self, data: str):
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError as e:
            raise TerminalDriverError(f"Cannot write to terminal: {e}") from e

    def get_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Get a single curtsies key token, or None if none arrived in time."""
        if self._curtsies_input is None:
            return None
        # send() drains bytes curtsies already buffered before waiting on the tty
        try:
            evt = self._curtsies_input.send(timeout)  # type: ignore
        except (OSError, ValueError) as e:
            raise TerminalDriverError(f"Cannot read keyboard: {e}") from e
        return str(evt) if evt is not None else None

    def poll_event(self, timeout: Optional[float] = None) -> Optional[Event]:
        """Next input event: a resize if the size changed, else a key."""
        current = self.size()
        if current != self._last_size:
            self._last_size = current
            logger.debug("Terminal resized to %dx%d", *current)
            return ResizeEvent(*current)
        key = self.get_key(timeout)
        if not key:
            return None
        return self.keyboard.parse_key(key)
