"""Shared fixtures: a fake terminal driver that records frames in a grid."""

from contextlib import contextmanager

import pytest

from turf.buffer import TextBuffer
from turf.session import EditorSession
from turf.settings import Settings


class FakeTerminal:
    """In-memory stand-in for TerminalInterface.

    Writes land in a character grid at the current cursor cell. Events are
    served from a script; when the script runs out, a KeyboardInterrupt
    ends the session the way Ctrl-C would.
    """

    def __init__(self, width=80, height=24, events=()):
        self.width = width
        self.height = height
        self.events = list(events)
        self.grid = [[' '] * width for _ in range(height)]
        self.cursor = (0, 0)
        self.cursor_visible = True
        self.in_ui_mode = False
        self.enter_count = 0
        self.leave_count = 0
        self.flush_count = 0
        self.calls = []

    def enter_ui_mode(self):
        self.enter_count += 1
        self.in_ui_mode = True

    def leave_ui_mode(self):
        self.leave_count += 1
        self.in_ui_mode = False

    @contextmanager
    def ui_mode(self):
        try:
            self.enter_ui_mode()
            yield self
        finally:
            self.leave_ui_mode()

    def size(self):
        return (self.width, self.height)

    def move_cursor(self, col, row):
        self.calls.append(('move', col, row))
        self.cursor = (col, row)

    def hide_cursor(self):
        self.calls.append(('hide',))
        self.cursor_visible = False

    def show_cursor(self):
        self.calls.append(('show',))
        self.cursor_visible = True

    def write(self, text):
        self.calls.append(('write', text))
        col, row = self.cursor
        for ch in text:
            if 0 <= row < self.height and 0 <= col < self.width:
                self.grid[row][col] = ch
            col += 1
        self.cursor = (col, row)

    def flush(self):
        self.calls.append(('flush',))
        self.flush_count += 1

    def poll_event(self, timeout=None):
        if not self.events:
            raise KeyboardInterrupt
        return self.events.pop(0)

    def rows(self):
        return [''.join(r) for r in self.grid]


@pytest.fixture
def fake_terminal():
    return FakeTerminal()


@pytest.fixture
def make_session():
    def _make(lines=None, width=80, height=24, events=(), settings=None):
        terminal = FakeTerminal(width=width, height=height, events=events)
        session = EditorSession(terminal, TextBuffer(lines if lines is not None else []),
                                settings=settings or Settings())
        session.resize(width, height)
        return session
    return _make
