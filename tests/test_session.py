"""Tests for EditorSession event handling and the event loop."""

import random
from unittest.mock import patch

import pytest

from turf.cursor import CursorPosition
from turf.errors import TerminalDriverError
from turf.keyboard import KeyEvent, KeyType, ResizeEvent
from turf.settings import Settings


def key(value):
    return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=f"<{value}>")


def char(ch):
    return KeyEvent(key_type=KeyType.REGULAR, value=ch, raw=ch)


def ctrl(ch):
    return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=f"<Ctrl-{ch}>")


class TestEditing:

    def test_insert_char_advances_cursor(self, make_session):
        s = make_session(["hllo"])
        s.cursor.set_position(0, 1)
        assert s.handle_event(char("e"))
        assert s.buffer.lines == ["hello"]
        assert s.cursor.position == CursorPosition(0, 2)
        assert s.dirty

    def test_typing_past_right_edge_scrolls(self, make_session):
        s = make_session([""], width=5, height=3)
        for ch in "abcdefg":
            s.handle_event(char(ch))
        assert s.buffer.lines == ["abcdefg"]
        assert s.cursor.position == CursorPosition(0, 7)
        assert s.viewport.col_off == 3
        assert s.cursor.screen_position().col == 4

    def test_typing_into_empty_buffer_creates_first_line(self, make_session):
        s = make_session([])
        s.handle_event(char("x"))
        assert s.buffer.lines == ["x"]
        assert s.cursor.position == CursorPosition(0, 1)

    def test_enter_splits_line(self, make_session):
        s = make_session(["helloworld"])
        s.cursor.set_position(0, 5)
        assert s.handle_event(key("enter"))
        assert s.buffer.lines == ["hello", "world"]
        assert s.cursor.position == CursorPosition(1, 0)

    def test_enter_at_bottom_scrolls(self, make_session):
        s = make_session(["a", "b", "c"], height=3)
        s.cursor.set_position(2, 1)
        s.handle_event(key("enter"))
        assert s.cursor.position == CursorPosition(3, 0)
        assert s.viewport.row_off == 1
        assert s.cursor.screen_position().row == 2

    def test_enter_resets_column_offset(self, make_session):
        s = make_session(["x" * 40], width=10)
        s.cursor.set_position(0, 40)
        assert s.viewport.col_off == 31
        s.handle_event(key("enter"))
        assert s.viewport.col_off == 0

    def test_tab_is_inserted(self, make_session):
        s = make_session(["ab"])
        s.handle_event(char("\t"))
        assert s.buffer.lines == ["\tab"]

    def test_control_characters_are_not_inserted(self, make_session):
        s = make_session(["ab"])
        assert not s.handle_event(char("\x07"))
        assert s.buffer.lines == ["ab"]
        assert not s.dirty

    def test_backspace_deletes_previous_char(self, make_session):
        s = make_session(["abc"])
        s.cursor.set_position(0, 2)
        assert s.handle_event(key("backspace"))
        assert s.buffer.lines == ["ac"]
        assert s.cursor.position == CursorPosition(0, 1)

    def test_backspace_at_line_start_joins(self, make_session):
        s = make_session(["abc", "def"])
        s.cursor.set_position(1, 0)
        s.handle_event(key("backspace"))
        assert s.buffer.lines == ["abcdef"]
        assert s.cursor.position == CursorPosition(0, 3)

    def test_backspace_at_document_start_does_nothing(self, make_session):
        s = make_session(["abc"])
        assert not s.handle_event(key("backspace"))

    def test_delete_removes_char_under_cursor(self, make_session):
        s = make_session(["abc"])
        s.cursor.set_position(0, 1)
        assert s.handle_event(key("delete"))
        assert s.buffer.lines == ["ac"]
        assert s.cursor.position == CursorPosition(0, 1)

    def test_delete_at_line_end_joins_next(self, make_session):
        s = make_session(["ab", "cd"])
        s.cursor.set_position(0, 2)
        s.handle_event(key("delete"))
        assert s.buffer.lines == ["abcd"]

    def test_delete_on_empty_buffer_does_nothing(self, make_session):
        s = make_session([])
        assert not s.handle_event(key("delete"))
        assert not s.handle_event(key("backspace"))
        assert s.buffer.lines == []

    def test_random_edits_keep_cursor_on_screen(self, make_session):
        rng = random.Random(4321)
        lines = ["y" * rng.randint(0, 40) for _ in range(12)]
        s = make_session(lines, width=9, height=4)
        events = [key(name) for name in (
            "up", "down", "left", "right", "home", "end", "page_up", "page_down",
            "enter", "backspace", "delete")]
        events += [char(ch) for ch in "ab\t "]
        view = s.viewport
        for _ in range(3000):
            s.handle_event(rng.choice(events))
            pos = s.cursor.position
            count = s.buffer.line_count()
            if count == 0:
                assert pos == CursorPosition(0, 0)
                continue
            assert 0 <= pos.line < count
            assert 0 <= pos.column <= s.buffer.line_length(pos.line)
            screen = s.cursor.screen_position()
            assert screen == (pos.column - view.col_off, pos.line - view.row_off)
            assert 0 <= screen.row < view.height
            assert 0 <= screen.col < view.width
            assert view.row_off <= count - 1
            assert view.col_off <= s.buffer.line_length(pos.line)


class TestNavigation:

    def test_navigation_marks_dirty_only_on_change(self, make_session):
        s = make_session(["abc", "def"])
        assert not s.handle_event(key("up"))
        assert not s.dirty
        assert s.handle_event(key("down"))
        assert s.dirty

    def test_unbound_keys_are_ignored(self, make_session):
        s = make_session(["abc"])
        assert not s.handle_event(key("insert"))
        assert not s.handle_event(ctrl("x"))
        assert s.buffer.lines == ["abc"]

    def test_down_25_times(self, make_session):
        s = make_session([f"Line {i}" for i in range(100)], height=20)
        for _ in range(25):
            s.handle_event(key("down"))
        assert s.viewport.row_off == 6
        assert s.cursor.position.line == 25
        assert s.cursor.screen_position().row == 19

    def test_home_from_scrolled_column(self, make_session):
        s = make_session(["x" * 20 for _ in range(6)], width=5)
        s.cursor.set_position(3, 7)
        assert s.viewport.col_off > 0
        s.handle_event(key("home"))
        assert s.cursor.position == CursorPosition(3, 0)
        assert s.viewport.col_off == 0


class TestResize:

    def test_resize_event_keeps_buffer_position(self, make_session):
        s = make_session([f"{i}" for i in range(100)], height=40)
        s.cursor.set_position(30, 1)
        assert s.viewport.row_off == 0
        assert s.handle_event(ResizeEvent(80, 10))
        assert s.cursor.position == CursorPosition(30, 1)
        assert s.viewport.row_off == 21
        assert s.cursor.screen_position().row == 9

    def test_resize_twice_same_size(self, make_session):
        s = make_session(["x" * 100 for _ in range(50)])
        s.cursor.set_position(45, 90)
        s.handle_event(ResizeEvent(30, 8))
        first = s.viewport.state()
        s.handle_event(ResizeEvent(30, 8))
        assert s.viewport.state() == first

    def test_resize_to_zero_keeps_offsets(self, make_session):
        s = make_session([f"{i}" for i in range(100)], height=10)
        s.cursor.set_position(50, 0)
        offsets = (s.viewport.row_off, s.viewport.col_off)
        s.handle_event(ResizeEvent(0, 0))
        assert (s.viewport.row_off, s.viewport.col_off) == offsets
        assert s.cursor.screen_position() is None

    def test_banner_takes_one_row(self, make_session):
        s = make_session(["a"], width=40, height=10, settings=Settings(show_banner=True))
        assert (s.viewport.width, s.viewport.height) == (40, 9)


class TestEventLoop:

    def test_short_file_frame(self, make_session):
        s = make_session([f"row {i}" for i in range(5)], width=20, height=10,
                         events=[ctrl("q")])
        s.run()
        rows = [row.rstrip() for row in s.terminal.rows()]
        assert rows[:5] == [f"row {i}" for i in range(5)]
        assert rows[5:] == ["~"] * 5

    def test_quit_stops_loop_and_restores_terminal_once(self, make_session):
        s = make_session(["abc"], events=[key("right"), ctrl("q"), char("z")])
        s.run()
        assert not s.running
        assert s.terminal.enter_count == 1
        assert s.terminal.leave_count == 1
        assert not s.terminal.in_ui_mode
        # Initial frame plus the one after moving right; none after quit
        assert s.frames_rendered == 2
        # The event after quit is never read
        assert s.terminal.events == [char("z")]

    def test_configured_quit_key(self, make_session):
        s = make_session(["abc"], events=[ctrl("q"), ctrl("x")],
                         settings=Settings(quit_key="x"))
        s.run()
        assert s.terminal.events == []
        assert s.frames_rendered == 1

    def test_ctrl_c_quits(self, make_session):
        s = make_session(["abc"], events=[])
        s.run()
        assert not s.running
        assert s.terminal.leave_count == 1

    def test_no_redraw_without_changes(self, make_session):
        s = make_session(["abc"], events=[None, None, key("up"), key("left"), ctrl("q")])
        s.run()
        assert s.frames_rendered == 1

    def test_resize_redraws(self, make_session):
        s = make_session(["abc"], width=20, height=5,
                         events=[ResizeEvent(10, 3), ctrl("q")])
        s.run()
        assert s.frames_rendered == 2
        assert s.viewport.state() == (10, 3, 0, 0)

    def test_initial_size_comes_from_terminal(self, make_session):
        s = make_session(["abc"], width=20, height=5, events=[ctrl("q")])
        s.terminal.width, s.terminal.height = 12, 4
        s.run()
        assert (s.viewport.width, s.viewport.height) == (12, 4)

    def test_driver_error_restores_terminal(self, make_session):
        s = make_session(["abc"], events=[key("down")])
        with patch.object(s.terminal, 'flush', side_effect=TerminalDriverError("gone")):
            with pytest.raises(TerminalDriverError):
                s.run()
        assert s.terminal.leave_count == 1
        assert not s.terminal.in_ui_mode

    def test_typing_session_end_to_end(self, make_session):
        events = [char(c) for c in "hi"] + [key("enter"), char("!"), ctrl("q")]
        s = make_session([], width=10, height=3, events=events)
        s.run()
        assert s.buffer.lines == ["hi", "!"]
        rows = [row[:10].rstrip() for row in s.terminal.rows()[:3]]
        assert rows == ["hi", "!", "~"]
        assert s.terminal.cursor == (1, 1)
