"""Turf - A terminal viewer and editor for a single text file."""

from .buffer import TextBuffer, load_lines
from .cursor import CursorController, CursorPosition, Motion
from .errors import FileLoadError, OutOfBounds, TerminalDriverError, TurfError
from .render import Renderer
from .session import EditorSession
from .viewport import ScreenPosition, Viewport

__all__ = [
    'TextBuffer',
    'load_lines',
    'CursorController',
    'CursorPosition',
    'Motion',
    'FileLoadError',
    'OutOfBounds',
    'TerminalDriverError',
    'TurfError',
    'Renderer',
    'EditorSession',
    'ScreenPosition',
    'Viewport',
]
