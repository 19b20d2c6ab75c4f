"""Frame rendering: turns buffer and viewport state into terminal writes."""

from typing import Optional, TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .buffer import TextBuffer
    from .cursor import CursorPosition
    from .terminal import TerminalInterface
    from .viewport import Viewport


def _displayable(text: str) -> str:
    """Replace control characters so each character fills one cell."""
    if text.isprintable():
        return text
    return ''.join(ch if ch.isprintable() else ' ' for ch in text)


class Renderer:
    """Draws one frame of the editor.

    The text area occupies the screen rows below the optional banner. Rows
    past the end of the buffer show the placeholder glyph.
    """

    def __init__(self, placeholder: str = EditorConstants.PLACEHOLDER,
                 banner: Optional[str] = None):
        self.placeholder = placeholder
        self.banner = banner

    @property
    def top(self) -> int:
        """First screen row of the text area."""
        return EditorConstants.BANNER_ROWS if self.banner is not None else 0

    def compose(self, buffer: "TextBuffer", viewport: "Viewport") -> list[str]:
        """Text of every text-area row, padded to the viewport width."""
        if viewport.is_degenerate:
            return []
        rows = []
        for text in viewport.visible_rows(buffer):
            if text is None:
                text = self.placeholder
            rows.append(_displayable(text)[:viewport.width].ljust(viewport.width))
        return rows

    def render(self, terminal: "TerminalInterface", buffer: "TextBuffer",
               viewport: "Viewport", cursor: "CursorPosition"):
        """Write a full frame and leave the terminal cursor on the text cursor.

        Reads buffer and viewport only; offsets must already be scrolled.
        """
        terminal.hide_cursor()
        if self.banner is not None and viewport.width > 0:
            terminal.move_cursor(0, 0)
            terminal.write(self.banner[:viewport.width].ljust(viewport.width))

        for r, row in enumerate(self.compose(buffer, viewport)):
            terminal.move_cursor(0, self.top + r)
            terminal.write(row)

        screen = viewport.project(cursor)
        if screen is not None:
            terminal.move_cursor(screen.col, self.top + screen.row)
            terminal.show_cursor()
        terminal.flush()
