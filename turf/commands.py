"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .cursor import Motion
from .keyboard import KeyType

if TYPE_CHECKING:
    from .session import EditorSession
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            session: EditorSession instance
            key_event: The key event that triggered this command

        Returns:
            True if the frame needs to be redrawn
        """


class MovementCommand(EditorCommand):
    """Cursor movement; redraws only when the cursor or the view moved."""

    def __init__(self, motion: Motion):
        self.motion = motion

    def execute(self, session, key_event):
        return session.cursor.move(self.motion)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, session, key_event):
        return self._edit(session, key_event)

    @abstractmethod
    def _edit(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Perform the edit and report whether the buffer changed."""


class InsertTextCommand(EditCommand):
    def _edit(self, session, key_event):
        char = key_event.value
        # Filter out control characters
        if len(char) != 1 or not (char.isprintable() or char == '\t'):
            return False
        session.insert_char(char)
        return True


class InsertNewlineCommand(EditCommand):
    def _edit(self, session, key_event):
        session.insert_newline()
        return True


class BackspaceCommand(EditCommand):
    def _edit(self, session, key_event):
        return session.delete_backward()


class DeleteCharCommand(EditCommand):
    def _edit(self, session, key_event):
        return session.delete_forward()


class QuitCommand(EditorCommand):
    def execute(self, session, key_event):
        session.running = False
        return False


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self, quit_key: str = 'q'):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands(quit_key)

    def _setup_default_commands(self, quit_key: str):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'up'), MovementCommand(Motion.UP))
        self.register((KeyType.SPECIAL, 'down'), MovementCommand(Motion.DOWN))
        self.register((KeyType.SPECIAL, 'left'), MovementCommand(Motion.LEFT))
        self.register((KeyType.SPECIAL, 'right'), MovementCommand(Motion.RIGHT))
        self.register((KeyType.SPECIAL, 'home'), MovementCommand(Motion.HOME))
        self.register((KeyType.SPECIAL, 'end'), MovementCommand(Motion.END))
        self.register((KeyType.SPECIAL, 'page_up'), MovementCommand(Motion.PAGE_UP))
        self.register((KeyType.SPECIAL, 'page_down'), MovementCommand(Motion.PAGE_DOWN))

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())

        # System commands
        self.register((KeyType.CTRL, quit_key), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the frame needs to be redrawn
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(session, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(session, key_event)

        return False
