"""Command pattern implementation for the per-mode key handlers."""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Tuple, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import KeyType
from .modes import Mode

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor, key_event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.left()


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.right()


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.up()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.cursor.down()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Run the edit, then pull the cursor back inside the buffer."""
        changed = self._edit(editor, key_event)
        editor.cursor.clamp()
        return changed

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit; return True if the text changed."""
        pass


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.buffer.delete_char(editor.cursor.row, editor.cursor.column)


class DeleteLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.delete_line(editor.cursor.row)
        return True


class InsertCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        cursor = editor.cursor
        editor.buffer.insert_char(cursor.row, cursor.column, key_event.value)
        cursor.position.column += 1
        return True


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        cursor = editor.cursor
        # No join with the previous line at column 0
        if cursor.column == 0:
            return False
        editor.buffer.delete_char(cursor.row, cursor.column - 1)
        cursor.position.column -= 1
        return True


class SplitLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        cursor = editor.cursor
        editor.buffer.split_line(cursor.row, cursor.column)
        cursor.move_to(cursor.row + 1, 0)
        return True


class SystemCommand(EditorCommand):
    """Base class for mode switches and session commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class EnterInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.set_mode(Mode.INSERT)
        editor.status_message = EditorConstants.INSERT_MODE_MESSAGE


class EnterCommandModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.set_mode(Mode.COMMAND)
        editor.command_line = ""


class LeaveInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.set_mode(Mode.NORMAL)
        editor.status_message = None


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.quit = True


class CommandLineAppendCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.command_line += key_event.value


class CommandLineBackspaceCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.command_line:
            editor.command_line = editor.command_line[:-1]


class CommandLineCancelCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.command_line = ""
        editor.status_message = None
        editor.set_mode(Mode.NORMAL)


class CommandLineExecuteCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.interpreter.execute(editor, editor.command_line)
        editor.command_line = ""
        if editor.mode == Mode.COMMAND:
            editor.set_mode(Mode.NORMAL)
        return False


class ModeHandler:
    """Maps the key events of one mode to commands."""

    mode: Mode

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def handle(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command bound to key_event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)
        return self._handle_unbound(editor, key_event)

    def _handle_unbound(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return False


class NormalModeHandler(ModeHandler):
    """Navigation, single-key edits and two-key gestures."""

    mode = Mode.NORMAL

    def __init__(self):
        self._sequences: Dict[Tuple[str, str], EditorCommand] = {}
        super().__init__()

    def _setup_default_commands(self):
        left, right = LeftCharCommand(), RightCharCommand()
        up, down = UpLineCommand(), DownLineCommand()
        self.register((KeyType.SPECIAL, 'left'), left)
        self.register((KeyType.SPECIAL, 'right'), right)
        self.register((KeyType.SPECIAL, 'up'), up)
        self.register((KeyType.SPECIAL, 'down'), down)
        self.register((KeyType.REGULAR, 'h'), left)
        self.register((KeyType.REGULAR, 'l'), right)
        self.register((KeyType.REGULAR, 'k'), up)
        self.register((KeyType.REGULAR, 'j'), down)

        self.register((KeyType.REGULAR, 'x'), DeleteCharCommand())
        self.register_sequence('d', 'd', DeleteLineCommand())

        self.register((KeyType.REGULAR, 'i'), EnterInsertModeCommand())
        self.register((KeyType.REGULAR, ':'), EnterCommandModeCommand())
        self.register((KeyType.CTRL, 'c'), QuitCommand())

    def register_sequence(self, first: str, second: str, command: EditorCommand):
        """Register a command for two printable keys pressed in a row."""
        self._sequences[(first, second)] = command

    def handle(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        now = editor.clock()
        # Any key consumes the pending prefix, whether or not it completes it
        pending = editor.pending_key.take(now)
        if key_event.key_type == KeyType.REGULAR:
            if pending is not None:
                command = self._sequences.get((pending, key_event.value))
                if command:
                    return command.execute(editor, key_event)
            if self._starts_sequence(key_event.value):
                editor.pending_key.arm(key_event.value, now, editor.pending_timeout)
                return False
        return super().handle(editor, key_event)

    def _starts_sequence(self, key: str) -> bool:
        return any(first == key for first, _ in self._sequences)


class InsertModeHandler(ModeHandler):
    """Text entry."""

    mode = Mode.INSERT

    def _setup_default_commands(self):
        self.register((KeyType.SPECIAL, 'escape'), LeaveInsertModeCommand())
        self.register((KeyType.SPECIAL, 'enter'), SplitLineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self._insert_char = InsertCharCommand()

    def _handle_unbound(self, editor, key_event):
        if key_event.is_printable:
            return self._insert_char.execute(editor, key_event)
        return False


class CommandModeHandler(ModeHandler):
    """Editing and running the ':' command line."""

    mode = Mode.COMMAND

    def _setup_default_commands(self):
        self.register((KeyType.SPECIAL, 'escape'), CommandLineCancelCommand())
        self.register((KeyType.SPECIAL, 'enter'), CommandLineExecuteCommand())
        self.register((KeyType.SPECIAL, 'backspace'), CommandLineBackspaceCommand())
        self._append = CommandLineAppendCommand()

    def _handle_unbound(self, editor, key_event):
        if key_event.is_printable:
            return self._append.execute(editor, key_event)
        return False


def default_mode_handlers() -> Dict[Mode, ModeHandler]:
    return {handler.mode: handler
            for handler in (NormalModeHandler(), InsertModeHandler(), CommandModeHandler())}


class ModeDispatcher:
    """Routes each key event to the handler of the editor's active mode."""

    def __init__(self, handlers: Optional[Mapping[Mode, ModeHandler]] = None):
        handlers = dict(handlers) if handlers is not None else default_mode_handlers()
        missing = [mode.name for mode in Mode if mode not in handlers]
        if missing:
            raise ValueError(f"No handler for mode(s): {', '.join(missing)}")
        self._handlers = handlers

    def handler_for(self, mode: Mode) -> ModeHandler:
        return self._handlers[mode]

    def dispatch(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Handle key_event in the editor's current mode.

        Returns:
            True if the document was modified
        """
        return self._handlers[editor.mode].handle(editor, key_event)
