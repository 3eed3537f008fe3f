"""Interpreter for the command line typed after ':'."""

import logging
from typing import Callable, Dict, TYPE_CHECKING

from .constants import EditorConstants

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)


def _write(editor: 'Editor') -> None:
    editor.save_file()


def _quit(editor: 'Editor') -> None:
    editor.quit = True


def _write_quit(editor: 'Editor') -> None:
    if editor.save_file():
        editor.quit = True


class CommandInterpreter:
    """Maps command-line text to session effects.

    Commands never raise: failures and unknown input end up in the
    editor's status message.
    """

    def __init__(self):
        self._commands: Dict[str, Callable[['Editor'], None]] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register('w', _write)
        self.register('q', _quit)
        self.register('wq', _write_quit)
        self.register('q!', _quit)

    def register(self, name: str, action: Callable[['Editor'], None]):
        """Register an action for a command name."""
        self._commands[name] = action

    def execute(self, editor: 'Editor', text: str) -> bool:
        """Run a command.

        Args:
            editor: Editor the command acts on
            text: Raw command-line text; surrounding whitespace is ignored

        Returns:
            True if the command was recognised
        """
        command = text.strip()
        action = self._commands.get(command)
        if action is None:
            logger.debug("Unknown command %r", command)
            editor.status_message = EditorConstants.UNKNOWN_COMMAND_MESSAGE.format(command)
            return False
        action(editor)
        return True
