"""Editing session and main loop of the modal editor."""

import logging
import os
import select
import signal
import time
from typing import Callable, Optional

from .buffer import LineBuffer
from .command_line import CommandInterpreter
from .commands import ModeDispatcher
from .constants import EditorConstants
from .cursor import CursorController
from .errors import StorageError
from .keyboard import CTRL_C_EVENT, KeyboardHandler, KeyEvent
from .modes import Mode, PendingKey
from .storage import FileStorage, Storage
from .terminal import Display
from .view import build_frame

logger = logging.getLogger(__name__)


class Editor:
    """One editing session: document, cursor, mode and status.

    The session does no I/O of its own. Documents go through ``storage``
    and frames through ``display``; both can be fakes in tests, and
    ``display`` may be None when nothing needs to be drawn.
    """

    def __init__(self, filename: Optional[str] = None,
                 lines: Optional[list[str]] = None,
                 storage: Optional[Storage] = None,
                 display: Optional[Display] = None,
                 clock: Callable[[], float] = time.monotonic,
                 pending_timeout: float = EditorConstants.PENDING_KEY_TIMEOUT,
                 dispatcher: Optional[ModeDispatcher] = None):
        self.filename = filename
        self.storage = storage or FileStorage()
        self.display = display
        self.clock = clock
        self.pending_timeout = pending_timeout
        self.dispatcher = dispatcher or ModeDispatcher()
        self.interpreter = CommandInterpreter()

        self.buffer = LineBuffer(lines)
        height = display.height if display is not None else EditorConstants.DEFAULT_SCREEN_HEIGHT - 1
        self.cursor = CursorController(self.buffer, height)
        self.mode = Mode.NORMAL
        self.pending_key = PendingKey()
        self.command_line = ""
        self.status_message: Optional[str] = None
        self.modified = False
        self.quit = False

    def set_mode(self, mode: Mode) -> None:
        if mode != self.mode:
            logger.debug("Mode %s -> %s", self.mode.label, mode.label)
        self.mode = mode
        self.pending_key.clear()

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Apply one key event to the session.

        Never raises: a failing command is logged and reported in the
        status bar so the loop can go on drawing.
        """
        try:
            if self.dispatcher.dispatch(self, key_event):
                self.modified = True
        except Exception as e:
            # Justification: an editing bug must not take down the session
            # and lose the user's unsaved text.
            logger.exception("Error handling key %r in %s mode", key_event.raw, self.mode.label)
            self.status_message = EditorConstants.INTERNAL_ERROR_MESSAGE.format(e)
            self.cursor.clamp()

    def handle_resize(self, height: int) -> None:
        """Recompute viewport geometry for a new number of text rows."""
        self.cursor.resize(height)

    def load_file(self, filename: Optional[str] = None) -> None:
        """Load a file into the editor, replacing the current document.

        Raises:
            StorageError: if the file cannot be read
        """
        if filename is not None:
            self.filename = filename
        lines = self.storage.load(self.filename)
        self.buffer = LineBuffer(lines)
        self.cursor = CursorController(self.buffer, self.cursor.height)
        self.modified = False

    def save_file(self) -> bool:
        """Write the document back to its file.

        Returns:
            True if save succeeded, False otherwise
        """
        try:
            self.storage.save(self.filename, self.buffer.lines)
        except StorageError as e:
            self.status_message = EditorConstants.SAVE_ERROR_MESSAGE.format(e.detail)
            return False
        self.modified = False
        self.status_message = EditorConstants.FILE_SAVED_MESSAGE
        return True

    def draw(self) -> None:
        if self.display is not None:
            self.display.render(build_frame(self))

    def _handle_resize_signal(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._signal_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) by queueing a Ctrl-C key event."""
        del signum, frame  # Unused
        os.write(self._signal_pipe_w, EditorConstants.INTERRUPT_PIPE_MARKER)

    def run(self, keyboard: Optional[KeyboardHandler] = None):
        """Run the main editor loop until the quit flag is set.

        Each iteration waits for a key or a signal, applies it, and
        redraws. The quit flag is checked after the redraw.
        """
        display = self.display
        if display is None:
            raise ValueError("Editor.run() needs a display")
        keyboard = keyboard or KeyboardHandler(display)
        self._signal_pipe_r, self._signal_pipe_w = os.pipe()

        display.setup()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize_signal)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        try:
            self.handle_resize(display.height)
            self.draw()
            while not self.quit:
                ready, _, _ = select.select([0, self._signal_pipe_r], [], [])
                if self._signal_pipe_r in ready:
                    markers = os.read(self._signal_pipe_r, 1024)
                    if EditorConstants.RESIZE_PIPE_MARKER in markers:
                        display.invalidate_frame()
                        self.handle_resize(display.height)
                    if EditorConstants.INTERRUPT_PIPE_MARKER in markers:
                        self.handle_key_event(CTRL_C_EVENT)
                elif 0 in ready:
                    key_event = keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.handle_key_event(key_event)
                self.draw()
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._signal_pipe_r)
            os.close(self._signal_pipe_w)
            display.cleanup()
