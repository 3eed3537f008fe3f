"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
import unicodedata
from abc import ABC, abstractmethod
from typing import Optional

import blessed

from .constants import EditorConstants
from .view import Frame

logger = logging.getLogger(__name__)


def printable(text: str) -> str:
    """Replace control and format characters with a placeholder.

    Each code point still takes one column, so cursor columns computed on
    the document line stay valid on screen.
    """
    return ''.join(
        EditorConstants.CONTROL_PLACEHOLDER if unicodedata.category(ch) in ('Cc', 'Cf') else ch
        for ch in text)


class Display(ABC):
    """Something that can paint a Frame."""

    @abstractmethod
    def render(self, frame: Frame) -> None:
        """Paint a full frame."""

    def invalidate_frame(self) -> None:
        """Force a full repaint on the next render."""

    def setup(self) -> None:
        pass

    def cleanup(self) -> None:
        pass

    @property
    @abstractmethod
    def width(self) -> int:
        """Columns available."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Rows available for document text (excluding status line)."""


class TerminalInterface(Display):
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._needs_clear = True

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        self._needs_clear = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Teardown must still leave fullscreen below
                logger.exception("Could not restore terminal input mode")
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Clear the whole screen before the next frame (e.g. after a resize)."""
        self._needs_clear = True

    def render(self, frame: Frame) -> None:
        """Draw document lines, the status bar and the cursor."""
        width = self.width
        out = []
        if self._needs_clear:
            out.append(self.term.home + self.term.clear)
            self._needs_clear = False

        for y in range(self.height):
            line = frame.lines[y] if y < len(frame.lines) else ""
            out.append(self.term.move(y, 0) + printable(line)[:width].ljust(width))

        status = printable(frame.status)[:width].ljust(width)
        out.append(self.term.move(self.term.height - 1, 0) + self.term.black_on_white(status))

        cursor_x = min(frame.cursor_x, max(0, width - 1))
        out.append(self.term.move(frame.cursor_y, cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name such as '<UP>' or 'a', or None on timeout
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return max(1, self.term.height - 1)
