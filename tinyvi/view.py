"""Composition of what the display shows for an editor state."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import EditorConstants
from .modes import Mode

if TYPE_CHECKING:
    from .editor import Editor


@dataclass
class Frame:
    """One full screen of output.

    ``lines`` are the visible document lines, top to bottom; the status
    bar goes on the row below them.
    """
    lines: list[str]
    cursor_y: int
    cursor_x: int
    status: str


def format_status(editor: 'Editor') -> str:
    """Build the status bar text.

    Example: `` notes.txt [+] | INSERT | Ln 3, Col 7  | insert mode``
    """
    name = editor.filename or "[No Name]"
    if editor.modified:
        name = f"{name} {EditorConstants.MODIFIED_MARKER}"
    row, col = editor.cursor.row, editor.cursor.column
    status = f" {name} | {editor.mode.label} | Ln {row + 1}, Col {col + 1} "
    if editor.mode == Mode.COMMAND:
        status += " :" + editor.command_line
    if editor.status_message:
        status += " | " + editor.status_message
    return status


def build_frame(editor: 'Editor') -> Frame:
    cursor = editor.cursor
    cursor_y, cursor_x = cursor.screen_position()
    return Frame(
        lines=editor.buffer.visible_lines(cursor.offset, cursor.height),
        cursor_y=cursor_y,
        cursor_x=cursor_x,
        status=format_status(editor),
    )
