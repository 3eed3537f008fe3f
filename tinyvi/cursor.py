"""Cursor position and viewport tracking."""

from dataclasses import dataclass

from .buffer import LineBuffer


@dataclass
class CursorPosition:
    row: int = 0
    column: int = 0


class CursorController:
    """Keeps the cursor inside the buffer and the viewport around the cursor.

    Invariants after every public method:
        0 <= row < line_count
        0 <= column <= len(line at row)
        0 <= offset <= row < offset + height
    """

    def __init__(self, buffer: LineBuffer, height: int):
        self.buffer = buffer
        self.position = CursorPosition()
        self.offset = 0
        self.height = max(1, height)

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def column(self) -> int:
        return self.position.column

    def left(self) -> bool:
        if self.position.column > 0:
            self.position.column -= 1
            return True
        return False

    def right(self) -> bool:
        if self.position.column < self.buffer.line_length(self.position.row):
            self.position.column += 1
            return True
        return False

    def up(self) -> bool:
        if self.position.row > 0:
            self.position.row -= 1
            self._after_vertical_move()
            return True
        return False

    def down(self) -> bool:
        if self.position.row < self.buffer.line_count - 1:
            self.position.row += 1
            self._after_vertical_move()
            return True
        return False

    def move_to(self, row: int, column: int) -> None:
        """Place the cursor, clamping both coordinates to the buffer."""
        self.position.row = row
        self.position.column = column
        self.clamp()

    def clamp(self) -> None:
        """Pull the cursor back inside the buffer after an edit."""
        last_row = self.buffer.line_count - 1
        if self.position.row > last_row:
            self.position.row = last_row
        if self.position.row < 0:
            self.position.row = 0
        line_length = self.buffer.line_length(self.position.row)
        if self.position.column > line_length:
            self.position.column = line_length
        if self.position.column < 0:
            self.position.column = 0
        self.adjust_offset()

    def adjust_offset(self) -> None:
        """Scroll just enough to keep the cursor row on screen."""
        row = self.position.row
        if row < self.offset:
            self.offset = row
        elif row >= self.offset + self.height:
            self.offset = row - self.height + 1

    def resize(self, height: int) -> None:
        self.height = max(1, height)
        self.adjust_offset()

    def screen_position(self) -> tuple[int, int]:
        """Return the cursor's (row, column) relative to the viewport."""
        return (self.position.row - self.offset, self.position.column)

    def _after_vertical_move(self):
        self.adjust_offset()
        line_length = self.buffer.line_length(self.position.row)
        if self.position.column > line_length:
            self.position.column = line_length
