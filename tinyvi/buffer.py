"""In-memory line buffer holding the document being edited."""

from typing import Iterable, Optional


class LineBuffer:
    """Ordered sequence of text lines.

    The buffer never holds zero lines: an empty document is a single
    empty line, so ``0 <= row < line_count`` is always satisfiable.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: list[str] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines.append("")

    @classmethod
    def from_text(cls, text: str) -> "LineBuffer":
        """Build a buffer by splitting text on newlines.

        A trailing newline yields a trailing empty line, which is kept so
        that ``to_text`` reproduces the input exactly.
        """
        return cls(text.split('\n'))

    def to_text(self) -> str:
        return '\n'.join(self._lines)

    @property
    def lines(self) -> list[str]:
        """A copy of the lines."""
        return list(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def line(self, row: int) -> str:
        """Return the line at row, or "" when row is out of range."""
        if 0 <= row < len(self._lines):
            return self._lines[row]
        return ""

    def line_length(self, row: int) -> int:
        return len(self.line(row))

    def visible_lines(self, offset: int, count: int) -> list[str]:
        return self._lines[offset:offset + count]

    def insert_char(self, row: int, col: int, char: str) -> None:
        """Insert char at col, appending when col is past the end of line."""
        line = self._lines[row]
        if col > len(line):
            self._lines[row] = line + char
        else:
            self._lines[row] = line[:col] + char + line[col:]

    def delete_char(self, row: int, col: int) -> bool:
        """Delete the character at col.

        Returns:
            True if a character was removed, False at end of line
        """
        line = self._lines[row]
        if 0 <= col < len(line):
            self._lines[row] = line[:col] + line[col + 1:]
            return True
        return False

    def split_line(self, row: int, col: int) -> None:
        """Split a line in two at col; the tail becomes the next line."""
        line = self._lines[row]
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])

    def delete_line(self, row: int) -> str:
        """Remove a line and return it.

        Deleting the only line leaves a single empty line behind.
        """
        removed = self._lines.pop(row)
        if not self._lines:
            self._lines.append("")
        return removed
