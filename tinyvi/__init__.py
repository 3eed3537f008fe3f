"""tinyvi - A small modal text editor for the terminal."""

from .buffer import LineBuffer
from .cursor import CursorController, CursorPosition
from .modes import Mode

__all__ = [
    'LineBuffer',
    'CursorController',
    'CursorPosition',
    'Mode',
]
