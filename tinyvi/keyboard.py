"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw token from the input source

    @property
    def is_printable(self) -> bool:
        """True for a single printable code point (tab included)."""
        if self.key_type != KeyType.REGULAR or len(self.value) != 1:
            return False
        return self.value == '\t' or (ord(self.value) >= 32 and self.value != '\x7f')

    def is_special(self, name: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == name


CTRL_C_EVENT = KeyEvent(key_type=KeyType.CTRL, value='c', raw='\x03')

SPECIAL_KEYS = {'left', 'right', 'up', 'down', 'enter', 'backspace', 'delete',
                'home', 'end', 'page_up', 'page_down', 'insert'}


class KeyboardHandler:
    """Turns tokens read from the terminal into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None when nothing arrived in time."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a key token into a KeyEvent.

        Args:
            key: curtsies key name (e.g. '<UP>', '<Ctrl-c>') or a raw character

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<ESC>'
        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-') if '-' in name else [name]
            mods = set(parts[:-1])
            base = parts[-1]
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=key_str)
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if 'ctrl' in mods and len(base) == 1:
                # Terminals deliver Enter as Ctrl-J / Ctrl-M and Backspace as Ctrl-H
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                if base == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str)
            if base in ('esc', 'escape') and not mods:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
            # Unknown token: keep it special so no mode treats it as text
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + o - 1), raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
