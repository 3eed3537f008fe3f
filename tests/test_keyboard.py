"""Test keyboard input handling."""

import pytest
from tinyvi.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token,value", [
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<BACKSPACE>', 'backspace'),
    ('<ESC>', 'escape'),
    ('<Ctrl-j>', 'enter'),
    ('<Ctrl-m>', 'enter'),
    ('<Ctrl-h>', 'backspace'),
    ('\r', 'enter'),
    ('\x7f', 'backspace'),
    ('\x1b', 'escape'),
])
def test_special_keys(handler, token, value):
    """curtsies key names map to the special key values."""
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value
    assert event.raw == token


def test_ctrl_c_from_token_and_raw_byte(handler):
    """Ctrl-C parses the same from a curtsies name or a raw byte."""
    for token in ('<Ctrl-c>', '\x03'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.CTRL
        assert event.value == 'c'


def test_named_whitespace_is_printable(handler):
    """Named space and tab tokens become printable characters."""
    space = handler.parse_key('<SPACE>')
    tab = handler.parse_key('<TAB>')
    assert (space.key_type, space.value) == (KeyType.REGULAR, ' ')
    assert (tab.key_type, tab.value) == (KeyType.REGULAR, '\t')
    assert space.is_printable and tab.is_printable


def test_regular_characters(handler):
    for ch in ('a', ':', 'Z', '<', 'é', '中'):
        event = handler.parse_key(ch)
        assert event.key_type == KeyType.REGULAR
        assert event.value == ch
        assert event.is_printable


def test_unknown_token_is_not_printable(handler):
    """Unrecognised key names must not be inserted as text."""
    event = handler.parse_key('<F1>')
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'f1'
    assert not event.is_printable


def test_control_characters_are_not_printable():
    assert not KeyEvent(KeyType.REGULAR, '\x00', '\x00').is_printable
    assert not KeyEvent(KeyType.REGULAR, '\x7f', '\x7f').is_printable
    assert not KeyEvent(KeyType.CTRL, 'c', '\x03').is_printable


def test_get_key_event_reads_from_terminal():
    """Key events come from the terminal's get_key."""
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    assert handler.get_key_event(timeout=0) is None
    terminal.add_key('<UP>')
    terminal.add_key('x')
    assert handler.get_key_event().is_special('up')
    assert handler.get_key_event().value == 'x'
