"""Tests for mode dispatch and error containment in the editor."""

from unittest.mock import Mock

import pytest

from conftest import press, special
from tinyvi.commands import (CommandModeHandler, InsertModeHandler, ModeDispatcher,
                             NormalModeHandler, default_mode_handlers)
from tinyvi.editor import Editor
from tinyvi.keyboard import KeyType
from tinyvi.modes import Mode


def test_default_handlers_cover_every_mode():
    """Every mode has a handler in the default table."""
    handlers = default_mode_handlers()
    assert set(handlers) == set(Mode)
    assert isinstance(handlers[Mode.NORMAL], NormalModeHandler)
    assert isinstance(handlers[Mode.INSERT], InsertModeHandler)
    assert isinstance(handlers[Mode.COMMAND], CommandModeHandler)


def test_dispatcher_rejects_missing_mode():
    """A handler table missing a mode is refused up front."""
    handlers = default_mode_handlers()
    del handlers[Mode.COMMAND]
    with pytest.raises(ValueError, match="COMMAND"):
        ModeDispatcher(handlers)


def test_mode_labels():
    assert [mode.label for mode in Mode] == ["NORMAL", "INSERT", "COMMAND"]


def test_full_mode_cycle(make_editor):
    """Normal to Insert to Normal to Command and back."""
    editor = make_editor(["abc"])
    assert editor.mode == Mode.NORMAL
    press(editor, "i")
    assert editor.mode == Mode.INSERT
    press(editor, special('escape'), ":")
    assert editor.mode == Mode.COMMAND
    press(editor, special('escape'))
    assert editor.mode == Mode.NORMAL


def test_entering_insert_mode_drops_pending_d(make_editor):
    """Changing mode forgets an armed d."""
    editor = make_editor(["one", "two"])
    press(editor, "d", "i", special('escape'), "d")
    assert editor.buffer.lines == ["one", "two"]


def test_failing_command_is_contained(make_editor):
    """An exception in a command is reported in the status bar."""
    editor = make_editor(["abc"])
    boom = Mock()
    boom.execute.side_effect = RuntimeError("boom")
    editor.dispatcher.handler_for(Mode.NORMAL).register((KeyType.REGULAR, 'z'), boom)
    press(editor, "z")
    assert editor.status_message == "Internal error: boom"
    assert editor.buffer.lines == ["abc"]
    press(editor, "l")
    assert editor.cursor.column == 1


def test_edits_mark_modified_but_moves_do_not(make_editor):
    """Only edits set the modified flag."""
    editor = make_editor(["abc", "def"])
    press(editor, "jlhk", special('right'))
    assert editor.modified is False
    press(editor, "x")
    assert editor.modified is True


def test_load_file_resets_state(make_editor, storage):
    """Loading a file resets the cursor and the modified flag."""
    editor = make_editor(["abc", "def"])
    press(editor, "jlx")
    storage.files["other.txt"] = "x"
    editor.load_file("other.txt")
    assert editor.filename == "other.txt"
    assert editor.buffer.lines == ["x"]
    assert editor.cursor.row == 0 and editor.cursor.column == 0
    assert editor.modified is False


def test_custom_pending_timeout(clock, storage):
    storage.files["f.txt"] = "one\ntwo"
    editor = Editor("f.txt", storage=storage, clock=clock, pending_timeout=1.0)
    editor.load_file()
    press(editor, "d")
    clock.advance(0.8)
    press(editor, "d")
    assert editor.buffer.lines == ["two"]
