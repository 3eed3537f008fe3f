"""Tests for the dd gesture and its pending-key window."""

from conftest import char, press, special
from tinyvi.cursor import CursorPosition
from tinyvi.modes import PendingKey


def test_dd_deletes_current_line(make_editor):
    """Test that dd removes the line under the cursor."""
    editor = make_editor(["one", "two", "three"])
    press(editor, "j", "dd")
    assert editor.buffer.lines == ["one", "three"]
    assert editor.cursor.row == 1
    assert editor.modified is True


def test_single_d_deletes_nothing(make_editor):
    """A lone d only arms the gesture."""
    editor = make_editor(["one", "two"])
    press(editor, "d")
    assert editor.buffer.lines == ["one", "two"]
    assert editor.pending_key.key == 'd'


def test_dd_on_last_line_moves_cursor_up(make_editor):
    """Deleting the last line moves the cursor onto the new last line."""
    editor = make_editor(["one", "two", "three"])
    press(editor, "jj", "ll", "dd")
    assert editor.buffer.lines == ["one", "two"]
    assert editor.cursor.position == CursorPosition(1, 2)


def test_dd_clamps_column_to_new_line(make_editor):
    """The column is clamped to the line that moves under the cursor."""
    editor = make_editor(["a much longer line", "short"])
    press(editor, "llllllll", "dd")
    assert editor.buffer.lines == ["short"]
    assert editor.cursor.position == CursorPosition(0, 5)


def test_dd_on_only_line_leaves_one_empty_line(make_editor):
    """Deleting the only line leaves one empty line behind."""
    editor = make_editor(["only"])
    press(editor, "dd")
    assert editor.buffer.lines == [""]
    assert editor.cursor.position == CursorPosition(0, 0)
    press(editor, "dd", "dd")
    assert editor.buffer.lines == [""]


def test_dd_twice_removes_two_lines(make_editor):
    editor = make_editor(["1", "2", "3", "4"])
    press(editor, "dddd")
    assert editor.buffer.lines == ["3", "4"]


def test_second_d_after_timeout_starts_new_gesture(make_editor, clock):
    """A d arriving after the window arms a new gesture instead of deleting."""
    editor = make_editor(["one", "two", "three"])
    press(editor, "d")
    clock.advance(0.5)
    press(editor, "d")
    assert editor.buffer.lines == ["one", "two", "three"]
    # The late d armed a fresh gesture
    clock.advance(0.1)
    press(editor, "d")
    assert editor.buffer.lines == ["two", "three"]


def test_second_d_just_inside_window(make_editor, clock):
    """A d arriving just before the deadline still completes dd."""
    editor = make_editor(["one", "two"])
    press(editor, "d")
    clock.advance(0.299)
    press(editor, "d")
    assert editor.buffer.lines == ["two"]


def test_other_key_cancels_pending_d(make_editor):
    """Any other key between the two d presses cancels the gesture."""
    editor = make_editor(["one", "two", "three"])
    press(editor, "d", "l", "d")
    assert editor.buffer.lines == ["one", "two", "three"]
    assert editor.cursor.column == 1
    press(editor, "d")
    assert editor.buffer.lines == ["two", "three"]


def test_special_key_cancels_pending_d(make_editor):
    editor = make_editor(["one", "two"])
    press(editor, "d", special('down'), "d")
    assert editor.buffer.lines == ["one", "two"]
    assert editor.cursor.row == 1


def test_dd_scrolls_viewport_back_on_screen(make_editor):
    """Deleting near the end keeps the cursor row within the viewport."""
    editor = make_editor([str(i) for i in range(30)])
    editor.handle_resize(5)
    editor.cursor.move_to(29, 0)
    assert editor.cursor.offset == 25
    press(editor, "dd")
    assert editor.cursor.row == 28
    assert editor.cursor.offset <= 28 < editor.cursor.offset + 5


def test_pending_key_expires_without_background_timer():
    """Expiry is decided when the next key is taken, not by a timer."""
    pending = PendingKey()
    pending.arm('d', now=10.0, timeout=0.3)
    assert pending.is_live(10.2)
    assert not pending.is_live(10.3)
    assert pending.take(10.5) is None
    pending.arm('d', now=10.0, timeout=0.3)
    assert pending.take(10.1) == 'd'
    assert pending.key is None
