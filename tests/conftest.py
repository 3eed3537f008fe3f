import pytest

from tinyvi.editor import Editor
from tinyvi.errors import StorageError
from tinyvi.keyboard import KeyEvent, KeyType
from tinyvi.storage import Storage


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class MemoryStorage(Storage):
    """Storage backed by a dict; set fail_with to make saves fail."""

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.fail_with = None
        self.saves = 0

    def load(self, path):
        if path not in self.files:
            raise StorageError(path, f"No such file: {path}")
        return self.files[path].split('\n')

    def save(self, path, lines):
        self.saves += 1
        if self.fail_with:
            raise StorageError(path, self.fail_with)
        self.files[path] = '\n'.join(lines)


def char(c):
    return KeyEvent(key_type=KeyType.REGULAR, value=c, raw=c)


def special(name):
    return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=f'<{name.upper()}>')


def ctrl(letter):
    return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=chr(ord(letter) - ord('a') + 1))


def press(editor, *keys):
    """Feed keys to the editor; strings are typed character by character."""
    for key in keys:
        if isinstance(key, str):
            for c in key:
                editor.handle_key_event(char(c))
        else:
            editor.handle_key_event(key)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def make_editor(clock, storage):
    def _make(lines=None, filename="test.txt"):
        if lines is not None:
            storage.files[filename] = '\n'.join(lines)
        editor = Editor(filename, storage=storage, clock=clock)
        if lines is not None:
            editor.load_file()
        return editor
    return _make
