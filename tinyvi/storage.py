"""Reading and writing documents.

The editor only talks to the abstract :class:`Storage` capability so the
core can be exercised with an in-memory fake; :class:`FileStorage` is the
real backend wired in by the CLI.
"""

import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod

from .buffer import LineBuffer
from .constants import EditorConstants
from .errors import StorageError

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Backing store for a document's lines."""

    @abstractmethod
    def load(self, path: str) -> list[str]:
        """Return the lines stored at path.

        Raises:
            StorageError: if the document cannot be read
        """

    @abstractmethod
    def save(self, path: str, lines: list[str]) -> None:
        """Replace the document at path with lines.

        Raises:
            StorageError: if the document cannot be written
        """


class FileStorage(Storage):
    """Plain UTF-8 text files, one line per ``\\n``-separated segment."""

    def __init__(self, encoding: str = EditorConstants.FILE_ENCODING):
        self.encoding = encoding

    def load(self, path: str) -> list[str]:
        if not path:
            raise StorageError(path, EditorConstants.NO_FILE_NAME_MESSAGE)
        try:
            # newline='' keeps '\r' so a load/save round trip is byte-exact
            with open(path, 'r', encoding=self.encoding, newline='') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(path, str(e)) from e
        lines = LineBuffer.from_text(content).lines
        logger.info("Loaded %s (%d lines)", path, len(lines))
        return lines

    def save(self, path: str, lines: list[str]) -> None:
        """Write lines atomically.

        The content goes to a temporary file in the target's directory,
        which is then renamed over the target. A symlinked path is resolved
        first so the link keeps pointing at the updated file. The target
        keeps its permission bits; new files get ``NEW_FILE_MODE``.
        """
        content = LineBuffer(lines).to_text()
        if not path:
            raise StorageError(path, EditorConstants.NO_FILE_NAME_MESSAGE)
        temp_filename = None
        try:
            target = os.path.realpath(path)
            dir_name = os.path.dirname(target)
            mode = self._target_mode(target)
            with tempfile.NamedTemporaryFile(mode='w', encoding=self.encoding,
                                             newline='', dir=dir_name,
                                             prefix='.', suffix='.tmp',
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.chmod(temp_filename, mode)
            os.replace(temp_filename, target)
        except (OSError, UnicodeEncodeError) as e:
            if temp_filename is not None:
                self._discard(temp_filename)
            logger.warning("Could not save %s: %s", path, e)
            raise StorageError(path, str(e)) from e
        logger.info("Saved %s (%d lines)", path, len(lines))

    @staticmethod
    def _target_mode(path: str) -> int:
        try:
            return stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            return EditorConstants.NEW_FILE_MODE

    @staticmethod
    def _discard(temp_filename: str) -> None:
        try:
            os.remove(temp_filename)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temporary file %s: %s", temp_filename, e)
