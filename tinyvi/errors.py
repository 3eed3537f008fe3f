"""Exception types raised by tinyvi."""


class TinyviError(Exception):
    """Base class for all tinyvi errors."""


class StorageError(TinyviError):
    """Reading or writing a document failed.

    The original exception (usually an ``OSError`` or
    ``UnicodeDecodeError``) is kept as ``__cause__``.
    """

    def __init__(self, path: str, detail: str):
        super().__init__(detail)
        self.path = path
        self.detail = detail
