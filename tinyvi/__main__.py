"""tinyvi CLI entry point.

Allows running via `python -m tinyvi FILE` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .constants import EditorConstants
from .settings import Settings, load_settings
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(settings: Settings) -> None:
    """Send log records to the configured file, or nowhere.

    The terminal is in fullscreen mode while editing, so records never go
    to stderr. Calling this again replaces the previous handler. A log
    file that cannot be opened is reported once and then ignored.
    """
    root = logging.getLogger("tinyvi")
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(settings.log_level)
    root.propagate = False

    handler: logging.Handler = logging.NullHandler()
    problem = None
    if settings.log_file:
        try:
            handler = logging.FileHandler(settings.log_file, encoding='utf-8')
        except OSError as e:
            problem = e
        else:
            handler.setFormatter(logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    if problem is not None:
        # Still before fullscreen, so stderr is visible
        print(f"Warning: cannot open log file {settings.log_file}: {problem}",
              file=sys.stderr)


def run_keyboard_test() -> None:
    """Echo parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.is_special('escape'):
                break
            print(f"type={ev.key_type.value} value={_escape_bytes(ev.value)} raw='{_escape_bytes(ev.raw)}'\r")
    finally:
        term.cleanup()
    print("Exiting keyboard test.")


def main(argv: Optional[list[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return
    if len(args) != 1:
        print(EditorConstants.USAGE)
        sys.exit(1)

    settings = load_settings()
    configure_logging(settings)
    logger = logging.getLogger(__name__)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .errors import StorageError
    from .terminal import TerminalInterface

    try:
        display = TerminalInterface()
    except Exception as e:
        print(f"Error creating editor: {e}")
        sys.exit(1)

    editor = Editor(args[0], display=display,
                    pending_timeout=settings.pending_key_timeout)
    try:
        editor.load_file()
    except StorageError as e:
        print(f"Error loading file: {e.detail}")
        sys.exit(1)

    logger.info("Editing %s", args[0])
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
