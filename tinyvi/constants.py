"""Constants and configuration defaults for the tinyvi editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Keyboard timing
    PENDING_KEY_TIMEOUT = 0.3  # Window for the second key of a two-key gesture (seconds)
    MIN_PENDING_KEY_TIMEOUT_MS = 50
    MAX_PENDING_KEY_TIMEOUT_MS = 5000

    # Screen geometry used before a display is attached
    DEFAULT_SCREEN_HEIGHT = 24

    # File operations
    NEW_FILE_MODE = 0o644
    FILE_ENCODING = "utf-8"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    INTERRUPT_PIPE_MARKER = b'C'  # Byte written to pipe on SIGINT

    # Status messages
    INSERT_MODE_MESSAGE = "insert mode"
    FILE_SAVED_MESSAGE = "File saved"
    SAVE_ERROR_MESSAGE = "Error saving file: {}"
    NO_FILE_NAME_MESSAGE = "No file name"
    UNKNOWN_COMMAND_MESSAGE = "unknown command: {}"
    INTERNAL_ERROR_MESSAGE = "Internal error: {}"
    MODIFIED_MARKER = "[+]"
    CONTROL_PLACEHOLDER = "?"

    # CLI
    USAGE = "Usage: tinyvi <file>"
    LOG_FILE_ENV = "TINYVI_LOG_FILE"
