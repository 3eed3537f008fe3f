"""Editor modes and the pending-key state of two-key gestures."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Mode(Enum):
    """Active interpretation of keystrokes."""
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    COMMAND = "COMMAND"

    @property
    def label(self) -> str:
        """Name shown in the status bar."""
        return self.value


@dataclass
class PendingKey:
    """First half of a two-key gesture, valid until a deadline.

    Expiry is checked when the next key arrives; nothing clears the
    state in the background.
    """
    key: Optional[str] = None
    deadline: float = 0.0

    def arm(self, key: str, now: float, timeout: float) -> None:
        self.key = key
        self.deadline = now + timeout

    def take(self, now: float) -> Optional[str]:
        """Return the pending key if still live, and clear it either way."""
        key = self.key if self.is_live(now) else None
        self.clear()
        return key

    def is_live(self, now: float) -> bool:
        return self.key is not None and now < self.deadline

    def clear(self) -> None:
        self.key = None
        self.deadline = 0.0
