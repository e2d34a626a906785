"""
Notifications - Transient messages for the player.

Provides:
- Notification record with an auto-dismiss directive
- NotificationLog: in-memory sink that also tracks the visible message
"""

from dataclasses import dataclass
from typing import Callable, List, Optional


DEFAULT_DURATION_MS = 2000.0


@dataclass(frozen=True)
class Notification:
    """A message shown to the player for ``duration_ms``."""
    text: str
    created_at_ms: float
    duration_ms: float = DEFAULT_DURATION_MS

    def is_visible(self, now_ms: float) -> bool:
        """Whether the message is still on screen at ``now_ms``."""
        return self.created_at_ms <= now_ms < self.created_at_ms + self.duration_ms


# Any callable receiving a Notification can act as the sink
NotificationSink = Callable[[Notification], None]


class NotificationLog:
    """Records notifications and models the single on-screen slot.

    A newer message replaces the visible one, matching a UI with one
    notification banner.

    Usage:
        log = NotificationLog()
        sim = Simulator(notification_sink=log)
        ...
        banner = log.visible(now_ms)
    """

    def __init__(self, max_history: int = 1000):
        """Initialize log.

        Args:
            max_history: Number of notifications kept in history
        """
        self.max_history = max_history
        self._history: List[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self._history.append(notification)

        # Limit buffer size
        if len(self._history) > self.max_history:
            self._history.pop(0)

    def __len__(self) -> int:
        return len(self._history)

    @property
    def history(self) -> List[Notification]:
        """All recorded notifications, oldest first."""
        return list(self._history)

    @property
    def texts(self) -> List[str]:
        """Text of every recorded notification."""
        return [n.text for n in self._history]

    @property
    def latest(self) -> Optional[Notification]:
        """Most recent notification."""
        return self._history[-1] if self._history else None

    def visible(self, now_ms: float) -> Optional[Notification]:
        """Notification currently on screen, if any."""
        latest = self.latest
        if latest is not None and latest.is_visible(now_ms):
            return latest
        return None

    def count(self, text: str) -> int:
        """Number of times ``text`` was emitted."""
        return sum(1 for n in self._history if n.text == text)

    def clear(self) -> None:
        """Forget all notifications."""
        self._history.clear()

