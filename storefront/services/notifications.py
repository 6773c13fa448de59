"""
User-facing notification sinks.

The cart store fires one-shot error messages at a sink; how they are shown
(toast, banner, log line) is up to the UI that owns the sink.
"""
from dataclasses import dataclass
from typing import List, Protocol, Tuple

from storefront.logging import get_logger

logger = get_logger(__name__)


class NotificationSink(Protocol):
    """Fire-and-forget receiver of user-visible messages."""

    def error(self, message: str) -> None:
        ...


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


class NotificationQueue:
    """In-memory sink drained by the UI loop."""

    def __init__(self):
        self._pending: List[Notification] = []

    def error(self, message: str) -> None:
        self._pending.append(Notification(level="error", message=message))

    @property
    def pending(self) -> Tuple[Notification, ...]:
        return tuple(self._pending)

    def drain(self) -> List[Notification]:
        """Return pending notifications and forget them."""
        drained, self._pending = self._pending, []
        return drained


class LogNotifier:
    """Sink that only writes messages to the log."""

    def error(self, message: str) -> None:
        logger.warning("User notification: %s", message)
