"""Notification sinks — where user-facing booking events go."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from evdock.models.results import Notification

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def notify(self, user_id: int, message: str, value: Optional[float] = None) -> None:
        ...


class LoggingNotifier:
    """Default sink: one INFO line per notification."""

    def notify(self, user_id: int, message: str, value: Optional[float] = None) -> None:
        logger.info(Notification(user_id=user_id, message=message, value=value).render())


class RecordingNotifier:
    """Keeps notifications in memory, e.g. for an API poller or tests."""

    def __init__(self) -> None:
        self.sent: list[Notification] = []

    def notify(self, user_id: int, message: str, value: Optional[float] = None) -> None:
        self.sent.append(Notification(user_id=user_id, message=message, value=value))

    def for_user(self, user_id: int) -> list[Notification]:
        return [n for n in self.sent if n.user_id == user_id]
