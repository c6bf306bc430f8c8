"""Notification sinks for user-facing outcome messages."""

import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)


class LoggingNotificationSink:
    """Delivers notifications to the log, for headless use from scripts."""

    def success(self, message: str) -> None:
        logger.info(f"[notification] {message}")

    def error(self, message: str) -> None:
        logger.error(f"[notification] {message}")


class RecordingNotificationSink:
    """Keeps every notification in memory in delivery order."""

    def __init__(self):
        self.notifications: List[Tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.notifications.append(("success", message))

    def error(self, message: str) -> None:
        self.notifications.append(("error", message))
