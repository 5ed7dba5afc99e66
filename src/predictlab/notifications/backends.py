"""Delivery backends for user-facing notifications."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LogBackend:
    """Writes notifications to the application log."""

    def send(self, level: str, message: str) -> None:
        logger.info("[%s] %s", level, message)


class MemoryBackend:
    """Keeps notifications in memory so the UI can poll them."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def send(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def drain(self) -> list[tuple[str, str]]:
        messages, self.messages = self.messages, []
        return messages
