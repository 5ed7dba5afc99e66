"""Notification orchestration."""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from predictlab.config import get_settings
from predictlab.notifications.backends import LogBackend
from predictlab.predictions.types import MatchPrediction

logger = logging.getLogger(__name__)


class Backend(Protocol):
    def send(self, level: str, message: str) -> None: ...


class NotificationService:
    """Send session notifications via multiple channels."""

    def __init__(self, backends: Iterable[Backend] | None = None) -> None:
        self.settings = get_settings()
        self.backends: List[Backend] = list(backends) if backends is not None else [LogBackend()]

    def success(self, message: str) -> None:
        for backend in self.backends:
            try:
                backend.send("success", message)
            except Exception as exc:
                logger.error("Notification backend %r failed: %s", backend, exc)

    def prediction_saved(self, prediction: MatchPrediction) -> None:
        if not self.settings.notify_on_new_prediction:
            return
        logger.info(
            "New prediction saved: %s vs %s",
            prediction.match.home_team,
            prediction.match.away_team,
        )
        self.success(self.settings.success_message)
