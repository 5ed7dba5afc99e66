"""Shared fixtures."""

from __future__ import annotations

import pytest

from predictlab.notifications.backends import MemoryBackend
from predictlab.notifications.service import NotificationService
from predictlab.predictions.session import PredictionSession


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def session(memory_backend: MemoryBackend) -> PredictionSession:
    return PredictionSession(notifications=NotificationService([memory_backend]))
