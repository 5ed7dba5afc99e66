"""Derived views over the prediction store."""

from __future__ import annotations

from predictlab.predictions.stores import PredictionStore
from predictlab.predictions.types import MatchPrediction, ValueBet


def active_prediction(store: PredictionStore) -> MatchPrediction | None:
    """The most recently appended prediction; updates do not move a record."""

    return store.last()


def active_bets(store: PredictionStore) -> list[ValueBet]:
    prediction = active_prediction(store)
    if prediction is None:
        return []
    return list(prediction.value_bets or [])
