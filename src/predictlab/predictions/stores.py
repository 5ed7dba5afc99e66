"""In-memory stores for saved predictions and value bets."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from predictlab.predictions.identity import bet_key, fixture_key
from predictlab.predictions.types import FixtureKey, MatchPrediction, ValueBet

logger = logging.getLogger(__name__)


class PredictionStore:
    """Ordered predictions, at most one per fixture (team-name pair)."""

    def __init__(self) -> None:
        self._records: list[MatchPrediction] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MatchPrediction]:
        return iter(self._records)

    def records(self) -> list[MatchPrediction]:
        return list(self._records)

    def find(self, key: FixtureKey) -> int | None:
        for idx, record in enumerate(self._records):
            if fixture_key(record) == key:
                return idx
        return None

    def save(self, prediction: MatchPrediction) -> bool:
        """Upsert ``prediction``; return True only when a new record was appended.

        A replacement keeps the position of the record it replaces.
        """

        key = fixture_key(prediction)
        idx = self.find(key)
        if idx is not None:
            self._records[idx] = prediction
            logger.debug("Replaced prediction for %s vs %s at %d", key.home_team, key.away_team, idx)
            return False
        self._records.append(prediction)
        return True

    def last(self) -> MatchPrediction | None:
        return self._records[-1] if self._records else None


class ValueBetStore:
    """Append-only ordered value bets with in-place update by (match id, pattern type)."""

    def __init__(self) -> None:
        self._bets: list[ValueBet] = []

    def __len__(self) -> int:
        return len(self._bets)

    def __iter__(self) -> Iterator[ValueBet]:
        return iter(self._bets)

    def records(self) -> list[ValueBet]:
        return list(self._bets)

    def for_match(self, match_id: str) -> list[ValueBet]:
        return [bet for bet in self._bets if bet.match_id == match_id]

    def add(self, bet: ValueBet) -> None:
        self._bets.append(bet)

    def update(self, bet: ValueBet) -> bool:
        """Replace the first bet sharing ``bet``'s key. Missing keys are not inserted."""

        key = bet_key(bet)
        for idx, existing in enumerate(self._bets):
            if bet_key(existing) == key:
                self._bets[idx] = bet
                return True
        logger.debug("No value bet to update for %s / %s", key.match_id, key.pattern_type)
        return False
