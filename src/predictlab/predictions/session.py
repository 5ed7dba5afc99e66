"""Prediction session: owns the stores and runs every mutation with its propagation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from predictlab.engine.league_stats import LeagueStatistics, calculate_league_statistics
from predictlab.engine.poisson import run_prediction
from predictlab.notifications.service import NotificationService
from predictlab.predictions import propagation, selectors
from predictlab.predictions.adapter import adapt
from predictlab.predictions.stores import PredictionStore, ValueBetStore
from predictlab.predictions.types import Match, MatchPrediction, ModelOutput, ValueBet

logger = logging.getLogger(__name__)

PredictionModel = Callable[[str, str, Sequence[Match]], ModelOutput]
StatisticsAggregator = Callable[[Iterable[Match]], LeagueStatistics]


class PredictionSession:
    """State of one dashboard session.

    Each public mutation applies its store change and the matching
    propagation step before returning, so no other call observes a
    half-propagated bet.
    """

    def __init__(
        self,
        matches: Iterable[Match] | None = None,
        model: PredictionModel | None = None,
        aggregator: StatisticsAggregator | None = None,
        notifications: NotificationService | None = None,
    ) -> None:
        self.matches: list[Match] = list(matches or [])
        self.model = model or run_prediction
        self.aggregator = aggregator or calculate_league_statistics
        self.notifications = notifications or NotificationService()
        self.prediction_store = PredictionStore()
        self.value_bet_store = ValueBetStore()

    # predictions

    def save(self, prediction: MatchPrediction) -> bool:
        """Upsert a prediction; returns True when it is a new fixture."""

        created = self.prediction_store.save(prediction)
        propagation.backfill(prediction, self.value_bet_store)
        if created:
            self.notifications.prediction_saved(prediction)
        return created

    def adapt(self, home_team: str, away_team: str, model_output: ModelOutput) -> MatchPrediction | None:
        return adapt(home_team, away_team, model_output)

    def generate_prediction(self, home_team: str, away_team: str) -> MatchPrediction | None:
        if not home_team or not away_team:
            return None
        output = self.model(home_team, away_team, self.matches)
        return self.adapt(home_team, away_team, output)

    def predictions(self) -> list[MatchPrediction]:
        return self.prediction_store.records()

    def active_prediction(self) -> MatchPrediction | None:
        return selectors.active_prediction(self.prediction_store)

    def active_bets(self) -> list[ValueBet]:
        return selectors.active_bets(self.prediction_store)

    # value bets

    def save_value_bet(self, bet: ValueBet) -> int:
        """Store a new bet and embed it in matching predictions."""

        self.value_bet_store.add(bet)
        if not len(self.prediction_store):
            return 0
        return propagation.attach(self.prediction_store, bet)

    def update_value_bet(self, bet: ValueBet) -> bool:
        """Replace a stored bet by key and refresh embedded copies.

        Returns whether the top-level store held the key; embedded copies
        are refreshed either way.
        """

        replaced = self.value_bet_store.update(bet)
        propagation.reattach(self.prediction_store, bet)
        return replaced

    def value_bets(self, match_id: str | None = None) -> list[ValueBet]:
        if match_id is None:
            return self.value_bet_store.records()
        return self.value_bet_store.for_match(match_id)

    # match data

    def refresh(self, matches: Iterable[Match]) -> int:
        """Swap the match dataset; saved predictions and bets are kept."""

        self.matches = list(matches)
        logger.info("Match dataset refreshed with %d matches", len(self.matches))
        return len(self.matches)

    def league_statistics(self) -> LeagueStatistics:
        return self.aggregator(self.matches)
