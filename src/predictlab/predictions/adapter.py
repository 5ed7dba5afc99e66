"""Convert raw model output into the canonical prediction record."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from predictlab.predictions.types import (
    HeadToHead,
    Match,
    MatchPrediction,
    ModelOutput,
    PredictedResult,
    PredictedScore,
)

logger = logging.getLogger(__name__)

_WINNER_MAP = {
    "home": PredictedResult.HOME_WIN,
    "away": PredictedResult.AWAY_WIN,
}


def iso_timestamp(moment: datetime) -> str:
    """Format ``moment`` as a UTC ISO-8601 string with millisecond precision."""

    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def map_winner(predicted_winner: str | None) -> PredictedResult:
    """Anything other than ``home`` or ``away`` is treated as a draw."""

    return _WINNER_MAP.get(predicted_winner or "", PredictedResult.DRAW)


def adapt(
    home_team: str,
    away_team: str,
    model_output: ModelOutput,
    *,
    now: Callable[[], datetime] | None = None,
) -> MatchPrediction | None:
    """Build a prediction for a placeholder fixture from ``model_output``.

    Returns ``None`` when either team name is empty.
    """

    if not home_team or not away_team:
        logger.debug("Cannot adapt prediction without both teams (%r vs %r)", home_team, away_team)
        return None

    match = Match(
        home_team=home_team,
        away_team=away_team,
        date=iso_timestamp((now or _utcnow)()),
    )
    poisson = model_output.model_predictions["poisson"]
    # head-to-head history is not scanned here; only the goal expectation is filled
    head_to_head = HeadToHead(
        home_team=home_team,
        away_team=away_team,
        avg_total_goals=model_output.home_expected_goals + model_output.away_expected_goals,
    )
    return MatchPrediction(
        match=match,
        predicted_result=map_winner(model_output.predicted_winner),
        confidence_level=model_output.confidence,
        predicted_score=PredictedScore(home=poisson.home_goals, away=poisson.away_goals),
        patterns=model_output.patterns,
        head_to_head=head_to_head,
        htft_analysis=[],
    )
