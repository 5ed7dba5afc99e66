"""Dataclasses for matches, predictions and value bets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class PredictedResult(str, Enum):
    HOME_WIN = "home_win"
    DRAW = "draw"
    AWAY_WIN = "away_win"


@dataclass
class Match:
    home_team: str
    away_team: str
    date: str
    home_score: int = 0
    away_score: int = 0
    ht_home_score: int = 0
    ht_away_score: int = 0
    id: str | None = None


@dataclass
class Pattern:
    """A detected statistical signal; only ``type`` is interpreted."""

    type: str
    description: str = ""
    confidence: float = 0.0
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class PredictedScore:
    home: float
    away: float


@dataclass
class HeadToHead:
    home_team: str
    away_team: str
    total_matches: int = 0
    home_wins: int = 0
    draws: int = 0
    away_wins: int = 0
    home_goals: int = 0
    away_goals: int = 0
    both_teams_scored: int = 0
    avg_total_goals: float = 0.0
    htft_reversals: int = 0


@dataclass
class ValueBet:
    match_id: str
    pattern: Pattern
    bookmaker: str | None = None
    odds: float | None = None
    stake: float | None = None
    status: str = "pending"
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class MatchPrediction:
    match: Match
    predicted_result: PredictedResult
    confidence_level: float
    predicted_score: PredictedScore
    patterns: List[Any]
    head_to_head: HeadToHead
    value_bets: Optional[List[ValueBet]] = None
    htft_analysis: List[Any] = field(default_factory=list)


@dataclass
class GoalExpectation:
    home_goals: float
    away_goals: float


@dataclass
class ModelOutput:
    """Raw output of a prediction model, before adaptation."""

    predicted_winner: str | None
    confidence: float
    model_predictions: dict[str, GoalExpectation]
    patterns: List[Pattern]
    home_expected_goals: float
    away_expected_goals: float


@dataclass(frozen=True)
class FixtureKey:
    """Prediction identity: the team-name pair, ignoring the match date."""

    home_team: str
    away_team: str


@dataclass(frozen=True)
class BetKey:
    """Value-bet identity: match id plus pattern type."""

    match_id: str
    pattern_type: str
