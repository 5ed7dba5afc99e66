"""Pydantic schemas for the PredictLab API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from predictlab.predictions.types import (
    GoalExpectation,
    HeadToHead,
    Match,
    MatchPrediction,
    ModelOutput,
    Pattern,
    PredictedResult,
    PredictedScore,
    ValueBet,
)


class _FromDomain(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class MatchSchema(_FromDomain):
    home_team: str
    away_team: str
    date: str
    home_score: int = 0
    away_score: int = 0
    ht_home_score: int = 0
    ht_away_score: int = 0
    id: str | None = None

    def to_domain(self) -> Match:
        return Match(**self.model_dump())


class PatternSchema(_FromDomain):
    type: str
    description: str = ""
    confidence: float = 0.0
    data: dict[str, Any] = Field(default_factory=dict)

    def to_domain(self) -> Pattern:
        return Pattern(**self.model_dump())


class ValueBetSchema(_FromDomain):
    match_id: str
    pattern: PatternSchema
    bookmaker: str | None = None
    odds: float | None = None
    stake: float | None = None
    status: str = "pending"
    extra: dict[str, Any] = Field(default_factory=dict)

    def to_domain(self) -> ValueBet:
        return ValueBet(
            match_id=self.match_id,
            pattern=self.pattern.to_domain(),
            bookmaker=self.bookmaker,
            odds=self.odds,
            stake=self.stake,
            status=self.status,
            extra=dict(self.extra),
        )


class PredictedScoreSchema(_FromDomain):
    home: float
    away: float


class HeadToHeadSchema(_FromDomain):
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


class PredictionSchema(_FromDomain):
    match: MatchSchema
    predicted_result: PredictedResult
    confidence_level: float
    predicted_score: PredictedScoreSchema
    patterns: list[PatternSchema] = Field(default_factory=list)
    head_to_head: HeadToHeadSchema
    value_bets: list[ValueBetSchema] | None = None
    htft_analysis: list[Any] = Field(default_factory=list)

    def to_domain(self) -> MatchPrediction:
        return MatchPrediction(
            match=self.match.to_domain(),
            predicted_result=self.predicted_result,
            confidence_level=self.confidence_level,
            predicted_score=PredictedScore(**self.predicted_score.model_dump()),
            patterns=[pattern.to_domain() for pattern in self.patterns],
            head_to_head=HeadToHead(**self.head_to_head.model_dump()),
            value_bets=(
                [bet.to_domain() for bet in self.value_bets] if self.value_bets is not None else None
            ),
            htft_analysis=list(self.htft_analysis),
        )


class GoalExpectationSchema(BaseModel):
    home_goals: float
    away_goals: float


class ModelOutputSchema(BaseModel):
    predicted_winner: str | None = None
    confidence: float
    model_predictions: dict[str, GoalExpectationSchema]
    patterns: list[PatternSchema] = Field(default_factory=list)
    home_expected_goals: float
    away_expected_goals: float

    def to_domain(self) -> ModelOutput:
        return ModelOutput(
            predicted_winner=self.predicted_winner,
            confidence=self.confidence,
            model_predictions={
                name: GoalExpectation(**goals.model_dump())
                for name, goals in self.model_predictions.items()
            },
            patterns=[pattern.to_domain() for pattern in self.patterns],
            home_expected_goals=self.home_expected_goals,
            away_expected_goals=self.away_expected_goals,
        )


class GeneratePredictionRequest(BaseModel):
    home_team: str
    away_team: str


class AdaptPredictionRequest(BaseModel):
    home_team: str
    away_team: str
    model_output: ModelOutputSchema


class SavePredictionResponse(BaseModel):
    created: bool
    prediction: PredictionSchema


class SaveValueBetResponse(BaseModel):
    bet: ValueBetSchema
    attached_to: int


class UpdateValueBetResponse(BaseModel):
    bet: ValueBetSchema
    updated: bool


class RefreshResponse(BaseModel):
    matches: int


class LeagueStatisticsResponse(_FromDomain):
    total_matches: int
    total_goals: int
    avg_goals_per_match: float
    home_win_pct: float
    draw_pct: float
    away_win_pct: float
    btts_pct: float
    over_25_pct: float
    htft_reversals: int
