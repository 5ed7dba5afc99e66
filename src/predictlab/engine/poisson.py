"""Default Poisson prediction model."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd
from scipy import stats

from predictlab.config import get_settings
from predictlab.engine.frames import matches_dataframe
from predictlab.predictions.types import GoalExpectation, Match, ModelOutput, Pattern

settings = get_settings()

BASE_HOME_GOALS = 1.35
BASE_AWAY_GOALS = 1.15
MIN_EXPECTED_GOALS = 0.05


def poisson_pmf(lam: float, max_goals: int) -> np.ndarray:
    return stats.poisson.pmf(np.arange(max_goals + 1), lam)


def score_matrix(home_xg: float, away_xg: float, max_goals: int) -> np.ndarray:
    """Joint probability of each scoreline, home goals on rows."""

    return np.outer(poisson_pmf(home_xg, max_goals), poisson_pmf(away_xg, max_goals))


def outcome_probabilities(matrix: np.ndarray) -> dict[str, float]:
    return {
        "home": float(np.tril(matrix, -1).sum()),
        "draw": float(np.trace(matrix)),
        "away": float(np.triu(matrix, 1).sum()),
    }


def _strength(series: pd.Series, league_avg: float) -> float:
    if series.empty or league_avg <= 0:
        return 1.0
    return float(series.mean() / league_avg)


def expected_goals(df: pd.DataFrame, home_team: str, away_team: str) -> tuple[float, float]:
    if df.empty:
        return BASE_HOME_GOALS * settings.home_advantage, BASE_AWAY_GOALS

    league_home = float(df["home_score"].mean())
    league_away = float(df["away_score"].mean())
    home_rows = df[df["home_team"] == home_team]
    away_rows = df[df["away_team"] == away_team]

    home_attack = _strength(home_rows["home_score"], league_home)
    home_defence = _strength(home_rows["away_score"], league_away)
    away_attack = _strength(away_rows["away_score"], league_away)
    away_defence = _strength(away_rows["home_score"], league_home)

    home_xg = league_home * home_attack * away_defence
    away_xg = league_away * away_attack * home_defence
    return max(home_xg, MIN_EXPECTED_GOALS), max(away_xg, MIN_EXPECTED_GOALS)


def detect_patterns(
    df: pd.DataFrame,
    home_team: str,
    away_team: str,
    home_xg: float,
    away_xg: float,
) -> list[Pattern]:
    patterns: list[Pattern] = []
    total_xg = home_xg + away_xg
    if total_xg > settings.high_scoring_threshold:
        patterns.append(
            Pattern(
                type="high_scoring",
                description=f"Expected {total_xg:.2f} goals",
                confidence=min(total_xg / (settings.high_scoring_threshold * 2), 1.0),
            )
        )
    elif total_xg < settings.high_scoring_threshold - 0.5:
        patterns.append(Pattern(type="low_scoring", description=f"Expected {total_xg:.2f} goals"))

    btts = (1 - np.exp(-home_xg)) * (1 - np.exp(-away_xg))
    if btts > 0.5:
        patterns.append(
            Pattern(type="btts", description="Both teams likely to score", confidence=float(btts))
        )

    if df.empty:
        return patterns
    home_rows = df[df["home_team"] == home_team]
    if len(home_rows) >= 3:
        win_rate = float((home_rows["home_score"] > home_rows["away_score"]).mean())
        if win_rate >= 0.6:
            patterns.append(
                Pattern(
                    type="home_dominance",
                    description=f"{home_team} win {win_rate:.0%} at home",
                    confidence=win_rate,
                    data={"matches": len(home_rows)},
                )
            )
    away_rows = df[df["away_team"] == away_team]
    if len(away_rows) >= 3:
        unbeaten = float((away_rows["away_score"] >= away_rows["home_score"]).mean())
        if unbeaten >= 0.6:
            patterns.append(
                Pattern(
                    type="away_form",
                    description=f"{away_team} unbeaten in {unbeaten:.0%} of away games",
                    confidence=unbeaten,
                    data={"matches": len(away_rows)},
                )
            )
    return patterns


def run_prediction(home_team: str, away_team: str, matches: Sequence[Match]) -> ModelOutput:
    """Predict a fixture from historical matches with an independent Poisson model."""

    df = matches_dataframe(matches)
    home_xg, away_xg = expected_goals(df, home_team, away_team)
    probs = outcome_probabilities(score_matrix(home_xg, away_xg, settings.max_goals))
    winner = max(probs, key=probs.get)
    return ModelOutput(
        predicted_winner=winner,
        confidence=round(probs[winner] * 100, 1),
        model_predictions={
            "poisson": GoalExpectation(home_goals=round(home_xg, 2), away_goals=round(away_xg, 2))
        },
        patterns=detect_patterns(df, home_team, away_team, home_xg, away_xg),
        home_expected_goals=home_xg,
        away_expected_goals=away_xg,
    )
