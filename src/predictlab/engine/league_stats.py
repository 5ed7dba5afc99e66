"""League-wide statistics over the current match dataset."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import pandas as pd

from predictlab.engine.frames import matches_dataframe
from predictlab.predictions.types import Match


@dataclass
class LeagueStatistics:
    total_matches: int = 0
    total_goals: int = 0
    avg_goals_per_match: float = 0.0
    home_win_pct: float = 0.0
    draw_pct: float = 0.0
    away_win_pct: float = 0.0
    btts_pct: float = 0.0
    over_25_pct: float = 0.0
    htft_reversals: int = 0


def _result_sign(home: pd.Series, away: pd.Series) -> np.ndarray:
    return np.sign(home.to_numpy() - away.to_numpy())


def calculate_league_statistics(matches: Iterable[Match]) -> LeagueStatistics:
    """Aggregate outcome and goal statistics; an empty dataset yields zeros."""

    df = matches_dataframe(matches)
    if df.empty:
        return LeagueStatistics()

    total = len(df)
    goals = df["home_score"] + df["away_score"]
    full_time = _result_sign(df["home_score"], df["away_score"])
    half_time = _result_sign(df["ht_home_score"], df["ht_away_score"])
    # a reversal is a side leading at half time and losing at full time
    reversals = int(np.sum((half_time != 0) & (full_time == -half_time)))

    return LeagueStatistics(
        total_matches=total,
        total_goals=int(goals.sum()),
        avg_goals_per_match=float(goals.mean()),
        home_win_pct=float(np.mean(full_time > 0) * 100),
        draw_pct=float(np.mean(full_time == 0) * 100),
        away_win_pct=float(np.mean(full_time < 0) * 100),
        btts_pct=float(((df["home_score"] > 0) & (df["away_score"] > 0)).mean() * 100),
        over_25_pct=float((goals > 2.5).mean() * 100),
        htft_reversals=reversals,
    )
