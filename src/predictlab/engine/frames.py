"""DataFrame helpers shared by the model and the statistics aggregator."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from predictlab.predictions.types import Match

MATCH_COLUMNS = [
    "date",
    "home_team",
    "away_team",
    "home_score",
    "away_score",
    "ht_home_score",
    "ht_away_score",
]


def matches_dataframe(matches: Iterable[Match]) -> pd.DataFrame:
    rows = [
        {
            "date": match.date,
            "home_team": match.home_team,
            "away_team": match.away_team,
            "home_score": match.home_score,
            "away_score": match.away_score,
            "ht_home_score": match.ht_home_score,
            "ht_away_score": match.ht_away_score,
        }
        for match in matches
    ]
    return pd.DataFrame(rows, columns=MATCH_COLUMNS)
