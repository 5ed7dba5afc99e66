"""Match identity helpers used to correlate predictions and value bets."""

from __future__ import annotations

from predictlab.predictions.types import BetKey, FixtureKey, Match, MatchPrediction, ValueBet


def fallback_match_id(match: Match) -> str:
    """Composite id used by bets on matches without an explicit identifier."""

    return f"{match.home_team}-{match.away_team}-{match.date}"


def fixture_key(prediction: MatchPrediction) -> FixtureKey:
    return FixtureKey(prediction.match.home_team, prediction.match.away_team)


def bet_key(bet: ValueBet) -> BetKey:
    return BetKey(bet.match_id, bet.pattern.type)


def resolves_to(bet: ValueBet, prediction: MatchPrediction) -> bool:
    """Return True when ``bet`` belongs to the match of ``prediction``.

    An explicit match id wins; otherwise the bet id is compared with the
    fallback composite key. Comparison is exact and case-sensitive.
    """

    match = prediction.match
    if match.id is not None and match.id == bet.match_id:
        return True
    return fallback_match_id(match) == bet.match_id
