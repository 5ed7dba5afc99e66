"""Session reconciliation tests."""

from __future__ import annotations

import pytest

from predictlab.engine.league_stats import LeagueStatistics
from predictlab.predictions import propagation
from predictlab.predictions.identity import bet_key
from predictlab.predictions.session import PredictionSession
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

DATE = "2024-01-01T00:00:00.000Z"


def _match(home: str = "X", away: str = "Y") -> Match:
    return Match(home_team=home, away_team=away, date=DATE)


def _prediction(
    home: str = "X",
    away: str = "Y",
    match_id: str | None = None,
    confidence: float = 55.0,
) -> MatchPrediction:
    match = _match(home, away)
    match.id = match_id
    return MatchPrediction(
        match=match,
        predicted_result=PredictedResult.HOME_WIN,
        confidence_level=confidence,
        predicted_score=PredictedScore(home=1.6, away=0.9),
        patterns=[],
        head_to_head=HeadToHead(home_team=home, away_team=away),
    )


def _bet(
    match_id: str = f"X-Y-{DATE}",
    pattern_type: str = "btts",
    odds: float = 2.1,
    stake: float | None = None,
) -> ValueBet:
    return ValueBet(
        match_id=match_id,
        pattern=Pattern(type=pattern_type),
        bookmaker="MockBook",
        odds=odds,
        stake=stake,
    )


def test_active_selectors_on_empty_session(session) -> None:
    assert session.active_prediction() is None
    assert session.active_bets() == []


def test_only_new_fixtures_notify(session, memory_backend) -> None:
    assert session.save(_prediction("A", "B")) is True
    assert session.save(_prediction("A", "B", confidence=70.0)) is False
    assert memory_backend.drain() == [("success", "Prediction saved successfully!")]


def test_active_prediction_not_bumped_by_update(session) -> None:
    session.save(_prediction("A", "B"))
    session.save(_prediction("C", "D"))
    session.save(_prediction("A", "B", confidence=80.0))
    active = session.active_prediction()
    assert (active.match.home_team, active.match.away_team) == ("C", "D")


def test_save_value_bet_attaches_to_matching_prediction(session) -> None:
    prediction = _prediction("X", "Y")
    session.save(prediction)
    session.save(_prediction("P", "Q"))
    bet = _bet()
    assert session.save_value_bet(bet) == 1
    assert prediction.value_bets == [bet]
    assert session.active_bets() == []
    assert session.value_bets() == [bet]


def test_save_value_bet_without_predictions_only_stores(session) -> None:
    assert session.save_value_bet(_bet()) == 0
    assert len(session.value_bets()) == 1


def test_value_bets_filtered_by_match(session) -> None:
    ours, theirs = _bet(), _bet(match_id="m2")
    session.save_value_bet(ours)
    session.save_value_bet(theirs)
    assert session.value_bets("m2") == [theirs]
    assert session.value_bets() == [ours, theirs]


def test_attach_reaches_every_resolving_prediction() -> None:
    first, second = _prediction(match_id="m1"), _prediction("Z", "W", match_id="m1")
    bet = _bet(match_id="m1")
    assert propagation.attach([first, second], bet) == 2
    assert first.value_bets == [bet]
    assert second.value_bets == [bet]


def test_bet_saved_before_prediction_is_backfilled(session) -> None:
    bet = _bet(match_id="m9")
    session.save_value_bet(bet)
    prediction = _prediction(match_id="m9")
    session.save(prediction)
    assert session.active_bets() == [bet]


def test_each_key_embedded_once_first_bet_stays_current(session) -> None:
    prediction = _prediction()
    session.save(prediction)
    first = _bet(odds=2.0)
    session.save_value_bet(first)
    session.save_value_bet(_bet(odds=2.4))
    session.save_value_bet(_bet(pattern_type="high_scoring"))
    keys = [bet_key(bet) for bet in prediction.value_bets]
    assert len(keys) == len(set(keys)) == 2
    assert prediction.value_bets[0] is first


def test_backfill_uses_updated_bet_over_later_duplicate(session) -> None:
    session.save_value_bet(_bet(odds=2.0))
    session.save_value_bet(_bet(odds=2.5))
    updated = _bet(odds=3.0)
    session.update_value_bet(updated)
    prediction = _prediction()
    session.save(prediction)
    assert prediction.value_bets == [updated]


def _replay(steps: list[str]) -> list[ValueBet]:
    session = PredictionSession()
    prediction = _prediction()
    events = {
        "add_first": lambda: session.save_value_bet(_bet(odds=2.0)),
        "add_second": lambda: session.save_value_bet(_bet(odds=2.5)),
        "add_other": lambda: session.save_value_bet(_bet(pattern_type="high_scoring", odds=4.0)),
        "update": lambda: session.update_value_bet(_bet(odds=3.0, stake=20.0)),
        "save": lambda: session.save(prediction),
    }
    for step in steps:
        events[step]()
    return sorted(prediction.value_bets or [], key=lambda bet: bet.pattern.type)


@pytest.mark.parametrize(
    "bet_events",
    [
        ["add_first", "add_second", "update"],
        ["add_first", "add_second"],
        ["add_first", "update", "add_second", "add_other"],
        ["add_other", "add_first", "add_second", "update"],
    ],
)
def test_embedded_bets_do_not_depend_on_when_prediction_is_saved(bet_events) -> None:
    saved_first = _replay(["save", *bet_events])
    saved_last = _replay([*bet_events, "save"])
    assert saved_first == saved_last
    assert len({bet_key(bet) for bet in saved_last}) == len(saved_last)


def test_update_keeps_store_and_embedded_copies_coherent(session) -> None:
    prediction = _prediction()
    session.save(prediction)
    session.save_value_bet(_bet(odds=2.0))
    updated = _bet(odds=2.8, stake=10.0)
    assert session.update_value_bet(updated) is True
    assert session.value_bets() == [updated]
    assert prediction.value_bets == [updated]
    assert session.active_bets()[0].stake == 10.0


def test_update_reaches_embedded_copy_without_store_match(session) -> None:
    prediction = _prediction()
    prediction.value_bets = [_bet(odds=2.0)]
    session.prediction_store.save(prediction)
    updated = _bet(odds=3.3)
    assert session.update_value_bet(updated) is False
    assert session.value_bets() == []
    assert prediction.value_bets == [updated]


def test_update_leaves_unrelated_predictions_untouched(session) -> None:
    untouched = _prediction("P", "Q")
    session.save(untouched)
    session.save(_prediction())
    session.save_value_bet(_bet())
    session.update_value_bet(_bet(odds=4.0))
    assert untouched.value_bets is None


def test_generate_prediction_uses_model_and_dataset(session) -> None:
    calls = []

    def model(home, away, matches):
        calls.append((home, away, len(matches)))
        return ModelOutput(
            predicted_winner="away",
            confidence=52.0,
            model_predictions={"poisson": GoalExpectation(home_goals=0.8, away_goals=1.4)},
            patterns=[],
            home_expected_goals=0.8,
            away_expected_goals=1.4,
        )

    session.model = model
    session.refresh([_match("A", "B"), _match("B", "A")])
    prediction = session.generate_prediction("A", "B")
    assert calls == [("A", "B", 2)]
    assert prediction.predicted_result.value == "away_win"
    assert session.generate_prediction("", "B") is None
    assert len(calls) == 1


def test_refresh_keeps_stores() -> None:
    session = PredictionSession(aggregator=lambda matches: LeagueStatistics(total_matches=len(list(matches))))
    session.save(_prediction())
    session.save_value_bet(_bet())
    assert session.refresh([_match()]) == 1
    assert len(session.predictions()) == 1
    assert len(session.value_bets()) == 1
    assert session.league_statistics().total_matches == 1
