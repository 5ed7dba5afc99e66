"""Keep the bets embedded in predictions in step with the value-bet store."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from predictlab.predictions.identity import bet_key, resolves_to
from predictlab.predictions.types import BetKey, MatchPrediction, ValueBet

logger = logging.getLogger(__name__)


def _embed(prediction: MatchPrediction, bet: ValueBet) -> bool:
    """Append ``bet`` unless a bet with the same key is already embedded.

    The first bet per key stays current, as in ``ValueBetStore.update``.
    """

    embedded = prediction.value_bets or []
    key = bet_key(bet)
    if any(bet_key(existing) == key for existing in embedded):
        return False
    prediction.value_bets = [*embedded, bet]
    return True


def attach(predictions: Iterable[MatchPrediction], bet: ValueBet) -> int:
    """Embed a newly added bet into every prediction whose match it resolves to.

    Returns the number of predictions the bet resolved to.
    """

    touched = 0
    for prediction in predictions:
        if resolves_to(bet, prediction):
            _embed(prediction, bet)
            touched += 1
    logger.debug("Attached bet %s to %d prediction(s)", bet_key(bet), touched)
    return touched


def reattach(predictions: Iterable[MatchPrediction], bet: ValueBet) -> int:
    """Swap in an updated bet wherever a bet with the same key is embedded."""

    key = bet_key(bet)
    touched = 0
    for prediction in predictions:
        if not prediction.value_bets:
            continue
        if not any(bet_key(existing) == key for existing in prediction.value_bets):
            continue
        prediction.value_bets = [
            bet if bet_key(existing) == key else existing for existing in prediction.value_bets
        ]
        touched += 1
    logger.debug("Reattached bet %s in %d prediction(s)", key, touched)
    return touched


def backfill(prediction: MatchPrediction, bets: Iterable[ValueBet]) -> int:
    """Embed stored bets that were saved before ``prediction`` existed.

    Only the first stored bet per key is considered; later duplicates are
    the ones ``ValueBetStore.update`` never touches.
    """

    seen: set[BetKey] = set()
    count = 0
    for bet in bets:
        key = bet_key(bet)
        if key in seen:
            continue
        seen.add(key)
        if resolves_to(bet, prediction) and _embed(prediction, bet):
            count += 1
    return count
