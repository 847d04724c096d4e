from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional

from models.round import Round


def _finite_score(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    return score if math.isfinite(score) else None


def scored_values(event_rounds: Iterable[Round]) -> List[float]:
    """Gross scores of the rounds that have one."""
    values = (_finite_score(r.gross_score) for r in event_rounds)
    return [v for v in values if v is not None]


def rank_for_score(event_rounds: Iterable[Round], target_score: Any) -> Optional[int]:
    """
    Competition rank of a gross score within an event (lower is better).

    Ties share a rank and the next distinct score skips by the size of the tie
    group (1, 1, 3). The rank is one more than the number of scored rounds
    strictly below the target, so it depends only on the score multiset and
    never on submission order.

    Returns None when the target is not a finite number or nobody in the
    event has a score.
    """
    target = _finite_score(target_score)
    if target is None:
        return None

    scores = scored_values(event_rounds)
    if not scores:
        return None

    return sum(1 for s in scores if s < target) + 1


def competition_ranks(event_rounds: Iterable[Round]) -> List[Optional[int]]:
    """Rank of every round in an event, aligned with the input order."""
    rounds = list(event_rounds)
    return [rank_for_score(rounds, r.gross_score) for r in rounds]
