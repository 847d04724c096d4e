"""Re-derive rank and points for every round of an event.

A round submitted first must not keep a rank that a later, better score has
taken from it, so whenever an event's round set changes the whole event is
re-scored against the updated set of scores.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from models.points_system import resolve_points_system
from models.round import Round

from .events import group_by_event, round_event_key
from .points import score_round
from .ranking import rank_for_score

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class DuplicateRoundPolicy(str, Enum):
    """How several rounds by one player in the same event are ranked."""
    KEEP_ALL = "keep_all"  # every round is an independent entry
    BEST = "best"          # only the player's lowest gross score counts
    LATEST = "latest"      # only the player's most recent round counts

    @classmethod
    def parse(cls, value: Any, default: Optional["DuplicateRoundPolicy"] = None) -> "DuplicateRoundPolicy":
        """Policy from a config value; unknown values fall back to ``default`` (KEEP_ALL)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.KEEP_ALL


def _timestamp(round_obj: Round) -> datetime:
    created = round_obj.created_at
    if created is None:
        return _OLDEST
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


def counted_positions(
    event_rounds: Sequence[Round],
    policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
) -> Set[int]:
    """Positions (within ``event_rounds``) of the rounds that take part in ranking."""
    if policy == DuplicateRoundPolicy.KEEP_ALL:
        return set(range(len(event_rounds)))

    chosen: Dict[Any, int] = {}
    for position, round_obj in enumerate(event_rounds):
        # Rounds without a player can't be duplicates of anyone
        player = round_obj.player_id if round_obj.player_id is not None else ("anonymous", position)
        current = chosen.get(player)
        if current is None:
            chosen[player] = position
            continue

        incumbent = event_rounds[current]
        if policy == DuplicateRoundPolicy.BEST:
            if incumbent.gross_score is None or (
                round_obj.gross_score is not None and round_obj.gross_score < incumbent.gross_score
            ):
                chosen[player] = position
        elif _timestamp(round_obj) >= _timestamp(incumbent):
            chosen[player] = position

    return set(chosen.values())


def _rescore(round_obj: Round, rank: Optional[int], points_system: Any, superseded: bool) -> Round:
    total, breakdown = score_round(round_obj, rank, points_system)
    if superseded:
        total = 0
        breakdown = breakdown.model_copy(update={"superseded": True, "rank": None})
    return round_obj.with_updates(rank=rank, points=total, points_breakdown=breakdown)


def score_event(
    event_rounds: Sequence[Round],
    points_system: Any,
    policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
) -> List[Round]:
    """Rescored copies of an event's rounds, aligned with the input order."""
    system = resolve_points_system(points_system)
    counted = counted_positions(event_rounds, policy)
    ranked = [r for i, r in enumerate(event_rounds) if i in counted]

    rescored = []
    for position, round_obj in enumerate(event_rounds):
        if position in counted:
            rank = rank_for_score(ranked, round_obj.gross_score)
            rescored.append(_rescore(round_obj, rank, system, superseded=False))
        else:
            rescored.append(_rescore(round_obj, None, system, superseded=True))
    return rescored


def _replace_members(all_rounds: List[Round], key: str, points_system: Any, policy) -> List[Round]:
    positions = [i for i, r in enumerate(all_rounds) if round_event_key(r) == key]
    if not positions:
        return list(all_rounds)

    rescored = score_event([all_rounds[i] for i in positions], points_system, policy)
    updated = list(all_rounds)
    for position, round_obj in zip(positions, rescored):
        updated[position] = round_obj
    return updated


def recompute_event(
    all_rounds: Iterable[Round],
    changed_round: Round,
    points_system: Any,
    policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
) -> List[Round]:
    """
    Rescore every round sharing ``changed_round``'s event.

    Returns the full collection in its original order. Members of the event
    are replaced by rescored copies; every other round is returned as the very
    same object. Running it again on its own output changes nothing.
    """
    rounds = list(all_rounds)
    key = round_event_key(changed_round)
    updated = _replace_members(rounds, key, points_system, policy)
    logger.debug("Recomputed event %s (%d rounds total)", key, len(rounds))
    return updated


def recompute_league(
    all_rounds: Iterable[Round],
    league_id: Optional[str],
    points_system: Any,
    policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
) -> List[Round]:
    """Rescore every event of one league, e.g. after its points system changed."""
    rounds = list(all_rounds)
    keys = [
        key for key, members in group_by_event(rounds).items()
        if members[0].league_id == league_id
    ]
    for key in keys:
        rounds = _replace_members(rounds, key, points_system, policy)
    logger.info("Rescored %d events for league %s", len(keys), league_id)
    return rounds
