"""Badge and trophy triggers for a submitted round."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence

from models.award import Award, AwardSet, AwardTier
from models.round import Round

logger = logging.getLogger(__name__)


class AwardRule(NamedTuple):
    award: Award
    applies: Callable[[Round, bool], bool]


def _award(key: str, title: str, description: str, icon: str, tier: AwardTier) -> Award:
    return Award(key=key, title=title, description=description, icon=icon, tier=tier)


def _scored_below(limit: int) -> Callable[[Round, bool], bool]:
    return lambda r, first: r.gross_score is not None and r.gross_score < limit


# Order matters only for display; every rule is evaluated independently.
AWARD_RULES: List[AwardRule] = [
    AwardRule(
        _award("badge_first_round", "First Round", "Submitted your first round.", "🏁", AwardTier.BADGE),
        lambda r, first: first,
    ),
    AwardRule(
        _award("badge_first_birdie", "First Birdie", "Logged a birdie in a submitted round.", "🐦", AwardTier.BADGE),
        lambda r, first: r.birdies > 0,
    ),
    AwardRule(
        _award("trophy_eagle_club", "Eagle Club", "Logged an eagle in a submitted round.", "🦅", AwardTier.TROPHY),
        lambda r, first: r.eagles > 0,
    ),
    AwardRule(
        _award("trophy_hole_in_one", "Hole in One", "Aces are forever.", "⛳️", AwardTier.TROPHY),
        lambda r, first: r.hole_in_ones > 0,
    ),
    AwardRule(
        _award("badge_break_90", "Break 90", "Shot under 90.", "🔥", AwardTier.BADGE),
        _scored_below(90),
    ),
    AwardRule(
        _award("trophy_break_80", "Break 80", "That's a proper score.", "🏆", AwardTier.TROPHY),
        _scored_below(80),
    ),
    AwardRule(
        _award("trophy_par_or_better", "Par or Better", "Finished level par or better.", "⭐️", AwardTier.TROPHY),
        lambda r, first: r.to_par() is not None and r.to_par() <= 0,
    ),
    AwardRule(
        _award("trophy_birdie_fest", "Birdie Fest", "5+ birdies in one round.", "🎉", AwardTier.TROPHY),
        lambda r, first: r.birdies >= 5,
    ),
    AwardRule(
        _award("badge_major_day", "Major Day", "Submitted a Major round.", "🏟️", AwardTier.BADGE),
        lambda r, first: r.is_major,
    ),
]

AWARDS_BY_KEY = {rule.award.key: rule.award for rule in AWARD_RULES}


def evaluate_awards(round_obj: Round, prior_rounds_for_player: Sequence[Round]) -> AwardSet:
    """Awards this round qualifies for, given the player's earlier rounds."""
    first_round = len(prior_rounds_for_player) == 0
    result = AwardSet()
    seen = set()

    for rule in AWARD_RULES:
        award = rule.award
        if award.key in seen or not rule.applies(round_obj, first_round):
            continue
        seen.add(award.key)
        if award.tier == AwardTier.BADGE:
            result.badges.append(award)
        else:
            result.trophies.append(award)

    logger.debug("Round %s triggers awards: %s", round_obj.id, result.keys())
    return result


def grant_awards(
    existing: Iterable[Award],
    awards: Iterable[Award],
    earned_at: datetime,
    round_id: Optional[str] = None,
) -> List[Award]:
    """
    Merge newly earned awards into a player's award list.

    Idempotent by key: an award the player already holds is left untouched,
    keeping its original earned_at. New awards go to the front (newest first).
    """
    merged = list(existing)
    held = {a.key for a in merged}
    for award in awards:
        if award.key in held:
            continue
        held.add(award.key)
        merged.insert(0, award.model_copy(update={"earned_at": earned_at, "round_id": round_id}))
    return merged


def newly_granted(existing: Iterable[Award], awards: Iterable[Award]) -> List[Award]:
    """The subset of ``awards`` whose keys the player does not hold yet."""
    held = {a.key for a in existing}
    fresh = []
    for award in awards:
        if award.key not in held:
            held.add(award.key)
            fresh.append(award)
    return fresh
