"""Preview and submit a round: the flow that ties the engine together.

Everything here is a pure function of the round collection it is handed. The
caller persists ``SubmissionResult.rounds`` and the award delta in one write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional
from uuid import uuid4

from models.award import Award, AwardSet
from models.breakdown import LeagueBreakdown, LegacyBreakdown
from models.league import League
from models.round import Round

from .awards import evaluate_awards, grant_awards, newly_granted
from .events import round_event_key, rounds_in_event
from .points import score_round
from .ranking import rank_for_score
from .recompute import DuplicateRoundPolicy, recompute_event

logger = logging.getLogger(__name__)


@dataclass
class RoundPreview:
    """What a draft would score if submitted now."""
    rank: Optional[int]
    points: int
    breakdown: LeagueBreakdown | LegacyBreakdown
    to_par_label: str


@dataclass
class SubmissionResult:
    rounds: List[Round]  # full collection to persist
    round: Round  # the submitted round as stored after recomputation
    awards: AwardSet  # everything the round triggered
    granted: List[Award] = field(default_factory=list)  # awards the player did not already hold
    player_awards: List[Award] = field(default_factory=list)  # player's merged award list

    @property
    def changed_rounds(self) -> List[Round]:
        """Rounds of the submitted round's event, i.e. everything that needs writing."""
        return rounds_in_event(self.rounds, round_event_key(self.round))


def ordinal(rank: Optional[int]) -> Optional[str]:
    """1 -> "1st", 2 -> "2nd", 11 -> "11th"; None stays None."""
    if rank is None:
        return None
    if 10 <= rank % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{rank}{suffix}"


def resolve_player_id(
    league: Optional[League],
    submitted_by: str,
    requested_player_id: Optional[str] = None,
) -> str:
    """Hosts may submit for any player; everyone else submits their own round."""
    if league is not None and league.is_host(submitted_by) and requested_player_id:
        return requested_player_id
    return submitted_by


def _joins_event(draft: Round) -> bool:
    return draft.gross_score is not None and bool(draft.course) and draft.date is not None


def preview_round(all_rounds: Iterable[Round], draft: Round, points_system: Any) -> RoundPreview:
    """
    Rank and points the draft would get if it were submitted now.

    The draft only joins its event once it has a score, a course and a date,
    so a half-filled form never disturbs the event it is heading for.
    """
    event_rounds = rounds_in_event(all_rounds, round_event_key(draft))
    if _joins_event(draft):
        event_rounds = [*event_rounds, draft]

    rank = rank_for_score(event_rounds, draft.gross_score)
    points, breakdown = score_round(draft, rank, points_system)
    return RoundPreview(rank=rank, points=points, breakdown=breakdown, to_par_label=draft.to_par_label())


def submit_round(
    all_rounds: Iterable[Round],
    new_round: Round,
    points_system: Any,
    *,
    policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
    existing_awards: Iterable[Award] = (),
    earned_at: Optional[datetime] = None,
) -> SubmissionResult:
    """
    Add a round and rescore its whole event.

    Awards are evaluated against the player's rounds *before* this one, so the
    "first round" badge goes to the first submission only.
    """
    before = list(all_rounds)
    stamp = earned_at or datetime.now(timezone.utc)

    submitted = new_round
    if submitted.id is None or submitted.created_at is None:
        submitted = submitted.with_updates(
            id=submitted.id or f"round_{uuid4().hex}",
            created_at=submitted.created_at or stamp,
        )
    if submitted.submitted_by is None:
        submitted = submitted.with_updates(submitted_by=submitted.player_id)

    prior_for_player = [r for r in before if r.player_id == submitted.player_id]

    rounds = recompute_event([*before, submitted], submitted, points_system, policy)
    saved = next(r for r in reversed(rounds) if r.id == submitted.id)

    awards = evaluate_awards(saved, prior_for_player)
    held = list(existing_awards)
    triggered = awards.badges + awards.trophies
    granted = newly_granted(held, triggered)
    player_awards = grant_awards(held, granted, stamp, saved.id)

    logger.info(
        "Round %s submitted for player %s: rank %s, %d points, %d new awards",
        saved.id, saved.player_id, saved.rank, saved.points, len(granted),
    )
    return SubmissionResult(
        rounds=rounds,
        round=saved,
        awards=awards,
        granted=[a for a in player_awards if a.key in {g.key for g in granted}],
        player_awards=player_awards,
    )


def submission_message(result: SubmissionResult) -> str:
    """Short confirmation line, e.g. "2nd place - +6 points added for Sam."."""
    saved = result.round
    name = saved.player_name or "Unnamed Player"
    label = ordinal(saved.rank)
    if label:
        return f"{label} place - +{saved.points} points added for {name}."
    return f"+{saved.points} points added for {name}."

