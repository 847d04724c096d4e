from .awards import evaluate_awards, grant_awards
from .events import event_key, group_by_event, round_event_key, rounds_in_event
from .points import calculate_league_points, calculate_legacy_points, score_round
from .ranking import competition_ranks, rank_for_score
from .recompute import DuplicateRoundPolicy, recompute_event, recompute_league
from .standings import build_standings, player_stats
from .submission import (
    RoundPreview,
    SubmissionResult,
    ordinal,
    preview_round,
    resolve_player_id,
    submission_message,
    submit_round,
)

__all__ = [
    "event_key",
    "round_event_key",
    "rounds_in_event",
    "group_by_event",
    "rank_for_score",
    "competition_ranks",
    "calculate_league_points",
    "calculate_legacy_points",
    "score_round",
    "DuplicateRoundPolicy",
    "recompute_event",
    "recompute_league",
    "evaluate_awards",
    "grant_awards",
    "build_standings",
    "player_stats",
    "RoundPreview",
    "SubmissionResult",
    "ordinal",
    "preview_round",
    "resolve_player_id",
    "submission_message",
    "submit_round",
]
