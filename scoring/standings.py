from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from models.league import Player, RecentResult, StandingRow
from models.points_system import LeaguePointsSystem, resolve_points_system
from models.round import Round

from .events import round_event_key
from .points import score_round
from .recompute import DuplicateRoundPolicy, score_event


def _newest_first(rounds: Iterable[Round]) -> List[Round]:
    # Stable sort keeps collection order within a day
    return sorted(rounds, key=lambda r: r.date or date.min, reverse=True)


def _points_by_round(
    rounds: List[Round],
    points_system: Any,
    policy: DuplicateRoundPolicy,
) -> Dict[int, int]:
    """Points per round (keyed by position), rescored per event in league mode."""
    system = resolve_points_system(points_system)
    points: Dict[int, int] = {}

    if isinstance(system, LeaguePointsSystem):
        by_event: Dict[str, List[int]] = {}
        for position, round_obj in enumerate(rounds):
            by_event.setdefault(round_event_key(round_obj), []).append(position)
        for positions in by_event.values():
            members = [rounds[i] for i in positions]
            for position, rescored in zip(positions, score_event(members, system, policy)):
                points[position] = rescored.points
        return points

    for position, round_obj in enumerate(rounds):
        if round_obj.points_breakdown is not None:
            points[position] = round_obj.points
        else:
            points[position], _ = score_round(round_obj, round_obj.rank, system)
    return points


def build_standings(
    players: Iterable[Player],
    rounds: Iterable[Round],
    points_system: Any = None,
    policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
) -> List[StandingRow]:
    """
    League table: points, rounds played and scoring events per player.

    In league mode points are re-derived event by event so a stale stored
    value can never leak into the table. Legacy points don't depend on the
    rest of the event, so stored values are trusted there.

    Sorted by points, then rounds played, then name.
    """
    round_list = list(rounds)
    points = _points_by_round(round_list, points_system, policy)

    table: Dict[str, StandingRow] = {}
    for player in players:
        table[player.id] = StandingRow(player_id=player.id, name=player.name or "Unnamed")

    order = sorted(
        range(len(round_list)),
        key=lambda i: round_list[i].date or date.min,
        reverse=True,
    )
    for position in order:
        round_obj = round_list[position]
        row = table.get(round_obj.player_id)
        if row is None:
            continue

        earned = points.get(position, 0)
        row.points += earned
        row.rounds += 1
        row.birdies += round_obj.birdies
        row.eagles += round_obj.eagles
        row.hole_in_ones += round_obj.hole_in_ones
        if round_obj.is_major:
            row.majors += 1
        if len(row.last5) < 5:
            row.last5.append(RecentResult(points=earned, is_major=round_obj.is_major, date=round_obj.date))

    return sorted(table.values(), key=lambda row: (-row.points, -row.rounds, row.name.lower()))


def player_stats(
    player_id: str,
    players: Iterable[Player],
    rounds: Iterable[Round],
    points_system: Any = None,
    policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
) -> Dict[str, Any]:
    """A player's standings row plus their ten most recent rounds."""
    round_list = list(rounds)
    standings = build_standings(players, round_list, points_system, policy)
    row: Optional[StandingRow] = next((r for r in standings if r.player_id == player_id), None)
    recent = _newest_first(r for r in round_list if r.player_id == player_id)
    return {"row": row, "recent_rounds": recent[:10]}
