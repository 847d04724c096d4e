"""Points for a single round under either scoring mode."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Tuple

from models.breakdown import LeagueBreakdown, LeaguePoints, LegacyBreakdown
from models.points_system import LeaguePointsSystem, LegacyPointsSystem, PointsSystem, resolve_points_system
from models.round import Round

logger = logging.getLogger(__name__)

BONUS_TYPES = ("birdie", "eagle", "hole_in_one")


def _positive_rank(rank: Any) -> Optional[int]:
    if rank is None or isinstance(rank, bool):
        return None
    try:
        value = float(rank)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or int(value) <= 0:
        return None
    return int(value)


def _flag(flags: Mapping[str, Any], name: str) -> bool:
    if name == "hole_in_one" and "hole_in_one" not in flags:
        return bool(flags.get("hio"))
    return bool(flags.get(name))


def calculate_league_points(
    rank: Any,
    bonus_flags: Optional[Mapping[str, Any]] = None,
    did_play: bool = True,
    points_system: Any = None,
) -> LeaguePoints:
    """
    Placement-based points for one round.

    - placement: table value for the rank, 0 if unranked or past the table
    - bonus: configured value per flag that is set (birdie / eagle / hole_in_one);
      a flag means "happened at least once", so counts never multiply it
    - participation: configured value when the player played
    """
    system = points_system if isinstance(points_system, LeaguePointsSystem) else None
    if system is None:
        resolved = resolve_points_system(points_system)
        system = resolved if isinstance(resolved, LeaguePointsSystem) else LeaguePointsSystem()

    placement = system.points_for_rank(_positive_rank(rank))

    participation = 0
    if did_play and system.participation.enabled:
        participation = system.participation.points

    bonus = 0
    flags = bonus_flags or {}
    if system.bonuses.enabled:
        for name in BONUS_TYPES:
            rule = system.bonuses.rule_for(name)
            if rule.enabled and _flag(flags, name):
                bonus += rule.points

    return LeaguePoints(
        placement_points=placement,
        bonus_points=bonus,
        participation_points=participation,
        total_points=placement + bonus + participation,
    )


def calculate_legacy_points(
    round_obj: Round,
    points_system: Optional[LegacyPointsSystem] = None,
    rank: Optional[int] = None,
) -> Tuple[int, LegacyBreakdown]:
    """
    Flat formula:

        round((base + birdies*birdie + eagles*eagle + hio*hio) * multiplier)

    where multiplier is the major multiplier on a major day and 1 otherwise.
    Python's round() is round-half-to-even, so .5 totals don't drift upwards.
    """
    system = points_system or LegacyPointsSystem()

    extras = (
        round_obj.birdies * system.birdie_points
        + round_obj.eagles * system.eagle_points
        + round_obj.hole_in_ones * system.hole_in_one_points
    )
    pre_multiplier = system.base_points + extras
    multiplier = system.major_multiplier if round_obj.is_major else 1.0
    total = max(0, int(round(pre_multiplier * multiplier)))

    return total, LegacyBreakdown(
        rank=_positive_rank(rank),
        base=system.base_points,
        birdies=round_obj.birdies,
        eagles=round_obj.eagles,
        hole_in_ones=round_obj.hole_in_ones,
        extras=extras,
        multiplier=multiplier,
        pre_multiplier=pre_multiplier,
    )


def score_round(
    round_obj: Round,
    rank: Optional[int],
    points_system: Any,
) -> Tuple[int, LeagueBreakdown | LegacyBreakdown]:
    """Total points and breakdown for a round at a given rank, in the system's mode."""
    system: PointsSystem = resolve_points_system(points_system)

    if isinstance(system, LegacyPointsSystem):
        return calculate_legacy_points(round_obj, system, rank)

    result = calculate_league_points(
        rank,
        round_obj.bonus_flags(),
        did_play=True,
        points_system=system,
    )
    breakdown = LeagueBreakdown(
        rank=_positive_rank(rank),
        placement_points=result.placement_points,
        bonus_points=result.bonus_points,
        participation_points=result.participation_points,
    )
    logger.debug(
        "Scored round %s at rank %s: %s points", round_obj.id, rank, result.total_points
    )
    return result.total_points, breakdown
