from .base import BaseLeagueModel
from .award import Award, AwardSet, AwardTier
from .breakdown import LeagueBreakdown, LeaguePoints, LegacyBreakdown, PointsBreakdown
from .league import League, Player, RecentResult, StandingRow
from .points_system import (
    BonusRule,
    BonusRules,
    LeaguePointsSystem,
    LegacyPointsSystem,
    ParticipationRule,
    PointsSystem,
    resolve_points_system,
)
from .round import Round

__all__ = [
    "BaseLeagueModel",
    "Award",
    "AwardSet",
    "AwardTier",
    "BonusRule",
    "BonusRules",
    "League",
    "LeagueBreakdown",
    "LeaguePoints",
    "LeaguePointsSystem",
    "LegacyBreakdown",
    "LegacyPointsSystem",
    "ParticipationRule",
    "Player",
    "PointsBreakdown",
    "PointsSystem",
    "RecentResult",
    "Round",
    "StandingRow",
    "resolve_points_system",
]
