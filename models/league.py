from datetime import date
from pydantic import Field
from typing import Any, Dict, List, Optional

from .base import BaseLeagueModel
from .points_system import PointsSystem, resolve_points_system

CalendarDay = date


class League(BaseLeagueModel):
    """A league and its stored (raw) points configuration."""
    id: Optional[str] = None
    name: Optional[str] = None
    host_id: Optional[str] = None
    points_system: Optional[Dict[str, Any]] = None

    def is_host(self, user_id: Optional[str]) -> bool:
        return bool(user_id and self.host_id and self.host_id == user_id)

    def resolved_points_system(self) -> PointsSystem:
        """Active points system; legacy defaults when the league has none."""
        return resolve_points_system(self.points_system)


class Player(BaseLeagueModel):
    """Minimal player identity used for standings."""
    id: str
    name: Optional[str] = None


class RecentResult(BaseLeagueModel):
    points: int = 0
    is_major: bool = False
    date: Optional[CalendarDay] = None


class StandingRow(BaseLeagueModel):
    """One line of the league table."""
    player_id: str
    name: str = "Unnamed"
    points: int = 0
    rounds: int = 0
    majors: int = 0
    birdies: int = 0
    eagles: int = 0
    hole_in_ones: int = 0
    last5: List[RecentResult] = Field(default_factory=list)
