from pydantic import Field
from typing import Annotated, Literal, Optional, Union

from .base import BaseLeagueModel


class LeaguePoints(BaseLeagueModel):
    """Result of the placement-based calculator."""
    placement_points: int = 0
    bonus_points: int = 0
    participation_points: int = 0
    total_points: int = 0


class LeagueBreakdown(BaseLeagueModel):
    """How a round's points were derived under the league (placement) mode."""
    mode: Literal["league"] = "league"
    rank: Optional[int] = None
    placement_points: int = 0
    bonus_points: int = 0
    participation_points: int = 0
    superseded: bool = False  # another round by the same player counts for this event


class LegacyBreakdown(BaseLeagueModel):
    """How a round's points were derived under the legacy flat formula."""
    mode: Literal["legacy"] = "legacy"
    rank: Optional[int] = None
    base: float = 0.0
    birdies: int = 0
    eagles: int = 0
    hole_in_ones: int = 0
    extras: float = 0.0
    multiplier: float = 1.0
    pre_multiplier: float = 0.0
    superseded: bool = False


PointsBreakdown = Annotated[Union[LeagueBreakdown, LegacyBreakdown], Field(discriminator="mode")]
