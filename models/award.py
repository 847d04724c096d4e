from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import List, Optional

from .base import BaseLeagueModel


class AwardTier(str, Enum):
    BADGE = "badge"
    TROPHY = "trophy"


class Award(BaseLeagueModel):
    """A badge or trophy. earned_at/round_id are set once it is granted to a player."""
    key: str
    title: str
    description: str = ""
    icon: str = ""
    tier: AwardTier
    earned_at: Optional[datetime] = None
    round_id: Optional[str] = None


class AwardSet(BaseLeagueModel):
    """Awards triggered by one round, split by tier."""
    badges: List[Award] = Field(default_factory=list)
    trophies: List[Award] = Field(default_factory=list)

    def keys(self) -> List[str]:
        return [a.key for a in self.badges] + [a.key for a in self.trophies]

    def is_empty(self) -> bool:
        return not self.badges and not self.trophies
