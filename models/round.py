from datetime import date, datetime
from pydantic import AliasChoices, Field, field_validator
from typing import Dict, Optional

from .base import BaseLeagueModel
from .breakdown import PointsBreakdown

CalendarDay = date


class Round(BaseLeagueModel):
    """One player's submitted performance in one league event."""
    id: Optional[str] = None
    player_id: Optional[str] = None
    submitted_by: Optional[str] = None  # differs from player_id when a host submits for a player
    player_name: Optional[str] = None
    created_at: Optional[datetime] = None

    # Event attributes
    league_id: Optional[str] = None  # None = open / cross-league event
    date: Optional[CalendarDay] = None
    course: Optional[str] = None
    holes: int = 18

    # Performance
    gross_score: Optional[int] = Field(None, ge=1, le=200)
    par: int = Field(72, ge=60, le=78)
    birdies: int = Field(0, ge=0, le=99)
    eagles: int = Field(0, ge=0, le=99)
    hole_in_ones: int = Field(0, ge=0, le=18, validation_alias=AliasChoices("hole_in_ones", "holeInOnes", "hio"))
    is_major: bool = False
    notes: Optional[str] = None

    # Derived by the scoring engine
    rank: Optional[int] = Field(None, ge=1)
    points: int = Field(0, ge=0)
    points_breakdown: Optional[PointsBreakdown] = None

    @field_validator('date', mode='before')
    @classmethod
    def coerce_calendar_day(cls, v):
        """Keep only the calendar day; unreadable values become None."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if isinstance(v, str):
            try:
                return date.fromisoformat(v.strip()[:10])
            except ValueError:
                return None
        return None

    @field_validator('holes')
    @classmethod
    def validate_holes(cls, v):
        if v not in (9, 18):
            raise ValueError("Holes must be 9 or 18")
        return v

    @field_validator('course')
    @classmethod
    def strip_course(cls, v):
        return v.strip() if v is not None else None

    def to_par(self) -> Optional[int]:
        """Gross score relative to par."""
        if self.gross_score is None:
            return None
        return self.gross_score - self.par

    def to_par_label(self) -> str:
        """Display label for score to par: "E", "+3", "-2", or "—" when unscored."""
        diff = self.to_par()
        if diff is None:
            return "—"
        if diff == 0:
            return "E"
        return f"+{diff}" if diff > 0 else str(diff)

    def bonus_flags(self) -> Dict[str, bool]:
        """Which scoring events happened at least once this round."""
        return {
            "birdie": self.birdies > 0,
            "eagle": self.eagles > 0,
            "hole_in_one": self.hole_in_ones > 0,
        }
