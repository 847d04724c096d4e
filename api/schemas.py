"""API request and response models for round submission and league views."""

from datetime import date
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from models import Award, PointsBreakdown, Round

CalendarDay = date


class RoundDraftRequest(BaseModel):
    """Round form as submitted by the client (preview or final submit)."""
    submitted_by: str
    player_id: Optional[str] = None  # only honoured when the submitter hosts the league
    player_name: Optional[str] = None
    league_id: Optional[str] = None
    date: Optional[CalendarDay] = None
    course: Optional[str] = None
    holes: int = 18
    gross_score: Optional[int] = None
    par: int = 72
    birdies: int = 0
    eagles: int = 0
    hole_in_ones: int = 0
    is_major: bool = False
    notes: Optional[str] = None

    def to_round(self) -> Round:
        """Draft as a Round owned by the submitter; the server decides the player."""
        return Round(
            player_id=self.submitted_by,
            submitted_by=self.submitted_by,
            player_name=self.player_name,
            league_id=self.league_id,
            date=self.date,
            course=self.course,
            holes=self.holes,
            gross_score=self.gross_score,
            par=self.par,
            birdies=self.birdies,
            eagles=self.eagles,
            hole_in_ones=self.hole_in_ones,
            is_major=self.is_major,
            notes=self.notes,
        )


class RoundPreviewResponse(BaseModel):
    rank: Optional[int] = None
    rank_label: Optional[str] = None
    points: int
    to_par: str
    breakdown: PointsBreakdown


class SubmitRoundResponse(BaseModel):
    round: Round
    granted_awards: List[Award] = Field(default_factory=list)
    message: str


class DeleteRoundResponse(BaseModel):
    deleted: str
    rescored: int


class RescoreLeagueResponse(BaseModel):
    league_id: str
    rescored: int


class PointsSystemRequest(BaseModel):
    """Raw points configuration; stored as given and normalized on read."""
    points_system: Dict[str, Any]


class LeagueResponse(BaseModel):
    id: str
    name: Optional[str] = None
    host_id: Optional[str] = None
    points_system: Dict[str, Any]  # normalized, with defaults filled in
