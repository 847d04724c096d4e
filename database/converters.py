"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the league schema and the models.
"""

import json
from typing import Any, Optional

from models import Award, League, Round


def _json_value(value: Any) -> Any:
    """JSONB comes back decoded when the pool codec is installed, as text otherwise."""
    if isinstance(value, str):
        return json.loads(value)
    return value


# ================================================================
# Row -> Model (reads)
# ================================================================

def round_from_row(row) -> Round:
    """league.rounds row -> Round model."""
    return Round(
        id=row["id"],
        player_id=row["player_id"],
        submitted_by=row["submitted_by"],
        player_name=row["player_name"],
        league_id=row["league_id"],
        date=row["round_date"],
        course=row["course"],
        holes=row["holes"],
        gross_score=row["gross_score"],
        par=row["par"],
        birdies=row["birdies"],
        eagles=row["eagles"],
        hole_in_ones=row["hole_in_ones"],
        is_major=row["is_major"],
        notes=row["notes"],
        rank=row["rank"],
        points=row["points"],
        points_breakdown=_json_value(row["points_breakdown"]),
        created_at=row["created_at"],
    )


def award_from_row(row) -> Award:
    """league.awards row -> Award model."""
    return Award(
        key=row["key"],
        title=row["title"],
        description=row["description"],
        icon=row["icon"],
        tier=row["tier"],
        earned_at=row["earned_at"],
        round_id=row["round_id"],
    )


def league_from_row(row) -> League:
    """league.leagues row -> League model (points system kept raw)."""
    return League(
        id=row["id"],
        name=row["name"],
        host_id=row["host_id"],
        points_system=_json_value(row["points_system"]),
    )


# ================================================================
# Model -> Row tuple (writes)
# ================================================================

def round_to_row(round_: Round) -> tuple:
    """Round -> tuple for the league.rounds upsert (for executemany)."""
    breakdown: Optional[dict] = (
        round_.points_breakdown.model_dump(mode="json") if round_.points_breakdown else None
    )
    return (
        round_.id, round_.player_id, round_.submitted_by, round_.player_name,
        round_.league_id, round_.date, round_.course, round_.holes,
        round_.gross_score, round_.par, round_.birdies, round_.eagles,
        round_.hole_in_ones, round_.is_major, round_.notes,
        round_.rank, round_.points, breakdown, round_.created_at,
    )


def award_to_row(award: Award, player_id: str) -> tuple:
    """Award -> tuple for league.awards INSERT."""
    return (
        player_id, award.key, award.title, award.description,
        award.icon, award.tier.value, award.earned_at, award.round_id,
    )
