"""League endpoints: configuration and standings."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from api.dependencies import get_db
from api.schemas import LeagueResponse, PointsSystemRequest, RescoreLeagueResponse
from models import League, StandingRow

logger = logging.getLogger(__name__)

router = APIRouter()


def _league_response(league: League) -> LeagueResponse:
    return LeagueResponse(
        id=league.id,
        name=league.name,
        host_id=league.host_id,
        points_system=league.resolved_points_system().model_dump(mode="json"),
    )


@router.get("/{league_id}", response_model=LeagueResponse)
async def get_league(league_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        league = await db.get_league(league_id)
    except NotFoundError:
        raise HTTPException(404, "League not found")
    return _league_response(league)


@router.put("/{league_id}/points-system", response_model=LeagueResponse)
async def update_points_system(
    league_id: str,
    req: PointsSystemRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Replace the league's points system and rescore every event in it."""
    try:
        league = await db.set_points_system(league_id, req.points_system)
    except NotFoundError:
        raise HTTPException(404, "League not found")
    logger.info("Points system updated for league %s", league_id)
    return _league_response(league)


@router.post("/{league_id}/rescore", response_model=RescoreLeagueResponse)
async def rescore_league(league_id: str, db: DatabaseManager = Depends(get_db)):
    """Re-derive rank and points for every round in the league."""
    try:
        rescored = await db.rescore_league(league_id)
    except NotFoundError:
        raise HTTPException(404, "League not found")
    logger.info("Rescored %d rounds in league %s", len(rescored), league_id)
    return RescoreLeagueResponse(league_id=league_id, rescored=len(rescored))


@router.get("/{league_id}/standings", response_model=List[StandingRow])
async def get_standings(league_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        return await db.standings(league_id)
    except NotFoundError:
        raise HTTPException(404, "League not found")
