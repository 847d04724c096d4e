"""Award endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from database.db_manager import DatabaseManager
from api.dependencies import get_db
from models import Award

router = APIRouter()


@router.get("/player/{player_id}", response_model=List[Award])
async def get_player_awards(player_id: str, db: DatabaseManager = Depends(get_db)):
    """Every award the player holds, newest first. Unknown players have none."""
    return await db.get_player_awards(player_id)
