"""League lookups and points-system updates."""

import asyncpg
from typing import Any, Dict, Optional

from models import League
from database.converters import league_from_row
from database.exceptions import NotFoundError


class LeagueRepositoryDB:
    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_league(self, league_id: str, *, conn=None) -> Optional[League]:
        query = "SELECT * FROM league.leagues WHERE id = $1"
        if conn is not None:
            row = await conn.fetchrow(query, league_id)
        else:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(query, league_id)
        return league_from_row(row) if row else None

    async def set_points_system(
        self, league_id: str, points_system: Dict[str, Any], *, conn=None
    ) -> League:
        """Store the raw configuration; it is normalized again on every read."""
        query = """UPDATE league.leagues SET points_system = $2
                   WHERE id = $1 RETURNING *"""
        if conn is not None:
            row = await conn.fetchrow(query, league_id, points_system)
        else:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(query, league_id, points_system)
        if not row:
            raise NotFoundError(f"League {league_id} not found")
        return league_from_row(row)
