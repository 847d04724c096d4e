"""Persistence for player awards (league.awards)."""

import asyncpg
from typing import Iterable, List

from models import Award
from database.converters import award_from_row, award_to_row
from database.exceptions import translated_errors


class AwardRepositoryDB:
    """Async access to awards. One row per (player, key)."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_awards_for_player(self, player_id: str, *, conn=None) -> List[Award]:
        """Newest first, matching the order awards are granted in."""
        query = """SELECT * FROM league.awards
                   WHERE player_id = $1
                   ORDER BY earned_at DESC, key"""
        if conn is not None:
            rows = await conn.fetch(query, player_id)
        else:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query, player_id)
        return [award_from_row(r) for r in rows]

    async def grant_awards(
        self, player_id: str, awards: Iterable[Award], *, conn=None
    ) -> int:
        """Insert awards the player does not hold yet; held keys are left untouched."""
        rows = [award_to_row(a, player_id) for a in awards]
        if not rows:
            return 0
        query = """INSERT INTO league.awards
                   (player_id, key, title, description, icon, tier, earned_at, round_id)
                   VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                   ON CONFLICT (player_id, key) DO NOTHING"""
        with translated_errors():
            if conn is not None:
                await conn.executemany(query, rows)
            else:
                async with self._pool.acquire() as conn:
                    await conn.executemany(query, rows)
        return len(rows)
