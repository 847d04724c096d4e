"""CRUD operations for league.rounds."""

import asyncpg
from typing import Iterable, List, Optional

from models import Round
from database.converters import round_from_row, round_to_row
from database.exceptions import translated_errors
from scoring.events import round_event_key, rounds_in_event

_UPSERT_ROUND = """
    INSERT INTO league.rounds
        (id, player_id, submitted_by, player_name, league_id, round_date,
         course, holes, gross_score, par, birdies, eagles, hole_in_ones,
         is_major, notes, rank, points, points_breakdown, created_at)
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10,
            $11, $12, $13, $14, $15, $16, $17, $18, $19)
    ON CONFLICT (id) DO UPDATE SET
        player_name = EXCLUDED.player_name,
        gross_score = EXCLUDED.gross_score,
        par = EXCLUDED.par,
        birdies = EXCLUDED.birdies,
        eagles = EXCLUDED.eagles,
        hole_in_ones = EXCLUDED.hole_in_ones,
        is_major = EXCLUDED.is_major,
        notes = EXCLUDED.notes,
        rank = EXCLUDED.rank,
        points = EXCLUDED.points,
        points_breakdown = EXCLUDED.points_breakdown
"""


class RoundRepositoryDB:
    """Async CRUD for rounds.

    Every method takes an optional ``conn`` so callers can run several
    operations inside one transaction; without it a pooled connection is used.
    """

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, round_id: str, *, conn=None) -> Optional[Round]:
        query = "SELECT * FROM league.rounds WHERE id = $1"
        if conn is not None:
            row = await conn.fetchrow(query, round_id)
        else:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(query, round_id)
        return round_from_row(row) if row else None

    async def get_all_rounds(self, *, conn=None) -> List[Round]:
        """Whole collection, oldest first (insertion order is what the engine expects)."""
        query = "SELECT * FROM league.rounds ORDER BY created_at, id"
        if conn is not None:
            rows = await conn.fetch(query)
        else:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query)
        return [round_from_row(r) for r in rows]

    async def get_rounds_for_league(self, league_id: str, *, conn=None) -> List[Round]:
        query = """SELECT * FROM league.rounds
                   WHERE league_id = $1
                   ORDER BY created_at, id"""
        if conn is not None:
            rows = await conn.fetch(query, league_id)
        else:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query, league_id)
        return [round_from_row(r) for r in rows]

    async def get_rounds_for_event(self, round_: Round, *, conn=None) -> List[Round]:
        """Rounds sharing ``round_``'s event (league, day, course, holes).

        SQL narrows by day and holes only. League and course go through the
        event key in Python, where empty and missing values share a sentinel
        and course names compare casefolded.
        """
        query = """SELECT * FROM league.rounds
                   WHERE round_date IS NOT DISTINCT FROM $1
                     AND holes = $2
                   ORDER BY created_at, id"""
        args = (round_.date, round_.holes)
        if conn is not None:
            rows = await conn.fetch(query, *args)
        else:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(query, *args)
        key = round_event_key(round_)
        return rounds_in_event((round_from_row(r) for r in rows), key)

    # ================================================================
    # Write
    # ================================================================

    async def save_rounds(self, rounds: Iterable[Round], *, conn=None) -> int:
        """Insert new rounds and overwrite scoring fields of existing ones."""
        rows = [round_to_row(r) for r in rounds]
        if not rows:
            return 0
        with translated_errors():
            if conn is not None:
                await conn.executemany(_UPSERT_ROUND, rows)
            else:
                async with self._pool.acquire() as conn:
                    async with conn.transaction():
                        await conn.executemany(_UPSERT_ROUND, rows)
        return len(rows)

    async def delete_round(self, round_id: str, *, conn=None) -> bool:
        """Returns True if a row was deleted."""
        query = "DELETE FROM league.rounds WHERE id = $1"
        if conn is not None:
            result = await conn.execute(query, round_id)
        else:
            async with self._pool.acquire() as conn:
                result = await conn.execute(query, round_id)
        return result == "DELETE 1"
