"""Async data-access facade for the league scoring engine.

Aggregates the repositories and runs each scoring flow as one transaction:
read the rounds, let the engine rescore them, write back what changed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import asyncpg

from models import Award, League, Player, Round, StandingRow
from database.exceptions import DatabaseError, NotFoundError
from database.repositories import AwardRepositoryDB, LeagueRepositoryDB, RoundRepositoryDB
from scoring import (
    DuplicateRoundPolicy,
    RoundPreview,
    SubmissionResult,
    build_standings,
    preview_round,
    recompute_event,
    recompute_league,
    resolve_player_id,
    round_event_key,
    submit_round,
)

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class DatabaseManager:
    """
    League persistence on top of an asyncpg pool.

    Notes:
    - Raw SQL lives in the repositories; this class only orchestrates.
    - Submissions to one event are serialized with a transaction-scoped
      advisory lock on the event key, so two concurrent rounds can't both
      rank against a stale event.
    """

    def __init__(
        self,
        pool: asyncpg.Pool,
        policy: DuplicateRoundPolicy = DuplicateRoundPolicy.KEEP_ALL,
    ) -> None:
        self._pool = pool
        self.policy = policy
        self.rounds = RoundRepositoryDB(pool)
        self.awards = AwardRepositoryDB(pool)
        self.leagues = LeagueRepositoryDB(pool)

    async def initialize_schema(self, schema_path: Optional[Path] = None) -> None:
        """Create the league schema and tables from ``schema.sql``."""
        path = Path(schema_path or SCHEMA_PATH).resolve()
        if not path.exists():
            raise DatabaseError(f"Schema file not found: {path}")
        sql_text = path.read_text(encoding="utf-8")
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(sql_text)
        logger.info("Schema applied from %s", path)

    # ================================================================
    # Private helpers
    # ================================================================

    async def _lock_event(self, conn, key: str) -> None:
        await conn.execute("SELECT pg_advisory_xact_lock(hashtext($1))", key)

    async def _league_for(self, conn, league_id: Optional[str]) -> Optional[League]:
        if league_id is None:
            return None
        league = await self.leagues.get_league(league_id, conn=conn)
        if league is None:
            raise NotFoundError(f"League {league_id} not found")
        return league

    @staticmethod
    def _points_system(league: Optional[League]) -> Optional[Dict[str, Any]]:
        return league.points_system if league is not None else None

    # ================================================================
    # Scoring flows
    # ================================================================

    async def preview_round(self, draft: Round) -> RoundPreview:
        """Score a draft against the stored event without writing anything."""
        async with self._pool.acquire() as conn:
            league = await self._league_for(conn, draft.league_id)
            event_rounds = await self.rounds.get_rounds_for_event(draft, conn=conn)
        return preview_round(event_rounds, draft, self._points_system(league))

    async def submit_round(
        self,
        draft: Round,
        *,
        requested_player_id: Optional[str] = None,
    ) -> SubmissionResult:
        """
        Store a round, rescore its event and grant the awards it triggered.

        ``draft.submitted_by`` is the acting user; a league host may pass
        ``requested_player_id`` to submit on behalf of another player.
        """
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                league = await self._league_for(conn, draft.league_id)
                submitter = draft.submitted_by or draft.player_id
                if submitter is None:
                    raise DatabaseError("A round needs a submitting user")
                player_id = resolve_player_id(league, submitter, requested_player_id)
                new_round = draft.with_updates(player_id=player_id, submitted_by=submitter)

                await self._lock_event(conn, round_event_key(new_round))

                all_rounds = await self.rounds.get_all_rounds(conn=conn)
                held = await self.awards.get_awards_for_player(player_id, conn=conn)

                result = submit_round(
                    all_rounds,
                    new_round,
                    self._points_system(league),
                    policy=self.policy,
                    existing_awards=held,
                )
                await self.rounds.save_rounds(result.changed_rounds, conn=conn)
                await self.awards.grant_awards(player_id, result.granted, conn=conn)

        logger.info(
            "Stored round %s (%d event rounds rewritten)",
            result.round.id, len(result.changed_rounds),
        )
        return result

    async def delete_round(self, round_id: str) -> List[Round]:
        """Remove a round and rescore what is left of its event.

        Returns the rescored remaining rounds of the event.
        """
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                removed = await self.rounds.get_round(round_id, conn=conn)
                if removed is None:
                    raise NotFoundError(f"Round {round_id} not found")
                await self._lock_event(conn, round_event_key(removed))

                league = await self._league_for(conn, removed.league_id)
                await self.rounds.delete_round(round_id, conn=conn)

                remaining = await self.rounds.get_rounds_for_event(removed, conn=conn)
                rescored = recompute_event(
                    remaining, removed, self._points_system(league), self.policy
                )
                await self.rounds.save_rounds(rescored, conn=conn)

        logger.info("Deleted round %s, rescored %d remaining", round_id, len(rescored))
        return rescored

    async def set_points_system(
        self, league_id: str, points_system: Dict[str, Any]
    ) -> League:
        """Replace a league's points configuration and rescore all its events."""
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                league = await self.leagues.set_points_system(
                    league_id, points_system, conn=conn
                )
                await self._rescore(conn, league)
        return league

    async def rescore_league(self, league_id: str) -> List[Round]:
        """Re-derive rank and points of every round in a league."""
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                league = await self._league_for(conn, league_id)
                return await self._rescore(conn, league)

    async def _rescore(self, conn, league: League) -> List[Round]:
        league_rounds = await self.rounds.get_rounds_for_league(league.id, conn=conn)
        rescored = recompute_league(
            league_rounds, league.id, league.points_system, self.policy
        )
        await self.rounds.save_rounds(rescored, conn=conn)
        return rescored

    # ================================================================
    # Reads
    # ================================================================

    async def get_round(self, round_id: str) -> Round:
        round_ = await self.rounds.get_round(round_id)
        if round_ is None:
            raise NotFoundError(f"Round {round_id} not found")
        return round_

    async def get_league(self, league_id: str) -> League:
        league = await self.leagues.get_league(league_id)
        if league is None:
            raise NotFoundError(f"League {league_id} not found")
        return league

    async def get_player_awards(self, player_id: str) -> List[Award]:
        return await self.awards.get_awards_for_player(player_id)

    async def standings(self, league_id: str) -> List[StandingRow]:
        """League table built from every stored round of the league."""
        league = await self.get_league(league_id)
        rounds = await self.rounds.get_rounds_for_league(league_id)

        players: Dict[str, Player] = {}
        for r in rounds:
            if r.player_id and r.player_id not in players:
                players[r.player_id] = Player(id=r.player_id, name=r.player_name)
        return build_standings(players.values(), rounds, league.points_system, self.policy)
