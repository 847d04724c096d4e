"""asyncpg pool shared by the API process."""

import json
import logging
from typing import Optional

import asyncpg

logger = logging.getLogger(__name__)

APPLICATION_NAME = "league-scoring"


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode JSONB columns (points breakdowns, points systems) to Python objects."""
    await conn.set_type_codec(
        "jsonb", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )


class DatabasePool:
    """Owns the league store's connection pool.

    Connections carry a JSONB codec and an ``application_name`` so that
    advisory locks taken while scoring an event show up as ours in
    ``pg_locks`` / ``pg_stat_activity``.
    """

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: Optional[str] = None,
        *,
        min_size: int = 1,
        max_size: int = 10,
        command_timeout: Optional[float] = 30.0,
    ) -> None:
        """Open the pool once; later calls are ignored."""
        if self._pool is not None:
            return
        if min_size > max_size:
            raise ValueError(f"min_size {min_size} exceeds max_size {max_size}")
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
            server_settings={"application_name": APPLICATION_NAME},
            init=_init_connection,
        )
        logger.info("League store pool ready (min=%d, max=%d)", min_size, max_size)

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("League store pool closed")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("League store pool is not open; call db.initialize() first")
        return self._pool

    async def health_check(self) -> bool:
        """True when the store answers ``SELECT 1``."""
        if self._pool is None:
            return False
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (OSError, asyncpg.PostgresError) as e:
            logger.warning("League store health check failed: %s", e)
            return False
        return True


db = DatabasePool()
