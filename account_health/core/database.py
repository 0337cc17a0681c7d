"""
Async PostgreSQL connection pool module for agent snapshot storage.

This module provides an async PostgreSQL connection pool using asyncpg with a
module-level singleton. It is the only process-wide resource in the service
and is used exclusively by PostgresAgentRepository.

Functions:
- init_db(): create the agent-store pool (called from the app lifespan)
- get_db_pool(): return the pool, creating it lazily on first use
- close_db(): close the pool and reset the singleton
- execute_query(): run one statement on a pooled connection (used by /health)

Connection Pool Configuration (from Settings):
- db_pool_min_size: minimum idle connections kept in pool (default 2)
- db_pool_max_size: maximum connections in pool (default 10)
- db_command_timeout: query timeout in seconds (default 60)

Lifecycle:
    lifespan startup  -> init_db()          (postgres backend only)
    each request      -> PostgresAgentRepository -> get_db_pool().acquire()
    lifespan shutdown -> close_db()
"""

import logging
from typing import Any, List, Optional

import asyncpg
from asyncpg import Pool

from account_health.core.config import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# Global Pool Singleton
# =============================================================================

# None until init_db() is called; shared across all async tasks
_pool: Optional[Pool] = None


# =============================================================================
# Pool Lifecycle Functions
# =============================================================================

async def init_db() -> Pool:
    """
    Create the agent-store pool from Settings.

    Idempotent: if the pool already exists it is returned unchanged.

    Returns:
        The shared asyncpg Pool.

    Raises:
        RuntimeError: If DATABASE_URL is not configured.
        asyncpg.PostgresError / OSError: If the server rejects or cannot be
            reached for the initial connections.
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is not configured")

        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )
        logger.info(
            f"Database pool created (min_size={settings.db_pool_min_size}, "
            f"max_size={settings.db_pool_max_size})"
        )

    return _pool


async def get_db_pool() -> Pool:
    """
    Return the shared pool, creating it on first use.

    Prefer calling init_db() explicitly at startup; lazy initialization adds
    latency to the first request.

    Returns:
        Pool: The asyncpg connection pool instance.
    """
    if _pool is None:
        await init_db()

    assert _pool is not None, "Pool should be initialized after init_db()"

    return _pool


async def close_db() -> None:
    """
    Close the shared pool if one is open.

    Resets the singleton to None so a later get_db_pool() creates a fresh pool.
    Calling it when no pool exists has no effect.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Database pool closed")


# =============================================================================
# Query Helpers
# =============================================================================

async def execute_query(query: str, *args: Any) -> List[asyncpg.Record]:
    """
    Execute a query and return all rows.

    Args:
        query: SQL text using $n placeholders.
        *args: Values bound to the placeholders.

    Returns:
        List[asyncpg.Record]: All rows returned by the query (possibly empty).

    Raises:
        asyncpg.PostgresError: On any server-side failure.
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        return await conn.fetch(query, *args)
