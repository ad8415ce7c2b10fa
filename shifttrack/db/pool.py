# Connection pool lifecycle
import logging

import psycopg
from psycopg_pool import AsyncConnectionPool, PoolTimeout

from shifttrack.core.config import Settings

logger = logging.getLogger(__name__)

STARTUP_CONNECT_TIMEOUT_SECONDS = 10.0


def build_pool(settings: Settings) -> AsyncConnectionPool:
    """Create an unopened pool; the application opens it at startup."""
    return AsyncConnectionPool(
        conninfo=settings.DATABASE_URL,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        open=False,
    )


async def open_pool(pool: AsyncConnectionPool, timeout: float = STARTUP_CONNECT_TIMEOUT_SECONDS) -> None:
    """
    Open the pool without waiting for it to fill, then check out one connection.

    A failed check is only logged: the pool stays open and keeps reconnecting
    in the background, so requests succeed once the store is reachable.
    """
    await pool.open(wait=False)
    try:
        async with pool.connection(timeout=timeout):
            pass
        logger.info("Connected to PostgreSQL")
    except (PoolTimeout, psycopg.OperationalError) as e:
        logger.error("Could not connect to PostgreSQL at startup: %s", e)


async def close_pool(pool: AsyncConnectionPool) -> None:
    await pool.close()
    logger.info("PostgreSQL pool closed")
