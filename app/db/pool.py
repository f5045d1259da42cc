# app/db/pool.py
"""
Shared psycopg pool for the dashboard's read queries.

The pool is opened by the FastAPI lifespan and closed on shutdown. Each
aggregation read borrows its own connection, so sizing (see
Settings.get_db_pool_config) bounds how many dashboards load at once.
"""

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool, PoolClosed

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

CLOSE_TIMEOUT_SECONDS = 10.0
SESSION_SETTINGS = (
    "SET timezone = 'UTC'",
    # Longer than any dashboard read should ever take
    "SET statement_timeout = '15s'",
)


async def _select_one(conn: psycopg.AsyncConnection) -> bool:
    async with conn.cursor() as cur:
        await cur.execute("SELECT 1 AS ok")
        row = await cur.fetchone()
    return row is not None and row["ok"] == 1


class DatabasePoolManager:
    """Lifecycle wrapper around one AsyncConnectionPool: new, open, then closed."""

    def __init__(self):
        self.pool: AsyncConnectionPool | None = None
        self._state = "new"

    async def initialize(self) -> None:
        if self._state == "open":
            logger.warning("Database pool already open")
            return
        if self._state == "closed":
            raise RuntimeError("Database pool was closed and cannot be reopened")

        config = settings.get_db_pool_config()
        pool = AsyncConnectionPool(
            conninfo=settings.SUPABASE_DB_URL,
            open=False,
            check=AsyncConnectionPool.check_connection,
            configure=self._configure_connection,
            **config,
        )
        logger.info(
            "Opening database pool",
            min_size=config["min_size"],
            max_size=config["max_size"],
            environment=settings.environment,
        )

        try:
            await pool.open(wait=True, timeout=config["timeout"])
            async with pool.connection() as conn:
                if not await _select_one(conn):
                    raise RuntimeError("SELECT 1 returned an unexpected row")
        except Exception as e:
            logger.error("Database pool failed to open", error=str(e))
            await pool.close()
            raise RuntimeError(f"Database pool initialization failed: {e}") from e

        self.pool = pool
        self._state = "open"
        logger.info("Database pool open")

    @staticmethod
    async def _configure_connection(conn: psycopg.AsyncConnection) -> None:
        conn.row_factory = dict_row
        # Reads are single statements, so no connection is returned INTRANS
        await conn.set_autocommit(True)
        app_name = f"contractor-dashboard-{settings.environment}"
        await conn.execute(sql.SQL("SET application_name = {}").format(sql.Literal(app_name)))
        for statement in SESSION_SETTINGS:
            await conn.execute(statement)

    async def close(self) -> None:
        if self._state != "open":
            return
        self._state = "closed"
        logger.info("Closing database pool")
        try:
            await asyncio.wait_for(self.pool.close(), timeout=CLOSE_TIMEOUT_SECONDS)
        except TimeoutError:
            logger.warning("Database pool close timed out", timeout=CLOSE_TIMEOUT_SECONDS)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[psycopg.AsyncConnection]:
        """
        Borrow a connection for one query.

        Raises psycopg_pool.PoolClosed (an OperationalError) while the pool is
        not open, so callers treat it like any other unreachable store.
        """
        if self._state != "open":
            raise PoolClosed(f"Database pool is not open (state: {self._state})")
        async with self.pool.connection() as conn:
            yield conn

    async def health_check(self) -> dict[str, Any]:
        if self._state != "open":
            return {"healthy": False, "service": "database_pool", "error": f"Pool is {self._state}"}

        started = time.perf_counter()
        try:
            async with self.connection() as conn:
                healthy = await _select_one(conn)
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "healthy": False,
                "service": "database_pool",
                "error": str(e),
                "error_type": type(e).__name__,
            }

        stats = self.pool.get_stats()
        size = stats.get("pool_size", 0)
        available = stats.get("pool_available", 0)
        result: dict[str, Any] = {
            "healthy": healthy,
            "service": "database_pool",
            "connection_time_ms": round((time.perf_counter() - started) * 1000, 2),
            "pool_stats": {
                "pool_size": size,
                "pool_available": available,
                "pool_utilization_percent": round((size - available) / size * 100, 2) if size else 0,
                "requests_waiting": stats.get("requests_waiting", 0),
            },
        }
        if not healthy:
            result["error"] = "SELECT 1 returned an unexpected row"
        if stats.get("requests_waiting", 0):
            result["warnings"] = [f"{stats['requests_waiting']} requests waiting for a connection"]
        return result


db_pool = DatabasePoolManager()


def get_db_connection():
    """Context manager borrowing a connection from the shared pool."""
    return db_pool.connection()


async def db_health_check() -> dict[str, Any]:
    return await db_pool.health_check()
