"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every helper is bounded by a per-call timeout (DB_QUERY_TIMEOUT_S, 3s by
default). On expiry asyncpg cancels the statement and raises
asyncio.TimeoutError (the builtin TimeoutError on Python 3.11+); the
statement may or may not have committed.
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .config import env_float, env_int

DEFAULT_QUERY_TIMEOUT_S = 3.0

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def query_timeout() -> float:
    timeout = env_float("DB_QUERY_TIMEOUT_S", DEFAULT_QUERY_TIMEOUT_S)
    return timeout if timeout > 0 else DEFAULT_QUERY_TIMEOUT_S


async def init_pool(dsn: str | None = None) -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=_sanitize_database_url(dsn) if dsn else database_url(),
        min_size=env_int("DB_POOL_MIN_SIZE", 1),
        max_size=env_int("DB_POOL_MAX_SIZE", 5),
        command_timeout=30,
    )
    logger.info("database pool initialized")


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("database pool closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any, timeout: float | None = None) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args, timeout=timeout or query_timeout())
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any, timeout: float | None = None) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool().fetch(sql, *args, timeout=timeout or query_timeout())
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any, timeout: float | None = None) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL).

    Returns the server's command status tag, e.g. "DELETE 1".
    """
    return await pool().execute(sql, *args, timeout=timeout or query_timeout())


def rows_affected(status: str) -> int:
    """
    Row count from a command status tag ("UPDATE 3" -> 3, "INSERT 0 1" -> 1).
    """
    tail = (status or "").rsplit(" ", 1)[-1]
    try:
        return int(tail)
    except ValueError:
        return 0
