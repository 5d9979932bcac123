"""Test fixtures and configuration for the albums API tests.

This module provides shared fixtures organized into:
- Fake pool fixtures: a scripted stand-in for asyncpg.Pool (no database)
- PostgreSQL fixtures: a real pool, used only when TEST_DATABASE_URL is set
- Factory fixtures: builders for test data
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timezone
from typing import Any

import pytest
from albums.models import Album
from albums.repository import AlbumModel
from core import db

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "").strip()

requires_postgres = pytest.mark.skipif(
    not TEST_DATABASE_URL,
    reason="TEST_DATABASE_URL is not set",
)

ALBUMS_DDL = """
CREATE TABLE IF NOT EXISTS albums (
    id bigserial PRIMARY KEY,
    created_at timestamp(0) with time zone NOT NULL DEFAULT now(),
    title text NOT NULL,
    year integer NOT NULL,
    runtime integer NOT NULL,
    genres text[] NOT NULL,
    version integer NOT NULL DEFAULT 1
)
"""


# =============================================================================
# Fake Pool Fixtures
# =============================================================================


class FakePool:
    """Scripted asyncpg.Pool stand-in that records every statement."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple[Any, ...], float | None]] = []
        self.fetchrow_results: list[Any] = []
        self.fetch_results: list[Any] = []
        self.execute_results: list[Any] = []

    def _next(self, queue: list[Any], default: Any) -> Any:
        result = queue.pop(0) if queue else default
        if isinstance(result, BaseException):
            raise result
        return result

    async def fetchrow(self, sql: str, *args: Any, timeout: float | None = None) -> Any:
        self.calls.append(("fetchrow", sql, args, timeout))
        return self._next(self.fetchrow_results, None)

    async def fetch(self, sql: str, *args: Any, timeout: float | None = None) -> Any:
        self.calls.append(("fetch", sql, args, timeout))
        return self._next(self.fetch_results, [])

    async def execute(self, sql: str, *args: Any, timeout: float | None = None) -> Any:
        self.calls.append(("execute", sql, args, timeout))
        return self._next(self.execute_results, "")

    async def close(self) -> None:
        return None


@pytest.fixture
def fake_pool(monkeypatch: pytest.MonkeyPatch) -> FakePool:
    """Install a FakePool as the module-level DB pool."""
    pool = FakePool()
    monkeypatch.setattr(db, "_pool", pool)
    return pool


@pytest.fixture
def model() -> AlbumModel:
    return AlbumModel(title_match="fulltext")


# =============================================================================
# PostgreSQL Fixtures
# =============================================================================


@pytest.fixture
async def pg_model() -> AsyncGenerator[AlbumModel, None]:
    """AlbumModel bound to a real, freshly truncated `albums` table."""
    await db.init_pool(TEST_DATABASE_URL)
    try:
        await db.execute(ALBUMS_DDL)
        await db.execute("TRUNCATE albums RESTART IDENTITY")
        yield AlbumModel(title_match="fulltext")
    finally:
        await db.close_pool()


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def make_album() -> Callable[..., Album]:
    """Factory for valid albums; override any field via kwargs."""

    def _make(**kwargs: Any) -> Album:
        defaults: dict[str, Any] = {
            "title": "Kind of Blue",
            "year": 1959,
            "runtime": 46,
            "genres": ["jazz", "modal"],
        }
        defaults.update(kwargs)
        return Album(**defaults)

    return _make


def album_row(**overrides: Any) -> dict[str, Any]:
    """A row as returned by SELECT id, created_at, ... FROM albums."""
    row: dict[str, Any] = {
        "id": 1,
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "title": "Kind of Blue",
        "year": 1959,
        "runtime": 46,
        "genres": ["jazz", "modal"],
        "version": 1,
    }
    row.update(overrides)
    return row
