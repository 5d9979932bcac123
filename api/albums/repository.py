"""
Album persistence (raw SQL).

AlbumModel owns every statement against the `albums` table and maps storage
outcomes to the domain errors in `core.errors`:
- no row for an id on read/delete -> RecordNotFoundError
- no row matching (id, version) on update -> EditConflictError
Anything else raised by asyncpg (connection loss, constraint violation,
timeout) propagates unchanged.
"""

from __future__ import annotations

import logging

from core import db
from core.config import env_str
from core.errors import EditConflictError, RecordNotFoundError
from core.filters import Filters, Metadata, calculate_metadata

from .models import ALBUM_COLUMNS, MAX_ALBUM_ID, Album

logger = logging.getLogger(__name__)

DEFAULT_TITLE_MATCH = "fulltext"

# Title predicates for list queries. $1 is the title filter; an empty filter
# matches every row.
TITLE_PREDICATES = {
    "fulltext": "(to_tsvector('simple', title) @@ plainto_tsquery('simple', $1::text) OR $1::text = '')",
    "substring": "(title ILIKE ('%' || $1::text || '%') OR $1::text = '')",
    "fuzzy": "(similarity(lower(title), lower($1::text)) >= 0.3 OR $1::text = '')",
}


def title_match_mode() -> str:
    mode = env_str("ALBUM_TITLE_MATCH", DEFAULT_TITLE_MATCH).lower()
    return mode if mode in TITLE_PREDICATES else DEFAULT_TITLE_MATCH


class AlbumModel:
    def __init__(self, *, title_match: str | None = None, timeout_s: float | None = None) -> None:
        mode = title_match or title_match_mode()
        if mode not in TITLE_PREDICATES:
            raise ValueError(f"unknown title match mode: {mode!r}")
        self.title_match = mode
        self.timeout_s = timeout_s

    async def insert(self, album: Album) -> None:
        """
        Insert `album`; the store assigns id, created_at and version=1, which
        are written back into `album`.
        """
        row = await db.fetch_one(
            """
            INSERT INTO albums (title, year, runtime, genres)
            VALUES ($1, $2, $3, $4)
            RETURNING id, created_at, version
            """,
            album.title,
            album.year,
            album.runtime,
            list(album.genres or []),
            timeout=self.timeout_s,
        )
        if row is None:
            raise RuntimeError("Failed to insert album.")

        album.id = int(row["id"])
        album.created_at = row["created_at"]
        album.version = int(row["version"])

    async def get(self, album_id: int) -> Album:
        if album_id < 1 or album_id > MAX_ALBUM_ID:
            raise RecordNotFoundError()

        row = await db.fetch_one(
            f"""
            SELECT {ALBUM_COLUMNS}
            FROM albums
            WHERE id = $1
            """,
            album_id,
            timeout=self.timeout_s,
        )
        if row is None:
            raise RecordNotFoundError()
        return Album.from_row(row)

    async def update(self, album: Album) -> None:
        """
        Compare-and-swap write: succeeds only while the stored version still
        equals `album.version`. The incremented version is written back.
        """
        row = await db.fetch_one(
            """
            UPDATE albums
            SET title = $1, year = $2, runtime = $3, genres = $4, version = version + 1
            WHERE id = $5
              AND version = $6
            RETURNING version
            """,
            album.title,
            album.year,
            album.runtime,
            list(album.genres or []),
            album.id,
            album.version,
            timeout=self.timeout_s,
        )
        if row is None:
            logger.info("edit conflict on album %s at version %s", album.id, album.version)
            raise EditConflictError()

        album.version = int(row["version"])

    async def delete(self, album_id: int) -> None:
        if album_id < 1 or album_id > MAX_ALBUM_ID:
            raise RecordNotFoundError()

        status = await db.execute(
            """
            DELETE FROM albums
            WHERE id = $1
            """,
            album_id,
            timeout=self.timeout_s,
        )
        if db.rows_affected(status) == 0:
            raise RecordNotFoundError()
        logger.debug("deleted album %s", album_id)

    async def get_all(self, title: str, genres: list[str], filters: Filters) -> tuple[list[Album], Metadata]:
        """
        One page of albums matching the title and genre filters, plus
        pagination metadata from a window count over the unlimited match set.
        """
        # sort_column() only returns values from the allow-list mapping
        sql = f"""
            SELECT count(*) OVER() AS total_records, {ALBUM_COLUMNS}
            FROM albums
            WHERE {TITLE_PREDICATES[self.title_match]}
              AND (genres @> $2::text[] OR cardinality($2::text[]) = 0)
            ORDER BY {filters.sort_column()} {filters.sort_direction()}, id ASC
            LIMIT $3
            OFFSET $4
            """
        rows = await db.fetch_all(
            sql,
            title or "",
            list(genres or []),
            filters.limit(),
            filters.offset(),
            timeout=self.timeout_s,
        )

        total_records = int(rows[0]["total_records"]) if rows else 0
        albums = [Album.from_row(row) for row in rows]
        return albums, calculate_metadata(total_records, filters.page, filters.page_size)
