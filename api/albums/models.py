"""
Album record and its field rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from core.validator import Validator, unique

MIN_YEAR = 1888
MAX_TITLE_BYTES = 500
MAX_GENRES = 5

# Column ranges: year/runtime are integer (int4), id is bigint.
MAX_INT32 = 2**31 - 1
MAX_ALBUM_ID = 2**63 - 1

# Columns selected by every read, in scan order.
ALBUM_COLUMNS = "id, created_at, title, year, runtime, genres, version"

# Allow-listed sort keys for album listings.
ALBUM_SORT_COLUMNS = {
    "id": "id",
    "title": "title",
    "year": "year",
    "runtime": "runtime",
}


@dataclass
class Album:
    id: int = 0
    created_at: datetime | None = None
    title: str = ""
    year: int = 0
    runtime: int = 0
    genres: list[str] | None = None
    version: int = 0

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Album":
        return cls(
            id=int(row["id"]),
            created_at=row["created_at"],
            title=str(row["title"]),
            year=int(row["year"]),
            runtime=int(row["runtime"]),
            genres=list(row["genres"] or []),
            version=int(row["version"]),
        )


def validate_album(v: Validator, album: Album) -> None:
    """
    Record every violated rule for `album` into `v`.

    Rules are evaluated independently so the caller sees all problems at once;
    per field only the first failing message is kept.
    """
    v.check(album.title != "", "title", "must be provided")
    v.check(len(album.title.encode("utf-8")) <= MAX_TITLE_BYTES, "title", "must not be more than 500 bytes long")

    v.check(album.year != 0, "year", "must be provided")
    v.check(album.year >= MIN_YEAR, "year", "must be greater than 1888")
    v.check(album.year <= date.today().year, "year", "must not be in the future")

    v.check(album.runtime != 0, "runtime", "must be provided")
    v.check(album.runtime > 0, "runtime", "must be a positive integer")
    v.check(album.runtime <= MAX_INT32, "runtime", "must not be more than 2147483647")

    genres = album.genres
    v.check(genres is not None, "genres", "must be provided")
    v.check(len(genres or []) >= 1, "genres", "must contain at least 1 genre")
    v.check(len(genres or []) <= MAX_GENRES, "genres", "must not contain more than 5 genres")
    v.check(unique(genres or []), "genres", "must not contain duplicate values")
