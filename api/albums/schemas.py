"""
Pydantic schemas for album endpoints.

Field rules (lengths, ranges, uniqueness) are enforced by `validate_album`,
not here, so a bad request reports every broken field at once.
"""

from __future__ import annotations

from dataclasses import asdict

from pydantic import BaseModel, ConfigDict

from core.filters import Metadata

from .models import Album


class CreateAlbumRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    title: str = ""
    year: int = 0
    runtime: int = 0
    genres: list[str] | None = None


class UpdateAlbumRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    # Omitted fields keep their stored value.
    title: str | None = None
    year: int | None = None
    runtime: int | None = None
    genres: list[str] | None = None


class AlbumResponse(BaseModel):
    id: int
    title: str
    year: int
    runtime: int
    genres: list[str]
    version: int

    @classmethod
    def from_album(cls, album: Album) -> "AlbumResponse":
        return cls(
            id=album.id,
            title=album.title,
            year=album.year,
            runtime=album.runtime,
            genres=list(album.genres or []),
            version=album.version,
        )


class MetadataResponse(BaseModel):
    current_page: int = 0
    page_size: int = 0
    first_page: int = 0
    last_page: int = 0
    total_records: int = 0

    @classmethod
    def from_metadata(cls, metadata: Metadata) -> "MetadataResponse":
        return cls(**asdict(metadata))
