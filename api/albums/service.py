"""
Album business logic.

Scope:
- validate-then-persist for create and update
- partial updates guarded by the stored version
- list parameter parsing (genres CSV, paging, sort)

Domain errors from `core.errors` propagate to the HTTP layer; nothing here
retries.
"""

from __future__ import annotations

from core.errors import ValidationFailedError
from core.filters import Filters, Metadata, validate_filters
from core.validator import Validator

from . import schemas
from .models import ALBUM_SORT_COLUMNS, Album, validate_album
from .repository import AlbumModel


def _ensure_valid(v: Validator) -> None:
    if v.has_errors():
        raise ValidationFailedError(v.errors)


def _read_int(v: Validator, raw: str | None, key: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        v.add_error(key, "must be an integer value")
        return default


def parse_csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


async def create_album(model: AlbumModel, payload: schemas.CreateAlbumRequest) -> Album:
    album = Album(
        title=payload.title,
        year=payload.year,
        runtime=payload.runtime,
        genres=list(payload.genres) if payload.genres is not None else None,
    )

    v = Validator()
    validate_album(v, album)
    _ensure_valid(v)

    await model.insert(album)
    return album


async def show_album(model: AlbumModel, album_id: int) -> Album:
    return await model.get(album_id)


async def update_album(model: AlbumModel, album_id: int, payload: schemas.UpdateAlbumRequest) -> Album:
    """
    Apply the provided fields on top of the current record and write it back
    under the version that was read. A concurrent writer turns this into an
    EditConflictError; the client re-fetches and retries.
    """
    album = await model.get(album_id)

    if payload.title is not None:
        album.title = payload.title
    if payload.year is not None:
        album.year = payload.year
    if payload.runtime is not None:
        album.runtime = payload.runtime
    if payload.genres is not None:
        album.genres = list(payload.genres)

    v = Validator()
    validate_album(v, album)
    _ensure_valid(v)

    await model.update(album)
    return album


async def delete_album(model: AlbumModel, album_id: int) -> None:
    await model.delete(album_id)


async def list_albums(
    model: AlbumModel,
    *,
    title: str = "",
    genres: str | None = None,
    page: str | None = None,
    page_size: str | None = None,
    sort: str | None = None,
) -> tuple[list[Album], Metadata]:
    v = Validator()
    filters = Filters(
        page=_read_int(v, page, "page", 1),
        page_size=_read_int(v, page_size, "page_size", 20),
        sort=sort or "id",
        sort_columns=ALBUM_SORT_COLUMNS,
    )
    validate_filters(v, filters)
    _ensure_valid(v)

    return await model.get_all((title or "").strip(), parse_csv(genres), filters)
