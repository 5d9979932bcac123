"""
Album API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from core.errors import RecordNotFoundError

from . import schemas, service
from .dependencies import get_album_model
from .models import MAX_ALBUM_ID
from .repository import AlbumModel

router = APIRouter(prefix="/v1/albums")


def _read_id(raw: str) -> int:
    # Non-numeric ids are treated like ids that do not exist.
    try:
        album_id = int(raw)
    except ValueError as exc:
        raise RecordNotFoundError() from exc
    if album_id < 1 or album_id > MAX_ALBUM_ID:
        raise RecordNotFoundError()
    return album_id


@router.get("")
async def list_albums(
    title: str = Query(default="", max_length=500),
    genres: str = Query(default=""),
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    model: AlbumModel = Depends(get_album_model),
) -> dict:
    albums, metadata = await service.list_albums(
        model,
        title=title,
        genres=genres,
        page=page,
        page_size=page_size,
        sort=sort,
    )
    return {
        "albums": [schemas.AlbumResponse.from_album(a) for a in albums],
        "metadata": schemas.MetadataResponse.from_metadata(metadata),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_album(
    request: schemas.CreateAlbumRequest,
    response: Response,
    model: AlbumModel = Depends(get_album_model),
) -> dict:
    album = await service.create_album(model, request)
    response.headers["Location"] = f"/v1/albums/{album.id}"
    return {"album": schemas.AlbumResponse.from_album(album)}


@router.get("/{album_id}")
async def show_album(
    album_id: str,
    model: AlbumModel = Depends(get_album_model),
) -> dict:
    album = await service.show_album(model, _read_id(album_id))
    return {"album": schemas.AlbumResponse.from_album(album)}


@router.api_route("/{album_id}", methods=["PUT", "PATCH"])
async def update_album(
    album_id: str,
    request: schemas.UpdateAlbumRequest,
    model: AlbumModel = Depends(get_album_model),
) -> dict:
    album = await service.update_album(model, _read_id(album_id), request)
    return {"album": schemas.AlbumResponse.from_album(album)}


@router.delete("/{album_id}")
async def delete_album(
    album_id: str,
    model: AlbumModel = Depends(get_album_model),
) -> dict:
    await service.delete_album(model, _read_id(album_id))
    return {"message": "album successfully deleted"}
