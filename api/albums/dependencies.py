"""
Album dependencies for FastAPI routes.
"""

from __future__ import annotations

from functools import lru_cache

from .repository import AlbumModel


@lru_cache(maxsize=1)
def get_album_model() -> AlbumModel:
    return AlbumModel()
