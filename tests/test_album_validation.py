"""Tests for album field rules."""

from collections.abc import Callable
from datetime import date

import pytest
from albums.models import Album, validate_album
from core.validator import Validator


def _errors(album: Album) -> dict[str, str]:
    v = Validator()
    validate_album(v, album)
    return v.errors


class TestValidateAlbum:
    """Tests for validate_album()."""

    def test_valid_album_has_no_errors(self, make_album: Callable[..., Album]) -> None:
        assert _errors(make_album()) == {}

    def test_boundary_values_are_valid(self, make_album: Callable[..., Album]) -> None:
        album = make_album(
            title="x" * 500,
            year=date.today().year,
            runtime=1,
            genres=["a", "b", "c", "d", "e"],
        )
        assert _errors(album) == {}
        assert _errors(make_album(year=1888, genres=["solo"])) == {}
        assert _errors(make_album(runtime=2**31 - 1)) == {}

    @pytest.mark.parametrize(
        ("kwargs", "key", "message"),
        [
            ({"title": ""}, "title", "must be provided"),
            ({"title": "x" * 501}, "title", "must not be more than 500 bytes long"),
            ({"year": 0}, "year", "must be provided"),
            ({"year": 1887}, "year", "must be greater than 1888"),
            ({"year": date.today().year + 1}, "year", "must not be in the future"),
            ({"runtime": 0}, "runtime", "must be provided"),
            ({"runtime": -3}, "runtime", "must be a positive integer"),
            ({"runtime": 2**31}, "runtime", "must not be more than 2147483647"),
            ({"year": 2**40}, "year", "must not be in the future"),
            ({"genres": None}, "genres", "must be provided"),
            ({"genres": []}, "genres", "must contain at least 1 genre"),
            ({"genres": ["a", "b", "c", "d", "e", "f"]}, "genres", "must not contain more than 5 genres"),
            ({"genres": ["rock", "pop", "rock"]}, "genres", "must not contain duplicate values"),
        ],
    )
    def test_each_rule(
        self,
        make_album: Callable[..., Album],
        kwargs: dict,
        key: str,
        message: str,
    ) -> None:
        assert _errors(make_album(**kwargs)) == {key: message}

    def test_title_limit_counts_bytes_not_characters(self, make_album: Callable[..., Album]) -> None:
        # 250 two-byte characters fit, 251 do not.
        assert _errors(make_album(title="é" * 250)) == {}
        assert _errors(make_album(title="é" * 251)) == {"title": "must not be more than 500 bytes long"}

    def test_reports_every_failing_field(self) -> None:
        """All rules run; one message per broken field."""
        errors = _errors(Album())
        assert errors == {
            "title": "must be provided",
            "year": "must be provided",
            "runtime": "must be provided",
            "genres": "must be provided",
        }
