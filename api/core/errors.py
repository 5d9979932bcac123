"""
Domain error taxonomy for the data-access layer.

Storage failures (asyncpg errors, connection errors, timeouts) are not
wrapped; they propagate unchanged.
"""

from __future__ import annotations


class DataError(RuntimeError):
    pass


class RecordNotFoundError(DataError):
    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


class EditConflictError(DataError):
    def __init__(self, message: str = "edit conflict") -> None:
        super().__init__(message)


class ValidationFailedError(DataError):
    """
    Caller-supplied input broke one or more field rules.

    `errors` maps field key -> first failing message for that key.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("validation failed")
        self.errors = dict(errors)
