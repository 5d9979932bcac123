"""
Field-keyed input validation.

A Validator collects one message per field key; the first failing rule for a
key wins. Use a fresh Validator per record being validated.
"""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable


class Validator:
    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def has_errors(self) -> bool:
        return bool(self.errors)

    def add_error(self, key: str, message: str) -> None:
        if key not in self.errors:
            self.errors[key] = message

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)


def permitted_value(value: Hashable, *permitted: Hashable) -> bool:
    return value in permitted


def matches(value: str, pattern: str | re.Pattern[str]) -> bool:
    rx = re.compile(pattern) if isinstance(pattern, str) else pattern
    return rx.match(value) is not None


def unique(values: Iterable[Hashable]) -> bool:
    seen: set[Hashable] = set()
    for value in values:
        if value in seen:
            return False
        seen.add(value)
    return True
