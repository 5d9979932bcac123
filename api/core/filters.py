"""
Sorting and paging parameters for list endpoints, plus the pagination
metadata returned alongside a page of results.

Sort keys are resolved through an allow-list mapping (key -> column); caller
text never reaches the SQL string.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .validator import Validator, permitted_value

MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100


@dataclass
class Filters:
    page: int = 1
    page_size: int = 20
    sort: str = "id"
    # sort key -> column name; "-<key>" is accepted for descending order
    sort_columns: dict[str, str] = field(default_factory=lambda: {"id": "id"})

    def sort_safelist(self) -> list[str]:
        keys = list(self.sort_columns)
        return keys + [f"-{k}" for k in keys]

    def sort_column(self) -> str:
        key = self.sort[1:] if self.sort.startswith("-") else self.sort
        column = self.sort_columns.get(key)
        if column is None:
            raise ValueError(f"unsafe sort parameter: {self.sort!r}")
        return column

    def sort_direction(self) -> str:
        return "DESC" if self.sort.startswith("-") else "ASC"

    def limit(self) -> int:
        return self.page_size

    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def validate_filters(v: Validator, f: Filters) -> None:
    v.check(f.page > 0, "page", "must be greater than zero")
    v.check(f.page <= MAX_PAGE, "page", "must be a maximum of 10 million")
    v.check(f.page_size > 0, "page_size", "must be greater than zero")
    v.check(f.page_size <= MAX_PAGE_SIZE, "page_size", "must be a maximum of 100")
    v.check(permitted_value(f.sort, *f.sort_safelist()), "sort", "invalid sort value")


@dataclass(frozen=True)
class Metadata:
    current_page: int = 0
    page_size: int = 0
    first_page: int = 0
    last_page: int = 0
    total_records: int = 0


def calculate_metadata(total_records: int, page: int, page_size: int) -> Metadata:
    if total_records == 0:
        return Metadata()

    return Metadata(
        current_page=page,
        page_size=page_size,
        first_page=1,
        last_page=(total_records + page_size - 1) // page_size,
        total_records=total_records,
    )
