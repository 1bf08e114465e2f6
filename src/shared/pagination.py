"""Pagination over repository records."""

from dataclasses import dataclass, field
from math import ceil
from typing import Any

# Records are loaded from the store in batches of this size
_BATCH_SIZE = 100


@dataclass(frozen=True)
class Page:
    """A slice of a result set plus the numbers a client needs to page through it."""

    items: list[Any] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0

    def meta(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


def paginate(items: list, page: int = 1, limit: int = 10) -> Page:
    """Cut ``items`` down to one page. Page numbers start at 1."""
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    start = (page - 1) * limit
    return Page(items=list(items[start : start + limit]), page=page, limit=limit, total=len(items))


def fetch_all(repository, **filters) -> list:
    """Load every record in ``repository`` matching the equality ``filters``."""
    records = []
    offset = 0
    while True:
        query = repository._dao.query
        if filters:
            query = query.filter(**filters)
        result = query.offset(offset).limit(_BATCH_SIZE).all()
        records.extend(result.items)
        offset += _BATCH_SIZE
        if offset >= result.total:
            return records
