"""Search and pagination over dataset rows for tabular display."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from .models import Row

DEFAULT_PAGE_SIZE = 10


@dataclass
class Page:
    items: List[Row] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def search_rows(rows: Sequence[Row], query: str) -> List[Row]:
    """Rows with any value containing ``query`` (case-insensitive)."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(rows)
    return [row for row in rows if any(needle in str(value).lower() for value in row.values())]


def paginate(rows: Sequence[Row], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice ``rows`` into a 1-based page; out-of-range pages are clamped."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total = len(rows)
    total_pages = math.ceil(total / page_size)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * page_size
    return Page(items=list(rows[start:start + page_size]), page=page,
                total_pages=total_pages, total=total)
