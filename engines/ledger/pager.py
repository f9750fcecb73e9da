"""
Back Office Ledger Engine - Pager
===================================
Fixed-size windows over the final sequence.

paginate() never raises on an out-of-range page; it returns an empty
window. It does not clamp either. PageState is the caller-side
contract: it resets to page 1 whenever the criteria or the page size
change, and clamped() pulls a stale page back into range after the
result set shrinks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Generic, List, Sequence, TypeVar

from engines.ledger.filters import LedgerCriteria


T = TypeVar("T")

DEFAULT_PAGE_SIZE = 25


def _check_page_size(page_size: int) -> None:
    if not isinstance(page_size, int) or isinstance(page_size, bool) or page_size < 1:
        raise ValueError(f"page_size must be a positive int, got {page_size!r}.")


def total_pages(count: int, page_size: int) -> int:
    _check_page_size(page_size)
    return math.ceil(count / page_size)


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
    """items[(page-1)*page_size : page*page_size]; empty when out of range."""
    _check_page_size(page_size)
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.page_size)

    @classmethod
    def of(cls, items: Sequence[T], page: int, page_size: int) -> Page[T]:
        return cls(
            items=paginate(items, page, page_size),
            page=page,
            page_size=page_size,
            total_count=len(items),
        )


# ══════════════════════════════════════════════════════════════
# PAGE STATE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PageState:
    """Current page, page size and the criteria the page belongs to."""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    criteria: LedgerCriteria = field(default_factory=LedgerCriteria)

    def __post_init__(self):
        _check_page_size(self.page_size)
        if not isinstance(self.page, int) or isinstance(self.page, bool):
            raise ValueError("page must be an int.")
        if not isinstance(self.criteria, LedgerCriteria):
            raise ValueError("criteria must be LedgerCriteria.")

    def with_criteria(self, criteria: LedgerCriteria) -> PageState:
        if criteria == self.criteria:
            return self
        return replace(self, criteria=criteria, page=1)

    def with_page_size(self, page_size: int) -> PageState:
        if page_size == self.page_size:
            return self
        return replace(self, page_size=page_size, page=1)

    def clamped(self, pages: int) -> PageState:
        """Pull the page into [1, pages] (page 1 when there are none)."""
        target = min(max(self.page, 1), max(pages, 1))
        if target == self.page:
            return self
        return replace(self, page=target)
