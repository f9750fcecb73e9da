"""
Back Office Ledger Engine - Journal Ledger Service
====================================================
One query against the combined journal ledger:

    merge (memoized) -> resolve entity -> filter -> balances
                     -> totals -> page

Everything is recomputed per query from the collections passed in.
Only the merge stage is memoized, keyed on the identity of the source
collections, so swapping in a new list always produces a fresh ledger.
A memoized merge also keeps the "now" it gave to undated documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core.caching import IdentityMemo
from core.config import ReportConfig
from core.primitives.document import SourceDocument
from core.primitives.ledger import LedgerEntry, LedgerTotals
from core.primitives.party import Entity, resolve_entity
from core.time import Clock, get_default_clock
from engines.ledger.balance import opening_seed, summarize, with_balances
from engines.ledger.filters import filter_entries
from engines.ledger.merger import merge
from engines.ledger.pager import Page, PageState


logger = logging.getLogger("backoffice.ledger")


# ══════════════════════════════════════════════════════════════
# SOURCES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerSources:
    """
    The four source collections, in ledger tie-break order.

    Collections are held as given (not copied) so the merge memo can
    recognise them by identity.
    """
    sales: Sequence[SourceDocument] = field(default_factory=tuple)
    purchases: Sequence[SourceDocument] = field(default_factory=tuple)
    receipts: Sequence[SourceDocument] = field(default_factory=tuple)
    payments: Sequence[SourceDocument] = field(default_factory=tuple)

    def collections(self) -> tuple:
        return (self.sales, self.purchases, self.receipts, self.payments)

    @property
    def document_count(self) -> int:
        return sum(len(c) for c in self.collections())


# ══════════════════════════════════════════════════════════════
# RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class JournalLedgerResult:
    """
    balanced_entries is the whole filtered sequence with balances;
    page carries the visible window of it.
    """
    page: Page[LedgerEntry]
    balanced_entries: List[LedgerEntry]
    totals: LedgerTotals
    opening_balance: Decimal
    entity: Optional[Entity] = None

    @property
    def entries(self) -> List[LedgerEntry]:
        return self.page.items

    @property
    def total_count(self) -> int:
        return self.page.total_count

    @property
    def total_pages(self) -> int:
        return self.page.total_pages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "totals": self.totals.to_dict(),
            "opening_balance": str(self.opening_balance),
            "entity": self.entity.to_dict() if self.entity else None,
            "page": self.page.page,
            "page_size": self.page.page_size,
            "total_pages": self.total_pages,
            "total_count": self.total_count,
        }


@dataclass(frozen=True)
class EntityOption:
    value: str
    label: str


@dataclass(frozen=True)
class EntityOptionGroup:
    label: str
    options: List[EntityOption]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "options": [{"value": o.value, "label": o.label} for o in self.options],
        }


# ══════════════════════════════════════════════════════════════
# SERVICE
# ══════════════════════════════════════════════════════════════

class JournalLedgerService:
    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        config: Optional[ReportConfig] = None,
    ) -> None:
        self._clock = clock or get_default_clock()
        self._config = config or ReportConfig()
        self._merge_memo: IdentityMemo[List[LedgerEntry]] = IdentityMemo(
            max_size=self._config.merge_cache_size
        )

    @property
    def config(self) -> ReportConfig:
        return self._config

    @property
    def merge_memo(self) -> IdentityMemo[List[LedgerEntry]]:
        return self._merge_memo

    def merged(self, sources: LedgerSources) -> List[LedgerEntry]:
        collections = sources.collections()
        return self._merge_memo.get_or_compute(
            collections,
            lambda: merge(collections, clock=self._clock, config=self._config),
        )

    def build(
        self,
        sources: LedgerSources,
        customers: Sequence[Entity] = (),
        suppliers: Sequence[Entity] = (),
        state: Optional[PageState] = None,
    ) -> JournalLedgerResult:
        state = state or PageState(page_size=self._config.default_page_size)
        criteria = state.criteria

        entity = resolve_entity(criteria.entity, customers, suppliers)
        if criteria.entity is not None and entity is None:
            logger.warning(
                f"Selected entity '{criteria.entity.key}' not found; "
                f"ledger will be empty"
            )

        merged = self.merged(sources)
        filtered = filter_entries(merged, criteria, entity)
        seed = opening_seed(entity)
        balanced = with_balances(filtered, seed)
        totals = summarize(balanced, seed)
        page = Page.of(balanced, state.page, state.page_size)

        logger.info(
            f"Journal ledger built: {len(merged)} merged, "
            f"{len(balanced)} after filters, page {page.page}/{page.total_pages}"
        )
        return JournalLedgerResult(
            page=page,
            balanced_entries=balanced,
            totals=totals,
            opening_balance=seed,
            entity=entity,
        )

    @staticmethod
    def entity_options(
        customers: Iterable[Entity], suppliers: Iterable[Entity]
    ) -> List[EntityOptionGroup]:
        """Selection options, customers first, each labelled with its type."""
        return [
            EntityOptionGroup(
                label="Customers",
                options=[EntityOption(value=c.key, label=c.label) for c in customers],
            ),
            EntityOptionGroup(
                label="Suppliers",
                options=[EntityOption(value=s.key, label=s.label) for s in suppliers],
            ),
        ]
