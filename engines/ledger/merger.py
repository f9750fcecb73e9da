"""
Back Office Ledger Engine - Ledger Merger
===========================================
Concatenates normalized entries from every source collection into one
chronological sequence.

RULES:
- First occurrence of an entry id wins; later duplicates are dropped
  (merging the same collections twice yields the same ledger)
- Ascending by date, stable: equal dates keep processing order, which
  is sales, purchases, receipts, payments, each in collection order
- Unreadable dates sort as the epoch
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from core.config import ReportConfig
from core.primitives.document import SourceDocument
from core.primitives.ledger import LedgerEntry
from core.time import Clock, sort_key
from engines.ledger.normalizer import normalize


logger = logging.getLogger("backoffice.ledger")

_DEFAULT_CONFIG = ReportConfig()


def merge_entries(entries: Iterable[LedgerEntry]) -> List[LedgerEntry]:
    """
    Deduplicate already-normalized entries by id and sort them.

    Feeding merge output back through here is a fixed point.
    """
    seen: Dict[str, LedgerEntry] = {}
    duplicates = 0
    for entry in entries:
        if entry.id in seen:
            duplicates += 1
            continue
        seen[entry.id] = entry

    if duplicates:
        logger.debug(f"Merge dropped {duplicates} duplicate ledger entries")

    return sorted(seen.values(), key=lambda e: sort_key(e.date))


def merge(
    sources: Sequence[Iterable[SourceDocument]],
    *,
    clock: Optional[Clock] = None,
    config: ReportConfig = _DEFAULT_CONFIG,
) -> List[LedgerEntry]:
    """
    Normalize every document of every source collection and merge.

    Pass the collections in ledger order (sales, purchases, receipts,
    payments); that order is the tie-break for equal dates.
    """
    normalized = (
        normalize(doc, clock=clock, config=config)
        for collection in sources
        for doc in collection
    )
    merged = merge_entries(normalized)
    logger.debug(f"Merged {len(sources)} source collections into {len(merged)} entries")
    return merged
