"""
Back Office Ledger Engine - Filter Pipeline
=============================================
Narrows a merged ledger by the user's criteria, in a fixed order:

    1. scope          all | customers | suppliers
    2. entity         exact, case-sensitive counterparty name
    3. document type  allowed set (empty = everything)
    4. date range     inclusive, "to" widened to end of day
    5. free text      case-insensitive substring of number,
                      particulars or counterparty name

Each stage only ever removes entries, so adding a criterion can never
grow the result.

Entity matching is by name because receipts and payments carry a
free-text counterparty and no id. A customer and a supplier sharing a
name therefore share ledger lines.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from core.primitives.ledger import DocumentType, LedgerEntry
from core.primitives.party import Entity, EntityRef
from core.time import DateRange


logger = logging.getLogger("backoffice.ledger")


# ══════════════════════════════════════════════════════════════
# CRITERIA
# ══════════════════════════════════════════════════════════════

class LedgerScope(Enum):
    ALL = "all"
    CUSTOMERS = "customers"
    SUPPLIERS = "suppliers"


@dataclass(frozen=True)
class LedgerCriteria:
    """
    Everything the user can narrow a ledger by. Comparable, so a pager
    can tell when criteria changed.

    date_from / date_to are kept raw (strings, dates or datetimes) and
    parsed leniently when the filter runs.
    """
    scope: LedgerScope = LedgerScope.ALL
    entity: Optional[EntityRef] = None
    document_types: FrozenSet[DocumentType] = field(default_factory=frozenset)
    date_from: Any = None
    date_to: Any = None
    search: str = ""

    def __post_init__(self):
        if not isinstance(self.scope, LedgerScope):
            raise ValueError("scope must be LedgerScope enum.")
        if self.entity is not None and not isinstance(self.entity, EntityRef):
            raise ValueError("entity must be EntityRef or None.")
        if not isinstance(self.document_types, frozenset):
            raise ValueError("document_types must be a frozenset.")
        for doc_type in self.document_types:
            if not isinstance(doc_type, DocumentType):
                raise ValueError("document_types must contain DocumentType values.")
        if not isinstance(self.search, str):
            raise ValueError("search must be a string.")

    @property
    def date_range(self) -> DateRange:
        return DateRange.from_bounds(self.date_from, self.date_to)


# ══════════════════════════════════════════════════════════════
# STAGES
# ══════════════════════════════════════════════════════════════

def in_scope(entry: LedgerEntry, scope: LedgerScope) -> bool:
    if scope is LedgerScope.CUSTOMERS:
        return (
            entry.document_type.is_sale_type
            or entry.document_type is DocumentType.RECEIPT
        )
    if scope is LedgerScope.SUPPLIERS:
        return (
            entry.document_type.is_purchase_type
            or entry.document_type is DocumentType.PAYMENT
        )
    return True


def filter_scope(entries: Iterable[LedgerEntry], scope: LedgerScope) -> List[LedgerEntry]:
    if scope is LedgerScope.ALL:
        return list(entries)
    return [e for e in entries if in_scope(e, scope)]


def filter_entity(entries: Iterable[LedgerEntry], entity_name: str) -> List[LedgerEntry]:
    return [e for e in entries if e.counterparty_name == entity_name]


def filter_document_types(
    entries: Iterable[LedgerEntry], allowed: FrozenSet[DocumentType]
) -> List[LedgerEntry]:
    if not allowed:
        return list(entries)
    return [e for e in entries if e.document_type in allowed]


def filter_date_range(entries: Iterable[LedgerEntry], window: DateRange) -> List[LedgerEntry]:
    if window.is_open:
        return list(entries)
    return [e for e in entries if window.contains(e.date)]


def matches_search(entry: LedgerEntry, term: str) -> bool:
    needle = term.lower()
    return (
        needle in entry.document_number.lower()
        or needle in entry.particulars.lower()
        or needle in entry.counterparty_name.lower()
    )


def filter_search(entries: Iterable[LedgerEntry], term: str) -> List[LedgerEntry]:
    if not term:
        return list(entries)
    return [e for e in entries if matches_search(e, term)]


# ══════════════════════════════════════════════════════════════
# PIPELINE
# ══════════════════════════════════════════════════════════════

def entity_name_for(criteria: LedgerCriteria, entity: Optional[Entity]) -> Optional[str]:
    """
    Name the entity stage matches on, or None when no entity is selected.

    A selection that did not resolve to a known party matches the empty
    name, which no normalized entry carries.
    """
    if criteria.entity is None:
        return None
    return entity.name if entity is not None else ""


def filter_entries(
    entries: Sequence[LedgerEntry],
    criteria: LedgerCriteria,
    entity: Optional[Entity] = None,
) -> List[LedgerEntry]:
    """
    Apply all five stages in order.

    `entity` is criteria.entity already resolved against the customer /
    supplier reference data (see core.primitives.party.resolve_entity).
    """
    stages: List[Tuple[str, Callable[[List[LedgerEntry]], List[LedgerEntry]]]] = [
        ("scope", lambda es: filter_scope(es, criteria.scope)),
    ]
    name = entity_name_for(criteria, entity)
    if name is not None:
        stages.append(("entity", lambda es: filter_entity(es, name)))
    stages.extend([
        ("document_type", lambda es: filter_document_types(es, criteria.document_types)),
        ("date_range", lambda es: filter_date_range(es, criteria.date_range)),
        ("search", lambda es: filter_search(es, criteria.search)),
    ])

    result = list(entries)
    for stage_name, stage in stages:
        before = len(result)
        result = stage(result)
        if len(result) != before:
            logger.debug(f"Filter stage '{stage_name}': {before} -> {len(result)} entries")
    return result
