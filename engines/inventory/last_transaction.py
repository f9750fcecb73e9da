"""
Back Office Inventory Engine - Last-Transaction Matcher
=========================================================
Finds the most recent sale or purchase line for an inventory item.

A line belongs to the item when its identifier (first present of _id,
id, productId, productName, sku) equals the item id, or its name
(productName, then itemName) equals the item name. Empty values never
match.

Only the first matching line of each transaction counts. Among the
matching transactions the latest date wins; on equal dates the one
seen last wins. Transactions without a readable date sort as the
epoch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from core.primitives.fields import first_truthy
from core.primitives.inventory import InventoryItem
from core.primitives.item import LineItem, TransactionKind
from core.time import EPOCH, parse_datetime, sort_key


logger = logging.getLogger("backoffice.inventory")


_LINE_LIST_FIELDS = {
    TransactionKind.SALE: ("items", "products"),
    TransactionKind.PURCHASE: ("products",),
}

TRANSACTION_DATE_FIELDS = ("invoiceDate", "date", "poDate", "createdAt")


@dataclass(frozen=True)
class MatchedLine:
    line: LineItem
    date: datetime
    transaction_id: str = ""

    def to_dict(self) -> dict:
        result = self.line.to_dict()
        result["date"] = self.date.isoformat() if self.date != EPOCH else None
        result["transaction_id"] = self.transaction_id
        return result


def transaction_date(transaction: Mapping[str, Any]) -> datetime:
    return sort_key(parse_datetime(first_truthy(transaction, *TRANSACTION_DATE_FIELDS)))


def transaction_lines(
    transaction: Mapping[str, Any], kind: TransactionKind
) -> List[Mapping[str, Any]]:
    lines = first_truthy(transaction, *_LINE_LIST_FIELDS[kind])
    if not isinstance(lines, (list, tuple)):
        return []
    return [line for line in lines if isinstance(line, Mapping)]


def line_matches(line: LineItem, item: InventoryItem) -> bool:
    if line.identifier and line.identifier == item.id:
        return True
    return bool(line.name) and line.name == item.name


def first_matching_line(
    transaction: Mapping[str, Any], item: InventoryItem, kind: TransactionKind
) -> Optional[LineItem]:
    for raw in transaction_lines(transaction, kind):
        line = LineItem.from_dict(raw, kind)
        if line_matches(line, item):
            return line
    return None


def last_match(
    item: InventoryItem,
    transactions: Iterable[Mapping[str, Any]],
    kind: TransactionKind,
) -> Optional[MatchedLine]:
    best: Optional[MatchedLine] = None
    for transaction in transactions:
        if not isinstance(transaction, Mapping):
            continue
        line = first_matching_line(transaction, item, kind)
        if line is None:
            continue
        when = transaction_date(transaction)
        if best is None or when >= best.date:
            best = MatchedLine(
                line=line,
                date=when,
                transaction_id=str(first_truthy(transaction, "_id", "id") or ""),
            )
    return best
