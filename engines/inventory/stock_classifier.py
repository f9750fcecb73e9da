"""
Back Office Inventory Engine - Stock Classifier & Valuer
==========================================================
Derives stock health from the current stock figure and the item's
reorder threshold, and values stock at the sales rate.

RULES:
- current < 0                         -> Negative Stock
- minimum > 0 and 0 < current < min   -> Low Stock
- anything else                       -> In Stock
  (zero stock is never "low", and a zero minimum disables the check)
- valuation = sum(current * sales_rate), negative stock included
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable

from core.primitives.fields import ZERO
from core.primitives.inventory import InventoryItem, StockStatus


def classify(item: InventoryItem) -> StockStatus:
    current = item.current_stock
    minimum = item.minimum_stock_level
    if current < 0:
        return StockStatus.NEGATIVE_STOCK
    if minimum > 0 and 0 < current < minimum:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def item_value(item: InventoryItem) -> Decimal:
    return item.current_stock * item.sales_rate


def valuation(items: Iterable[InventoryItem]) -> Decimal:
    return sum((item_value(item) for item in items), ZERO)


def count_by_status(items: Iterable[InventoryItem]) -> Dict[StockStatus, int]:
    """Every status is present in the result, possibly with 0."""
    counts = {status: 0 for status in StockStatus}
    for item in items:
        counts[classify(item)] += 1
    return counts
