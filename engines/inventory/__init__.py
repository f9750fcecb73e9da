"""
Back Office Inventory Engine
=============================
Stock status, valuation and last sale / purchase lookups.
"""

from engines.inventory.last_transaction import MatchedLine, last_match
from engines.inventory.stock_classifier import (
    classify,
    count_by_status,
    item_value,
    valuation,
)

__all__ = [
    "MatchedLine",
    "classify",
    "count_by_status",
    "item_value",
    "last_match",
    "valuation",
]
