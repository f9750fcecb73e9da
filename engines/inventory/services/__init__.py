"""
Back Office Inventory Engine - Stock Report Service
=====================================================
Builds the stock report from the product master and the sale /
purchase history:

    per item: status, current stock, stock value,
              last sale line, last purchase line
    summary:  item counts per status and total stock value

The report is a pure function of its inputs; nothing is cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence

from core.primitives.fields import ZERO
from core.primitives.inventory import InventoryItem, StockStatus
from core.primitives.item import TransactionKind
from engines.inventory.last_transaction import MatchedLine, last_match
from engines.inventory.stock_classifier import classify, count_by_status, item_value


logger = logging.getLogger("backoffice.inventory")


# ══════════════════════════════════════════════════════════════
# RESULT TYPES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StockRow:
    item: InventoryItem
    status: StockStatus
    current_stock: Decimal
    stock_value: Decimal
    last_sale: Optional[MatchedLine] = None
    last_purchase: Optional[MatchedLine] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item": self.item.to_dict(),
            "status": self.status.value,
            "current_stock": str(self.current_stock),
            "stock_value": str(self.stock_value),
            "last_sale": self.last_sale.to_dict() if self.last_sale else None,
            "last_purchase": self.last_purchase.to_dict() if self.last_purchase else None,
        }


@dataclass(frozen=True)
class StockSummary:
    total_items: int = 0
    in_stock_items: int = 0
    low_stock_items: int = 0
    negative_stock_items: int = 0
    stock_value: Decimal = ZERO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_items": self.total_items,
            "in_stock_items": self.in_stock_items,
            "low_stock_items": self.low_stock_items,
            "negative_stock_items": self.negative_stock_items,
            "stock_value": str(self.stock_value),
        }


@dataclass(frozen=True)
class StockReport:
    rows: List[StockRow] = field(default_factory=list)
    summary: StockSummary = field(default_factory=StockSummary)

    def rows_for(self, status: Optional[StockStatus] = None) -> List[StockRow]:
        """Rows for one status tab; None is the "All" tab."""
        if status is None:
            return list(self.rows)
        return [row for row in self.rows if row.status is status]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "summary": self.summary.to_dict(),
        }


# ══════════════════════════════════════════════════════════════
# SERVICE
# ══════════════════════════════════════════════════════════════

class StockReportService:
    def build_row(
        self,
        item: InventoryItem,
        sales: Sequence[Mapping[str, Any]] = (),
        purchases: Sequence[Mapping[str, Any]] = (),
    ) -> StockRow:
        return StockRow(
            item=item,
            status=classify(item),
            current_stock=item.current_stock,
            stock_value=item_value(item),
            last_sale=last_match(item, sales, TransactionKind.SALE),
            last_purchase=last_match(item, purchases, TransactionKind.PURCHASE),
        )

    def build(
        self,
        inventory: Sequence[InventoryItem],
        sales: Sequence[Mapping[str, Any]] = (),
        purchases: Sequence[Mapping[str, Any]] = (),
    ) -> StockReport:
        rows = [self.build_row(item, sales, purchases) for item in inventory]

        counts = count_by_status(inventory)
        summary = StockSummary(
            total_items=len(rows),
            in_stock_items=counts[StockStatus.IN_STOCK],
            low_stock_items=counts[StockStatus.LOW_STOCK],
            negative_stock_items=counts[StockStatus.NEGATIVE_STOCK],
            stock_value=sum((row.stock_value for row in rows), ZERO),
        )
        logger.info(
            f"Stock report built: {summary.total_items} items, "
            f"{summary.low_stock_items} low, {summary.negative_stock_items} negative"
        )
        return StockReport(rows=rows, summary=summary)
