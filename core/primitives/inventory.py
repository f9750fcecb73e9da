"""
Back Office Inventory Primitive - Stock-Holding Items
=======================================================
An inventory item as the product master reports it: opening stock, a
running stock figure once the item has moved, the reorder threshold
and the sales rate used to value it.

current_stock = stock ?? opening_stock ?? 0. The running figure wins
once present, because items are created with only an opening stock and
pick up `stock` when later updated. Stock may be negative.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from core.primitives.fields import (
    ZERO,
    as_text,
    first_present,
    optional_text,
    to_decimal,
    to_optional_decimal,
)


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class StockStatus(Enum):
    """Derived stock health. Never stored."""
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    NEGATIVE_STOCK = "Negative Stock"


# ══════════════════════════════════════════════════════════════
# INVENTORY ITEM
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class InventoryItem:
    id: str
    name: str
    category: Optional[str] = None
    opening_stock: Optional[Decimal] = None
    stock: Optional[Decimal] = None
    minimum_stock_level: Decimal = ZERO
    sales_rate: Decimal = ZERO

    @property
    def current_stock(self) -> Decimal:
        if self.stock is not None:
            return self.stock
        if self.opening_stock is not None:
            return self.opening_stock
        return ZERO

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InventoryItem:
        return cls(
            id=as_text(first_present(data, "_id", "id")),
            name=as_text(first_present(data, "itemName", "name")),
            category=optional_text(data.get("category")),
            opening_stock=to_optional_decimal(data.get("openingStock")),
            stock=to_optional_decimal(data.get("stock")),
            minimum_stock_level=to_decimal(data.get("minimumStockLevel")),
            sales_rate=to_decimal(first_present(data, "salesRate", "salePrice")),
        )

    def to_dict(self) -> dict:
        def _opt(value: Optional[Decimal]) -> Optional[str]:
            return str(value) if value is not None else None

        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "opening_stock": _opt(self.opening_stock),
            "stock": _opt(self.stock),
            "current_stock": str(self.current_stock),
            "minimum_stock_level": str(self.minimum_stock_level),
            "sales_rate": str(self.sales_rate),
        }
