"""
Back Office Item Primitive - Transaction Line Items
=====================================================
A line on a sale or purchase transaction, read for "last activity"
lookups against the inventory.

Line items come from several document generations with different
field names, so a line carries its whole identifier chain and both
possible name fields. Sale and purchase lines also disagree on where
quantity and rate live.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from core.primitives.fields import (
    as_text,
    first_present,
    to_optional_decimal,
)


class TransactionKind(Enum):
    SALE = "sale"
    PURCHASE = "purchase"


# Identifier precedence: the first present field is the line's identifier.
LINE_ID_FIELDS = ("_id", "id", "productId", "productName", "sku")
LINE_NAME_FIELDS = ("productName", "itemName")

_QUANTITY_FIELDS = {
    TransactionKind.SALE: ("quantity",),
    TransactionKind.PURCHASE: ("quantity", "received"),
}
_RATE_FIELDS = {
    TransactionKind.SALE: ("salesRate", "price"),
    TransactionKind.PURCHASE: ("rate",),
}


@dataclass(frozen=True)
class LineItem:
    identifier: str
    name: str
    quantity: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], kind: TransactionKind) -> LineItem:
        return cls(
            identifier=as_text(first_present(data, *LINE_ID_FIELDS)),
            name=as_text(first_present(data, *LINE_NAME_FIELDS)),
            quantity=to_optional_decimal(first_present(data, *_QUANTITY_FIELDS[kind])),
            rate=to_optional_decimal(first_present(data, *_RATE_FIELDS[kind])),
            raw=data,
        )

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "quantity": str(self.quantity) if self.quantity is not None else None,
            "rate": str(self.rate) if self.rate is not None else None,
        }
