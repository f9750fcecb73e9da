"""
Back Office Expense Primitive
===============================
An operating expense (rent, utilities, fuel...). Expenses never reach
the journal ledger; they only feed the profit & loss report.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from core.primitives.fields import (
    ZERO,
    as_text,
    first_truthy,
    optional_text,
    record_id,
    to_decimal,
)
from core.time.temporal import parse_datetime


@dataclass(frozen=True)
class Expense:
    id: str
    date: Optional[datetime]
    number: str
    category: Optional[str]
    amount: Decimal = ZERO
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Expense:
        source_id = record_id(data)
        return cls(
            id=source_id,
            date=parse_datetime(data.get("date")),
            number=as_text(first_truthy(data, "expenseNumber")) or source_id,
            category=optional_text(data.get("categoryType")),
            amount=to_decimal(data.get("amount")),
            description=optional_text(data.get("description")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "number": self.number,
            "category": self.category,
            "amount": str(self.amount),
            "description": self.description,
        }
