"""
Back Office Ledger Primitive - Normalized Journal Entries
===========================================================
One dated financial movement derived from a source document.

RULES:
- Exactly one of debit / credit is non-zero (both zero only for a
  zero-amount document)
- Entries are immutable; the running balance is attached by producing
  a copy, never by mutating an entry
- balance is None until a balance pass has run over a specific
  filtered sequence. It is not a property of the entry itself.
- Amounts are Decimal

This file contains NO ledger logic. See engines/ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from core.primitives.fields import ZERO


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class DocumentType(Enum):
    """Ledger document type. Values are the display labels."""
    SALE_INVOICE = "Sale Invoice"
    PURCHASE_INVOICE = "Purchase Invoice"
    RECEIPT = "Receipt"
    PAYMENT = "Payment"

    @property
    def is_sale_type(self) -> bool:
        return "Sale" in self.value

    @property
    def is_purchase_type(self) -> bool:
        return "Purchase" in self.value

    @classmethod
    def parse(cls, value: str) -> DocumentType:
        """Accept either the display label or the enum name."""
        for member in cls:
            if value in (member.value, member.name):
                return member
        raise ValueError(f"'{value}' is not a valid document type.")


class BalanceSide(Enum):
    """Display convention: positive running balance is CR."""
    CR = "CR"
    DR = "DR"

    @classmethod
    def of(cls, balance: Decimal) -> BalanceSide:
        return cls.CR if balance >= 0 else cls.DR


# ══════════════════════════════════════════════════════════════
# LEDGER ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerEntry:
    """
    Fields:
        id:                "{kind}-{source id}"; the deduplication key
        date:              document date (None when unparseable)
        document_type:     DocumentType
        document_number:   invoice / PO / voucher number
        particulars:       generated description
        debit, credit:     Decimal, one of them zero
        counterparty_name: customer, supplier, payer or payee name
        counterparty_id:   "" for vouchers (free-text counterparties)
        balance:           running balance, set by the balance pass
    """
    id: str
    date: Optional[datetime]
    document_type: DocumentType
    document_number: str
    particulars: str
    debit: Decimal
    credit: Decimal
    counterparty_name: str
    counterparty_id: str = ""
    balance: Optional[Decimal] = None

    def __post_init__(self):
        if not isinstance(self.document_type, DocumentType):
            raise ValueError("document_type must be DocumentType enum.")
        if self.debit != ZERO and self.credit != ZERO:
            raise ValueError(
                f"Ledger entry {self.id} has both debit and credit set."
            )

    def with_balance(self, balance: Decimal) -> LedgerEntry:
        return replace(self, balance=balance)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "document_type": self.document_type.value,
            "document_number": self.document_number,
            "particulars": self.particulars,
            "debit": str(self.debit),
            "credit": str(self.credit),
            "balance": str(self.balance) if self.balance is not None else None,
            "counterparty_name": self.counterparty_name,
            "counterparty_id": self.counterparty_id,
        }


# ══════════════════════════════════════════════════════════════
# TOTALS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerTotals:
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    closing_balance: Decimal = ZERO

    @property
    def closing_side(self) -> BalanceSide:
        return BalanceSide.of(self.closing_balance)

    def to_dict(self) -> dict:
        return {
            "total_debit": str(self.total_debit),
            "total_credit": str(self.total_credit),
            "closing_balance": str(self.closing_balance),
            "closing_side": self.closing_side.value,
        }
