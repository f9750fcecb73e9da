"""
Back Office Document Primitive - Source Financial Documents
=============================================================
The four document kinds that feed the journal ledger:

    SaleInvoice      - goods sold to a customer
    PurchaseInvoice  - goods bought from a supplier
    ReceiptVoucher   - cash received (free-text payer)
    PaymentVoucher   - cash paid out (free-text payee)

Documents are owned by the external data layer. The ledger engine only
reads them. Every kind has a `from_dict` that applies the field
fallback policy for that kind, so "which raw field wins" lives in one
place per kind instead of being scattered through the engine.

RULES:
- Immutable (frozen dataclasses)
- from_dict never raises on missing or malformed fields
- Names stay None when absent; placeholders are a ledger concern
- date is None both when absent and when unreadable; date_given
  tells the two apart
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from core.primitives.fields import (
    ZERO,
    as_mapping,
    as_text,
    first_nonzero_amount,
    first_truthy,
    optional_text,
    record_id,
    to_decimal,
)
from core.time.temporal import parse_datetime


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class DocumentKind(Enum):
    """Source document kind. Values are the ledger id tags."""
    SALE = "sale"
    PURCHASE = "purchase"
    RECEIPT = "receipt"
    PAYMENT = "payment"


def _read_date(data: Mapping[str, Any], *keys: str) -> Tuple[Optional[datetime], bool]:
    """
    (parsed date, whether any date was given at all).

    A missing date and an unreadable one are different: the ledger
    dates the first "now" and sorts the second as the epoch.
    """
    raw = first_truthy(data, *keys)
    return parse_datetime(raw), raw is not None


# ══════════════════════════════════════════════════════════════
# SALE INVOICE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SaleInvoice:
    id: str
    date: Optional[datetime]
    number: str
    counterparty_id: str
    counterparty_name: Optional[str]
    total: Decimal = ZERO
    date_given: bool = False
    gross_total: Decimal = ZERO

    kind = DocumentKind.SALE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SaleInvoice:
        source_id = record_id(data)
        date, date_given = _read_date(data, "invoiceDate", "date")
        customer = as_mapping(data.get("customer"))
        return cls(
            id=source_id,
            date=date,
            date_given=date_given,
            number=as_text(first_truthy(data, "invoiceNumber")) or source_id,
            counterparty_id=as_text(
                first_truthy(customer, "id", "_id") or data.get("customerId")
            ),
            counterparty_name=optional_text(
                first_truthy(customer, "name") or first_truthy(data, "customerName")
            ),
            total=first_nonzero_amount(data, "total", "totalNetAmount"),
            gross_total=to_decimal(data.get("totalGrossAmount")),
        )


# ══════════════════════════════════════════════════════════════
# PURCHASE INVOICE
# ══════════════════════════════════════════════════════════════

def _products_total(products: Any) -> Decimal:
    """Sum of line amounts, using quantity * rate where amount is absent."""
    if not isinstance(products, (list, tuple)):
        return ZERO
    total = ZERO
    for product in products:
        line = as_mapping(product)
        amount = to_decimal(line.get("amount"))
        if amount == ZERO:
            amount = to_decimal(line.get("quantity")) * to_decimal(line.get("rate"))
        total += amount
    return total


@dataclass(frozen=True)
class PurchaseInvoice:
    id: str
    date: Optional[datetime]
    number: str
    supplier_id: str
    supplier_name: Optional[str]
    total: Decimal = ZERO
    date_given: bool = False

    kind = DocumentKind.PURCHASE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PurchaseInvoice:
        source_id = record_id(data)
        supplier = as_mapping(data.get("supplier"))
        date, date_given = _read_date(data, "poDate", "invoiceDate", "date")
        total = first_nonzero_amount(data, "total", "subTotal")
        if total == ZERO:
            total = _products_total(data.get("products"))
        return cls(
            id=source_id,
            date=date,
            date_given=date_given,
            number=as_text(first_truthy(data, "poNumber", "invoiceNumber")) or source_id,
            supplier_id=as_text(
                first_truthy(supplier, "_id", "id") or data.get("supplierId")
            ),
            supplier_name=optional_text(
                first_truthy(supplier, "name") or first_truthy(data, "supplierName")
            ),
            total=total,
        )


# ══════════════════════════════════════════════════════════════
# VOUCHERS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ReceiptVoucher:
    id: str
    date: Optional[datetime]
    number: str
    received_from: Optional[str]
    amount: Decimal = ZERO
    date_given: bool = False

    kind = DocumentKind.RECEIPT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ReceiptVoucher:
        source_id = record_id(data)
        date, date_given = _read_date(data, "voucherDate", "date")
        return cls(
            id=source_id,
            date=date,
            date_given=date_given,
            number=as_text(first_truthy(data, "voucherNumber")) or source_id,
            received_from=optional_text(data.get("receivedFrom")),
            amount=to_decimal(data.get("amount")),
        )


@dataclass(frozen=True)
class PaymentVoucher:
    id: str
    date: Optional[datetime]
    number: str
    paid_to: Optional[str]
    amount: Decimal = ZERO
    date_given: bool = False

    kind = DocumentKind.PAYMENT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PaymentVoucher:
        source_id = record_id(data)
        date, date_given = _read_date(data, "voucherDate", "date")
        return cls(
            id=source_id,
            date=date,
            date_given=date_given,
            number=as_text(first_truthy(data, "voucherNumber")) or source_id,
            paid_to=optional_text(data.get("paidTo")),
            amount=to_decimal(data.get("amount")),
        )


SourceDocument = Union[SaleInvoice, PurchaseInvoice, ReceiptVoucher, PaymentVoucher]

DOCUMENT_CLASSES = {
    DocumentKind.SALE: SaleInvoice,
    DocumentKind.PURCHASE: PurchaseInvoice,
    DocumentKind.RECEIPT: ReceiptVoucher,
    DocumentKind.PAYMENT: PaymentVoucher,
}


def document_from_dict(kind: DocumentKind, data: Mapping[str, Any]) -> SourceDocument:
    return DOCUMENT_CLASSES[kind].from_dict(data)
