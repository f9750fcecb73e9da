"""
Back Office Ledger Engine - Record Normalizer
===============================================
Maps every source document kind onto the common LedgerEntry shape.

SIGN TABLE (fixed policy):

    kind      debit   credit   counterparty
    sale      total   0        customer
    purchase  0       total    supplier
    receipt   0       amount   free-text payer, no id
    payment   amount  0        free-text payee, no id

Sales and outgoing payments both post as debit. That mixes customer and
supplier conventions in one combined ledger; it is kept as-is.

normalize() is pure and total: missing amounts are already 0 on the
document, missing names become placeholders, missing dates become the
clock's "now". A date that was given but cannot be read stays None;
the merger sorts it as the epoch and date ranges never match it.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.config import ReportConfig
from core.primitives.document import (
    DocumentKind,
    PaymentVoucher,
    PurchaseInvoice,
    ReceiptVoucher,
    SaleInvoice,
    SourceDocument,
)
from core.primitives.fields import ZERO
from core.primitives.ledger import DocumentType, LedgerEntry
from core.time import Clock, get_default_clock


_DEFAULT_CONFIG = ReportConfig()


def entry_id(kind: DocumentKind, source_id: str) -> str:
    """Deduplication key: "{kind}-{source id}"."""
    return f"{kind.value}-{source_id}"


def _entry_date(doc: SourceDocument, clock: Optional[Clock]) -> Optional[datetime]:
    # Undated documents are dated "now"; unreadable dates stay None.
    if doc.date is not None or doc.date_given:
        return doc.date
    return (clock or get_default_clock()).now_utc()


def normalize(
    doc: SourceDocument,
    *,
    clock: Optional[Clock] = None,
    config: ReportConfig = _DEFAULT_CONFIG,
) -> LedgerEntry:
    if isinstance(doc, SaleInvoice):
        name = doc.counterparty_name or config.unknown_customer
        return _entry(
            doc, DocumentType.SALE_INVOICE, f"Sale to {name}",
            debit=doc.total, credit=ZERO,
            name=name, counterparty_id=doc.counterparty_id, clock=clock,
        )
    if isinstance(doc, PurchaseInvoice):
        name = doc.supplier_name or config.unknown_supplier
        return _entry(
            doc, DocumentType.PURCHASE_INVOICE, f"Purchase from {name}",
            debit=ZERO, credit=doc.total,
            name=name, counterparty_id=doc.supplier_id, clock=clock,
        )
    if isinstance(doc, ReceiptVoucher):
        name = doc.received_from or config.unknown_customer
        return _entry(
            doc, DocumentType.RECEIPT, f"Receipt from {name}",
            debit=ZERO, credit=doc.amount,
            name=name, counterparty_id="", clock=clock,
        )
    if isinstance(doc, PaymentVoucher):
        name = doc.paid_to or config.unknown_supplier
        return _entry(
            doc, DocumentType.PAYMENT, f"Payment to {name}",
            debit=doc.amount, credit=ZERO,
            name=name, counterparty_id="", clock=clock,
        )
    raise TypeError(f"Cannot normalize {type(doc).__name__}.")


def _entry(
    doc: SourceDocument,
    document_type: DocumentType,
    particulars: str,
    *,
    debit: Decimal,
    credit: Decimal,
    name: str,
    counterparty_id: str,
    clock: Optional[Clock],
) -> LedgerEntry:
    return LedgerEntry(
        id=entry_id(doc.kind, doc.id),
        date=_entry_date(doc, clock),
        document_type=document_type,
        document_number=doc.number,
        particulars=particulars,
        debit=debit,
        credit=credit,
        counterparty_name=name,
        counterparty_id=counterparty_id,
    )
