"""
Back Office Projections - Printable Report Read Models
========================================================
Flat, pre-computed rows for the journal ledger, stock and profit & loss
reports.

The engines own every business rule (signs, balances, status). These
read models only number, sanitize and format what the engines
produced; they never recompute a balance or a status.

Formatting conventions:
    currency   "Rs 1,234.50" (label from ReportConfig)
    balance    absolute amount followed by CR / DR
    dates      "5 Jan 2024" on rows, "19 October 2026" for report dates
    missing    "-" for absent dates and amounts, "—" for absent
               last-transaction cells
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict, List, Optional, Tuple

from core.config import ReportConfig
from core.primitives.ledger import BalanceSide, LedgerEntry, LedgerTotals
from core.time import EPOCH, Clock, get_default_clock, parse_datetime
from engines.inventory.last_transaction import MatchedLine
from engines.inventory.services import StockReport, StockRow, StockSummary
from engines.ledger.services import JournalLedgerResult
from engines.reporting.profit_loss import (
    CategoryTotal,
    MonthlyTotal,
    ProfitLossTotals,
    expense_category,
    sale_revenue,
)
from engines.reporting.services import ProfitLossResult


_CENT = Decimal("0.01")
# Wide enough for a stock value of two maximal amounts, to the cent.
_CURRENCY_PRECISION = 40
_MISSING = "-"
_NO_ACTIVITY = "—"

# Trailing " (Thickness: ..., Color: ...)" left on legacy product names.
_LEGACY_SUFFIX = re.compile(r"\s*\([^)]*(Thickness:|Color:)[^)]*\)\s*$", re.IGNORECASE)


# ══════════════════════════════════════════════════════════════
# FORMATTING HELPERS
# ══════════════════════════════════════════════════════════════

def balance_side(balance: Decimal) -> str:
    return BalanceSide.of(balance).value


def format_currency(amount: Optional[Decimal], label: str = "Rs") -> str:
    if amount is None:
        return _MISSING
    with localcontext() as ctx:
        ctx.prec = _CURRENCY_PRECISION
        value = Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{label} {value:,.2f}"


def format_balance(balance: Optional[Decimal], label: str = "Rs") -> str:
    if balance is None:
        return _MISSING
    return f"{format_currency(abs(balance), label)} {balance_side(balance)}"


def format_date(value: Any) -> str:
    dt = parse_datetime(value)
    if dt is None:
        return _MISSING
    return f"{dt.day} {dt.strftime('%b %Y')}"


def format_long_date(value: Any) -> str:
    dt = parse_datetime(value)
    if dt is None:
        return _MISSING
    return f"{dt.day} {dt.strftime('%B %Y')}"


def format_quantity(value: Optional[Decimal]) -> str:
    if value is None:
        return ""
    return format(value.normalize(), "f")


def sanitize_item_name(name: Optional[str]) -> str:
    if not name:
        return ""
    return _LEGACY_SUFFIX.sub("", str(name)).strip()


# ══════════════════════════════════════════════════════════════
# JOURNAL LEDGER REPORT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class JournalLedgerRow:
    sr: int
    date: Optional[datetime]
    document_type: str
    document_number: str
    particulars: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    balance_side: str
    counterparty: str

    @classmethod
    def from_entry(cls, sr: int, entry: LedgerEntry) -> JournalLedgerRow:
        if entry.balance is None:
            raise ValueError(f"Ledger entry {entry.id} has no running balance.")
        return cls(
            sr=sr,
            date=entry.date,
            document_type=entry.document_type.value,
            document_number=entry.document_number,
            particulars=entry.particulars,
            debit=entry.debit,
            credit=entry.credit,
            balance=entry.balance,
            balance_side=balance_side(entry.balance),
            counterparty=entry.counterparty_name,
        )

    def to_dict(self, currency_label: str = "Rs") -> Dict[str, Any]:
        return {
            "sr": self.sr,
            "date": format_date(self.date),
            "document_type": self.document_type,
            "document_number": self.document_number,
            "particulars": self.particulars,
            "debit": format_currency(self.debit, currency_label) if self.debit > 0 else _MISSING,
            "credit": format_currency(self.credit, currency_label) if self.credit > 0 else _MISSING,
            "balance": format_balance(self.balance, currency_label),
            "balance_side": self.balance_side,
            "counterparty": self.counterparty,
        }


@dataclass(frozen=True)
class JournalLedgerReport:
    title: str
    company_name: str
    report_date: datetime
    opening_balance: Decimal
    totals: LedgerTotals
    rows: List[JournalLedgerRow] = field(default_factory=list)
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    selected_entity: Optional[str] = None
    currency_label: str = "Rs"

    @classmethod
    def build(
        cls,
        result: JournalLedgerResult,
        *,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        config: Optional[ReportConfig] = None,
        clock: Optional[Clock] = None,
    ) -> JournalLedgerReport:
        """Rows cover the whole filtered ledger, not only the visible page."""
        config = config or ReportConfig()
        clock = clock or get_default_clock()
        return cls(
            title="Journal Ledger Report",
            company_name=config.company_name,
            report_date=clock.now_utc(),
            opening_balance=result.opening_balance,
            totals=result.totals,
            rows=[
                JournalLedgerRow.from_entry(sr, entry)
                for sr, entry in enumerate(result.balanced_entries, start=1)
            ],
            from_date=from_date or None,
            to_date=to_date or None,
            selected_entity=result.entity.label if result.entity else None,
            currency_label=config.currency_label,
        )

    def to_dict(self) -> Dict[str, Any]:
        label = self.currency_label
        return {
            "title": self.title,
            "company_name": self.company_name,
            "report_date": format_long_date(self.report_date),
            "from_date": self.from_date,
            "to_date": self.to_date,
            "selected_entity": self.selected_entity,
            "opening_balance": format_balance(self.opening_balance, label),
            "total_entries": len(self.rows),
            "rows": [row.to_dict(label) for row in self.rows],
            "totals": {
                "total_debit": format_currency(self.totals.total_debit, label),
                "total_credit": format_currency(self.totals.total_credit, label),
                "closing_balance": format_balance(self.totals.closing_balance, label),
            },
        }


# ══════════════════════════════════════════════════════════════
# STOCK LEDGER REPORT
# ══════════════════════════════════════════════════════════════

def _match_date(match: Optional[MatchedLine]) -> Optional[datetime]:
    if match is None or match.date == EPOCH:
        return None
    return match.date


@dataclass(frozen=True)
class StockLedgerRow:
    sr: int
    item_name: str
    category: Optional[str]
    opening_stock: Decimal
    current_stock: Decimal
    minimum_stock_level: Optional[Decimal]
    status: str
    last_sale_qty: Optional[Decimal] = None
    last_sale_rate: Optional[Decimal] = None
    last_sale_date: Optional[datetime] = None
    last_purchase_qty: Optional[Decimal] = None
    last_purchase_rate: Optional[Decimal] = None
    last_purchase_date: Optional[datetime] = None

    @classmethod
    def from_row(cls, sr: int, row: StockRow) -> StockLedgerRow:
        item = row.item
        minimum = item.minimum_stock_level
        sale, purchase = row.last_sale, row.last_purchase
        return cls(
            sr=sr,
            item_name=sanitize_item_name(item.name) or "Unknown",
            category=item.category,
            opening_stock=row.current_stock if item.opening_stock is None else item.opening_stock,
            current_stock=row.current_stock,
            minimum_stock_level=minimum if minimum > 0 else None,
            status=row.status.value,
            last_sale_qty=sale.line.quantity if sale else None,
            last_sale_rate=sale.line.rate if sale else None,
            last_sale_date=_match_date(sale),
            last_purchase_qty=purchase.line.quantity if purchase else None,
            last_purchase_rate=purchase.line.rate if purchase else None,
            last_purchase_date=_match_date(purchase),
        )

    def to_dict(self) -> Dict[str, Any]:
        def _qty(value: Optional[Decimal]) -> Optional[str]:
            return format_quantity(value) if value is not None else None

        return {
            "sr": self.sr,
            "item_name": self.item_name,
            "category": self.category,
            "opening_stock": format_quantity(self.opening_stock),
            "current_stock": format_quantity(self.current_stock),
            "minimum_stock_level": _qty(self.minimum_stock_level),
            "status": self.status,
            "last_sale_qty": _qty(self.last_sale_qty),
            "last_sale_rate": _qty(self.last_sale_rate),
            "last_sale_date": format_date(self.last_sale_date) if self.last_sale_date else None,
            "last_purchase_qty": _qty(self.last_purchase_qty),
            "last_purchase_rate": _qty(self.last_purchase_rate),
            "last_purchase_date": (
                format_date(self.last_purchase_date) if self.last_purchase_date else None
            ),
        }


@dataclass(frozen=True)
class StockLedgerReport:
    title: str
    company_name: str
    report_date: datetime
    summary: StockSummary
    rows: List[StockLedgerRow] = field(default_factory=list)
    currency_label: str = "Rs"

    @classmethod
    def build(
        cls,
        report: StockReport,
        *,
        config: Optional[ReportConfig] = None,
        clock: Optional[Clock] = None,
    ) -> StockLedgerReport:
        config = config or ReportConfig()
        clock = clock or get_default_clock()
        return cls(
            title="Stock Report",
            company_name=config.company_name,
            report_date=clock.now_utc(),
            summary=report.summary,
            rows=[
                StockLedgerRow.from_row(sr, row)
                for sr, row in enumerate(report.rows, start=1)
            ],
            currency_label=config.currency_label,
        )

    def to_dict(self) -> Dict[str, Any]:
        summary = self.summary.to_dict()
        summary["stock_value"] = format_currency(self.summary.stock_value, self.currency_label)
        return {
            "title": self.title,
            "company_name": self.company_name,
            "report_date": format_long_date(self.report_date),
            "rows": [row.to_dict() for row in self.rows],
            "summary": summary,
        }


# ══════════════════════════════════════════════════════════════
# STOCK SUMMARY (last activity view)
# ══════════════════════════════════════════════════════════════

def _activity_text(sign: str, match: Optional[MatchedLine]) -> str:
    """'-5 @ 120 (5 Jan 2024)' for sales, '+5 @ 100 (...)' for purchases."""
    if match is None:
        return _NO_ACTIVITY
    quantity = format_quantity(match.line.quantity) or "0"
    rate = format_quantity(match.line.rate)
    when = _match_date(match)
    date_text = format_date(when) if when else ""
    return f"{sign}{quantity} @ {rate} ({date_text})"


@dataclass(frozen=True)
class StockSummaryRow:
    product: str
    current_stock: Decimal
    last_sale: str
    last_purchase: str

    @classmethod
    def from_row(cls, row: StockRow) -> StockSummaryRow:
        return cls(
            product=sanitize_item_name(row.item.name),
            current_stock=row.current_stock,
            last_sale=_activity_text("-", row.last_sale),
            last_purchase=_activity_text("+", row.last_purchase),
        )

    @classmethod
    def from_report(cls, report: StockReport) -> List[StockSummaryRow]:
        return [cls.from_row(row) for row in report.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product": self.product,
            "current_stock": format_quantity(self.current_stock),
            "last_sale": self.last_sale,
            "last_purchase": self.last_purchase,
        }


# ══════════════════════════════════════════════════════════════
# PROFIT & LOSS
# ══════════════════════════════════════════════════════════════

_NO_PARTY = "N/A"


@dataclass(frozen=True)
class ProfitLossDocumentRow:
    number: str
    date: Optional[datetime]
    party: str
    amount: Decimal

    def to_dict(self, label: str = "Rs") -> Dict[str, Any]:
        return {
            "number": self.number,
            "date": format_date(self.date),
            "party": self.party,
            "amount": format_currency(self.amount, label),
        }


@dataclass(frozen=True)
class ProfitLossReport:
    title: str
    company_name: str
    report_date: datetime
    totals: ProfitLossTotals
    monthly: List[MonthlyTotal] = field(default_factory=list)
    expense_categories: List[CategoryTotal] = field(default_factory=list)
    sales: List[ProfitLossDocumentRow] = field(default_factory=list)
    purchases: List[ProfitLossDocumentRow] = field(default_factory=list)
    expenses: List[ProfitLossDocumentRow] = field(default_factory=list)
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    currency_label: str = "Rs"

    @classmethod
    def build(
        cls,
        result: ProfitLossResult,
        *,
        config: Optional[ReportConfig] = None,
        clock: Optional[Clock] = None,
    ) -> ProfitLossReport:
        config = config or ReportConfig()
        clock = clock or get_default_clock()
        return cls(
            title="Profit & Loss",
            company_name=config.company_name,
            report_date=clock.now_utc(),
            totals=result.totals,
            monthly=list(result.monthly),
            expense_categories=list(result.expense_categories),
            sales=[
                ProfitLossDocumentRow(s.number, s.date, s.counterparty_name or _NO_PARTY, sale_revenue(s))
                for s in result.sales
            ],
            purchases=[
                ProfitLossDocumentRow(p.number, p.date, p.supplier_name or _NO_PARTY, p.total)
                for p in result.purchases
            ],
            expenses=[
                ProfitLossDocumentRow(e.number, e.date, expense_category(e), e.amount)
                for e in result.expenses
            ],
            from_date=result.date_from or None,
            to_date=result.date_to or None,
            currency_label=config.currency_label,
        )

    def summary_lines(self) -> List[Tuple[str, Decimal]]:
        return [
            ("Sales", self.totals.sales),
            ("Purchases", self.totals.purchases),
            ("Gross Profit (Sales - Purchases)", self.totals.gross_profit),
            ("Expenses", self.totals.expenses),
            ("Net Profit", self.totals.net_profit),
        ]

    def to_dict(self) -> Dict[str, Any]:
        label = self.currency_label
        return {
            "title": self.title,
            "company_name": self.company_name,
            "report_date": format_long_date(self.report_date),
            "from_date": self.from_date,
            "to_date": self.to_date,
            "summary": [
                {"label": name, "amount": format_currency(amount, label)}
                for name, amount in self.summary_lines()
            ],
            "monthly": [
                {
                    "month": m.month,
                    "sales": format_currency(m.sales, label),
                    "purchases": format_currency(m.purchases, label),
                }
                for m in self.monthly
            ],
            "expense_categories": [
                {"category": c.category, "amount": format_currency(c.amount, label)}
                for c in self.expense_categories
            ],
            "sales": [row.to_dict(label) for row in self.sales],
            "purchases": [row.to_dict(label) for row in self.purchases],
            "expenses": [row.to_dict(label) for row in self.expenses],
        }
