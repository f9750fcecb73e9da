"""
Back Office Reporting Engine - Profit & Loss
==============================================
Period profit from sales, purchase invoices and expenses. A plain
cash-style view: no tax, no cost of goods sold, no stock movement.

    gross profit = sales - purchases
    net profit   = gross profit - expenses

RULES:
- A sale earns its total, falling back to its gross total when the
  total (and net total) is zero
- A purchase costs the same total the journal ledger books
- An active period keeps only dated records inside it; undated
  records still count when no period is set
- Monthly buckets skip undated records entirely
- Expenses without a category are grouped under "Other"
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar

from core.primitives.document import PurchaseInvoice, SaleInvoice
from core.primitives.expense import Expense
from core.primitives.fields import ZERO
from core.time import DateRange

UNCATEGORIZED = "Other"

D = TypeVar("D", SaleInvoice, PurchaseInvoice, Expense)


# ══════════════════════════════════════════════════════════════
# AMOUNTS
# ══════════════════════════════════════════════════════════════

def sale_revenue(sale: SaleInvoice) -> Decimal:
    if sale.total != ZERO:
        return sale.total
    return sale.gross_total


def purchase_cost(purchase: PurchaseInvoice) -> Decimal:
    return purchase.total


def expense_category(expense: Expense) -> str:
    return expense.category or UNCATEGORIZED


# ══════════════════════════════════════════════════════════════
# RESULT TYPES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProfitLossTotals:
    sales: Decimal = ZERO
    purchases: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def gross_profit(self) -> Decimal:
        return self.sales - self.purchases

    @property
    def net_profit(self) -> Decimal:
        return self.gross_profit - self.expenses

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sales": str(self.sales),
            "purchases": str(self.purchases),
            "expenses": str(self.expenses),
            "gross_profit": str(self.gross_profit),
            "net_profit": str(self.net_profit),
        }


@dataclass(frozen=True)
class MonthlyTotal:
    month: str  # "YYYY-MM"
    sales: Decimal = ZERO
    purchases: Decimal = ZERO

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "sales": str(self.sales),
            "purchases": str(self.purchases),
        }


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "amount": str(self.amount)}


# ══════════════════════════════════════════════════════════════
# AGGREGATION
# ══════════════════════════════════════════════════════════════

def in_period(documents: Iterable[D], period: Optional[DateRange]) -> List[D]:
    if period is None or period.is_open:
        return list(documents)
    return [doc for doc in documents if period.contains(doc.date)]


def month_key(dt: datetime) -> str:
    return f"{dt.year:04d}-{dt.month:02d}"


def profit_totals(
    sales: Iterable[SaleInvoice],
    purchases: Iterable[PurchaseInvoice],
    expenses: Iterable[Expense],
) -> ProfitLossTotals:
    return ProfitLossTotals(
        sales=sum((sale_revenue(s) for s in sales), ZERO),
        purchases=sum((purchase_cost(p) for p in purchases), ZERO),
        expenses=sum((e.amount for e in expenses), ZERO),
    )


def monthly_totals(
    sales: Iterable[SaleInvoice],
    purchases: Iterable[PurchaseInvoice],
) -> List[MonthlyTotal]:
    """Sales and purchases per calendar month, oldest month first."""
    buckets: Dict[str, Dict[str, Decimal]] = {}

    def add(dt: Optional[datetime], column: str, amount: Decimal) -> None:
        if dt is None:
            return
        bucket = buckets.setdefault(month_key(dt), {"sales": ZERO, "purchases": ZERO})
        bucket[column] += amount

    for sale in sales:
        add(sale.date, "sales", sale_revenue(sale))
    for purchase in purchases:
        add(purchase.date, "purchases", purchase_cost(purchase))

    return [
        MonthlyTotal(month=month, sales=bucket["sales"], purchases=bucket["purchases"])
        for month, bucket in sorted(buckets.items())
    ]


def expenses_by_category(expenses: Sequence[Expense]) -> List[CategoryTotal]:
    """Category totals in order of each category's first appearance."""
    totals: Dict[str, Decimal] = {}
    for expense in expenses:
        category = expense_category(expense)
        totals[category] = totals.get(category, ZERO) + expense.amount
    return [CategoryTotal(category, amount) for category, amount in totals.items()]
