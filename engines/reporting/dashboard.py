"""
Back Office Reporting Engine - Dashboard Figures
==================================================
Headline numbers for the landing page: revenue today and over the
trailing months, document totals, inventory size, low-stock count and
stock value. Stock figures come from the inventory engine so the
dashboard and the stock report never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from core.primitives.document import PurchaseInvoice, SaleInvoice
from core.primitives.expense import Expense
from core.primitives.fields import ZERO
from core.primitives.inventory import InventoryItem, StockStatus
from engines.inventory.stock_classifier import count_by_status, valuation

TRAILING_MONTHS = 7


@dataclass(frozen=True)
class MonthRevenue:
    month: str  # "Oct 2026"
    amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "amount": str(self.amount)}


@dataclass(frozen=True)
class DashboardSummary:
    total_sales: Decimal = ZERO
    total_purchases: Decimal = ZERO
    total_expenses: Decimal = ZERO
    today_revenue: Decimal = ZERO
    monthly_revenue: List[MonthRevenue] = field(default_factory=list)
    inventory_count: int = 0
    low_stock_count: int = 0
    stock_value: Decimal = ZERO
    customers_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_sales": str(self.total_sales),
            "total_purchases": str(self.total_purchases),
            "total_expenses": str(self.total_expenses),
            "today_revenue": str(self.today_revenue),
            "monthly_revenue": [m.to_dict() for m in self.monthly_revenue],
            "inventory_count": self.inventory_count,
            "low_stock_count": self.low_stock_count,
            "stock_value": str(self.stock_value),
            "customers_count": self.customers_count,
        }


def trailing_months(today: date, count: int = TRAILING_MONTHS) -> List[Tuple[int, int]]:
    """(year, month) pairs ending with today's month, oldest first."""
    if count < 1:
        raise ValueError("count must be >= 1.")
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def revenue_on(sales: Iterable[SaleInvoice], day: date) -> Decimal:
    return sum(
        (s.total for s in sales if s.date is not None and s.date.date() == day),
        ZERO,
    )


def monthly_revenue(
    sales: Sequence[SaleInvoice],
    now: datetime,
    count: int = TRAILING_MONTHS,
) -> List[MonthRevenue]:
    """Whole-unit revenue per month for the trailing window, empty months as 0."""
    by_month: Dict[Tuple[int, int], Decimal] = {}
    for sale in sales:
        if sale.date is None:
            continue
        key = (sale.date.year, sale.date.month)
        by_month[key] = by_month.get(key, ZERO) + sale.total

    result = []
    for year, month in trailing_months(now.date(), count):
        amount = by_month.get((year, month), ZERO)
        result.append(MonthRevenue(
            month=date(year, month, 1).strftime("%b %Y"),
            amount=amount.quantize(Decimal(1), rounding=ROUND_HALF_UP),
        ))
    return result


def dashboard_summary(
    *,
    sales: Sequence[SaleInvoice] = (),
    purchases: Sequence[PurchaseInvoice] = (),
    expenses: Sequence[Expense] = (),
    inventory: Sequence[InventoryItem] = (),
    customers_count: int = 0,
    now: datetime,
) -> DashboardSummary:
    return DashboardSummary(
        total_sales=sum((s.total for s in sales), ZERO),
        total_purchases=sum((p.total for p in purchases), ZERO),
        total_expenses=sum((e.amount for e in expenses), ZERO),
        today_revenue=revenue_on(sales, now.date()),
        monthly_revenue=monthly_revenue(sales, now),
        inventory_count=len(inventory),
        low_stock_count=count_by_status(inventory)[StockStatus.LOW_STOCK],
        stock_value=valuation(inventory),
        customers_count=customers_count,
    )
