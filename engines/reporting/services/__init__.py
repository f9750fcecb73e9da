"""
Back Office Reporting Engine - Application Services
=====================================================
ProfitLossService turns sales, purchase invoices and expenses into a
period profit & loss result. DashboardService computes the landing-page
figures as of the injected clock's "now".

Both services are read-only over the collections they are handed and
keep nothing between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from core.primitives.document import PurchaseInvoice, SaleInvoice
from core.primitives.expense import Expense
from core.primitives.inventory import InventoryItem
from core.time import Clock, DateRange, get_default_clock
from engines.reporting.dashboard import DashboardSummary, dashboard_summary
from engines.reporting.profit_loss import (
    CategoryTotal,
    MonthlyTotal,
    ProfitLossTotals,
    expenses_by_category,
    in_period,
    monthly_totals,
    profit_totals,
    purchase_cost,
    sale_revenue,
)


logger = logging.getLogger("backoffice.reporting")


# ══════════════════════════════════════════════════════════════
# PROFIT & LOSS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProfitLossResult:
    totals: ProfitLossTotals
    monthly: List[MonthlyTotal] = field(default_factory=list)
    expense_categories: List[CategoryTotal] = field(default_factory=list)
    sales: List[SaleInvoice] = field(default_factory=list)
    purchases: List[PurchaseInvoice] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    date_from: Optional[str] = None
    date_to: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date_from": self.date_from,
            "date_to": self.date_to,
            "totals": self.totals.to_dict(),
            "monthly": [m.to_dict() for m in self.monthly],
            "expense_categories": [c.to_dict() for c in self.expense_categories],
            "sales": [
                {
                    "id": s.id,
                    "number": s.number,
                    "date": s.date.isoformat() if s.date else None,
                    "customer": s.counterparty_name,
                    "amount": str(sale_revenue(s)),
                }
                for s in self.sales
            ],
            "purchases": [
                {
                    "id": p.id,
                    "number": p.number,
                    "date": p.date.isoformat() if p.date else None,
                    "supplier": p.supplier_name,
                    "amount": str(purchase_cost(p)),
                }
                for p in self.purchases
            ],
            "expenses": [e.to_dict() for e in self.expenses],
        }


class ProfitLossService:
    def build(
        self,
        sales: Sequence[SaleInvoice] = (),
        purchases: Sequence[PurchaseInvoice] = (),
        expenses: Sequence[Expense] = (),
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> ProfitLossResult:
        period = DateRange.from_bounds(date_from, date_to)
        period_sales = in_period(sales, period)
        period_purchases = in_period(purchases, period)
        period_expenses = in_period(expenses, period)

        result = ProfitLossResult(
            totals=profit_totals(period_sales, period_purchases, period_expenses),
            monthly=monthly_totals(period_sales, period_purchases),
            expense_categories=expenses_by_category(period_expenses),
            sales=period_sales,
            purchases=period_purchases,
            expenses=period_expenses,
            date_from=date_from,
            date_to=date_to,
        )
        logger.info(
            f"Profit & loss built: {len(period_sales)} sales, "
            f"{len(period_purchases)} purchases, {len(period_expenses)} expenses, "
            f"net {result.totals.net_profit}"
        )
        return result


# ══════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════

class DashboardService:
    def __init__(self, *, clock: Optional[Clock] = None) -> None:
        self._clock = clock or get_default_clock()

    def build(
        self,
        *,
        sales: Sequence[SaleInvoice] = (),
        purchases: Sequence[PurchaseInvoice] = (),
        expenses: Sequence[Expense] = (),
        inventory: Sequence[InventoryItem] = (),
        customers_count: int = 0,
    ) -> DashboardSummary:
        summary = dashboard_summary(
            sales=sales,
            purchases=purchases,
            expenses=expenses,
            inventory=inventory,
            customers_count=customers_count,
            now=self._clock.now_utc(),
        )
        logger.debug(
            f"Dashboard built: {summary.inventory_count} items, "
            f"{summary.low_stock_count} low"
        )
        return summary
