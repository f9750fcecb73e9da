"""
Back Office Reporting Engine
=============================
Profit & loss and dashboard figures over the loaded collections.
"""

from engines.reporting.dashboard import DashboardSummary, MonthRevenue, dashboard_summary
from engines.reporting.profit_loss import (
    UNCATEGORIZED,
    CategoryTotal,
    MonthlyTotal,
    ProfitLossTotals,
    expenses_by_category,
    monthly_totals,
    profit_totals,
    sale_revenue,
)

__all__ = [
    "UNCATEGORIZED",
    "CategoryTotal",
    "DashboardSummary",
    "MonthRevenue",
    "MonthlyTotal",
    "ProfitLossTotals",
    "dashboard_summary",
    "expenses_by_category",
    "monthly_totals",
    "profit_totals",
    "sale_revenue",
]
