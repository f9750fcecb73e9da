"""
Back Office Reporting Engine Tests
====================================
Profit & loss totals, monthly and category grouping, dashboard figures
and the reporting services.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.primitives.document import PurchaseInvoice, SaleInvoice
from core.primitives.expense import Expense
from core.primitives.inventory import InventoryItem
from core.time import DateRange, FixedClock
from engines.reporting import (
    UNCATEGORIZED,
    expenses_by_category,
    monthly_totals,
    profit_totals,
    sale_revenue,
)
from engines.reporting.dashboard import (
    dashboard_summary,
    monthly_revenue,
    revenue_on,
    trailing_months,
)
from engines.reporting.profit_loss import in_period, purchase_cost
from engines.reporting.services import DashboardService, ProfitLossService


NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


def sale(id="s1", when="2026-10-05", total=None, gross=None, customer="Acme"):
    record = {"_id": id, "invoiceNumber": f"INV-{id}", "customer": {"_id": "c1", "name": customer}}
    if when is not None:
        record["invoiceDate"] = when
    if total is not None:
        record["total"] = total
    if gross is not None:
        record["totalGrossAmount"] = gross
    return SaleInvoice.from_dict(record)


def purchase(id="p1", when="2026-10-10", total=None, products=None):
    record = {"_id": id, "poNumber": f"PO-{id}", "supplier": {"_id": "sup1", "name": "Bolt Co"}}
    if when is not None:
        record["poDate"] = when
    if total is not None:
        record["total"] = total
    if products is not None:
        record["products"] = products
    return PurchaseInvoice.from_dict(record)


def expense(id="e1", when="2026-10-12", amount=0, category=None):
    record = {"_id": id, "expenseNumber": f"EXP-{id}", "amount": amount}
    if when is not None:
        record["date"] = when
    if category is not None:
        record["categoryType"] = category
    return Expense.from_dict(record)


# ══════════════════════════════════════════════════════════════
# PROFIT & LOSS
# ══════════════════════════════════════════════════════════════

class TestProfitTotals:
    def test_gross_and_net_profit(self):
        totals = profit_totals(
            [sale(total=1000), sale(id="s2", total=500)],
            [purchase(total=400)],
            [expense(amount=150), expense(id="e2", amount=50)],
        )
        assert totals.sales == Decimal(1500)
        assert totals.purchases == Decimal(400)
        assert totals.expenses == Decimal(200)
        assert totals.gross_profit == Decimal(1100)
        assert totals.net_profit == Decimal(900)

    def test_loss_is_negative(self):
        totals = profit_totals([sale(total=100)], [purchase(total=300)], [expense(amount=50)])
        assert totals.gross_profit == Decimal(-200)
        assert totals.net_profit == Decimal(-250)

    def test_nothing_is_zero(self):
        totals = profit_totals([], [], [])
        assert totals.to_dict() == {
            "sales": "0", "purchases": "0", "expenses": "0",
            "gross_profit": "0", "net_profit": "0",
        }


class TestAmountFallbacks:
    def test_sale_falls_back_to_gross_total(self):
        assert sale_revenue(sale(gross=820)) == Decimal(820)

    def test_sale_total_wins_over_gross(self):
        assert sale_revenue(sale(total=700, gross=820)) == Decimal(700)

    def test_purchase_falls_back_to_product_lines(self):
        lines = [{"amount": 120}, {"quantity": 3, "rate": 10}]
        assert purchase_cost(purchase(products=lines)) == Decimal(150)


class TestPeriod:
    def test_open_period_keeps_undated_records(self):
        docs = [sale(when=None), sale(id="s2")]
        assert in_period(docs, DateRange.from_bounds()) == docs
        assert in_period(docs, None) == docs

    def test_active_period_excludes_undated_and_outside(self):
        docs = [sale(when=None), sale(id="s2", when="2026-09-30"), sale(id="s3", when="2026-10-31T18:00:00")]
        kept = in_period(docs, DateRange.from_bounds("2026-10-01", "2026-10-31"))
        assert [d.id for d in kept] == ["s3"]

    def test_unreadable_bound_keeps_nothing(self):
        assert in_period([sale()], DateRange.from_bounds("not a date", None)) == []


class TestMonthlyTotals:
    def test_grouped_by_month_oldest_first(self):
        monthly = monthly_totals(
            [sale(when="2026-10-05", total=100), sale(id="s2", when="2026-08-20", total=40),
             sale(id="s3", when="2026-10-25", total=60)],
            [purchase(when="2026-09-01", total=30)],
        )
        assert [(m.month, m.sales, m.purchases) for m in monthly] == [
            ("2026-08", Decimal(40), Decimal(0)),
            ("2026-09", Decimal(0), Decimal(30)),
            ("2026-10", Decimal(160), Decimal(0)),
        ]

    def test_undated_records_are_skipped(self):
        monthly = monthly_totals([sale(when=None, total=100)], [purchase(when=None, total=50)])
        assert monthly == []


class TestExpensesByCategory:
    def test_first_seen_order_and_other(self):
        categories = expenses_by_category([
            expense(amount=100, category="Rent"),
            expense(id="e2", amount=20),
            expense(id="e3", amount=30, category="Utilities"),
            expense(id="e4", amount=5, category="Rent"),
            expense(id="e5", amount=7, category=""),
        ])
        assert [(c.category, c.amount) for c in categories] == [
            ("Rent", Decimal(105)),
            (UNCATEGORIZED, Decimal(27)),
            ("Utilities", Decimal(30)),
        ]


class TestProfitLossService:
    def test_period_result(self):
        result = ProfitLossService().build(
            [sale(total=1000), sale(id="s2", when="2025-01-01", total=999)],
            [purchase(total=400)],
            [expense(amount=100, category="Rent")],
            date_from="2026-10-01",
            date_to="2026-10-31",
        )
        assert result.totals.net_profit == Decimal(500)
        assert [s.id for s in result.sales] == ["s1"]
        data = result.to_dict()
        assert data["date_from"] == "2026-10-01"
        assert data["sales"][0] == {
            "id": "s1", "number": "INV-s1", "date": "2026-10-05T00:00:00+00:00",
            "customer": "Acme", "amount": "1000",
        }
        assert data["purchases"][0]["supplier"] == "Bolt Co"
        assert data["expense_categories"] == [{"category": "Rent", "amount": "100"}]

    def test_logs_the_build(self, caplog):
        with caplog.at_level("INFO", logger="backoffice.reporting"):
            ProfitLossService().build([sale(total=10)])
        assert "Profit & loss built: 1 sales" in caplog.text


# ══════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════

class TestTrailingMonths:
    def test_crosses_year_boundary(self):
        assert trailing_months(date(2026, 2, 14), 4) == [(2025, 11), (2025, 12), (2026, 1), (2026, 2)]

    def test_seven_by_default(self):
        months = trailing_months(date(2026, 10, 19))
        assert months[0] == (2026, 4)
        assert months[-1] == (2026, 10)

    def test_count_must_be_positive(self):
        with pytest.raises(ValueError, match="count"):
            trailing_months(date(2026, 10, 19), 0)


class TestRevenue:
    def test_today_only(self):
        sales = [sale(when="2026-10-19T08:00:00", total=100), sale(id="s2", when="2026-10-18", total=50),
                 sale(id="s3", when=None, total=70)]
        assert revenue_on(sales, date(2026, 10, 19)) == Decimal(100)

    def test_monthly_rounds_to_whole_units(self):
        sales = [sale(when="2026-10-01", total="10.5"), sale(id="s2", when="2026-09-03", total="99.49")]
        months = monthly_revenue(sales, NOW, 3)
        assert [(m.month, m.amount) for m in months] == [
            ("Aug 2026", Decimal(0)),
            ("Sep 2026", Decimal(99)),
            ("Oct 2026", Decimal(11)),
        ]


class TestDashboardSummary:
    def test_figures(self):
        inventory = [
            InventoryItem.from_dict({"_id": "i1", "stock": 5, "minimumStockLevel": 10, "salesRate": 100}),
            InventoryItem.from_dict({"_id": "i2", "stock": 20, "minimumStockLevel": 10, "salesRate": 2}),
            InventoryItem.from_dict({"_id": "i3", "openingStock": 1, "minimumStockLevel": 3, "salesRate": 0}),
        ]
        summary = dashboard_summary(
            sales=[sale(when="2026-10-19", total=300), sale(id="s2", when="2026-01-01", total=200)],
            purchases=[purchase(total=120)],
            expenses=[expense(amount=30)],
            inventory=inventory,
            customers_count=4,
            now=NOW,
        )
        assert summary.total_sales == Decimal(500)
        assert summary.total_purchases == Decimal(120)
        assert summary.total_expenses == Decimal(30)
        assert summary.today_revenue == Decimal(300)
        assert summary.inventory_count == 3
        assert summary.low_stock_count == 2
        assert summary.stock_value == Decimal(540)
        assert summary.customers_count == 4
        assert len(summary.monthly_revenue) == 7
        assert summary.monthly_revenue[-1].to_dict() == {"month": "Oct 2026", "amount": "300"}

    def test_service_reads_today_from_clock(self):
        service = DashboardService(clock=FixedClock(datetime(2026, 10, 18, 12, tzinfo=timezone.utc)))
        summary = service.build(sales=[sale(when="2026-10-18", total=80)])
        assert summary.today_revenue == Decimal(80)
        assert summary.to_dict()["today_revenue"] == "80"
