"""
Tests for core.primitives — raw record coercion and report primitives.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.primitives.document import (
    DocumentKind,
    PaymentVoucher,
    PurchaseInvoice,
    ReceiptVoucher,
    SaleInvoice,
    document_from_dict,
)
from core.primitives.fields import (
    ZERO,
    as_mapping,
    first_nonzero_amount,
    first_present,
    first_truthy,
    to_decimal,
    to_optional_decimal,
)
from core.primitives.expense import Expense
from core.primitives.inventory import InventoryItem
from core.primitives.item import LineItem, TransactionKind
from core.primitives.ledger import BalanceSide, DocumentType, LedgerEntry, LedgerTotals
from core.primitives.party import Entity, EntityRef, PartyType, resolve_entity


JAN_5 = datetime(2024, 1, 5, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════
# FIELD COERCION
# ══════════════════════════════════════════════════════════════

class TestFieldCoercion:
    @pytest.mark.parametrize("raw, expected", [
        (None, ZERO),
        ("", ZERO),
        ("abc", ZERO),
        ("1,000", ZERO),
        (True, ZERO),
        ("NaN", ZERO),
        ("Infinity", ZERO),
        (12, Decimal("12")),
        ("12.50", Decimal("12.50")),
        (0.1, Decimal("0.1")),
        ("9e999999", ZERO),
        ("1e16", ZERO),
        ("-1e16", ZERO),
        (Decimal("Infinity"), ZERO),
        ("9999999999999999", Decimal("9999999999999999")),
    ])
    def test_to_decimal(self, raw, expected):
        assert to_decimal(raw) == expected

    def test_optional_decimal_keeps_absence(self):
        assert to_optional_decimal(None) is None
        assert to_optional_decimal("") is None
        assert to_optional_decimal(0) == ZERO

    def test_first_present_skips_only_none(self):
        assert first_present({"a": None, "b": 0, "c": 5}, "a", "b", "c") == 0

    def test_first_truthy_skips_falsy(self):
        assert first_truthy({"a": "", "b": 0, "c": 5}, "a", "b", "c") == 5

    def test_first_nonzero_amount(self):
        assert first_nonzero_amount({"total": 0, "totalNetAmount": "750"}, "total", "totalNetAmount") == 750

    def test_as_mapping(self):
        assert as_mapping([{"name": "Acme"}]) == {"name": "Acme"}
        assert as_mapping([]) == {}
        assert as_mapping("Acme") == {}
        assert as_mapping(None) == {}


# ══════════════════════════════════════════════════════════════
# SOURCE DOCUMENTS
# ══════════════════════════════════════════════════════════════

class TestSaleInvoiceFromDict:
    def test_full_record(self):
        sale = SaleInvoice.from_dict({
            "_id": "s1",
            "invoiceNumber": "INV-001",
            "invoiceDate": "2024-01-05",
            "customer": {"_id": "c1", "name": "Acme"},
            "totalNetAmount": 1000,
        })
        assert sale.id == "s1"
        assert sale.number == "INV-001"
        assert sale.date == JAN_5
        assert sale.date_given
        assert sale.counterparty_id == "c1"
        assert sale.counterparty_name == "Acme"
        assert sale.total == Decimal("1000")
        assert sale.kind is DocumentKind.SALE

    def test_gross_total_is_kept_apart_from_total(self):
        sale = SaleInvoice.from_dict({"id": "s1", "totalGrossAmount": "820.50"})
        assert sale.total == ZERO
        assert sale.gross_total == Decimal("820.50")

    def test_id_wins_over_underscore_id(self):
        assert SaleInvoice.from_dict({"id": "a", "_id": "b"}).id == "a"

    def test_customer_list_uses_first_element(self):
        sale = SaleInvoice.from_dict({"id": "s1", "customer": [{"name": "Acme"}, {"name": "Other"}]})
        assert sale.counterparty_name == "Acme"

    def test_fallbacks(self):
        sale = SaleInvoice.from_dict({
            "id": "s2",
            "date": "2024-01-05",
            "customerId": "c9",
            "customerName": "Walk-in",
            "total": "0",
            "totalNetAmount": "250",
        })
        assert sale.number == "s2"
        assert sale.date == JAN_5
        assert sale.counterparty_id == "c9"
        assert sale.counterparty_name == "Walk-in"
        assert sale.total == Decimal("250")

    def test_missing_everything(self):
        sale = SaleInvoice.from_dict({})
        assert sale.id == ""
        assert sale.date is None
        assert not sale.date_given
        assert sale.counterparty_name is None
        assert sale.total == ZERO

    def test_unreadable_date_is_flagged_as_given(self):
        sale = SaleInvoice.from_dict({"id": "s3", "invoiceDate": "soon"})
        assert sale.date is None
        assert sale.date_given


class TestPurchaseInvoiceFromDict:
    def test_field_precedence(self):
        purchase = PurchaseInvoice.from_dict({
            "_id": "p1",
            "poNumber": "PO-7",
            "invoiceNumber": "PI-7",
            "poDate": "2024-01-10",
            "invoiceDate": "2024-01-11",
            "supplier": {"_id": "sup1", "name": "Bolt Co"},
            "total": 400,
        })
        assert purchase.number == "PO-7"
        assert purchase.date == datetime(2024, 1, 10, tzinfo=timezone.utc)
        assert purchase.supplier_id == "sup1"
        assert purchase.supplier_name == "Bolt Co"
        assert purchase.total == Decimal("400")

    def test_subtotal_fallback(self):
        assert PurchaseInvoice.from_dict({"id": "p", "subTotal": "90"}).total == Decimal("90")

    def test_products_fallback(self):
        purchase = PurchaseInvoice.from_dict({
            "id": "p",
            "products": [
                {"amount": 100},
                {"quantity": 3, "rate": "20"},
                "garbage",
            ],
        })
        assert purchase.total == Decimal("160")

    def test_supplier_name_fallback(self):
        assert PurchaseInvoice.from_dict({"id": "p", "supplierName": "Bolt Co"}).supplier_name == "Bolt Co"


class TestVouchersFromDict:
    def test_receipt(self):
        receipt = ReceiptVoucher.from_dict({
            "_id": "r1",
            "voucherNumber": "RV-1",
            "voucherDate": "2024-01-05",
            "receivedFrom": "Acme",
            "amount": "300",
        })
        assert (receipt.id, receipt.number, receipt.received_from) == ("r1", "RV-1", "Acme")
        assert receipt.amount == Decimal("300")

    def test_payment(self):
        payment = PaymentVoucher.from_dict({"id": "v1", "date": "2024-01-05", "paidTo": "Bolt Co", "amount": 50})
        assert payment.number == "v1"
        assert payment.paid_to == "Bolt Co"
        assert payment.date == JAN_5

    def test_blank_name_is_absent(self):
        assert ReceiptVoucher.from_dict({"id": "r", "receivedFrom": ""}).received_from is None

    def test_dispatch_by_kind(self):
        doc = document_from_dict(DocumentKind.PAYMENT, {"id": "v1"})
        assert isinstance(doc, PaymentVoucher)


class TestExpenseFromDict:
    def test_full_record(self):
        expense = Expense.from_dict({
            "_id": "e1",
            "expenseNumber": "EXP-001",
            "date": "2024-01-05",
            "categoryType": "Rent",
            "amount": "1500.75",
            "description": "January rent",
        })
        assert expense.id == "e1"
        assert expense.number == "EXP-001"
        assert expense.date == JAN_5
        assert expense.category == "Rent"
        assert expense.amount == Decimal("1500.75")
        assert expense.to_dict()["amount"] == "1500.75"

    def test_sparse_record(self):
        expense = Expense.from_dict({"id": "e2", "date": "someday", "amount": "n/a"})
        assert expense.number == "e2"
        assert expense.date is None
        assert expense.category is None
        assert expense.amount == ZERO
        assert expense.to_dict()["date"] is None


# ══════════════════════════════════════════════════════════════
# PARTIES
# ══════════════════════════════════════════════════════════════

class TestEntity:
    def test_customer_reads_opening_amount_first(self):
        customer = Entity.from_dict(
            {"_id": "c1", "name": "Acme", "openingAmount": 500, "openingBalance": 9},
            PartyType.CUSTOMER,
        )
        assert customer.opening_balance == Decimal("500")
        assert customer.key == "customer-c1"
        assert customer.label == "Acme (Customer)"

    def test_supplier_reads_opening_balance_first(self):
        supplier = Entity.from_dict(
            {"id": "s1", "name": "Bolt Co", "openingAmount": 9, "openingBalance": -200},
            PartyType.SUPPLIER,
        )
        assert supplier.opening_balance == Decimal("-200")
        assert supplier.label == "Bolt Co (Supplier)"

    def test_to_dict(self):
        data = Entity("c1", "Acme", PartyType.CUSTOMER, Decimal("5")).to_dict()
        assert data["key"] == "customer-c1"
        assert data["opening_balance"] == "5"


class TestEntityRef:
    def test_parse(self):
        ref = EntityRef.parse("supplier-64f0-abc")
        assert ref.party_type is PartyType.SUPPLIER
        assert ref.entity_id == "64f0-abc"
        assert ref.key == "supplier-64f0-abc"

    @pytest.mark.parametrize("key", ["vendor-1", "customer", "customer-", ""])
    def test_parse_rejects_malformed_keys(self, key):
        with pytest.raises(ValueError):
            EntityRef.parse(key)

    def test_resolve(self):
        acme = Entity("c1", "Acme", PartyType.CUSTOMER)
        bolt = Entity("c1", "Bolt Co", PartyType.SUPPLIER)
        assert resolve_entity(EntityRef.parse("customer-c1"), [acme], [bolt]) is acme
        assert resolve_entity(EntityRef.parse("supplier-c1"), [acme], [bolt]) is bolt
        assert resolve_entity(EntityRef.parse("supplier-zz"), [acme], [bolt]) is None
        assert resolve_entity(None, [acme], [bolt]) is None


# ══════════════════════════════════════════════════════════════
# LEDGER ENTRY
# ══════════════════════════════════════════════════════════════

class TestLedgerEntry:
    def _entry(self, **overrides):
        values = dict(
            id="sale-1",
            date=JAN_5,
            document_type=DocumentType.SALE_INVOICE,
            document_number="INV-1",
            particulars="Sale to Acme",
            debit=Decimal("100"),
            credit=ZERO,
            counterparty_name="Acme",
        )
        values.update(overrides)
        return LedgerEntry(**values)

    def test_rejects_both_sides(self):
        with pytest.raises(ValueError, match="both debit and credit"):
            self._entry(credit=Decimal("1"))

    def test_rejects_raw_string_type(self):
        with pytest.raises(ValueError, match="DocumentType"):
            self._entry(document_type="Sale Invoice")

    def test_with_balance_copies(self):
        entry = self._entry()
        balanced = entry.with_balance(Decimal("100"))
        assert entry.balance is None
        assert balanced.balance == Decimal("100")
        assert balanced.id == entry.id

    def test_to_dict(self):
        data = self._entry().with_balance(Decimal("100")).to_dict()
        assert data["document_type"] == "Sale Invoice"
        assert data["debit"] == "100"
        assert data["balance"] == "100"
        assert data["date"] == "2024-01-05T00:00:00+00:00"

    def test_document_type_parse(self):
        assert DocumentType.parse("Receipt") is DocumentType.RECEIPT
        assert DocumentType.parse("PURCHASE_INVOICE") is DocumentType.PURCHASE_INVOICE
        with pytest.raises(ValueError):
            DocumentType.parse("Credit Note")

    def test_balance_side(self):
        assert BalanceSide.of(Decimal("0")) is BalanceSide.CR
        assert BalanceSide.of(Decimal("-0.01")) is BalanceSide.DR
        assert LedgerTotals(closing_balance=Decimal("-5")).to_dict()["closing_side"] == "DR"


# ══════════════════════════════════════════════════════════════
# INVENTORY & LINE ITEMS
# ══════════════════════════════════════════════════════════════

class TestInventoryItem:
    def test_stock_wins_over_opening_stock(self):
        item = InventoryItem.from_dict({"_id": "i1", "itemName": "Filter", "openingStock": 10, "stock": 4})
        assert item.current_stock == Decimal("4")

    def test_opening_stock_when_no_running_stock(self):
        assert InventoryItem.from_dict({"id": "i1", "openingStock": 10}).current_stock == Decimal("10")

    def test_zero_stock_is_present(self):
        assert InventoryItem.from_dict({"id": "i1", "openingStock": 10, "stock": 0}).current_stock == ZERO

    def test_nothing_known_is_zero(self):
        assert InventoryItem.from_dict({"id": "i1"}).current_stock == ZERO

    def test_absurd_amounts_read_as_zero(self):
        item = InventoryItem.from_dict({"id": "i1", "stock": "9e999999", "salesRate": "10"})
        assert item.current_stock == ZERO
        assert item.sales_rate == Decimal("10")

    def test_name_and_rate_fallbacks(self):
        item = InventoryItem.from_dict({"id": "i1", "name": "Membrane", "salePrice": "12.5"})
        assert item.name == "Membrane"
        assert item.sales_rate == Decimal("12.5")


class TestLineItem:
    def test_sale_line(self):
        line = LineItem.from_dict({"productId": "i1", "itemName": "Filter", "quantity": 2, "price": 50}, TransactionKind.SALE)
        assert line.identifier == "i1"
        assert line.name == "Filter"
        assert line.quantity == Decimal("2")
        assert line.rate == Decimal("50")

    def test_sale_rate_prefers_sales_rate(self):
        line = LineItem.from_dict({"salesRate": 60, "price": 50}, TransactionKind.SALE)
        assert line.rate == Decimal("60")

    def test_purchase_line_received_fallback(self):
        line = LineItem.from_dict({"_id": "x", "received": 7, "rate": 3}, TransactionKind.PURCHASE)
        assert line.quantity == Decimal("7")
        assert line.rate == Decimal("3")

    def test_identifier_chain_order(self):
        line = LineItem.from_dict({"productName": "Filter", "sku": "F-1"}, TransactionKind.SALE)
        assert line.identifier == "Filter"
