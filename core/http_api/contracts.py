"""
Back Office HTTP API - Contracts
================================
Framework-agnostic request/response DTOs for the report endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from core.primitives.document import PurchaseInvoice, SaleInvoice
from core.primitives.expense import Expense
from core.primitives.inventory import InventoryItem, StockStatus
from core.primitives.party import Entity, PartyType
from engines.ledger.filters import LedgerCriteria
from engines.ledger.services import LedgerSources


@dataclass(frozen=True)
class JournalLedgerHttpRequest:
    sources: LedgerSources
    criteria: LedgerCriteria
    customers: tuple[Entity, ...] = field(default_factory=tuple)
    suppliers: tuple[Entity, ...] = field(default_factory=tuple)
    page: int = 1
    page_size: Optional[int] = None
    include_report: bool = False

    def __post_init__(self):
        if not isinstance(self.sources, LedgerSources):
            raise ValueError("sources must be LedgerSources.")
        if not isinstance(self.criteria, LedgerCriteria):
            raise ValueError("criteria must be LedgerCriteria.")
        if not isinstance(self.customers, tuple):
            raise ValueError("customers must be a tuple.")
        if not isinstance(self.suppliers, tuple):
            raise ValueError("suppliers must be a tuple.")
        for customer in self.customers:
            if not isinstance(customer, Entity) or customer.party_type is not PartyType.CUSTOMER:
                raise ValueError("customers must contain customer entities.")
        for supplier in self.suppliers:
            if not isinstance(supplier, Entity) or supplier.party_type is not PartyType.SUPPLIER:
                raise ValueError("suppliers must contain supplier entities.")
        if not isinstance(self.page, int) or isinstance(self.page, bool):
            raise ValueError("page must be an integer.")
        if self.page_size is not None and (
            not isinstance(self.page_size, int) or isinstance(self.page_size, bool)
        ):
            raise ValueError("page_size must be an integer or None.")


@dataclass(frozen=True)
class StockReportHttpRequest:
    inventory: tuple[InventoryItem, ...]
    sales: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    purchases: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    status: Optional[StockStatus] = None
    include_report: bool = False

    def __post_init__(self):
        if not isinstance(self.inventory, tuple):
            raise ValueError("inventory must be a tuple.")
        for item in self.inventory:
            if not isinstance(item, InventoryItem):
                raise ValueError("inventory must contain InventoryItem values.")
        if not isinstance(self.sales, tuple) or not isinstance(self.purchases, tuple):
            raise ValueError("sales and purchases must be tuples.")
        if self.status is not None and not isinstance(self.status, StockStatus):
            raise ValueError("status must be StockStatus or None.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            payload = {"ok": True, "data": self.data}
            if self.meta:
                payload["meta"] = dict(self.meta)
            return payload
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}


def _check_members(name: str, values: Any, kind: type) -> None:
    if not isinstance(values, tuple):
        raise ValueError(f"{name} must be a tuple.")
    for value in values:
        if not isinstance(value, kind):
            raise ValueError(f"{name} must contain {kind.__name__} values.")


@dataclass(frozen=True)
class ProfitLossHttpRequest:
    sales: tuple[SaleInvoice, ...] = field(default_factory=tuple)
    purchases: tuple[PurchaseInvoice, ...] = field(default_factory=tuple)
    expenses: tuple[Expense, ...] = field(default_factory=tuple)
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    include_report: bool = False

    def __post_init__(self):
        _check_members("sales", self.sales, SaleInvoice)
        _check_members("purchases", self.purchases, PurchaseInvoice)
        _check_members("expenses", self.expenses, Expense)
        for name in ("date_from", "date_to"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string or None.")

    @property
    def document_count(self) -> int:
        return len(self.sales) + len(self.purchases) + len(self.expenses)


@dataclass(frozen=True)
class DashboardHttpRequest:
    sales: tuple[SaleInvoice, ...] = field(default_factory=tuple)
    purchases: tuple[PurchaseInvoice, ...] = field(default_factory=tuple)
    expenses: tuple[Expense, ...] = field(default_factory=tuple)
    inventory: tuple[InventoryItem, ...] = field(default_factory=tuple)
    customers_count: int = 0

    def __post_init__(self):
        _check_members("sales", self.sales, SaleInvoice)
        _check_members("purchases", self.purchases, PurchaseInvoice)
        _check_members("expenses", self.expenses, Expense)
        _check_members("inventory", self.inventory, InventoryItem)
        if not isinstance(self.customers_count, int) or isinstance(self.customers_count, bool):
            raise ValueError("customers_count must be an integer.")
        if self.customers_count < 0:
            raise ValueError("customers_count must be >= 0.")
