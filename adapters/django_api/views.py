"""
Back Office Django Adapter Views
================================
Pass-through HTTP views over core/http_api handlers.

Request bodies carry the already-loaded collections as raw JSON
records; this module turns them into typed contracts and nothing more.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    DashboardHttpRequest,
    JournalLedgerHttpRequest,
    ProfitLossHttpRequest,
    StockReportHttpRequest,
)
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    error_response,
    invalid_request_response,
)
from core.http_api.handlers import (
    post_dashboard,
    post_journal_ledger,
    post_profit_loss,
    post_stock_report,
)
from core.primitives.document import (
    PaymentVoucher,
    PurchaseInvoice,
    ReceiptVoucher,
    SaleInvoice,
)
from core.primitives.expense import Expense
from core.primitives.inventory import InventoryItem, StockStatus
from core.primitives.ledger import DocumentType
from core.primitives.party import Entity, EntityRef, PartyType
from engines.ledger.filters import LedgerCriteria, LedgerScope
from engines.ledger.services import LedgerSources


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
        status=405,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _records(body: dict[str, Any], field_name: str) -> list[dict[str, Any]]:
    value = body.get(field_name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list.")
    for record in value:
        if not isinstance(record, dict):
            raise ValueError(f"{field_name} must contain objects.")
    return value


def _parse_int(value: Any, field_name: str) -> int:
    """Whole numbers only: 2, 2.0 and "2" parse, 2.7 and true do not."""
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("+-").isdecimal():
        return int(value)
    raise ValueError(f"{field_name} must be an integer.")


def _parse_bool(body: dict[str, Any], field_name: str) -> bool:
    value = body.get(field_name, False)
    if not isinstance(value, bool):
        raise ValueError(f"{field_name} must be true or false.")
    return value


def _parse_criteria(payload: Any) -> LedgerCriteria:
    if payload is None:
        return LedgerCriteria()
    if not isinstance(payload, dict):
        raise ValueError("criteria must be an object.")

    try:
        scope = LedgerScope(payload.get("scope") or LedgerScope.ALL.value)
    except ValueError:
        raise ValueError(
            f"scope must be one of {', '.join(s.value for s in LedgerScope)}."
        ) from None

    entity_key = payload.get("entity")
    document_types = payload.get("document_types") or []
    if not isinstance(document_types, list):
        raise ValueError("document_types must be a list.")

    search = payload.get("search") or ""
    if not isinstance(search, str):
        raise ValueError("search must be a string.")

    return LedgerCriteria(
        scope=scope,
        entity=EntityRef.parse(entity_key) if entity_key else None,
        document_types=frozenset(DocumentType.parse(t) for t in document_types),
        date_from=payload.get("date_from") or None,
        date_to=payload.get("date_to") or None,
        search=search,
    )


def _journal_ledger_contract(body: dict[str, Any]) -> JournalLedgerHttpRequest:
    sources = LedgerSources(
        sales=[SaleInvoice.from_dict(r) for r in _records(body, "sales")],
        purchases=[PurchaseInvoice.from_dict(r) for r in _records(body, "purchases")],
        receipts=[ReceiptVoucher.from_dict(r) for r in _records(body, "receipts")],
        payments=[PaymentVoucher.from_dict(r) for r in _records(body, "payments")],
    )
    page_size = body.get("page_size")
    return JournalLedgerHttpRequest(
        sources=sources,
        criteria=_parse_criteria(body.get("criteria")),
        customers=tuple(
            Entity.from_dict(r, PartyType.CUSTOMER) for r in _records(body, "customers")
        ),
        suppliers=tuple(
            Entity.from_dict(r, PartyType.SUPPLIER) for r in _records(body, "suppliers")
        ),
        page=_parse_int(body.get("page", 1), "page"),
        page_size=_parse_int(page_size, "page_size") if page_size is not None else None,
        include_report=_parse_bool(body, "include_report"),
    )


def _stock_report_contract(body: dict[str, Any]) -> StockReportHttpRequest:
    status_raw = body.get("status")
    status = None
    if status_raw:
        try:
            status = StockStatus(status_raw)
        except ValueError:
            raise ValueError(
                f"status must be one of {', '.join(s.value for s in StockStatus)}."
            ) from None
    return StockReportHttpRequest(
        inventory=tuple(InventoryItem.from_dict(r) for r in _records(body, "inventory")),
        sales=tuple(_records(body, "sales")),
        purchases=tuple(_records(body, "purchases")),
        status=status,
        include_report=_parse_bool(body, "include_report"),
    )


def _optional_string(body: dict[str, Any], field_name: str) -> str | None:
    value = body.get(field_name)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")
    return value


def _profit_loss_contract(body: dict[str, Any]) -> ProfitLossHttpRequest:
    return ProfitLossHttpRequest(
        sales=tuple(SaleInvoice.from_dict(r) for r in _records(body, "sales")),
        purchases=tuple(PurchaseInvoice.from_dict(r) for r in _records(body, "purchases")),
        expenses=tuple(Expense.from_dict(r) for r in _records(body, "expenses")),
        date_from=_optional_string(body, "date_from"),
        date_to=_optional_string(body, "date_to"),
        include_report=_parse_bool(body, "include_report"),
    )


def _dashboard_contract(body: dict[str, Any]) -> DashboardHttpRequest:
    return DashboardHttpRequest(
        sales=tuple(SaleInvoice.from_dict(r) for r in _records(body, "sales")),
        purchases=tuple(PurchaseInvoice.from_dict(r) for r in _records(body, "purchases")),
        expenses=tuple(Expense.from_dict(r) for r in _records(body, "expenses")),
        inventory=tuple(InventoryItem.from_dict(r) for r in _records(body, "inventory")),
        customers_count=len(_records(body, "customers")),
    )

def _dispatch(handler, contract_factory, request: HttpRequest) -> JsonResponse:
    try:
        body = _parse_json_body(request)
        contract = contract_factory(body)
    except (ValueError, KeyError, TypeError) as exc:
        return JsonResponse(invalid_request_response(exc), status=400)

    payload = handler(contract, build_dependencies())
    if payload["ok"]:
        return JsonResponse(payload)
    status = 400 if payload["error"]["code"] == INVALID_REQUEST else 500
    return JsonResponse(payload, status=status)


@csrf_exempt
def journal_ledger_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch(post_journal_ledger, _journal_ledger_contract, request)


@csrf_exempt
def stock_report_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch(post_stock_report, _stock_report_contract, request)


@csrf_exempt
def profit_loss_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch(post_profit_loss, _profit_loss_contract, request)


@csrf_exempt
def dashboard_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch(post_dashboard, _dashboard_contract, request)
