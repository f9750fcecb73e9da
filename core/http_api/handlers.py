"""
Back Office HTTP API - Framework-Agnostic Handlers
==================================================
Pure handler functions over contracts and injected dependencies.

Handlers return envelope dicts and never raise: contract violations
discovered while building a report become INVALID_REQUEST, anything
else becomes REPORT_BUILD_ERROR.
"""

from __future__ import annotations

import logging
from typing import Any

from core.http_api.contracts import (
    DashboardHttpRequest,
    JournalLedgerHttpRequest,
    ProfitLossHttpRequest,
    StockReportHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    REPORT_BUILD_ERROR,
    error_response,
    invalid_request_response,
    success_response,
)
from engines.ledger.pager import PageState
from projections.reports import (
    JournalLedgerReport,
    ProfitLossReport,
    StockLedgerReport,
    StockSummaryRow,
)


logger = logging.getLogger("backoffice.http")


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def post_journal_ledger(
    request: JournalLedgerHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    config = dependencies.config
    try:
        page_size = config.validate_page_size(
            request.page_size if request.page_size is not None else config.default_page_size
        )
        state = PageState(page=request.page, page_size=page_size, criteria=request.criteria)
        result = dependencies.ledger_service.build(
            request.sources,
            customers=request.customers,
            suppliers=request.suppliers,
            state=state,
        )
    except (ValueError, TypeError) as exc:
        return invalid_request_response(exc)
    except Exception as exc:
        logger.exception("Journal ledger build failed")
        return error_response(
            code=REPORT_BUILD_ERROR,
            message="Failed to build journal ledger.",
            details={"error_type": type(exc).__name__},
        )

    data = result.to_dict()
    data["entity_options"] = [
        group.to_dict()
        for group in dependencies.ledger_service.entity_options(
            request.customers, request.suppliers
        )
    ]
    if request.include_report:
        data["report"] = JournalLedgerReport.build(
            result,
            from_date=_optional_text(request.criteria.date_from),
            to_date=_optional_text(request.criteria.date_to),
            config=config,
            clock=dependencies.clock,
        ).to_dict()
    return success_response(data, meta={"document_count": request.sources.document_count})


def post_stock_report(
    request: StockReportHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    try:
        report = dependencies.stock_service.build(
            request.inventory,
            sales=request.sales,
            purchases=request.purchases,
        )
    except Exception as exc:
        logger.exception("Stock report build failed")
        return error_response(
            code=REPORT_BUILD_ERROR,
            message="Failed to build stock report.",
            details={"error_type": type(exc).__name__},
        )

    rows = report.rows_for(request.status)
    data: dict[str, Any] = {
        "status": request.status.value if request.status else None,
        "rows": [row.to_dict() for row in rows],
        "summary": report.summary.to_dict(),
        "summary_rows": [StockSummaryRow.from_row(row).to_dict() for row in rows],
    }
    if request.include_report:
        data["report"] = StockLedgerReport.build(
            report,
            config=dependencies.config,
            clock=dependencies.clock,
        ).to_dict()
    return success_response(data)


def post_profit_loss(
    request: ProfitLossHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    try:
        result = dependencies.profit_loss_service.build(
            request.sales,
            request.purchases,
            request.expenses,
            date_from=_optional_text(request.date_from),
            date_to=_optional_text(request.date_to),
        )
    except Exception as exc:
        logger.exception("Profit & loss build failed")
        return error_response(
            code=REPORT_BUILD_ERROR,
            message="Failed to build profit & loss.",
            details={"error_type": type(exc).__name__},
        )

    data = result.to_dict()
    if request.include_report:
        data["report"] = ProfitLossReport.build(
            result,
            config=dependencies.config,
            clock=dependencies.clock,
        ).to_dict()
    return success_response(data, meta={"document_count": request.document_count})


def post_dashboard(
    request: DashboardHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    try:
        summary = dependencies.dashboard_service.build(
            sales=request.sales,
            purchases=request.purchases,
            expenses=request.expenses,
            inventory=request.inventory,
            customers_count=request.customers_count,
        )
    except Exception as exc:
        logger.exception("Dashboard build failed")
        return error_response(
            code=REPORT_BUILD_ERROR,
            message="Failed to build dashboard.",
            details={"error_type": type(exc).__name__},
        )
    return success_response(summary.to_dict())
