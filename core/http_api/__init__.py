"""
Back Office HTTP API - Public API
=================================
"""

from core.http_api.contracts import (
    DashboardHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    JournalLedgerHttpRequest,
    ProfitLossHttpRequest,
    StockReportHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    INVALID_REQUEST,
    METHOD_NOT_ALLOWED,
    REPORT_BUILD_ERROR,
    error_response,
    invalid_request_response,
    success_response,
)
from core.http_api.handlers import (
    post_dashboard,
    post_journal_ledger,
    post_profit_loss,
    post_stock_report,
)

__all__ = [
    "DashboardHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "JournalLedgerHttpRequest",
    "ProfitLossHttpRequest",
    "StockReportHttpRequest",
    "HttpApiDependencies",
    "INVALID_REQUEST",
    "METHOD_NOT_ALLOWED",
    "REPORT_BUILD_ERROR",
    "error_response",
    "invalid_request_response",
    "success_response",
    "post_dashboard",
    "post_journal_ledger",
    "post_profit_loss",
    "post_stock_report",
]
