"""
Back Office Django Adapter Wiring
=================================
Constructs HttpApiDependencies from Django settings.

This module is adapter-only glue:
- report settings are read from settings.BACKOFFICE_REPORTS once
- engines receive the resulting ReportConfig explicitly
- services hold no request data between calls
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from django.conf import settings

from core.config import ReportConfig
from core.http_api.dependencies import HttpApiDependencies
from core.time import SystemClock
from engines.inventory.services import StockReportService
from engines.ledger.services import JournalLedgerService
from engines.reporting.services import DashboardService, ProfitLossService


logger = logging.getLogger("backoffice.http")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def load_report_config() -> ReportConfig:
    return ReportConfig.from_mapping(getattr(settings, "BACKOFFICE_REPORTS", None))


def _create_dependencies() -> HttpApiDependencies:
    config = load_report_config()
    clock = SystemClock()
    logger.info(
        f"Report services wired: company='{config.company_name}', "
        f"page sizes {config.page_sizes}"
    )
    return HttpApiDependencies(
        # Merge memo off: request bodies never share collection identity.
        ledger_service=JournalLedgerService(
            clock=clock, config=replace(config, merge_cache_size=0)
        ),
        stock_service=StockReportService(),
        config=config,
        clock=clock,
        profit_loss_service=ProfitLossService(),
        dashboard_service=DashboardService(clock=clock),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the wired singleton so the next request re-reads settings."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
