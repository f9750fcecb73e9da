"""
Back Office HTTP API - Dependencies
===================================
Injected services, settings and clock for handler wiring.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from core.config import ReportConfig
from core.time import Clock
from engines.inventory.services import StockReportService
from engines.ledger.services import JournalLedgerService
from engines.reporting.services import DashboardService, ProfitLossService


@dataclass(frozen=True)
class HttpApiDependencies:
    ledger_service: JournalLedgerService
    stock_service: StockReportService
    config: ReportConfig
    clock: Clock
    profit_loss_service: ProfitLossService = field(default_factory=ProfitLossService)
    dashboard_service: Optional[DashboardService] = None

    def __post_init__(self):
        # The dashboard reads "today" from the same clock as everything else.
        if self.dashboard_service is None:
            object.__setattr__(self, "dashboard_service", DashboardService(clock=self.clock))
