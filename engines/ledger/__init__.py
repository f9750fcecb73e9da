"""
Back Office Ledger Engine
==========================
Combined journal ledger over sales, purchases, receipts and payments.

    normalizer  source document -> LedgerEntry (sign table)
    merger      dedupe by id, stable chronological sort
    filters     scope -> entity -> type -> date range -> search
    balance     running balance and totals
    pager       page windows and page state
    services    JournalLedgerService, the one-call query
"""

from engines.ledger.balance import opening_seed, summarize, with_balances
from engines.ledger.filters import LedgerCriteria, LedgerScope, filter_entries
from engines.ledger.merger import merge, merge_entries
from engines.ledger.normalizer import entry_id, normalize
from engines.ledger.pager import Page, PageState, paginate, total_pages

__all__ = [
    "LedgerCriteria",
    "LedgerScope",
    "Page",
    "PageState",
    "entry_id",
    "filter_entries",
    "merge",
    "merge_entries",
    "normalize",
    "opening_seed",
    "paginate",
    "summarize",
    "total_pages",
    "with_balances",
]
