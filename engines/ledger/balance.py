"""
Back Office Ledger Engine - Running Balance Calculator
========================================================
Folds debit minus credit across an already filtered, date-sorted
sequence, starting from a seed.

    balance(e_k) = seed + sum(debit(e_i) - credit(e_i) for i <= k)

The seed is the selected party's opening balance when the ledger is
narrowed to one party, otherwise 0. A balance belongs to the sequence
it was computed over, so every entry comes back as a copy carrying its
balance and the inputs are left untouched.

Positive balances display as CR, negative as DR.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from core.primitives.fields import ZERO
from core.primitives.ledger import LedgerEntry, LedgerTotals
from core.primitives.party import Entity


def opening_seed(entity: Optional[Entity]) -> Decimal:
    return entity.opening_balance if entity is not None else ZERO


def with_balances(
    entries: Iterable[LedgerEntry], opening_balance: Decimal = ZERO
) -> List[LedgerEntry]:
    running = opening_balance
    balanced: List[LedgerEntry] = []
    for entry in entries:
        running += entry.debit - entry.credit
        balanced.append(entry.with_balance(running))
    return balanced


def summarize(
    balanced: Sequence[LedgerEntry], opening_balance: Decimal = ZERO
) -> LedgerTotals:
    """Totals over a balanced sequence; closing is the seed when empty."""
    total_debit = sum((e.debit for e in balanced), ZERO)
    total_credit = sum((e.credit for e in balanced), ZERO)
    closing = balanced[-1].balance if balanced else opening_balance
    if closing is None:
        raise ValueError("summarize() needs entries produced by with_balances().")
    return LedgerTotals(
        total_debit=total_debit,
        total_credit=total_credit,
        closing_balance=closing,
    )
