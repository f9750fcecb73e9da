"""
Back Office Field Coercion - Raw Record Helpers
=================================================
Records arrive from the data layer as loosely-typed mappings: numbers
as strings, ids under `_id` or `id`, optional nested objects. These
helpers turn them into typed values without ever raising.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional


ZERO = Decimal(0)

# Amounts of 10**16 and above read as 0, like any unreadable amount.
MAX_AMOUNT_EXPONENT = 15


def to_decimal(value: Any) -> Decimal:
    """Coerce a raw amount to Decimal; unreadable input is 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not result.is_finite() or result.adjusted() > MAX_AMOUNT_EXPONENT:
        return ZERO
    return result


def to_optional_decimal(value: Any) -> Optional[Decimal]:
    """Like to_decimal, but keeps "absent" distinct from zero."""
    if value is None or value == "":
        return None
    return to_decimal(value)


def first_present(data: Mapping[str, Any], *keys: str) -> Any:
    """First value that is not None (the `a ?? b ?? c` chain)."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def first_truthy(data: Mapping[str, Any], *keys: str) -> Any:
    """First value that is truthy (the `a || b || c` chain)."""
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None


def first_nonzero_amount(data: Mapping[str, Any], *keys: str) -> Decimal:
    """First amount under keys that coerces to a non-zero Decimal."""
    for key in keys:
        amount = to_decimal(data.get(key))
        if amount != ZERO:
            return amount
    return ZERO


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def as_mapping(value: Any) -> Mapping[str, Any]:
    """Nested objects may be missing, a mapping, or a one-element list."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, Mapping):
        return value
    return {}


def record_id(data: Mapping[str, Any]) -> str:
    return as_text(first_present(data, "id", "_id"))


def optional_text(value: Any) -> Optional[str]:
    """Text for a truthy value, None for anything empty or missing."""
    if not value:
        return None
    return str(value)
