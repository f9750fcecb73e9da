"""
Back Office Party Primitive - Customers and Suppliers
=======================================================
Read-only reference data for ledger counterparties.

A party carries a signed opening balance (positive = CR). The journal
ledger seeds its running balance from it when the ledger is narrowed to
one party.

Parties are selected by a prefixed key, "customer-{id}" or
"supplier-{id}", because customer and supplier ids come from separate
collections and may collide.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from core.primitives.fields import (
    ZERO,
    as_text,
    first_present,
    first_truthy,
    to_decimal,
)


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class PartyType(Enum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Opening-balance field precedence differs between the two collections.
_OPENING_BALANCE_FIELDS = {
    PartyType.CUSTOMER: ("openingAmount", "openingBalance"),
    PartyType.SUPPLIER: ("openingBalance", "openingAmount"),
}


# ══════════════════════════════════════════════════════════════
# ENTITY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Entity:
    """A customer or supplier."""
    id: str
    name: str
    party_type: PartyType
    opening_balance: Decimal = ZERO

    def __post_init__(self):
        if not isinstance(self.party_type, PartyType):
            raise ValueError("party_type must be PartyType enum.")

    @property
    def key(self) -> str:
        return f"{self.party_type.value}-{self.id}"

    @property
    def label(self) -> str:
        return f"{self.name} ({self.party_type.label})"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], party_type: PartyType) -> Entity:
        return cls(
            id=as_text(first_present(data, "_id", "id")),
            name=as_text(data.get("name")),
            party_type=party_type,
            opening_balance=to_decimal(
                first_truthy(data, *_OPENING_BALANCE_FIELDS[party_type])
            ),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "party_type": self.party_type.value,
            "opening_balance": str(self.opening_balance),
            "key": self.key,
            "label": self.label,
        }


# ══════════════════════════════════════════════════════════════
# ENTITY SELECTION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EntityRef:
    """A selected party, before it is resolved against reference data."""
    party_type: PartyType
    entity_id: str

    def __post_init__(self):
        if not isinstance(self.party_type, PartyType):
            raise ValueError("party_type must be PartyType enum.")
        if not self.entity_id or not isinstance(self.entity_id, str):
            raise ValueError("entity_id must be a non-empty string.")

    @property
    def key(self) -> str:
        return f"{self.party_type.value}-{self.entity_id}"

    @classmethod
    def parse(cls, key: str) -> EntityRef:
        """Parse "customer-{id}" / "supplier-{id}"."""
        if not isinstance(key, str):
            raise ValueError("entity key must be a string.")
        prefix, sep, entity_id = key.partition("-")
        if not sep:
            raise ValueError(
                f"entity key '{key}' must look like 'customer-<id>' or 'supplier-<id>'."
            )
        try:
            party_type = PartyType(prefix)
        except ValueError:
            raise ValueError(
                f"entity key '{key}' has unknown party prefix '{prefix}'."
            ) from None
        return cls(party_type=party_type, entity_id=entity_id)


def resolve_entity(
    ref: Optional[EntityRef],
    customers: Iterable[Entity],
    suppliers: Iterable[Entity],
) -> Optional[Entity]:
    """Look the selection up in the matching collection (first id match)."""
    if ref is None:
        return None
    pool = customers if ref.party_type is PartyType.CUSTOMER else suppliers
    for entity in pool:
        if entity.id == ref.entity_id:
            return entity
    return None
