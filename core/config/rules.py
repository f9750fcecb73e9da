"""
Back Office Core Config - Report Settings
===========================================
Report presentation and paging settings. Engines receive a ReportConfig
explicitly; only the Django adapter reads it out of settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple


DEFAULT_PAGE_SIZES: Tuple[int, ...] = (10, 25, 50, 100)


# ══════════════════════════════════════════════════════════════
# REPORT CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ReportConfig:
    """
    company_name:          printed on report headers
    currency_label:        prefix used by format_currency
    default_page_size:     page size when the caller gives none
    page_sizes:            page sizes a caller may pick
    unknown_customer:      placeholder for unnamed customers / payers
    unknown_supplier:      placeholder for unnamed suppliers / payees
    merge_cache_size:      identity-keyed merge memo capacity (0 = off)
    """

    company_name: str = "Ultra Water Technologies"
    currency_label: str = "Rs"
    default_page_size: int = 25
    page_sizes: Tuple[int, ...] = field(default=DEFAULT_PAGE_SIZES)
    unknown_customer: str = "Unknown Customer"
    unknown_supplier: str = "Unknown Supplier"
    merge_cache_size: int = 8

    def __post_init__(self) -> None:
        if not isinstance(self.page_sizes, tuple) or not self.page_sizes:
            raise ValueError("page_sizes must be a non-empty tuple.")
        for size in self.page_sizes:
            if not isinstance(size, int) or isinstance(size, bool) or size < 1:
                raise ValueError(f"page size must be a positive int, got {size!r}.")
        if self.default_page_size not in self.page_sizes:
            raise ValueError(
                f"default_page_size {self.default_page_size} is not one of "
                f"{self.page_sizes}."
            )
        if self.merge_cache_size < 0:
            raise ValueError("merge_cache_size must be >= 0.")
        for name in ("company_name", "unknown_customer", "unknown_supplier"):
            if not getattr(self, name):
                raise ValueError(f"{name} must be a non-empty string.")

    def validate_page_size(self, page_size: int) -> int:
        if page_size not in self.page_sizes:
            raise ValueError(
                f"page_size must be one of {self.page_sizes}, got {page_size!r}."
            )
        return page_size

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> ReportConfig:
        """Build from a settings dict; unknown keys are rejected."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown report settings: {', '.join(unknown)}.")
        values = dict(data)
        if "page_sizes" in values:
            values["page_sizes"] = tuple(values["page_sizes"])
        return cls(**values)
