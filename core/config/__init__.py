"""
Back Office Core Config - Public API
======================================
Report presentation and paging settings.
"""

from core.config.rules import DEFAULT_PAGE_SIZES, ReportConfig

__all__ = [
    "DEFAULT_PAGE_SIZES",
    "ReportConfig",
]
