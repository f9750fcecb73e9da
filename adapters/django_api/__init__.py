"""
Back Office Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    build_dependencies,
    load_report_config,
    reset_dependencies,
)

__all__ = [
    "build_dependencies",
    "load_report_config",
    "reset_dependencies",
]
