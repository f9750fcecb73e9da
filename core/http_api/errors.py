"""
Back Office HTTP API - Error Mapping
====================================
Stable transport envelopes for successful reports and failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse


INVALID_REQUEST = "INVALID_REQUEST"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
REPORT_BUILD_ERROR = "REPORT_BUILD_ERROR"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def invalid_request_response(exc: Exception) -> dict[str, Any]:
    if isinstance(exc, KeyError):
        message = f"Missing required field: {exc.args[0] if exc.args else '?'}."
    else:
        message = str(exc)
    return error_response(
        code=INVALID_REQUEST,
        message=message,
        details={"error_type": type(exc).__name__},
    )
