"""
Error responses for the HTTP transport.

Every non-2xx body has the shape ``{"error": CODE, "message": str}``,
with an optional ``errors`` list for field-level validation failures.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from braid.core.logging import get_logger

log = get_logger("braid.api")

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "INVALID_ENVELOPE": 400,
    "PAYLOAD_TOO_LARGE": 413,
    "MCP_EXECUTION_ERROR": 500,
    "UNHANDLED_ERROR": 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def error_response(
    code: str,
    message: str,
    *,
    errors: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"error": code, "message": message}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=status_for_error_code(code), content=body)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: returns 500 UNHANDLED_ERROR."""
    log.error("Unhandled error middleware", error=str(exc) or type(exc).__name__, path=request.url.path)
    return error_response("UNHANDLED_ERROR", str(exc) or type(exc).__name__)
