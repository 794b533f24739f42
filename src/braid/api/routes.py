"""
HTTP routes: health probe and envelope dispatch.

``POST /mcp/run`` is the only way into the dispatch engine over HTTP. The
route rejects bodies that are too large or not envelope-shaped before the
executor sees them, and maps an exception escaping the executor (which is
not expected) to ``500 MCP_EXECUTION_ERROR``.
"""

from __future__ import annotations

import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from braid.api.deps import Executor, Settings
from braid.api.errors import error_response
from braid.core.envelope import INVALID_ENVELOPE_MESSAGE, parse_envelope
from braid.core.errors import InvalidEnvelopeError, error_message
from braid.core.logging import get_logger

log = get_logger("braid.api")

router = APIRouter()


@router.get("/health", tags=["health"])
async def health(settings: Settings) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name}


@router.post("/mcp/run", tags=["dispatch"])
async def run_envelope(request: Request, executor: Executor, settings: Settings) -> JSONResponse:
    """Dispatch one request envelope and return the response envelope."""
    limit = settings.max_body_bytes
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        return error_response("PAYLOAD_TOO_LARGE", f"Request body exceeds {limit} bytes")

    # Chunked bodies carry no Content-Length; stop reading once past the limit.
    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            log.warning("envelope.too_large", limit=limit)
            return error_response("PAYLOAD_TOO_LARGE", f"Request body exceeds {limit} bytes")
        chunks.append(chunk)
    raw = b"".join(chunks)

    try:
        body = json.loads(raw) if raw else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        log.warning("envelope.invalid_json", size=len(raw))
        return error_response("INVALID_ENVELOPE", INVALID_ENVELOPE_MESSAGE)

    try:
        envelope = parse_envelope(body)
    except InvalidEnvelopeError as e:
        log.warning("envelope.invalid", error_count=len(e.errors))
        return error_response("INVALID_ENVELOPE", e.message, errors=e.errors)

    try:
        response = await executor.execute(envelope)
    except Exception as e:
        log.error("Unhandled /mcp/run error", request_id=envelope.request_id, error=error_message(e))
        return error_response("MCP_EXECUTION_ERROR", error_message(e))

    return JSONResponse(content=response.to_dict())
