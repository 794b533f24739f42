"""
Envelope construction and parsing for transports (HTTP, CLI).

The dispatch engine only ever sees a validated
:class:`~braid.core.models.BraidRequestEnvelope`; everything that arrives
as raw JSON goes through :func:`parse_envelope` first.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from braid.core.errors import InvalidEnvelopeError
from braid.core.models import Action, Actor, BraidRequestEnvelope

INVALID_ENVELOPE_MESSAGE = "Body must be a valid BraidRequestEnvelope with requestId, actor, and actions[]"


def _validation_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": ".".join(str(part) for part in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors(include_url=False)
    ]


def parse_envelope(raw: Any) -> BraidRequestEnvelope:
    """Validate a JSON-shaped request body into a request envelope.

    ``createdAt`` defaults to now and ``metadata`` to ``{}``.

    Raises:
        InvalidEnvelopeError: If ``requestId``, ``actor`` or an ``actions``
            array is missing, or any field fails validation.
    """
    if (
        not isinstance(raw, dict)
        or not raw.get("requestId")
        or not raw.get("actor")
        or not isinstance(raw.get("actions"), list)
    ):
        raise InvalidEnvelopeError(INVALID_ENVELOPE_MESSAGE)

    data = dict(raw)
    if data.get("createdAt") is None:
        data["createdAt"] = datetime.now(UTC)
    if data.get("metadata") is None:
        data["metadata"] = {}

    try:
        return BraidRequestEnvelope.model_validate(data)
    except ValidationError as e:
        raise InvalidEnvelopeError(
            INVALID_ENVELOPE_MESSAGE,
            errors=_validation_errors(e),
            cause=e,
        ) from e


def build_envelope(
    actor: Actor,
    actions: Iterable[Action],
    request_id: str | None = None,
    client: str | None = None,
    channel: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> BraidRequestEnvelope:
    """Build a request envelope in code, generating ``requestId`` when omitted."""
    return BraidRequestEnvelope(
        request_id=request_id or str(uuid.uuid4()),
        actor=actor,
        actions=tuple(actions),
        created_at=datetime.now(UTC),
        client=client,
        channel=channel,
        metadata=metadata or {},
    )
