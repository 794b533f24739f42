"""
Envelope, action and result models.

Every type that crosses the dispatch boundary is a frozen pydantic model:
callers build actions, the executor routes them, adapters read them, and
nobody can alter an action's resource or actor on the way through.

Wire format is camelCase JSON (``requestId``, ``timeoutMs``, ``errorCode``);
Python code uses snake_case attribute names. Both spellings are accepted on
input.

Architecture:
    ::

        BraidRequestEnvelope
          ├── request_id, actor, created_at, client, channel, metadata
          └── actions: tuple[Action, ...]            (order = dispatch order)
                 ├── id, verb, actor
                 ├── resource: ResourceRef(system, kind)
                 └── target_id, filters, sort, payload, options, metadata

        BraidResponseEnvelope
          ├── request_id, started_at, finished_at, metadata
          └── results: tuple[ActionResult, ...]      (same length / order)

Examples:
    >>> action = Action.model_validate({
    ...     "id": "a-1",
    ...     "verb": "read",
    ...     "actor": {"id": "u-1", "type": "user"},
    ...     "resource": {"system": "mock", "kind": "contact"},
    ...     "options": {"timeoutMs": 500},
    ... })
    >>> action.options.timeout_ms
    500
    >>> ActionResult.failure(action, "NOT_IMPLEMENTED", "later").to_dict()["errorCode"]
    'NOT_IMPLEMENTED'

Tags:
    models, pydantic, envelope, braid

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class BraidModel(BaseModel):
    """Base for all wire models: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        use_enum_values=False,
    )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Enums ────────────────────────────────────────────────────────────────


class ActorType(str, Enum):
    USER = "user"
    AGENT = "agent"
    SYSTEM = "system"


class Verb(str, Enum):
    READ = "read"
    SEARCH = "search"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RUN = "run"


class FilterOp(str, Enum):
    EQ = "eq"
    CONTAINS = "contains"
    LT = "lt"
    GT = "gt"
    IN = "in"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ResultStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


# ── Request side ─────────────────────────────────────────────────────────


class Actor(BraidModel):
    """Identity issuing actions. Roles are carried, never enforced."""

    id: str
    type: ActorType
    roles: frozenset[str] | None = None


class ResourceRef(BraidModel):
    """Target of an action; ``system`` selects the adapter."""

    system: str
    kind: str


class Filter(BraidModel):
    field: str
    op: FilterOp
    value: Any = None


class Sort(BraidModel):
    field: str
    direction: SortDirection = SortDirection.ASC


class ExecutionOptions(BraidModel):
    """Per-action hints.

    ``timeout_ms`` is enforced by the executor when timeouts are enabled;
    ``dry_run``, ``max_items`` and ``strict`` are for adapters to honor.
    ``trace_id`` is bound into the adapter's logging context.
    """

    timeout_ms: int | None = Field(default=None, ge=0)
    dry_run: bool | None = None
    max_items: int | None = Field(default=None, ge=0)
    strict: bool | None = None
    trace_id: str | None = None


class Action(BraidModel):
    """One unit of work targeted at a system and resource kind."""

    id: str
    verb: Verb
    actor: Actor
    resource: ResourceRef
    target_id: str | None = None
    filters: tuple[Filter, ...] | None = None
    sort: tuple[Sort, ...] | None = None
    payload: dict[str, Any] | None = None
    options: ExecutionOptions | None = None
    metadata: dict[str, Any] | None = None


class BraidRequestEnvelope(BraidModel):
    request_id: str
    actor: Actor
    actions: tuple[Action, ...]
    created_at: datetime
    client: str | None = None
    channel: str | None = None
    metadata: dict[str, Any] | None = None


# ── Response side ────────────────────────────────────────────────────────


class ActionResult(BraidModel):
    """Outcome of dispatching one action.

    An ``error`` status always carries an ``error_code``.
    """

    action_id: str
    status: ResultStatus
    resource: ResourceRef
    data: Any = None
    error_code: str | None = None
    error_message: str | None = None
    details: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _error_requires_code(self) -> ActionResult:
        if self.status is ResultStatus.ERROR and not self.error_code:
            raise ValueError("ActionResult with status 'error' requires error_code")
        return self

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @classmethod
    def success(
        cls,
        action: Action,
        data: Any = None,
        *,
        partial: bool = False,
        details: dict[str, Any] | None = None,
    ) -> ActionResult:
        """Build a ``success`` (or ``partial``) result echoing the action's resource."""
        return cls(
            action_id=action.id,
            status=ResultStatus.PARTIAL if partial else ResultStatus.SUCCESS,
            resource=action.resource,
            data=data,
            details=details,
        )

    @classmethod
    def failure(
        cls,
        action: Action,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> ActionResult:
        """Build an ``error`` result echoing the action's resource."""
        return cls(
            action_id=action.id,
            status=ResultStatus.ERROR,
            resource=action.resource,
            error_code=code,
            error_message=message,
            details=details,
        )


class BraidResponseEnvelope(BraidModel):
    request_id: str
    results: tuple[ActionResult, ...]
    started_at: datetime
    finished_at: datetime
    metadata: dict[str, Any] | None = None

    def count(self, status: ResultStatus) -> int:
        """Number of results with the given status."""
        return sum(1 for r in self.results if r.status is status)


__all__ = [
    "BraidModel",
    "ActorType",
    "Verb",
    "FilterOp",
    "SortDirection",
    "ResultStatus",
    "Actor",
    "ResourceRef",
    "Filter",
    "Sort",
    "ExecutionOptions",
    "Action",
    "BraidRequestEnvelope",
    "ActionResult",
    "BraidResponseEnvelope",
]
