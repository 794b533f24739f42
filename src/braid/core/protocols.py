"""
Canonical protocol definitions for braid.

Manifesto:
    The registry and executor depend on the *shape* of an adapter, never on
    a concrete class. Any object with a ``system`` identifier and an async
    ``handle(action, ctx)`` method can be registered.

Architecture:
    ::

        protocols.py
        ├── LoggingContext : debug/info/warn/error sink handed to adapters
        └── Adapter        : system identifier + async handle()

Guardrails:
    ❌ DON'T: Import concrete adapters from the registry or executor
    ✅ DO: Type against ``Adapter`` and ``LoggingContext``

Tags:
    protocols, contracts, adapters, braid

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from braid.core.models import Action, ActionResult


@runtime_checkable
class LoggingContext(Protocol):
    """Severity-leveled log sinks.

    Each method takes a free-text message and an optional structured
    metadata map. Implementations return nothing and must not raise.
    """

    def debug(self, message: str, meta: Mapping[str, Any] | None = None) -> None: ...

    def info(self, message: str, meta: Mapping[str, Any] | None = None) -> None: ...

    def warn(self, message: str, meta: Mapping[str, Any] | None = None) -> None: ...

    def error(self, message: str, meta: Mapping[str, Any] | None = None) -> None: ...


@runtime_checkable
class Adapter(Protocol):
    """Handler bound to one target system.

    Attributes:
        system: Non-empty identifier matched (by equality) against
            ``ResourceRef.system``. Unique within a registry.

    ``handle`` produces exactly one :class:`ActionResult` for the action it
    is given, or raises. Raised exceptions are isolated by the executor and
    reported as ``EXECUTION_ERROR`` results.
    """

    system: str

    async def handle(self, action: Action, ctx: LoggingContext) -> ActionResult: ...


__all__ = ["LoggingContext", "Adapter"]
