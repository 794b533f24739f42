"""Dispatch Executor: one request envelope in, one response envelope out.

WHY
───
A caller submits a batch of actions aimed at different systems.  Each
action must reach exactly the adapter bound to its ``resource.system``,
and no single failure (a missing adapter, a handler that raises, a
handler that hangs past its ``timeoutMs``) may abort or corrupt the
results of its siblings.

ARCHITECTURE
────────────
::

    DispatchExecutor(registry)
      └── .execute(envelope)                     ─ never raises per-action
            ├── started_at
            ├── for action in envelope.actions:  ─ strictly sequential
            │     └── .execute_action(action, ctx)
            │           ├── registry.get(system) is None → NO_ADAPTER
            │           ├── adapter.handle() raises     → EXECUTION_ERROR
            │           ├── bad result / wrong id       → EXECUTION_ERROR
            │           └── adapter result              → returned unchanged
            ├── finished_at
            └── BraidResponseEnvelope

Per-action state machine::

    Pending → Dispatched → Succeeded
                         → Failed(NoAdapter)
                         → Failed(ExecutionError)
                         → Failed(AdapterReportedError)

There is no retry transition and no fan-out: result ``i`` always belongs
to action ``i``.

Related modules:
    registry.py : AdapterRegistry resolved per action
    context.py  : AdapterContext handed to adapters
    timeout.py  : deadline applied when options.timeoutMs is set

Tags:
    braid, execution, dispatch, executor, fault-isolation

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

from braid.core.errors import (
    BraidError,
    ErrorCategory,
    describe_error,
    error_message,
)
from braid.core.logging import LogContext, get_logger
from braid.core.models import (
    Action,
    ActionResult,
    BraidRequestEnvelope,
    BraidResponseEnvelope,
    ResultStatus,
)
from braid.core.protocols import Adapter
from braid.execution.context import AdapterContext
from braid.execution.registry import AdapterRegistry
from braid.execution.timeout import TimeoutExpired, ms_to_seconds, with_deadline_async

NO_ADAPTER = "NO_ADAPTER"
EXECUTION_ERROR = "EXECUTION_ERROR"


class DispatchExecutor:
    """Routes each action of an envelope to its adapter, in order.

    Parameters
    ----------
    registry : AdapterRegistry
        Adapter bindings; expected to be frozen before serving.
    enforce_timeouts : bool
        Apply ``options.timeoutMs`` as a deadline around ``handle()``.
    logger :
        Optional structlog logger (defaults to this module's logger).

    Example::

        executor = DispatchExecutor(registry)
        response = await executor.execute(envelope)
        assert len(response.results) == len(envelope.actions)
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        *,
        enforce_timeouts: bool = True,
        logger: Any | None = None,
    ) -> None:
        self._registry = registry
        self._enforce_timeouts = enforce_timeouts
        self._log = logger if logger is not None else get_logger(__name__)

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    def _create_context(self, envelope: BraidRequestEnvelope) -> AdapterContext:
        return AdapterContext(get_logger("braid.adapter"), request_id=envelope.request_id)

    # ── Envelope ─────────────────────────────────────────────────────

    async def execute(self, envelope: BraidRequestEnvelope) -> BraidResponseEnvelope:
        """Dispatch every action of ``envelope`` and assemble the response.

        Per-action failures are captured as ``error`` results; the batch
        always completes with one result per submitted action.
        """
        started_at = datetime.now(UTC)
        ctx = self._create_context(envelope)

        async with LogContext(request_id=envelope.request_id):
            self._log.info(
                "envelope.executing",
                request_id=envelope.request_id,
                action_count=len(envelope.actions),
                actor_id=envelope.actor.id,
            )

            results: list[ActionResult] = []
            for action in envelope.actions:
                results.append(await self.execute_action(action, ctx))

            # Wall clock may step backwards; the envelope must not.
            finished_at = max(datetime.now(UTC), started_at)

            response = BraidResponseEnvelope(
                request_id=envelope.request_id,
                results=tuple(results),
                started_at=started_at,
                finished_at=finished_at,
                metadata=self._response_metadata(envelope),
            )

            self._log.info(
                "envelope.completed",
                succeeded=response.count(ResultStatus.SUCCESS),
                partial=response.count(ResultStatus.PARTIAL),
                failed=response.count(ResultStatus.ERROR),
                duration_ms=round((finished_at - started_at).total_seconds() * 1000, 2),
            )

        return response

    @staticmethod
    def _response_metadata(envelope: BraidRequestEnvelope) -> dict[str, Any]:
        """Echo of the caller identity; unset client/channel are left out."""
        metadata: dict[str, Any] = {"actorId": envelope.actor.id}
        if envelope.client is not None:
            metadata["client"] = envelope.client
        if envelope.channel is not None:
            metadata["channel"] = envelope.channel
        return metadata

    # ── Single action ────────────────────────────────────────────────

    async def execute_action(self, action: Action, ctx: AdapterContext) -> ActionResult:
        """Resolve the adapter for ``action`` and run it with fault isolation."""
        system = action.resource.system
        fields: dict[str, Any] = {
            "action_id": action.id,
            "system": system,
            "verb": action.verb.value,
        }
        if action.options is not None and action.options.trace_id:
            fields["trace_id"] = action.options.trace_id
        action_ctx = ctx.bind(**fields)

        adapter = self._registry.get(system)
        if adapter is None:
            self._log.error("action.no_adapter", **fields)
            return ActionResult.failure(
                action,
                NO_ADAPTER,
                f"No adapter registered for system '{system}'",
            )

        try:
            result = await self._invoke(adapter, action, action_ctx)
        except asyncio.CancelledError as e:
            # Only a cancellation aimed at this task stops the batch.
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            return self._execution_error(action, e, {**ctx.fields, **fields})
        except Exception as e:
            return self._execution_error(action, e, {**ctx.fields, **fields})

        return self._check_result(action, result, fields)

    async def _invoke(self, adapter: Adapter, action: Action, ctx: AdapterContext) -> Any:
        seconds = None
        if self._enforce_timeouts and action.options is not None:
            seconds = ms_to_seconds(action.options.timeout_ms)

        if seconds is None:
            return await adapter.handle(action, ctx)

        operation = f"{action.resource.system}.{action.verb.value} {action.resource.kind}"
        async with with_deadline_async(seconds, operation=operation):
            return await adapter.handle(action, ctx)

    def _execution_error(
        self,
        action: Action,
        error: BaseException,
        fields: dict[str, Any],
    ) -> ActionResult:
        details = describe_error(error)
        if isinstance(error, BraidError):
            # The adapter may reuse the exception; its own context stays untouched.
            details["context"] = {**error.context.to_dict(), **fields}
        if isinstance(error, TimeoutExpired) and action.options is not None:
            details["timeoutMs"] = action.options.timeout_ms

        message = error_message(error)
        self._log.error(
            "action.execution_error",
            error=message,
            error_type=type(error).__name__,
            **fields,
        )
        return ActionResult.failure(action, EXECUTION_ERROR, message, details=details)

    def _check_result(self, action: Action, result: Any, fields: dict[str, Any]) -> ActionResult:
        """Keep the one-result-per-action invariant when an adapter breaks its contract."""
        if not isinstance(result, ActionResult):
            reason = f"Adapter for system '{action.resource.system}' returned {type(result).__name__}, not ActionResult"
        elif result.action_id != action.id:
            reason = (
                f"Adapter for system '{action.resource.system}' returned a result for "
                f"action '{result.action_id}' while handling '{action.id}'"
            )
        else:
            return result

        violation = BraidError(reason, code="INVALID_RESULT", category=ErrorCategory.VALIDATION)
        violation.with_context(**fields)
        self._log.error("action.invalid_result", error=reason, **fields)
        return ActionResult.failure(action, EXECUTION_ERROR, reason, details=violation.to_dict())


__all__ = ["DispatchExecutor", "NO_ADAPTER", "EXECUTION_ERROR"]
