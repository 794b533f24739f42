"""Deadline enforcement for adapter calls.

The executor wraps ``adapter.handle()`` in :func:`with_deadline_async`
when an action carries ``options.timeoutMs``. On expiry the handler task
is cancelled and :class:`TimeoutExpired` is raised at the dispatch
boundary, where it becomes an ``EXECUTION_ERROR`` result.

Architecture:
    ::

        async with with_deadline_async(2.5, operation="handle crm/contact"):
            result = await adapter.handle(action, ctx)
                              │
                              │ uses
                              ▼
        ┌────────────────────────────────────────────────────────────────┐
        │               asyncio.timeout (Python 3.11+)                    │
        │  - Native async timeout support                                │
        │  - Cancels the awaiting task on timeout                        │
        └────────────────────────────────────────────────────────────────┘

Guardrails:
    - Only async code is covered; a handler that blocks the event loop
      cannot be interrupted
    - A zero or negative timeoutMs means "no deadline"

Tags:
    timeout, deadline, execution, braid

Doc-Types:
    api-reference
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field


class TimeoutExpired(TimeoutError):
    """Raised when an operation exceeds its deadline.

    Inherits from built-in TimeoutError for broad exception handling.

    Attributes:
        timeout: The timeout value that was exceeded (seconds)
        elapsed: How long the operation ran before being interrupted
        operation: Name/description of the operation
    """

    def __init__(
        self,
        timeout: float,
        elapsed: float | None = None,
        operation: str = "operation",
    ):
        self.timeout = timeout
        self.elapsed = elapsed
        self.operation = operation

        msg = f"Operation '{operation}' timed out after {timeout}s"

        if elapsed is not None:
            msg += f" (ran for {elapsed:.2f}s)"

        super().__init__(msg)


@dataclass
class DeadlineContext:
    """Deadline state for one guarded block.

    Attributes:
        timeout_seconds: Original timeout value in seconds
        operation: Name/description of the operation
        start_time: When the deadline context started
    """

    timeout_seconds: float
    operation: str = "operation"
    start_time: float = field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        """Elapsed time since start in seconds."""
        return time.monotonic() - self.start_time


def ms_to_seconds(timeout_ms: int | None) -> float | None:
    """Convert a ``timeoutMs`` hint to seconds; ``None`` when no deadline applies."""
    if timeout_ms is None or timeout_ms <= 0:
        return None
    return timeout_ms / 1000.0


@asynccontextmanager
async def with_deadline_async(seconds: float, operation: str | None = None) -> AsyncIterator[DeadlineContext]:
    """Async context manager for enforcing a time limit.

    Args:
        seconds: Maximum time allowed
        operation: Name/description for error messages

    Yields:
        DeadlineContext for reading elapsed time

    Raises:
        TimeoutExpired: If the deadline is exceeded
        ValueError: If seconds is negative

    Example:
        >>> async with with_deadline_async(10.0, operation="fetch"):
        ...     data = await fetch_data()
    """
    if seconds < 0:
        raise ValueError(f"Timeout must be non-negative, got {seconds}")

    now = time.monotonic()
    ctx = DeadlineContext(
        timeout_seconds=seconds,
        operation=operation or "operation",
        start_time=now,
    )

    guard = asyncio.timeout(seconds)
    try:
        async with guard:
            yield ctx
    except TimeoutError:
        # A TimeoutError raised by the guarded code itself is not ours to rename.
        if not guard.expired():
            raise
        raise TimeoutExpired(
            timeout=seconds,
            elapsed=ctx.elapsed,
            operation=ctx.operation,
        ) from None
