"""
Braid execution: adapter registry and dispatch executor.

Usage::

    from braid.execution import AdapterRegistry, DispatchExecutor

    registry = AdapterRegistry()
    registry.register(MockAdapter())
    registry.freeze()

    executor = DispatchExecutor(registry)
    response = await executor.execute(envelope)
"""

from braid.execution.context import AdapterContext
from braid.execution.executor import EXECUTION_ERROR, NO_ADAPTER, DispatchExecutor
from braid.execution.registry import AdapterRegistry
from braid.execution.timeout import DeadlineContext, TimeoutExpired, with_deadline_async

__all__ = [
    "AdapterContext",
    "AdapterRegistry",
    "DispatchExecutor",
    "NO_ADAPTER",
    "EXECUTION_ERROR",
    "DeadlineContext",
    "TimeoutExpired",
    "with_deadline_async",
]
