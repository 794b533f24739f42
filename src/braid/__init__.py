"""
braid: action dispatch engine.

Accepts a batch of system-targeted actions in one request envelope,
routes each action to the adapter registered for its target system, and
returns one result per action in a response envelope. A failing or
missing adapter never aborts sibling actions.

Usage::

    from braid import AdapterRegistry, DispatchExecutor
    from braid.adapters import MockAdapter

    registry = AdapterRegistry()
    registry.register(MockAdapter())
    registry.freeze()
    response = await DispatchExecutor(registry).execute(envelope)
"""

__version__ = "0.1.0"

from braid.core.models import (  # noqa: E402
    Action,
    ActionResult,
    BraidRequestEnvelope,
    BraidResponseEnvelope,
)
from braid.execution.executor import DispatchExecutor  # noqa: E402
from braid.execution.registry import AdapterRegistry  # noqa: E402

__all__ = [
    "__version__",
    "Action",
    "ActionResult",
    "AdapterRegistry",
    "BraidRequestEnvelope",
    "BraidResponseEnvelope",
    "DispatchExecutor",
]
