"""
Braid core: data model, protocols, errors, logging and settings.

Everything the dispatch engine and its adapters share lives here so that
``braid.execution`` and ``braid.adapters`` never import each other.
"""

from braid.core.errors import (
    AdapterError,
    BraidError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    InvalidEnvelopeError,
    RegistryFrozenError,
    UnknownAdapterError,
)
from braid.core.models import (
    Action,
    ActionResult,
    Actor,
    ActorType,
    BraidRequestEnvelope,
    BraidResponseEnvelope,
    ExecutionOptions,
    Filter,
    FilterOp,
    ResourceRef,
    ResultStatus,
    Sort,
    SortDirection,
    Verb,
)
from braid.core.protocols import Adapter, LoggingContext

__all__ = [
    # Models
    "Action",
    "ActionResult",
    "Actor",
    "ActorType",
    "BraidRequestEnvelope",
    "BraidResponseEnvelope",
    "ExecutionOptions",
    "Filter",
    "FilterOp",
    "ResourceRef",
    "ResultStatus",
    "Sort",
    "SortDirection",
    "Verb",
    # Protocols
    "Adapter",
    "LoggingContext",
    # Errors
    "AdapterError",
    "BraidError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "InvalidEnvelopeError",
    "RegistryFrozenError",
    "UnknownAdapterError",
]
