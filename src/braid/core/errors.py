"""
Structured error types for the Braid dispatch engine.

Errors raised inside braid carry a category, an optional machine-readable
code, structured context (request, action, system) and an optional cause.
Per-action failures never escape the executor as exceptions; they are
described with :func:`describe_error` and folded into an ``ActionResult``.

Manifesto:
    - **Typed hierarchy:** Configuration, validation and adapter failures
      are distinct types
    - **Rich context:** Errors carry request/action/system metadata for logs
    - **Structure survives the catch point:** ``describe_error`` keeps the
      type, category, code and context of a handler failure

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        BraidError                            │
        │          (code, category, context, details, cause)           │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigError            InvalidEnvelopeError   AdapterError  │
        │  (CONFIG)               (VALIDATION)           (ADAPTER)     │
        │       │                                                      │
        │  RegistryFrozenError                                         │
        │  UnknownAdapterError                                         │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = AdapterError("CRM rejected the update", code="CRM_409")
    >>> error.with_context(system="crm", action_id="a-1").to_dict()["context"]
    {'action_id': 'a-1', 'system': 'crm'}

Tags:
    error-handling, exception-hierarchy, error-context, braid

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    CONFIG = "CONFIG"             # Registry / settings problems at boot
    VALIDATION = "VALIDATION"     # Malformed envelopes or results
    ADAPTER = "ADAPTER"           # Failures reported by an adapter
    EXECUTION = "EXECUTION"       # Unexpected exceptions while handling
    TIMEOUT = "TIMEOUT"           # Deadline exceeded
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        request_id: Envelope the failure belongs to
        action_id: Action being dispatched
        system: Target system identifier
        verb: Action verb
        metadata: Additional key-value pairs
    """

    request_id: str | None = None
    action_id: str | None = None
    system: str | None = None
    verb: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["request_id", "action_id", "system", "verb"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class BraidError(Exception):
    """
    Base exception for all Braid errors.

    Subclasses set ``default_category`` (and optionally ``default_code``)
    so callers only pass what differs from the defaults.

    Examples:
        >>> error = BraidError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> BraidError("bad", code="BAD").to_dict()["code"]
        'BAD'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_code: str | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.details = details or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> BraidError:
        """Add context fields, returning ``self`` for chaining.

        Known :class:`ErrorContext` fields are set directly; anything else
        lands in ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging and ``ActionResult.details``."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.code is not None:
            result["code"] = self.code
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.details:
            result["details"] = self.details
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS (raised at boot, never during dispatch)
# =============================================================================


class ConfigError(BraidError):
    """Invalid registry or settings configuration."""

    default_category = ErrorCategory.CONFIG
    default_code = "CONFIG_ERROR"


class RegistryFrozenError(ConfigError):
    """Registration attempted after the registry left its init phase."""

    def __init__(self, system: str):
        self.system = system
        super().__init__(
            f"Adapter registry is frozen; cannot register adapter for system '{system}'",
            code="REGISTRY_FROZEN",
        )


class UnknownAdapterError(ConfigError):
    """Settings name a built-in adapter that does not exist."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown adapter '{name}'. Available: {', '.join(available) or 'none'}",
            code="UNKNOWN_ADAPTER",
        )


# =============================================================================
# REQUEST / HANDLER ERRORS
# =============================================================================


class InvalidEnvelopeError(BraidError):
    """Request body is not a valid request envelope."""

    default_category = ErrorCategory.VALIDATION
    default_code = "INVALID_ENVELOPE"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.errors = errors or []

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.errors:
            result["errors"] = self.errors
        return result


class AdapterError(BraidError):
    """Structured failure raised by an adapter from inside ``handle``.

    Adapters raise this instead of a bare exception when they want their own
    code and detail map to survive the executor's catch point.
    """

    default_category = ErrorCategory.ADAPTER
    default_code = "ADAPTER_ERROR"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def error_message(error: BaseException) -> str:
    """Human message for an exception: its message, else its type name."""
    if isinstance(error, BraidError):
        return error.message or type(error).__name__
    return str(error) or type(error).__name__


def categorize_error(error: BaseException) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, BraidError):
        return error.category
    if isinstance(error, TimeoutError):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    if isinstance(error, Exception):
        return ErrorCategory.EXECUTION
    return ErrorCategory.UNKNOWN


def describe_error(error: BaseException) -> dict[str, Any]:
    """Structured description of any exception.

    ``BraidError`` instances serialize themselves; other exceptions are
    reduced to their type, message and category.
    """
    if isinstance(error, BraidError):
        return error.to_dict()
    return {
        "error_type": type(error).__name__,
        "message": error_message(error),
        "category": categorize_error(error).value,
    }


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "BraidError",
    "ConfigError",
    "RegistryFrozenError",
    "UnknownAdapterError",
    "InvalidEnvelopeError",
    "AdapterError",
    "error_message",
    "categorize_error",
    "describe_error",
]
