"""
Boot sequence: settings → registry → executor.

Adapters are registered exactly once here, in the order listed in
``BraidSettings.adapters``, and the registry is frozen before anything
can dispatch through it.
"""

from __future__ import annotations

from collections.abc import Callable

from braid.adapters import BusinessAdapter, MockAdapter
from braid.core.errors import UnknownAdapterError
from braid.core.logging import get_logger
from braid.core.protocols import Adapter
from braid.core.settings import BraidSettings, get_settings
from braid.execution.executor import DispatchExecutor
from braid.execution.registry import AdapterRegistry

logger = get_logger(__name__)

BUILTIN_ADAPTERS: dict[str, Callable[[], Adapter]] = {
    "mock": MockAdapter,
    "business": BusinessAdapter,
}


def build_registry(settings: BraidSettings | None = None) -> AdapterRegistry:
    """Register the configured built-in adapters and freeze the registry.

    Raises:
        UnknownAdapterError: If settings name an adapter that does not exist.
        ConfigError: If the same adapter is listed twice.
    """
    settings = settings or get_settings()
    registry = AdapterRegistry()
    for name in settings.adapters:
        factory = BUILTIN_ADAPTERS.get(name)
        if factory is None:
            raise UnknownAdapterError(name, sorted(BUILTIN_ADAPTERS))
        registry.register(factory())
    registry.freeze()
    return registry


def build_executor(
    settings: BraidSettings | None = None,
    registry: AdapterRegistry | None = None,
) -> DispatchExecutor:
    """Executor over ``registry`` (built from settings when omitted)."""
    settings = settings or get_settings()
    if registry is None:
        registry = build_registry(settings)
    logger.info(
        "executor.ready",
        systems=registry.systems(),
        enforce_timeouts=settings.enforce_timeouts,
    )
    return DispatchExecutor(registry, enforce_timeouts=settings.enforce_timeouts)
