"""Adapter Registry: injectable system → adapter lookup.

Manifesto:
The DispatchExecutor needs to resolve ``resource.system == "crm"`` to
exactly one adapter.  The registry decouples registration (once, at
boot) from resolution (every action), and is an owned instance passed to
the executor rather than ambient global state.

ARCHITECTURE
────────────
::

    AdapterRegistry
      ├── .register(adapter)   ─ init phase only; unique, non-empty system
      ├── .freeze()            ─ end init phase; read-only afterwards
      ├── .get(system)         ─ adapter or None (never raises)
      ├── .has(system)         ─ existence check
      └── .systems()           ─ sorted registered identifiers

Matching is by exact equality on the system identifier: no priority,
no fallback chain, no wildcards.

BEST PRACTICES
──────────────
- Build the registry in ``braid.bootstrap`` and freeze it before serving.
- Pass a fresh ``AdapterRegistry`` in tests.

Related modules:
    executor.py        : DispatchExecutor uses the registry
    core/protocols.py  : Adapter contract checked on register

Tags:
    braid, execution, registry, adapter-registry, lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

from braid.core.errors import ConfigError, RegistryFrozenError
from braid.core.logging import get_logger
from braid.core.protocols import Adapter

logger = get_logger(__name__)


class AdapterRegistry:
    """Injectable adapter registry.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register(MockAdapter())
        >>> registry.freeze()
        >>> registry.get("mock")
        <MockAdapter system='mock'>
        >>> registry.get("crm") is None
        True
    """

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}
        self._frozen = False

    def register(self, adapter: Adapter) -> None:
        """Bind an adapter to its system identifier.

        Raises:
            ConfigError: If ``adapter.system`` is empty or missing, the object
                has no callable ``handle``, or the system is already bound.
            RegistryFrozenError: If called after :meth:`freeze`.
        """
        system = getattr(adapter, "system", None)
        if not isinstance(system, str) or not system:
            raise ConfigError("Adapter.system must be defined", code="INVALID_ADAPTER")
        if self._frozen:
            raise RegistryFrozenError(system)
        if not isinstance(adapter, Adapter) or not callable(adapter.handle):
            raise ConfigError(
                f"Adapter for system '{system}' does not implement handle(action, ctx)",
                code="INVALID_ADAPTER",
            )
        if system in self._adapters:
            raise ConfigError(
                f"Adapter for system '{system}' already registered",
                code="DUPLICATE_ADAPTER",
            )
        self._adapters[system] = adapter
        logger.debug("adapter.registered", system=system, adapter=type(adapter).__name__)

    def get(self, system: str) -> Adapter | None:
        """Adapter bound to ``system``, or ``None`` when nothing is bound."""
        return self._adapters.get(system)

    def has(self, system: str) -> bool:
        """Check if an adapter is bound to ``system``."""
        return system in self._adapters

    def systems(self) -> list[str]:
        """All registered system identifiers, sorted."""
        return sorted(self._adapters)

    def freeze(self) -> None:
        """End the init phase. Further :meth:`register` calls fail."""
        if not self._frozen:
            self._frozen = True
            logger.info("adapter_registry.frozen", systems=self.systems())

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, system: object) -> bool:
        return system in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"AdapterRegistry({self.systems()!r}, {state})"
