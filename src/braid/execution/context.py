"""Adapter logging context: the log sink handed to every ``handle()`` call.

WHY
───
Adapters should log through the same structured pipeline as the engine,
with ``request_id`` / ``action_id`` / ``system`` already attached, and
without ever being able to break dispatch by logging.

ARCHITECTURE
────────────
::

    AdapterContext(logger, request_id=..., action_id=...)
      ├── .debug(msg, meta)   ─ structlog debug
      ├── .info(msg, meta)    ─ structlog info
      ├── .warn(msg, meta)    ─ structlog warning
      ├── .error(msg, meta)   ─ structlog error
      └── .bind(**fields)     ─ new context with extra fields

Related modules:
    executor.py         : builds one bound context per action
    core/protocols.py   : LoggingContext protocol this satisfies
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from braid.core.logging import get_logger

# Keys structlog reserves for its own positional arguments.
_RESERVED_KEYS = frozenset({"event"})


def _fields(meta: Any) -> dict[str, Any]:
    """Normalize adapter-supplied metadata into structlog keyword fields."""
    if meta is None:
        return {}
    if not isinstance(meta, Mapping):
        return {"meta": meta}
    fields: dict[str, Any] = {}
    for key, value in meta.items():
        name = str(key)
        if name in _RESERVED_KEYS:
            name = f"meta_{name}"
        fields[name] = value
    return fields


class AdapterContext:
    """Structlog-backed implementation of :class:`~braid.core.protocols.LoggingContext`.

    Example:
        >>> ctx = AdapterContext(request_id="r-1").bind(action_id="a-1")
        >>> ctx.info("CRM lookup finished", {"rows": 3})
    """

    def __init__(self, logger: Any | None = None, **fields: Any):
        base = logger if logger is not None else get_logger("braid.adapter")
        self._fields = dict(fields)
        self._log = base.bind(**fields) if fields else base

    @property
    def fields(self) -> dict[str, Any]:
        """Fields bound into every line logged through this context."""
        return dict(self._fields)

    def bind(self, **fields: Any) -> AdapterContext:
        """Return a new context with additional bound fields."""
        child = AdapterContext.__new__(AdapterContext)
        child._fields = {**self._fields, **fields}
        child._log = self._log.bind(**fields)
        return child

    def debug(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self._log.debug(message, **_fields(meta))

    def info(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self._log.info(message, **_fields(meta))

    def warn(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self._log.warning(message, **_fields(meta))

    def error(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self._log.error(message, **_fields(meta))
