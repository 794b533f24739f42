"""
Base class for adapters shipped with braid.

Subclassing is optional: the registry accepts any object that satisfies
:class:`braid.core.protocols.Adapter`. The base class adds result builders
so adapters don't repeat the action id / resource echo.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from braid.core.models import Action, ActionResult
from braid.core.protocols import LoggingContext


class BaseAdapter(ABC):
    """Adapter with a class-level ``system`` identifier."""

    system: ClassVar[str] = ""

    @abstractmethod
    async def handle(self, action: Action, ctx: LoggingContext) -> ActionResult:
        """Produce exactly one result for ``action``."""

    def ok(self, action: Action, data: Any = None, *, partial: bool = False) -> ActionResult:
        return ActionResult.success(action, data, partial=partial)

    def fail(
        self,
        action: Action,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> ActionResult:
        return ActionResult.failure(action, code, message, details)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} system={self.system!r}>"
