"""Echo adapter for integration testing.

Returns every action it receives, unchanged, inside a ``success`` result.
"""

from __future__ import annotations

from braid.adapters.base import BaseAdapter
from braid.core.models import Action, ActionResult
from braid.core.protocols import LoggingContext


class MockAdapter(BaseAdapter):
    system = "mock"

    async def handle(self, action: Action, ctx: LoggingContext) -> ActionResult:
        ctx.debug(
            "Mock adapter handling action",
            {
                "actionId": action.id,
                "verb": action.verb.value,
                "resource": action.resource.to_dict(),
            },
        )
        return self.ok(
            action,
            {
                "echo": True,
                "action": action.to_dict(),
                "note": "Mock adapter - replace with a real business adapter.",
            },
        )
