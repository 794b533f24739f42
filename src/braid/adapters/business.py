"""Template adapter for a real business system.

Map ``(verb, resource.kind, payload)`` onto the business API, call it,
and wrap the response in an :class:`ActionResult`. Until that mapping
exists every action is answered with ``NOT_IMPLEMENTED``.
"""

from __future__ import annotations

from braid.adapters.base import BaseAdapter
from braid.core.models import Action, ActionResult
from braid.core.protocols import LoggingContext

NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


class BusinessAdapter(BaseAdapter):
    system = "business"

    async def handle(self, action: Action, ctx: LoggingContext) -> ActionResult:
        ctx.info(
            "Business adapter received action",
            {"verb": action.verb.value, "resource": action.resource.to_dict()},
        )
        return self.fail(
            action,
            NOT_IMPLEMENTED,
            "BusinessAdapter is a template. Implement business-specific logic here.",
        )
