"""
FastAPI dependency injection: settings and the process-wide executor.

Usage in routes::

    @router.post("/mcp/run")
    async def run(executor: Executor, settings: Settings):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from braid.core.settings import BraidSettings, get_settings
from braid.execution.executor import DispatchExecutor


def get_executor(request: Request) -> DispatchExecutor:
    """Executor built at app creation and stored on ``app.state``."""
    return request.app.state.executor


Settings = Annotated[BraidSettings, Depends(get_settings)]
Executor = Annotated[DispatchExecutor, Depends(get_executor)]
