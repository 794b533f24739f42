"""
FastAPI application factory.

``create_app()`` is the single composition root for the HTTP service: it
configures logging, builds (or accepts) the executor, wires routes and the
catch-all error handler.

Tags:
    braid, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from braid import __version__
from braid.api.errors import unhandled_exception_handler
from braid.api.routes import router
from braid.bootstrap import build_executor
from braid.core.logging import configure_logging, get_logger
from braid.core.settings import BraidSettings, get_settings
from braid.execution.executor import DispatchExecutor


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup / shutdown hooks."""
    log = get_logger("braid.api")
    settings: BraidSettings = app.state.settings
    log.info(
        "braid API starting",
        version=app.version,
        host=settings.host,
        port=settings.port,
        systems=app.state.executor.registry.systems(),
    )
    yield
    log.info("braid API shutting down")


def create_app(
    *,
    settings: BraidSettings | None = None,
    executor: DispatchExecutor | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : BraidSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    executor : DispatchExecutor | None
        Override the executor.  When ``None`` one is built from settings,
        registering the configured built-in adapters.
    """
    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service_name,
    )

    app = FastAPI(
        title="braid-mcp-server",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.executor = executor or build_executor(settings)

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router)

    return app
