"""
Shared pytest fixtures and configuration for braid tests.

This module provides:
- State cleanup fixtures for test isolation (settings cache, structlog config)
- Action / envelope builders
- Registries and executors wired with the built-in mock adapter

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    async def test_something(executor, make_envelope, make_action):
        response = await executor.execute(make_envelope([make_action("a-1")]))
"""

import sys
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
import structlog

# Ensure braid package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from braid.adapters import MockAdapter
from braid.core.logging import clear_context
from braid.core.models import Action, Actor, BraidRequestEnvelope
from braid.core.settings import get_settings
from braid.execution import AdapterRegistry, DispatchExecutor


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Forget cached settings and logging configuration between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    clear_context()
    structlog.reset_defaults()


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def actor() -> Actor:
    return Actor.model_validate({"id": "user-1", "type": "user", "roles": ["ops"]})


@pytest.fixture
def make_action(actor: Actor) -> Callable[..., Action]:
    """Factory: ``make_action("a-1", system="mock", payload={...})``."""

    def _make(
        action_id: str,
        *,
        system: str = "mock",
        kind: str = "contact",
        verb: str = "read",
        payload: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Action:
        raw: dict[str, Any] = {
            "id": action_id,
            "verb": verb,
            "actor": actor.to_dict(),
            "resource": {"system": system, "kind": kind},
        }
        if payload is not None:
            raw["payload"] = payload
        if options is not None:
            raw["options"] = options
        return Action.model_validate(raw)

    return _make


@pytest.fixture
def make_envelope(actor: Actor) -> Callable[..., BraidRequestEnvelope]:
    """Factory: ``make_envelope([action, ...], request_id="req-1")``."""

    def _make(
        actions: list[Action],
        *,
        request_id: str = "req-1",
        client: str | None = "pytest",
        channel: str | None = "unit",
    ) -> BraidRequestEnvelope:
        return BraidRequestEnvelope(
            request_id=request_id,
            actor=actor,
            actions=tuple(actions),
            created_at=datetime(2026, 1, 15, 12, 0, 0, tzinfo=UTC),
            client=client,
            channel=channel,
            metadata={},
        )

    return _make


@pytest.fixture
def envelope_body() -> dict[str, Any]:
    """Raw JSON body of a two-action envelope (mock + unregistered system)."""
    actor = {"id": "agent-7", "type": "agent"}
    return {
        "requestId": "req-http-1",
        "actor": actor,
        "client": "pytest",
        "channel": "http",
        "actions": [
            {
                "id": "a-1",
                "verb": "search",
                "actor": actor,
                "resource": {"system": "mock", "kind": "contact"},
                "filters": [{"field": "email", "op": "contains", "value": "@example.com"}],
                "payload": {"q": "smith"},
            },
            {
                "id": "a-2",
                "verb": "read",
                "actor": actor,
                "resource": {"system": "erp", "kind": "invoice"},
                "targetId": "inv-42",
            },
        ],
    }


# =============================================================================
# Engine
# =============================================================================


@pytest.fixture
def registry() -> AdapterRegistry:
    """Open (unfrozen) registry with the mock adapter bound."""
    reg = AdapterRegistry()
    reg.register(MockAdapter())
    return reg


@pytest.fixture
def executor(registry: AdapterRegistry) -> DispatchExecutor:
    return DispatchExecutor(registry)
