"""Tests for structlog configuration and context helpers."""

from __future__ import annotations

import io
import json

import pytest
import structlog

from braid.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


class TestConfigureLogging:
    def test_json_output_with_service_and_logger_name(self):
        stream = io.StringIO()
        configure_logging(level="INFO", json_format=True, service="braid-test", stream=stream)

        get_logger("braid.test").info("envelope.executing", request_id="r-1")

        (entry,) = _lines(stream)
        assert entry["event"] == "envelope.executing"
        assert entry["request_id"] == "r-1"
        assert entry["service"] == "braid-test"
        assert entry["logger_name"] == "braid.test"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_named_logger_with_initial_values(self):
        stream = io.StringIO()
        configure_logging(json_format=True, stream=stream)

        get_logger("braid.execution.registry", system="crm").info("adapter.registered")

        (entry,) = _lines(stream)
        assert entry["logger_name"] == "braid.execution.registry"
        assert entry["system"] == "crm"

    def test_level_filters(self):
        stream = io.StringIO()
        configure_logging(level="WARNING", json_format=True, stream=stream)

        log = get_logger("braid.test")
        log.info("dropped")
        log.warning("kept")

        assert [e["event"] for e in _lines(stream)] == ["kept"]

    def test_without_timestamp(self):
        stream = io.StringIO()
        configure_logging(json_format=True, add_timestamp=False, stream=stream)
        get_logger().info("x")
        assert "timestamp" not in _lines(stream)[0]


class TestContext:
    @pytest.fixture(autouse=True)
    def _json(self):
        self.stream = io.StringIO()
        configure_logging(json_format=True, stream=self.stream)
        yield
        clear_context()

    def test_bind_and_unbind(self):
        log = get_logger("braid.test")
        bind_context(request_id="r-1")
        log.info("one")
        unbind_context("request_id")
        log.info("two")

        first, second = _lines(self.stream)
        assert first["request_id"] == "r-1"
        assert "request_id" not in second

    def test_log_context_scopes_fields(self):
        log = get_logger("braid.test")
        with LogContext(action_id="a-1"):
            log.info("inside")
        log.info("outside")

        inside, outside = _lines(self.stream)
        assert inside["action_id"] == "a-1"
        assert "action_id" not in outside

    @pytest.mark.asyncio
    async def test_async_log_context(self):
        log = get_logger("braid.test")
        async with LogContext(request_id="r-2"):
            log.info("inside")
        assert _lines(self.stream)[0]["request_id"] == "r-2"
        assert structlog.contextvars.get_contextvars() == {}
