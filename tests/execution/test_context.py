"""Tests for AdapterContext: the logging sink handed to adapters."""

from __future__ import annotations

from structlog.testing import capture_logs

from braid.core.protocols import LoggingContext
from braid.execution import AdapterContext


class TestAdapterContext:
    def test_satisfies_logging_protocol(self):
        assert isinstance(AdapterContext(), LoggingContext)

    def test_bind_returns_new_context(self):
        base = AdapterContext(request_id="r-1")
        child = base.bind(action_id="a-1")
        assert base.fields == {"request_id": "r-1"}
        assert child.fields == {"request_id": "r-1", "action_id": "a-1"}

    def test_fields_is_a_copy(self):
        ctx = AdapterContext(request_id="r-1")
        ctx.fields["request_id"] = "mutated"
        assert ctx.fields["request_id"] == "r-1"

    def test_levels_and_bound_fields(self):
        with capture_logs() as logs:
            ctx = AdapterContext(request_id="r-1").bind(action_id="a-1")
            ctx.debug("d")
            ctx.info("i", {"rows": 3})
            ctx.warn("w")
            ctx.error("e")

        assert [e["log_level"] for e in logs] == ["debug", "info", "warning", "error"]
        assert all(e["request_id"] == "r-1" and e["action_id"] == "a-1" for e in logs)
        assert logs[1]["event"] == "i"
        assert logs[1]["rows"] == 3

    def test_non_mapping_meta_is_wrapped(self):
        with capture_logs() as logs:
            AdapterContext().info("list meta", [1, 2])
        assert logs[0]["meta"] == [1, 2]

    def test_reserved_key_renamed(self):
        with capture_logs() as logs:
            AdapterContext().info("msg", {"event": "crm.sync"})
        assert logs[0]["event"] == "msg"
        assert logs[0]["meta_event"] == "crm.sync"
