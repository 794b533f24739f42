"""Tests for envelope parsing and construction."""

from __future__ import annotations

import pytest

from braid.core.envelope import INVALID_ENVELOPE_MESSAGE, build_envelope, parse_envelope
from braid.core.errors import InvalidEnvelopeError


class TestParseEnvelope:
    def test_valid_body(self, envelope_body):
        envelope = parse_envelope(envelope_body)
        assert envelope.request_id == "req-http-1"
        assert [a.id for a in envelope.actions] == ["a-1", "a-2"]
        assert envelope.actions[1].target_id == "inv-42"
        assert envelope.channel == "http"

    def test_defaults_created_at_and_metadata(self, envelope_body):
        envelope = parse_envelope(envelope_body)
        assert envelope.created_at.tzinfo is not None
        assert envelope.metadata == {}

    def test_explicit_created_at_kept(self, envelope_body):
        envelope_body["createdAt"] = "2026-01-15T12:00:00Z"
        assert parse_envelope(envelope_body).created_at.year == 2026

    def test_empty_actions_allowed(self, envelope_body):
        envelope_body["actions"] = []
        assert parse_envelope(envelope_body).actions == ()

    @pytest.mark.parametrize("missing", ["requestId", "actor", "actions"])
    def test_missing_required_field(self, envelope_body, missing):
        del envelope_body[missing]
        with pytest.raises(InvalidEnvelopeError) as exc:
            parse_envelope(envelope_body)
        assert exc.value.message == INVALID_ENVELOPE_MESSAGE
        assert exc.value.errors == []

    def test_actions_must_be_a_list(self, envelope_body):
        envelope_body["actions"] = {"id": "a-1"}
        with pytest.raises(InvalidEnvelopeError):
            parse_envelope(envelope_body)

    def test_not_an_object(self):
        with pytest.raises(InvalidEnvelopeError):
            parse_envelope(["not", "an", "envelope"])

    def test_field_errors_reported(self, envelope_body):
        envelope_body["actions"][0]["verb"] = "purge"
        with pytest.raises(InvalidEnvelopeError) as exc:
            parse_envelope(envelope_body)
        locs = [e["loc"] for e in exc.value.errors]
        assert "actions.0.verb" in locs
        assert exc.value.code == "INVALID_ENVELOPE"


class TestBuildEnvelope:
    def test_generates_request_id(self, actor, make_action):
        envelope = build_envelope(actor, [make_action("a-1")])
        assert envelope.request_id
        assert envelope.metadata == {}
        assert len(envelope.actions) == 1

    def test_explicit_fields(self, actor, make_action):
        envelope = build_envelope(actor, [], request_id="r-9", client="cli", channel="batch")
        assert envelope.request_id == "r-9"
        assert envelope.client == "cli"
        assert envelope.actions == ()
