"""Tests for deadline enforcement helpers."""

from __future__ import annotations

import asyncio

import pytest

from braid.execution.timeout import (
    DeadlineContext,
    TimeoutExpired,
    ms_to_seconds,
    with_deadline_async,
)


class TestMsToSeconds:
    def test_none_means_no_deadline(self):
        assert ms_to_seconds(None) is None

    def test_zero_means_no_deadline(self):
        assert ms_to_seconds(0) is None

    def test_negative_means_no_deadline(self):
        assert ms_to_seconds(-5) is None

    def test_conversion(self):
        assert ms_to_seconds(1500) == 1.5


class TestTimeoutExpired:
    def test_is_builtin_timeout_error(self):
        assert issubclass(TimeoutExpired, TimeoutError)

    def test_message_with_elapsed(self):
        err = TimeoutExpired(timeout=0.5, elapsed=0.51, operation="crm.read contact")
        assert str(err) == "Operation 'crm.read contact' timed out after 0.5s (ran for 0.51s)"
        assert err.timeout == 0.5
        assert err.operation == "crm.read contact"

    def test_message_without_elapsed(self):
        assert str(TimeoutExpired(timeout=2)) == "Operation 'operation' timed out after 2s"


class TestDeadlineContext:
    def test_elapsed_counts_from_start(self):
        ctx = DeadlineContext(timeout_seconds=1.0, operation="crm.read", start_time=0.0)
        assert ctx.elapsed > 0
        assert ctx.operation == "crm.read"


class TestWithDeadlineAsync:
    @pytest.mark.asyncio
    async def test_fast_block_completes(self):
        async with with_deadline_async(1.0, operation="fast") as ctx:
            await asyncio.sleep(0)
        assert ctx.operation == "fast"
        assert ctx.timeout_seconds == 1.0

    @pytest.mark.asyncio
    async def test_slow_block_raises_timeout_expired(self):
        with pytest.raises(TimeoutExpired) as exc:
            async with with_deadline_async(0.01, operation="slow"):
                await asyncio.sleep(1.0)
        assert exc.value.operation == "slow"
        assert exc.value.elapsed is not None

    @pytest.mark.asyncio
    async def test_inner_timeout_error_propagates_unchanged(self):
        inner = TimeoutError("upstream")
        with pytest.raises(TimeoutError) as exc:
            async with with_deadline_async(5.0):
                raise inner
        assert exc.value is inner
        assert not isinstance(exc.value, TimeoutExpired)

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        with pytest.raises(KeyError):
            async with with_deadline_async(5.0):
                raise KeyError("x")

    @pytest.mark.asyncio
    async def test_negative_seconds_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            async with with_deadline_async(-1.0):
                pass
