"""Tests for correlation ID handling."""

import asyncio

import pytest

from core.correlation import (
    generate_correlation_id,
    get_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)


def test_generated_id_is_short_hex() -> None:
    correlation_id = generate_correlation_id()

    assert len(correlation_id) == 8
    int(correlation_id, 16)


def test_generated_ids_differ() -> None:
    assert generate_correlation_id() != generate_correlation_id()


def test_set_and_get() -> None:
    set_correlation_id("abc123de")

    assert get_correlation_id() == "abc123de"


@pytest.mark.asyncio
async def test_context_is_isolated_per_task() -> None:
    async def worker(correlation_id: str) -> str:
        set_correlation_id(correlation_id)
        await asyncio.sleep(0)
        return get_correlation_id()

    results = await asyncio.gather(worker("first"), worker("second"))

    assert results == ["first", "second"]


class TestResolveCorrelationId:
    def test_reuses_plain_inbound_id(self) -> None:
        assert resolve_correlation_id("frontend-123") == "frontend-123"

    @pytest.mark.parametrize(
        "inbound",
        [None, "", "has spaces", "line\nbreak", "{braces}", "x" * 65],
    )
    def test_generates_for_missing_or_unsafe(self, inbound) -> None:
        resolved = resolve_correlation_id(inbound)

        assert resolved != inbound
        assert len(resolved) == 8
