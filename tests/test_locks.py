"""Tests for docgen.reactive.locks."""

from __future__ import annotations

import asyncio

import pytest

from docgen.reactive.locks import KeyedLocks


class TestKeyedLocks:
    """KeyedLocks: per-key serialization."""

    @pytest.mark.asyncio
    async def test_same_key_serialized_in_arrival_order(self) -> None:
        locks = KeyedLocks()
        order: list[str] = []

        async def work(name: str) -> None:
            async with locks.hold("doc"):
                order.append(f"{name}-start")
                await asyncio.sleep(0.01)
                order.append(f"{name}-end")

        await asyncio.gather(work("a"), work("b"), work("c"))

        assert order == ["a-start", "a-end", "b-start", "b-end", "c-start", "c-end"]

    @pytest.mark.asyncio
    async def test_different_keys_run_concurrently(self) -> None:
        locks = KeyedLocks()
        inside = asyncio.Event()

        async def first() -> None:
            async with locks.hold("a"):
                await asyncio.wait_for(inside.wait(), timeout=1.0)

        async def second() -> None:
            async with locks.hold("b"):
                inside.set()

        await asyncio.gather(first(), second())

    @pytest.mark.asyncio
    async def test_lock_dropped_after_use(self) -> None:
        locks = KeyedLocks()
        async with locks.hold(("en", "/a")):
            assert ("en", "/a") in locks
            assert len(locks) == 1
        assert ("en", "/a") not in locks
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self) -> None:
        locks = KeyedLocks()
        with pytest.raises(RuntimeError):
            async with locks.hold("k"):
                raise RuntimeError("boom")
        assert len(locks) == 0
        async with locks.hold("k"):
            pass
