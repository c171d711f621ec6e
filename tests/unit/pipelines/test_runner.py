"""Tests for the bounded-concurrency runner."""

import asyncio

import pytest

from cdragon_assets.pipelines.runner import run_bounded


class TestRunBounded:
    """Test concurrency ceiling, ordering and failure isolation."""

    @pytest.mark.asyncio
    async def test_never_exceeds_limit(self):
        in_flight = 0
        peak = 0

        async def worker(item):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.001 * (item % 3))
            in_flight -= 1
            return item * 2

        result = await run_bounded(list(range(25)), worker, limit=5)

        assert peak <= 5
        assert result.ok
        assert result.values == [i * 2 for i in range(25)]

    @pytest.mark.asyncio
    async def test_outcomes_keep_input_order(self):
        async def worker(item):
            # Later items finish first
            await asyncio.sleep(0.001 * (10 - item))
            return item

        result = await run_bounded(list(range(10)), worker, limit=10)

        assert [o.index for o in result.outcomes] == list(range(10))
        assert result.values == list(range(10))

    @pytest.mark.asyncio
    async def test_failures_do_not_cancel_siblings(self):
        completed = []

        async def worker(item):
            if item == 3:
                raise OSError("disk full")
            await asyncio.sleep(0)
            completed.append(item)
            return item

        result = await run_bounded(list(range(6)), worker, limit=2)

        assert not result.ok
        assert sorted(completed) == [0, 1, 2, 4, 5]
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.index == 3
        assert failure.item == 3
        assert isinstance(failure.error, OSError)

    @pytest.mark.asyncio
    async def test_empty_input(self):
        async def worker(item):
            return item

        result = await run_bounded([], worker)

        assert result.outcomes == []
        assert result.ok

    @pytest.mark.asyncio
    async def test_limit_must_be_positive(self):
        async def worker(item):
            return item

        with pytest.raises(ValueError):
            await run_bounded([1], worker, limit=0)
