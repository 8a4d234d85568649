"""
Tests for the throttled sequential iterator.
"""

import pytest

from todo_ics.services.throttle import throttled


class RecordingSleep:
    """Sleep stand-in that records calls into a shared event log."""

    def __init__(self, log: list):
        self.log = log

    async def __call__(self, delay: float) -> None:
        self.log.append(("sleep", delay))


async def collect(items, delay, log):
    async for item in throttled(items, delay, sleep=RecordingSleep(log)):
        log.append(("item", item))


class TestThrottled:

    @pytest.mark.asyncio
    async def test_sleeps_only_between_items(self):
        log = []

        await collect(["a", "b", "c"], 0.1, log)

        assert log == [
            ("item", "a"),
            ("sleep", 0.1),
            ("item", "b"),
            ("sleep", 0.1),
            ("item", "c"),
        ]

    @pytest.mark.asyncio
    async def test_single_item_never_sleeps(self):
        log = []

        await collect(["only"], 0.1, log)

        assert log == [("item", "only")]

    @pytest.mark.asyncio
    async def test_empty_input(self):
        log = []

        await collect([], 0.1, log)

        assert log == []

    @pytest.mark.asyncio
    async def test_zero_delay_disables_sleep(self):
        log = []

        await collect([1, 2], 0, log)

        assert log == [("item", 1), ("item", 2)]
