"""Tests for keyed idle timers."""

import asyncio

from proofline.engine.scheduler import IdleScheduler


class TestIdleScheduler:
    async def test_fires_after_delay(self):
        scheduler = IdleScheduler()
        fired = []
        scheduler.schedule("k", 0.01, lambda: fired.append(1))
        assert scheduler.pending("k")
        await asyncio.sleep(0.05)
        assert fired == [1]
        assert not scheduler.pending("k")

    async def test_rearm_cancels_previous(self):
        scheduler = IdleScheduler()
        fired = []
        for i in range(5):
            scheduler.schedule("k", 0.1, lambda i=i: fired.append(i))
            await asyncio.sleep(0.01)
        await asyncio.sleep(0.2)
        assert fired == [4]

    async def test_keys_are_independent(self):
        scheduler = IdleScheduler()
        fired = []
        scheduler.schedule("a", 0.01, lambda: fired.append("a"))
        scheduler.schedule("b", 0.01, lambda: fired.append("b"))
        await asyncio.sleep(0.05)
        assert sorted(fired) == ["a", "b"]

    async def test_coroutine_callback_awaited(self):
        scheduler = IdleScheduler()
        done = asyncio.Event()

        async def callback():
            done.set()

        scheduler.schedule("k", 0.01, callback)
        await asyncio.wait_for(done.wait(), timeout=1)

    async def test_cancel(self):
        scheduler = IdleScheduler()
        fired = []
        scheduler.schedule("k", 0.01, lambda: fired.append(1))
        assert scheduler.cancel("k")
        assert not scheduler.cancel("k")
        await asyncio.sleep(0.03)
        assert fired == []

    async def test_cancel_all_stops_running_callback(self):
        scheduler = IdleScheduler()
        started = asyncio.Event()
        finished = []

        async def long_callback():
            started.set()
            await asyncio.sleep(1)
            finished.append(1)

        scheduler.schedule("k", 0, long_callback)
        await asyncio.wait_for(started.wait(), timeout=1)
        scheduler.cancel_all()
        await asyncio.sleep(0.01)
        assert finished == []

    async def test_failing_callback_is_logged(self, caplog):
        scheduler = IdleScheduler()

        def boom():
            raise RuntimeError("boom")

        scheduler.schedule("k", 0, boom)
        await asyncio.sleep(0.01)
        assert "Idle callback 'k' failed" in caplog.text

    async def test_callback_can_rearm_its_key(self):
        scheduler = IdleScheduler()
        fired = []

        def callback():
            fired.append(1)
            if len(fired) < 2:
                scheduler.schedule("k", 0.01, callback)

        scheduler.schedule("k", 0.01, callback)
        await asyncio.sleep(0.08)
        assert fired == [1, 1]
