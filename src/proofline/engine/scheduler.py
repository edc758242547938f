"""Keyed debounce timers on the running event loop."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class IdleScheduler:
    """Fire a callback once a key has been quiet for ``delay`` seconds.

    Each ``schedule`` call for a key cancels that key's pending timer and
    starts a new one, so a key never has more than one timer in flight.
    Callbacks may be plain functions or coroutine functions.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}
        self._firing: set[asyncio.Task] = set()  # callbacks already past their delay

    def schedule(self, key: str, delay: float, callback: Callable[[], Any]) -> None:
        self.cancel(key)
        task = asyncio.get_running_loop().create_task(self._run(key, delay, callback))
        self._tasks[key] = task

    def cancel(self, key: str) -> bool:
        task = self._tasks.pop(key, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    def cancel_all(self) -> None:
        """Cancel pending timers and any callback that is still running."""
        for key in list(self._tasks):
            self.cancel(key)
        for task in list(self._firing):
            task.cancel()

    def pending(self, key: str) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    async def _run(self, key: str, delay: float, callback: Callable[[], Any]) -> None:
        await asyncio.sleep(delay)
        # Fired: drop the handle first so the callback can re-arm this key
        current = asyncio.current_task()
        if self._tasks.get(key) is current:
            del self._tasks[key]
        self._firing.add(current)
        try:
            result = callback()
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Idle callback %r failed", key)
        finally:
            self._firing.discard(current)
