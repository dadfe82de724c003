"""Debounced task scheduling for the session controller."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class ProbeScheduler:
    """Runs an async action once after a quiet period.

    Each call to ``schedule`` cancels the previously scheduled run, so a
    burst of settings edits triggers a single connection probe or model
    refresh.
    """

    def __init__(
        self,
        action: Callable[[], Awaitable[Any]],
        delay: float = 0.1,
    ) -> None:
        self._action = action
        self._delay = delay
        self._task: asyncio.Task | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a scheduled run has not finished."""
        return self._task is not None and not self._task.done()

    def schedule(self) -> bool:
        """Schedule the action, replacing any earlier schedule.

        Returns:
            False when no event loop is running and nothing was scheduled
        """
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return False
        self._task = loop.create_task(self._run())
        return True

    def cancel(self) -> None:
        """Cancel the scheduled run if it has not finished."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the scheduled run to finish (no-op when idle)."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self) -> None:
        await asyncio.sleep(self._delay)
        await self._action()
