import asyncio
import logging
from typing import Callable, Optional

from restora.const import PROGRESS_CEILING, PROGRESS_START, PROGRESS_STEP

logger = logging.getLogger(__name__)


class ProgressTicker:
    """
    Owns the repeating timer that fabricates progress for a pending request.

    The ticker reports `start` immediately, then adds `step` every `interval`
    seconds without ever passing `ceiling`. Used as an async context manager
    so the timer is cancelled on every exit path of the guarded block:

        async with ProgressTicker(on_change, interval=2):
            response = await call()
    """

    def __init__(self, on_change: Callable[[int], None], *, interval: float,
                 start: int = PROGRESS_START, step: int = PROGRESS_STEP,
                 ceiling: int = PROGRESS_CEILING):
        self.on_change = on_change
        self.interval = interval
        self.start_value = start
        self.step = step
        self.ceiling = ceiling
        self.value = start
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task is not None and self._task.cancelled()

    def start(self) -> "ProgressTicker":
        if self._task is not None:
            raise RuntimeError("ProgressTicker already started")
        self.value = self.start_value
        self.on_change(self.value)
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    async def stop(self) -> None:
        """Cancel the timer and wait until it has fully stopped."""
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.ticks += 1
            next_value = min(self.value + self.step, self.ceiling)
            if next_value > self.value:
                self.value = next_value
                self.on_change(next_value)

    async def __aenter__(self) -> "ProgressTicker":
        return self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
