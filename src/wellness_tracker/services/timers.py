"""Cancellable repeating timers for the asyncio host."""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)


@dataclass
class RepeatingTimer:
    """Runs ``callback`` every ``interval`` seconds until stopped."""

    interval: float
    callback: Callable[[], None]
    name: str = "timer"
    run_immediately: bool = False
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)
    _stopping: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the timer on the running loop; no-op when running."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=self.name
        )

    def stop(self) -> None:
        """Cancel the timer; no further callbacks fire. No-op when stopped."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        self._stopping.add(task)
        task.add_done_callback(self._stopping.discard)

    async def wait_closed(self) -> None:
        """Wait until every cancelled run has finished unwinding."""
        for task in list(self._stopping):
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self) -> None:
        if self.run_immediately:
            self._fire()
        while True:
            await asyncio.sleep(self.interval)
            self._fire()

    def _fire(self) -> None:
        try:
            self.callback()
        except Exception:
            _logger.exception("Timer callback failed: name=%s", self.name)
