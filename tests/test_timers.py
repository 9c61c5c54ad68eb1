"""Tests for repeating timers."""

import asyncio
import logging

import pytest

from wellness_tracker.services.timers import RepeatingTimer


def test_timer_fires_until_stopped() -> None:
    calls: list[int] = []
    timer = RepeatingTimer(interval=0.01, callback=lambda: calls.append(1))

    async def scenario() -> int:
        timer.start()
        await asyncio.sleep(0.06)
        timer.stop()
        await timer.wait_closed()
        stopped_at = len(calls)
        await asyncio.sleep(0.03)
        assert len(calls) == stopped_at
        return stopped_at

    assert asyncio.run(scenario()) >= 2
    assert not timer.is_running


def test_start_and_stop_are_idempotent() -> None:
    calls: list[int] = []
    timer = RepeatingTimer(interval=0.02, callback=lambda: calls.append(1))

    async def scenario() -> None:
        timer.stop()
        timer.start()
        first_task = timer._task
        timer.start()
        assert timer._task is first_task
        await asyncio.sleep(0.03)
        timer.stop()
        timer.stop()
        await timer.wait_closed()

    asyncio.run(scenario())
    assert len(calls) >= 1


def test_run_immediately_fires_once_at_start() -> None:
    calls: list[int] = []
    timer = RepeatingTimer(
        interval=10, callback=lambda: calls.append(1), run_immediately=True
    )

    async def scenario() -> None:
        timer.start()
        await asyncio.sleep(0)
        timer.stop()
        await timer.wait_closed()

    asyncio.run(scenario())
    assert calls == [1]


def test_failing_callback_is_logged_and_timer_continues(
    caplog: pytest.LogCaptureFixture,
) -> None:
    calls: list[int] = []

    def callback() -> None:
        calls.append(1)
        raise RuntimeError("boom")

    timer = RepeatingTimer(interval=0.01, callback=callback, name="failing")
    logger = logging.getLogger("wellness_tracker")

    async def scenario() -> None:
        timer.start()
        await asyncio.sleep(0.05)
        timer.stop()
        await timer.wait_closed()

    logger.addHandler(caplog.handler)
    try:
        asyncio.run(scenario())
    finally:
        logger.removeHandler(caplog.handler)

    assert len(calls) >= 2
    assert "Timer callback failed: name=failing" in caplog.text


def test_stopped_runs_are_released_once_cancelled() -> None:
    timer = RepeatingTimer(interval=10, callback=lambda: None)

    async def scenario() -> None:
        for _ in range(4):
            timer.start()
            await asyncio.sleep(0)
            timer.stop()
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert timer._stopping == set()

    asyncio.run(scenario())
