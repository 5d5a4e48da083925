"""Tests for the autoplay scheduler."""

import asyncio

import pytest

from src.core.autoplay import AutoplayOff, AutoplayOn, AutoplayScheduler
from tests.mocks.providers import ManualTimerFactory


class TestAutoplayScheduler:
    """Tests for AutoplayScheduler with manual timers."""

    def setup_method(self) -> None:
        self.ticks: list[int] = []
        self.timers = ManualTimerFactory()
        self.scheduler = AutoplayScheduler(
            on_tick=self.ticks.append, interval=4.0, timer_factory=self.timers
        )

    def test_starts_off(self) -> None:
        """Should have no timer before start."""
        assert isinstance(self.scheduler.mode, AutoplayOff)
        assert not self.scheduler.is_running
        assert self.timers.timers == []

    def test_start_arms_one_timer(self) -> None:
        """Should hold exactly one pending timer while on."""
        self.scheduler.start()
        assert isinstance(self.scheduler.mode, AutoplayOn)
        assert len(self.timers.pending) == 1
        assert self.timers.pending[0].delay == 4.0

    def test_tick_rearms(self) -> None:
        """Should keep repeating at the same interval."""
        self.scheduler.start()
        self.timers.fire()
        self.timers.fire()
        self.timers.fire()
        assert self.ticks == [1, 1, 1]
        assert len(self.timers.pending) == 1

    def test_restart_tears_down_previous_timer(self) -> None:
        """Should cancel the old timer before arming a new one."""
        self.scheduler.start()
        first = self.timers.pending[0]
        self.scheduler.start()
        assert first.cancelled
        assert len(self.timers.pending) == 1
        assert self.scheduler.generation == 2

    def test_stale_timer_fire_is_ignored(self) -> None:
        """A replaced timer firing anyway must not tick."""
        self.scheduler.start()
        first = self.timers.timers[0]
        self.scheduler.start()
        self.timers.fire_stale(first)
        assert self.ticks == []

    def test_stop_cancels(self) -> None:
        """Should cancel the pending timer and switch off."""
        self.scheduler.start()
        timer = self.timers.pending[0]
        self.scheduler.stop()
        assert timer.cancelled
        assert isinstance(self.scheduler.mode, AutoplayOff)

    def test_stop_twice_is_noop(self) -> None:
        """Stopping an already stopped scheduler should not raise."""
        self.scheduler.stop()
        self.scheduler.start()
        self.scheduler.stop()
        self.scheduler.stop()
        assert not self.scheduler.is_running

    def test_tick_handler_may_stop(self) -> None:
        """A handler that stops the scheduler leaves no timer behind."""
        scheduler = AutoplayScheduler(
            on_tick=lambda _gen: scheduler.stop(), timer_factory=self.timers
        )
        scheduler.start()
        self.timers.fire()
        assert not scheduler.is_running
        assert self.timers.pending == []

    def test_close_blocks_restart(self) -> None:
        """Should refuse to start once closed."""
        self.scheduler.start()
        self.scheduler.close()
        self.scheduler.start()
        assert not self.scheduler.is_running
        assert self.timers.pending == []

    def test_is_current(self) -> None:
        """Should recognise only the live generation."""
        assert not self.scheduler.is_current(0)
        self.scheduler.start()
        assert self.scheduler.is_current(1)
        self.scheduler.stop()
        assert not self.scheduler.is_current(1)


class TestLoopTimers:
    """Tests against the real asyncio loop."""

    @pytest.mark.asyncio
    async def test_fires_on_running_loop(self) -> None:
        """Should tick repeatedly using call_later."""
        ticks: list[int] = []
        scheduler = AutoplayScheduler(on_tick=ticks.append, interval=0.01)
        scheduler.start()
        await asyncio.sleep(0.1)
        scheduler.stop()
        assert len(ticks) >= 2

    @pytest.mark.asyncio
    async def test_no_ticks_after_stop(self) -> None:
        """Should not tick once stopped."""
        ticks: list[int] = []
        scheduler = AutoplayScheduler(on_tick=ticks.append, interval=0.01)
        scheduler.start()
        scheduler.stop()
        await asyncio.sleep(0.05)
        assert ticks == []
