"""Autoplay scheduler for the carousel - platform agnostic.

The scheduler's on/off flag and its live timer handle are one value: either
``AutoplayOff`` or ``AutoplayOn`` carrying the handle. There is no way to
hold a flag that disagrees with the timer.
"""

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from src.core.logging import get_logger

logger = get_logger(__name__)

AUTOPLAY_INTERVAL_SECONDS = 4.0


class TimerHandle(Protocol):
    """Anything that can cancel a pending callback (e.g. asyncio.TimerHandle)."""

    def cancel(self) -> None:
        """Cancel the pending callback. Must be safe to call more than once."""
        ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def loop_timer_factory(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Arm a one-shot timer on the running asyncio loop.

    Raises:
        RuntimeError: If called outside a running event loop.
    """
    return asyncio.get_running_loop().call_later(delay, callback)


@dataclass(frozen=True)
class AutoplayOff:
    """Autoplay is off and no timer exists."""


@dataclass(frozen=True)
class AutoplayOn:
    """Autoplay is on and ``timer`` is the pending tick."""

    timer: TimerHandle
    generation: int


AutoplayMode = AutoplayOff | AutoplayOn


class AutoplayScheduler:
    """Single repeating timer that requests "advance to next".

    Every (re)start tears the previous timer down first and bumps a
    generation counter. Ticks carry the generation they were armed with so a
    tick from a replaced timer can be recognised and dropped.
    """

    def __init__(
        self,
        on_tick: Callable[[int], None],
        interval: float = AUTOPLAY_INTERVAL_SECONDS,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            on_tick: Called with the tick's generation each time the timer fires.
            interval: Seconds between ticks.
            timer_factory: Arms a one-shot timer. Defaults to the running
                asyncio loop's ``call_later``.
        """
        self._on_tick = on_tick
        self._interval = interval
        self._timer_factory = timer_factory or loop_timer_factory
        self._mode: AutoplayMode = AutoplayOff()
        self._generation = 0
        self._closed = False

    @property
    def mode(self) -> AutoplayMode:
        return self._mode

    @property
    def is_running(self) -> bool:
        return isinstance(self._mode, AutoplayOn)

    @property
    def generation(self) -> int:
        """Generation of the live timer (or of the last one, when stopped)."""
        return self._generation

    @property
    def interval(self) -> float:
        return self._interval

    def start(self) -> None:
        """Start from zero elapsed time, replacing any running timer."""
        if self._closed:
            logger.debug("autoplay_start_after_close_ignored")
            return
        self.stop()
        self._generation += 1
        self._arm(self._generation)
        logger.debug(
            "autoplay_started",
            interval_seconds=self._interval,
            generation=self._generation,
        )

    def stop(self) -> None:
        """Cancel the timer. Stopping a stopped scheduler is a no-op."""
        mode = self._mode
        if isinstance(mode, AutoplayOn):
            self._mode = AutoplayOff()
            mode.timer.cancel()
            logger.debug("autoplay_stopped", generation=mode.generation)

    def close(self) -> None:
        """Stop for good; later ``start`` calls are ignored."""
        self.stop()
        self._closed = True

    def is_current(self, generation: int) -> bool:
        """Whether a tick of ``generation`` belongs to the live timer."""
        return self.is_running and generation == self._generation

    def _arm(self, generation: int) -> None:
        timer = self._timer_factory(
            self._interval, functools.partial(self._fire, generation)
        )
        self._mode = AutoplayOn(timer=timer, generation=generation)

    def _fire(self, generation: int) -> None:
        if self._closed or not self.is_current(generation):
            return
        # Re-arm first: the handler may stop the scheduler
        self._arm(generation)
        self._on_tick(generation)
