"""Match clock for the U14 Live match tracker."""

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from ..models import MatchState
from ..utils import HALF_DURATION_SECONDS, clamp

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class ClockStatus(Enum):
    """Running state of the match clock."""
    PAUSED = "paused"
    RUNNING = "running"


class ClockDriver(Protocol):
    """Source of once-per-second callbacks; owns whatever timer it needs."""

    @property
    def is_active(self) -> bool:
        """Whether ticks are currently being delivered."""
        ...

    def start(self, callback: TickCallback) -> None:
        """Begin calling ``callback`` once per second."""
        ...

    def stop(self) -> None:
        """Stop delivering ticks; no callback may fire afterwards."""
        ...


class ManualClockDriver:
    """
    Clock driver whose ticks are delivered by calling :meth:`fire`.

    The web UI posts one tick per second while the clock runs; tests call
    ``fire`` directly. Ticks fired while the driver is stopped are ignored.
    """

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def fire(self, count: int = 1) -> int:
        """
        Deliver up to ``count`` ticks.

        Returns:
            Number of ticks actually delivered
        """
        delivered = 0
        for _ in range(max(0, count)):
            if self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered


class MatchClock:
    """
    Half-scoped match clock bounded to the half duration.

    The clock reads and writes ``current_time`` and ``is_running`` on the
    match state it is bound to. Reaching the end of the half pauses the
    clock; moving to the next half is left to the caller.
    """

    def __init__(
        self,
        state: MatchState,
        driver: Optional[ClockDriver] = None,
        on_tick: Optional[TickCallback] = None,
    ):
        self.state = state
        self.driver: ClockDriver = driver or ManualClockDriver()
        self._on_tick = on_tick

    @property
    def status(self) -> ClockStatus:
        return ClockStatus.RUNNING if self.state.is_running else ClockStatus.PAUSED

    def start(self) -> bool:
        """
        Start the clock.

        Returns:
            True if the clock went from paused to running, False if it was
            already running
        """
        if self.state.is_running:
            logger.debug("Clock already running for match %s", self.state.match_id)
            return False
        self.state.is_running = True
        self.driver.start(self.tick)
        return True

    def pause(self) -> bool:
        """
        Pause the clock and stop the driver.

        Returns:
            True if the clock was running, False if it was already paused
        """
        was_running = self.state.is_running
        self.state.is_running = False
        self.driver.stop()
        return was_running

    def tick(self) -> None:
        """Advance one second; pauses automatically at the end of the half."""
        if not self.state.is_running:
            return

        self.state.current_time = clamp(self.state.current_time + 1, 0, HALF_DURATION_SECONDS)
        if self.state.current_time >= HALF_DURATION_SECONDS:
            logger.info(
                "Half %s time limit reached for match %s, pausing clock",
                self.state.half, self.state.match_id,
            )
            self.pause()

        if self._on_tick is not None:
            self._on_tick()

    def bind(self, state: MatchState) -> None:
        """Attach the clock to a replacement state and align the driver with it."""
        self.state = state
        self.sync()

    def sync(self) -> None:
        """Start or stop the driver so it matches ``state.is_running``."""
        if self.state.is_running and not self.driver.is_active:
            self.driver.start(self.tick)
        elif not self.state.is_running and self.driver.is_active:
            self.driver.stop()
