"""
Keep-Alive Engine - the activity loop.

SRP: This class has one responsibility - invoking the activity strategy once
per tick until cancelled. It doesn't know about signals, the console or
helper programs (Dependency Inversion Principle).
"""

import math
import time
from typing import Callable, Optional

from cancellation import CancellationToken
from models import ActivityOutcome, EngineState, RunConfiguration, StopReason


# Upper bound on a single blocking wait; some platforms only deliver Ctrl+C
# to the main thread between waits.
WAIT_SLICE_SECONDS = 1.0


class KeepAliveEngine:
    """
    Fixed-rate loop around a simulate-activity callable.

    Ticks never overlap: the next wait only begins once the current
    invocation has returned. Ticks missed while an invocation overran are
    dropped, not replayed.
    """

    def __init__(
        self,
        configuration: RunConfiguration,
        simulate: Callable[[], ActivityOutcome],
        token: CancellationToken,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the engine.

        DIP: Depends on a callable and a token, not on a platform or on how
        cancellation is produced.
        """
        self._config = configuration
        self._simulate = simulate
        self._token = token
        self._clock = clock
        self._state = EngineState.READY
        self._ticks_executed = 0
        self._status_callback: Optional[Callable[[str], None]] = None
        self._outcome_callback: Optional[Callable[[ActivityOutcome], None]] = None

    def register_status_callback(self, callback: Callable[[str], None]) -> None:
        self._status_callback = callback

    def register_outcome_callback(self, callback: Callable[[ActivityOutcome], None]) -> None:
        self._outcome_callback = callback

    def run(self) -> Optional[StopReason]:
        """
        Run the loop on the calling thread until the token is cancelled.

        Returns:
            The reason recorded by whichever source cancelled the token
        """
        if self._state != EngineState.READY:
            raise RuntimeError(f"Engine cannot run from state {self._state.value}")

        interval = self._config.interval_seconds
        self._state = EngineState.RUNNING
        self._notify_status(f"Keep-alive started (every {interval:g}s)")

        next_tick = self._clock() + interval
        while True:
            remaining = max(0.0, next_tick - self._clock())
            if self._token.wait(min(remaining, WAIT_SLICE_SECONDS)):
                break
            if self._clock() < next_tick:
                continue
            self._run_tick()
            next_tick = self._schedule_after(next_tick, interval)

        self._state = EngineState.STOPPED
        self._notify_status(f"Keep-alive stopped. Total ticks: {self._ticks_executed}")
        return self._token.reason

    def get_state(self) -> EngineState:
        return self._state

    def get_ticks_executed(self) -> int:
        return self._ticks_executed

    def is_running(self) -> bool:
        return self._state == EngineState.RUNNING

    def _run_tick(self) -> None:
        try:
            outcome = self._simulate()
        except Exception as e:
            outcome = ActivityOutcome.failed(f"Unexpected error: {e}")

        self._ticks_executed += 1
        if self._outcome_callback:
            self._outcome_callback(outcome)

    def _schedule_after(self, previous_tick: float, interval: float) -> float:
        """Next deadline on the fixed grid that is still in the future."""
        next_tick = previous_tick + interval
        now = self._clock()
        if next_tick <= now:
            missed = math.floor((now - next_tick) / interval) + 1
            next_tick += missed * interval
        return next_tick

    def _notify_status(self, message: str) -> None:
        if self._status_callback:
            self._status_callback(message)
