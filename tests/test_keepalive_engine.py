import threading
import time

import pytest

from cancellation import CancellationToken
from keepalive_engine import KeepAliveEngine
from models import ActivityOutcome, EngineState, Platform, RunConfiguration, StopReason


INTERVAL = 0.05


def _config(interval=INTERVAL):
    return RunConfiguration(platform=Platform.MACOS, platform_id="darwin",
                            interval_seconds=interval)


class CountingStrategy:
    """Records call times and cancels the token after a number of calls."""

    def __init__(self, token, stop_after, reason=StopReason.SIGNAL, outcome=None, error=None):
        self.token = token
        self.stop_after = stop_after
        self.reason = reason
        self.outcome = outcome or ActivityOutcome.succeeded("cliclick")
        self.error = error
        self.calls = []
        self.active = 0
        self.max_active = 0

    def __call__(self):
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        self.calls.append(time.monotonic())
        try:
            if len(self.calls) >= self.stop_after:
                self.token.cancel(self.reason)
            if self.error is not None:
                raise self.error
            return self.outcome
        finally:
            self.active -= 1


def test_one_invocation_per_interval():
    token = CancellationToken()
    strategy = CountingStrategy(token, stop_after=3)
    engine = KeepAliveEngine(_config(), strategy, token)

    started = time.monotonic()
    reason = engine.run()

    assert reason is StopReason.SIGNAL
    assert engine.get_ticks_executed() == 3
    assert strategy.max_active == 1
    assert strategy.calls[0] - started >= INTERVAL * 0.8
    gaps = [b - a for a, b in zip(strategy.calls, strategy.calls[1:])]
    assert all(gap >= INTERVAL * 0.8 for gap in gaps)


def test_no_tick_after_cancellation():
    token = CancellationToken()
    strategy = CountingStrategy(token, stop_after=2, reason=StopReason.KEYBOARD)
    engine = KeepAliveEngine(_config(), strategy, token)

    assert engine.run() is StopReason.KEYBOARD
    assert len(strategy.calls) == 2
    assert engine.get_state() is EngineState.STOPPED


def test_cancelled_before_first_tick_runs_nothing():
    token = CancellationToken()
    token.cancel(StopReason.SIGNAL)
    strategy = CountingStrategy(token, stop_after=1)
    engine = KeepAliveEngine(_config(), strategy, token)

    assert engine.run() is StopReason.SIGNAL
    assert strategy.calls == []


def test_cancellation_from_another_thread_ends_wait_promptly():
    token = CancellationToken()
    strategy = CountingStrategy(token, stop_after=100)
    engine = KeepAliveEngine(_config(interval=30.0), strategy, token)

    timer = threading.Timer(0.05, token.cancel, args=(StopReason.KEYBOARD,))
    timer.start()
    started = time.monotonic()
    reason = engine.run()
    timer.join()

    assert reason is StopReason.KEYBOARD
    assert time.monotonic() - started < 5.0
    assert strategy.calls == []


def test_failing_strategy_does_not_stop_loop():
    token = CancellationToken()
    failure = ActivityOutcome.failed("exited with status 1", method="osascript", hint="grant it")
    strategy = CountingStrategy(token, stop_after=4, outcome=failure)
    engine = KeepAliveEngine(_config(), strategy, token)
    seen = []
    engine.register_outcome_callback(seen.append)

    engine.run()

    assert len(seen) == 4
    assert all(not o.success and o.method == "osascript" for o in seen)


def test_raising_strategy_is_reported_as_failure():
    token = CancellationToken()
    strategy = CountingStrategy(token, stop_after=2, error=RuntimeError("boom"))
    engine = KeepAliveEngine(_config(), strategy, token)
    seen = []
    engine.register_outcome_callback(seen.append)

    engine.run()

    assert len(seen) == 2
    assert all("boom" in o.error for o in seen)


def test_missed_ticks_are_dropped_not_replayed():
    now = [0.0]
    token = CancellationToken()
    engine = KeepAliveEngine(_config(interval=10.0), lambda: None, token, clock=lambda: now[0])

    now[0] = 35.0
    assert engine._schedule_after(10.0, 10.0) == 40.0
    now[0] = 12.0
    assert engine._schedule_after(10.0, 10.0) == 20.0


def test_status_messages_and_single_use():
    token = CancellationToken()
    token.cancel(StopReason.SIGNAL)
    engine = KeepAliveEngine(_config(), lambda: None, token)
    messages = []
    engine.register_status_callback(messages.append)

    engine.run()

    assert messages[0].startswith("Keep-alive started")
    assert messages[-1] == "Keep-alive stopped. Total ticks: 0"
    with pytest.raises(RuntimeError):
        engine.run()
