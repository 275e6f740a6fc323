"""Single cancellation primitive shared by every termination source."""

from __future__ import annotations

import signal
import threading
from typing import Any, Dict, Iterable, Optional

from models import StopReason


TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class CancellationToken:
    """
    Set-once flag that any number of producers may trip.

    The first reason recorded wins; later cancel() calls are ignored.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        # Reentrant so a nested cancel() on the same thread cannot deadlock.
        self._lock = threading.RLock()
        self._reason: Optional[StopReason] = None

    def cancel(self, reason: StopReason) -> bool:
        """Cancel the token. Returns True only for the call that tripped it."""
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or timeout elapses; True if cancelled."""
        return self._event.wait(timeout)

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[StopReason]:
        return self._reason


def install_signal_handlers(
    token: CancellationToken,
    signals: Iterable[int] = TERMINATION_SIGNALS,
) -> Dict[int, Any]:
    """
    Route the given OS signals into the token.

    Must be called from the main thread. Returns the previous handlers so
    they can be put back with restore_signal_handlers().
    """
    def _handler(signum, _frame) -> None:
        # Event.set() may block on a lock this thread already holds inside
        # Event.wait(), so the cancel happens on a short-lived thread.
        threading.Thread(
            target=token.cancel, args=(StopReason.SIGNAL,),
            name="signal-cancel", daemon=True,
        ).start()

    previous: Dict[int, Any] = {}
    for signum in signals:
        previous[signum] = signal.signal(signum, _handler)
    return previous


def restore_signal_handlers(previous: Dict[int, Any]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
