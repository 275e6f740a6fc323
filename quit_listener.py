"""Console quit listener: turns a typed quit command into a cancellation."""

from __future__ import annotations

import sys
import threading
from typing import FrozenSet, Optional, TextIO

from cancellation import CancellationToken
from models import QUIT_TOKENS, StopReason


# Pause before re-reading after an I/O error so a broken stream cannot spin.
_ERROR_BACKOFF_SECONDS = 0.1


class QuitListener:
    """Reads console lines on a daemon thread and cancels on a quit token."""

    def __init__(
        self,
        token: CancellationToken,
        stream: Optional[TextIO] = None,
        quit_tokens: FrozenSet[str] = QUIT_TOKENS,
    ) -> None:
        self._token = token
        self._stream = stream
        self._quit_tokens = quit_tokens
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._thread = threading.Thread(
            target=self._read_loop, name="quit-listener", daemon=True
        )
        self._thread.start()

    def is_running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread:
            self._thread.join(timeout)

    def is_quit_command(self, line: str) -> bool:
        """Exact, case-sensitive match after removing the line terminator."""
        return _strip_line_ending(line) in self._quit_tokens

    def _read_loop(self) -> None:
        stream = self._stream if self._stream is not None else sys.stdin
        if stream is None:
            return
        while not self._token.is_cancelled:
            try:
                line = stream.readline()
            except UnicodeDecodeError:
                continue
            except ValueError:
                # Stream was closed underneath us.
                return
            except OSError:
                self._token.wait(_ERROR_BACKOFF_SECONDS)
                continue

            if line == "":
                # EOF: no more input can arrive, leave the signal channel in charge.
                return

            if self.is_quit_command(line):
                self._token.cancel(StopReason.KEYBOARD)
                return


def _strip_line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line
