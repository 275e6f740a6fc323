"""
Platform strategies: one minimal, reversible pointer nudge per call.

Supported platforms
-------------------
- macOS:   cliclick when it is on PATH, otherwise an AppleScript run by
           osascript (needs accessibility permission)
- Windows: an inline PowerShell script calling GetCursorPos/SetCursorPos,
           otherwise an in-process nudge through pyautogui

Notes
-----
- Helper availability is looked up on every call; a helper installed while
  the tool is running is picked up on the next tick.
- Strategies raise SimulationError; simulate_activity() turns that into an
  ActivityOutcome so a failed nudge never escapes to the caller.
"""

from __future__ import annotations

import shutil
import subprocess
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from models import ActivityOutcome, Platform

from .scripts import (
    CLICLICK,
    HOLD_MILLISECONDS,
    NUDGE_PIXELS,
    OSASCRIPT,
    POWERSHELL,
    PYAUTOGUI_HINT,
    HelperCommand,
)


class SimulationError(Exception):
    def __init__(self, message: str, method: Optional[str] = None,
                 hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.method = method
        self.hint = hint


CommandRunner = Callable[[Sequence[str]], "subprocess.CompletedProcess[str]"]


def run_command(argv: Sequence[str]) -> "subprocess.CompletedProcess[str]":
    """Run a helper to completion, capturing stderr for the failure report."""
    return subprocess.run(
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
        text=True,
        check=False,
    )


class RunContext:
    """Small helper object passed to strategies at runtime."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        which: Optional[Callable[[str], Optional[str]]] = None,
        sleep_hook: Optional[Callable[[float], None]] = None,
        pyautogui_loader: Optional[Callable[[], Optional[Any]]] = None,
    ):
        self._runner = runner or run_command
        self._which = which or shutil.which
        self._sleep = sleep_hook or time.sleep
        self._pyautogui_loader = pyautogui_loader or _get_pyautogui

    def is_available(self, executable: str) -> bool:
        return self._which(executable) is not None

    def run(self, command: HelperCommand) -> None:
        """Invoke a helper command, raising SimulationError on any failure."""
        try:
            completed = self._runner(command.argv())
        except OSError as e:
            raise SimulationError(
                f"could not start '{command.executable}': {e}",
                method=command.executable,
                hint=command.hint,
            )

        if completed.returncode != 0:
            detail = (completed.stderr or "").strip()
            message = f"'{command.executable}' exited with status {completed.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise SimulationError(message, method=command.executable, hint=command.hint)

    def sleep_ms(self, ms: int) -> None:
        self._sleep(max(ms, 0) / 1000.0)

    def load_pyautogui(self) -> Optional[Any]:
        return self._pyautogui_loader()


def _nudge_macos(ctx: RunContext) -> str:
    # cliclick does not need accessibility permission, so it goes first
    command = CLICLICK if ctx.is_available(CLICLICK.executable) else OSASCRIPT
    ctx.run(command)
    return command.executable


def _nudge_windows(ctx: RunContext) -> str:
    if ctx.is_available(POWERSHELL.executable):
        ctx.run(POWERSHELL)
        return POWERSHELL.executable

    pyautogui = ctx.load_pyautogui()
    if pyautogui is None:
        raise SimulationError(
            "PowerShell not found and pyautogui is unavailable",
            method="pyautogui",
            hint=PYAUTOGUI_HINT,
        )
    try:
        pyautogui.moveRel(NUDGE_PIXELS, NUDGE_PIXELS, duration=0)
        ctx.sleep_ms(HOLD_MILLISECONDS)
        pyautogui.moveRel(-NUDGE_PIXELS, -NUDGE_PIXELS, duration=0)
    except Exception as e:
        raise SimulationError(f"pyautogui nudge failed: {e}",
                              method="pyautogui", hint=PYAUTOGUI_HINT)
    return "pyautogui"


_STRATEGIES: Dict[Platform, Callable[[RunContext], str]] = {
    Platform.MACOS: _nudge_macos,
    Platform.WINDOWS: _nudge_windows,
}


def supported_platforms() -> List[Platform]:
    return list(_STRATEGIES)


def simulate_activity(platform: Platform, ctx: Optional[RunContext] = None) -> ActivityOutcome:
    """
    Perform one nudge for the given platform and report how it went.

    Never raises for helper problems; the outcome carries the error and a
    remediation hint instead.
    """
    strategy = _STRATEGIES.get(platform)
    if strategy is None:
        return ActivityOutcome.failed(f"Unsupported operating system: {platform.value}")

    try:
        method = strategy(ctx or RunContext())
    except SimulationError as e:
        return ActivityOutcome.failed(str(e), method=e.method, hint=e.hint)
    return ActivityOutcome.succeeded(method)


def _get_pyautogui() -> Optional[Any]:
    """Import pyautogui lazily; it needs a display and may be missing."""
    try:
        import pyautogui  # type: ignore
    except Exception:
        return None
    pyautogui.FAILSAFE = False  # the cursor may legitimately rest in a corner
    pyautogui.PAUSE = 0
    return pyautogui
