"""
Main entry point for the Keep-Alive tool.

Clean Code principles:
- Minimal main file
- Dependency injection at the root
- Clear program flow
"""

import sys
from typing import Callable, Optional, TextIO

from banner import build_banner, platform_hints, unsupported_platform_message
from cancellation import CancellationToken, install_signal_handlers, restore_signal_handlers
from keepalive_engine import KeepAliveEngine
from logger import StatusLogger
from models import ActivityOutcome, RunConfiguration, StopReason
from quit_listener import QuitListener
from simulation import simulate_activity


EXIT_OK = 0
EXIT_UNSUPPORTED_PLATFORM = 1

_SHUTDOWN_MESSAGES = {
    StopReason.SIGNAL: "Shutdown signal received. Stopping keep-alive tool...",
    StopReason.KEYBOARD: "Keyboard quit received. Stopping keep-alive tool...",
}


def run(
    config: RunConfiguration,
    stdin: Optional[TextIO] = None,
    simulate: Optional[Callable[[], ActivityOutcome]] = None,
) -> int:
    """
    Print the banner, validate the platform and drive the loop.

    Returns:
        Process exit status
    """
    for line in build_banner(config):
        print(line)

    if not config.platform.is_supported():
        print(unsupported_platform_message(config))
        return EXIT_UNSUPPORTED_PLATFORM

    for line in platform_hints(config.platform):
        print(line)
    print()

    token = CancellationToken()
    logger = StatusLogger()
    engine = KeepAliveEngine(
        config,
        simulate or (lambda: simulate_activity(config.platform)),
        token,
    )
    engine.register_status_callback(logger.update_status)
    engine.register_outcome_callback(logger.log_outcome)

    previous_handlers = install_signal_handlers(token)
    try:
        QuitListener(token, stream=stdin).start()
        print("Starting keep-alive simulation...")
        reason = engine.run()
    finally:
        restore_signal_handlers(previous_handlers)

    print()
    print(_SHUTDOWN_MESSAGES.get(reason, "Stopping keep-alive tool..."))
    return EXIT_OK


def main() -> int:
    """
    Application entry point.

    Build metadata comes from the environment; everything else is fixed.
    """
    return run(RunConfiguration.from_environment())


if __name__ == "__main__":
    sys.exit(main())
