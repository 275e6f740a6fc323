"""
Domain models for the Keep-Alive tool.
Each class follows the Single Responsibility Principle (SRP).
"""

import os
import platform as _platform
import sys
from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional


DEFAULT_INTERVAL_SECONDS = 30.0

QUIT_TOKENS = frozenset({"q", "quit", "exit"})

VERSION_ENV = "KEEPALIVE_VERSION"
BUILD_TIME_ENV = "KEEPALIVE_BUILD_TIME"
ENVIRONMENT_ENV = "KEEPALIVE_ENVIRONMENT"


class Platform(Enum):
    """Closed set of platforms the tool knows how to keep awake."""
    MACOS = "darwin"
    WINDOWS = "windows"
    UNSUPPORTED = "unsupported"

    @staticmethod
    def detect(identifier: Optional[str] = None) -> "Platform":
        """
        Map a platform identifier (``sys.platform`` by default) to a Platform.

        Args:
            identifier: Raw identifier such as "darwin", "win32" or "linux"
        """
        raw = (sys.platform if identifier is None else identifier).strip().lower()
        if raw == "darwin":
            return Platform.MACOS
        if raw.startswith("win"):
            return Platform.WINDOWS
        return Platform.UNSUPPORTED

    def is_supported(self) -> bool:
        return self is not Platform.UNSUPPORTED


class EngineState(Enum):
    """Lifecycle of the activity loop. STOPPED is terminal."""
    READY = "ready"
    RUNNING = "running"
    STOPPED = "stopped"


class StopReason(Enum):
    """Which cancellation source ended the loop."""
    SIGNAL = "signal"
    KEYBOARD = "keyboard"


@dataclass(frozen=True)
class RunConfiguration:
    """
    Immutable settings for one run of the tool.

    The build metadata fields are opaque strings supplied by the
    environment; they are only ever printed.
    """
    platform: Platform
    platform_id: str
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS
    architecture: str = ""
    version: str = "dev"
    build_time: str = "unknown"
    environment: str = "dev"

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.interval_seconds <= 0:
            raise ValueError("Tick interval must be positive")

    @staticmethod
    def from_environment(
        environ: Optional[Mapping[str, str]] = None,
        platform_id: Optional[str] = None,
        architecture: Optional[str] = None,
    ) -> "RunConfiguration":
        """Build the configuration from the process environment."""
        env = os.environ if environ is None else environ
        raw_platform = sys.platform if platform_id is None else platform_id
        machine = _platform.machine() if architecture is None else architecture

        return RunConfiguration(
            platform=Platform.detect(raw_platform),
            platform_id=str(raw_platform),
            architecture=str(machine or "unknown"),
            version=str(env.get(VERSION_ENV) or "dev"),
            build_time=str(env.get(BUILD_TIME_ENV) or "unknown"),
            environment=str(env.get(ENVIRONMENT_ENV) or "dev"),
        )


@dataclass
class ActivityOutcome:
    """Result of a single attempt to simulate user activity."""
    success: bool
    method: Optional[str] = None
    error: Optional[str] = None
    hint: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @staticmethod
    def succeeded(method: str) -> "ActivityOutcome":
        return ActivityOutcome(success=True, method=method)

    @staticmethod
    def failed(error: str, method: Optional[str] = None,
               hint: Optional[str] = None) -> "ActivityOutcome":
        return ActivityOutcome(success=False, method=method, error=error, hint=hint)
