"""Startup banner and platform hints printed before the loop starts."""

from __future__ import annotations

from typing import List

from models import Platform, RunConfiguration


TOOL_NAME = "Keep-Alive Tool"


def format_interval(seconds: float) -> str:
    return f"{seconds:g}s"


def build_banner(config: RunConfiguration) -> List[str]:
    return [
        TOOL_NAME,
        "=" * len(TOOL_NAME),
        f"Version: {config.version}",
        f"Build: {config.build_time} ({config.environment})",
        f"Platform: {config.platform_id}/{config.architecture}",
        f"Simulating user activity every {format_interval(config.interval_seconds)} "
        "to prevent screen lock",
        "Press Ctrl+C to stop, or type 'q' and press Enter to quit",
        "",
    ]


def platform_hints(platform: Platform) -> List[str]:
    if platform is Platform.MACOS:
        return [
            "macOS detected - Using cliclick for mouse simulation",
            "Note: If mouse movement fails, install cliclick: brew install cliclick",
        ]
    if platform is Platform.WINDOWS:
        return ["Windows detected - Using PowerShell with Windows API"]
    return []


def unsupported_platform_message(config: RunConfiguration) -> str:
    return (f"Error: This tool supports macOS and Windows only "
            f"(detected: {config.platform_id})")
