"""
Simulation package: the platform-specific "nudge the pointer" strategies.

Key parts
---------
- scripts:    Helper command definitions (cliclick, AppleScript, PowerShell)
- strategies: Dispatch by platform, primary/fallback selection, error capture
"""

from .strategies import RunContext, SimulationError, simulate_activity, supported_platforms

__all__ = ["RunContext", "SimulationError", "simulate_activity", "supported_platforms"]
