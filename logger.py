"""
Status Logger - records and prints what the keep-alive loop is doing.

SRP: This class has one responsibility - logging and status management.
"""

from datetime import datetime
from typing import Callable, List, Optional
from dataclasses import dataclass

from models import ActivityOutcome


@dataclass
class LogEntry:
    """
    Represents a single log entry.

    Clean Code: Simple data class with descriptive name and fields.
    """
    timestamp: datetime
    message: str
    level: str = "INFO"

    def __str__(self) -> str:
        time_str = self.timestamp.strftime("%H:%M:%S")
        return f"[{time_str}] {self.level}: {self.message}"


class StatusLogger:
    """
    Keeps a bounded log history and echoes every entry to the console.
    """

    def __init__(self, max_entries: int = 100,
                 echo: Optional[Callable[[str], None]] = print):
        """
        Initialize the logger.

        Args:
            max_entries: Maximum number of log entries to keep in memory
            echo: Called with each formatted entry; None keeps entries silent
        """
        self._log_entries: List[LogEntry] = []
        self._max_entries = max_entries
        self._echo = echo
        self._current_status = "Ready"

    def log_info(self, message: str, timestamp: Optional[datetime] = None) -> None:
        self._add_entry(message, "INFO", timestamp=timestamp)

    def log_warning(self, message: str, timestamp: Optional[datetime] = None) -> None:
        self._add_entry(message, "WARNING", timestamp=timestamp)

    def log_outcome(self, outcome: ActivityOutcome) -> None:
        """
        Report one tick.

        Primary and fallback mechanisms are reported in the same shape,
        only the method name differs.
        """
        method = f" ({outcome.method})" if outcome.method else ""
        if outcome.success:
            self.log_info(f"Simulated mouse activity{method}", timestamp=outcome.timestamp)
            return

        self.log_warning(f"Failed to simulate mouse activity{method}: {outcome.error}",
                         timestamp=outcome.timestamp)
        if outcome.hint:
            self.log_warning(f"Troubleshooting: {outcome.hint}", timestamp=outcome.timestamp)

    def update_status(self, status: str) -> None:
        """
        Update the current status.

        Args:
            status: The new status message
        """
        self._current_status = status
        self.log_info(status)

    def get_current_status(self) -> str:
        return self._current_status

    def get_recent_logs(self, count: int = 10) -> List[LogEntry]:
        """
        Get the most recent log entries.

        Args:
            count: Number of recent entries to return

        Returns:
            List of recent log entries
        """
        return self._log_entries[-count:]

    def get_all_logs(self) -> List[LogEntry]:
        """Returns all log entries."""
        return self._log_entries.copy()

    def _add_entry(self, message: str, level: str,
                   timestamp: Optional[datetime] = None) -> None:
        """
        Add a new log entry.

        DRY: Centralized logic for adding entries.
        """
        entry = LogEntry(
            timestamp=timestamp or datetime.now(),
            message=message,
            level=level
        )

        self._log_entries.append(entry)

        # Trim old entries if we exceed max
        if len(self._log_entries) > self._max_entries:
            self._log_entries = self._log_entries[-self._max_entries:]

        if self._echo:
            self._echo(str(entry))
