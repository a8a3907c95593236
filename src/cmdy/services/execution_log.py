"""Append-only log of command sets that ran to completion."""

import logging
from datetime import datetime
from pathlib import Path

from ..utils.exceptions import FileSystemError
from ..utils.path_manager import PathManager


logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NO_LOGS_MESSAGE = "No logs found."


class ExecutionLog:
    """One line per completed command set: ``<timestamp> - Executed: <name>``."""

    def __init__(self, log_file: Path | None = None):
        self._log_file = Path(log_file or PathManager.get_execution_log_file())

    @property
    def log_file(self) -> Path:
        return self._log_file

    @staticmethod
    def format_entry(command_set_name: str, timestamp: datetime | None = None) -> str:
        """Build the log line for a command set, newline included."""
        timestamp = timestamp or datetime.now()
        return f"{timestamp.strftime(TIMESTAMP_FORMAT)} - Executed: {command_set_name}\n"

    def append(self, command_set_name: str, timestamp: datetime | None = None) -> str:
        """
        Append an entry for a completed command set.

        Args:
            command_set_name: Name of the set that ran
            timestamp: Local time of completion (defaults to now)

        Returns:
            str: The line that was written

        Raises:
            FileSystemError: If the log file cannot be opened or written
        """
        entry = self.format_entry(command_set_name, timestamp)
        try:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._log_file, "a", encoding="utf-8") as f:
                f.write(entry)
        except OSError as e:
            raise FileSystemError(
                f"Failed to write execution log {self._log_file}: {e}",
                path=str(self._log_file),
                operation="append",
                user_message=f"Failed to write log file: {self._log_file}",
            ) from e

        logger.info(f"Logged execution of command set: {command_set_name}")
        return entry

    def read_all(self) -> str:
        """
        Read the whole log.

        Returns:
            str: Log content, or ``No logs found.`` if it cannot be read
        """
        try:
            return self._log_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.debug(f"Execution log not readable: {e}")
            return NO_LOGS_MESSAGE
