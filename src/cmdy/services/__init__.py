"""Service layer for storage, logging and command execution."""

from .command_service import CommandService
from .config_manager import ConfigManager
from .execution_log import ExecutionLog

__all__ = [
    "CommandService",
    "ConfigManager",
    "ExecutionLog",
]
