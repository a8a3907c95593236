"""Data models for cmdy."""

from .command_execution import (
    CommandExecution,
    CommandPolicy,
    CommandSetRun,
    CommandStatus,
    ExecutionMode,
    default_command_policies,
)
from .config import CommandConfig, CommandSet, parse_command_list

__all__ = [
    "CommandConfig",
    "CommandExecution",
    "CommandPolicy",
    "CommandSet",
    "CommandSetRun",
    "CommandStatus",
    "ExecutionMode",
    "default_command_policies",
    "parse_command_list",
]
