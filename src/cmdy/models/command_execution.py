"""Command execution data model for cmdy."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


DEV_SERVER_COMMAND = "npm run dev"
DEV_SERVER_WINDOW_SECONDS = 10.0


class ExecutionMode(Enum):
    """How a single command is run."""

    FOREGROUND = "foreground"
    TIMEBOXED = "timeboxed"


class CommandStatus(Enum):
    """Lifecycle state of a single command."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    STOPPED = "stopped"


@dataclass(frozen=True)
class CommandPolicy:
    """
    Execution policy for one exact command string.

    Attributes:
        command: Command line the policy applies to (exact match)
        mode: Execution mode for that command
        duration_seconds: Time box for TIMEBOXED commands
    """

    command: str
    mode: ExecutionMode = ExecutionMode.FOREGROUND
    duration_seconds: float = 0.0

    def __post_init__(self):
        if self.duration_seconds < 0:
            raise ValueError("Duration must not be negative")


def default_command_policies() -> dict[str, CommandPolicy]:
    """Policy table used when none is supplied: the dev server gets a time box."""
    return {
        DEV_SERVER_COMMAND: CommandPolicy(
            command=DEV_SERVER_COMMAND,
            mode=ExecutionMode.TIMEBOXED,
            duration_seconds=DEV_SERVER_WINDOW_SECONDS,
        )
    }


_FINISHED = frozenset(
    {CommandStatus.COMPLETED, CommandStatus.FAILED, CommandStatus.STOPPED}
)
_SUCCESSFUL = frozenset({CommandStatus.COMPLETED, CommandStatus.STOPPED})


@dataclass
class CommandExecution:
    """
    One command of a command set and what happened to it.

    ``exit_code`` stays None for a time-boxed command, which is killed rather
    than waited for; a stopped command still counts as successful.
    """

    command: str
    working_directory: str
    mode: ExecutionMode = ExecutionMode.FOREGROUND
    status: CommandStatus = CommandStatus.PENDING
    exit_code: int | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    process_id: int | None = None

    def mark_started(self, process_id: int | None = None) -> None:
        self.start_time = datetime.now()
        self.status = CommandStatus.RUNNING
        self.process_id = process_id

    def mark_completed(self, exit_code: int) -> None:
        """Record the exit code of a command that ran to the end."""
        self.exit_code = exit_code
        self._finish(CommandStatus.COMPLETED if exit_code == 0 else CommandStatus.FAILED)

    def mark_stopped(self) -> None:
        """Record that a time-boxed command was killed at the end of its window."""
        self._finish(CommandStatus.STOPPED)

    def _finish(self, status: CommandStatus) -> None:
        self.status = status
        self.end_time = datetime.now()
        self.process_id = None

    def is_finished(self) -> bool:
        return self.status in _FINISHED

    def is_successful(self) -> bool:
        return self.status in _SUCCESSFUL

    def get_duration(self) -> timedelta | None:
        """Wall time between start and end, None until both are known."""
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time


@dataclass
class CommandSetRun:
    """
    Outcome of running a command set.

    Attributes:
        name: Name of the command set
        working_directory: Directory the set ran in
        executions: One record per command that was started
        failed_command: First foreground command that exited non-zero
        logged: Whether an execution log entry was written
    """

    name: str
    working_directory: str
    executions: list[CommandExecution] = field(default_factory=list)
    failed_command: str | None = None
    logged: bool = False

    def is_successful(self) -> bool:
        """Check if every command of the set ran to completion."""
        return self.failed_command is None and all(
            execution.is_successful() for execution in self.executions
        )
