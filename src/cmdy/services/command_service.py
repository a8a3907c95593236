"""Command execution service for cmdy."""

import logging
import os
import signal
import subprocess
import time

from rich.console import Console
from rich.markup import escape
from rich.progress_bar import ProgressBar
from rich.table import Table

from ..models.command_execution import (
    CommandExecution,
    CommandPolicy,
    CommandSetRun,
    ExecutionMode,
    default_command_policies,
)
from ..models.config import CommandSet
from ..ui.progress_manager import SpinnerIndicator
from ..utils.exceptions import CommandExecutionError
from ..utils.path_manager import PathManager
from .execution_log import ExecutionLog

SHELL = "sh"
KILL_WAIT_SECONDS = 5
PROGRESS_BAR_WIDTH = 40


class CommandService:
    """
    Runs command sets sequentially in a working directory.

    This service provides:
    - Foreground execution through ``sh -c``, stopping at the first failure
    - Time-boxed execution for commands that never exit on their own
      (by default ``npm run dev``), with a spinner while the window runs
    - One execution log entry per command set that ran to completion
    """

    def __init__(
        self,
        execution_log: ExecutionLog | None = None,
        console: Console | None = None,
        policies: dict[str, CommandPolicy] | None = None,
        error_console: Console | None = None,
    ):
        """
        Initialize the command service.

        Args:
            execution_log: Log receiving completed command sets
            console: Console for progress output
            policies: Execution policies keyed by exact command string
            error_console: Console for failure notices (defaults to stderr)
        """
        self._execution_log = execution_log or ExecutionLog()
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self._policies = (
            dict(policies) if policies is not None else default_command_policies()
        )
        self._logger = logging.getLogger(__name__)

    def get_policy(self, command: str) -> CommandPolicy:
        """
        Get the execution policy for a command.

        Args:
            command: Command string as stored in the set

        Returns:
            CommandPolicy: Matching policy, or a foreground policy if none matches
        """
        return self._policies.get(command) or CommandPolicy(command=command)

    def set_policy(
        self,
        command: str,
        mode: ExecutionMode,
        duration_seconds: float = 0.0,
    ) -> None:
        """
        Register or replace the policy for an exact command string.

        Args:
            command: Command string to match
            mode: Execution mode to use
            duration_seconds: Time box for TIMEBOXED commands
        """
        self._policies[command] = CommandPolicy(
            command=command, mode=mode, duration_seconds=duration_seconds
        )
        self._logger.info(
            f"Policy for '{command}' set to {mode.value} ({duration_seconds}s)"
        )

    def run_command_set(self, command_set: CommandSet, directory: str) -> CommandSetRun:
        """
        Run every command of a set in order.

        A foreground command that exits non-zero stops the set and nothing is
        logged. Time-boxed commands are always killed and never count as failed.

        Args:
            command_set: Set to run
            directory: Working directory for every command

        Returns:
            CommandSetRun: Outcome of the run

        Raises:
            CommandExecutionError: If a shell cannot be started or a
                time-boxed process cannot be killed
        """
        working_directory = PathManager.expand_directory(directory)
        run = CommandSetRun(name=command_set.name, working_directory=working_directory)
        total = len(command_set.commands)

        self.console.print(
            f"\n🚀 Executing command set: [bold]{escape(command_set.name)}[/bold]"
        )
        self._logger.info(
            f"Running command set '{command_set.name}' ({total} commands) "
            f"in {working_directory}"
        )

        for position, command in enumerate(command_set.commands, start=1):
            policy = self.get_policy(command)
            self.console.print(
                f"🔹 [{position}/{total}] Running: {command}", markup=False
            )

            if policy.mode == ExecutionMode.TIMEBOXED:
                execution = self._run_timeboxed(command, working_directory, policy)
            else:
                execution = self._run_foreground(command, working_directory)
            run.executions.append(execution)

            if not execution.is_successful():
                run.failed_command = command
                self._flush_console()
                self.error_console.print(
                    f"[red]❌ Command failed: {escape(command)}[/red]"
                )
                self._logger.warning(
                    f"Command set '{command_set.name}' aborted: '{command}' "
                    f"exited with {execution.exit_code}"
                )
                return run

            self._print_progress(position, total)

        self._execution_log.append(command_set.name)
        run.logged = True
        self.console.print("[green]✅ All commands executed successfully![/green]")
        return run

    def _run_foreground(self, command: str, directory: str) -> CommandExecution:
        """Run a command to completion with the terminal attached."""
        execution = CommandExecution(command=command, working_directory=directory)
        self._flush_console()

        try:
            execution.mark_started()
            completed = subprocess.run([SHELL, "-c", command], cwd=directory)
        except OSError as e:
            raise CommandExecutionError(
                f"Failed to execute command '{command}': {e}",
                command=command,
                working_directory=directory,
                user_message=f"Failed to execute command: {command}",
                suggested_action="Check that the working directory exists and 'sh' is available.",
            ) from e

        execution.mark_completed(completed.returncode)
        self._logger.info(f"'{command}' exited with {completed.returncode}")
        return execution

    def _run_timeboxed(
        self, command: str, directory: str, policy: CommandPolicy
    ) -> CommandExecution:
        """Start a command, let it run for the policy window, then kill it."""
        execution = CommandExecution(
            command=command,
            working_directory=directory,
            mode=ExecutionMode.TIMEBOXED,
        )
        self._flush_console()

        try:
            process = subprocess.Popen(
                [SHELL, "-c", command],
                cwd=directory,
                start_new_session=os.name != "nt",  # Own process group on Unix
            )
        except OSError as e:
            raise CommandExecutionError(
                f"Failed to start '{command}': {e}",
                command=command,
                working_directory=directory,
                user_message=f"Failed to start process: {command}",
            ) from e

        execution.mark_started(process.pid)
        self._logger.info(
            f"Started '{command}' (PID: {process.pid}) for {policy.duration_seconds}s"
        )

        spinner = SpinnerIndicator(
            message=f"Running {command}...", stream=self.console.file
        )
        spinner.start()
        try:
            time.sleep(policy.duration_seconds)
        finally:
            spinner.request_stop()
            spinner.await_stopped()
            self._kill_process(process, command, directory)

        execution.mark_stopped()
        self.console.print(
            f"{command} stopped after {policy.duration_seconds:g} seconds.",
            markup=False,
        )
        return execution

    def _kill_process(
        self, process: subprocess.Popen, command: str, directory: str
    ) -> None:
        """Force-kill a time-boxed process and its children, then reap it."""
        try:
            if os.name == "nt":
                process.kill()
            else:
                os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError as e:
            # Process already exited on its own
            self._logger.debug(f"Process already terminated: {e}")
        except OSError as e:
            raise CommandExecutionError(
                f"Failed to stop '{command}' (PID: {process.pid}): {e}",
                command=command,
                working_directory=directory,
                user_message=f"Failed to stop {command}",
            ) from e

        try:
            process.wait(timeout=KILL_WAIT_SECONDS)
        except subprocess.TimeoutExpired as e:
            raise CommandExecutionError(
                f"'{command}' (PID: {process.pid}) did not exit after being killed",
                command=command,
                working_directory=directory,
                user_message=f"Failed to stop {command}",
            ) from e

    def _print_progress(self, completed: int, total: int) -> None:
        """Draw the set progress bar between commands."""
        row = Table.grid(padding=(0, 1))
        row.add_row(
            ProgressBar(total=total, completed=completed, width=PROGRESS_BAR_WIDTH),
            f"{completed}/{total}",
        )
        self.console.print(row)

    def _flush_console(self) -> None:
        """Flush progress output so it precedes the child's output."""
        self.console.file.flush()
