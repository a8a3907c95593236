"""Application controller that maps subcommands onto services and UI."""

import logging

from rich.console import Console
from rich.markup import escape

from ..models.command_execution import CommandSetRun
from ..services.command_service import CommandService
from ..services.config_manager import ConfigManager
from ..services.execution_log import ExecutionLog
from ..ui.selection_dialog import SelectionDialog

USAGE = "Usage: cmdy <command>. Use 'cmdy help' for details."

HELP_TEXT = """
📌 cmdy CLI - Command Set Manager
------------------------------------
cmdy run           - Run a command set
cmdy list          - List all command sets
cmdy logs          - View execution logs
cmdy delete <name> - Delete a command set
cmdy help          - Show this help message
"""


class ApplicationController:
    """
    Coordinates the services behind each ``cmdy`` subcommand.

    Collaborators are created on demand unless passed in, so tests can point
    every file at a temporary location.
    """

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        execution_log: ExecutionLog | None = None,
        command_service: CommandService | None = None,
        selection_dialog: SelectionDialog | None = None,
        console: Console | None = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.console = console or Console(highlight=False)
        self.config_manager = config_manager or ConfigManager()
        self.execution_log = execution_log or ExecutionLog()
        self.command_service = command_service or CommandService(
            execution_log=self.execution_log, console=self.console
        )
        self.selection_dialog = selection_dialog or SelectionDialog(
            self.config_manager, console=self.console
        )

        self._handlers = {
            "run": self.run_workflow,
            "list": self.list_command_sets,
            "logs": self.show_logs,
            "help": self.show_help,
            "--help": self.show_help,
        }

    def dispatch(self, args: list[str]) -> int:
        """
        Run the subcommand named by the first argument.

        Args:
            args: Command line arguments without the program name

        Returns:
            int: Exit code (0 for every non-fatal outcome)
        """
        command = args[0] if args else None
        self.logger.debug(f"Dispatching: {args}")

        if command == "delete" and len(args) > 1:
            self.delete_command_set(args[1])
        elif command in self._handlers:
            self._handlers[command]()
        else:
            self.show_usage()
        return 0

    def run_workflow(self) -> CommandSetRun:
        """Pick a directory and a command set, then run it."""
        directory = self.selection_dialog.select_directory()
        command_set = self.selection_dialog.select_command_set()
        return self.command_service.run_command_set(command_set, directory)

    def list_command_sets(self) -> None:
        """Print every stored command set."""
        self.console.print("\n📌 Stored Command Sets:")
        for index, command_set in enumerate(
            self.config_manager.get_command_sets(), start=1
        ):
            self.console.print(f"{index}. {command_set}", markup=False)

    def show_logs(self) -> None:
        """Print the execution log verbatim."""
        self.console.print("\n📜 Execution Logs:")
        self.console.print(self.execution_log.read_all(), markup=False)

    def delete_command_set(self, name: str) -> bool:
        """Delete a command set by name; unknown names are ignored."""
        removed = self.config_manager.delete_command_set(name)
        self.console.print(f"🗑️ Deleted command set: {escape(name)}")
        return removed

    def show_help(self) -> None:
        self.console.print(HELP_TEXT, markup=False)

    def show_usage(self) -> None:
        self.console.print(USAGE, markup=False)
