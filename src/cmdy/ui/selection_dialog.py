"""Interactive selection of a working directory and a command set."""

import logging
import os
from collections.abc import Callable
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt

from ..models.config import CommandSet, parse_command_list
from ..services.config_manager import ConfigManager


class SelectionDialog:
    """
    Menu-driven prompts for the ``run`` workflow.

    Both menus end with a sentinel item that creates a new entry; new
    entries are persisted through the ConfigManager as soon as they are
    entered.
    """

    CURRENT_DIRECTORY_LABEL = "Current Directory"
    NEW_DIRECTORY_LABEL = "Enter New Directory"
    NEW_COMMAND_SET_LABEL = "Create new command set"

    def __init__(
        self,
        config_manager: ConfigManager,
        console: Console | None = None,
        stream: TextIO | None = None,
        get_cwd: Callable[[], str] = os.getcwd,
    ):
        """
        Initialize the dialog.

        Args:
            config_manager: Store that new directories and sets are saved to
            console: Console used for menus and prompts
            stream: Input stream to read answers from (defaults to stdin)
            get_cwd: Provider of the process working directory
        """
        self.config_manager = config_manager
        self.console = console or Console(highlight=False)
        self.stream = stream
        self._get_cwd = get_cwd
        self._logger = logging.getLogger(__name__)

    def select_directory(self) -> str:
        """
        Let the user pick the working directory.

        Menu: index 0 is the current directory, 1..N the stored directories,
        N+1 prompts for a new directory which is stored before use.

        Returns:
            str: Chosen directory
        """
        directories = self.config_manager.get_directories()
        items = [self.CURRENT_DIRECTORY_LABEL, *directories, self.NEW_DIRECTORY_LABEL]
        selection = self._select("Select a directory", items)

        if selection == 0:
            directory = self._get_cwd()
        elif selection == len(directories) + 1:
            directory = self._ask_text("Enter directory path")
            self.config_manager.add_directory(directory)
        else:
            directory = directories[selection - 1]

        self._logger.info(f"Selected directory: {directory}")
        return directory

    def select_command_set(self) -> CommandSet:
        """
        Let the user pick an existing command set or create a new one.

        The menu is skipped when no sets exist. A typed name that matches an
        existing set selects that set instead of creating a duplicate.

        Returns:
            CommandSet: Chosen or newly stored set
        """
        names = self.config_manager.get_command_set_names()

        if names:
            selection = self._select(
                "Select a command set", [*names, self.NEW_COMMAND_SET_LABEL]
            )
            if selection < len(names):
                return self.config_manager.get_command_set(names[selection])

        name = self._ask_text("Enter new command set name")
        existing = self.config_manager.get_command_set(name)
        if existing is not None:
            self._logger.info(f"Command set '{name}' already exists, reusing it")
            return existing

        commands = parse_command_list(
            self._ask_text("Enter commands (comma-separated)")
        )
        return self.config_manager.add_command_set(name, commands)

    def _select(self, title: str, items: list[str]) -> int:
        """Print a numbered menu and return the chosen index."""
        self.console.print(f"\n[bold]{escape(title)}[/bold]")
        for index, item in enumerate(items):
            self.console.print(f"  {index}) {item}", markup=False)

        return IntPrompt.ask(
            "Choice",
            console=self.console,
            choices=[str(index) for index in range(len(items))],
            show_choices=False,
            stream=self.stream,
        )

    def _ask_text(self, prompt: str) -> str:
        """Ask for a non-empty line of text."""
        while True:
            value = Prompt.ask(prompt, console=self.console, stream=self.stream)
            if value:
                return value
            self.console.print("[prompt.invalid]A value is required")
