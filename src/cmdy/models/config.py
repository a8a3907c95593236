"""Configuration data models for cmdy."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..utils.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def parse_command_list(text: str) -> list[str]:
    """
    Split comma-separated user input into commands.

    Each segment is trimmed; empty segments are kept, so a trailing comma
    yields an empty command.

    Args:
        text: Raw input such as ``"npm install, npm test"``

    Returns:
        List[str]: Commands in input order
    """
    return [segment.strip() for segment in text.split(",")]


@dataclass
class CommandSet:
    """
    A named, ordered list of shell commands executed together.

    Attributes:
        name: Name the set is selected and deleted by
        commands: Shell command lines, run in order
    """

    name: str
    commands: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize command set to dictionary.

        Returns:
            Dict[str, Any]: Serialized command set data
        """
        return {"name": self.name, "commands": list(self.commands)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommandSet":
        """
        Deserialize command set from dictionary.

        Args:
            data: Dictionary containing command set data

        Returns:
            CommandSet: Deserialized command set instance

        Raises:
            ConfigurationError: If required fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Command set must be an object, got: {data!r}")

        try:
            name = data["name"]
            commands = data["commands"]
        except KeyError as e:
            raise ConfigurationError(f"Command set is missing field {e}") from e

        if not isinstance(name, str):
            raise ConfigurationError(f"Command set name must be a string: {name!r}")
        if not isinstance(commands, list) or not all(
            isinstance(command, str) for command in commands
        ):
            raise ConfigurationError(
                f"Commands of set '{name}' must be a list of strings"
            )

        return cls(name=name, commands=list(commands))

    def __str__(self) -> str:
        return f"{self.name} - Commands: {json.dumps(self.commands, ensure_ascii=False)}"


@dataclass
class CommandConfig:
    """
    Persisted cmdy state: known working directories and command sets.

    Attributes:
        directories: Working directories offered by the directory menu
        command_sets: Stored command sets; names are expected to be unique
    """

    directories: list[str] = field(default_factory=list)
    command_sets: list[CommandSet] = field(default_factory=list)

    def add_directory(self, directory: str) -> None:
        """
        Append a working directory.

        Args:
            directory: Directory path as entered by the user
        """
        self.directories.append(directory)
        logger.info(f"Added directory: {directory}")

    def add_command_set(self, command_set: CommandSet) -> None:
        """
        Append a command set. Existing sets with the same name are left alone.

        Args:
            command_set: CommandSet instance to add
        """
        self.command_sets.append(command_set)
        logger.info(f"Added command set: {command_set.name}")

    def remove_command_set(self, name: str) -> bool:
        """
        Remove every command set with the given name.

        Args:
            name: Exact name of the set to remove

        Returns:
            bool: True if at least one set was removed, False otherwise
        """
        remaining = [cs for cs in self.command_sets if cs.name != name]
        removed = len(remaining) != len(self.command_sets)
        self.command_sets = remaining

        if removed:
            logger.info(f"Removed command set: {name}")
        return removed

    def get_command_set(self, name: str) -> CommandSet | None:
        """
        Get the first command set with the given name.

        Args:
            name: Name of the set to find

        Returns:
            Optional[CommandSet]: Command set if found, None otherwise
        """
        for command_set in self.command_sets:
            if command_set.name == name:
                return command_set
        return None

    def get_command_set_names(self) -> list[str]:
        """Names of all stored sets, in stored order."""
        return [command_set.name for command_set in self.command_sets]

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize configuration to dictionary.

        Returns:
            Dict[str, Any]: Serialized configuration data
        """
        return {
            "directories": list(self.directories),
            "command_sets": [cs.to_dict() for cs in self.command_sets],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommandConfig":
        """
        Deserialize configuration from dictionary.

        Args:
            data: Dictionary containing configuration data

        Returns:
            CommandConfig: Deserialized configuration instance

        Raises:
            ConfigurationError: If the document does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration root must be a JSON object")

        missing = [key for key in ("directories", "command_sets") if key not in data]
        if missing:
            raise ConfigurationError(
                f"Configuration is missing field(s): {', '.join(missing)}"
            )

        directories = data["directories"]
        if not isinstance(directories, list) or not all(
            isinstance(directory, str) for directory in directories
        ):
            raise ConfigurationError("'directories' must be a list of strings")

        command_sets = data["command_sets"]
        if not isinstance(command_sets, list):
            raise ConfigurationError("'command_sets' must be a list")

        return cls(
            directories=list(directories),
            command_sets=[CommandSet.from_dict(item) for item in command_sets],
        )

    def __str__(self) -> str:
        """String representation of the configuration."""
        return (
            f"CommandConfig(directories={len(self.directories)}, "
            f"command_sets={len(self.command_sets)})"
        )
