"""Configuration management service for cmdy."""

import json
import logging
from pathlib import Path

from ..models.config import CommandConfig, CommandSet
from ..utils.exceptions import ConfigurationError, FileSystemError
from ..utils.path_manager import PathManager


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Loads and saves the stored directories and command sets.

    Every mutation is written back to disk immediately. There is no locking:
    two concurrent invocations race and the last writer wins.
    """

    def __init__(self, config_file: Path | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_file: Optional path to config file (uses default if None)
        """
        self._config_file = Path(config_file or PathManager.get_config_file())
        self._config: CommandConfig | None = None

    @property
    def config(self) -> CommandConfig:
        """
        Get the current configuration, loading it if necessary.

        Returns:
            CommandConfig: Current configuration
        """
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> CommandConfig:
        """
        Load configuration from file.

        An unreadable or missing file yields an empty configuration; the file
        itself is only created by the first save.

        Returns:
            CommandConfig: Loaded configuration

        Raises:
            ConfigurationError: If the file exists but its content is malformed
        """
        try:
            raw = self._config_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.info(
                f"Configuration file not readable ({e}), using empty configuration"
            )
            self._config = CommandConfig()
            return self._config

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Failed to parse config file {self._config_file}: {e}",
                config_file=str(self._config_file),
                user_message=f"Failed to parse config file: {self._config_file}",
                suggested_action="Fix the JSON by hand or move the file away to start fresh.",
            ) from e

        try:
            config = CommandConfig.from_dict(data)
        except ConfigurationError as e:
            e.config_file = str(self._config_file)
            e.details.update({"config_file": str(self._config_file)})
            raise

        self._config = config
        logger.info(f"Configuration loaded from: {self._config_file}")
        return config

    def save(self, config: CommandConfig | None = None) -> None:
        """
        Save configuration to file, overwriting it.

        Args:
            config: Configuration to save (defaults to the current one)

        Raises:
            FileSystemError: If the file cannot be written
        """
        if config is not None:
            self._config = config
        config = self.config

        try:
            self._config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_file, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise FileSystemError(
                f"Failed to save config file {self._config_file}: {e}",
                path=str(self._config_file),
                operation="write",
                user_message=f"Failed to save config file: {self._config_file}",
            ) from e

        logger.info(f"Configuration saved to: {self._config_file}")

    def reload(self) -> CommandConfig:
        """
        Reload configuration from file, discarding in-memory state.

        Returns:
            CommandConfig: Reloaded configuration
        """
        self._config = None
        return self.config

    def add_directory(self, directory: str) -> None:
        """
        Store a new working directory and persist it.

        Args:
            directory: Directory path as entered by the user
        """
        self.config.add_directory(directory)
        self.save()

    def add_command_set(self, name: str, commands: list[str]) -> CommandSet:
        """
        Store a new command set and persist it.

        Args:
            name: Name of the new set
            commands: Commands in execution order

        Returns:
            CommandSet: The stored set
        """
        command_set = CommandSet(name=name, commands=list(commands))
        self.config.add_command_set(command_set)
        self.save()
        return command_set

    def delete_command_set(self, name: str) -> bool:
        """
        Remove a command set by exact name and persist the result.

        Deleting a name that does not exist is not an error.

        Args:
            name: Name of the set to delete

        Returns:
            bool: True if a set was removed, False otherwise
        """
        removed = self.config.remove_command_set(name)
        if not removed:
            logger.debug(f"No command set named '{name}' to delete")
        self.save()
        return removed

    def get_command_set(self, name: str) -> CommandSet | None:
        """
        Get a command set by name.

        Args:
            name: Name of the set

        Returns:
            Optional[CommandSet]: First set with that name, None otherwise
        """
        return self.config.get_command_set(name)

    def get_command_sets(self) -> list[CommandSet]:
        """All stored command sets."""
        return self.config.command_sets.copy()

    def get_command_set_names(self) -> list[str]:
        """Names of all stored command sets."""
        return self.config.get_command_set_names()

    def get_directories(self) -> list[str]:
        """All stored working directories."""
        return self.config.directories.copy()

    def get_config_file_path(self) -> Path:
        """
        Get the path to the configuration file.

        Returns:
            Path: Path to the configuration file
        """
        return self._config_file

    def __repr__(self) -> str:
        config_loaded = self._config is not None
        return (
            f"ConfigManager(config_file='{self._config_file}', "
            f"config_loaded={config_loaded})"
        )
