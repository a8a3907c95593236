"""Where cmdy keeps its files on each platform."""

import os
import sys
from pathlib import Path

CONFIG_FILE_ENV = "CMDY_CONFIG_FILE"
EXECUTION_LOG_ENV = "CMDY_LOG_FILE"

# Base directories relative to the home directory, per platform
_BASE_DIRS = {
    "config": {
        "darwin": ("Library", "Application Support"),
        "win32": ("AppData", "Roaming"),
        "default": (".config",),
    },
    "data": {
        "darwin": ("Library", "Application Support"),
        "win32": ("AppData", "Local"),
        "default": (".local", "share"),
    },
}


class PathManager:
    """
    Resolves the config file, execution log and diagnostic log locations.

    The config file and the execution log can each be moved with an
    environment variable; everything else follows platform conventions.
    """

    APP_NAME = "cmdy"
    CONFIG_FILENAME = "config.json"
    EXECUTION_LOG_FILENAME = "cmdy.log"

    @staticmethod
    def _app_dir(kind: str) -> Path:
        bases = _BASE_DIRS[kind]
        parts = bases.get(sys.platform, bases["default"])
        return Path.home().joinpath(*parts, PathManager.APP_NAME)

    @staticmethod
    def get_config_dir() -> Path:
        """Directory holding ``config.json``."""
        return PathManager._app_dir("config")

    @staticmethod
    def get_data_dir() -> Path:
        """Directory holding the execution log."""
        return PathManager._app_dir("data")

    @staticmethod
    def get_log_dir() -> Path:
        """Directory for diagnostic logs (``app.log``, ``errors.log``)."""
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Logs" / PathManager.APP_NAME
        return PathManager.get_data_dir() / "logs"

    @staticmethod
    def _from_env(variable: str, default: Path) -> Path:
        value = os.environ.get(variable)
        return Path(value).expanduser() if value else default

    @staticmethod
    def get_config_file() -> Path:
        """
        Path of the command set configuration file.

        ``$CMDY_CONFIG_FILE`` takes precedence over the default location.
        """
        return PathManager._from_env(
            CONFIG_FILE_ENV, PathManager.get_config_dir() / PathManager.CONFIG_FILENAME
        )

    @staticmethod
    def get_execution_log_file() -> Path:
        """
        Path of the execution log.

        ``$CMDY_LOG_FILE`` takes precedence over the default location.
        """
        return PathManager._from_env(
            EXECUTION_LOG_ENV,
            PathManager.get_data_dir() / PathManager.EXECUTION_LOG_FILENAME,
        )

    @staticmethod
    def get_log_file(filename: str) -> Path:
        """
        Get path to a diagnostic log file.

        Args:
            filename: Name of the log file

        Returns:
            Path to the log file
        """
        return PathManager.get_log_dir() / filename

    @staticmethod
    def expand_directory(directory: str) -> str:
        """Expand ``~`` and environment variables in a stored working directory."""
        return os.path.expandvars(os.path.expanduser(directory))
