"""Diagnostic logging for cmdy.

Diagnostics are separate from what cmdy prints for the user: they go to
stderr (quiet by default) and to rotating files in the log directory.
"""

import logging
import logging.handlers
import os
import sys

from .path_manager import PathManager

LOG_LEVEL_ENV = "CMDY_LOG_LEVEL"
ERROR_LOGGER_NAME = "cmdy.errors"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_MAX_FILE_SIZE = 1024 * 1024
DEFAULT_BACKUP_COUNT = 3


class ColoredFormatter(logging.Formatter):
    """Console formatter that wraps the level name in an ANSI color."""

    RESET = "\033[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",  # cyan
        logging.INFO: "\033[32m",  # green
        logging.WARNING: "\033[33m",  # yellow
        logging.ERROR: "\033[31m",  # red
        logging.CRITICAL: "\033[35m",  # magenta
    }

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        # Work on a copy; file handlers see the same record
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class StructuredErrorFormatter(logging.Formatter):
    """Appends the ``error_details`` dict of a record, traceback last."""

    def format(self, record):
        text = super().format(record)
        details = getattr(record, "error_details", None)
        if not isinstance(details, dict):
            return text

        lines = [
            f"  {key}: {value}"
            for key, value in details.items()
            if key != "traceback" and value is not None
        ]
        if lines:
            text += "\nError Details:\n" + "\n".join(lines)
        if details.get("traceback"):
            text += f"\nTraceback:\n{details['traceback']}"
        return text


def _rotating_handler(
    filename: str,
    level: int,
    formatter: logging.Formatter,
    max_file_size: int,
    backup_count: int,
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        PathManager.get_log_file(filename),
        maxBytes=max_file_size,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    log_to_file: bool = True,
    log_to_console: bool = True,
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Console level name; defaults to ``$CMDY_LOG_LEVEL``, then WARNING
        log_to_file: Also write ``app.log`` and ``errors.log``
        log_to_console: Write diagnostics to stderr
        max_file_size: Bytes before a log file is rotated
        backup_count: Rotated files to keep
    """
    level = level or os.environ.get(LOG_LEVEL_ENV, "WARNING")
    console_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(
            ColoredFormatter(fmt=LOG_FORMAT, datefmt=CONSOLE_DATE_FORMAT)
        )
        root_logger.addHandler(console_handler)

    if log_to_file:
        try:
            PathManager.get_log_dir().mkdir(parents=True, exist_ok=True)
            # app.log keeps INFO even when the console is quieter
            root_logger.addHandler(
                _rotating_handler(
                    "app.log",
                    min(console_level, logging.INFO),
                    logging.Formatter(fmt=LOG_FORMAT, datefmt=FILE_DATE_FORMAT),
                    max_file_size,
                    backup_count,
                )
            )
            setup_error_logging(max_file_size, backup_count)
        except OSError as e:
            logging.getLogger(__name__).error(f"File logging disabled: {e}")

    logging.getLogger(__name__).debug(
        f"Logging ready (console={level if log_to_console else 'off'}, files={log_to_file})"
    )


def setup_error_logging(
    max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Route structured error records to ``errors.log`` only."""
    error_logger = logging.getLogger(ERROR_LOGGER_NAME)
    error_logger.handlers.clear()
    error_logger.addHandler(
        _rotating_handler(
            "errors.log",
            logging.ERROR,
            StructuredErrorFormatter(fmt=LOG_FORMAT, datefmt=FILE_DATE_FORMAT),
            max_file_size,
            backup_count,
        )
    )
    error_logger.setLevel(logging.ERROR)
    error_logger.propagate = False


def log_structured_error(
    error_dict: dict, message: str = "Structured error occurred"
) -> None:
    """
    Log an error together with its details dict.

    Args:
        error_dict: Serialized error, usually ``CmdyError.to_dict()``
        message: Headline for the log record
    """
    logging.getLogger(ERROR_LOGGER_NAME).error(
        message, extra={"error_details": error_dict}
    )
