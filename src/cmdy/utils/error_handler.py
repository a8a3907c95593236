"""Centralized handling of fatal errors for the command line."""

import logging
import traceback

from rich.console import Console
from rich.markup import escape

from .exceptions import (
    CmdyError,
    CommandExecutionError,
    ErrorSeverity,
    FileSystemError,
    ValidationError,
)
from .logging_config import log_structured_error

EXIT_FAILURE = 1


class ErrorHandler:
    """Turns exceptions that reach the top of the CLI into a diagnostic and an exit code."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True, highlight=False)
        self.logger = logging.getLogger(__name__)

    def handle_error(self, error: Exception, log_error: bool = True) -> int:
        """
        Report an error to the user.

        Args:
            error: The exception to handle
            log_error: Whether to log the error

        Returns:
            Process exit code to use
        """
        if not isinstance(error, CmdyError):
            error = self._convert_to_app_error(error)

        if log_error:
            self._log_error(error)

        self._print_error(error)
        return EXIT_FAILURE

    def _convert_to_app_error(self, error: Exception) -> CmdyError:
        """Convert a generic exception to a CmdyError."""
        error_message = str(error) or error.__class__.__name__

        if isinstance(error, OSError):
            return FileSystemError(
                error_message,
                path=getattr(error, "filename", None),
                user_message=f"A file system error occurred: {error_message}",
                suggested_action="Check that the path exists and you have the necessary permissions.",
            )
        elif isinstance(error, ValueError):
            return ValidationError(error_message, user_message="Invalid input provided.")
        else:
            return CommandExecutionError(
                error_message,
                user_message=f"An unexpected error occurred: {error_message}",
            )

    def _log_error(self, error: CmdyError) -> None:
        """Log the error with appropriate level and details."""
        error_dict = error.to_dict()

        if error.severity == ErrorSeverity.CRITICAL:
            log_func = self.logger.critical
        elif error.severity == ErrorSeverity.ERROR:
            log_func = self.logger.error
        elif error.severity == ErrorSeverity.WARNING:
            log_func = self.logger.warning
        else:
            log_func = self.logger.info

        log_func(f"Error in {error.category.value}: {error.message}")
        log_structured_error(
            {**error_dict, "traceback": traceback.format_exc()},
            message=f"Fatal {error.__class__.__name__}",
        )

    def _print_error(self, error: CmdyError) -> None:
        """Print the user-facing diagnostic."""
        self.console.print(f"[bold red]❌ {escape(error.user_message)}[/bold red]")
        for line in self._build_error_details(error):
            self.console.print(f"   {line}", markup=False)

    def _build_error_details(self, error: CmdyError) -> list[str]:
        """Build the list of error details for display."""
        details = []

        if error.suggested_action:
            details.append(f"Suggested action: {error.suggested_action}")

        for key, value in error.details.items():
            if value is not None:
                details.append(f"{key.replace('_', ' ').title()}: {value}")

        return details
