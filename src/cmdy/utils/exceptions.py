"""Exception types raised by cmdy."""

from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """How serious an error is; decides the log level it is reported at."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Area of the application an error comes from."""

    FILE_SYSTEM = "file_system"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    COMMAND_EXECUTION = "command_execution"


class CmdyError(Exception):
    """
    Base exception for cmdy.

    Subclasses set ``category`` and ``default_severity``; anything that lands
    in ``details`` is shown under the error message and written to the
    structured error log.
    """

    category = ErrorCategory.COMMAND_EXECUTION
    default_severity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity | None = None,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
        suggested_action: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity or self.default_severity
        self.details = dict(details or {})
        self.user_message = user_message or message
        self.suggested_action = suggested_action

    def _add_details(self, **values: Any) -> None:
        self.details.update({k: v for k, v in values.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used for structured logging."""
        return {
            "type": type(self).__name__,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "user_message": self.user_message,
            "suggested_action": self.suggested_action,
            "details": self.details,
        }


class ValidationError(CmdyError):
    """Invalid user input."""

    category = ErrorCategory.VALIDATION
    default_severity = ErrorSeverity.WARNING

    def __init__(self, message: str, field: str | None = None, value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        if field:
            self.details.update(
                {"field": field, "value": None if value is None else str(value)}
            )


class ConfigurationError(CmdyError):
    """A config file that exists but cannot be understood."""

    category = ErrorCategory.CONFIGURATION
    default_severity = ErrorSeverity.CRITICAL

    def __init__(self, message: str, config_file: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.config_file = config_file
        self._add_details(config_file=config_file)


class FileSystemError(CmdyError):
    """A file that could not be read or written."""

    category = ErrorCategory.FILE_SYSTEM
    default_severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        path: str | None = None,
        operation: str | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.path = path
        self.operation = operation
        self._add_details(path=path, operation=operation)


class CommandExecutionError(CmdyError):
    """A command that could not be started or stopped."""

    category = ErrorCategory.COMMAND_EXECUTION
    default_severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        command: str | None = None,
        working_directory: str | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.command = command
        self.working_directory = working_directory
        self._add_details(command=command, working_directory=working_directory)
