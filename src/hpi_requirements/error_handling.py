"""
Error handling for hpi-requirements.

Failures are recorded as structured error contexts and logged to stderr
before they propagate. Nothing here swallows an exception: callers log
through the handler and then re-raise.
"""

import logging
import sys
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO, Any, Callable, Dict, List, Optional

import click


class ErrorLevel(Enum):
    """Error severity levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """Error categories for better classification."""

    PARSING = "PARSING"
    FILESYSTEM = "FILESYSTEM"
    VALIDATION = "VALIDATION"
    CONFIGURATION = "CONFIGURATION"


class UsageError(click.ClickException):
    """Raised when the command is invoked without a pom.xml path.

    The message goes to stdout, not click's usual "Error:" line on stderr.
    """

    exit_code = 1

    def show(self, file: Optional[IO[Any]] = None) -> None:
        click.echo(self.format_message(), file=file)


class MissingFieldError(ValueError):
    """A matching plugin dependency has no artifactId or version element."""

    def __init__(self, field_name: str, position: int, artifact_id: Optional[str] = None):
        self.field_name = field_name
        self.position = position
        self.artifact_id = artifact_id
        where = f"dependency #{position}"
        if artifact_id is not None:
            where += f" ({artifact_id})"
        super().__init__(f"Missing <{field_name}> in provided hpi {where}")


@dataclass
class ErrorContext:
    """Structured error context information."""

    level: ErrorLevel
    category: ErrorCategory
    message: str
    module: str
    function: str
    details: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None
    traceback_info: Optional[str] = None
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error context to dictionary for logging."""
        return {
            "level": self.level.value,
            "category": self.category.value,
            "message": self.message,
            "module": self.module,
            "function": self.function,
            "details": self.details,
            "exception_type": type(self.exception).__name__ if self.exception else None,
            "exception_message": str(self.exception) if self.exception else None,
            "traceback": self.traceback_info,
            "suggestions": self.suggestions,
        }


class DiagnosticLogger:
    """Logger for error contexts. Always writes to stderr."""

    def __init__(self, name: str, level: int = logging.WARNING):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        # stdout is reserved for generated code
        self.logger.propagate = False

    def log_error_context(self, context: ErrorContext) -> None:
        """
        Log error context with appropriate level.

        Args:
            context: Error context to log
        """
        log_data: Dict[str, Any] = {
            "category": context.category.value,
            "module": context.module,
            "function": context.function,
            "details": context.details,
        }

        if context.exception:
            log_data["exception"] = type(context.exception).__name__

        if context.suggestions:
            log_data["suggestions"] = context.suggestions

        log_level = getattr(logging, context.level.value)
        self.logger.log(log_level, f"{context.message} | {log_data}")


# Error callback type
ErrorCallback = Callable[[ErrorContext], None]


class ErrorHandler:
    """
    Centralized error handler.

    Records every reported error, logs it and notifies registered callbacks.
    """

    def __init__(
        self,
        logger_name: str = "hpi_requirements",
        log_level: int = logging.WARNING,
    ):
        self.logger = DiagnosticLogger(logger_name, log_level)
        self.error_callbacks: Dict[ErrorCategory, List[ErrorCallback]] = {}
        self.global_callbacks: List[ErrorCallback] = []
        self.error_stats: Dict[str, int] = {}

    def register_callback(
        self, callback: ErrorCallback, category: Optional[ErrorCategory] = None
    ) -> None:
        """
        Register error callback.

        Args:
            callback: Function to call on errors
            category: Error category to filter, None for all errors
        """
        if category is None:
            self.global_callbacks.append(callback)
        else:
            self.error_callbacks.setdefault(category, []).append(callback)

    def handle_error(
        self,
        level: ErrorLevel,
        category: ErrorCategory,
        message: str,
        module: str,
        function: str,
        exception: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> ErrorContext:
        """
        Record an error, log it and run callbacks.

        Returns:
            ErrorContext: The created error context
        """
        context = ErrorContext(
            level=level,
            category=category,
            message=message,
            module=module,
            function=function,
            details=details or {},
            exception=exception,
            traceback_info=traceback.format_exc() if exception else None,
            suggestions=suggestions or [],
        )

        stat_key = f"{category.value}_{level.value}"
        self.error_stats[stat_key] = self.error_stats.get(stat_key, 0) + 1

        self.logger.log_error_context(context)

        for callback in self.error_callbacks.get(category, []) + self.global_callbacks:
            callback(context)

        return context

    def warning(
        self,
        category: ErrorCategory,
        message: str,
        module: str,
        function: str,
        **kwargs,
    ) -> ErrorContext:
        """Handle warning level error."""
        return self.handle_error(
            ErrorLevel.WARNING, category, message, module, function, **kwargs
        )

    def error(
        self,
        category: ErrorCategory,
        message: str,
        module: str,
        function: str,
        **kwargs,
    ) -> ErrorContext:
        """Handle error level error."""
        return self.handle_error(
            ErrorLevel.ERROR, category, message, module, function, **kwargs
        )

    def critical(
        self,
        category: ErrorCategory,
        message: str,
        module: str,
        function: str,
        **kwargs,
    ) -> ErrorContext:
        """Handle critical level error."""
        return self.handle_error(
            ErrorLevel.CRITICAL, category, message, module, function, **kwargs
        )

    def get_error_stats(self) -> Dict[str, int]:
        """Get error statistics."""
        return self.error_stats.copy()

    def reset_stats(self) -> None:
        self.error_stats.clear()


# Global error handler instance. Built at import so its handler binds the
# process stderr.
_global_error_handler: Optional[ErrorHandler] = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _global_error_handler
    if _global_error_handler is None:
        _global_error_handler = ErrorHandler()
    return _global_error_handler


def setup_error_handling(
    log_level: int = logging.WARNING,
    logger_name: str = "hpi_requirements",
) -> ErrorHandler:
    """Replace the global error handler with a freshly configured one."""
    global _global_error_handler
    _global_error_handler = ErrorHandler(logger_name, log_level)
    return _global_error_handler


def log_parsing_error(
    message: str,
    module: str,
    function: str,
    file_path: Optional[str] = None,
    exception: Optional[BaseException] = None,
    category: ErrorCategory = ErrorCategory.PARSING,
) -> ErrorContext:
    """
    Convenience function for logging pom.xml read and parse failures.

    Args:
        message: Error message
        module: Module name
        function: Function name
        file_path: File being parsed
        exception: Optional exception
        category: PARSING for XML problems, FILESYSTEM for I/O problems
    """
    details = {}
    if file_path is not None:
        details["file_path"] = Path(file_path).name  # Only filename, not full path

    suggestions = {
        ErrorCategory.PARSING: [
            "Check that the file is well-formed XML",
            "Verify the pom.xml is not truncated",
        ],
        ErrorCategory.FILESYSTEM: [
            "Check the path to the Jenkins Enterprise WAR pom.xml",
            "Verify the file is readable",
        ],
    }.get(category, [])

    return get_error_handler().error(
        category,
        message,
        module,
        function,
        details=details,
        exception=exception,
        suggestions=suggestions,
    )
