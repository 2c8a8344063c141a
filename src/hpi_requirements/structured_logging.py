"""
Structured logging configuration for hpi-requirements.

Events are emitted as JSON objects on stderr; stdout carries only the
generated require(...) lines.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_RESERVED_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    ]
)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", record.name),
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class GeneratorLogger:
    """Structured logger for generation events."""

    def __init__(self, name: str = "hpi_requirements.generator"):
        self.logger = logging.getLogger(name)
        self.handler = logging.StreamHandler(sys.stderr)
        self._setup_logger()
        self.context: Dict[str, Any] = {}

    def _setup_logger(self) -> None:
        """Setup logger with structured formatting."""
        if not self.logger.handlers:
            self.handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(self.handler)
            self.logger.setLevel(logging.WARNING)
        self.logger.propagate = False

    def set_context(self, file_path: Optional[str] = None) -> None:
        """Attach the pom being processed to every following event."""
        self.context = {}
        if file_path:
            self.context["file_path"] = file_path

    def clear_context(self) -> None:
        self.context.clear()

    def _log(self, level: str, event_type: str, **kwargs) -> None:
        log_data = {"event_type": event_type, **self.context, **kwargs}
        getattr(self.logger, level)(event_type, extra=log_data)

    def info(self, event_type: str, **kwargs) -> None:
        """Log info level event."""
        self._log("info", event_type, **kwargs)

    def debug(self, event_type: str, **kwargs) -> None:
        """Log debug level event."""
        self._log("debug", event_type, **kwargs)


_generator_logger = GeneratorLogger()


def get_generator_logger() -> GeneratorLogger:
    return _generator_logger


def log_pom_parsed(file_path: str, total_dependencies: int) -> None:
    """Log that a pom was read and how many <dependency> entries it holds."""
    logger = get_generator_logger()
    logger.set_context(file_path)
    logger.info("pom_parsed", total_dependencies=total_dependencies)


def log_dependency_skipped(
    artifact_id: Optional[str], scope: Optional[str], dep_type: Optional[str]
) -> None:
    get_generator_logger().debug(
        "dependency_skipped", artifact_id=artifact_id, scope=scope, dep_type=dep_type
    )


def log_requirements_generated(count: int) -> None:
    """Log completion and drop the per-file context."""
    logger = get_generator_logger()
    logger.info("requirements_generated", requirement_count=count)
    logger.clear_context()


def configure_logging(
    log_level: str = "WARNING", enable_json: bool = True, log_format: Optional[str] = None
) -> None:
    """Configure logging for the application."""
    level = getattr(logging, log_level.upper(), logging.WARNING)

    logging.getLogger("hpi_requirements").setLevel(level)

    logger = get_generator_logger()
    logger.logger.setLevel(level)
    if enable_json:
        logger.handler.setFormatter(StructuredFormatter())
    else:
        logger.handler.setFormatter(
            logging.Formatter(log_format or "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
