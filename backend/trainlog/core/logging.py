"""
Structured logging configuration.
"""
import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog
from structlog.types import Processor

from trainlog.core.config import Settings, settings as default_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure structured logging for the application."""
    settings = settings or default_settings

    # Common processors
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == "json":
        # JSON format for production
        renderer = structlog.processors.JSONRenderer()
    else:
        # Console format for development
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    # Replace handlers so repeated app startups (tests) don't duplicate output
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class OperationTracker:
    """Collects context for a single tracked operation."""

    def __init__(self, operation: str, context: dict[str, Any]):
        self.operation = operation
        self.context = dict(context)
        self.start_time = 0.0
        self.duration_ms = 0.0
        self.success = True
        self.missing = False
        self.error_type: Optional[str] = None
        self.error_message: Optional[str] = None

    def bind(self, **context: Any) -> None:
        """Attach extra fields to the completion log line."""
        self.context.update(context)

    def fail(self, error_type: str, error_message: str) -> None:
        """Mark the operation as failed without raising."""
        self.success = False
        self.error_type = error_type
        self.error_message = error_message

    def not_found(self, **context: Any) -> None:
        """Mark the target as missing; logged as a warning, not a failure."""
        self.missing = True
        self.context.update(context)


@contextmanager
def track_operation(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    **context: Any
) -> Generator[OperationTracker, None, None]:
    """
    Log duration and outcome of an operation.

    Usage:
        with track_operation(logger, "workout.update", workout_id=id) as op:
            ...
            op.bind(exercise_count=3)

    Exceptions propagate after being logged.
    """
    tracker = OperationTracker(operation, context)
    tracker.start_time = time.perf_counter()
    try:
        yield tracker
    except Exception as e:
        tracker.missing = False
        tracker.fail(type(e).__name__, str(e))
        raise
    finally:
        tracker.duration_ms = (time.perf_counter() - tracker.start_time) * 1000
        if tracker.missing:
            logger.warning(
                f"{operation} target not found",
                duration_ms=round(tracker.duration_ms, 2),
                **tracker.context,
            )
        elif tracker.success:
            logger.info(
                f"{operation} completed",
                duration_ms=round(tracker.duration_ms, 2),
                **tracker.context,
            )
        else:
            logger.error(
                f"{operation} failed",
                duration_ms=round(tracker.duration_ms, 2),
                error_type=tracker.error_type,
                error_message=tracker.error_message,
                **tracker.context,
            )
