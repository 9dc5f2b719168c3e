"""Structured logging for period_agg."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

import orjson

# Correlates every record emitted by one process
RUN_ID = uuid.uuid4().hex[:8]

ROOT_LOGGER = "period_agg"


class StructuredFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "run_id": RUN_ID,
            "module": record.name,
        }

        if hasattr(record, "operation"):
            payload["operation"] = record.operation
        if hasattr(record, "duration_ms"):
            payload["duration_ms"] = round(record.duration_ms, 3)
        if hasattr(record, "extra_fields"):
            payload.update(record.extra_fields)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return orjson.dumps(payload, default=str).decode()


def setup_logging(level: str = "WARNING", structured: bool = True) -> logging.Logger:
    """
    Configure the ``period_agg`` logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON records instead of plain text

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric_level)

    # stderr keeps stdout free for query output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)

    formatter: logging.Formatter
    if structured:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the package logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    duration_ms: Optional[float] = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """
    Log an operation with optional timing and context fields.

    Args:
        logger: Logger to emit on
        operation: Operation name
        duration_ms: Duration in milliseconds
        level: Logging level of the record
        **extra_fields: Additional fields merged into the structured payload
    """
    if not logger.isEnabledFor(level):
        return

    record = logger.makeRecord(
        name=logger.name,
        level=level,
        fn="",
        lno=0,
        msg=f"Operation: {operation}",
        args=(),
        exc_info=None,
    )
    record.operation = operation
    if duration_ms is not None:
        record.duration_ms = duration_ms
    if extra_fields:
        record.extra_fields = extra_fields

    logger.handle(record)
