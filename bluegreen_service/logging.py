"""
Logging configuration for the blue/green pool service.

Provides a consistent format across modules with:
- Human-readable output for development
- JSON line output for log shippers
- The pool tag on every record, so interleaved blue/green logs stay readable
"""

import json
import logging
import sys
from datetime import UTC, datetime

_pool_tag: str = "unknown"


class PoolFormatter(logging.Formatter):
    """
    Formatter that stamps an ISO timestamp and the pool identity.

    The pool is configured once at startup via setup_logging().
    """

    def format(self, record: logging.LogRecord) -> str:
        record.timestamp = datetime.now(UTC).isoformat()
        record.pool = _pool_tag
        return super().format(record)


class JsonPoolFormatter(PoolFormatter):
    """Formatter emitting one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        super().format(record)
        entry = {
            "timestamp": record.timestamp,
            "level": record.levelname,
            "module": record.name,
            "pool": record.pool,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    pool: str = "unknown",
) -> logging.Logger:
    """
    Configure logging for the service.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON lines
        pool: Pool identity tagged onto every record

    Returns:
        Configured root logger
    """
    global _pool_tag
    _pool_tag = pool

    root = logging.getLogger()
    root.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)

    if json_output:
        formatter: logging.Formatter = JsonPoolFormatter()
    else:
        formatter = PoolFormatter("%(timestamp)s | %(levelname)-8s | [%(pool)s] %(name)s | %(message)s")

    handler.setFormatter(formatter)
    root.addHandler(handler)

    # Access lines for every health check would drown the chaos transitions
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
