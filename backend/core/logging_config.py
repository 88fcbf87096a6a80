"""
Loguru logging configuration.

Features:
- Console logging for development, JSON lines for production
- Correlation ID in all log messages
- Rotating file sink (skipped in tests)
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from core.correlation import get_correlation_id

if TYPE_CHECKING:
    from loguru import Record

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[correlation_id]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def correlation_filter(record: "Record") -> bool:
    """
    Add correlation ID to log record.

    Returns:
        Always True (filter never drops messages).
    """
    record["extra"]["correlation_id"] = get_correlation_id() or "-"
    return True


def configure_logging(environment: str = "development", logs_dir: str = "logs") -> None:
    """
    Configure Loguru for the application.

    Args:
        environment: "development"/"test" for console, anything else for JSON.
        logs_dir: Directory for the rotating file sink.
    """
    # Remove default handler
    logger.remove()

    human_readable = environment in ("development", "test")

    if human_readable:
        logger.add(
            sys.stderr,
            format=LOG_FORMAT,
            level="DEBUG",
            filter=correlation_filter,
            colorize=True,
        )
    else:
        # JSON format for production (machine-parseable)
        logger.add(
            sys.stderr,
            format="{message}",
            level="INFO",
            filter=correlation_filter,
            serialize=True,
        )

    if environment == "test":
        return

    log_path = Path(logs_dir)
    log_path.mkdir(exist_ok=True)

    logger.add(
        str(log_path / "app.log"),
        format=LOG_FORMAT if human_readable else "{message}",
        level="INFO",
        filter=correlation_filter,
        rotation="10 MB",
        retention="7 days",
        serialize=not human_readable,
    )
