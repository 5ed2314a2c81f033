"""
Loguru logging configuration.

- Colored console output in development, JSON lines everywhere else
- Rotating file sink under logs/ (skipped in tests)
- Correlation ID on every record
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

    Args:
        record: Loguru log record.

    Returns:
        Always True (filter never drops messages).
    """
    record["extra"]["correlation_id"] = get_correlation_id() or "-"
    return True


def configure_logging(environment: str = "development", log_dir: str = "logs") -> None:
    """
    Configure Loguru for the application.

    Args:
        environment: "development" for colored console output, anything else for JSON.
        log_dir: Directory for the rotating file sink.
    """
    logger.remove()

    is_development = environment == "development"

    logger.add(
        sys.stderr,
        format=LOG_FORMAT if is_development else "{message}",
        level="DEBUG" if is_development else "INFO",
        filter=correlation_filter,
        colorize=is_development,
        serialize=not is_development,
    )

    if environment == "test":
        return

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger.add(
        f"{log_dir}/app.log",
        format=LOG_FORMAT if is_development else "{message}",
        level="INFO",
        filter=correlation_filter,
        rotation="10 MB",
        retention="7 days",
        serialize=not is_development,
    )
