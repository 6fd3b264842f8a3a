"""Loguru setup shared by the API process and Celery workers."""

import sys

from loguru import logger

from seat_ledger.core.config import LOG_LEVEL

log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}:{function}:{line}</>",
        "{message}",
    )
)


def configure_logging(level: str = LOG_LEVEL) -> None:
    # Drop loguru's default stderr sink so records are not printed twice
    logger.remove()
    logger.add(sys.stdout, format=log_format, level=level.upper())
