"""Loguru logging configuration.

Call setup_logging() once when the host application starts. All other
modules simply do `from loguru import logger` and log normally.
"""

import sys

from loguru import logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure loguru with a stderr sink and an optional rotating file sink.

    Args:
        level: Minimum log level (default INFO).
        log_file: Path of the rotating log file; no file sink when None.
    """
    # Remove the default stderr handler so we can reconfigure it
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    if log_file:
        logger.add(
            log_file,
            level=level,
            rotation="3 hours",
            retention="1 day",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        )
