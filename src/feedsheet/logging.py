"""Logging configuration using loguru.

Library modules log through loguru's ``logger`` and never configure sinks.
The CLI calls ``configure_logging`` once at startup.
"""

import logging
import sys

from loguru import logger


def configure_logging(log_level: str = "WARNING") -> None:
    """Configure loguru for command-line use.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    _intercept_standard_logging(log_level)


def _intercept_standard_logging(log_level: str) -> None:
    """Route standard library logging (httpx, httpcore) to loguru."""

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where the logged message originated
            frame, depth = logging.currentframe(), 2
            while frame and frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

    logging.basicConfig(handlers=[InterceptHandler()], level=log_level, force=True)

    for name in ["httpx", "httpcore"]:
        logging.getLogger(name).setLevel(log_level)
        logging.getLogger(name).handlers = [InterceptHandler()]
