"""Structured logging infrastructure.

Centralized logging configuration using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - truncate_request_values(): Processor capping raw request input

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    # At application startup
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("i18n_created", locales=["en", "it"])
"""

from infrastructure.logging.processors import truncate_request_values
from infrastructure.logging.setup import (
    build_processors,
    configure_logging,
    get_logger,
    get_module_logger,
)

__all__ = [
    "build_processors",
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "truncate_request_values",
]
