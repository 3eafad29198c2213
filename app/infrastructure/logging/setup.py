"""Structlog configuration and logger setup.

Console output in development, JSON in production (PREFIX unset) and
nothing at all under pytest. Every entry carries the context variables
bound by LocaleMiddleware, so request logs include the resolved locale.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("locale_resolved", candidate="it-CH", locale="it")

Dependencies:
    - infrastructure.configuration.Settings
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import Settings
from infrastructure.configuration import settings as default_settings
from infrastructure.logging.processors import truncate_request_values


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def _silence() -> BoundLogger:
    # Calls keep working, the root level drops everything
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
    logging.root.setLevel(logging.CRITICAL + 1)
    return structlog.stdlib.get_logger()


def build_processors(prod_mode: bool, max_value_length: int) -> List[Any]:
    """Build the structlog processor chain.

    Args:
        prod_mode: Render JSON instead of colored console output.
        max_value_length: Truncation limit for raw request values.

    Returns:
        Processor list, renderer last.
    """
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        truncate_request_values(max_length=max_value_length),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        settings: Source of LOG_LEVEL, LOG_MAX_VALUE_LENGTH and
            is_production. Defaults to the module singleton.
        log_level: Optional override for log level (DEBUG, INFO, WARNING, etc).
        is_production: Optional override for production mode.

    Returns:
        Configured logger instance

    Example:
        logger = configure_logging(log_level="DEBUG", is_production=False)
    """
    if _is_test_environment():
        return _silence()

    settings = settings or default_settings
    prod_mode = settings.is_production if is_production is None else is_production

    structlog.configure(
        processors=build_processors(prod_mode, settings.LOG_MAX_VALUE_LENGTH),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger bound to name, or to the calling module name."""
    if name:
        return logger.bind(logger_name=name)

    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame else None
    module = inspect.getmodule(frame) if frame else None
    return logger.bind(logger_name=module.__name__ if module else "unknown")


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module.

    Binds component (last dotted part) and module_path, e.g.
    {"component": "matcher", "module_path": "infrastructure.i18n.matcher"}.
    """
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame else None
    module = inspect.getmodule(frame) if frame else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
