"""
Logging configuration for form flows.

- Structured JSON logging for production
- Console rendering for local development
- Environment-aware log levels
"""

import logging
from typing import Optional

import structlog

from formflow.core.config import FormFlowSettings, settings as default_settings

_VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_structlog(settings: Optional[FormFlowSettings] = None) -> None:
    """
    Configure structlog on top of the stdlib logging integration
    so logger.info("event", key=val) works everywhere.
    """
    settings = settings or default_settings

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.environment == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]


def get_log_level(settings: Optional[FormFlowSettings] = None) -> str:
    """
    Get log level from settings with per-environment defaults.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    settings = settings or default_settings
    log_level = settings.log_level.upper()

    if log_level in _VALID_LEVELS:
        return log_level

    defaults = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return defaults.get(settings.environment, "INFO")


def configure_logging(settings: Optional[FormFlowSettings] = None) -> None:
    """
    Initialize logging for an application hosting form flows.

    Call once at startup. Configures both standard logging and structlog.
    """
    configure_structlog(settings)

    logging.getLogger().setLevel(get_log_level(settings))

    # redis client chatter
    logging.getLogger("redis").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("flow_started", flow="checkout", instance_id=session_id)
    """
    return structlog.get_logger(name)
