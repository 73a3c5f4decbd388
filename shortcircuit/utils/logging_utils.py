"""
Structured console logging for shortcircuit.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. ``setup_logging`` renders the ``shortcircuit``
logger namespace through structlog, with colored output, timestamps and
key-value context, without touching the root logger.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

LOGGER_NAMESPACE = "shortcircuit"


def setup_logging(level: str = "INFO", force_colors: bool | None = None) -> logging.Handler:
    """
    Configure structlog rendering for the shortcircuit loggers.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
        force_colors: Force color output (True/False) or auto-detect (None).

    Returns:
        The handler installed on the ``shortcircuit`` logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Context, level, logger name and time are all the package records carry
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_processor = structlog.dev.ConsoleRenderer(
        colors=force_colors if force_colors is not None else sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )

    # Records from plain logging.getLogger() loggers go through foreign_pre_chain
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            console_processor,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False
    return handler


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger inside the shortcircuit namespace.

    Example:
        >>> logger = get_logger("checks")
        >>> logger.info("aggregate settled", outcome="short_circuited", index=2)
    """
    if name is None:
        logger_name = LOGGER_NAMESPACE
    elif name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        logger_name = name
    else:
        logger_name = f"{LOGGER_NAMESPACE}.{name}"

    return structlog.get_logger(logger_name)


def bind_log_context(**kwargs: Any) -> None:
    """Bind key-value pairs included in every subsequent log record."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_log_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()
