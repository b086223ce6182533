"""Structured logging configuration for the registrar.

The registrar logs through structlog and never configures logging on import.
Applications call :func:`configure_logging` once at startup:

- Pretty console output by default
- JSON output when ``REGISTRAR_LOG_FORMAT=json``
- Level taken from ``REGISTRAR_LOG_LEVEL`` (default ``INFO``)

Usage:
    from registrar.logging import configure_logging, get_logger

    configure_logging()
    log = get_logger(__name__)
    log.info("loaders_registered", count=3)
"""

import logging
import os
import sys
from typing import Optional

import structlog
from structlog.types import Processor

__all__ = ["configure_logging", "get_logger"]

LOG_FORMAT_ENV_VAR = "REGISTRAR_LOG_FORMAT"
LOG_LEVEL_ENV_VAR = "REGISTRAR_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _get_renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(*, force_json: bool = False, level: Optional[int] = None) -> None:
    """Configure structlog and the standard library root logger.

    Subsequent calls reconfigure logging, replacing any handlers previously
    attached to the root logger.

    Args:
        force_json: Force JSON output regardless of ``REGISTRAR_LOG_FORMAT``.
        level: Override the log level. If None, reads ``REGISTRAR_LOG_LEVEL``.
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    structlog.configure(
        processors=[
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                _get_renderer(use_json),
            ],
            foreign_pre_chain=_get_shared_processors(),
        )
    )
    root_logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, named after the calling module by convention."""
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log
