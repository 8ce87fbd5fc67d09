"""Structured logging for the dashboard core, built on structlog over stdlib logging."""

import logging
import os

import structlog


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Route structlog events through a single stdlib root handler.

    log_format is "console" (default) or "json"; when omitted it is read from
    the LOG_FORMAT environment variable. Context bound with bind_context()
    is merged into every event emitted from the same asyncio task.
    """
    log_format = (log_format or os.environ.get("LOG_FORMAT", "console")).lower()

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def bind_context(**values: object) -> None:
    """Attach key/value context to all log events of the current task."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context(*keys: str) -> None:
    """Remove previously bound context keys."""
    structlog.contextvars.unbind_contextvars(*keys)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)
