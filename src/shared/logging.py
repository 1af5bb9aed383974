"""Logging configuration shared by all bounded contexts."""

import logging
import os

import structlog


def configure_logging(level: int = logging.INFO) -> None:
    """Configure structlog once per process.

    Production emits JSON lines; every other environment gets the console
    renderer.
    """
    production = os.environ.get("PROTEAN_ENV") == "production"
    renderer = structlog.processors.JSONRenderer() if production else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    # Suppress noisy library loggers
    logging.getLogger("protean").setLevel(logging.WARNING)
