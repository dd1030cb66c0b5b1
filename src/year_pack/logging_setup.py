import logging
import sys
import os

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO", format_type: str = "json", structured: bool = True
) -> None:
    """Configure structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_type: "json" for machine-readable logs, "human" for dev
        structured: Whether to add callsite details to every event
    """
    # Logs go to stderr so JSON written to stdout by the CLI stays parseable
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    is_dev = format_type == "human" or os.getenv("YEAR_PACK_LOG_HUMAN", "").lower() in (
        "1",
        "true",
        "yes",
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if structured:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "year_pack") -> FilteringBoundLogger:
    """Get a structured logger instance.

    Examples:
        log = get_logger(__name__)
        log.info("Topics extracted", year=2025, topics=5)
        log.warning("Skipping malformed record", line=12)
    """
    return structlog.get_logger(name)


def configure_from_settings(settings) -> None:
    """Apply the ``logging`` section of a loaded Settings object."""
    configure_logging(
        level=settings.logging.level,
        format_type=settings.logging.format,
        structured=settings.logging.structured,
    )
