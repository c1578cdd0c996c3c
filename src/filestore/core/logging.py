"""Structured logging configuration for filestore.

structlog and stdlib logging share one handler on stderr. Stdlib records
go through the same ProcessorFormatter chain, so third-party loggers and
store events render in one format (JSON or console).
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

# Chatty at DEBUG; held at WARNING even when filestore runs in DEBUG mode
_NOISY_LOGGERS: tuple[str, ...] = (
    "dynaconf",
    "markdown_it",
)


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog and stdlib logging to stderr.

    Store events are keyword-style (``logger.debug("item_created",
    item_id=...)``), so the chain only adds level and timestamp before
    rendering.

    Args:
        json_output: Emit one JSON object per line instead of console text.
        level: Root log level (DEBUG, INFO, WARNING, ERROR).
    """
    log_level = getattr(logging, level.upper())

    pre_chain: list[Any] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    render_chain: list[Any]
    if json_output:
        render_chain = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        render_chain = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Caching off so tests can reconfigure
        cache_logger_on_first_use=False,
    )

    # stdout carries item content for `filestore get`
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[
                ProcessorFormatter.remove_processors_meta,
                *render_chain,
            ],
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    noisy_level = max(log_level, logging.WARNING)
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name`` (usually ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
