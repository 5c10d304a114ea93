"""Structured logging for the sequencer.

Every module logs through ``get_logger(__name__)`` with keyword context
(document ids, import sources, store operations). Exceptions can be passed
as plain keyword values (``error=e``); ``render_errors`` turns them into
strings and, for SequencerError, adds the error type and its context dict.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from sequencer.core.config import Config, get_config
from sequencer.core.exceptions import SequencerError

# Third-party loggers that are chatty at INFO (one line per HTTP request or
# per discovery-cache miss). They only log at WARNING unless we run at DEBUG.
QUIET_LOGGERS = ("httpx", "httpcore", "googleapiclient.discovery_cache", "aiosqlite")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp app name and environment on each event."""
    config = get_config()
    event_dict["app"] = config.app_name
    event_dict["env"] = config.app_env
    return event_dict


def render_errors(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Render exception values passed as keyword context.

    ``exc_info`` is left for the traceback processors. For a SequencerError
    the first one found also contributes ``error_type`` and
    ``error_context`` unless the call already set them.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary

    Returns:
        Event dictionary with exceptions replaced by their messages
    """
    for key, value in list(event_dict.items()):
        if key == "exc_info" or not isinstance(value, BaseException):
            continue
        event_dict[key] = str(value)
        if isinstance(value, SequencerError):
            details = value.to_dict()
            event_dict.setdefault("error_type", details["error_type"])
            if details["context"]:
                event_dict.setdefault("error_context", details["context"])
        else:
            event_dict.setdefault("error_type", type(value).__name__)
    return event_dict


def _renderers(config: Config) -> list[Processor]:
    if config.is_production:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
    ]


def setup_logging(config: Config | None = None) -> None:
    """Configure structlog over the standard library logging module.

    Production renders JSON lines; other environments render console
    output, with call sites added in development.

    Args:
        config: Settings to use (defaults to the cached application config)

    Example:
        >>> setup_logging()
        >>> logger = get_logger(__name__)
        >>> logger.info("Sequence saved", document_id="abc")
    """
    config = config or get_config()
    level = getattr(logging, config.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        render_errors,
    ]
    if config.is_development:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )
    processors.extend(_renderers(config))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger bound to ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)
