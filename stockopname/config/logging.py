"""
structlog setup for the stock opname service.

Events pass through a redaction step before rendering so credentials and
captured signature images never land in log output.
"""

import logging
import sys
from collections.abc import Iterable
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from stockopname.config.settings import Settings, get_settings

REDACTED = "[redacted]"


def redact_keys(keys: Iterable[str]) -> Processor:
    """Build a processor that masks the given event keys."""
    hidden = frozenset(keys)

    def _redact(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        for key in hidden.intersection(event_dict):
            event_dict[key] = REDACTED
        return event_dict

    return _redact


def service_context(settings: Settings) -> Processor:
    """Build a processor stamping service name, version and environment."""
    context: dict[str, Any] = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }

    def _stamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return _stamp


def build_processors(settings: Settings) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        service_context(settings),
        redact_keys(settings.log.redact_keys),
    ]
    if settings.renders_json:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    return chain


def configure_logging(settings: Settings | None = None) -> None:
    """Install the structlog chain and route stdlib logging to stdout."""
    settings = settings or get_settings()

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=settings.log.level)

    for chatty in ("aiosqlite", "uvicorn.access"):
        logging.getLogger(chatty).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
