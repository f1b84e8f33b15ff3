"""structlog setup for the web client.

Console rendering while developing, JSON lines in production. Every event
carries the browser's ``user_id`` once a profile is loaded and the ``page``
being rendered, and never a bearer token or password.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from invierte_ya_web.config import Settings, get_settings

_SECRET_KEYS = ("token", "access_token", "password", "authorization")

# request lines from httpx carry URLs; uvicorn.access repeats every page hit
_QUIET_LOGGERS = ("httpcore", "httpx", "uvicorn.access", "watchfiles", "asyncio")


def _drop_secrets(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
    for key in _SECRET_KEYS:
        if key in event_dict:
            event_dict[key] = "***"
    return event_dict


def _stamp_deployment(_logger: Any, method: str, event_dict: EventDict) -> EventDict:
    settings = get_settings()
    event_dict["level"] = "WARNING" if method == "warn" else method.upper()
    event_dict["app"] = settings.app_name
    event_dict["environment"] = settings.environment.value
    return event_dict


def _processors(log_format: str) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        _drop_secrets,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        return [
            *shared,
            _stamp_deployment,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [
        *shared,
        structlog.stdlib.add_log_level,
        structlog.dev.ConsoleRenderer(
            colors=True, exception_formatter=structlog.dev.plain_traceback
        ),
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Install the structlog pipeline. Called once by ``run()`` and the CLI."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.value)

    structlog.configure(
        processors=_processors(settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(settings.log_file)
        handler.setLevel(level)
        logging.getLogger().addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


class LogContext:
    """Bind keys for the duration of a page render."""

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs

    def __enter__(self) -> "LogContext":
        bind_context(**self.kwargs)
        return self

    def __exit__(self, *args: Any) -> None:
        unbind_context(*self.kwargs.keys())
