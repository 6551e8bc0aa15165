"""
Structured logging for moviegraph.

Every log line carries the id of the operation that produced it and, when the
caller identified itself, the caller id. Both live in context variables so
they follow the operation across awaits.
"""

import base64
import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

# Third-party loggers that drown out operation logs at INFO
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")


class RequestContextFilter:
    """structlog processor that stamps request and user ids onto each event."""

    fields = (("request_id", request_id_ctx), ("user_id", user_id_ctx))

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        _ = logger, method_name
        for key, var in self.fields:
            value = var.get()
            if value:
                event_dict.setdefault(key, value)
        return event_dict


def _resolve_level(debug: bool, log_level: str | None) -> int:
    if not log_level:
        return logging.DEBUG if debug else logging.INFO
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Configure structlog over the standard library.

    Args:
        debug: Render colored console output instead of JSON lines
        log_level: Level name; overrides the level implied by ``debug``
    """
    level = _resolve_level(debug, log_level)
    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s", force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            RequestContextFilter(),
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Return a 14-character url-safe id: microsecond timestamp plus two random bytes."""
    stamp = int(time.time() * 1_000_000).to_bytes(8, byteorder="big")
    raw = stamp + secrets.token_bytes(2)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> str:
    """Bind the operation's ids to the logging context.

    A request id is generated when none is given. The user id is left as is
    when ``user_id`` is None.

    Returns:
        The bound request id
    """
    request_id = request_id or generate_request_id()
    request_id_ctx.set(request_id)
    if user_id is not None:
        user_id_ctx.set(user_id)
    return request_id


def clear_request_context() -> None:
    request_id_ctx.set(None)
    user_id_ctx.set(None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def get_user_id() -> str | None:
    return user_id_ctx.get()
