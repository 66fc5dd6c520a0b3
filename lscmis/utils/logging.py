# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for lscmis.

Services log through plain ``logging.getLogger(__name__)``; the request
middleware uses a structlog logger. Both kinds of record go through the
same processor chain and a single stdout handler, so request ids bound by
the middleware and the secret redaction apply to every line. Output is a
colored console rendering in development and one JSON object per line
elsewhere.

Example:
    >>> from lscmis.utils.logging import setup_logging, get_logger
    >>> from lscmis.core.config import get_settings
    >>> setup_logging(get_settings())
    >>> get_logger(__name__).info("center_provisioned", center_id="c-123")
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, MutableMapping

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from lscmis.core.config.settings import Settings

REDACTED = "***"
SENSITIVE_KEYS = frozenset({"password", "password_hash", "service_role_key", "authorization"})
HANDLER_NAME = "lscmis-stdout"

_QUIET_LIBRARIES = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "sqlalchemy.engine",
    "asyncpg",
    "asyncio",
)


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credential values bound to a log event."""
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_chain(settings: "Settings") -> list[Processor]:
    if settings.is_development or settings.debug:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(settings: "Settings") -> None:
    """Install the stdout handler and configure structlog.

    Safe to call more than once; the previous lscmis handler is replaced.

    Args:
        settings: Supplies log_level and the environment/debug flags that
            pick the renderer.
    """
    level = logging.getLevelName(settings.log_level)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(settings),
            ],
        )
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger that writes through the stdlib handler."""
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind request-scoped values (request_id, path) to subsequent log calls."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with bind_context.

    Called at the end of each request so values do not leak into the next
    one served by the same task.
    """
    structlog.contextvars.clear_contextvars()
