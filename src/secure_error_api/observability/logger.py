"""
The operator log.

Every structlog and stdlib record, uvicorn's included, is rendered onto one stream
(stdout by default). This is the only place fault detail is written: the
`secure_error_api.errors` logger emits one `http.unhandled_exception` record per fault,
carrying path, method, request id, exception type, message and the formatted stack.
Records are written as logged; nothing is rewritten on the way out.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from secure_error_api.config.settings import ObservabilitySettings

ERRORS_LOGGER_NAME = "secure_error_api.errors"

# uvicorn's own report of an exception that escaped the app. Starlette re-raises after the
# error boundary has answered, so the same fault would otherwise be logged twice.
_ASGI_EXCEPTION_PREFIX = "Exception in ASGI application"


class DropReraisedAppExceptions(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not record.getMessage().startswith(_ASGI_EXCEPTION_PREFIX)


def _renderer(observability: ObservabilitySettings) -> Any:
    log_format = observability.log_format or ("json" if observability.json_logs else "human")
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    observability: ObservabilitySettings, *, stream: TextIO | None = None
) -> logging.Handler:
    """Install the operator log handler on the root logger and return it."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        # Renders exc_info into an `exception` string so both renderers show the stack.
        structlog.processors.format_exc_info,
    ]

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processor=_renderer(observability),
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(observability.log_level.upper())

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True
    uvicorn_errors = logging.getLogger("uvicorn.error")
    if not any(isinstance(f, DropReraisedAppExceptions) for f in uvicorn_errors.filters):
        uvicorn_errors.addFilter(DropReraisedAppExceptions())

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return handler
