from __future__ import annotations

import re
import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from secure_error_api.app.constants import REQUEST_ID_HEADER

_WELL_FORMED_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def resolve_request_id(raw: str | None) -> str:
    """Keep a well-formed inbound id; otherwise mint a fresh one."""
    candidate = (raw or "").strip()
    return candidate if _WELL_FORMED_ID.fullmatch(candidate) else uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Gives every request a correlation id that the log, the boundary and the client share."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # request.state is backed by the ASGI scope, so the error boundary sees it too.
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
