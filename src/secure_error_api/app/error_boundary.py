"""Global exception handler that turns any unhandled fault into a redacted 500."""

from __future__ import annotations

import sys
from typing import Any

import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse

from secure_error_api.app.constants import REQUEST_ID_HEADER
from secure_error_api.app.responses import api_error, redacted_error_response
from secure_error_api.config.settings import Environment
from secure_error_api.domain.error_event import ErrorEvent, qualified_type_name
from secure_error_api.domain.error_messages import ErrorCodes, ErrorMessages


def _report_logging_failure(event: ErrorEvent, failure: BaseException) -> None:
    try:
        print(
            f"{ErrorMessages.LOGGING_FAILED}: path={event.path} "
            f"request_id={event.request_id} cause={qualified_type_name(failure)}",
            file=sys.stderr,
        )
    except Exception:
        # Nothing left to report to; the client response must still go out.
        pass


class ErrorBoundary:
    """
    Last line of defense for request handling.

    Registered as the app-wide ``Exception`` handler, so Starlette calls it from its
    outermost middleware for faults raised by any route or middleware. It:

    - records the full fault (type, message, stack, path, timestamp) on the operator log,
    - answers with a fixed 500 body that carries nothing derived from the fault,
    - in development only, adds the fault diagnostics to that body.

    It never raises: a broken logger is reported on stderr and otherwise ignored.
    """

    def __init__(
        self,
        *,
        environment: Environment,
        logger: Any | None = None,
        expose_request_id: bool = False,
    ) -> None:
        self.environment = environment
        self.expose_request_id = expose_request_id
        self._log = logger if logger is not None else structlog.get_logger(__name__)

    async def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        event = ErrorEvent(
            exc=exc,
            path=str(request.scope.get("path", "")),
            method=str(request.scope.get("method", "")),
            request_id=getattr(request.state, "request_id", None),
        )
        self._record(event)

        headers = {REQUEST_ID_HEADER: event.request_id} if event.request_id else None
        if self.environment is Environment.DEVELOPMENT:
            response = self._diagnostic_response(event, headers)
            if response is not None:
                return response

        return redacted_error_response(
            request_id=event.request_id if self.expose_request_id else None,
            headers=headers,
        )

    def _record(self, event: ErrorEvent) -> None:
        try:
            self._log.error(
                ErrorCodes.UNHANDLED_EXCEPTION,
                exc_info=event.exc,
                **event.log_fields(),
            )
        except Exception as failure:
            _report_logging_failure(event, failure)

    def _diagnostic_response(
        self, event: ErrorEvent, headers: dict[str, str] | None
    ) -> JSONResponse | None:
        try:
            return api_error(
                500,
                ErrorMessages.UNEXPECTED_ERROR,
                request_id=event.request_id,
                extra={"path": event.path, "error": event.diagnostics()},
                headers=headers,
            )
        except Exception:
            # Fall back to the redacted body.
            return None
