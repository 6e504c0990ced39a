"""Centralized API response helpers for consistent JSON error shapes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from starlette.responses import JSONResponse

from secure_error_api.domain.error_messages import ErrorMessages


def api_error(
    status_code: int,
    message: str,
    *,
    request_id: str | None = None,
    extra: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Return a JSON error response with an optional correlation id and extra fields."""
    content: dict[str, Any] = {"message": message}
    if request_id is not None:
        content["request_id"] = request_id
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def redacted_error_response(
    *,
    request_id: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """The only body a client ever sees for an unhandled fault."""
    return api_error(
        500,
        ErrorMessages.UNEXPECTED_ERROR,
        request_id=request_id,
        headers=headers,
    )
