from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from secure_error_api._version import __version__

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz(request: Request) -> dict[str, str]:
    settings = request.app.state.settings
    body = {
        "status": "ok",
        "time": datetime.now(UTC).isoformat(),
        "environment": settings.app.environment.value,
    }
    if not settings.observability.healthz_omit_version:
        body.update(service=settings.app.name, version=__version__)
    return body
