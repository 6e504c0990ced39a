"""ASGI entry point: ``uvicorn secure_error_api.asgi:app``."""
from __future__ import annotations

from secure_error_api.runtime import build_app

app = build_app()
