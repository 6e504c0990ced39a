from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from secure_error_api.app.server import create_app
from secure_error_api.config.load import load_settings
from secure_error_api.config.settings import Settings
from secure_error_api.observability.logger import configure_logging


def build_app(settings: Settings | None = None) -> FastAPI:
    """Install the operator log before the app exists, so startup is logged too."""
    if settings is None:
        settings = load_settings()
    configure_logging(settings.observability)
    return create_app(settings)


def main() -> int:
    app = build_app()
    server = app.state.settings.server
    # log_config=None keeps uvicorn on the operator log handler.
    uvicorn.run(app, host=server.host, port=server.port, log_config=None)
    return 0
