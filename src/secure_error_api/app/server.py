from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from secure_error_api._version import __version__
from secure_error_api.app.error_boundary import ErrorBoundary
from secure_error_api.app.middleware.request_id import RequestIdMiddleware
from secure_error_api.app.routes.error_demo import router as error_demo_router
from secure_error_api.app.routes.healthz import router as healthz_router
from secure_error_api.config.settings import Settings
from secure_error_api.observability.logger import ERRORS_LOGGER_NAME

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    log.info(
        "app.startup",
        environment=settings.app.environment.value,
        cors_origins=settings.cors.allow_origins,
    )
    yield
    log.info("app.shutdown")


def _wire_app(app: FastAPI, *, settings: Settings) -> None:
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
        allow_credentials=settings.cors.allow_credentials,
    )
    # Added last = outermost, so the request id is bound before anything else runs.
    app.add_middleware(RequestIdMiddleware)

    boundary = ErrorBoundary(
        environment=settings.app.environment,
        logger=structlog.get_logger(ERRORS_LOGGER_NAME),
        expose_request_id=settings.errors.expose_request_id,
    )
    app.add_exception_handler(Exception, boundary)

    app.include_router(healthz_router)
    app.include_router(error_demo_router)


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_mapping({})

    docs_enabled = settings.app.is_development
    app = FastAPI(
        title=settings.app.name,
        version=__version__,
        lifespan=lifespan,
        # Never let Starlette render its own traceback page; the boundary decides.
        debug=False,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    _wire_app(app, settings=settings)
    return app
