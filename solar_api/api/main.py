"""
FastAPI application factory for the solar telemetry API.

Builds the app from a Settings instance constructed once at process start:
the token gate and request limits are stored on app.state, the database
engine is created in the lifespan, and the header sanitizer wraps the
ingestion routes.

CHANGELOG:
- 2026-10-18: Disable trailing-slash redirects
- 2026-10-17: Mount legacy router when LEGACY_ROUTES_ENABLED is set
- 2026-10-15: Register IngestError handler and MinimalHeadersMiddleware (STORY-009)
- 2026-10-14: Initial creation (STORY-001)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from solar_api.api.info import router as info_router
from solar_api.api.middleware import INGEST_PATH_PREFIX, MinimalHeadersMiddleware
from solar_api.api.solar import legacy_router
from solar_api.api.solar import router as solar_router
from solar_api.auth.token import TokenAuth
from solar_api.config import Settings
from solar_api.db.session import create_engine, create_session_factory
from solar_api.errors import AuthorizationError, IngestError

logger = logging.getLogger(__name__)


async def ingest_error_handler(request: Request, exc: IngestError) -> PlainTextResponse:
    """Render an IngestError as a short plain-text body with its status.

    Token denials are already logged by the gate; everything else is
    logged here with the internal detail, which never reaches the client.
    """
    if not isinstance(exc, AuthorizationError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log("Rejected %s with %d: %s", request.url.path, exc.status_code, exc.detail)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: database engine setup and disposal.

    Startup:
        - Creates the async engine and session factory if DATABASE_URL is set.

    Shutdown:
        - Disposes the engine.
    """
    settings: Settings = app.state.settings
    engine = None
    if settings.database_url:
        engine = create_engine(settings.database_url)
        app.state.session_factory = create_session_factory(engine)
    else:
        logger.warning("DATABASE_URL is not set; ingestion requests will fail")

    logger.info("Solar API ready")
    yield
    if engine is not None:
        await engine.dispose()
    logger.info("Solar API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.

    Returns:
        FastAPI: The configured application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Solar Telemetry API",
        description="Binary telemetry ingestion for solar charge-controller monitors.",
        version="2.0.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.auth = TokenAuth(settings.solar_backend_token)
    app.state.session_factory = None

    app.add_exception_handler(IngestError, ingest_error_handler)
    app.add_middleware(MinimalHeadersMiddleware, path_prefixes=(INGEST_PATH_PREFIX,))

    app.include_router(info_router)
    app.include_router(solar_router)
    if settings.legacy_routes_enabled:
        app.include_router(legacy_router)
        logger.info("Legacy POST %s route enabled", INGEST_PATH_PREFIX)

    return app
