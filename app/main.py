"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See app.core.lifespan and app.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.infrastructure.external.storage.local_storage import MEDIA_URL_PATH
from app.middleware import (
    CorrelationIDMiddleware,
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from app.schemas.health import RootResponse
from app.shared.telemetry import TelemetryConfig, setup_logging

DOCS_PREFIX = "/api/documents"


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
        docs_url=f"{DOCS_PREFIX}/swagger",
        redoc_url=f"{DOCS_PREFIX}/redoc",
        openapi_url=f"{DOCS_PREFIX}/json",
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Outermost first: timeout → size limit →
    # request ID → correlation ID → security headers → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware, csp_exempt_prefixes=(DOCS_PREFIX,))
    app.add_middleware(
        CorrelationIDMiddleware,
        header_name=settings.correlation_id_header,
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_upload_size)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    # Instrumented here, before the middleware stack is built on first request.
    app.state.telemetry = None
    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.instrument(app)
        app.state.telemetry = telemetry

    if settings.storage_backend == "local":
        app.mount(
            MEDIA_URL_PATH,
            StaticFiles(directory=settings.storage_root, check_dir=False),
            name="media",
        )

    @app.get("/", response_model=RootResponse, include_in_schema=False)
    def root() -> RootResponse:
        """Welcome message with links to the API documentation."""
        return RootResponse(
            message=f"Welcome to the {settings.app_name} API",
            version=settings.app_version,
            docs={
                "swagger": f"{DOCS_PREFIX}/swagger",
                "redoc": f"{DOCS_PREFIX}/redoc",
                "openapi": f"{DOCS_PREFIX}/json",
            },
        )

    return app


app = create_app()
