"""
FastAPI application for the OAuth callback server.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from callback_server.config import Settings, settings as default_settings
from callback_server.infrastructure.observability.logging import get_logger, log_request
from callback_server.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from callback_server.routes import callback

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Announce the callback URL on startup and log the shutdown."""
    app_settings: Settings = app.state.settings

    logger.info(
        "OAuth callback server running",
        url=app_settings.base_url(),
        environment=app_settings.environment,
        debug=app_settings.debug,
    )
    logger.info("Callback URL", callback_url=app_settings.callback_url())
    logger.info("Press Ctrl+C to stop the server")

    yield

    logger.info("Shutting down OAuth callback server")
    logger.info("Server stopped")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application around the given (or process-wide) settings."""
    app_settings = app_settings or default_settings

    # Docs routes are disabled: every path other than the callback must 404
    app = FastAPI(
        title="OAuth Callback Server",
        description="Displays OAuth 2.0 authorization codes for manual copy-paste",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = app_settings

    app.include_router(callback.router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log HTTP requests with timing."""
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000

        log_request(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(process_time, 2),
            request_id=getattr(request.state, "request_id", None),
        )
        return response

    # Added last so it runs first and request_id is set for the layers above
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)

    return app


app = create_app()
