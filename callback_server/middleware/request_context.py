"""
RequestContext Middleware - Adds request tracking to all requests.

This middleware adds the following to every request:
- request_id: Unique ID for request tracing
- ip_address: Client IP address
- user_agent: Client user agent string

The request_id is also bound into structlog's context vars so every log line
emitted while handling the request carries it, and is returned to the client
in the X-Request-ID header.
"""

import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from callback_server.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Add request context to all incoming requests.

    Adds to request.state:
    - request_id: UUID for tracing this request
    - ip_address: Client IP address
    - user_agent: Client user agent string
    """

    async def dispatch(self, request: Request, call_next):
        """Process request and add context."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        # Loopback-only listener: no proxy headers to trust
        ip_address = request.client.host if request.client else None
        request.state.ip_address = ip_address

        user_agent = request.headers.get("user-agent")
        request.state.user_agent = user_agent

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            logger.debug(
                "Request started",
                method=request.method,
                path=request.url.path,
                ip_address=ip_address,
                user_agent=user_agent,
            )

            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id

        return response
