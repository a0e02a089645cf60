"""
Security Headers Middleware - Add security headers to all responses.

The callback pages carry an authorization code, so responses must not be
framed, cached or leaked through the Referer header. The pages load nothing
external; the only script and style are inline.

Headers added:
1. Content-Security-Policy (CSP) - inline script/style only
2. X-Frame-Options - Prevents clickjacking
3. X-Content-Type-Options - Prevents MIME sniffing
4. Referrer-Policy - Never send the callback URL (it contains the code) onward
5. Cache-Control - Keep codes out of the browser cache

Usage:
    from callback_server.middleware.security_headers import SecurityHeadersMiddleware

    app.add_middleware(SecurityHeadersMiddleware)
"""

from starlette.middleware.base import BaseHTTPMiddleware

from callback_server.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

CONTENT_SECURITY_POLICY = (
    "default-src 'none'; "
    "script-src 'unsafe-inline'; "
    "style-src 'unsafe-inline'; "
    "frame-ancestors 'none'; "
    "base-uri 'none'; "
    "form-action 'none'"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all HTTP responses."""

    def __init__(self, app):
        super().__init__(app)
        logger.debug("Security headers middleware initialized")

    async def dispatch(self, request, call_next):
        response = await call_next(request)

        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cache-Control"] = "no-store"

        return response
