"""
Middleware components for request processing.

This package contains middleware for:
- Request context (request ID, IP address, user agent)
- Security headers
"""

from callback_server.middleware.request_context import RequestContextMiddleware
from callback_server.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
]
