"""
Middleware components for request processing.

- Request context (request ID bound into structured logs, request timing)
"""

from app.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
