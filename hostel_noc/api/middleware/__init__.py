"""HTTP middleware for the NOC API."""

from hostel_noc.api.middleware.logging_middleware import LoggingMiddleware

__all__: list[str] = ["LoggingMiddleware"]
