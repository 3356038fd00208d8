"""HTTP middleware for Ballotbox."""

from ballotbox.api.middleware.logging_middleware import LoggingMiddleware

__all__: list[str] = ["LoggingMiddleware"]
