"""ASGI middleware applied to every request."""

from app.middleware.parameter_pollution import ParameterPollutionMiddleware
from app.middleware.rate_limit import RateLimitMiddleware
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.request_size_limit import RequestSizeLimitMiddleware
from app.middleware.sanitize import SanitizeBodyMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.middleware.unhandled_errors import UnhandledErrorMiddleware

__all__ = [
    "ParameterPollutionMiddleware",
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "RequestSizeLimitMiddleware",
    "SanitizeBodyMiddleware",
    "SecurityHeadersMiddleware",
    "UnhandledErrorMiddleware",
]
