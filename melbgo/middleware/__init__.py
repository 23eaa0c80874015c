"""HTTP middleware for the trip API"""
from .security_headers import SecurityHeadersMiddleware
from .timeout import CustomTimeoutMiddleware

__all__ = ["SecurityHeadersMiddleware", "CustomTimeoutMiddleware"]
