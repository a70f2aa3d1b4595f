#!/usr/bin/env python3
"""
Asana Lister Exception Classes

Closed exception hierarchy: transport failures (anything that went wrong
talking to Asana) and decode failures (a payload that does not fit the
model).
"""

from typing import Optional


class AsanaClientError(Exception):
    """Base exception for Asana lister errors"""

    pass


class AsanaTransportError(AsanaClientError):
    """Raised when a request to Asana fails (network or HTTP status)"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class AsanaAuthenticationError(AsanaTransportError):
    """Raised when authentication fails (401/403) or no token is configured"""

    pass


class AsanaRateLimitError(AsanaTransportError):
    """Raised when rate limit is exceeded (429)"""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message, status=429)
        self.retry_after = retry_after


class AsanaNotFoundError(AsanaTransportError):
    """Raised when resource is not found (404)"""

    pass


class AsanaValidationError(AsanaTransportError):
    """Raised when request parameters are invalid (400)"""

    pass


class AsanaServerError(AsanaTransportError):
    """Raised when server returns 5xx error"""

    pass


class AsanaDecodeError(AsanaClientError, ValueError):
    """Raised when a response payload cannot be decoded into a model"""

    pass
