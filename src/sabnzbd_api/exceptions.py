"""
Exception hierarchy raised by the SABnzbd client.

Every failure of an API call surfaces as one of these, so callers can catch
``SabnzbdError`` or a specific subclass.
"""

from typing import Optional


class SabnzbdError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(SabnzbdError):
    """Raised when the host or API key is missing or malformed."""


class TransportError(SabnzbdError):
    """Raised when the server could not be reached or answered with a non-200 status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class DecodeError(SabnzbdError):
    """Raised when a response body is not valid JSON."""


class ProtocolError(SabnzbdError):
    """Raised when a decoded response lacks a field the operation requires."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
