"""
Exception types raised by the CTechPay client.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "CTechPayError",
    "ConfigError",
    "ConfigurationMissing",
    "ResponseParseFailure",
    "ResponseReadFailure",
    "TransportFailure",
]


class CTechPayError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(CTechPayError, ValueError):
    """Raised when the supplied configuration is invalid."""


class ConfigurationMissing(ConfigError):
    """A merchant attribute was not set before a merchant order was requested."""


class TransportFailure(CTechPayError):
    """The order request could not be sent or no response arrived in time."""


class _ResponseError(CTechPayError):
    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResponseReadFailure(_ResponseError):
    """The response body could not be read completely."""


class ResponseParseFailure(_ResponseError):
    """The response body was not a JSON order response."""
