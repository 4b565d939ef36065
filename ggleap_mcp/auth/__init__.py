"""Auth module - GGLeap JWT lifecycle and authenticated requests."""

from .exceptions import (
    GGLeapError,
    AuthenticationError,
    ApiError,
    ToolArgumentError,
    TransportError,
)
from .client import (
    GGLeapAuth,
    configure,
    TOKEN_LIFETIME_SECONDS,
    REFRESH_THRESHOLD_SECONDS,
)


__all__ = [
    # Exceptions
    "GGLeapError",
    "AuthenticationError",
    "ApiError",
    "ToolArgumentError",
    "TransportError",
    # Client
    "GGLeapAuth",
    "configure",
    "TOKEN_LIFETIME_SECONDS",
    "REFRESH_THRESHOLD_SECONDS",
]
