"""Custom exceptions for GGLeap authentication and API calls."""

from httpx import TransportError


class GGLeapError(Exception):
    """Base exception for all GGLeap client errors."""
    
    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class AuthenticationError(GGLeapError):
    """Raised when the identity endpoint rejects the static auth token.
    
    Attributes:
        status_code: HTTP status code from the auth endpoint.
        status_text: HTTP reason phrase from the auth endpoint.
    """
    
    def __init__(self, status_code: int, status_text: str = ""):
        super().__init__(
            message=f"Failed to authenticate: {status_code} {status_text}",
            code="AUTHENTICATION_FAILED"
        )
        self.status_code = status_code
        self.status_text = status_text


class ApiError(GGLeapError):
    """Raised when the GGLeap API returns a non-success status.
    
    The body is kept as raw text; error bodies are not guaranteed to be JSON.
    
    Attributes:
        status_code: HTTP status code from the API.
        status_text: HTTP reason phrase from the API.
        body: Raw response body text.
    """
    
    def __init__(self, status_code: int, status_text: str = "", body: str = ""):
        super().__init__(
            message=f"API Error: {status_code} {status_text}\n{body}",
            code="API_ERROR"
        )
        self.status_code = status_code
        self.status_text = status_text
        self.body = body


class ToolArgumentError(GGLeapError):
    """Raised when a tool is called with unusable arguments."""
    
    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_ARGUMENTS")


__all__ = [
    "GGLeapError",
    "AuthenticationError",
    "ApiError",
    "ToolArgumentError",
    "TransportError",
]
