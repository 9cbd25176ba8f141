from typing import Optional


class LoLAPIError(Exception):
    """Base exception for League of Legends API errors."""
    pass


class ConfigurationError(LoLAPIError, ValueError):
    """Raised when client configuration is missing or invalid."""
    pass


# Request building errors (raised before any I/O)

class RequestBuildError(LoLAPIError, ValueError):
    """Base exception for errors detected while building a request URI."""
    pass


class UnknownEndpoint(RequestBuildError):
    """Raised when an endpoint name is not in the registry."""

    def __init__(self, endpoint):
        self.endpoint = endpoint
        super().__init__(f"Unknown endpoint: {endpoint!r}")


class UnknownRegion(RequestBuildError):
    """Raised when a region code is outside the supported set."""

    def __init__(self, region):
        self.region = region
        super().__init__(f"Unknown region: {region!r}")


class InvalidParameterValue(RequestBuildError):
    """Raised when a parameter value cannot be serialized into a URI."""

    def __init__(self, name: str, value, reason: str = "unsupported value"):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for parameter {name!r}: {reason} ({value!r})")


# Transport and decoding errors

class TransportError(LoLAPIError):
    """Raised when the HTTP request fails or returns a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_line: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.status_line = status_line


class AuthenticationError(TransportError):
    """Raised when the API key is rejected (403)."""
    pass


class DataNotFoundError(TransportError):
    """Raised when requested data is not found (404)."""
    pass


class RateLimitError(TransportError):
    """Raised when the upstream rate limit is exceeded (429)."""

    def __init__(self, message: str, retry_after: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class DecodeError(LoLAPIError):
    """Raised when a response body is not valid JSON."""
    pass
