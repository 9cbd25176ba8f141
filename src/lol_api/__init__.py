"""Python wrapper around the Riot Games League of Legends API."""

__version__ = "0.1.0"

from .config import ClientConfig, Config
from .endpoints import ENDPOINTS, Endpoint, EndpointSpec, PathStrategy, build_request, get_spec
from .errors import (
    AuthenticationError,
    ConfigurationError,
    DataNotFoundError,
    DecodeError,
    InvalidParameterValue,
    LoLAPIError,
    RateLimitError,
    RequestBuildError,
    TransportError,
    UnknownEndpoint,
    UnknownRegion,
)
from .rate_limiter import RateLimiter
from .regions import REGIONS, RegionInfo, resolve
from .client import LeagueOfLegendsClient

__all__ = [
    "ENDPOINTS",
    "REGIONS",
    "AuthenticationError",
    "ClientConfig",
    "Config",
    "ConfigurationError",
    "DataNotFoundError",
    "DecodeError",
    "Endpoint",
    "EndpointSpec",
    "InvalidParameterValue",
    "LeagueOfLegendsClient",
    "LoLAPIError",
    "PathStrategy",
    "RateLimitError",
    "RateLimiter",
    "RegionInfo",
    "RequestBuildError",
    "TransportError",
    "UnknownEndpoint",
    "UnknownRegion",
    "build_request",
    "get_spec",
    "resolve",
]
