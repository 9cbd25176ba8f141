"""Endpoint registry and URI builder for the League of Legends API.

Base URLs:
- Versioned endpoints: https://<region>.api.pvp.net/api/lol/<region>/v<version>/...
- Static data:         https://<region>.api.pvp.net/api/lol/static-data/<region>/v<version>/...
- Live game:           https://<region>.api.pvp.net/observer-mode/rest/consumer/getSpectatorGameInfo/<platform>
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

import requests

from .config import ClientConfig
from .errors import InvalidParameterValue, UnknownEndpoint
from .regions import resolve

RESERVED_PARAMETERS = ("by", "id", "type")


class Endpoint(str, Enum):
    CHAMPION = "champion"
    CURRENT_GAME = "current_game"
    GAME = "game"
    LEAGUE = "league"
    MATCH = "match"
    MATCHLIST = "matchlist"
    STATIC_DATA = "static_data"
    STATS = "stats"
    SUMMONER = "summoner"
    TEAM = "team"


class PathStrategy(str, Enum):
    STANDARD = "standard"
    STATIC_DATA = "staticData"
    LIVE_GAME = "liveGame"


@dataclass(frozen=True)
class EndpointSpec:
    endpoint: Endpoint
    version: str
    strategy: PathStrategy

    @property
    def path_name(self) -> str:
        """Endpoint name as it appears in a URL path."""
        return self.endpoint.value.replace("_", "-")


ENDPOINTS: Dict[Endpoint, EndpointSpec] = {
    spec.endpoint: spec
    for spec in (
        EndpointSpec(Endpoint.CHAMPION, "1.2", PathStrategy.STANDARD),
        EndpointSpec(Endpoint.CURRENT_GAME, "1.0", PathStrategy.LIVE_GAME),
        EndpointSpec(Endpoint.GAME, "1.3", PathStrategy.STANDARD),
        EndpointSpec(Endpoint.LEAGUE, "2.5", PathStrategy.STANDARD),
        EndpointSpec(Endpoint.MATCH, "2.2", PathStrategy.STANDARD),
        EndpointSpec(Endpoint.MATCHLIST, "2.2", PathStrategy.STANDARD),
        EndpointSpec(Endpoint.STATIC_DATA, "1.2", PathStrategy.STATIC_DATA),
        EndpointSpec(Endpoint.STATS, "1.3", PathStrategy.STANDARD),
        EndpointSpec(Endpoint.SUMMONER, "1.4", PathStrategy.STANDARD),
        EndpointSpec(Endpoint.TEAM, "2.4", PathStrategy.STANDARD),
    )
}


def get_spec(endpoint: Union[Endpoint, str]) -> EndpointSpec:
    """Look up the registry entry for an endpoint.

    Args:
        endpoint: Endpoint member or its name (e.g. "static_data")

    Returns:
        Registered EndpointSpec

    Raises:
        UnknownEndpoint: If the name is not registered
    """
    try:
        return ENDPOINTS[Endpoint(endpoint)]
    except (ValueError, KeyError):
        raise UnknownEndpoint(endpoint) from None


# Parameter serialization

def _scalar_to_str(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidParameterValue(name, value, "not a finite number")
        return str(value)
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidParameterValue(name, value, "not encodable as UTF-8") from None
        return value
    raise InvalidParameterValue(name, value)


def _query_value(name: str, value: Any) -> Union[str, List[str]]:
    # Sequences become repeated query keys
    if isinstance(value, (list, tuple)):
        return [_scalar_to_str(name, item) for item in value]
    return _scalar_to_str(name, value)


def _path_segment(name: str, value: Any) -> str:
    return quote(_scalar_to_str(name, value), safe="")


# Path strategies
#
# Each handler receives a private copy of the call parameters, removes the
# ones it consumes as path segments and returns the URL without query string.

def _reserved_segments(params: Dict[str, Any]) -> List[str]:
    # Upstream routes are positional: by, then id, then type
    segments = []
    for name in RESERVED_PARAMETERS:
        if name in params:
            segment = _path_segment(name, params.pop(name))
            segments.append("by-" + segment if name == "by" else segment)
    return segments


def _standard_path(spec: EndpointSpec, params: Dict[str, Any], config: ClientConfig) -> str:
    url = f"{config.base_url}/api/lol/{config.region}/v{spec.version}/{spec.path_name}"
    for segment in _reserved_segments(params):
        url += "/" + segment
    return url


def _static_data_path(spec: EndpointSpec, params: Dict[str, Any], config: ClientConfig) -> str:
    root = f"{config.base_url}/api/lol/static-data/{config.region}/v{spec.version}/"

    # "type" names the static data resource instead of trailing the path
    segments = []
    if "type" in params:
        segments.append(_path_segment("type", params.pop("type")))
    segments.extend(_reserved_segments(params))
    return root + "/".join(segments)


def _live_game_path(spec: EndpointSpec, params: Dict[str, Any], config: ClientConfig) -> str:
    # Unversioned; by/id/type are left for the query string
    platform_id = resolve(config.region).platform_id
    return (
        f"{config.base_url}/observer-mode/rest/consumer/getSpectatorGameInfo/"
        f"{platform_id}"
    )


STRATEGY_HANDLERS: Dict[
    PathStrategy, Callable[[EndpointSpec, Dict[str, Any], ClientConfig], str]
] = {
    PathStrategy.STANDARD: _standard_path,
    PathStrategy.STATIC_DATA: _static_data_path,
    PathStrategy.LIVE_GAME: _live_game_path,
}


def build_request(
    endpoint: Union[Endpoint, str],
    params: Optional[Mapping[str, Any]],
    config: ClientConfig
) -> str:
    """Build the full request URI for an API call.

    The API key is always the first query parameter. Parameters not consumed
    as path segments follow, sorted by name.

    Args:
        endpoint: Endpoint member or name (e.g. "summoner")
        params: Call parameters; "by", "id" and "type" become path segments
                for endpoints that use them
        config: Client configuration (API key, region, base URL)

    Returns:
        Fully qualified URI including query string

    Raises:
        UnknownEndpoint: If the endpoint is not registered
        UnknownRegion: If the configured region has no platform entry
        InvalidParameterValue: If a parameter value cannot be serialized

    Example:
        >>> build_request("static_data", {"type": "champion", "id": 1, "dataById": 1}, config)
        'https://na.api.pvp.net/api/lol/static-data/na/v1.2/champion/1?api_key=...&dataById=1'
    """
    spec = get_spec(endpoint)
    remaining = dict(params or {})

    for name in remaining:
        if not isinstance(name, str):
            raise InvalidParameterValue(repr(name), remaining[name], "parameter names must be strings")
        if name == "api_key":
            raise InvalidParameterValue(name, remaining[name], "the API key comes from the client config")

    url = STRATEGY_HANDLERS[spec.strategy](spec, remaining, config)

    query: List[Tuple[str, Union[str, List[str]]]] = [("api_key", config.api_key)]
    query.extend(
        (name, _query_value(name, remaining[name]))
        for name in sorted(remaining)
    )

    return requests.Request("GET", url, params=query).prepare().url
