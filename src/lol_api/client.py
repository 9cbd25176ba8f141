import logging
from typing import Any, Dict, Mapping, Optional, Union
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import __version__
from .config import ClientConfig, Config
from .endpoints import Endpoint, build_request
from .errors import (
    AuthenticationError,
    DataNotFoundError,
    DecodeError,
    RateLimitError,
    TransportError,
)
from .rate_limiter import RateLimiter


logger = logging.getLogger(__name__)

Params = Optional[Mapping[str, Any]]


class LeagueOfLegendsClient:
    """Client for the Riot Games League of Legends API.

    Every endpoint has its own method. Keyword arguments (or a single
    mapping) become path segments or query parameters:

        client.static_data(type="champion", id=1, dataById=1)
        # GET https://na.api.pvp.net/api/lol/static-data/na/v1.2/champion/1?api_key=...&dataById=1

    Features:
    - Optional client-side rate limiting
    - Typed errors for build, transport and decode failures
    - Connection pooling
    - Request logging when debug is enabled

    Failed requests are not retried.
    """

    def __init__(
        self,
        api_key: str,
        region: str = "na",
        timeout: int = 5,
        debug: bool = False,
        base_url: Optional[str] = None,
        rate_limiter: Optional[RateLimiter] = None
    ):
        """Initialize League of Legends API client.

        Args:
            api_key: Riot Games API key
            region: Region code (default "na")
            timeout: Request timeout in seconds (default 5)
            debug: Log every request URI at WARNING before it is sent (default False)
            base_url: Override for https://<region>.api.pvp.net
            rate_limiter: Optional limiter acquired before each request

        Raises:
            ConfigurationError: If the API key is empty
            UnknownRegion: If the region is not supported
        """
        self.config = ClientConfig(api_key=api_key, region=region, base_url=base_url)
        self.timeout = timeout
        self.debug = debug
        self.rate_limiter = rate_limiter

        self.session = self._create_session()

        # Request headers
        self.headers = {
            "User-Agent": f"lol-api/{__version__}",
            "Accept": "application/json"
        }

        logger.info(f"Initialized LeagueOfLegendsClient for {self.config.region} region")

    @classmethod
    def from_config(cls, **overrides) -> "LeagueOfLegendsClient":
        """Create a client from environment configuration.

        Args:
            **overrides: Constructor arguments that take precedence over Config

        Raises:
            ConfigurationError: If required configuration is missing
        """
        Config.validate()
        kwargs = {
            "api_key": Config.RIOT_API_KEY,
            "region": Config.LOL_REGION,
            "timeout": Config.LOL_TIMEOUT,
            "debug": Config.LOL_DEBUG,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def region(self) -> str:
        return self.config.region

    def _create_session(self) -> requests.Session:
        """Create HTTP session with connection pooling.

        Returns:
            Configured requests Session
        """
        session = requests.Session()

        # Transport failures are terminal for a call
        retry_strategy = Retry(total=0, redirect=False, raise_on_status=False)

        adapter = HTTPAdapter(
            max_retries=retry_strategy,
            pool_connections=10,
            pool_maxsize=20
        )
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        return session

    def build_url(self, endpoint: Union[Endpoint, str], params: Params = None, **kwargs) -> str:
        """Build the request URI for an endpoint without sending it."""
        return build_request(endpoint, _merge_params(params, kwargs), self.config)

    def request(self, endpoint: Union[Endpoint, str], params: Params = None, **kwargs) -> Any:
        """Call an endpoint and return the decoded JSON response.

        Args:
            endpoint: Endpoint member or name
            params: Optional mapping of call parameters
            **kwargs: Call parameters, merged over params

        Returns:
            Decoded JSON response

        Raises:
            RequestBuildError: If the endpoint or parameters are invalid
            TransportError: If the request fails or returns an error status
            DecodeError: If the response body is not valid JSON
        """
        url = self.build_url(endpoint, params, **kwargs)
        return self._make_request(url)

    def _make_request(self, url: str) -> Any:
        """Make API request with error handling.

        Args:
            url: Full request URI

        Returns:
            Decoded JSON response

        Raises:
            RateLimitError: If rate limit is exceeded
            DataNotFoundError: If data is not found (404)
            AuthenticationError: If the API key is rejected (403)
            TransportError: For other transport errors
            DecodeError: If the response body is not valid JSON
        """
        if self.debug:
            logger.warning(f"GET {url}")
        else:
            logger.debug(f"GET {self.redact_url(url)}")

        if self.rate_limiter is not None:
            self.rate_limiter.acquire()

        try:
            response = self.session.get(
                url,
                headers=self.headers,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise TransportError(f"Request timeout after {self.timeout} seconds")
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {str(e)}")
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {str(e)}")

        status_line = f"{response.status_code} {response.reason}"

        # Handle different status codes
        if response.status_code == 404:
            raise DataNotFoundError(
                f"Data not found: {self.redact_url(url)}",
                status_code=404,
                status_line=status_line
            )
        elif response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            retry_after = int(retry_after) if retry_after and retry_after.isdigit() else None
            logger.warning(f"Rate limit exceeded. Retry-After: {retry_after}")
            raise RateLimitError(
                f"Rate limit exceeded: {status_line}",
                retry_after=retry_after,
                status_code=429,
                status_line=status_line
            )
        elif response.status_code == 403:
            raise AuthenticationError(
                "API key invalid or expired",
                status_code=403,
                status_line=status_line
            )
        elif 200 <= response.status_code < 300:
            return self._decode(response)
        else:
            raise TransportError(
                f"API request failed: {status_line}",
                status_code=response.status_code,
                status_line=status_line
            )

    def _decode(self, response: requests.Response) -> Any:
        # 204 and other empty bodies
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON in response: {str(e)}")

    def redact_url(self, url: str) -> str:
        """Return url with the API key masked, for logs and error messages."""
        return url.replace(self.config.api_key, "<api_key>")

    # Endpoint Methods

    def champion(self, params: Params = None, **kwargs) -> Any:
        """Champion data (v1.2), e.g. champion(id=1) or champion(freeToPlay="true")."""
        return self.request(Endpoint.CHAMPION, params, **kwargs)

    def current_game(self, params: Params = None, **kwargs) -> Any:
        """Live spectator game info for the configured region's platform.

        Parameters are sent as query parameters; "by", "id" and "type"
        are not turned into path segments for this endpoint.
        """
        return self.request(Endpoint.CURRENT_GAME, params, **kwargs)

    def game(self, params: Params = None, **kwargs) -> Any:
        """Recent games (v1.3), e.g. game(by="summoner", id=123, type="recent")."""
        return self.request(Endpoint.GAME, params, **kwargs)

    def league(self, params: Params = None, **kwargs) -> Any:
        """League data (v2.5), e.g. league(by="summoner", id=123, type="entry")."""
        return self.request(Endpoint.LEAGUE, params, **kwargs)

    def match(self, params: Params = None, **kwargs) -> Any:
        """Match details (v2.2), e.g. match(id=1234567890, includeTimeline="true")."""
        return self.request(Endpoint.MATCH, params, **kwargs)

    def matchlist(self, params: Params = None, **kwargs) -> Any:
        """Match history (v2.2), e.g. matchlist(by="summoner", id=123)."""
        return self.request(Endpoint.MATCHLIST, params, **kwargs)

    def static_data(self, params: Params = None, **kwargs) -> Any:
        """Static game data (v1.2); "type" selects the resource.

        Example:
            client.static_data(type="champion", id=1, dataById=1)
        """
        return self.request(Endpoint.STATIC_DATA, params, **kwargs)

    def stats(self, params: Params = None, **kwargs) -> Any:
        """Player stats (v1.3), e.g. stats(by="summoner", id=123, type="ranked")."""
        return self.request(Endpoint.STATS, params, **kwargs)

    def summoner(self, params: Params = None, **kwargs) -> Any:
        """Summoner lookup (v1.4), e.g. summoner(by="name", id="summonername")."""
        return self.request(Endpoint.SUMMONER, params, **kwargs)

    def team(self, params: Params = None, **kwargs) -> Any:
        """Team data (v2.4), e.g. team(by="summoner", id=123)."""
        return self.request(Endpoint.TEAM, params, **kwargs)

    def close(self):
        """Close the HTTP session."""
        self.session.close()
        logger.info("LeagueOfLegendsClient session closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def _merge_params(params: Params, kwargs: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(params or {})
    merged.update(kwargs)
    return merged
