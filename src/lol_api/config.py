import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit
from dotenv import load_dotenv

from .errors import ConfigurationError, UnknownRegion
from .regions import DEFAULT_REGION, REGIONS, validate_region

# Load environment variables from .env file
load_dotenv()

BASE_URL_TEMPLATE = "https://{region}.api.pvp.net"


def _is_http_url(url) -> bool:
    if not isinstance(url, str):
        return False
    parts = urlsplit(url)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration manager for the League of Legends API client."""

    # Riot API Configuration
    RIOT_API_KEY: str = os.getenv("RIOT_API_KEY", "")
    LOL_REGION: str = os.getenv("LOL_REGION", DEFAULT_REGION)

    # Transport Configuration
    LOL_TIMEOUT: int = int(os.getenv("LOL_TIMEOUT", "5"))
    LOL_DEBUG: bool = _env_flag("LOL_DEBUG")

    @classmethod
    def validate(cls) -> None:
        """Validate that required configuration is present.

        Raises:
            ConfigurationError: If the API key is missing or the region is unsupported
        """
        if not cls.RIOT_API_KEY:
            raise ConfigurationError(
                "RIOT_API_KEY not found in environment variables. "
                "Please set it in your .env file."
            )
        try:
            validate_region(cls.LOL_REGION)
        except UnknownRegion:
            raise ConfigurationError(
                f"LOL_REGION {cls.LOL_REGION!r} is not one of: "
                f"{', '.join(sorted(REGIONS))}"
            )


@dataclass(frozen=True)
class ClientConfig:
    """Fixed per-client settings consumed by the endpoint router.

    The region is checked here, so an unsupported code fails when the
    client is configured rather than on the first call.
    """

    api_key: str
    region: str = DEFAULT_REGION
    base_url: Optional[str] = None

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError("api_key is required")

        region = validate_region(self.region)
        object.__setattr__(self, "region", region)

        if self.base_url is None:
            object.__setattr__(self, "base_url", BASE_URL_TEMPLATE.format(region=region))
        elif _is_http_url(self.base_url):
            object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        else:
            raise ConfigurationError(
                f"base_url must be an http:// or https:// URL with a host: {self.base_url!r}"
            )
