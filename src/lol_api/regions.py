from dataclasses import dataclass
from typing import Dict, FrozenSet

from .errors import UnknownRegion


@dataclass(frozen=True)
class RegionInfo:
    """Platform and spectator-stream metadata for one region."""

    platform_id: str
    spectator_host: str
    spectator_port: int


_REGION_TABLE: Dict[str, RegionInfo] = {
    "na": RegionInfo("NA1", "spectator.na.lol.riotgames.com", 80),
    "euw": RegionInfo("EUW1", "spectator.euw1.lol.riotgames.com", 80),
    "eune": RegionInfo("EUN1", "spectator.eu.lol.riotgames.com", 8088),
    "jp": RegionInfo("JP1", "spectator.jp1.lol.riotgames.com", 80),
    "kr": RegionInfo("KR", "spectator.kr.lol.riotgames.com", 80),
    "oce": RegionInfo("OC1", "spectator.oc1.lol.riotgames.com", 80),
    "br": RegionInfo("BR1", "spectator.br.lol.riotgames.com", 80),
    "lan": RegionInfo("LA1", "spectator.la1.lol.riotgames.com", 80),
    "las": RegionInfo("LA2", "spectator.la2.lol.riotgames.com", 80),
    "ru": RegionInfo("RU", "spectator.ru.lol.riotgames.com", 80),
    "tr": RegionInfo("TR1", "spectator.tr.lol.riotgames.com", 80),
}

REGIONS: FrozenSet[str] = frozenset(_REGION_TABLE)

DEFAULT_REGION = "na"


def validate_region(region: str) -> str:
    """Normalize a region code and check it belongs to the supported set.

    Args:
        region: Region code, case-insensitive (e.g. "na", "EUW")

    Returns:
        Lowercase region code

    Raises:
        UnknownRegion: If the code is not a supported region
    """
    if not isinstance(region, str):
        raise UnknownRegion(region)

    normalized = region.lower()
    if normalized not in _REGION_TABLE:
        raise UnknownRegion(region)
    return normalized


def resolve(region: str) -> RegionInfo:
    """Look up platform id and spectator host/port for a region.

    Raises:
        UnknownRegion: If the code is not a supported region
    """
    return _REGION_TABLE[validate_region(region)]
