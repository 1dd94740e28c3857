from typing import Literal

import config

Region = Literal["americas", "europe", "asia", "sea"]

# Account and match lookups probe the regions in this order.
REGION_ORDER: tuple[Region, ...] = ("americas", "europe", "asia", "sea")

REGION_BASE_URLS: dict[str, str] = {
    "americas": "https://americas.api.riotgames.com",
    "europe": "https://europe.api.riotgames.com",
    "asia": "https://asia.api.riotgames.com",
    "sea": "https://sea.api.riotgames.com",
}

# Platform shard (match id prefix) -> regional route
PLATFORM_TO_REGION: dict[str, Region] = {
    # Americas
    "NA1": "americas",
    "BR1": "americas",
    "LA1": "americas",  # LAN
    "LA2": "americas",  # LAS
    # Europe
    "EUW1": "europe",
    "EUN1": "europe",
    "TR1": "europe",
    "RU1": "europe",
    # Asia
    "KR": "asia",
    "JP1": "asia",
    # SEA & Oceania
    "OC1": "sea",
    "PH2": "sea",
    "SG2": "sea",
    "TH2": "sea",
    "TW2": "sea",
    "VN2": "sea",
}


def normalize_region(region: str | None) -> Region:
    """Returns the region itself if it is supported, otherwise the default region."""
    if region in REGION_BASE_URLS:
        return region
    return config.DEFAULT_REGION


def get_region_base_url(region: str | None) -> str:
    """
    Returns the API base URL for a regional route.
    Unknown or missing regions fall back to the default region instead of failing.
    """
    return REGION_BASE_URLS[normalize_region(region)]


def get_region_from_match_id(match_id: str | None) -> Region:
    """Infers the regional route from the platform prefix of a match id (e.g. 'EUW1_123')."""
    prefix = (match_id or "").split("_", 1)[0]
    return PLATFORM_TO_REGION.get(prefix, config.DEFAULT_REGION)
