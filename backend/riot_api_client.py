import logging

import httpx
from pydantic import ValidationError

import config
import regions
from schemas import (
    MatchIds,
    MatchInfo,
    MatchSummary,
    PlayerMatchResult,
    Result,
    RiotAccount,
)

logger = logging.getLogger(__name__)

# Everything that means "this region did not answer usefully".
LOOKUP_ERRORS = (httpx.HTTPError, ValidationError, ValueError)


def create_proxy_client() -> httpx.AsyncClient:
    """Creates a client bound to the proxy; the Riot token never leaves the proxy."""
    return httpx.AsyncClient(
        base_url=config.PROXY_BASE_URL, timeout=config.REQUEST_TIMEOUT_SECONDS
    )


async def _proxy_get(client: httpx.AsyncClient, params: dict) -> httpx.Response:
    response = await client.get(config.PROXY_PATH, params=params)
    response.raise_for_status()
    return response


async def get_riot_account(
    client: httpx.AsyncClient, game_name: str, tag_line: str
) -> Result[RiotAccount]:
    """
    Looks the account up in every region, in order, and returns the first valid hit.
    Failures in a single region are logged and the next region is tried.
    """
    for region in regions.REGION_ORDER:
        params = {
            "endpoint": "account",
            "gameName": game_name,
            "tagLine": tag_line,
            "region": region,
        }
        try:
            response = await _proxy_get(client, params)
            account = RiotAccount.model_validate(response.json())
            return Result[RiotAccount](data=account)
        except LOOKUP_ERRORS as e:
            logger.info(f"Failed to find account in region: {region} ({e})")

    return Result[RiotAccount](error="Account not found in any region")


async def get_match_ids(client: httpx.AsyncClient, puuid: str) -> Result[list[str]]:
    """
    Fetches the most recent Arena match ids. An empty list from one region does not
    stop the search, since it may simply be the wrong shard for this player.
    """
    for region in regions.REGION_ORDER:
        params = {
            "endpoint": "matches",
            "puuid": puuid,
            "region": region,
            "queue": config.ARENA_QUEUE_ID,
        }
        try:
            response = await _proxy_get(client, params)
            match_ids = MatchIds.validate_python(response.json())
        except LOOKUP_ERRORS as e:
            logger.info(f"Failed to fetch matches from region: {region} ({e})")
            continue

        if match_ids:
            logger.info(f"Found matches in region: {region}")
            return Result[list[str]](data=match_ids)

    return Result[list[str]](data=[])


async def get_match_info(
    client: httpx.AsyncClient, match_id: str
) -> Result[MatchSummary]:
    """Fetches a single match from the region encoded in its id. No retries, no probing."""
    region = regions.get_region_from_match_id(match_id)
    params = {"endpoint": "match", "matchId": match_id, "region": region}
    try:
        response = await _proxy_get(client, params)
        match_info = MatchInfo.model_validate(response.json())
    except LOOKUP_ERRORS as e:
        logger.error(f"Error fetching match info for {match_id}: {e}")
        return Result[MatchSummary](error="Failed to fetch match info")

    summary = MatchSummary(matchId=match_id, participants=match_info.info.participants)
    return Result[MatchSummary](data=summary)


def get_player_match_result(
    match: MatchSummary, puuid: str
) -> PlayerMatchResult | None:
    """Returns the player's champion and placement, or None if they are not in the match."""
    player = next((p for p in match.participants if p.puuid == puuid), None)
    if player is None:
        return None
    return PlayerMatchResult(champion=player.championName, placement=player.placement)
