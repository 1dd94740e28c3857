import asyncio
import logging
import sys

import httpx

import config
import redis_service
import riot_api_client
import storage
from schemas import ArenaProgress, MatchResult, MatchSummary, Result, RiotId

logger = logging.getLogger(__name__)


async def get_match_info_cached(
    client: httpx.AsyncClient, cache: storage.MatchCache, match_id: str
) -> Result[MatchSummary]:
    """Serves a match from the cache, fetching and caching it on a miss."""
    if (cached := cache.get(match_id)) is not None:
        return Result[MatchSummary](data=cached)

    result = await riot_api_client.get_match_info(client, match_id)
    if result.ok:
        cache.put(match_id, result.data)
    return result


async def sync_match_history(
    client: httpx.AsyncClient,
    store: storage.KeyValueStore | None,
    game_name: str,
    tag_line: str,
) -> Result[list[MatchResult]]:
    """
    Refreshes the stored Riot ID, match history and Arena progress for a player.
    Matches that cannot be fetched, or that don't include the player, are skipped.
    """
    account_result = await riot_api_client.get_riot_account(client, game_name, tag_line)
    if not account_result.ok:
        return Result[list[MatchResult]](error=account_result.error)

    account = account_result.data
    storage.set_riot_id(
        store, RiotId(gameName=account.gameName, tagLine=account.tagLine, puuid=account.puuid)
    )

    match_ids = (await riot_api_client.get_match_ids(client, account.puuid)).data or []
    cache = storage.MatchCache(store)

    history: list[MatchResult] = []
    for match_id in match_ids:
        match_result = await get_match_info_cached(client, cache, match_id)
        if not match_result.ok:
            continue
        player_result = riot_api_client.get_player_match_result(match_result.data, account.puuid)
        if player_result is None:
            logger.info(f"Player {account.puuid} not found in match {match_id}")
            continue
        history.append(
            MatchResult(
                matchId=match_id,
                champion=player_result.champion,
                placement=player_result.placement,
            )
        )

    storage.set_match_history(store, history)

    progress = storage.get_arena_progress(store)
    first_places = set(progress.firstPlaceChampions)
    first_places.update(m.champion for m in history if m.placement == 1)
    storage.set_arena_progress(store, ArenaProgress(firstPlaceChampions=sorted(first_places)))

    logger.info(
        f"Synced {len(history)} matches for {account.gameName}#{account.tagLine} "
        f"({len(first_places)} first-place champions)"
    )
    return Result[list[MatchResult]](data=history)


async def _main(riot_id: str) -> int:
    game_name, _, tag_line = riot_id.partition("#")
    if not game_name or not tag_line:
        logger.error("Riot ID must look like 'Name#Tag'.")
        return 2

    store = redis_service.get_redis_client()
    async with riot_api_client.create_proxy_client() as client:
        result = await sync_match_history(client, store, game_name, tag_line)

    if not result.ok:
        logger.error(result.error)
        return 1
    for match in result.data:
        print(f"{match.matchId}: #{match.placement} {match.champion}")
    return 0


if __name__ == "__main__":
    """
    Usage: python history_service.py "Name#Tag"
    Requires the proxy (main.py) and Redis to be running.
    """
    logging.basicConfig(level=config.LOG_LEVEL)
    if len(sys.argv) != 2:
        print('Usage: python history_service.py "Name#Tag"')
        sys.exit(2)
    sys.exit(asyncio.run(_main(sys.argv[1])))
