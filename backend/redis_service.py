import logging

import redis

import config

logger = logging.getLogger(__name__)


def get_redis_client() -> redis.Redis:
    """
    Connects to the Redis instance that holds the Riot ID, match history,
    Arena progress and match cache. Strings are decoded so the client can be
    handed straight to the storage module.
    """
    client = redis.Redis(
        host=config.REDIS_HOST,
        port=config.REDIS_PORT,
        db=config.REDIS_DB,
        decode_responses=True,
    )
    try:
        client.ping()
    except redis.exceptions.ConnectionError as e:
        logger.error(f"Redis at {config.REDIS_HOST}:{config.REDIS_PORT} is unreachable: {e}")
        raise
    return client
