import logging
from threading import Lock
from typing import Any, Dict, Optional, Union

from redis.asyncio import Redis

from redis_cookie_store.config import get_settings

logger = logging.getLogger(__name__)

_CLIENT: Optional[Redis] = None
_CLIENT_LOCK = Lock()

RedisSource = Union[None, str, Dict[str, Any], Any]


def _create_client() -> Redis:
    settings = get_settings()
    return Redis.from_url(settings.redis_url, socket_timeout=settings.redis_socket_timeout)


def get_client() -> Redis:
    global _CLIENT
    with _CLIENT_LOCK:
        if _CLIENT is None:
            _CLIENT = _create_client()
        return _CLIENT


def reset_client() -> Redis:
    global _CLIENT
    with _CLIENT_LOCK:
        _CLIENT = _create_client()
        return _CLIENT


async def close_client() -> None:
    global _CLIENT
    with _CLIENT_LOCK:
        client, _CLIENT = _CLIENT, None
    if client is not None:
        await client.aclose()


def is_connection(candidate: Any) -> bool:
    # Duck-typed: isinstance() fails when redis is installed more than once.
    return callable(getattr(candidate, "get", None)) and callable(getattr(candidate, "set", None))


def resolve_client(redis: RedisSource = None) -> Any:
    """Reuse an existing connection or build one from connection parameters.

    ``redis`` may be a connected client, a Redis URL, a dict of
    ``redis.asyncio.Redis`` keyword arguments, or None for the shared client
    configured through settings.
    """
    if redis is None:
        logger.debug("Using shared redis connection")
        return get_client()
    if isinstance(redis, str):
        logger.debug("Creating redis connection from url")
        return Redis.from_url(redis)
    if isinstance(redis, dict):
        logger.debug("Creating redis connection from parameters")
        return Redis(**redis)
    if is_connection(redis):
        logger.debug("Reusing redis connection")
        return redis
    raise TypeError(f"Unsupported redis connection source: {type(redis).__name__}")
