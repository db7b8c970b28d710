import pytest
from redis.asyncio import Redis

from redis_cookie_store import redis_client
from redis_cookie_store.config import get_settings


def test_settings_read_from_environment():
    settings = get_settings()
    assert settings.redis_url == "redis://localhost:6379/15"
    assert settings.store_id == "cookie-test"


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("COOKIE_STORE_REDIS_URL", raising=False)
    monkeypatch.delenv("COOKIE_STORE_STORE_ID", raising=False)
    from redis_cookie_store.config import Settings

    settings = Settings(_env_file=None)
    assert settings.redis_url == "redis://localhost:6379/0"
    assert settings.store_id == "cookie"


def test_resolve_client_reuses_existing_connection(fake_redis):
    assert redis_client.resolve_client(fake_redis) is fake_redis


def test_resolve_client_builds_from_url():
    client = redis_client.resolve_client("redis://localhost:6379/3")
    assert isinstance(client, Redis)
    assert client.connection_pool.connection_kwargs["db"] == 3


def test_resolve_client_builds_from_parameters():
    client = redis_client.resolve_client({"host": "cache.internal", "port": 6380})
    assert isinstance(client, Redis)
    assert client.connection_pool.connection_kwargs["host"] == "cache.internal"
    assert client.connection_pool.connection_kwargs["port"] == 6380


def test_resolve_client_defaults_to_shared_client(monkeypatch):
    monkeypatch.setattr(redis_client, "_CLIENT", None)
    first = redis_client.resolve_client()
    assert redis_client.resolve_client() is first
    assert first.connection_pool.connection_kwargs["db"] == 15

    assert redis_client.reset_client() is not first


def test_resolve_client_rejects_unknown_source():
    with pytest.raises(TypeError):
        redis_client.resolve_client(42)


async def test_close_client_closes_and_forgets_shared_client(fake_redis, monkeypatch):
    monkeypatch.setattr(redis_client, "_CLIENT", fake_redis)

    await redis_client.close_client()
    await redis_client.close_client()

    assert fake_redis.closed is True
    assert redis_client._CLIENT is None
