import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["COOKIE_STORE_REDIS_URL"] = "redis://localhost:6379/15"
os.environ["COOKIE_STORE_STORE_ID"] = "cookie-test"


class FakeRedis:
    """In-memory stand-in for an async redis client."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.calls = []
        self.fail_get = None
        self.fail_set = None
        self.closed = False

    async def get(self, key):
        self.calls.append(("get", key))
        if self.fail_get is not None:
            raise self.fail_get
        value = self.data.get(key)
        return value.encode() if isinstance(value, str) else value

    async def set(self, key, value):
        self.calls.append(("set", key))
        if self.fail_set is not None:
            raise self.fail_set
        self.data[key] = value
        return True

    async def aclose(self):
        self.closed = True

    def set_calls(self):
        return [call for call in self.calls if call[0] == "set"]


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture(autouse=True)
def clean_settings():
    from redis_cookie_store.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def client(fake_redis, monkeypatch):
    monkeypatch.setattr("redis_cookie_store.redis_client._CLIENT", fake_redis)
    from redis_cookie_store.main import app

    with TestClient(app) as test_client:
        yield test_client
