import logging
from typing import Any, List, Optional

from redis.exceptions import RedisError

from redis_cookie_store.config import get_settings
from redis_cookie_store.models import Cookie
from redis_cookie_store.redis_client import RedisSource, resolve_client
from redis_cookie_store.services.cookie_index import CookieIndex
from redis_cookie_store.services.cookie_matching import permute_domain
from redis_cookie_store.services.stores.base import CookieStore

logger = logging.getLogger(__name__)


class RedisCookieStore(CookieStore):
    """Cookie store mirrored to a single Redis key.

    Reads are served from the in-memory index. Every mutation updates the
    index first and then rewrites the whole snapshot with ``SET``; concurrent
    writers are last-write-wins. Use ``await RedisCookieStore.open(...)`` or
    construct and ``await store.load()`` before calling any other method.
    """

    def __init__(self, redis: RedisSource = None, store_id: Optional[str] = None):
        self.redis: Any = resolve_client(redis)
        self.id = store_id or get_settings().store_id
        self.idx = CookieIndex()
        self.initialized = False

    @classmethod
    async def open(cls, redis: RedisSource = None, store_id: Optional[str] = None) -> "RedisCookieStore":
        store = cls(redis, store_id)
        await store.load()
        return store

    async def load(self) -> Optional[CookieIndex]:
        logger.debug("Loading cookie snapshot %s", self.id)
        try:
            raw = await self.redis.get(self.id)
            idx = CookieIndex.from_snapshot(raw) if raw else None
        except (RedisError, OSError, ValueError) as exc:
            logger.exception("Failed to load cookie snapshot %s", self.id)
            raise RuntimeError(f"Failed to load cookie snapshot {self.id!r}: {exc}") from exc

        if idx is None:
            logger.info("No cookie snapshot stored at %s, starting empty", self.id)
        else:
            self.idx = idx
            logger.info("Loaded %d cookies from snapshot %s", len(idx), self.id)
        self.initialized = True
        return idx

    async def save(self) -> None:
        snapshot = self.idx.to_snapshot()
        try:
            await self.redis.set(self.id, snapshot)
        except (RedisError, OSError) as exc:
            logger.warning("Failed to save cookie snapshot %s: %s", self.id, exc)
            raise

    async def find_cookie(self, domain: str, path: str, key: str) -> Optional[Cookie]:
        self._ensure_ready()
        cookie = self.idx.lookup(domain, path, key)
        if cookie is None:
            logger.debug("No cookie for %s %s %s", domain, path, key)
        return cookie

    async def find_cookies(self, domain: str, path: Optional[str] = None) -> List[Cookie]:
        self._ensure_ready()
        if not domain:
            return []

        domains = permute_domain(domain) or [domain]
        logger.debug("Finding cookies for %s (path=%s) across %s", domain, path, domains)

        results: List[Cookie] = []
        for current in domains:
            if not self.idx.has_domain(current):
                continue
            # Each matching domain replaces the previous results.
            if path:
                results = self.idx.match_path(current, path)
            else:
                results = self.idx.match_all_paths(current)
        return results

    async def put_cookie(self, cookie: Cookie) -> None:
        self._ensure_ready()
        logger.debug("Putting cookie %s", cookie.triple)
        self.idx.insert(cookie)
        await self.save()

    async def update_cookie(self, old_cookie: Cookie, new_cookie: Cookie) -> None:
        logger.debug("Updating cookie %s -> %s", old_cookie.triple, new_cookie.triple)
        await self.put_cookie(new_cookie)

    async def remove_cookie(self, domain: str, path: str, key: str) -> None:
        self._ensure_ready()
        logger.debug("Removing cookie %s %s %s", domain, path, key)
        self.idx.remove_one(domain, path, key)
        await self.save()

    async def remove_cookies(self, domain: str, path: Optional[str] = None) -> None:
        self._ensure_ready()
        logger.debug("Removing cookies on %s (path=%s)", domain, path)
        self.idx.remove_many(domain, path)
        await self.save()

    async def remove_all_cookies(self) -> None:
        self._ensure_ready()
        logger.debug("Removing all cookies from %s", self.id)
        self.idx.clear()
        await self.save()

    async def get_all_cookies(self) -> List[Cookie]:
        self._ensure_ready()
        return self.idx.enumerate_all()

    def _ensure_ready(self) -> None:
        if not self.initialized:
            raise RuntimeError("Cookie store is not loaded; use RedisCookieStore.open() or await load() first")
