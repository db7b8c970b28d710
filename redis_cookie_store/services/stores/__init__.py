from typing import Optional

from redis_cookie_store.services.stores.base import CookieStore


async def open_cookie_store(store_id: Optional[str] = None) -> CookieStore:
    from redis_cookie_store.services.stores.redis_store import RedisCookieStore

    return await RedisCookieStore.open(store_id=store_id)
