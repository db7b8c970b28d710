from abc import ABC, abstractmethod
from typing import List, Optional

from redis_cookie_store.models import Cookie


class CookieStore(ABC):
    """Storage contract a cookie jar delegates to."""

    @abstractmethod
    async def find_cookie(self, domain: str, path: str, key: str) -> Optional[Cookie]:
        raise NotImplementedError

    @abstractmethod
    async def find_cookies(self, domain: str, path: Optional[str] = None) -> List[Cookie]:
        raise NotImplementedError

    @abstractmethod
    async def put_cookie(self, cookie: Cookie) -> None:
        raise NotImplementedError

    async def update_cookie(self, old_cookie: Cookie, new_cookie: Cookie) -> None:
        # Stores may skip writes when only access-time fields differ.
        await self.put_cookie(new_cookie)

    @abstractmethod
    async def remove_cookie(self, domain: str, path: str, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def remove_cookies(self, domain: str, path: Optional[str] = None) -> None:
        raise NotImplementedError

    @abstractmethod
    async def remove_all_cookies(self) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_all_cookies(self) -> List[Cookie]:
        raise NotImplementedError
