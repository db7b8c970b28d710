import json
from typing import Dict, Iterator, List, Optional, Union

from redis_cookie_store.models import Cookie
from redis_cookie_store.services.cookie_matching import path_match

PathIndex = Dict[str, Cookie]
DomainIndex = Dict[str, PathIndex]


class CookieIndex:
    """In-memory domain -> path -> key mapping of live cookies.

    Removing a cookie or a path leaves its (possibly empty) parent levels in
    place; only the requested keys are deleted.
    """

    def __init__(self, data: Optional[Dict[str, DomainIndex]] = None):
        self._idx: Dict[str, DomainIndex] = data if data is not None else {}

    def __len__(self) -> int:
        return sum(1 for _ in self._iter_cookies())

    def domains(self) -> List[str]:
        return list(self._idx)

    def insert(self, cookie: Cookie) -> None:
        domain_index = self._idx.setdefault(cookie.domain, {})
        path_index = domain_index.setdefault(cookie.path, {})
        path_index[cookie.key] = cookie

    def lookup(self, domain: str, path: str, key: str) -> Optional[Cookie]:
        return self._idx.get(domain, {}).get(path, {}).get(key)

    def remove_one(self, domain: str, path: str, key: str) -> None:
        path_index = self._idx.get(domain, {}).get(path)
        if path_index is not None:
            path_index.pop(key, None)

    def remove_many(self, domain: str, path: Optional[str] = None) -> None:
        domain_index = self._idx.get(domain)
        if domain_index is None:
            return
        if path:
            domain_index.pop(path, None)
        else:
            del self._idx[domain]

    def clear(self) -> None:
        self._idx.clear()

    def enumerate_all(self) -> List[Cookie]:
        # sorted() is stable, so equal creation indexes keep traversal order.
        return sorted(self._iter_cookies(), key=lambda cookie: cookie.creation_index or 0)

    def has_domain(self, domain: str) -> bool:
        return domain in self._idx

    def match_all_paths(self, domain: str) -> List[Cookie]:
        results: List[Cookie] = []
        for path_index in self._idx.get(domain, {}).values():
            results.extend(path_index.values())
        return results

    def match_path(self, domain: str, query_path: str) -> List[Cookie]:
        results: List[Cookie] = []
        for cookie_path, path_index in self._idx.get(domain, {}).items():
            if path_match(query_path, cookie_path):
                results.extend(path_index.values())
        return results

    def to_snapshot(self) -> str:
        payload = {
            domain: {
                path: {key: cookie.to_json() for key, cookie in path_index.items()}
                for path, path_index in domain_index.items()
            }
            for domain, domain_index in self._idx.items()
        }
        return json.dumps(payload, ensure_ascii=False)

    @classmethod
    def from_snapshot(cls, raw: Union[str, bytes]) -> "CookieIndex":
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError(f"Cookie snapshot must be a JSON object, got {type(payload).__name__}")

        data: Dict[str, DomainIndex] = {}
        for domain, domain_payload in payload.items():
            if not isinstance(domain_payload, dict):
                raise ValueError(f"Malformed cookie snapshot entry for domain {domain!r}")
            data[domain] = {}
            for path, path_payload in domain_payload.items():
                if not isinstance(path_payload, dict):
                    raise ValueError(f"Malformed cookie snapshot entry for {domain!r} path {path!r}")
                data[domain][path] = {key: Cookie.from_json(item) for key, item in path_payload.items()}
        return cls(data)

    def _iter_cookies(self) -> Iterator[Cookie]:
        for domain_index in self._idx.values():
            for path_index in domain_index.values():
                yield from path_index.values()
