"""Domain and path matching primitives used by cookie lookups."""

from functools import lru_cache
from typing import List, Optional

import tldextract

# Bundled public suffix snapshot only; never fetch the list over the network.
# Private suffixes (github.io, herokuapp.com, ...) count as public suffixes.
_extract = tldextract.TLDExtract(suffix_list_urls=(), include_psl_private_domains=True)


@lru_cache(maxsize=1024)
def registrable_domain(domain: str) -> Optional[str]:
    """Return the public suffix plus one label of ``domain``, or None.

    None is returned for hosts with no registrable part: IP addresses,
    single-label hosts such as ``localhost`` and bare public suffixes.
    """
    host = domain[:-1] if domain.endswith(".") else domain
    if not host:
        return None
    extracted = _extract(host.lower())
    if not extracted.domain or not extracted.suffix:
        return None
    labels = host.split(".")
    wanted = len(extracted.domain.split(".")) + len(extracted.suffix.split("."))
    if wanted > len(labels):
        return None
    return ".".join(labels[-wanted:])


def permute_domain(domain: str) -> Optional[List[str]]:
    """Expand ``domain`` into its suffix chain, most specific first.

    ``a.b.example.com`` gives ``a.b.example.com``, ``b.example.com``,
    ``example.com``. Returns None when the domain has no registrable part.
    """
    registrable = registrable_domain(domain)
    if not registrable:
        return None
    if registrable == domain:
        return [domain]

    host = domain[:-1] if domain.endswith(".") else domain
    if host == registrable:
        return [registrable]
    prefix = host[: -(len(registrable) + 1)]
    permutations = [registrable]
    current = registrable
    for label in reversed(prefix.split(".")):
        current = f"{label}.{current}"
        permutations.append(current)
    permutations.reverse()
    return permutations


def path_match(request_path: str, cookie_path: str) -> bool:
    """Decide whether a cookie stored at ``cookie_path`` applies to ``request_path``.

    Prefix match with a boundary check: the paths are identical, or
    ``cookie_path`` is a prefix of ``request_path`` and either ends with ``/``
    or is followed by ``/`` in ``request_path``.

    Note: this approximates RFC 6265 S5.1.4 rather than implementing it.
    Trailing-slash and shared-prefix sibling cases may be imprecise; see
    https://github.com/ChromiumWebApps/chromium/blob/b3d3b4da8bb94c1b2e061600df106d590fda3620/net/cookies/canonical_cookie.cc#L299
    for the full algorithm.
    """
    if cookie_path == request_path:
        return True
    if request_path.startswith(cookie_path):
        if cookie_path.endswith("/"):
            return True
        if request_path[len(cookie_path) : len(cookie_path) + 1] == "/":
            return True
    return False
