import pytest

from redis_cookie_store.services.cookie_matching import path_match, permute_domain, registrable_domain


def test_permute_domain_most_specific_first():
    assert permute_domain("a.b.example.com") == ["a.b.example.com", "b.example.com", "example.com"]


def test_permute_domain_registrable_domain_only():
    assert permute_domain("example.com") == ["example.com"]


def test_permute_domain_multi_label_suffix():
    assert permute_domain("www.example.co.uk") == ["www.example.co.uk", "example.co.uk"]


def test_permute_domain_stops_at_private_suffix():
    assert permute_domain("a.b.github.io") == ["a.b.github.io", "b.github.io"]
    assert permute_domain("github.io") is None


def test_permute_domain_strips_trailing_dot():
    assert permute_domain("www.example.com.") == ["www.example.com", "example.com"]


@pytest.mark.parametrize("domain", ["localhost", "127.0.0.1", "com", ""])
def test_permute_domain_without_registrable_part(domain):
    assert permute_domain(domain) is None


def test_registrable_domain_keeps_original_case():
    assert registrable_domain("WWW.Example.COM") == "Example.COM"


@pytest.mark.parametrize(
    "request_path, cookie_path, expected",
    [
        ("/foo", "/foo", True),
        ("/foo/bar", "/foo", True),
        ("/foo/bar", "/foo/", True),
        ("/foobar", "/foo", False),
        ("/foo", "/foo/", False),
        ("/bar", "/foo", False),
        ("/anything", "/", True),
    ],
)
def test_path_match(request_path, cookie_path, expected):
    assert path_match(request_path, cookie_path) is expected
