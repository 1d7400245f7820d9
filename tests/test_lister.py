"""Tests for the paginated GitHub release lister."""

import httpx
import pytest

from relbisect.release.lister import (
    RateLimitedError,
    ReleaseLister,
    create_client,
    is_rate_limited,
)


def releases(*tags):
    return [{"tag_name": t, "name": t} for t in tags]


class FakeGitHub:
    """Serves fixed pages; selected page requests are rate limited once."""

    def __init__(self, pages, rate_limited=(), status=403):
        self.pages = pages
        self.rate_limited = set(rate_limited)
        self.status = status
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        self.requests.append(page)
        if page in self.rate_limited:
            self.rate_limited.discard(page)
            return httpx.Response(
                self.status,
                headers={"x-ratelimit-remaining": "0"},
                json={"message": "API rate limit exceeded"},
            )
        body = self.pages[page - 1] if page <= len(self.pages) else []
        return httpx.Response(200, json=body)


def make_lister(handler, sleeps=None):
    client = httpx.Client(
        base_url="https://api.example.test",
        transport=httpx.MockTransport(handler),
    )
    return ReleaseLister(
        client,
        "pulumi",
        "pulumi",
        per_page=2,
        backoff=0.5,
        sleep=(sleeps.append if sleeps is not None else lambda s: None),
    )


def test_lists_all_pages_until_empty():
    server = FakeGitHub([releases("v3.2.0", "v3.1.0"), releases("v3.0.0")])

    tags = list(make_lister(server).iter_tags())

    assert tags == ["v3.2.0", "v3.1.0", "v3.0.0"]
    assert server.requests == [1, 2, 3]


def test_rate_limited_page_is_retried_without_gaps():
    """A rate limit on page 2 retries page 2 after the backoff."""
    server = FakeGitHub(
        [
            releases("v1.3.0", "v1.2.0"),
            releases("v1.1.0", "v1.0.0"),
            releases("v0.9.0"),
        ],
        rate_limited={2},
    )
    sleeps = []

    tags = list(make_lister(server, sleeps).iter_tags())

    assert tags == ["v1.3.0", "v1.2.0", "v1.1.0", "v1.0.0", "v0.9.0"]
    assert server.requests == [1, 2, 2, 3, 4]
    assert sleeps == [0.5]


def test_secondary_rate_limit_429_is_retried():
    server = FakeGitHub([releases("v1.0.0")], rate_limited={1}, status=429)
    sleeps = []

    assert list(make_lister(server, sleeps).iter_tags()) == ["v1.0.0"]
    assert sleeps == [0.5]


def test_request_parameters():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    list(make_lister(handler).iter_pages())

    assert seen[0].url.path == "/repos/pulumi/pulumi/releases"
    assert seen[0].url.params["per_page"] == "2"
    assert seen[0].url.params["page"] == "1"


def test_releases_without_tag_are_skipped():
    server = FakeGitHub([[{"tag_name": ""}, {"tag_name": "v1.0.0"}, {}]])

    assert list(make_lister(server).iter_tags()) == ["v1.0.0"]


def test_other_errors_are_fatal():
    def handler(request):
        return httpx.Response(404, json={"message": "Not Found"})

    with pytest.raises(httpx.HTTPStatusError):
        list(make_lister(handler).iter_tags())


def test_forbidden_without_rate_limit_is_fatal():
    def handler(request):
        return httpx.Response(
            403,
            headers={"x-ratelimit-remaining": "42"},
            json={"message": "Resource not accessible"},
        )

    with pytest.raises(httpx.HTTPStatusError):
        list(make_lister(handler).iter_tags())


def test_fetch_page_raises_rate_limited():
    server = FakeGitHub([releases("v1.0.0")], rate_limited={1})

    with pytest.raises(RateLimitedError) as excinfo:
        make_lister(server).fetch_page(1)
    assert excinfo.value.page == 1


def test_iter_tags_is_lazy():
    server = FakeGitHub([releases("v2.0.0"), releases("v1.0.0")])

    tags = make_lister(server).iter_tags()
    assert next(tags) == "v2.0.0"
    assert server.requests == [1]


def test_is_rate_limited_by_message():
    response = httpx.Response(
        403, json={"message": "You have exceeded a secondary rate limit"}
    )

    assert is_rate_limited(response)
    assert not is_rate_limited(httpx.Response(200, json=[]))


def test_create_client_sends_token():
    client = create_client("https://api.example.test", token="secret")

    assert client.headers["Authorization"] == "Bearer secret"
    assert "Authorization" not in create_client("https://x.test").headers
