"""Paginated listing of a GitHub repository's release tags."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator

import httpx

from relbisect.core.log import logger

_RATE_LIMIT_STATUS = (403, 429)


class RateLimitedError(Exception):
    """The release API refused a request because of its rate limit."""

    def __init__(self, page: int, message: str = ""):
        super().__init__(f"Rate limited fetching page {page}: {message}")
        self.page = page


def create_client(
    api_url: str, token: str | None = None, timeout: float | None = 30.0
) -> httpx.Client:
    """Build an httpx client for the GitHub REST API."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.Client(base_url=api_url, headers=headers, timeout=timeout)


def is_rate_limited(response: httpx.Response) -> bool:
    """True for GitHub's primary and secondary rate limit responses."""
    if response.status_code not in _RATE_LIMIT_STATUS:
        return False
    if response.headers.get("x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in response.text.lower()


class ReleaseLister:
    """Lists release tag names page by page.

    A rate-limited page is retried after a fixed backoff, forever,
    without advancing; the listing ends at the first empty page. Any
    other HTTP error propagates.
    """

    def __init__(
        self,
        client: httpx.Client,
        owner: str,
        repo: str,
        per_page: int = 25,
        backoff: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.owner = owner
        self.repo = repo
        self.per_page = per_page
        self.backoff = backoff
        self.sleep = sleep

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}/releases"

    def fetch_page(self, page: int) -> list[dict]:
        """Fetch one page of release objects.

        Raises:
            RateLimitedError: When the API signals its rate limit
            httpx.HTTPStatusError: On any other error response
        """
        response = self.client.get(
            self.path, params={"page": page, "per_page": self.per_page}
        )
        if is_rate_limited(response):
            raise RateLimitedError(page, response.reason_phrase)
        response.raise_for_status()
        return response.json()

    def iter_pages(self) -> Iterator[list[str]]:
        """Yield each non-empty page of tag names, starting at page 1."""
        page = 1
        while True:
            try:
                releases = self.fetch_page(page)
            except RateLimitedError:
                logger.warning(
                    f"Rate limited on page {page}, "
                    f"retrying in {self.backoff}s"
                )
                self.sleep(self.backoff)
                continue
            if not releases:
                return
            tags = [r["tag_name"] for r in releases if r.get("tag_name")]
            logger.debug(f"Listed {len(tags)} releases from page {page}")
            yield tags
            page += 1

    def iter_tags(self) -> Iterator[str]:
        """Yield every release tag name lazily."""
        for tags in self.iter_pages():
            yield from tags
