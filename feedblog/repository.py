"""Post repository for feedblog.

Fetches the upstream posts.json once and keeps it for the life of the
process. The cache never expires; restarting the process is the only way to
pick up new posts.

Key classes:
- PostCache: Holder for the fetched post list, owned by the caller.
- PostRepository: Cache-or-fetch access to the post list.

Concurrency:
    get_posts is a coroutine. Fetch-and-populate runs under an asyncio.Lock,
    so callers on the same event loop that arrive before the first fetch
    finishes wait for it instead of issuing their own. The blocking HTTP call
    itself runs in a worker thread via asyncio.to_thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from .collections import PostCollection
from .config import feed_url
from .content import parse_posts
from .errors import FetchError, ParseError

logger = logging.getLogger(__name__)


class PostCache:
    """Most recently fetched post list, or empty before the first fetch.

    Attributes:
        posts: Cached posts, or None when nothing has been fetched.
        fetch_count: Number of upstream fetches that populated the cache.
    """

    def __init__(self) -> None:
        self.posts: PostCollection | None = None
        self.fetch_count = 0

    @property
    def populated(self) -> bool:
        return self.posts is not None

    def store(self, posts: PostCollection) -> None:
        self.posts = posts
        self.fetch_count += 1


class PostRepository:
    """Cache-or-fetch access to the upstream post list.

    Attributes:
        config: Site configuration (see feedblog.config).
        cache: Cache shared by every repository built around it.
        session: requests session used for the upstream call.
    """

    def __init__(
        self,
        config: dict[str, Any],
        cache: PostCache | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the repository.

        Args:
            config: Site configuration.
            cache: Optional existing cache; a fresh one is created otherwise.
            session: Optional requests session, mainly for tests.
        """
        self.config = config
        self.cache = cache or PostCache()
        self.session = session or requests.Session()
        self._lock = asyncio.Lock()

    async def get_posts(self) -> PostCollection:
        """Return all posts, fetching them on first use.

        Returns:
            Posts in feed order.

        Raises:
            ConfigurationError: If the feed owner or repository is not set.
            FetchError: If the upstream host answers with a non-2xx status.
            ParseError: If the body is not a JSON array of post objects.
        """
        if self.cache.populated:
            return self.cache.posts
        async with self._lock:
            # Another caller may have filled the cache while we waited.
            if self.cache.populated:
                return self.cache.posts
            url = feed_url(self.config)
            payload = await asyncio.to_thread(self._fetch, url)
            posts = PostCollection(parse_posts(payload))
            self.cache.store(posts)
            logger.info("Cached %d posts from %s", len(posts), url)
            return posts

    def _fetch(self, url: str) -> Any:
        """Perform the blocking GET and decode the JSON body."""
        logger.info("Fetching posts from %s", url)
        response = self.session.get(url, timeout=self.config.get("fetch_timeout"))
        if not response.ok:
            raise FetchError(url, response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON from {url}: {exc}") from exc
