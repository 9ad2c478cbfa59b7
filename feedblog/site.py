"""Request routing for feedblog.

Classifies a request path and produces a Response:
- ``/``: list page.
- the API path (``/api/posts`` by default): JSON API.
- ``/<slug>``: single-post page, or a plain-text 404.
- anything deeper: plain-text 404.

Repository failures on page routes are logged and answered with a 500 HTML
error page.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import requests

from .api import ApiAssembler
from .errors import FeedblogError, NotFoundError
from .pages import PageAssembler
from .repository import PostCache, PostRepository
from .templates import TemplateStore

logger = logging.getLogger(__name__)

HTML_HEADERS = {"Content-Type": "text/html;charset=UTF-8"}
TEXT_HEADERS = {"Content-Type": "text/plain;charset=UTF-8"}

POST_NOT_FOUND = "Post not found"
PAGE_NOT_FOUND = "Page not found"

ERROR_PAGE = (
    "<!DOCTYPE html><html><head><title>Error</title></head>"
    "<body><h1>Something went wrong</h1>"
    "<p>Posts could not be loaded. Please try again later.</p></body></html>"
)


@dataclass
class Response:
    """HTTP response produced by the site."""

    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)


class Site:
    """Wire together the repository, assemblers and routing.

    Attributes:
        config: Site configuration.
        cache: Post cache shared by every request handled by this site.
        repository: Post repository built on the cache.
        store: Template store.
        pages: Page assembler.
        api: API assembler.
    """

    def __init__(
        self,
        config: dict[str, Any],
        template_dir: Path | None = None,
        cache: PostCache | None = None,
        session: requests.Session | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.cache = cache or PostCache()
        self.repository = PostRepository(config, self.cache, session=session)
        self.store = TemplateStore(template_dir)
        self.pages = PageAssembler(self.repository, self.store, config, rng=rng)
        self.api = ApiAssembler(self.repository)

    @property
    def api_path(self) -> str:
        return "/" + str(self.config.get("api_path", "/api/posts")).strip("/")

    async def handle(self, target: str) -> Response:
        """Route a GET request target to the matching handler.

        Args:
            target: Request target, possibly with a query string.

        Returns:
            The response to send.
        """
        path = urlsplit(target).path or "/"
        if path.rstrip("/") == self.api_path:
            result = await self.api.list_json()
            return Response(result.status, result.body, result.headers)
        if path == "/":
            return await self._page(self.pages.list_page())

        # Segments are compared still percent-encoded, as sent by the client
        parts = [part for part in path.split("/") if part]
        if len(parts) == 1:
            return await self._page(self.pages.single_page(parts[0]))
        return Response(404, PAGE_NOT_FOUND, dict(TEXT_HEADERS))

    async def _page(self, render) -> Response:
        try:
            html = await render
        except NotFoundError:
            return Response(404, POST_NOT_FOUND, dict(TEXT_HEADERS))
        except (FeedblogError, requests.RequestException):
            logger.exception("Failed to render page")
            return Response(500, ERROR_PAGE, dict(HTML_HEADERS))
        return Response(200, html, dict(HTML_HEADERS))
