"""JSON API for feedblog.

Mirrors the upstream feed, adding a ``featured_image`` field to every post.
Repository failures become a JSON error envelope with status 500 rather than
an exception.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from .extractors import first_image
from .repository import PostRepository

logger = logging.getLogger(__name__)

API_HEADERS = {
    "Content-Type": "application/json;charset=UTF-8",
    "Access-Control-Allow-Origin": "*",
    "Cache-Control": "s-maxage=3600",
}

ERROR_MESSAGE = "Failed to fetch data from the source."


@dataclass
class ApiResponse:
    """Status, headers and serialized body of an API call."""

    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)


class ApiAssembler:
    """Build the posts API response.

    Attributes:
        repository: Source of posts.
    """

    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def list_json(self) -> ApiResponse:
        """Return every post with its featured image as a JSON array."""
        try:
            posts = await self.repository.get_posts()
        except Exception as exc:
            logger.exception("API error")
            return self._error(exc)

        processed = []
        for post in posts:
            entry = post.to_dict()
            entry["featured_image"] = first_image(post.content)
            processed.append(entry)
        body = json.dumps(processed, indent=2, ensure_ascii=False)
        return ApiResponse(status=200, body=body, headers=dict(API_HEADERS))

    @staticmethod
    def _error(exc: Exception) -> ApiResponse:
        body = json.dumps(
            {"status": "error", "message": ERROR_MESSAGE, "details": str(exc)}
        )
        return ApiResponse(
            status=500,
            body=body,
            headers={"Content-Type": "application/json"},
        )
