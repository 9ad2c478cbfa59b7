"""Post model for feedblog.

This module turns the decoded upstream feed into Post objects.

Key items:
- Post: Dataclass for one feed entry.
- parse_posts: Validate a decoded JSON payload and build Posts from it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import ParseError


@dataclass(frozen=True)
class Post:
    """One content item from the upstream feed.

    Attributes:
        slug: URL path identifier.
        title: Raw title, possibly carrying a site-name suffix.
        content: HTML body.
        json_ld: Optional structured-data script block.
        raw: The feed entry as decoded, including fields feedblog ignores;
            None for posts not built from the feed.
    """

    slug: str
    title: str
    content: str
    json_ld: str = ""
    raw: Mapping[str, Any] | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Post:
        """Build a Post from one decoded feed entry.

        Raises:
            ParseError: If payload is not a JSON object.
        """
        if not isinstance(payload, Mapping):
            raise ParseError(
                f"Expected a post object, got {type(payload).__name__}"
            )
        return cls(
            slug=_as_text(payload.get("slug")),
            title=_as_text(payload.get("title")),
            content=_as_text(payload.get("content")),
            json_ld=_as_text(payload.get("json_ld")),
            raw=dict(payload),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the original feed fields."""
        if self.raw is not None:
            return dict(self.raw)
        return {
            "slug": self.slug,
            "title": self.title,
            "content": self.content,
            "json_ld": self.json_ld,
        }


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_posts(payload: Any) -> list[Post]:
    """Build Posts from the decoded posts.json document.

    Args:
        payload: Decoded JSON body.

    Returns:
        Posts in feed order.

    Raises:
        ParseError: If payload is not a list of objects.
    """
    if not isinstance(payload, list):
        raise ParseError(
            f"Expected a JSON array of posts, got {type(payload).__name__}"
        )
    return [Post.from_dict(item) for item in payload]
