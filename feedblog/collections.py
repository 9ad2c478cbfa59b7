from __future__ import annotations

import random
from collections.abc import Iterable, Iterator, Sequence

from .content import Post


class PostCollection(Sequence[Post]):
    """Lightweight helper for working with the ordered post list."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def head(self, count: int) -> PostCollection:
        return PostCollection(self._posts[:count])

    def find(self, slug: str) -> Post | None:
        """Return the first post whose slug equals slug exactly."""
        for post in self._posts:
            if post.slug == slug:
                return post
        return None

    def excluding(self, slug: str) -> PostCollection:
        return PostCollection(p for p in self._posts if p.slug != slug)

    def sample(self, count: int, rng: random.Random | None = None) -> PostCollection:
        """Pick up to count distinct posts in random order.

        Args:
            count: Maximum number of posts to return.
            rng: Randomness source; the module-level generator when omitted.
        """
        chooser = rng or random
        size = min(count, len(self._posts))
        return PostCollection(chooser.sample(self._posts, size))

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"
