"""HTML page assembly for feedblog.

Builds the list page and single-post pages from repository data, the field
extractors and the placeholder renderer. Every page body is rendered into
its own template first and then wrapped in the shared layout.

Key items:
- PageAssembler: Produces list and single-post HTML.
- post_card: Markup for one entry on the list page.
- related_posts: Markup for the related-posts list on a single page.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Any

from markupsafe import escape

from .collections import PostCollection
from .content import Post
from .errors import NotFoundError
from .extractors import clean_title, first_image, main_content
from .partials import SeoMeta, footer_menu, generate_meta, mobile_menu
from .renderer import render_template
from .repository import PostRepository
from .templates import TemplateStore


def post_card(post: Post) -> str:
    """Render the list-page card for a post."""
    title = clean_title(post.title)
    image = first_image(post.content)
    return (
        f'<div class="post-item"><a href="/{post.slug}">'
        f'<img src="{image}" alt="{title}" loading="lazy">'
        f"<h3>{title}</h3></a></div>"
    )


def related_posts(
    current_slug: str,
    posts: Iterable[Post],
    count: int = 5,
    rng: random.Random | None = None,
) -> str:
    """Render up to count randomly chosen posts other than the current one.

    Args:
        current_slug: Slug of the post being shown.
        posts: All posts.
        count: Maximum number of related posts.
        rng: Randomness source; pass a seeded Random for repeatable output.

    Returns:
        Concatenated ``<li>`` items. Posts without a slug render as nothing.
    """
    candidates = PostCollection(posts).excluding(current_slug)
    items = []
    for post in candidates.sample(count, rng):
        if post.slug:
            items.append(
                f'<li><a href="/{post.slug}">{clean_title(post.title)}</a></li>'
            )
    return "".join(items)


class PageAssembler:
    """Compose list and single-post pages.

    Attributes:
        repository: Source of posts.
        store: Template store.
        config: Site configuration.
        rng: Randomness source for related posts.
    """

    def __init__(
        self,
        repository: PostRepository,
        store: TemplateStore,
        config: dict[str, Any],
        rng: random.Random | None = None,
    ):
        self.repository = repository
        self.store = store
        self.config = config
        self.rng = rng or random.Random()

    async def list_page(self) -> str:
        """Render the home page with the first posts_per_page posts."""
        posts = await self.repository.get_posts()
        limit = int(self.config.get("posts_per_page", 8))
        cards = "".join(post_card(post) for post in posts.head(limit))
        page_content = render_template(
            self.store.get("posts.html"), {"POST_LIST": cards}
        )
        site_title = self.config.get("site_title", "")
        meta = generate_meta(
            "", self.config.get("site_description", ""), site_title
        )
        return self._render_layout(page_content, meta, json_ld="")

    async def single_page(self, slug: str) -> str:
        """Render the page for the post with the given slug.

        Raises:
            NotFoundError: If no post has this slug.
        """
        posts = await self.repository.get_posts()
        post = posts.find(slug)
        if post is None:
            raise NotFoundError(f"No post with slug {slug!r}")

        title = clean_title(post.title)
        page_content = render_template(
            self.store.get("single.html"),
            {
                "POST_TITLE": title,
                "POST_CONTENT": main_content(post.content),
                "RELATED_POSTS": related_posts(
                    slug,
                    posts,
                    int(self.config.get("related_count", 5)),
                    self.rng,
                ),
            },
        )
        meta = generate_meta(title, "", self.config.get("site_title", ""))
        return self._render_layout(page_content, meta, json_ld=post.json_ld)

    def _render_layout(self, page_content: str, meta: SeoMeta, json_ld: str) -> str:
        menu = self.config.get("menu")
        return render_template(
            self.store.get("layout.html"),
            {
                "SEO_TITLE": meta.title,
                "SEO_DESCRIPTION": meta.description,
                "PAGE_CONTENT": page_content,
                "SITE_TITLE": escape(self.config.get("site_title", "")),
                "MOBILE_MENU_LINKS": mobile_menu(self.store, menu),
                "FOOTER_MENU_LINKS": footer_menu(self.store, menu),
                "JSON_LD_SCRIPT": json_ld or "",
            },
        )
