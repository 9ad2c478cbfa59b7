"""Shared page fragments: SEO metadata and menus.

The layout template expects a page title, a description and two menu
fragments. These are built from the site configuration here so the page
assembler only has to pass them through.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup, escape

from .templates import TemplateStore


@dataclass(frozen=True)
class SeoMeta:
    """Values for the layout's head section."""

    title: str
    description: str


def generate_meta(title: str, description: str = "", site_title: str = "") -> SeoMeta:
    """Build head metadata for a page.

    The site title is appended to page titles that differ from it. Page
    titles come from the feed as HTML text and are used unchanged; the site
    title and description come from the configuration as plain text and
    are escaped.

    Args:
        title: Page title (already cleaned).
        description: Page description.
        site_title: Site name from the configuration.

    Returns:
        SeoMeta ready for insertion into the layout.
    """
    site = str(escape(site_title or ""))
    full_title = title or site
    if site and title and title != site_title:
        full_title = f"{title} | {site}"
    return SeoMeta(title=full_title, description=str(escape(description or "")))


def _menu_items(menu: Iterable[Any] | None) -> list[dict[str, str]]:
    items = []
    for entry in menu or []:
        if not isinstance(entry, Mapping):
            continue
        label = entry.get("label")
        url = entry.get("url")
        if label and url:
            items.append({"label": str(label), "url": str(url)})
    return items


def mobile_menu(store: TemplateStore, menu: Iterable[Any] | None) -> Markup:
    """Render the header menu links."""
    return store.render_partial("mobile_menu.html", menu=_menu_items(menu))


def footer_menu(store: TemplateStore, menu: Iterable[Any] | None) -> Markup:
    """Render the footer menu list items."""
    return store.render_partial("footer_menu.html", menu=_menu_items(menu))
