"""Field extractors for post HTML.

Upstream posts are scraped content. They carry boilerplate suffixes in titles,
trailing "related searches" blocks in bodies and broken-image fallbacks. The
functions here strip those known patterns with regular expressions rather
than a full HTML parser; the noise vocabulary is small and fixed.

Every function accepts None or an empty string and returns a default instead
of raising.

Functions:
    first_image: URL of the first usable image in a post body.
    clean_title: Title with site-name suffixes removed.
    main_content: Body with the trailing boilerplate block removed.
"""

from __future__ import annotations

import re

PLACEHOLDER_IMAGE = "https://placehold.co/300x200/png"

# src values containing this belong to onerror fallback images
BROKEN_IMAGE_MARKER = "this.onerror"

# Private-use character some feeds insert before a title's suffix
TITLE_CUTOFF_MARKER = ""

# Checked in order; the first one present wins
TITLE_SEPARATORS = (" | ", " – ")

CONTENT_END_MARKER = "If you are searching about"

_IMG_SRC_RE = re.compile(r'<img[^>]+src="([^"]+)"')


def first_image(html: str | None) -> str:
    """Return the src of the first usable ``<img>`` tag in html.

    Images whose src contains the onerror marker are skipped. ``&amp;`` in
    the chosen URL is decoded to ``&``.

    Args:
        html: Post body.

    Returns:
        Image URL, or PLACEHOLDER_IMAGE when no usable image exists.

    Examples:
        >>> first_image('<img src="https://ex.com/a.png?x=1&amp;y=2">')
        'https://ex.com/a.png?x=1&y=2'

        >>> first_image("")
        'https://placehold.co/300x200/png'
    """
    if not html:
        return PLACEHOLDER_IMAGE
    for match in _IMG_SRC_RE.finditer(html):
        url = match.group(1)
        if url and BROKEN_IMAGE_MARKER not in url:
            return url.replace("&amp;", "&")
    return PLACEHOLDER_IMAGE


def clean_title(title: str | None) -> str:
    """Strip a site-name suffix from a post title.

    Args:
        title: Raw title from the feed.

    Returns:
        The cleaned title; an empty string for empty input.

    Examples:
        >>> clean_title("My Post | Site Name")
        'My Post'

        >>> clean_title("Plain title")
        'Plain title'
    """
    if not title:
        return ""
    if TITLE_CUTOFF_MARKER in title:
        return title.split(TITLE_CUTOFF_MARKER, 1)[0].strip()
    for sep in TITLE_SEPARATORS:
        if sep in title:
            return title.split(sep, 1)[0].strip()
    return title


def main_content(html: str | None) -> str:
    """Return the post body up to the trailing boilerplate marker."""
    if not html:
        return ""
    index = html.find(CONTENT_END_MARKER)
    if index != -1:
        return html[:index]
    return html
