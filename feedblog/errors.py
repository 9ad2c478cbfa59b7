"""Error types raised by feedblog.

The repository raises these; the assemblers and the site router translate
them into HTTP responses.
"""

from __future__ import annotations


class FeedblogError(Exception):
    """Base class for all feedblog errors."""


class ConfigurationError(FeedblogError):
    """A required setting is missing."""


class FetchError(FeedblogError):
    """The upstream feed answered with a non-success status.

    Attributes:
        url: URL that was requested.
        status: HTTP status code returned by the upstream host.
    """

    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"Failed to fetch posts from {url}. Status: {status}")


class ParseError(FeedblogError):
    """The upstream feed body is not a JSON list of post objects."""


class NotFoundError(FeedblogError):
    """No post or route matches the requested path."""
