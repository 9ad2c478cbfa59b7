"""Feedblog content site.

This package serves a blog from a statically hosted JSON feed of posts.
It renders a list page, single-post pages and a JSON API that mirrors the
feed with an extracted thumbnail for each post.

The main entry point is the CLI module, which provides commands for
scaffolding a project, running the HTTP server and dumping the API output.

Modules are split by concern:
- renderer: {{KEY}} placeholder substitution.
- extractors: regex-based field extraction from post HTML.
- repository: cached, single-flight fetching of the upstream feed.
- pages / api: page and JSON assembly.
- site / server: request routing and the HTTP front end.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
