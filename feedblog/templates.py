"""Template loading for feedblog.

Page templates (layout.html, posts.html, single.html) are plain text with
``{{KEY}}`` placeholders and are filled by feedblog.renderer. Partials under
``_partials/`` are Jinja2 templates used for the menu fragments.

Both kinds are looked up first in the project's ``templates/`` directory and
then in the defaults shipped with the package, so a project only needs to
copy the files it wants to change.

Key class:
- TemplateStore: Resolves, caches and renders templates.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup

from .renderer import placeholders

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates" / "default"

# Placeholders each page template must contain to be usable
REQUIRED_PLACEHOLDERS = {
    "layout.html": ("PAGE_CONTENT",),
    "posts.html": ("POST_LIST",),
    "single.html": ("POST_CONTENT",),
}

__all__ = ["DEFAULT_TEMPLATES_DIR", "TemplateNotFound", "TemplateStore"]


class TemplateStore:
    """Resolve page templates and render Jinja2 partials.

    Attributes:
        search_dirs: Directories searched in order for templates.
        env: Jinja2 environment for partials.
    """

    def __init__(self, template_dir: Path | None = None):
        """Initialize the store.

        Args:
            template_dir: Optional project template directory that takes
                precedence over the packaged defaults.
        """
        self.search_dirs: list[Path] = []
        if template_dir is not None and template_dir.exists():
            self.search_dirs.append(template_dir)
        self.search_dirs.append(DEFAULT_TEMPLATES_DIR)
        self.env = Environment(
            loader=FileSystemLoader([d / "_partials" for d in self.search_dirs]),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self._sources: dict[str, str] = {}

    def get(self, name: str) -> str:
        """Return the text of a page template.

        Args:
            name: Template filename, e.g. "layout.html".

        Returns:
            Template source.

        Raises:
            TemplateNotFound: If no search directory contains the file.
        """
        if name in self._sources:
            return self._sources[name]
        for directory in self.search_dirs:
            path = directory / name
            if path.is_file():
                source = path.read_text(encoding="utf-8")
                self._check_placeholders(name, source, path)
                self._sources[name] = source
                return source
        raise TemplateNotFound(name)

    def render_partial(self, name: str, **context: Any) -> Markup:
        """Render a Jinja2 partial from ``_partials/``.

        Args:
            name: Partial filename, e.g. "footer_menu.html".
            **context: Variables available in the partial.

        Returns:
            Markup-safe rendered HTML.
        """
        template = self.env.get_template(name)
        return Markup(template.render(**context))

    @staticmethod
    def _check_placeholders(name: str, source: str, path: Path) -> None:
        present = set(placeholders(source))
        for key in REQUIRED_PLACEHOLDERS.get(name, ()):
            if key not in present:
                logger.warning("Template %s has no {{%s}} placeholder", path, key)
