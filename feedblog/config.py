"""Configuration loading for feedblog.

Settings come from three layers, later ones winning:
- DEFAULT_CONFIG below.
- An optional feedblog.yaml in the project root.
- The GITHUB_USERNAME and REPO_NAME environment variables.

Missing feed settings are not an error here; the repository raises
ConfigurationError when it actually needs to build the feed URL.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

CONFIG_FILENAME = "feedblog.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "site_title": "Feedblog",
    "site_description": "",
    "menu": [],
    "host": "",
    "port": 4000,
    "api_path": "/api/posts",
    "feed_host": "raw.githubusercontent.com",
    "github_username": "",
    "repo_name": "",
    "posts_per_page": 8,
    "related_count": 5,
    "fetch_timeout": None,
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "GITHUB_USERNAME": "github_username",
    "REPO_NAME": "repo_name",
}


def load_config(
    project_root: Path, environ: dict[str, str] | None = None
) -> dict[str, Any]:
    """Load site configuration from feedblog.yaml and the environment.

    Args:
        project_root: Root directory of the project.
        environ: Environment mapping; defaults to os.environ.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config = DEFAULT_CONFIG.copy()
    config_path = project_root / CONFIG_FILENAME
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
    env = os.environ if environ is None else environ
    for var, key in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            config[key] = value
    return config


def feed_url(config: dict[str, Any]) -> str:
    """Build the upstream posts.json URL from the owner and repository settings.

    Raises:
        ConfigurationError: If either github_username or repo_name is unset.
    """
    owner = config.get("github_username")
    repo = config.get("repo_name")
    if not owner or not repo:
        raise ConfigurationError(
            "Settings GITHUB_USERNAME and REPO_NAME must both be configured."
        )
    host = config.get("feed_host") or DEFAULT_CONFIG["feed_host"]
    return f"https://{host}/{owner}/{repo}/main/public/data/posts.json"


def setup_logging(level: int = logging.INFO, name: str = "feedblog") -> logging.Logger:
    """Configure and return the package logger.

    Calling this more than once keeps the existing handler and only
    updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        for existing in logger.handlers:
            existing.setLevel(level)
        return logger
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
