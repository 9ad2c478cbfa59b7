"""Command-line interface for feedblog.

This module defines the CLI commands using Click framework.

Commands:
- new: Scaffold a project with a config file and overridable templates.
- serve: Run the HTTP server.
- posts: Print the JSON API output for the configured feed.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path

import click

from . import __version__
from .config import CONFIG_FILENAME, load_config, setup_logging
from .templates import DEFAULT_TEMPLATES_DIR


@click.group()
@click.version_option(version=__version__, prog_name="feedblog")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Feedblog content site."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new feedblog project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New feedblog project created at {target}")


@cli.command()
@click.option(
    "--port",
    type=int,
    required=False,
    help="Port to serve on (overrides feedblog.yaml)",
)
@click.option(
    "--host",
    required=False,
    help="Interface to bind (overrides feedblog.yaml)",
)
def serve(port: int | None, host: str | None):
    """Serve the site over HTTP."""
    project_root = Path.cwd()
    from .server import FeedblogServer

    server = FeedblogServer(project_root, http_port=port, host=host)
    server.start()


@cli.command()
def posts():
    """Print the posts API output."""
    project_root = Path.cwd()
    from .site import Site

    site = Site(load_config(project_root), template_dir=project_root / "templates")
    result = asyncio.run(site.api.list_json())
    if result.status != 200:
        raise click.ClickException(result.body)
    click.echo(result.body)


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the config file and template copies for a new project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in DEFAULT_TEMPLATES_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(DEFAULT_TEMPLATES_DIR)
        if rel_path.name == CONFIG_FILENAME:
            dest_path = root / rel_path
        else:
            dest_path = root / "templates" / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
