"""CLI interface for Tutorhost.

Command-line tool for serving and inspecting interactive tutorials.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from tutorhost.config import Config
from tutorhost.core.handler import PageError, Redirect
from tutorhost.core.router import SlugRouter
from tutorhost.core.types import tutorial_path

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover tutorhost.toml)",
)

source_dir_option = click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Tutorial source directory (overrides config)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
def cli(verbose: bool) -> None:
    """Tutorhost - interactive tutorial exercise server."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@config_option
@source_dir_option
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Cache directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--cache/--no-cache",
    default=None,
    help="Enable/disable caching (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    cache_dir: Path | None,
    host: str | None,
    port: int | None,
    cache: bool | None,
) -> None:
    """Start the tutorial server."""
    from tutorhost.server import run_server

    config = Config.load(config_path).with_overrides(
        host=host,
        port=port,
        source_dir=source_dir,
        cache_dir=cache_dir,
        cache_enabled=cache,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Source directory: {config.content.source_dir}")
    if config.content.cache_enabled:
        click.echo(f"Cache directory: {config.content.cache_dir}")
    else:
        click.echo("Cache: disabled")

    run_server(config)


@cli.command()
@config_option
def entries(config_path: Path | None) -> None:
    """List tutorial paths that need prerendered redirect pages."""
    try:
        config = Config.load(config_path)
        router = SlugRouter(config.redirects)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    for slug in router.entries():
        click.echo(tutorial_path(slug))


@cli.command()
@click.argument("slug")
@config_option
@source_dir_option
def resolve(slug: str, config_path: Path | None, source_dir: Path | None) -> None:
    """Resolve SLUG the way the server would and print the outcome."""
    from tutorhost.server import create_handler

    try:
        config = Config.load(config_path).with_overrides(
            source_dir=source_dir,
            cache_enabled=False,
        )
        _, handler = create_handler(config)
        outcome = asyncio.run(handler.handle(slug))
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if isinstance(outcome, Redirect):
        click.echo(f"Redirect ({outcome.status}): {outcome.location}")
    elif isinstance(outcome, PageError):
        click.echo(click.style(f"{outcome.status}: {outcome.message}", fg="red"), err=True)
        sys.exit(1)
    else:
        exercise = outcome.data["exercise"]
        click.echo(f"Found: {exercise['title']}")
        summary = {k: v for k, v in exercise.items() if k not in ("a", "b", "html")}
        click.echo(json.dumps(summary, indent=2))
