"""``readshelf cache``: application cache maintenance."""

from __future__ import annotations

from pathlib import Path

import click
import click_extra as clickx

from readshelf.config import CACHE_DIR_ENV, get_cache_dir
from readshelf.service_layer.cache import clear_cache

from .helpers import success


@click.group(cls=clickx.ExtraGroup)
def cache() -> None:
    """Cache commands."""


@cache.command()
@click.option(
    "--cache-dir",
    "cache_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Cache directory to clear (defaults to ${CACHE_DIR_ENV} or the user cache dir).",
)
def clear(cache_dir: Path | None) -> None:
    """Remove everything from the application cache directory."""
    cache_dir = cache_dir or get_cache_dir()
    try:
        removed = clear_cache(cache_dir)
    except OSError as e:
        raise click.ClickException(f"Cannot clear cache {cache_dir}: {e}") from e
    success(f"Cache cleared ({removed} entries removed from {cache_dir}).")
