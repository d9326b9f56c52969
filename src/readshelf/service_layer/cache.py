"""Application cache maintenance.

readshelf keeps derived data (fetched article assets, rendered exports) under
a cache directory, see :func:`readshelf.config.get_cache_dir`. Everything in
it can be rebuilt, so clearing it is always safe.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from readshelf.config import get_cache_dir

logger = logging.getLogger(__name__)


def clear_cache(cache_dir: Path | None = None) -> int:
    """Remove everything inside the cache directory.

    The directory itself is kept (and created if missing).

    Args:
        cache_dir: Directory to clear; defaults to the configured cache dir.

    Returns:
        int: Number of top-level entries removed.
    """
    cache_dir = cache_dir or get_cache_dir()
    cache_dir.mkdir(parents=True, exist_ok=True)

    removed = 0
    for child in cache_dir.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
        removed += 1

    logger.info("Cleared %d cache entries from %s", removed, cache_dir)
    return removed
