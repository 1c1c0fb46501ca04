"""
Staleness checks based on last-modification times.
"""

import os
from typing import Optional

from .paths import PathLike


def last_modified(path: PathLike) -> Optional[int]:
    """Modification time in nanoseconds, or ``None`` if ``path`` is missing."""
    try:
        return os.stat(path).st_mtime_ns
    except FileNotFoundError:
        return None


def should_compile(source: PathLike, target: PathLike, enabled: bool = True) -> bool:
    """Whether ``target`` must be rebuilt from ``source``.

    Only a target strictly older than its source is stale. A missing target
    is always stale; a missing source never makes an existing target stale.
    """
    if not enabled:
        return True

    target_mtime = last_modified(target)
    if target_mtime is None:
        return True

    source_mtime = last_modified(source)
    if source_mtime is None:
        return False

    return target_mtime < source_mtime
