"""
Path resolution: target artifact paths and display paths for diagnostics.
"""

import os
from pathlib import PurePath
from typing import List, Optional, Union

from .models import PathDisplayMode

PathLike = Union[str, "os.PathLike[str]"]


def remove_common_path(fname: PathLike, path: PathLike) -> str:
    """Drop the leading segments ``fname`` shares with ``path``.

    Matching stops at the first differing segment; what is left of
    ``fname`` is returned.
    """
    fname_parts: List[str] = list(PurePath(fname).parts)
    path_parts: List[str] = list(PurePath(path).parts)

    shared = 0
    for fname_part, path_part in zip(fname_parts, path_parts):
        if fname_part != path_part:
            break
        shared += 1

    remaining = fname_parts[shared:]
    if not remaining:
        return ""
    return str(PurePath(*remaining))


def derive_target_path(
    source_file: PathLike,
    source_dir: PathLike,
    source_ext: str,
    target_dir: PathLike,
    target_ext: str,
) -> str:
    """Path of the artifact compiled from ``source_file``.

    >>> derive_target_path("/proj/src/a/b.erl", "/proj/src", ".erl", "/proj/ebin", ".beam")
    '/proj/ebin/b.beam'
    """
    base_file = remove_common_path(source_file, source_dir)
    base_name = os.path.basename(base_file)
    if source_ext and base_name.endswith(source_ext):
        base_name = base_name[: -len(source_ext)]
    return os.path.join(os.fspath(target_dir), base_name + target_ext)


def resolve_linked_source(path: PathLike) -> str:
    """Resolve symlinks in the containing directory of ``path``.

    The file name itself is kept verbatim, even if it is a link.
    """
    directory, base = os.path.split(os.fspath(path))
    return os.path.join(os.path.realpath(directory or os.curdir), base)


def format_display_path(
    path: PathLike, mode: PathDisplayMode, cwd: Optional[PathLike] = None
) -> str:
    """Render ``path`` for a diagnostic according to ``mode``."""
    if mode is PathDisplayMode.BUILD:
        return os.fspath(path)

    resolved = resolve_linked_source(path)
    if mode is PathDisplayMode.ABSOLUTE:
        return resolved

    base = os.path.realpath(os.fspath(cwd) if cwd is not None else os.getcwd())
    try:
        return os.path.relpath(resolved, base)
    except ValueError:
        # Different drives on Windows
        return resolved
