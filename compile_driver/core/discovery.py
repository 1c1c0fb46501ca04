"""
Source file discovery.
"""

import re
from pathlib import Path
from typing import List, Pattern, Union

from .exceptions import DiscoveryError
from .paths import PathLike


def extension_pattern(source_ext: str) -> Pattern[str]:
    """Regex matching names ending in ``source_ext`` that do not start with ``._``."""
    return re.compile(r"^(?!\._).*" + re.escape(source_ext) + r"$")


def find_files(
    root: PathLike, pattern: Union[str, Pattern[str]], recursive: bool = True
) -> List[str]:
    """List files under ``root`` whose names match ``pattern``.

    Directory entries are visited in sorted order so discovery order is
    stable across platforms.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise DiscoveryError(f"Source directory not found: {root}", source_dir=str(root))

    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    found: List[str] = []
    _collect(root_path, regex, recursive, found)
    return found


def _collect(directory: Path, regex: Pattern[str], recursive: bool, found: List[str]) -> None:
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            if recursive:
                _collect(entry, regex, recursive, found)
        elif regex.match(entry.name):
            found.append(str(entry))


def discover_sources(source_dir: PathLike, source_ext: str, recursive: bool = True) -> List[str]:
    """Compilable sources under ``source_dir`` with extension ``source_ext``."""
    return find_files(source_dir, extension_pattern(source_ext), recursive)
