"""
Tests for last-modified staleness checks.
"""

import os
from pathlib import Path

from compile_driver.core.staleness import last_modified, should_compile


def _touch(path: Path, mtime: float) -> Path:
    path.write_text("x")
    os.utime(path, (mtime, mtime))
    return path


class TestStaleness:
    """Test the staleness gate."""

    def test_disabled_always_compiles(self, temp_directory: Path) -> None:
        """Test an up-to-date target is rebuilt when checks are disabled."""
        source = _touch(temp_directory / "a.erl", 1000)
        target = _touch(temp_directory / "a.beam", 2000)

        assert should_compile(source, target, enabled=False) is True

    def test_missing_target_compiles(self, temp_directory: Path) -> None:
        """Test a missing target is always stale."""
        source = _touch(temp_directory / "a.erl", 1000)
        assert should_compile(source, temp_directory / "a.beam") is True

    def test_equal_mtimes_skip(self, temp_directory: Path) -> None:
        """Test equal timestamps do not trigger recompilation."""
        source = _touch(temp_directory / "a.erl", 1000)
        target = _touch(temp_directory / "a.beam", 1000)

        assert should_compile(source, target) is False

    def test_older_target_compiles(self, temp_directory: Path) -> None:
        """Test a target strictly older than its source is stale."""
        source = _touch(temp_directory / "a.erl", 2000)
        target = _touch(temp_directory / "a.beam", 1000)

        assert should_compile(source, target) is True

    def test_newer_target_skips(self, temp_directory: Path) -> None:
        """Test a newer target is up to date."""
        source = _touch(temp_directory / "a.erl", 1000)
        target = _touch(temp_directory / "a.beam", 2000)

        assert should_compile(source, target) is False

    def test_repeated_checks_agree(self, temp_directory: Path) -> None:
        """Test the check is idempotent for unchanged files."""
        source = _touch(temp_directory / "a.erl", 2000)
        target = _touch(temp_directory / "a.beam", 1000)

        assert should_compile(source, target) == should_compile(source, target)

    def test_missing_source_keeps_target(self, temp_directory: Path) -> None:
        """Test an existing target is not stale against a missing source."""
        target = _touch(temp_directory / "a.beam", 1000)
        assert should_compile(temp_directory / "a.erl", target) is False

    def test_last_modified_missing(self, temp_directory: Path) -> None:
        """Test last_modified returns None for missing files."""
        assert last_modified(temp_directory / "missing") is None
        assert last_modified(_touch(temp_directory / "present", 1000)) == 1000 * 10**9
