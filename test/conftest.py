"""
Shared pytest fixtures for all tests.

Provides temporary source trees, in-memory reporters and recording compile
operations for exercising the compile driver.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional

import pytest

from compile_driver import MemoryReporter, Success
from compile_driver.core.models import CompileOutcome


class RecordingCompiler:
    """Compile operation that records calls and returns scripted outcomes.

    Works with both the two-argument and three-argument call shapes.
    """

    def __init__(self, outcomes: Optional[Dict[str, Any]] = None, default: Any = None):
        self.outcomes = outcomes or {}
        self.default = default if default is not None else Success()
        self.calls: List[str] = []
        self.targets: List[str] = []
        self.configs: List[Any] = []

    def _outcome_for(self, source: str) -> Any:
        outcome = self.outcomes.get(os.path.basename(source), self.default)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def __call__(self, source: str, *args: Any) -> CompileOutcome:
        self.calls.append(source)
        if len(args) == 2:
            target, config = args
            self.targets.append(target)
        else:
            (config,) = args
        self.configs.append(config)
        return self._outcome_for(source)

    @property
    def basenames(self) -> List[str]:
        return [os.path.basename(source) for source in self.calls]


@pytest.fixture
def temp_directory() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Automatically cleaned up after the test completes.
    """
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def reporter() -> MemoryReporter:
    """Reporter that captures messages and report lines in memory."""
    return MemoryReporter()


@pytest.fixture
def recording_compiler() -> Callable[..., RecordingCompiler]:
    """Factory for recording compile operations."""
    return RecordingCompiler


@pytest.fixture
def source_tree(temp_directory: Path) -> Dict[str, Path]:
    """
    A small project: ``src`` with sources (one nested, one metadata file,
    one unrelated file) and an empty ``ebin`` target directory.
    """
    src = temp_directory / "src"
    nested = src / "nested"
    ebin = temp_directory / "ebin"
    nested.mkdir(parents=True)
    ebin.mkdir()

    for path in [src / "a.erl", src / "b.erl", src / "c.erl", nested / "d.erl"]:
        path.write_text(f"-module({path.stem}).\n")
    (src / "._a.erl").write_text("metadata")
    (src / "notes.txt").write_text("not a source")

    return {"root": temp_directory, "src": src, "nested": nested, "ebin": ebin}


def pytest_configure(config: Any) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config: Any, items: List[Any]) -> None:
    """Modify test collection to add markers based on test location."""
    for item in items:
        # Add integration marker to tests in integration directory
        if "integration" in str(item.path):
            item.add_marker(pytest.mark.integration)

        # Add unit marker to tests in core directory
        if "core" in str(item.path):
            item.add_marker(pytest.mark.unit)
