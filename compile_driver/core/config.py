"""
Configuration lookup and driver settings.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from .exceptions import ConfigurationError
from .models import DEFAULT_PATH_DISPLAY_MODE, PathDisplayMode

_MISSING = object()

WARNINGS_AS_ERRORS = "warnings_as_errors"
COMPILER_SOURCE_FORMAT = "compiler_source_format"


class ConfigLookup(ABC):
    """Read-only key/value view over a project configuration."""

    @abstractmethod
    def _lookup(self, key: str) -> Any:
        """Return the value for ``key`` or ``_MISSING``."""

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else value

    def is_enabled(self, key: str) -> bool:
        """True when ``key`` is set to a truthy value."""
        return bool(self.get(key, False))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._lookup(key) is not _MISSING


class ListConfig(ConfigLookup):
    """Ordered association list of bare flags and ``(key, value)`` pairs.

    A bare flag reads as ``True``; the first entry for a key wins.
    """

    def __init__(self, entries: Optional[Iterable[Any]] = None):
        self._entries = list(entries or [])

    def _lookup(self, key: str) -> Any:
        for entry in self._entries:
            if isinstance(entry, tuple) and len(entry) == 2:
                if entry[0] == key:
                    return entry[1]
            elif entry == key:
                return True
        return _MISSING

    def __repr__(self) -> str:
        return f"ListConfig({self._entries!r})"


class DictConfig(ConfigLookup):
    """Mapping-backed configuration."""

    def __init__(self, mapping: Optional[Mapping[str, Any]] = None):
        self._mapping = dict(mapping or {})

    def _lookup(self, key: str) -> Any:
        return self._mapping.get(key, _MISSING)

    def __repr__(self) -> str:
        return f"DictConfig({self._mapping!r})"


def as_config(value: Any = None) -> ConfigLookup:
    """Wrap a list, tuple or mapping as a ``ConfigLookup``."""
    if isinstance(value, ConfigLookup):
        return value
    if value is None:
        return DictConfig()
    if isinstance(value, Mapping):
        return DictConfig(value)
    if isinstance(value, (list, tuple)):
        return ListConfig(value)

    raise ConfigurationError(
        f"Unsupported configuration type: {type(value).__name__}",
        config_value=value,
        valid_values=["list", "tuple", "mapping"],
    )


def _env_flag(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None

    lowered = raw.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False

    raise ConfigurationError(
        f"Invalid boolean value for {name}: {raw}",
        config_key=name,
        config_value=raw,
        valid_values=["true", "false"],
    )


@dataclass
class DriverSettings:
    """Settings for a compile job, typically built for the CLI."""

    compiler_source_format: str = DEFAULT_PATH_DISPLAY_MODE.value
    warnings_as_errors: bool = False
    recursive: bool = True
    check_last_mod: bool = True
    verbose: bool = False

    @classmethod
    def from_environment(cls) -> "DriverSettings":
        """Create settings from environment variables."""
        settings = cls()

        if source_format := os.getenv("COMPILE_DRIVER_SOURCE_FORMAT"):
            settings.compiler_source_format = source_format.strip().lower()

        if (flag := _env_flag("COMPILE_DRIVER_WARNINGS_AS_ERRORS")) is not None:
            settings.warnings_as_errors = flag

        if (flag := _env_flag("COMPILE_DRIVER_RECURSIVE")) is not None:
            settings.recursive = flag

        if (flag := _env_flag("COMPILE_DRIVER_CHECK_LAST_MOD")) is not None:
            settings.check_last_mod = flag

        if (flag := _env_flag("COMPILE_DRIVER_VERBOSE")) is not None:
            settings.verbose = flag

        return settings

    def to_config(self) -> DictConfig:
        """Project configuration handed to the driver and compile operations."""
        return DictConfig(
            {
                COMPILER_SOURCE_FORMAT: self.compiler_source_format,
                WARNINGS_AS_ERRORS: self.warnings_as_errors,
            }
        )

    def validate(self) -> List[str]:
        """Validate settings and return any warnings."""
        warnings = []

        if self.compiler_source_format not in PathDisplayMode.values():
            warnings.append(
                f"Unknown compiler_source_format '{self.compiler_source_format}' - "
                f"{DEFAULT_PATH_DISPLAY_MODE.value} will be used"
            )

        if not self.check_last_mod:
            warnings.append("Last-modified checks are disabled - every file will be recompiled")

        return warnings
