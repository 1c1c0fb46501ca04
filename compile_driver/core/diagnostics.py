"""
Diagnostic formatting.

Compile operations report errors and warnings as groups of
``(source, [DiagnosticEntry, ...])``. This module turns those groups into
one text line per entry::

    <path>:<line>:<column>: <prefix><description>
    <path>:<line>: <prefix><description>
    <path>: <prefix><description>

The description text comes from the formatter registered for the entry's
module. The path is rendered with the job's ``compiler_source_format``
display mode, and warnings carry a ``Warning: `` prefix unless
``warnings_as_errors`` is set.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import COMPILER_SOURCE_FORMAT, WARNINGS_AS_ERRORS, ConfigLookup, as_config
from .models import (
    DEFAULT_PATH_DISPLAY_MODE,
    DiagnosticEntry,
    DiagnosticGroup,
    FormattedResult,
    PathDisplayMode,
    normalise_groups,
)
from .paths import PathLike, format_display_path
from .reporting import ConsoleReporter, Reporter

WARNING_PREFIX = "Warning: "

DescriptionFormatter = Callable[[Any], str]


class DescriptionFormatters:
    """Registry of description formatters keyed by module id.

    A module that is not registered but exposes ``format_error(description)``
    formats its own descriptions; anything else falls back to ``str``.
    """

    def __init__(self, formatters: Optional[Dict[Any, DescriptionFormatter]] = None):
        self._formatters: Dict[Any, DescriptionFormatter] = dict(formatters or {})

    def register(self, module: Any, formatter: DescriptionFormatter) -> None:
        self._formatters[module] = formatter

    def __contains__(self, module: object) -> bool:
        return module in self._formatters

    def format(self, module: Any, description: Any) -> str:
        formatter = self._formatters.get(module) if _hashable(module) else None
        if formatter is not None:
            return str(formatter(description))

        format_error = getattr(module, "format_error", None)
        if callable(format_error):
            return str(format_error(description))

        return str(description)


def _hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def warning_prefix(config: Any) -> str:
    """Prefix for warning lines under ``config``."""
    return "" if as_config(config).is_enabled(WARNINGS_AS_ERRORS) else WARNING_PREFIX


def resolve_source_format(config: Any, reporter: Optional[Reporter] = None) -> PathDisplayMode:
    """Read ``compiler_source_format``, warning about and replacing bad values."""
    value = as_config(config).get(COMPILER_SOURCE_FORMAT, DEFAULT_PATH_DISPLAY_MODE)
    if isinstance(value, PathDisplayMode):
        return value
    if isinstance(value, str) and value in PathDisplayMode.values():
        return PathDisplayMode(value)

    (reporter or ConsoleReporter()).warn(
        f"Invalid argument {value!r} for {COMPILER_SOURCE_FORMAT} - "
        f"assuming {DEFAULT_PATH_DISPLAY_MODE.value}"
    )
    return DEFAULT_PATH_DISPLAY_MODE


def format_error_source(
    path: PathLike,
    config: Any,
    cwd: Optional[PathLike] = None,
    reporter: Optional[Reporter] = None,
) -> str:
    """Render ``path`` using the display mode configured in ``config``."""
    return format_display_path(path, resolve_source_format(config, reporter), cwd)


class DiagnosticFormatter:
    """Formats diagnostic groups for one compile job."""

    def __init__(
        self,
        formatters: Optional[DescriptionFormatters] = None,
        path_mode: PathDisplayMode = DEFAULT_PATH_DISPLAY_MODE,
        cwd: Optional[PathLike] = None,
    ):
        self.formatters = formatters or DescriptionFormatters()
        self.path_mode = path_mode
        self.cwd = cwd

    def display_path(self, path: PathLike) -> str:
        return format_display_path(path, self.path_mode, self.cwd)

    def format_entry(self, display_path: str, prefix: str, entry: DiagnosticEntry) -> str:
        description = self.formatters.format(entry.module, entry.description)
        location = entry.location

        if location is None:
            return f"{display_path}: {prefix}{description}\n"
        if location.column is None:
            return f"{display_path}:{location.line}: {prefix}{description}\n"
        return f"{display_path}:{location.line}:{location.column}: {prefix}{description}\n"

    def format_groups(
        self, groups: Iterable[Tuple[str, Sequence[Any]]], prefix: str = ""
    ) -> List[str]:
        """One line per entry, in group order then entry order."""
        lines: List[str] = []
        for source, entries in normalise_groups(groups):
            display_path = self.display_path(source)
            lines.extend(self.format_entry(display_path, prefix, entry) for entry in entries)
        return lines

    def success_result(
        self, source: PathLike, warnings: Iterable[DiagnosticGroup], prefix: str = WARNING_PREFIX
    ) -> FormattedResult:
        return FormattedResult(success=True, warnings=self.format_groups(warnings, prefix))

    def failure_result(
        self,
        source: PathLike,
        errors: Iterable[DiagnosticGroup],
        warnings: Iterable[DiagnosticGroup],
        prefix: str = WARNING_PREFIX,
    ) -> FormattedResult:
        return FormattedResult(
            success=False,
            errors=self.format_groups(errors),
            warnings=self.format_groups(warnings, prefix),
        )


def format_diagnostic_groups(
    groups: Iterable[Tuple[str, Sequence[Any]]],
    path_mode: PathDisplayMode = DEFAULT_PATH_DISPLAY_MODE,
    cwd: Optional[PathLike] = None,
    prefix: str = "",
    formatters: Optional[DescriptionFormatters] = None,
) -> List[str]:
    """Format diagnostic groups into lines; see the module docstring."""
    return DiagnosticFormatter(formatters, path_mode, cwd).format_groups(groups, prefix)


def _formatter_for(
    config: ConfigLookup,
    formatters: Optional[DescriptionFormatters],
    cwd: Optional[PathLike],
    reporter: Optional[Reporter],
) -> DiagnosticFormatter:
    return DiagnosticFormatter(formatters, resolve_source_format(config, reporter), cwd)


def build_success_result(
    source: PathLike,
    warnings: Iterable[DiagnosticGroup],
    config: Any = None,
    formatters: Optional[DescriptionFormatters] = None,
    cwd: Optional[PathLike] = None,
    reporter: Optional[Reporter] = None,
) -> FormattedResult:
    """Formatted warnings paired with a success flag; warnings honour
    ``warnings_as_errors``."""
    lookup = as_config(config)
    return _formatter_for(lookup, formatters, cwd, reporter).success_result(
        source, warnings, warning_prefix(lookup)
    )


def build_failure_result(
    source: PathLike,
    errors: Iterable[DiagnosticGroup],
    warnings: Iterable[DiagnosticGroup],
    config: Any = None,
    formatters: Optional[DescriptionFormatters] = None,
    cwd: Optional[PathLike] = None,
    reporter: Optional[Reporter] = None,
) -> FormattedResult:
    """Formatted errors and warnings; warnings honour ``warnings_as_errors``."""
    lookup = as_config(config)
    return _formatter_for(lookup, formatters, cwd, reporter).failure_result(
        source, errors, warnings, warning_prefix(lookup)
    )
