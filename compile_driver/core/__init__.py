"""
Core compile driver functionality.

This module contains the driver, its data models, path and staleness
helpers, and diagnostic formatting.
"""

from .commands import CommandCompiler, command_formatters
from .config import ConfigLookup, DictConfig, DriverSettings, ListConfig, as_config
from .diagnostics import (
    DescriptionFormatters,
    DiagnosticFormatter,
    build_failure_result,
    build_success_result,
    format_diagnostic_groups,
    format_error_source,
)
from .discovery import discover_sources, find_files
from .driver import CompileDriver, run, run_directory
from .exceptions import CompileDriverError, CompileJobFailed, ConfigurationError, DiscoveryError
from .models import (
    CompileOutcome,
    DiagnosticEntry,
    Failure,
    FormattedResult,
    JobSummary,
    Location,
    PathDisplayMode,
    ScanOptions,
    Skipped,
    Success,
    SuccessWithWarnings,
    Unrecognized,
)
from .paths import derive_target_path, format_display_path, remove_common_path
from .reporting import ConsoleReporter, MemoryReporter, Reporter
from .staleness import should_compile

__all__ = [
    # Driver
    "CompileDriver",
    "run",
    "run_directory",
    "CommandCompiler",
    "command_formatters",
    # Outcomes and diagnostics
    "CompileOutcome",
    "Success",
    "SuccessWithWarnings",
    "Skipped",
    "Failure",
    "Unrecognized",
    "DiagnosticEntry",
    "Location",
    "FormattedResult",
    "JobSummary",
    "ScanOptions",
    "PathDisplayMode",
    # Configuration
    "ConfigLookup",
    "ListConfig",
    "DictConfig",
    "DriverSettings",
    "as_config",
    # Formatting and paths
    "DescriptionFormatters",
    "DiagnosticFormatter",
    "format_diagnostic_groups",
    "format_error_source",
    "build_success_result",
    "build_failure_result",
    "derive_target_path",
    "remove_common_path",
    "format_display_path",
    "should_compile",
    "find_files",
    "discover_sources",
    # Reporting
    "Reporter",
    "ConsoleReporter",
    "MemoryReporter",
    # Exceptions
    "CompileDriverError",
    "CompileJobFailed",
    "ConfigurationError",
    "DiscoveryError",
]
