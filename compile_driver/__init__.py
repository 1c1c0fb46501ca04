"""
Compile Driver

Incremental, fail-fast compile-job driver. Decides which source files need
(re)compiling, runs a caller-supplied compile operation over them in order,
and formats the errors and warnings it returns.
"""

from typing import Any, Dict

__version__ = "1.0.0"

# Core exports
from .core.commands import CommandCompiler, command_formatters
from .core.config import ConfigLookup, DictConfig, DriverSettings, ListConfig, as_config
from .core.diagnostics import (
    DescriptionFormatters,
    build_failure_result,
    build_success_result,
    format_diagnostic_groups,
    format_error_source,
)
from .core.driver import CompileDriver, run, run_directory
from .core.exceptions import (
    CompileDriverError,
    CompileJobFailed,
    ConfigurationError,
    DiscoveryError,
)
from .core.models import (
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
from .core.paths import derive_target_path, format_display_path
from .core.reporting import ConsoleReporter, MemoryReporter, Reporter
from .core.staleness import should_compile

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
    "format_diagnostic_groups",
    "format_error_source",
    "build_success_result",
    "build_failure_result",
    "derive_target_path",
    "format_display_path",
    "should_compile",
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


def get_version() -> str:
    """Get the current version of Compile Driver."""
    return __version__


def get_driver_info() -> Dict[str, Any]:
    """Get information about the driver's modes and options."""
    return {
        "version": __version__,
        "path_display_modes": PathDisplayMode.values(),
        "scan_options": ["recursive", "check_last_mod"],
        "config_keys": ["compiler_source_format", "warnings_as_errors"],
    }
