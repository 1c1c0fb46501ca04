"""
Exception classes for the compile driver.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class CompileDriverError(Exception):
    """Base exception for all compile driver errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }


class CompileJobFailed(CompileDriverError):
    """Raised once when a compile job aborts on its first failed file.

    Diagnostics have already been reported by the time this is raised.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        display_path: Optional[str] = None,
        outcome: Any = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, details, error_code=error_code or "COMPILE_FAILED")
        self.source = source
        self.display_path = display_path
        self.outcome = outcome

        if source:
            self.details["source"] = source
        if display_path:
            self.details["display_path"] = display_path


class ConfigurationError(CompileDriverError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        valid_values: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, details, error_code=error_code or "CONFIGURATION_ERROR")
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []

        if config_key:
            self.details["config_key"] = config_key
        if valid_values:
            self.details["valid_values"] = valid_values

    def get_help_message(self) -> str:
        """Get error message with configuration help."""
        parts = [self.message]

        if self.config_key:
            parts.append(f"Configuration key: {self.config_key}")

        if self.valid_values:
            valid = ", ".join(str(v) for v in self.valid_values)
            parts.append(f"Valid values: {valid}")

        return " | ".join(parts)


class DiscoveryError(CompileDriverError):
    """Raised when source files cannot be discovered."""

    def __init__(
        self,
        message: str,
        source_dir: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, details, error_code=error_code or "DISCOVERY_ERROR")
        self.source_dir = source_dir

        if source_dir:
            self.details["source_dir"] = source_dir
