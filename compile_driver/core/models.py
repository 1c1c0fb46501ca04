"""
Data models for the compile driver.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union


class PathDisplayMode(Enum):
    """How a source path is rendered in diagnostics."""

    ABSOLUTE = "absolute"  # Symlinked directories resolved
    RELATIVE = "relative"  # Resolved, then relative to the working directory
    BUILD = "build"  # As given to the driver

    @classmethod
    def values(cls) -> List[str]:
        return [mode.value for mode in cls]


DEFAULT_PATH_DISPLAY_MODE = PathDisplayMode.RELATIVE


@dataclass(frozen=True)
class Location:
    """Position of a diagnostic inside a source file."""

    line: int
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.column is None:
            return str(self.line)
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class DiagnosticEntry:
    """A single error or warning produced by a compile operation.

    ``module`` identifies the description formatter able to render
    ``description`` as text.
    """

    module: Any
    description: Any
    location: Optional[Location] = None

    @classmethod
    def from_tuple(cls, raw: Union["DiagnosticEntry", Tuple[Any, ...]]) -> "DiagnosticEntry":
        """Build an entry from ``(module, desc)``, ``(line, module, desc)``
        or ``((line, column), module, desc)``."""
        if isinstance(raw, DiagnosticEntry):
            return raw

        if len(raw) == 2:
            module, description = raw
            return cls(module=module, description=description)

        if len(raw) == 3:
            position, module, description = raw
            if isinstance(position, Location):
                location = position
            elif isinstance(position, tuple):
                line, column = position
                location = Location(line=line, column=column)
            else:
                location = Location(line=position)
            return cls(module=module, description=description, location=location)

        raise ValueError(f"Unsupported diagnostic shape: {raw!r}")


# (source group id, entries) as produced by a compile operation
DiagnosticGroup = Tuple[str, List[DiagnosticEntry]]


def normalise_groups(groups: Iterable[Tuple[str, Sequence[Any]]]) -> List[DiagnosticGroup]:
    """Coerce raw diagnostic groups into ``DiagnosticGroup`` values."""
    return [
        (str(source), [DiagnosticEntry.from_tuple(entry) for entry in entries])
        for source, entries in groups
    ]


class CompileOutcome:
    """Base class for the result of compiling one source file."""

    #: Whether the job continues after this outcome
    succeeded: bool = False


@dataclass(frozen=True)
class Success(CompileOutcome):
    """Compiled without diagnostics."""

    succeeded = True


@dataclass(frozen=True)
class SuccessWithWarnings(CompileOutcome):
    """Compiled, with warnings to surface."""

    warnings: List[DiagnosticGroup] = field(default_factory=list)

    succeeded = True


@dataclass(frozen=True)
class Skipped(CompileOutcome):
    """Target is up to date; the compile operation was not invoked."""

    succeeded = True


@dataclass(frozen=True)
class Failure(CompileOutcome):
    """Compilation failed with errors (and possibly warnings)."""

    errors: List[DiagnosticGroup] = field(default_factory=list)
    warnings: List[DiagnosticGroup] = field(default_factory=list)


@dataclass(frozen=True)
class Unrecognized(CompileOutcome):
    """Any other result, including exceptions raised by a compile operation.

    When ``payload`` is itself a ``Failure`` its diagnostics are reported;
    otherwise the payload repr is reported against ``source``.
    """

    payload: Any = None
    source: Optional[str] = None


def coerce_outcome(value: Any) -> CompileOutcome:
    """Return ``value`` if it is an outcome, otherwise wrap it as unrecognized."""
    if isinstance(value, CompileOutcome):
        return value
    return Unrecognized(payload=value)


@dataclass
class FormattedResult:
    """Formatted diagnostic lines paired with a success flag."""

    success: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @property
    def lines(self) -> List[str]:
        return self.errors + self.warnings


@dataclass
class ScanOptions:
    """Options for directory-scan compile jobs."""

    recursive: bool = True
    check_last_mod: bool = True

    @classmethod
    def from_value(cls, value: Any = None) -> "ScanOptions":
        """Accept ``None``, a ``ScanOptions``, a mapping, or an option list.

        In an option list a bare name is a true flag; an absent
        ``check_last_mod`` flag disables the staleness check, while
        ``recursive`` keeps its default.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(
                recursive=bool(value.get("recursive", True)),
                check_last_mod=bool(value.get("check_last_mod", True)),
            )

        from .config import ListConfig

        options = ListConfig(value)
        return cls(
            recursive=bool(options.get("recursive", True)),
            check_last_mod=options.is_enabled("check_last_mod"),
        )


@dataclass
class JobSummary:
    """What a successful compile job did."""

    compiled: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    warned: List[str] = field(default_factory=list)
    duration: Optional[float] = None

    @property
    def total(self) -> int:
        return len(self.compiled) + len(self.skipped)

    def to_dict(self) -> dict:
        return {
            "compiled": len(self.compiled),
            "skipped": len(self.skipped),
            "warned": len(self.warned),
            "duration": self.duration,
        }
