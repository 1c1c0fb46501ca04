"""
Compile driver: runs a compile operation over a set of source files.
"""

import os
import time
from typing import Any, Callable, Iterable, List, NoReturn, Optional, Sequence

from .config import ConfigLookup, as_config
from .diagnostics import (
    DescriptionFormatters,
    DiagnosticFormatter,
    resolve_source_format,
    warning_prefix,
)
from .discovery import discover_sources
from .exceptions import CompileJobFailed
from .models import (
    CompileOutcome,
    Failure,
    JobSummary,
    ScanOptions,
    Skipped,
    Success,
    SuccessWithWarnings,
    Unrecognized,
    coerce_outcome,
)
from .paths import PathLike, derive_target_path
from .reporting import ConsoleReporter, Reporter, indent
from .staleness import should_compile

CompileFn = Callable[[str, ConfigLookup], Any]
CompileFn3 = Callable[[str, str, ConfigLookup], Any]


def exclude_files(files: Iterable[str], excluded: Iterable[str]) -> List[str]:
    """``files`` without any of ``excluded``, order preserved."""
    excluded_set = set(excluded)
    return [source for source in files if source not in excluded_set]


def merge_file_lists(first_files: Iterable[str], rest_files: Iterable[str]) -> List[str]:
    """``first_files`` followed by the ``rest_files`` not already among them."""
    first = list(first_files)
    return first + exclude_files(rest_files, first)


def compile_if_stale(
    source: str,
    target: str,
    compile_fn: CompileFn3,
    config: ConfigLookup,
    check_last_mod: bool = True,
) -> Any:
    """Call ``compile_fn`` unless ``target`` is up to date with ``source``."""
    if should_compile(source, target, check_last_mod):
        return compile_fn(source, target, config)
    return Skipped()


class CompileDriver:
    """Runs one compile job at a time, sequentially, stopping on the first failure."""

    def __init__(
        self,
        config: Any = None,
        reporter: Optional[Reporter] = None,
        formatters: Optional[DescriptionFormatters] = None,
        cwd: Optional[PathLike] = None,
    ):
        self.config = as_config(config)
        self.reporter = reporter or ConsoleReporter()
        self.formatters = formatters or DescriptionFormatters()
        self.cwd = cwd

    def run(
        self, first_files: Sequence[str], rest_files: Sequence[str], compile_fn: CompileFn
    ) -> JobSummary:
        """Apply ``compile_fn`` to ``first_files`` and then ``rest_files``.

        Returns a summary when every file compiled or was skipped; raises
        ``CompileJobFailed`` after reporting the first failure.
        """
        formatter = DiagnosticFormatter(
            self.formatters, resolve_source_format(self.config, self.reporter), self.cwd
        )
        summary = JobSummary()
        start_time = time.time()

        for source in merge_file_lists(first_files, rest_files):
            outcome = self._invoke(compile_fn, source)
            self._handle_outcome(source, outcome, formatter, summary)

        summary.duration = time.time() - start_time
        return summary

    def run_directory(
        self,
        first_files: Sequence[str],
        source_dir: PathLike,
        source_ext: str,
        target_dir: PathLike,
        target_ext: str,
        compile_fn: CompileFn3,
        options: Any = None,
    ) -> JobSummary:
        """Compile ``first_files`` and then every other source in ``source_dir``.

        Sources are files ending in ``source_ext``; each one's artifact is
        ``target_dir/<basename without source_ext><target_ext>``. ``options``
        accepts anything ``ScanOptions.from_value`` does.
        """
        scan_options = ScanOptions.from_value(options)
        found = discover_sources(source_dir, source_ext, scan_options.recursive)
        rest_files = exclude_files(found, first_files)

        self.reporter.debug(
            f"Found {len(found)} {source_ext} file(s) in {os.fspath(source_dir)}"
        )

        def compile_source(source: str, config: ConfigLookup) -> Any:
            target = derive_target_path(source, source_dir, source_ext, target_dir, target_ext)
            return compile_if_stale(source, target, compile_fn, config, scan_options.check_last_mod)

        return self.run(first_files, rest_files, compile_source)

    def _invoke(self, compile_fn: CompileFn, source: str) -> CompileOutcome:
        try:
            result = compile_fn(source, self.config)
        except Exception as e:
            return Unrecognized(payload=e, source=source)
        return coerce_outcome(result)

    def _handle_outcome(
        self,
        source: str,
        outcome: CompileOutcome,
        formatter: DiagnosticFormatter,
        summary: JobSummary,
    ) -> None:
        name = os.path.basename(source)

        if isinstance(outcome, Success):
            self.reporter.debug(f"{indent(1)}Compiled {name}")
            summary.compiled.append(source)
        elif isinstance(outcome, SuccessWithWarnings):
            try:
                result = formatter.success_result(
                    source, outcome.warnings, warning_prefix(self.config)
                )
            except Exception as e:
                self._fail(source, Unrecognized(payload=e, source=source), formatter)
            self.reporter.report(result.warnings)
            self.reporter.debug(f"{indent(1)}Compiled {name}")
            summary.compiled.append(source)
            summary.warned.append(source)
        elif isinstance(outcome, Skipped):
            self.reporter.debug(f"{indent(1)}Skipped {name}")
            summary.skipped.append(source)
        else:
            self._fail(source, outcome, formatter)

    def _fail(
        self, source: str, outcome: CompileOutcome, formatter: DiagnosticFormatter
    ) -> NoReturn:
        display_path = formatter.display_path(source)

        cause = None
        if isinstance(outcome, Unrecognized) and isinstance(outcome.payload, Exception):
            cause = outcome.payload

        try:
            lines = self._failure_lines(source, outcome, formatter)
        except Exception as e:
            # Unformattable diagnostics
            lines = [f"unexpected error compiling {source}", repr(e)]
            cause = e

        self.reporter.error(f"Compiling {display_path} failed")
        self.reporter.report(lines)
        self.reporter.debug(f"Compilation failed: {outcome!r}")

        raise CompileJobFailed(
            f"Compiling {display_path} failed",
            source=source,
            display_path=display_path,
            outcome=outcome,
        ) from cause

    def _failure_lines(
        self, source: str, outcome: CompileOutcome, formatter: DiagnosticFormatter
    ) -> List[str]:
        if isinstance(outcome, Failure):
            result = formatter.failure_result(
                source, outcome.errors, outcome.warnings, warning_prefix(self.config)
            )
            return result.lines

        if isinstance(outcome, Unrecognized):
            if isinstance(outcome.payload, Failure):
                return self._failure_lines(source, outcome.payload, formatter)
            return [
                f"unexpected error compiling {outcome.source or source}",
                repr(outcome.payload),
            ]

        return [f"unexpected error compiling {source}", repr(outcome)]


def run(
    config: Any,
    first_files: Sequence[str],
    rest_files: Sequence[str],
    compile_fn: CompileFn,
    reporter: Optional[Reporter] = None,
    formatters: Optional[DescriptionFormatters] = None,
) -> JobSummary:
    """Run a compile job over an explicit file list."""
    driver = CompileDriver(config, reporter, formatters)
    return driver.run(first_files, rest_files, compile_fn)


def run_directory(
    config: Any,
    first_files: Sequence[str],
    source_dir: PathLike,
    source_ext: str,
    target_dir: PathLike,
    target_ext: str,
    compile_fn: CompileFn3,
    options: Any = None,
    reporter: Optional[Reporter] = None,
    formatters: Optional[DescriptionFormatters] = None,
) -> JobSummary:
    """Run a compile job over ``first_files`` and the sources found in ``source_dir``."""
    driver = CompileDriver(config, reporter, formatters)
    return driver.run_directory(
        first_files, source_dir, source_ext, target_dir, target_ext, compile_fn, options
    )
