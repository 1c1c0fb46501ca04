"""
Command-line interface for the compile driver.
"""

import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .. import __version__
from ..core.commands import CommandCompiler, command_formatters
from ..core.config import DriverSettings
from ..core.driver import CompileDriver
from ..core.exceptions import CompileDriverError, CompileJobFailed, ConfigurationError
from ..core.models import JobSummary, PathDisplayMode, ScanOptions
from ..core.reporting import ConsoleReporter

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


def get_symbols() -> dict:
    """Get safe symbols for status messages."""
    encoding = (console.encoding or "").lower()
    if encoding.startswith("utf"):
        return {"ok": "✓", "fail": "✗", "warn": "⚠", "bullet": "•"}
    return {"ok": "[OK]", "fail": "[FAIL]", "warn": "[WARN]", "bullet": "*"}


SYMBOLS = get_symbols()


class SourceChangeHandler(FileSystemEventHandler):
    """Re-runs the compile job when a source file changes in watch mode."""

    def __init__(self, source_ext: str, rebuild: Callable[[], bool]):
        self.source_ext = source_ext
        self.rebuild = rebuild

    def _is_source(self, path: str) -> bool:
        name = Path(path).name
        return name.endswith(self.source_ext) and not name.startswith("._")

    def on_modified(self, event):
        if event.is_directory or not self._is_source(event.src_path):
            return

        console.print(f"[yellow]File changed: {escape(event.src_path)}[/yellow]")
        self.rebuild()

    def on_created(self, event):
        self.on_modified(event)


def create_settings(
    source_format: Optional[str],
    warnings_as_errors: Optional[bool],
    recursive: Optional[bool],
    check_last_mod: Optional[bool],
    verbose: bool,
) -> DriverSettings:
    """Create driver settings from the environment and CLI options."""

    # Start with environment-based settings
    settings = DriverSettings.from_environment()

    # Override with CLI options
    if source_format is not None:
        settings.compiler_source_format = source_format
    if warnings_as_errors is not None:
        settings.warnings_as_errors = warnings_as_errors
    if recursive is not None:
        settings.recursive = recursive
    if check_last_mod is not None:
        settings.check_last_mod = check_last_mod
    if verbose:
        settings.verbose = True

    return settings


def print_summary(summary: JobSummary, verbose: bool) -> None:
    duration = summary.duration or 0.0
    console.print(
        f"[green]{SYMBOLS['ok']} Compiled {len(summary.compiled)} file(s), "
        f"skipped {len(summary.skipped)} ({duration:.2f}s)[/green]"
    )

    if verbose and summary.warned:
        table = Table(title="Files With Warnings", show_header=True)
        table.add_column("Source", style="yellow")
        for source in summary.warned:
            table.add_row(source)
        console.print(table)


def compile_tree(
    settings: DriverSettings,
    compiler: CommandCompiler,
    first_files: List[str],
    source_dir: str,
    source_ext: str,
    target_dir: str,
    target_ext: str,
) -> bool:
    """Run one compile job. Returns True on success."""

    reporter = ConsoleReporter(verbose=settings.verbose)
    driver = CompileDriver(settings.to_config(), reporter, command_formatters())
    options = ScanOptions(recursive=settings.recursive, check_last_mod=settings.check_last_mod)

    try:
        summary = driver.run_directory(
            first_files, source_dir, source_ext, target_dir, target_ext, compiler, options
        )
    except CompileJobFailed as e:
        failed = escape(e.display_path or e.source or "")
        error_console.print(f"[red]{SYMBOLS['fail']} Compile job failed: {failed}[/red]")
        return False

    print_summary(summary, settings.verbose)
    return True


@click.command()
@click.argument(
    "source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.argument("target_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--source-ext", required=True, help="Extension of source files, e.g. .erl")
@click.option("--target-ext", required=True, help="Extension of compiled files, e.g. .beam")
@click.option(
    "-c",
    "--command",
    required=True,
    help="Compile command; {source} and {target} are substituted per file",
)
@click.option(
    "--first",
    "first_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Compile this file before all others (repeatable, order kept)",
)
@click.option(
    "--recursive/--no-recursive",
    default=None,
    help="Search SOURCE_DIR recursively (default: on)",
)
@click.option(
    "--check-last-mod/--no-check-last-mod",
    default=None,
    help="Skip sources whose target is up to date (default: on)",
)
@click.option(
    "--source-format",
    type=click.Choice(PathDisplayMode.values()),
    default=None,
    help="How source paths are shown in diagnostics",
)
@click.option(
    "--warnings-as-errors/--no-warnings-as-errors",
    default=None,
    help="Show warnings without the 'Warning: ' prefix",
)
@click.option("--verbose", is_flag=True, help="Show per-file progress and details")
@click.option("-w", "--watch", is_flag=True, help="Recompile when sources change")
@click.version_option(version=__version__, prog_name="compile-driver")
def main(
    source_dir: Path,
    target_dir: Path,
    source_ext: str,
    target_ext: str,
    command: str,
    first_files: Tuple[Path, ...],
    recursive: Optional[bool],
    check_last_mod: Optional[bool],
    source_format: Optional[str],
    warnings_as_errors: Optional[bool],
    verbose: bool,
    watch: bool,
) -> None:
    """
    Compile Driver - compile every SOURCE_DIR file that is newer than its
    artifact in TARGET_DIR, stopping at the first failure.
    """

    try:
        settings = create_settings(
            source_format, warnings_as_errors, recursive, check_last_mod, verbose
        )
    except ConfigurationError as e:
        raise click.ClickException(e.get_help_message())

    if settings.verbose:
        for warning in settings.validate():
            error_console.print(f"[yellow]{SYMBOLS['warn']} Config Warning: {warning}[/yellow]")

    try:
        compiler = CommandCompiler(command)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--command")

    sources = [str(path) for path in first_files]

    def rebuild() -> bool:
        try:
            return compile_tree(
                settings,
                compiler,
                sources,
                str(source_dir),
                source_ext,
                str(target_dir),
                target_ext,
            )
        except CompileDriverError as e:
            error_console.print(f"[red]{SYMBOLS['fail']} {escape(e.message)}[/red]")
            return False

    succeeded = rebuild()

    if not watch:
        if not succeeded:
            sys.exit(1)
        return

    console.print(
        f"\n[blue]Watching {source_dir} for changes... (Press Ctrl+C to stop)[/blue]"
    )

    event_handler = SourceChangeHandler(source_ext, rebuild)
    observer = Observer()
    observer.schedule(event_handler, str(source_dir), recursive=settings.recursive)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print(f"\n[yellow]{SYMBOLS['warn']} Stopping watch mode...[/yellow]")
        observer.stop()
    observer.join()


if __name__ == "__main__":
    main()
