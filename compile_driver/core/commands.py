"""
Compile operation that runs an external command per source file.
"""

import re
import shlex
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

from .diagnostics import DescriptionFormatters
from .models import (
    CompileOutcome,
    DiagnosticEntry,
    Failure,
    Success,
    SuccessWithWarnings,
)

COMMAND_MODULE = "command"
PLACEHOLDER = re.compile(r"\{(source|target)\}")


def format_command_description(description: Any) -> str:
    return str(description).rstrip()


def command_formatters() -> DescriptionFormatters:
    """Description formatters for diagnostics produced by ``CommandCompiler``."""
    return DescriptionFormatters({COMMAND_MODULE: format_command_description})


class CommandCompiler:
    """Compile one source into one target by running a command template.

    ``{source}`` and ``{target}`` in the template are substituted after the
    template is split into arguments, so paths containing spaces stay intact.
    Any other braces are passed through unchanged.
    Each non-empty stderr line becomes a diagnostic against the source.
    """

    def __init__(self, command: str, env: Optional[Dict[str, str]] = None):
        self.command = command
        self.env = env
        self._argv_template = shlex.split(command)
        if not self._argv_template:
            raise ValueError("Compile command must not be empty")

    def build_argv(self, source: str, target: str) -> List[str]:
        values = {"source": source, "target": target}
        return [
            PLACEHOLDER.sub(lambda match: values[match.group(1)], arg)
            for arg in self._argv_template
        ]

    def __call__(self, source: str, target: str, config: Any) -> CompileOutcome:
        Path(target).parent.mkdir(parents=True, exist_ok=True)

        completed = subprocess.run(
            self.build_argv(source, target),
            capture_output=True,
            text=True,
            env=self.env,
            check=False,
        )

        messages = _lines(completed.stderr)
        if completed.returncode == 0:
            if not messages:
                return Success()
            return SuccessWithWarnings(warnings=[(source, _entries(messages))])

        messages = messages or _lines(completed.stdout)
        if not messages:
            messages = [f"command exited with status {completed.returncode}"]
        return Failure(errors=[(source, _entries(messages))])


def _lines(output: Optional[str]) -> List[str]:
    return [line for line in (output or "").splitlines() if line.strip()]


def _entries(messages: List[str]) -> List[DiagnosticEntry]:
    return [DiagnosticEntry(module=COMMAND_MODULE, description=message) for message in messages]
