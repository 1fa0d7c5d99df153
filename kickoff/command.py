"""
command.py

Responsibility: run the external executables the generator depends on (git, npm).

Rules:
- A command either exits 0 or raises `ExecutionError`; failures are never swallowed.
- Non-verbose runs capture output behind a spinner and attach it to the error.
- Verbose runs stream the child's stdout/stderr straight to the terminal.
- The working directory is always passed explicitly, never changed process-wide.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.markup import escape

from kickoff.console import console as default_console

logger = logging.getLogger(__name__)


class ExecutionError(RuntimeError):
    def __init__(self, message: str, *, spec: CommandSpec, returncode: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.spec = spec
        self.returncode = returncode
        self.output = output


class PreflightError(RuntimeError):
    def __init__(self, name: str, link: str) -> None:
        super().__init__(f"{name} is required to run this generator, check {link}")
        self.name = name
        self.link = link


@dataclass(frozen=True)
class CommandSpec:
    """One external command invocation."""

    description: str
    name: str
    args: tuple[str, ...] = ()
    verbose: bool = False
    fail_message: str | None = None
    cwd: Path | None = None

    @property
    def argv(self) -> list[str]:
        return [self.name, *self.args]


Runner = Callable[[CommandSpec], None]


def run_command(spec: CommandSpec, *, console: Console | None = None) -> None:
    """
    Run `spec`, raising ExecutionError on a non-zero exit or when it cannot be spawned.
    """
    out = console or default_console
    message = spec.fail_message or f"{spec.name} failed"
    cwd = str(spec.cwd) if spec.cwd is not None else None
    logger.debug("Running %s (cwd=%s)", " ".join(spec.argv), cwd or ".")

    try:
        if spec.verbose:
            out.print(f"[cyan]{escape(spec.description)}[/cyan]")
            result = subprocess.run(spec.argv, cwd=cwd, check=False)
            output = ""
        else:
            with out.status(escape(spec.description)):
                result = subprocess.run(
                    spec.argv, cwd=cwd, check=False, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True
                )
            output = result.stdout or ""
    except OSError as e:
        out.print(f"[bold red]✖ {escape(spec.description)}[/bold red]")
        raise ExecutionError(message, spec=spec) from e

    if result.returncode != 0:
        out.print(f"[bold red]✖ {escape(spec.description)}[/bold red]")
        raise ExecutionError(message, spec=spec, returncode=result.returncode, output=output)

    out.print(f"[green]✔ {escape(spec.description)}[/green]")


def check_installed(
    name: str,
    link: str,
    *,
    command: str | None = None,
    runner: Runner = run_command,
    verbose: bool = False,
) -> None:
    """
    Confirm `name` is on PATH by running `<command or name> --version`.
    """
    spec = CommandSpec(
        description=f"Checking if {name} is installed",
        name=command or name,
        args=("--version",),
        verbose=verbose,
        fail_message=f"{name} is required to run this generator, check {link}",
    )
    try:
        runner(spec)
    except ExecutionError as e:
        raise PreflightError(name, link) from e
