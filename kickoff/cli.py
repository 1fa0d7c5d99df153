"""
cli.py

Responsibility: CLI entrypoint for kickoff.

High-level flow (single command, no subcommands):
1) Check git and npm are installed
2) Ask the project questions (training preset applied when requested)
3) Clone the repository (when a URL was given), render the templates
4) npm install, npm run lint-fix, then branch/add/commit (when a URL was given)

Stage logic lives in `generator.py`; this module only parses arguments, configures
logging and turns the run outcome into an exit code and a single error message.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.markup import escape

from kickoff.command import ExecutionError, PreflightError
from kickoff.console import console, print_error, print_success
from kickoff.generator import RunContext, RunOutcome, run


def _report(outcome: RunOutcome) -> int:
    if outcome.ok:
        print_success("Project ready")
        return 0

    error = outcome.error
    print_error(f"Kickoff failed during {outcome.stage.value}: {escape(str(error))}")
    if isinstance(error, PreflightError):
        console.print(f"Install instructions: [link={error.link}]{escape(error.link)}[/link]", soft_wrap=True)
    elif error is not None and error.__cause__ is not None:
        console.print(f"[red]{escape(str(error.__cause__))}[/red]", soft_wrap=True)
    if isinstance(error, ExecutionError) and error.output:
        console.print(escape(error.output.rstrip()), highlight=False, soft_wrap=True)
    return 1


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="kickoff", description="Kickoff - generate a Node.js project from templates")
    p.add_argument("--verbose", action="store_true", help="Show the output of every command as it runs")
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    ctx = RunContext(destination_root=Path.cwd(), verbose=bool(args.verbose))
    return _report(run(ctx))


if __name__ == "__main__":
    raise SystemExit(main())
