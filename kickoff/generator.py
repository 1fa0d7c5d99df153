"""
generator.py

Responsibility: run the provisioning stages of a kickoff, in order, exactly once.

INIT -> PROMPT -> CLONE (git only) -> MATERIALIZE -> INSTALL -> LINT -> GIT_BOOTSTRAP (git only) -> DONE

Each stage is a plain function of the `RunContext`. The first stage that fails stops the
run; `run` reports it as a `RunOutcome` instead of raising. Nothing is retried or rolled back.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from kickoff.answers import AnswerError, apply_preset, ask_answers, load_preset, load_prompts, use_git
from kickoff.command import CommandSpec, ExecutionError, PreflightError, Runner, check_installed, run_command
from kickoff.console import print_banner
from kickoff.constants import BRANCH_NAME, COMMIT_MESSAGE, FILES, MANIFEST_PATH, TEMPLATES_DIR, TUTORIALS
from kickoff.renderer import FileDescriptor, RenderError, materialize

logger = logging.getLogger(__name__)

FATAL_ERRORS = (PreflightError, ExecutionError, RenderError, AnswerError)


class Stage(str, Enum):
    INIT = "init"
    PROMPT = "prompt"
    CLONE = "clone"
    MATERIALIZE = "materialize"
    INSTALL = "install"
    LINT = "lint"
    GIT_BOOTSTRAP = "git_bootstrap"
    DONE = "done"


def _ask_interactively() -> dict[str, Any]:
    return ask_answers(load_prompts())


def load_manifest(path: Path = MANIFEST_PATH) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as e:
        raise RenderError(f"Failed loading dependency manifest: {path}") from e


@dataclass
class RunContext:
    """Everything one kickoff run reads and writes, passed explicitly to every stage."""

    destination_root: Path
    verbose: bool = False
    runner: Runner = run_command
    ask: Callable[[], dict[str, Any]] = _ask_interactively
    preset: Mapping[str, Any] | None = None
    files: Sequence[FileDescriptor] = FILES
    templates_dir: Path = TEMPLATES_DIR
    manifest: Mapping[str, Any] | None = None
    banner: bool = True

    # Written by the PROMPT stage.
    answers: dict[str, Any] = field(default_factory=dict)
    use_git: bool = False

    @property
    def project_dir(self) -> Path:
        return self.destination_root / str(self.answers["projectName"])

    def command(self, description: str, name: str, *args: str, cwd: Path | None = None) -> None:
        self.runner(CommandSpec(description=description, name=name, args=args, verbose=self.verbose, cwd=cwd))


@dataclass(frozen=True)
class RunOutcome:
    stage: Stage
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.stage is Stage.DONE and self.error is None


def initializing(ctx: RunContext) -> None:
    if ctx.banner:
        print_banner()
    check_installed("git", TUTORIALS["git"], runner=ctx.runner, verbose=ctx.verbose)
    check_installed("npm", TUTORIALS["npm"], runner=ctx.runner, verbose=ctx.verbose)


def prompting(ctx: RunContext) -> None:
    answers = ctx.ask()
    if answers.get("inTraining"):
        preset = ctx.preset if ctx.preset is not None else load_preset()
        answers = apply_preset(answers, preset)
    if not str(answers.get("projectName") or "").strip():
        raise AnswerError("A project name is required.")
    ctx.answers = answers
    ctx.use_git = use_git(answers)


def cloning(ctx: RunContext) -> None:
    if not ctx.use_git:
        return
    url = ctx.answers["urlRepository"]
    ctx.command(
        f"Cloning repository from {url}",
        "git",
        "clone",
        url,
        str(ctx.answers["projectName"]),
        cwd=ctx.destination_root,
    )


def writing(ctx: RunContext) -> None:
    manifest = ctx.manifest if ctx.manifest is not None else load_manifest()
    written = materialize(
        ctx.files,
        ctx.answers,
        ctx.destination_root,
        templates_dir=ctx.templates_dir,
        manifest=manifest,
    )
    logger.info("Wrote %d files into %s", len(written), ctx.project_dir)


def installing(ctx: RunContext) -> None:
    ctx.command("Installing dependencies", "npm", "install", cwd=ctx.project_dir)


def linting(ctx: RunContext) -> None:
    ctx.command("Running linter", "npm", "run", "lint-fix", cwd=ctx.project_dir)


def committing(ctx: RunContext) -> None:
    if not ctx.use_git:
        return
    ctx.command(f"Creating branch {BRANCH_NAME}", "git", "checkout", "-b", BRANCH_NAME, cwd=ctx.project_dir)
    ctx.command("Add changes to git", "git", "add", ".", cwd=ctx.project_dir)
    ctx.command("Commit changes to git", "git", "commit", "-m", COMMIT_MESSAGE, cwd=ctx.project_dir)


STAGES: tuple[tuple[Stage, Callable[[RunContext], None]], ...] = (
    (Stage.INIT, initializing),
    (Stage.PROMPT, prompting),
    (Stage.CLONE, cloning),
    (Stage.MATERIALIZE, writing),
    (Stage.INSTALL, installing),
    (Stage.LINT, linting),
    (Stage.GIT_BOOTSTRAP, committing),
)


def run(ctx: RunContext) -> RunOutcome:
    """
    Run every stage in order and report where the run ended.
    """
    for stage, step in STAGES:
        logger.info("Stage %s", stage.value)
        try:
            step(ctx)
        except FATAL_ERRORS as e:
            logger.debug("Stage %s failed", stage.value, exc_info=True)
            return RunOutcome(stage=stage, error=e)
    return RunOutcome(stage=Stage.DONE)
