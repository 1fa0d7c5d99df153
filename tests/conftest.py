"""Shared pytest fixtures for the kickoff test suite.

Provides:
- A recording fake runner standing in for git/npm
- Small template trees and descriptor lists under tmp_path
- A complete answer set for the packaged templates
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from kickoff.command import CommandSpec, ExecutionError
from kickoff.renderer import FileDescriptor


class FakeRunner:
    """Records every CommandSpec; fails the ones whose argv matches `fail_on`."""

    def __init__(self, fail_on: list[list[str]] | None = None) -> None:
        self.calls: list[CommandSpec] = []
        self.fail_on = fail_on or []

    def __call__(self, spec: CommandSpec) -> None:
        self.calls.append(spec)
        if spec.argv in self.fail_on:
            raise ExecutionError(spec.fail_message or f"{spec.name} failed", spec=spec, returncode=1)

    @property
    def argvs(self) -> list[list[str]]:
        return [c.argv for c in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    root = tmp_path / "templates"
    (root / "config").mkdir(parents=True)
    (root / "package.json").write_text(
        '{"name": "{{ projectName }}", "express": "{{ expressVersion }}"}\n', encoding="utf-8"
    )
    (root / "README.md").write_text("# {{ projectName }}\n", encoding="utf-8")
    (root / "gitignore").write_text("node_modules/\n", encoding="utf-8")
    (root / "config" / "config.ejs").write_text("module.exports = '{{ projectName }}';\n", encoding="utf-8")
    (root / "Dockerfile").write_text("FROM node\n", encoding="utf-8")
    return root


@pytest.fixture
def descriptors() -> tuple[FileDescriptor, ...]:
    return (
        FileDescriptor("package.json"),
        FileDescriptor("README.md"),
        FileDescriptor("gitignore", new_name=".gitignore"),
        FileDescriptor("config.ejs", directory="config"),
        FileDescriptor("Dockerfile", condition=lambda a: bool(a.get("docker"))),
    )


@pytest.fixture
def manifest() -> dict[str, Any]:
    return {
        "dependencies": {"express": "^4.17.1", "body-parser": "^1.19.0"},
        "devDependencies": {"eslint-config-airbnb-base": "^14.2.1"},
    }


@pytest.fixture
def full_answers() -> dict[str, Any]:
    return {
        "projectName": "demo",
        "projectDescription": "A demo project",
        "nodeVersion": "14.17.0",
        "npmVersion": "6.14.13",
        "database": True,
        "sequelizeDialect": "postgres",
        "documentation": True,
        "docker": True,
        "ci": "travis",
        "inTraining": False,
        "urlRepository": "",
    }


@pytest.fixture
def runner_factory():
    return FakeRunner
