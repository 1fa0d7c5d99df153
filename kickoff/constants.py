"""
constants.py

Static data of the generator: packaged data paths, install tutorials and the
ordered list of template files that make up a generated project.
"""

from __future__ import annotations

from pathlib import Path

from kickoff.renderer import FileDescriptor

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"
TEMPLATES_DIR = PACKAGE_DIR / "templates"

PROMPTS_PATH = DATA_DIR / "prompts.yaml"
TRAINING_PATH = DATA_DIR / "training.yaml"
MANIFEST_PATH = DATA_DIR / "package.json"

TUTORIALS = {
    "git": "https://git-scm.com/book/en/v2/Getting-Started-Installing-Git",
    "npm": "https://docs.npmjs.com/downloading-and-installing-node-js-and-npm",
}

BRANCH_NAME = "kickoff"
COMMIT_MESSAGE = "Kickoff project"


def _database(answers) -> bool:
    return bool(answers.get("database"))


def _documentation(answers) -> bool:
    return bool(answers.get("documentation"))


def _docker(answers) -> bool:
    return bool(answers.get("docker"))


FILES: tuple[FileDescriptor, ...] = (
    FileDescriptor("package.json"),
    FileDescriptor("README.md"),
    FileDescriptor("gitignore", new_name=".gitignore"),
    FileDescriptor("nvmrc", new_name=".nvmrc"),
    FileDescriptor("eslintrc.js", new_name=".eslintrc.js"),
    FileDescriptor("eslintignore", new_name=".eslintignore"),
    FileDescriptor("prettierrc", new_name=".prettierrc"),
    FileDescriptor("env.example", new_name=".env.example"),
    FileDescriptor("server.ejs"),
    FileDescriptor("app.ejs"),
    FileDescriptor("index.ejs", directory="config"),
    FileDescriptor("routes.ejs", directory="app"),
    FileDescriptor("errors.ejs", directory="app"),
    FileDescriptor("healthCheck.ejs", directory="app/controllers"),
    FileDescriptor("index.ejs", directory="app/logger"),
    FileDescriptor("errors.ejs", directory="app/middlewares"),
    FileDescriptor("setup.ejs", directory="test"),
    FileDescriptor("app.spec.ejs", directory="test"),
    FileDescriptor("index.ejs", directory="app/models", condition=_database),
    FileDescriptor("sequelizerc", new_name=".sequelizerc", condition=_database),
    FileDescriptor("config.ejs", directory="migrations", condition=_database),
    FileDescriptor("index.ejs", directory="migrations", condition=_database),
    FileDescriptor("index.ejs", directory="documentation", condition=_documentation),
    FileDescriptor("Dockerfile", condition=_docker),
    FileDescriptor("dockerignore", new_name=".dockerignore", condition=_docker),
    FileDescriptor("travis.yml", new_name=".travis.yml", condition=lambda a: a.get("ci") == "travis"),
    FileDescriptor("Jenkinsfile", condition=lambda a: a.get("ci") == "jenkins"),
)
