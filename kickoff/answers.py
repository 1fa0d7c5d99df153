"""
answers.py

Responsibility: collect the answer set that drives the generated project.

- Prompt definitions live in `data/prompts.yaml`; they are loaded and validated here.
- Answers are asked interactively with Rich prompts, honouring each prompt's `when` clause.
- The training preset (`data/training.yaml`) overlays the answers when `inTraining` is set.

The orchestrator owns the resulting dict; nothing in here keeps state between calls.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from kickoff.console import console as default_console
from kickoff.constants import PROMPTS_PATH, TRAINING_PATH

PROMPT_TYPES = ("input", "confirm", "list")


class AnswerError(ValueError):
    pass


@dataclass(frozen=True)
class PromptDefinition:
    """One question asked before generating the project."""

    name: str
    message: str
    type: str = "input"
    default: Any = None
    choices: tuple[str, ...] = ()
    when: dict[str, Any] = field(default_factory=dict)
    pattern: str | None = None
    invalid_message: str = "Invalid value"

    def applies(self, answers: Mapping[str, Any]) -> bool:
        return all(answers.get(k) == v for k, v in self.when.items())

    def is_valid(self, value: str) -> bool:
        return self.pattern is None or re.fullmatch(self.pattern, value) is not None


def _load_yaml(path: Path) -> Any:
    if not path.exists():
        raise AnswerError(f"Answers file does not exist: {path}")
    with path.open(encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def _parse_prompt(raw: Any, index: int) -> PromptDefinition:
    if not isinstance(raw, dict):
        raise AnswerError(f"Prompt #{index} must be a mapping.")

    name = str(raw.get("name") or "").strip()
    message = str(raw.get("message") or "").strip()
    if not name or not message:
        raise AnswerError(f"Prompt #{index} must define `name` and `message`.")

    kind = str(raw.get("type") or "input")
    if kind not in PROMPT_TYPES:
        raise AnswerError(f"Prompt `{name}` has unknown type `{kind}` (expected one of {', '.join(PROMPT_TYPES)}).")

    choices = tuple(str(c) for c in raw.get("choices") or ())
    if kind == "list" and not choices:
        raise AnswerError(f"Prompt `{name}` is a list but defines no `choices`.")

    when = raw.get("when") or {}
    if not isinstance(when, dict):
        raise AnswerError(f"`when` of prompt `{name}` must be a mapping.")

    return PromptDefinition(
        name=name,
        message=message,
        type=kind,
        default=raw.get("default"),
        choices=choices,
        when=dict(when),
        pattern=raw.get("pattern"),
        invalid_message=str(raw.get("invalid_message") or "Invalid value"),
    )


def load_prompts(path: str | Path = PROMPTS_PATH) -> list[PromptDefinition]:
    data = _load_yaml(Path(path))
    if not isinstance(data, list):
        raise AnswerError("Prompt definitions must be a list at the top level.")
    return [_parse_prompt(raw, i) for i, raw in enumerate(data, start=1)]


def load_preset(path: str | Path = TRAINING_PATH) -> dict[str, Any]:
    data = _load_yaml(Path(path)) or {}
    if not isinstance(data, dict):
        raise AnswerError("Preset must be a mapping at the top level.")
    return data


def _ask_one(prompt: PromptDefinition, console: Console) -> Any:
    message = escape(prompt.message)
    if prompt.type == "confirm":
        return Confirm.ask(message, default=bool(prompt.default), console=console)
    if prompt.type == "list":
        default = prompt.default if prompt.default in prompt.choices else prompt.choices[0]
        return Prompt.ask(message, choices=list(prompt.choices), default=default, console=console)

    default = "" if prompt.default is None else str(prompt.default)
    while True:
        value = Prompt.ask(message, default=default, console=console).strip()
        if prompt.is_valid(value):
            return value
        console.print(f"[red]{escape(prompt.invalid_message)}[/red]")


def ask_answers(prompts: list[PromptDefinition], *, console: Console | None = None) -> dict[str, Any]:
    """
    Ask every applicable prompt, in order; later `when` clauses see earlier answers.
    """
    out = console or default_console
    answers: dict[str, Any] = {}
    for prompt in prompts:
        if prompt.applies(answers):
            answers[prompt.name] = _ask_one(prompt, out)
    return answers


def apply_preset(answers: Mapping[str, Any], preset: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay `preset` onto `answers`; preset values win."""
    return {**answers, **preset}


def use_git(answers: Mapping[str, Any]) -> bool:
    url = answers.get("urlRepository")
    return isinstance(url, str) and bool(url.strip())
