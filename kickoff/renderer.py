"""
renderer.py

Responsibility: render the declared template files into the new project directory.

Rules:
- Only descriptors whose condition is absent or true are rendered.
- `*.ejs` templates are written as `*.js`; otherwise `new_name` (if any) replaces the name.
- Only `package.json` sees the dependency version keys from the manifest.
- Output files are written atomically; a failed render never leaves a truncated file.
- Renders run concurrently but `materialize` returns only after every one has finished.

This module intentionally does NOT know about git, npm, or prompting.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = ".ejs"
PACKAGE_JSON = "package.json"

_WORD_BOUNDARIES = (re.compile(r"([a-z0-9])([A-Z])"), re.compile(r"([A-Z])([A-Z][a-z])"))
_DELIMITERS = re.compile(r"[^A-Za-z0-9]+")


class RenderError(RuntimeError):
    pass


@dataclass(frozen=True)
class FileDescriptor:
    """One candidate template file of the generated project."""

    name: str
    directory: str | None = None
    new_name: str | None = None
    condition: Callable[[Mapping[str, Any]], bool] | None = None

    def applies(self, answers: Mapping[str, Any]) -> bool:
        return self.condition is None or bool(self.condition(answers))


def output_name(descriptor: FileDescriptor) -> str:
    if descriptor.name.endswith(TEMPLATE_EXTENSION):
        return f"{descriptor.name[: -len(TEMPLATE_EXTENSION)]}.js"
    return descriptor.new_name or descriptor.name


def template_path(descriptor: FileDescriptor) -> str:
    return f"{descriptor.directory}/{descriptor.name}" if descriptor.directory else descriptor.name


def destination_path(descriptor: FileDescriptor, answers: Mapping[str, Any], destination_root: Path) -> Path:
    name = output_name(descriptor)
    relative = f"{descriptor.directory}/{name}" if descriptor.directory else name
    return Path(destination_root) / str(answers["projectName"]) / relative


def camel_case(value: str) -> str:
    """
    camelCase an npm package name: `@babel/core` -> `babelCore`, `body-parser` -> `bodyParser`.

    Words after the first that start with a digit are joined with `_` (`a-1b` -> `a_1b`).
    """
    for boundary in _WORD_BOUNDARIES:
        value = boundary.sub(r"\1 \2", value)
    words = [w for w in _DELIMITERS.split(value) if w]
    out: list[str] = []
    for index, word in enumerate(words):
        lower = word.lower()
        if index == 0:
            out.append(lower)
        elif lower[0].isdigit():
            out.append(f"_{lower}")
        else:
            out.append(lower[0].upper() + lower[1:])
    return "".join(out)


def dependency_versions(manifest: Mapping[str, Any]) -> dict[str, str]:
    """
    Flatten `dependencies` then `devDependencies` into `<camelName>Version -> version` pairs.
    """
    versions: dict[str, str] = {}
    for section in ("dependencies", "devDependencies"):
        for package, version in (manifest.get(section) or {}).items():
            versions[f"{camel_case(package)}Version"] = str(version)
    return versions


def build_context(name: str, answers: Mapping[str, Any], manifest: Mapping[str, Any]) -> dict[str, Any]:
    if name == PACKAGE_JSON:
        return {**dependency_versions(manifest), **answers}
    return dict(answers)


def selected(descriptors: Sequence[FileDescriptor], answers: Mapping[str, Any]) -> list[FileDescriptor]:
    return [d for d in descriptors if d.applies(answers)]


def make_environment(templates_dir: str | Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as tmp:
            tmp.write(text)
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def render_file(
    env: Environment,
    descriptor: FileDescriptor,
    answers: Mapping[str, Any],
    destination_root: Path,
    manifest: Mapping[str, Any],
    templates_dir: Path,
) -> Path:
    """
    Render one descriptor into `destination_root/<projectName>/...` and return the written path.

    The written file keeps the permission bits of its template.
    """
    source = template_path(descriptor)
    context = build_context(output_name(descriptor), answers, manifest)

    try:
        dst_path = destination_path(descriptor, answers, destination_root)
        text = env.get_template(source).render(**context)
        _atomic_write_text(dst_path, text)
        shutil.copymode(templates_dir / source, dst_path)
    except KeyError as e:
        raise RenderError(f"Missing answer {e} needed to place template file: {source}") from e
    except (TemplateError, OSError) as e:
        raise RenderError(f"Failed rendering template file: {source}") from e

    logger.debug("Rendered %s -> %s", source, dst_path)
    return dst_path


def materialize(
    descriptors: Sequence[FileDescriptor],
    answers: Mapping[str, Any],
    destination_root: str | Path,
    *,
    templates_dir: str | Path,
    manifest: Mapping[str, Any],
) -> list[Path]:
    """
    Render every applicable descriptor and wait for all of them.

    Returns the written paths in declared order. If any render failed, the first failure
    (in declared order) is raised once every render has finished.
    """
    tpl_dir = Path(templates_dir).resolve()
    if not tpl_dir.is_dir():
        raise RenderError(f"Template directory not found: {tpl_dir}")

    env = make_environment(tpl_dir)
    root = Path(destination_root)
    todo = selected(descriptors, answers)
    if not todo:
        return []

    with ThreadPoolExecutor(max_workers=min(8, len(todo))) as pool:
        futures = [pool.submit(render_file, env, d, answers, root, manifest, tpl_dir) for d in todo]
    # Leaving the executor joins every pending render.
    return [f.result() for f in futures]
