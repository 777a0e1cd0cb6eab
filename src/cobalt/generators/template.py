"""Directory-template generators described by a generator.json manifest."""
from __future__ import annotations

import argparse
import fnmatch
import re
import shutil
from pathlib import Path
from typing import Callable

from cobalt.errors import GenerationError
from cobalt.generators.base import Generator
from cobalt.generators.manifest import GeneratorManifest

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*(?:\|\s*([a-z]+)\s*)?\}\}")
_WORDS = re.compile(r"[A-Za-z0-9]+")

FILTERS: dict[str, Callable[[str], str]] = {
    "lower": str.lower,
    "upper": str.upper,
    "title": lambda value: " ".join(word.capitalize() for word in _WORDS.findall(value)),
    "snake": lambda value: "_".join(word.lower() for word in _WORDS.findall(value)),
    "kebab": lambda value: "-".join(word.lower() for word in _WORDS.findall(value)),
    "pascal": lambda value: "".join(word.capitalize() for word in _WORDS.findall(value)),
}


def render_text(text: str, variables: dict[str, str]) -> str:
    """Substitute `{{ var }}` and `{{ var | filter }}` placeholders.

    Placeholders naming an unknown variable or filter are left untouched.
    """

    def replace(match: re.Match[str]) -> str:
        name, filter_name = match.group(1), match.group(2)
        if name not in variables:
            return match.group(0)
        value = variables[name]
        if filter_name is None:
            return value
        fn = FILTERS.get(filter_name)
        if fn is None:
            return match.group(0)
        return fn(value)

    return _PLACEHOLDER.sub(replace, text)


class TemplateGenerator(Generator):
    def __init__(self, manifest: GeneratorManifest, root: Path) -> None:
        self.manifest = manifest
        self.root = root
        self.name = manifest.name
        self.description = manifest.description

    @property
    def template_dir(self) -> Path:
        return self.root / self.manifest.template

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        for var in self.manifest.variables:
            parser.add_argument(var.option, dest=var.name, default=None, metavar=var.name.upper(), help=var.help or None)

    def watch_paths(self) -> list[Path]:
        return [self.root]

    def resolve_variables(self, options: argparse.Namespace, dest: Path) -> dict[str, str]:
        """Collect variable values from options, falling back to manifest defaults.

        Defaults may reference variables declared before them.
        """
        values: dict[str, str] = {}
        for var in self.manifest.variables:
            value = getattr(options, var.name, None)
            if value is None and var.default is not None:
                value = render_text(var.default, values)
            if value is None and var.name == "name":
                value = dest.resolve().name
            if value is None:
                if var.required:
                    raise GenerationError(f"{self.name}: missing required option {var.option}")
                value = ""
            values[var.name] = str(value)
        return values

    def plan(self, variables: dict[str, str]) -> list[tuple[Path, Path]]:
        """Return (template file, output path relative to dest) pairs."""
        template_dir = self.template_dir
        if not template_dir.is_dir():
            raise GenerationError(f"Template directory not found: {template_dir}")

        pairs: list[tuple[Path, Path]] = []
        sources: dict[Path, Path] = {}
        for src in sorted(template_dir.rglob("*")):
            if not src.is_file():
                continue
            rel = src.relative_to(template_dir)
            if "__pycache__" in rel.parts or src.suffix == ".pyc":
                continue
            if any(fnmatch.fnmatch(rel.as_posix(), pattern) for pattern in self.manifest.exclude):
                continue
            out = self._output_path(rel, variables)
            if out in sources:
                raise GenerationError(
                    f"{self.name}: {sources[out].as_posix()} and {rel.as_posix()} both render to {out.as_posix()}"
                )
            sources[out] = rel
            pairs.append((src, out))
        return pairs

    def _output_path(self, rel: Path, variables: dict[str, str]) -> Path:
        parts = [render_text(part, variables) for part in rel.parts]
        suffix = self.manifest.strip_suffix
        if suffix and parts[-1].endswith(suffix) and parts[-1] != suffix:
            parts[-1] = parts[-1][: -len(suffix)]
        for part in parts:
            if not part or part in {".", ".."} or "/" in part or "\\" in part:
                raise GenerationError(f"{self.name}: template path {rel.as_posix()} renders to an invalid name")
        return Path(*parts)

    def generate(self, options: argparse.Namespace) -> list[Path]:
        dest = Path(options.dest).expanduser()
        force = bool(getattr(options, "force", False))
        dry_run = bool(getattr(options, "dry_run", False))

        if dest.exists():
            if dest.is_file():
                raise GenerationError(f"Destination is a file: {dest}")
            if any(dest.iterdir()) and not force:
                raise GenerationError(f"Destination not empty: {dest} (use --force to overwrite)")

        variables = self.resolve_variables(options, dest)
        pairs = [(src, dest / rel) for src, rel in self.plan(variables)]

        for _src, target in pairs:
            if target.is_dir():
                raise GenerationError(f"{target} is a directory")
            blocking = next((parent for parent in target.parents if parent.is_file()), None)
            if blocking is not None:
                raise GenerationError(f"{blocking} is a file, cannot write {target}")
            if target.exists() and not force:
                raise GenerationError(f"{target} already exists")

        if not dry_run:
            dest.mkdir(parents=True, exist_ok=True)
            for src, target in pairs:
                write_item(src, target, variables)

        return sorted(target for _src, target in pairs)


def write_item(src: Path, dst: Path, variables: dict[str, str]) -> None:
    """Render a UTF-8 template file into `dst`; copy anything else as-is."""
    if dst.is_dir():
        raise GenerationError(f"{dst} is a directory")
    dst.parent.mkdir(parents=True, exist_ok=True)
    try:
        text = src.read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        shutil.copy2(src, dst)
        return
    dst.write_text(render_text(text, variables), encoding="utf-8")
    shutil.copymode(src, dst)
