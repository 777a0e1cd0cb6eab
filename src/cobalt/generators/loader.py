"""Discover generators and build the command table they power."""
from __future__ import annotations

import copy
import importlib.util
import inspect
import sys
from importlib.metadata import entry_points
from pathlib import Path
from types import ModuleType
from typing import Any

from cobalt.commands import Command
from cobalt.commands.generate import GenerateCommand
from cobalt.config import Settings
from cobalt.errors import GeneratorLoadError
from cobalt.generators.base import Generator
from cobalt.generators.manifest import MANIFEST_NAME, load_manifest
from cobalt.generators.template import TemplateGenerator

BUILTIN_DIR = Path(__file__).resolve().parent / "builtin"


def load_generators(settings: Settings | None = None) -> dict[str, Command]:
    """Return the command table: `generate` backed by every discovered generator."""
    if settings is None:
        from cobalt.config import config as settings

    return {"generate": GenerateCommand(discover_generators(settings))}


def discover_generators(settings: Settings) -> dict[str, Generator]:
    """Collect generators; later sources override earlier ones of the same name."""
    generators: dict[str, Generator] = {}
    if settings.builtin_generators:
        generators.update(scan_directory(BUILTIN_DIR))
    for directory in settings.generator_dirs:
        if directory.is_dir():
            generators.update(scan_directory(directory))
    generators.update(load_entry_point_generators(settings.entry_point_group))
    return generators


def scan_directory(directory: Path) -> dict[str, Generator]:
    """Load template generators (sub-dirs with generator.json) and generator modules (*.py)."""
    found: dict[str, Generator] = {}
    for entry in sorted(directory.iterdir()):
        if entry.name.startswith((".", "_")):
            continue
        if entry.is_dir() and (entry / MANIFEST_NAME).is_file():
            generator: Generator = TemplateGenerator(load_manifest(entry / MANIFEST_NAME), entry)
        elif entry.is_file() and entry.suffix == ".py":
            generator = _generator_from_module(_load_module_from_file(entry), origin=str(entry))
        else:
            continue
        found[generator.name] = generator
    return found


def load_entry_point_generators(group: str) -> dict[str, Generator]:
    found: dict[str, Generator] = {}
    for ep in sorted(entry_points(group=group), key=lambda item: item.name):
        try:
            target = ep.load()
        except Exception as exc:
            raise GeneratorLoadError(f"entry point '{ep.name}' failed to load: {exc}") from exc
        generator = _instantiate(target, origin=f"entry point '{ep.name}'")
        if not generator.name:
            # instances exported by other modules are shared
            if generator is target:
                generator = copy.copy(generator)
            generator.name = ep.name
        found[generator.name] = generator
    return found


def _load_module_from_file(file_path: Path) -> ModuleType:
    """Import a generator module by path under a private module name."""
    module_name = "cobalt_generators.__auto__." + file_path.stem.replace(".", "__").replace("-", "_")
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise GeneratorLoadError(f"Failed to load generator module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise GeneratorLoadError(f"{file_path.name} failed to import: {exc}") from exc
    return module


def _generator_from_module(module: ModuleType, *, origin: str) -> Generator:
    generator_cls = getattr(module, "Generator", None)
    if generator_cls is None or not inspect.isclass(generator_cls):
        raise GeneratorLoadError(f"{origin} must export class Generator")
    generator = _instantiate(generator_cls, origin=origin)
    if not generator.name:
        generator.name = Path(origin).stem
    return generator


def _instantiate(target: Any, *, origin: str) -> Generator:
    if inspect.isclass(target) and issubclass(target, Generator):
        try:
            return target()
        except Exception as exc:
            raise GeneratorLoadError(f"{origin}: cannot construct {target.__name__}: {exc}") from exc
    if isinstance(target, Generator):
        return target
    raise GeneratorLoadError(f"{origin} is not a cobalt Generator")
