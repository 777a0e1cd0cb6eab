"""Regenerate a generator's output whenever its sources change."""
from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Callable

from watchfiles import DefaultFilter, watch

from cobalt.errors import CobaltError
from cobalt.generators.base import Generator


class SourcesFilter(DefaultFilter):
    def __init__(self, dest: Path | None = None) -> None:
        super().__init__()
        self.dest = dest.resolve().as_posix() if dest is not None else None

    def __call__(self, change, path: str) -> bool:
        p = path.replace("\\", "/")
        if "__pycache__" in p or p.endswith(".pyc"):
            return False
        if "/.git/" in p or "/node_modules/" in p:
            return False
        if self.dest and (p == self.dest or p.startswith(self.dest + "/")):
            return False
        return super().__call__(change, path)


def run_generate(generator: Generator, options: argparse.Namespace, *, echo: Callable[[str], None] = print) -> int:
    """Generate once, reporting instead of raising so the watch loop keeps going."""
    echo(f"\n[watch] Generating {generator.name}...")
    try:
        written = generator.generate(options)
    except CobaltError as exc:
        echo(f"[watch] FAILED: {exc}")
        return 1
    echo(f"[watch] OK -> {options.dest} ({len(written)} files)")
    return 0


def watch_and_generate(
    generator: Generator,
    options: argparse.Namespace,
    *,
    echo: Callable[[str], None] = print,
) -> int:
    """Generate with --force, then again on every change to the watched sources."""
    options.force = True
    watch_dirs = [p for p in generator.watch_paths() if p.exists()]
    if not watch_dirs:
        echo(f"[watch] ERROR: generator '{generator.name}' has no sources to watch.")
        return 2

    run_generate(generator, options, echo=echo)

    echo("[watch] Watching:")
    for d in watch_dirs:
        echo(f"  - {d}")

    watch_filter = SourcesFilter(Path(options.dest))
    for changes in watch(*map(str, watch_dirs), watch_filter=watch_filter, debounce=300):
        changed = sorted({p.replace("\\", "/") for (_c, p) in changes})
        echo("\n[watch] Change detected:")
        for p in changed:
            echo(f"  - {p}")

        run_generate(generator, options, echo=echo)
        time.sleep(0.05)

    return 0
