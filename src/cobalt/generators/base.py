"""Base class for generators: class Generator(cobalt.generators.Generator)."""
from __future__ import annotations

import argparse
from pathlib import Path


class Generator:
    """A named unit that writes files into a destination directory.

    Subclasses set `name` and `description`, declare extra options in
    `add_arguments` and do the work in `generate`, returning the paths they
    wrote (or would write, when `options.dry_run` is set).
    """

    name: str = ""
    description: str = ""

    def register(self, subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
        """Register this generator as a `generate` sub-command."""
        parser = subparsers.add_parser(self.name, help=self.description, description=self.description or None)
        parser.add_argument("dest", help="Destination directory.")
        parser.add_argument("--force", action="store_true", help="Overwrite existing files.")
        parser.add_argument("--dry-run", action="store_true", help="List the files without writing them.")
        parser.add_argument("--watch", action="store_true", help="Regenerate whenever the generator sources change.")
        parser.add_argument("--quiet", action="store_true", help="Do not print written paths.")
        self.add_arguments(parser)
        return parser

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Hook for generator-specific options."""
        ...

    def generate(self, options: argparse.Namespace) -> list[Path]:
        raise NotImplementedError(f"generator '{self.name}' does not implement generate()")

    def watch_paths(self) -> list[Path]:
        """Source paths that trigger regeneration in --watch mode."""
        return []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
