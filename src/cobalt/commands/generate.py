"""Run one of the discovered generators."""
from __future__ import annotations

import argparse
from typing import Mapping

from cobalt.errors import GenerationError
from cobalt.generators.base import Generator
from cobalt.generators.watch import watch_and_generate


class GenerateCommand:
    name = "generate"
    help = "Generate files from a generator."

    def __init__(self, generators: Mapping[str, Generator]) -> None:
        self.generators = dict(generators)

    def register(self, subparsers: argparse._SubParsersAction) -> None:
        """Register the `generate` subcommand with one sub-parser per generator."""
        parser = subparsers.add_parser(
            self.name,
            help=self.help,
            description="Generate files from a generator. Run without a generator name to list them.",
        )
        generator_parsers = parser.add_subparsers(dest="generator", metavar="GENERATOR")
        for name in sorted(self.generators):
            self.generators[name].register(generator_parsers)

    def execute(self, options: argparse.Namespace) -> int:
        name = getattr(options, "generator", None)
        if not name:
            self.print_generators()
            return 0

        generator = self.generators.get(name)
        if generator is None:
            raise GenerationError(f"unknown generator '{name}'")

        if getattr(options, "watch", False):
            return watch_and_generate(generator, options)

        written = generator.generate(options)
        if not getattr(options, "quiet", False):
            verb = "would write" if getattr(options, "dry_run", False) else "wrote"
            for path in written:
                print(f"[generate] {verb} {path}", flush=True)
        return 0

    def print_generators(self) -> None:
        if not self.generators:
            print("No generators found.")
            return
        width = max(len(name) for name in self.generators)
        print("Available generators:")
        for name in sorted(self.generators):
            print(f"  {name:<{width}}  {self.generators[name].description}".rstrip())
