"""`help [COMMAND [GENERATOR]]`: usage for the root parser, a command or one generator."""
from __future__ import annotations

import argparse
import sys
from typing import Sequence


class HelpCommand:
    name = "help"
    help = "Show help for a command or a generator."

    def __init__(self, prog: str = "cobalt") -> None:
        self.prog = prog

    def register(self, subparsers: argparse._SubParsersAction) -> None:
        parser = subparsers.add_parser(self.name, help=self.help)
        parser.add_argument(
            "topic",
            nargs="*",
            metavar="TOPIC",
            help="Command name, optionally followed by a generator name ('generate project').",
        )

    def execute(self, options: argparse.Namespace) -> int:
        root_parser = getattr(options, "_root_parser", None)
        if root_parser is None:
            print(f"{self.prog}: help is unavailable (parser not configured)", file=sys.stderr)
            return 1

        topic = list(getattr(options, "topic", None) or [])
        if not topic:
            root_parser.print_help()
            print()
            print(f"Run '{root_parser.prog} help <command> [<generator>]' for detailed usage.")
            return 0

        parser, missing = resolve_topic(root_parser, topic)
        if missing is not None:
            kind = "command" if parser is root_parser else "topic"
            print(f"{root_parser.prog}: unknown {kind} '{missing}'", file=sys.stderr)
            parser.print_help()
            return 1

        parser.print_help()
        return 0


def resolve_topic(
    parser: argparse.ArgumentParser, topic: Sequence[str]
) -> tuple[argparse.ArgumentParser, str | None]:
    """Follow `topic` through nested sub-parsers.

    Returns the deepest parser reached and the first name it does not know,
    or None when the whole path resolved.
    """
    for name in topic:
        choices = subparser_choices(parser)
        if name not in choices:
            return parser, name
        parser = choices[name]
    return parser, None


def subparser_choices(parser: argparse.ArgumentParser) -> dict[str, argparse.ArgumentParser]:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return dict(action.choices)
    return {}
