"""Build the argument parser from the command table and resolve the selected command."""
from __future__ import annotations

import argparse
import sys
from typing import Any, Mapping, NoReturn, Sequence

from cobalt import __version__
from cobalt.commands import Command, as_command, command_help
from cobalt.commands.help import HelpCommand
from cobalt.config import Settings
from cobalt.errors import OptionsError, UnknownCommandError


class CobaltArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises OptionsError instead of exiting the process."""

    def error(self, message: str) -> NoReturn:
        raise OptionsError(message, usage=self.format_usage())


def build_parser(commands: Mapping[str, Any], prog: str = "cobalt") -> CobaltArgumentParser:
    """Create the root parser and register one sub-parser per command."""
    parser = CobaltArgumentParser(prog=prog, description="Run project generators.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(_root_parser=parser)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    for name, handler in commands.items():
        register = getattr(handler, "register", None)
        if callable(register) and getattr(handler, "name", name) == name:
            register(subparsers)
        else:
            subparsers.add_parser(name, help=command_help(handler) or None)

    if "help" not in commands:
        HelpCommand(prog=prog).register(subparsers)

    return parser


def get_options(config: Settings, argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse process arguments against the commands installed in `config`."""
    parser = build_parser(config.COMMANDS, prog=config.prog)
    args = list(argv) if argv is not None else sys.argv[1:]
    return parser.parse_args(args)


def get_command(config: Settings, options: argparse.Namespace) -> Command:
    """Look up the handler for `options.command`."""
    name = getattr(options, "command", None)
    if name in config.COMMANDS:
        return as_command(config.COMMANDS[name])
    if name == "help":
        return HelpCommand(prog=config.prog)
    raise UnknownCommandError(name)
