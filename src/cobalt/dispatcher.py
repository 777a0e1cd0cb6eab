"""Wire configuration, generator loading, option parsing and command execution."""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Mapping, Sequence

from cobalt.argv import get_command, get_options
from cobalt.commands import invoke
from cobalt.config import Settings
from cobalt.errors import EXIT_CODES, Stage
from cobalt.generators.loader import load_generators

Loader = Callable[[], Mapping[str, Any]]
OptionParser = Callable[[Settings, Sequence[str] | None], Any]
Resolver = Callable[[Settings, Any], Any]


@dataclass(frozen=True)
class Outcome:
    """How far a dispatch got, and what it produced or raised."""

    stage: Stage
    exit_code: int
    error: BaseException | None = None
    result: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Dispatcher:
    """Runs one command per call: load -> parse -> resolve -> execute.

    Each step gates the next and nothing is caught inside `run`; callers that
    want the failing step classified use `dispatch` instead.
    """

    def __init__(
        self,
        config: Settings | None = None,
        *,
        loader: Loader | None = None,
        option_parser: OptionParser | None = None,
        resolver: Resolver | None = None,
    ) -> None:
        if config is None:
            from cobalt.config import config
        self.config = config
        self.loader = loader if loader is not None else partial(load_generators, config)
        self.option_parser = option_parser if option_parser is not None else get_options
        self.resolver = resolver if resolver is not None else get_command
        self.stage = Stage.LOAD

    def run(self, argv: Sequence[str] | None = None) -> None:
        self._run(argv)

    def dispatch(self, argv: Sequence[str] | None = None) -> Outcome:
        """Like `run`, but report the outcome with the stage that failed."""
        try:
            result = self._run(argv)
        except Exception as exc:
            return Outcome(stage=self.stage, exit_code=EXIT_CODES[self.stage], error=exc)
        exit_code = result if isinstance(result, int) and not isinstance(result, bool) else 0
        return Outcome(stage=Stage.DONE, exit_code=exit_code, result=result)

    def _run(self, argv: Sequence[str] | None) -> Any:
        self.stage = Stage.LOAD
        self.config.COMMANDS = self.loader()

        self.stage = Stage.PARSE
        options: argparse.Namespace = self.option_parser(self.config, argv)

        self.stage = Stage.RESOLVE
        command = self.resolver(self.config, options)

        self.stage = Stage.EXECUTE
        result = invoke(command, options)

        self.stage = Stage.DONE
        return result


def run(argv: Sequence[str] | None = None) -> None:
    """Run one command against the shared process-wide configuration."""
    Dispatcher().run(argv)
