"""CLI entrypoint: dispatch one command and normalize exit codes."""
from __future__ import annotations

import sys

from cobalt.config import config
from cobalt.dispatcher import Dispatcher
from cobalt.errors import OptionsError


def main(argv: list[str] | None = None) -> int:
    outcome = Dispatcher(config).dispatch(argv)
    if outcome.error is not None:
        if isinstance(outcome.error, OptionsError) and outcome.error.usage:
            print(outcome.error.usage, end="", file=sys.stderr)
        print(f"{config.prog}: {outcome.error}", file=sys.stderr)
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
