"""Exception taxonomy and dispatch stages for the cobalt CLI."""
from __future__ import annotations

from enum import Enum


class CobaltError(Exception):
    """Base class for errors raised by cobalt collaborators."""


class GeneratorLoadError(CobaltError):
    """A generator source could not be read or is malformed."""


class OptionsError(CobaltError):
    """Raised by the option parser instead of exiting on malformed arguments."""

    def __init__(self, message: str, *, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage


class UnknownCommandError(CobaltError):
    def __init__(self, name: str | None) -> None:
        super().__init__(f"unknown command '{name}'")
        self.name = name


class GenerationError(CobaltError):
    """A generator refused or failed to produce its artifacts."""


class Stage(str, Enum):
    LOAD = "load"
    PARSE = "parse"
    RESOLVE = "resolve"
    EXECUTE = "execute"
    DONE = "done"


EXIT_CODES: dict[Stage, int] = {
    Stage.LOAD: 3,
    Stage.PARSE: 2,
    Stage.RESOLVE: 4,
    Stage.EXECUTE: 1,
    Stage.DONE: 0,
}
