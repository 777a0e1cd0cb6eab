"""Command interface shared by the dispatcher, the option parser and generators."""
from __future__ import annotations

import argparse
import inspect
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Command(Protocol):
    """Anything the dispatcher can hand parsed options to."""

    def execute(self, options: argparse.Namespace) -> Any:
        ...


class FunctionCommand:
    """Adapt a plain callable taking the parsed options to `Command`."""

    def __init__(self, fn: Callable[[argparse.Namespace], Any], *, name: str | None = None, help: str | None = None) -> None:
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "command")
        self.help = help if help is not None else _first_doc_line(fn)

    def execute(self, options: argparse.Namespace) -> Any:
        return self.fn(options)

    def __repr__(self) -> str:
        return f"FunctionCommand({self.name!r})"


def as_command(handler: Any) -> Command:
    """Return `handler` as a `Command`, wrapping bare callables."""
    if isinstance(handler, Command):
        return handler
    if callable(handler):
        return FunctionCommand(handler)
    raise TypeError(f"command handler is not callable: {handler!r}")


def invoke(handler: Any, options: argparse.Namespace) -> Any:
    """Run a handler with the parsed options and hand back whatever it returns."""
    if isinstance(handler, Command):
        return handler.execute(options)
    return handler(options)


def command_help(handler: Any) -> str:
    """Short description used for the sub-parser list."""
    text = getattr(handler, "help", None)
    if isinstance(text, str):
        return text
    target = getattr(handler, "fn", handler)
    return _first_doc_line(target)


def _first_doc_line(obj: Any) -> str:
    doc = inspect.getdoc(obj) or ""
    return doc.strip().splitlines()[0] if doc.strip() else ""


__all__ = ["Command", "FunctionCommand", "as_command", "command_help", "invoke"]
