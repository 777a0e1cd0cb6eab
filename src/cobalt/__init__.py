"""Command-dispatch shell for project generators.

``cobalt.config`` is the shared configuration and ``cobalt.run()`` runs one
command from the process arguments against it.
"""
from __future__ import annotations

__version__ = "0.1.0"

from cobalt.config import Settings, config
from cobalt.dispatcher import Dispatcher, Outcome, run

__all__ = ["Dispatcher", "Outcome", "Settings", "config", "run", "__version__"]
