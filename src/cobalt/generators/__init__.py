"""Generators and the loader that discovers them.

Generator modules dropped into a generator directory subclass
`cobalt.generators.Generator` and export it under the name ``Generator``.
The loader lives in :mod:`cobalt.generators.loader`.
"""
from __future__ import annotations

from .base import Generator
from .manifest import GeneratorManifest, VariableSpec, load_manifest
from .template import TemplateGenerator, render_text

__all__ = [
    "Generator",
    "GeneratorManifest",
    "TemplateGenerator",
    "VariableSpec",
    "load_manifest",
    "render_text",
]
