from __future__ import annotations

import argparse

from cobalt.generators import Generator
from cobalt.generators import watch as watch_module
from cobalt.generators.watch import SourcesFilter, watch_and_generate
from watchfiles import Change


class Counting(Generator):
    name = "counting"

    def __init__(self, root):
        self.root = root
        self.runs = 0

    def watch_paths(self):
        return [self.root]

    def generate(self, options):
        self.runs += 1
        return []


def test_regenerates_on_change(workdir, monkeypatch):
    sources = workdir / "sources"
    sources.mkdir()
    generator = Counting(sources)
    seen = {}

    def fake_watch(*paths, watch_filter, debounce):
        seen["paths"] = paths
        seen["filter"] = watch_filter
        yield {(Change.modified, str(sources / "a.txt"))}
        yield {(Change.added, str(sources / "b.txt"))}

    monkeypatch.setattr(watch_module, "watch", fake_watch)
    lines = []
    options = argparse.Namespace(dest=str(workdir / "out"), force=False)

    assert watch_and_generate(generator, options, echo=lines.append) == 0

    assert generator.runs == 3
    assert options.force is True
    assert seen["paths"] == (str(sources),)
    assert isinstance(seen["filter"], SourcesFilter)
    assert any(line.endswith("a.txt") for line in lines)


def test_nothing_to_watch(workdir):
    generator = Counting(workdir / "missing")
    lines = []
    options = argparse.Namespace(dest="out", force=False)
    assert watch_and_generate(generator, options, echo=lines.append) == 2
    assert generator.runs == 0


def test_filter_ignores_output_and_caches(workdir):
    sources_filter = SourcesFilter(workdir / "out")
    assert sources_filter(Change.modified, str(workdir / "src" / "a.txt"))
    assert not sources_filter(Change.modified, str(workdir / "out" / "a.txt"))
    assert not sources_filter(Change.modified, str(workdir / "src" / "__pycache__" / "a.cpython-312.pyc"))
    assert not sources_filter(Change.modified, str(workdir / "node_modules" / "x" / "index.js"))
