"""Put src/ on sys.path and isolate every test from the caller's environment."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

import cobalt  # noqa: E402
from cobalt.config import Settings  # noqa: E402

TEST_ENTRY_POINT_GROUP = "cobalt.generators.tests"


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Run each test from an empty working directory with no COBALT_* variables."""
    for key in list(os.environ):
        if key.startswith("COBALT_"):
            monkeypatch.delenv(key, raising=False)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture(autouse=True)
def _restore_shared_config():
    saved = dict(cobalt.config.COMMANDS)
    saved_group = cobalt.config.entry_point_group
    cobalt.config.entry_point_group = TEST_ENTRY_POINT_GROUP
    yield
    cobalt.config.COMMANDS = saved
    cobalt.config.entry_point_group = saved_group


@pytest.fixture
def settings() -> Settings:
    return Settings(COBALT_ENTRY_POINT_GROUP=TEST_ENTRY_POINT_GROUP)


@pytest.fixture
def make_template_generator():
    """Write a template generator directory: <root>/<name>/generator.json + template/."""

    def _make(root: Path, name: str, files: dict[str, str | bytes], **manifest) -> Path:
        gen_dir = root / name
        template_dir = gen_dir / manifest.get("template", "template")
        template_dir.mkdir(parents=True)
        (gen_dir / "generator.json").write_text(json.dumps({"name": name, **manifest}), encoding="utf-8")
        for rel, content in files.items():
            target = template_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return gen_dir

    return _make
