"""generator.json manifests for template generators."""
from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from cobalt.errors import GeneratorLoadError

MANIFEST_NAME = "generator.json"

# Option names every generator already defines
RESERVED_NAMES = frozenset({"command", "generator", "dest", "force", "dry_run", "watch", "quiet", "help"})


class VariableSpec(BaseModel):
    name: str = Field(pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    help: str = ""
    default: str | None = None
    required: bool = False

    @property
    def option(self) -> str:
        return "--" + self.name.replace("_", "-")


class GeneratorManifest(BaseModel):
    name: str = Field(pattern=r"^[a-z][a-z0-9_-]*$")
    description: str = ""
    template: str = "template"
    variables: list[VariableSpec] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    strip_suffix: str = ".tmpl"

    @field_validator("variables")
    @classmethod
    def _unique_variables(cls, value: list[VariableSpec]) -> list[VariableSpec]:
        seen: set[str] = set()
        for var in value:
            if var.name in RESERVED_NAMES:
                raise ValueError(f"variable name '{var.name}' is reserved")
            if var.name in seen:
                raise ValueError(f"duplicate variable '{var.name}'")
            seen.add(var.name)
        return value


def load_manifest(path: Path) -> GeneratorManifest:
    """Read and validate a manifest file."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise GeneratorLoadError(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise GeneratorLoadError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise GeneratorLoadError(f"{path} must contain a JSON object")

    try:
        return GeneratorManifest.model_validate(raw)
    except ValidationError as exc:
        raise GeneratorLoadError(f"invalid manifest {path}: {exc}") from exc
