from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env", ".cobalt/.env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Command table, installed by the dispatcher on every run
    COMMANDS: dict[str, Any] = Field(default_factory=dict, alias="COBALT_COMMANDS", exclude=True)

    prog: str = Field(default="cobalt", alias="COBALT_PROG")

    # Generator discovery
    generator_path: str = Field(default="", alias="COBALT_GENERATOR_PATH")  # os.pathsep separated
    local_generators: str = Field(default=".cobalt/generators", alias="COBALT_LOCAL_GENERATORS")
    builtin_generators: bool = Field(default=True, alias="COBALT_BUILTIN_GENERATORS")
    entry_point_group: str = Field(default="cobalt.generators", alias="COBALT_ENTRY_POINT_GROUP")

    @property
    def generator_dirs(self) -> list[Path]:
        raw = [self.local_generators, *self.generator_path.split(os.pathsep)]
        return [Path(item.strip()).expanduser() for item in raw if item.strip()]


config = Settings()
