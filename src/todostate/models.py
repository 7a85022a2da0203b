from __future__ import annotations

from datetime import datetime
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import field_validator


class Todo(BaseModel):
    """A single task. Frozen, so every change is a replacement record."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    is_completed: bool = False
    created_at: datetime

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, title: str) -> str:
        if isinstance(title, str):
            title = title.strip()
        if not title:
            raise ValueError("title must not be empty")
        return title

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, description: str) -> str:
        return description.strip() if isinstance(description, str) else description


class TodoSeed(BaseModel):
    title: str
    description: str = ""
    completed: bool = False


class SeedFile(BaseModel):
    """Todos to pre-populate a store with, loaded from YAML"""

    todos: list[TodoSeed] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path | str) -> SeedFile:
        path = Path(path)
        assert path.exists(), f"Seed file does not exist at {path}."

        with path.open() as sf:
            # An empty file loads as None
            return SeedFile.model_validate(yaml.safe_load(sf) or {})
