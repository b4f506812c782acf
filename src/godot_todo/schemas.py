"""Pydantic schemas for runtime validation of task and search inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NewTaskConfig(BaseModel):
    """Validated input for explicitly creating a task."""

    model_config = ConfigDict(extra="forbid")

    guid: str
    kind: str
    fields: dict[str, str] = Field(default_factory=dict)

    @field_validator("guid", "kind")
    @classmethod
    def _validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("guid and kind cannot be empty.")
        return value

    @field_validator("fields")
    @classmethod
    def _validate_field_keys(cls, value: dict[str, str]) -> dict[str, str]:
        if any(not key.strip() for key in value):
            raise ValueError("field names cannot be empty.")
        if "type" in value:
            raise ValueError("'type' is set from kind; do not pass it as a field.")
        return value


class SearchRequestConfig(BaseModel):
    """Validated search request."""

    model_config = ConfigDict(extra="forbid", strict=True)

    query: str = ""
    use_regex: bool = False
    status_filter: str = "all"


class StorageConfig(BaseModel):
    """Validated task file location."""

    model_config = ConfigDict(extra="forbid")

    path: Path

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: Path) -> Path:
        if not str(value).strip() or value == Path("."):
            raise ValueError("task file path cannot be empty.")
        return value
