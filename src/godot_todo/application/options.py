"""Typed option objects shared across task use-cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from godot_todo.search import StatusFilter

DEFAULT_TODO_PATH = Path("todo_list.yaml")


@dataclass(frozen=True)
class SearchOptions:
    """Query and filter configuration for one search run."""

    query: str = ""
    use_regex: bool = False
    status_filter: StatusFilter = field(default_factory=StatusFilter)


@dataclass(frozen=True)
class StorageOptions:
    """Where the task document lives."""

    path: Path = DEFAULT_TODO_PATH
