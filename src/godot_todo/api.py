"""Public file-based task API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping
from typing import Optional

from godot_todo.application.results import SearchResult
from godot_todo.application.use_cases import build_search_options
from godot_todo.application.use_cases import build_storage_options
from godot_todo.application.use_cases import create_task
from godot_todo.application.use_cases import load_todo_list as _load
from godot_todo.application.use_cases import save_todo_list as _save
from godot_todo.application.use_cases import search_todo_list as _search
from godot_todo.search import StatusFilter
from godot_todo.todo import ToDoItem, ToDoList


def load_todo_list(path: Path | str) -> ToDoList:
    """Load a task collection from a YAML file."""
    return _load(options=build_storage_options(path))


def save_todo_list(todo_list: ToDoList, path: Path | str) -> Path:
    """Write a task collection to a YAML file."""
    return _save(todo_list, options=build_storage_options(path))


def search_todo_list(
    todo_list: ToDoList,
    query: str = "",
    use_regex: bool = False,
    status_filter: str | StatusFilter = "all",
) -> SearchResult:
    """Filter a task collection by status and text/regex query."""
    options = build_search_options(
        query=query,
        use_regex=use_regex,
        status_filter=status_filter,
    )
    return _search(todo_list, options)


def new_task(
    todo_list: ToDoList,
    guid: str,
    kind: str,
    fields: Optional[Mapping[str, str]] = None,
) -> ToDoItem:
    """Create a task without validation and insert it under ``guid``."""
    return create_task(todo_list, guid=guid, kind=kind, fields=fields)
