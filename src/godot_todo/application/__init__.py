"""Application-layer use-cases, option objects and the session context."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from godot_todo.application.options import (
    DEFAULT_TODO_PATH,
    SearchOptions,
    StorageOptions,
)
from godot_todo.application.ports import DocumentStore
from godot_todo.application.results import SearchResult, StatusChange

if TYPE_CHECKING:
    from godot_todo.application.session import TodoSession
    from godot_todo.search import StatusFilter
    from godot_todo.todo import ToDoItem, ToDoList


def build_search_options(
    *,
    query: str = "",
    use_regex: bool = False,
    status_filter: str | StatusFilter = "all",
) -> SearchOptions:
    """Build typed search options via lazy use-case import."""
    from godot_todo.application.use_cases import build_search_options as _impl

    return _impl(query=query, use_regex=use_regex, status_filter=status_filter)


def load_todo_list(
    *,
    options: StorageOptions,
    store: DocumentStore | None = None,
) -> ToDoList:
    """Load the task collection via lazy use-case import."""
    from godot_todo.application.use_cases import load_todo_list as _impl

    return _impl(options=options, store=store)


def save_todo_list(
    todo_list: ToDoList,
    *,
    options: StorageOptions,
    store: DocumentStore | None = None,
) -> Path:
    """Save the task collection via lazy use-case import."""
    from godot_todo.application.use_cases import save_todo_list as _impl

    return _impl(todo_list, options=options, store=store)


def search_todo_list(todo_list: ToDoList, options: SearchOptions) -> SearchResult:
    """Search the task collection via lazy use-case import."""
    from godot_todo.application.use_cases import search_todo_list as _impl

    return _impl(todo_list, options)


def create_task(
    todo_list: ToDoList,
    *,
    guid: str,
    kind: str,
    fields: Mapping[str, str] | None = None,
) -> ToDoItem:
    """Create and insert a task via lazy use-case import."""
    from godot_todo.application.use_cases import create_task as _impl

    return _impl(todo_list, guid=guid, kind=kind, fields=fields)


def new_session(path: str | Path = DEFAULT_TODO_PATH) -> TodoSession:
    """Create a session bound to ``path`` without loading it."""
    from godot_todo.application.session import TodoSession

    return TodoSession(path=Path(path))


__all__ = [
    "DEFAULT_TODO_PATH",
    "DocumentStore",
    "SearchOptions",
    "StorageOptions",
    "SearchResult",
    "StatusChange",
    "build_search_options",
    "load_todo_list",
    "save_todo_list",
    "search_todo_list",
    "create_task",
    "new_session",
]
