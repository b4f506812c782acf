"""Track Unity-to-Godot asset conversion tasks stored in a YAML file."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from godot_todo.todo import ToDoItem, ToDoList, required_keys

if TYPE_CHECKING:
    from godot_todo.application.results import SearchResult
    from godot_todo.search import StatusFilter

__version__ = "0.1.0"


def load_todo_list(path: Path | str) -> ToDoList:
    """Load a task collection from a YAML file.

    Parameters
    ----------
    path : Path | str
        Task file to read.

    Returns
    -------
    ToDoList
        Collection holding every valid task; invalid entries are dropped.

    Raises
    ------
    StorageError
        If the file is missing, unreadable or not valid YAML.
    """
    from .api import load_todo_list as _impl

    return _impl(path)


def save_todo_list(todo_list: ToDoList, path: Path | str) -> Path:
    """Write a task collection to a YAML file.

    Parameters
    ----------
    todo_list : ToDoList
        Collection to persist.
    path : Path | str
        Destination file.

    Returns
    -------
    Path
        Path that was written.
    """
    from .api import save_todo_list as _impl

    return _impl(todo_list, path)


def search_todo_list(
    todo_list: ToDoList,
    query: str = "",
    use_regex: bool = False,
    status_filter: str | StatusFilter = "all",
) -> SearchResult:
    """Filter a task collection.

    Parameters
    ----------
    todo_list : ToDoList
        Collection to search.
    query : str, default=""
        Text or regular expression. Empty matches everything.
    use_regex : bool, default=False
        Treat ``query`` as a regular expression.
    status_filter : str | StatusFilter, default="all"
        ``all``, ``open``, ``done``, ``failed`` or ``custom:<text>``.

    Returns
    -------
    SearchResult
        Snapshot of matching ``(guid, task copy)`` pairs, or the regex
        compiler's message in ``error``.
    """
    from .api import search_todo_list as _impl

    return _impl(
        todo_list,
        query=query,
        use_regex=use_regex,
        status_filter=status_filter,
    )


def new_task(
    todo_list: ToDoList,
    guid: str,
    kind: str,
    fields: Mapping[str, str] | None = None,
) -> ToDoItem:
    """Create a task without validation and insert it under ``guid``."""
    from .api import new_task as _impl

    return _impl(todo_list, guid, kind, fields)


__all__ = [
    "ToDoItem",
    "ToDoList",
    "required_keys",
    "load_todo_list",
    "save_todo_list",
    "search_todo_list",
    "new_task",
]
