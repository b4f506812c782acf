"""Application use-cases orchestrating task workflows."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import ValidationError

from godot_todo.application.options import SearchOptions, StorageOptions
from godot_todo.application.ports import DocumentStore
from godot_todo.application.results import SearchResult, StatusChange
from godot_todo.errors import SearchError, TaskInputError
from godot_todo.infrastructure.yaml_store import YamlDocumentStore
from godot_todo.schemas import NewTaskConfig, SearchRequestConfig, StorageConfig
from godot_todo.search import StatusFilter, search_items
from godot_todo.todo import ToDoItem, ToDoList

logger = logging.getLogger(__name__)

type Transition = Literal["done", "failed", "open"]


def build_storage_options(path: str | Path) -> StorageOptions:
    """Build typed storage options from a raw path."""
    try:
        config = StorageConfig(path=Path(path))
    except ValidationError as exc:
        raise TaskInputError(f"Invalid task file path: {exc}") from exc
    return StorageOptions(path=config.path)


def build_search_options(
    *,
    query: str = "",
    use_regex: bool = False,
    status_filter: str | StatusFilter = "all",
) -> SearchOptions:
    """Build typed search options from command/API params."""
    given_filter = status_filter if isinstance(status_filter, StatusFilter) else None
    try:
        config = SearchRequestConfig(
            query=query,
            use_regex=use_regex,
            status_filter=given_filter.label if given_filter else status_filter,
        )
    except ValidationError as exc:
        raise TaskInputError(f"Invalid search parameters: {exc}") from exc
    return SearchOptions(
        query=config.query,
        use_regex=config.use_regex,
        status_filter=given_filter or StatusFilter.parse(config.status_filter),
    )


def load_todo_list(
    *,
    options: StorageOptions,
    store: DocumentStore | None = None,
) -> ToDoList:
    """Use-case: read the task collection from disk."""
    store = store or YamlDocumentStore()
    return ToDoList.load_from_file(options.path, store=store)


def save_todo_list(
    todo_list: ToDoList,
    *,
    options: StorageOptions,
    store: DocumentStore | None = None,
) -> Path:
    """Use-case: write the task collection to disk."""
    store = store or YamlDocumentStore()
    todo_list.save_to_file(options.path, store=store)
    return options.path


def search_todo_list(todo_list: ToDoList, options: SearchOptions) -> SearchResult:
    """Use-case: filter tasks by status and query.

    A regex that does not compile produces an empty result carrying the
    compiler's message instead of raising.
    """
    try:
        matches = search_items(
            todo_list,
            options.query,
            use_regex=options.use_regex,
            status_filter=options.status_filter,
        )
    except SearchError as exc:
        logger.info("Rejected search query %r: %s", options.query, exc)
        return SearchResult(error=str(exc))
    return SearchResult(matches=tuple(matches))


def create_task(
    todo_list: ToDoList,
    *,
    guid: str,
    kind: str,
    fields: Mapping[str, str] | None = None,
) -> ToDoItem:
    """Use-case: construct a task without validation and insert it.

    Missing required keys are logged, not rejected.
    """
    try:
        config = NewTaskConfig(guid=guid, kind=kind, fields=dict(fields or {}))
    except ValidationError as exc:
        raise TaskInputError(f"Invalid task parameters: {exc}") from exc

    item = ToDoItem(config.kind, config.fields)
    missing = item.missing_keys()
    if missing:
        logger.warning(
            "Task %s of type %s is missing %s",
            config.guid,
            config.kind,
            ", ".join(missing),
        )
    todo_list.insert(config.guid, item)
    return item


def apply_transition(
    todo_list: ToDoList, guid: str, transition: Transition
) -> StatusChange:
    """Use-case: move the live task ``guid`` to Done, Failed or Open."""
    item = todo_list.get(guid)
    if item is None:
        return StatusChange(guid=guid, found=False)
    if transition == "done":
        item.mark_done()
    elif transition == "failed":
        item.mark_failed()
    elif transition == "open":
        item.reopen()
    else:
        raise TaskInputError(f"Unknown transition '{transition}'.")
    return StatusChange(guid=guid, found=True, status=item.status, info=item.get("info"))


def update_task_status(
    todo_list: ToDoList, guid: str, status: str, info: str
) -> StatusChange:
    """Use-case: set status and info together."""
    if not todo_list.contains(guid):
        return StatusChange(guid=guid, found=False)
    todo_list.update_status(guid, status, info)
    return StatusChange(guid=guid, found=True, status=status, info=info)


def verify_task(todo_list: ToDoList, guid: str) -> StatusChange:
    """Use-case: mark ``guid`` Done with the verification note."""
    item = todo_list.get(guid)
    if item is None:
        return StatusChange(guid=guid, found=False)
    todo_list.mark_done(guid)
    return StatusChange(guid=guid, found=True, status=item.status, info=item.get("info"))
