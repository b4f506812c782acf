"""Collection of conversion tasks keyed by GUID."""

from __future__ import annotations

import logging
from collections.abc import ItemsView, Iterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from godot_todo.todo.item import ToDoItem
from godot_todo.types import TodoDocument

if TYPE_CHECKING:
    from godot_todo.application.ports import DocumentStore

logger = logging.getLogger(__name__)

ROOT_KEY = "todo_list"
VERIFIED_INFO = "✅ Conversion verified in Godot"


class ToDoList:
    """GUID → :class:`ToDoItem` mapping, persisted as one YAML document.

    The stored layout is ``{"todo_list": {guid: {field: value}}}``.
    Inserting under an existing GUID replaces the previous task.
    """

    def __init__(self, items: Mapping[str, ToDoItem] | None = None) -> None:
        self._items: dict[str, ToDoItem] = dict(items or {})

    # -- Mutation --

    def insert(self, guid: str, item: ToDoItem) -> None:
        self._items[guid] = item

    def update_status(self, guid: str, status: str, info: str) -> None:
        """Set status and info on ``guid``; unknown GUIDs are ignored."""
        item = self._items.get(guid)
        if item is None:
            return
        item.set_status(status)
        item.set_info(info)

    def mark_done(self, guid: str) -> None:
        self.update_status(guid, "Done", VERIFIED_INFO)

    # -- Lookup --

    def contains(self, guid: str) -> bool:
        return guid in self._items

    def get(self, guid: str) -> ToDoItem | None:
        """Return the live task stored under ``guid``."""
        return self._items.get(guid)

    def items(self) -> ItemsView[str, ToDoItem]:
        return self._items.items()

    def __contains__(self, guid: object) -> bool:
        return guid in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToDoList):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ToDoList({len(self._items)} tasks)"

    # -- Serialization --

    def to_document(self) -> TodoDocument:
        """Serialize to ``{"todo_list": {guid: task_document}}``."""
        return {
            ROOT_KEY: {guid: item.to_document() for guid, item in self._items.items()}
        }

    @classmethod
    def from_document(cls, document: object) -> ToDoList:
        """Deserialize a stored document, dropping invalid task entries.

        A missing ``todo_list`` key, an empty document or a non-mapping root
        produce an empty collection.
        """
        todo_list = cls()
        if document is None:
            return todo_list
        if not isinstance(document, Mapping):
            logger.warning("Task document root is not a mapping; nothing loaded")
            return todo_list

        entries = document.get(ROOT_KEY)
        if entries is None:
            return todo_list
        if not isinstance(entries, Mapping):
            logger.warning("'%s' is not a mapping; nothing loaded", ROOT_KEY)
            return todo_list

        dropped = 0
        for guid, entry in entries.items():
            item = ToDoItem.from_document(entry)
            if item is None:
                dropped += 1
                logger.warning("Dropped invalid task %s", guid)
                continue
            if not isinstance(guid, str):
                logger.warning(
                    "GUID %r was not stored as text; using '%s'. Quote GUIDs in the task file.",
                    guid,
                    guid,
                )
            todo_list.insert(str(guid), item)
        if dropped:
            logger.info("Loaded %d tasks, dropped %d", len(todo_list), dropped)
        return todo_list

    # -- Persistence --

    def save_to_file(self, path: str | Path, store: DocumentStore | None = None) -> None:
        """Write the collection to ``path``.

        Raises
        ------
        StorageError
            If the file cannot be written.
        """
        store = store or _default_store()
        store.write(Path(path), self.to_document())
        logger.info("Saved %d tasks to %s", len(self), path)

    @classmethod
    def load_from_file(
        cls, path: str | Path, store: DocumentStore | None = None
    ) -> ToDoList:
        """Read a collection from ``path``.

        Raises
        ------
        StorageError
            If the file is missing, unreadable or not valid YAML.
        """
        store = store or _default_store()
        todo_list = cls.from_document(store.read(Path(path)))
        logger.info("Loaded %d tasks from %s", len(todo_list), path)
        return todo_list


def _default_store() -> DocumentStore:
    from godot_todo.infrastructure.yaml_store import YamlDocumentStore

    return YamlDocumentStore()
