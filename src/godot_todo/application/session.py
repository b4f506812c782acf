"""Session state shared between the task core and a presentation layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from godot_todo.application.options import DEFAULT_TODO_PATH, SearchOptions
from godot_todo.application.ports import DocumentStore
from godot_todo.application.use_cases import (
    apply_transition,
    search_todo_list,
)
from godot_todo.errors import StorageError
from godot_todo.infrastructure.yaml_store import YamlDocumentStore
from godot_todo.search import Snapshot, StatusFilter
from godot_todo.todo import ToDoItem, ToDoList

logger = logging.getLogger(__name__)

COPYABLE_FIELDS = ("unity_path", "godot_path")


@dataclass
class TodoSession:
    """Everything a front end needs to browse and edit one task file.

    The session owns the live :class:`ToDoList`. ``filtered`` holds copies
    from the last search; status changes always go through the live
    collection by GUID, so a snapshot shows the state at search time until
    the search is run again.

    Attributes
    ----------
    path : Path
        Task file used by :meth:`load` and :meth:`save`.
    todo_list : ToDoList
        Live collection.
    query : str
        Text or regex entered by the user.
    use_regex : bool
        Whether ``query`` is a regular expression.
    status_filter : StatusFilter
        Filter applied before the query.
    filtered : list[tuple[str, ToDoItem]]
        Last search snapshot.
    last_error : str | None
        Last load or regex error to display.
    """

    path: Path = DEFAULT_TODO_PATH
    todo_list: ToDoList = field(default_factory=ToDoList)
    query: str = ""
    use_regex: bool = False
    status_filter: StatusFilter = field(default_factory=StatusFilter)
    filtered: Snapshot = field(default_factory=list)
    last_error: str | None = None
    store: DocumentStore = field(default_factory=YamlDocumentStore, repr=False)

    # -- Persistence --

    def load(self) -> bool:
        """Replace the collection with the contents of ``path``.

        On failure the current collection is kept and ``last_error`` is set.
        """
        try:
            todo_list = ToDoList.load_from_file(self.path, store=self.store)
        except StorageError as exc:
            self.last_error = f"❌ Failed to load: {exc}"
            logger.warning("Failed to load %s: %s", self.path, exc)
            return False
        self.todo_list = todo_list
        self.filtered.clear()
        self.last_error = None
        return True

    def open(self, path: str | Path) -> bool:
        self.path = Path(path)
        return self.load()

    def save(self, path: str | Path | None = None) -> bool:
        """Write the collection to ``path`` (defaults to the session path).

        An empty path is ignored. A failed write leaves in-memory state as
        it was and records the message in ``last_error``.
        """
        target = self.path if path is None else path
        if str(target) in ("", "."):
            return False
        try:
            self.todo_list.save_to_file(target, store=self.store)
        except StorageError as exc:
            self.last_error = f"Save failed: {exc}"
            logger.error("Save failed: %s", exc)
            return False
        return True

    # -- Search --

    def run_search(self) -> bool:
        """Recompute ``filtered`` from the current query and filter.

        Returns ``False`` when the regex does not compile; ``filtered`` is
        left empty and the message is stored in ``last_error``.
        """
        self.filtered.clear()
        result = search_todo_list(
            self.todo_list,
            SearchOptions(
                query=self.query,
                use_regex=self.use_regex,
                status_filter=self.status_filter,
            ),
        )
        self.last_error = result.error
        if not result.ok:
            return False
        self.filtered.extend(result.matches)
        return True

    # -- Per-task actions --

    def mark_done(self, guid: str) -> bool:
        return apply_transition(self.todo_list, guid, "done").found

    def mark_failed(self, guid: str) -> bool:
        return apply_transition(self.todo_list, guid, "failed").found

    def reopen(self, guid: str) -> bool:
        return apply_transition(self.todo_list, guid, "open").found

    def task(self, guid: str) -> ToDoItem | None:
        return self.todo_list.get(guid)

    def copy_field(self, guid: str, key: str) -> str | None:
        """Return a path field of ``guid`` for copying to the clipboard."""
        if key not in COPYABLE_FIELDS:
            return None
        item = self.todo_list.get(guid)
        if item is None:
            return None
        return item.get(key)
