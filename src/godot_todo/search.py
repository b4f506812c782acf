"""Status filtering and query matching over a task collection."""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass

from godot_todo.errors import SearchError, TaskInputError
from godot_todo.todo import ToDoItem, ToDoList
from godot_todo.types import FilterKind

type Snapshot = list[tuple[str, ToDoItem]]

_BUILTIN_KINDS: tuple[FilterKind, ...] = ("All", "Open", "Done", "Failed")
_CUSTOM_PREFIX = "custom:"


@dataclass(frozen=True)
class StatusFilter:
    """Filter applied to a task's ``status`` before the text query.

    Built-in filters compare case-insensitively for equality; ``Custom``
    checks case-sensitive substring containment.
    """

    kind: FilterKind = "All"
    text: str = ""

    @classmethod
    def custom(cls, text: str) -> StatusFilter:
        return cls("Custom", text)

    @classmethod
    def parse(cls, value: str) -> StatusFilter:
        """Parse ``all``/``open``/``done``/``failed`` or ``custom:<text>``.

        Raises
        ------
        TaskInputError
            If ``value`` names no known filter.
        """
        if value.lower().startswith(_CUSTOM_PREFIX):
            return cls.custom(value[len(_CUSTOM_PREFIX) :])
        for kind in _BUILTIN_KINDS:
            if value.lower() == kind.lower():
                return cls(kind)
        raise TaskInputError(
            f"Unknown status filter '{value}'. "
            "Use all, open, done, failed or custom:<text>."
        )

    @property
    def label(self) -> str:
        if self.kind == "Custom":
            return f"Custom({self.text})"
        return self.kind

    def matches(self, status: str) -> bool:
        if self.kind == "All":
            return True
        if self.kind == "Custom":
            return self.text in status
        return status.lower() == self.kind.lower()


def build_haystack(guid: str, item: ToDoItem) -> str:
    """Text searched by a query: display line, GUID and the full document dump."""
    return f"{item}\nGUID:{guid}\nYAML:{item.to_document()!r}"


def compile_query(query: str) -> re.Pattern[str]:
    """Compile a regex query.

    Raises
    ------
    SearchError
        With the compiler's message if the pattern is invalid.
    """
    try:
        return re.compile(query)
    except re.error as exc:
        raise SearchError(str(exc)) from exc


def matches_query(
    guid: str,
    item: ToDoItem,
    query: str,
    pattern: re.Pattern[str] | None = None,
) -> bool:
    """Check one task against the text query.

    An empty query always matches. With ``pattern`` the compiled regex is
    searched in the haystack; otherwise ``query`` is matched as a
    case-insensitive substring.
    """
    if not query:
        return True
    haystack = build_haystack(guid, item)
    if pattern is not None:
        return pattern.search(haystack) is not None
    return query.lower() in haystack.lower()


def search_items(
    todo_list: ToDoList,
    query: str = "",
    *,
    use_regex: bool = False,
    status_filter: StatusFilter | None = None,
) -> Snapshot:
    """Return ``(guid, copy)`` pairs passing the status filter and the query.

    The returned tasks are deep copies; mutating them does not touch
    ``todo_list``.

    Raises
    ------
    SearchError
        If ``use_regex`` is set and ``query`` does not compile.
    """
    status_filter = status_filter or StatusFilter()
    pattern = compile_query(query) if use_regex else None

    snapshot: Snapshot = []
    for guid, item in todo_list.items():
        if not status_filter.matches(item.status or ""):
            continue
        if matches_query(guid, item, query, pattern):
            snapshot.append((guid, copy.deepcopy(item)))
    return snapshot
